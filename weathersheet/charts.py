from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from weathersheet.models import MonthlyAverage

TEMPERATURE_COLOR = "#2563eb"
HUMIDITY_COLOR = "#60a5fa"


def available_years(rollup: Sequence[MonthlyAverage]) -> list[str]:
    return sorted({item.year for item in rollup})


def plot_monthly_rollup(
    rollup: Sequence[MonthlyAverage],
    year: Optional[str] = None,
    ax: Optional[plt.Axes] = None,
) -> Optional[plt.Axes]:
    """
    Bar chart of average temperature and humidity per month of one year.
    Plots the earliest year when ``year`` is not given. Returns None when
    there is nothing to plot.
    """
    if not rollup:
        return None
    year = year or available_years(rollup)[0]
    months = [item for item in rollup if item.year == year]

    if ax is None:
        _fig, ax = plt.subplots()
    x = np.arange(len(months))
    width = 0.4
    ax.bar(
        x - width / 2,
        [m.average_temperature for m in months],
        width,
        label="Avg. Temperature",
        color=TEMPERATURE_COLOR,
    )
    ax.bar(
        x + width / 2,
        [m.average_humidity for m in months],
        width,
        label="Avg. Humidity",
        color=HUMIDITY_COLOR,
    )
    ax.set_xticks(x, [m.month for m in months])
    ax.set_title(year)
    ax.set_xlabel("Month")
    ax.grid(axis="y", alpha=0.3)
    ax.legend()
    return ax
