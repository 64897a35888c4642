import marimo

__generated_with = "0.14.17"
app = marimo.App(width="medium")

with app.setup(hide_code=True):
    # Initialization code that runs before all other cells
    import marimo as mo
    import matplotlib.pyplot as plt

    from weathersheet.aggregate import monthly_rollup
    from weathersheet.charts import available_years, plot_monthly_rollup
    from weathersheet.formatting import to_frame
    from weathersheet.models import FilterCriteria
    from weathersheet.pipeline import run_pipeline
    from weathersheet.utils import load_weather_records


@app.cell(hide_code=True)
def _():
    mo.md(r"""# Weather loggers: daily summary""")
    return


@app.cell
def load_data():
    # Every workbook in the raw folder
    records = load_weather_records("data/raw")
    return (records,)


@app.cell(hide_code=True)
def _():
    mo.md(
        r"""
    ## Daytime statistics per date

    Observations between 08:00 and 18:59 only.
    """
    )
    return


@app.cell
def _(records):
    daytime = FilterCriteria(start_time="08:00", end_time="18:59", group_by_date=True)
    to_frame(run_pipeline(records, daytime))
    return


@app.cell(hide_code=True)
def _():
    mo.md(r"""## Monthly averages""")
    return


@app.cell
def _(records):
    rollup = monthly_rollup(records)
    year = mo.ui.dropdown(options=available_years(rollup), label="Year")
    year
    return rollup, year


@app.cell
def _(rollup, year):
    _fig, _ax = plt.subplots(figsize=(10, 4))
    plot_monthly_rollup(rollup, year=year.value, ax=_ax)
    _fig
    return


if __name__ == "__main__":
    app.run()
