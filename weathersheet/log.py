import logging
import sys
import typing

import structlog

from weathersheet.config import get_settings


def setup_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Defaults come from the settings (``WEATHERSHEET_LOG_LEVEL`` and
    ``WEATHERSHEET_LOG_JSON``).
    """
    settings = get_settings()
    level = level or settings.log_level
    json = settings.log_json if json is None else json

    render_chain: list[typing.Any]
    if json:
        render_chain = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    pre_chain: list[typing.Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render_chain,
        ],
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    # pandas' excel engines are chatty about workbook styles
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
