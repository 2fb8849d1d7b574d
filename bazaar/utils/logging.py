# bazaar/utils/logging.py
import logging
import sys

import structlog

from bazaar.utils.settings import LOG_LEVEL

_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return

    #structlog renderuje, stdlib tylko wypisuje (i pozwala testom lapac logi przez caplog)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("bazaar")
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    _configure()
    return structlog.get_logger(name)
