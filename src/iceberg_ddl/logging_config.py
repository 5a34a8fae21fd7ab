"""structlog setup for iceberg-ddl.

Library modules obtain their loggers through ``get_logger``, which binds
structlog to a standard library logger under the ``iceberg_ddl`` namespace.
Until an application configures that namespace the events go nowhere, so
compiling a schema never writes to stdout or stderr. The command-line
interface calls ``configure_logging`` to attach a stderr handler.
"""

import logging
import sys

import structlog

PACKAGE_LOGGER = "iceberg_ddl"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by the standard library logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def configure_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Send iceberg-ddl log events to stderr.

    Args:
        level: Minimum log level name (e.g., 'DEBUG', 'INFO').
        fmt: 'console' for coloured human readable output, 'json' for JSON lines.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    package_logger.propagate = False

    renderer = (
        structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        context_class=dict,
        cache_logger_on_first_use=False,
    )
