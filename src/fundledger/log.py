"""Structured logging setup.

structlog renders through the stdlib logging backend, so nothing is printed
below WARNING unless the CLI is started with --verbose.
"""

import logging

import structlog


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=False),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger bound to a module name."""
    return structlog.get_logger(name)


def configure_logging(verbose: bool = False) -> None:
    """Set the log level for the fundledger loggers.

    Args:
        verbose: If True, emit DEBUG records to stderr
    """
    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger("fundledger")
    package_logger.setLevel(level)
    if verbose and not package_logger.handlers:
        package_logger.addHandler(logging.StreamHandler())
