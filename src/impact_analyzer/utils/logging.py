"""Logging setup for the impact analyzer.

All output goes through loguru. Console records are written to stderr so
the CLI summary on stdout stays readable. Every record carries a ``repo``
extra; code running for one repository binds it with
``logger.bind(repo=name)``.
"""

import logging
import sys

from loguru import logger

from impact_analyzer.config.models import LoggingConfig

# Value of the ``repo`` extra outside any repository context.
NO_REPO = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> "
    "<cyan>[{extra[repo]}]</cyan> {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[repo]} | {name}:{line} | {message}"


class _StdlibForwarder(logging.Handler):
    """Forward records from standard library loggers into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point loguru at the frame that called the stdlib logger
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: LoggingConfig) -> None:
    """
    Replace loguru's sinks according to the ``logging`` config section.

    ``format: json`` serializes each record for log collectors in CI.
    When ``file`` is set, a second sink is rotated and retained as
    configured.
    """
    serialize = config.format == "json"

    logger.remove()
    logger.configure(extra={"repo": NO_REPO})

    logger.add(
        sys.stderr,
        level=config.level,
        format="{message}" if serialize else CONSOLE_FORMAT,
        serialize=serialize,
    )

    if config.file is not None:
        logger.add(
            config.file,
            level=config.level,
            format="{message}" if serialize else FILE_FORMAT,
            serialize=serialize,
            rotation=config.rotation,
            retention=config.retention,
        )

    logging.basicConfig(handlers=[_StdlibForwarder()], level=logging.NOTSET, force=True)
    logger.debug("Logging configured (level={}, format={})", config.level, config.format)
