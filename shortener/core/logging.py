"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys
from typing import Optional

from loguru import logger

from shortener.core.config import Settings, settings as default_settings

REQUEST_LEVEL = "REQUEST"


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    Repositories, stores and services log through the standard library;
    this handler hands those records to loguru's sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _register_request_level() -> None:
    try:
        logger.level(REQUEST_LEVEL)
    except ValueError:
        logger.level(REQUEST_LEVEL, no=25, color="<green>")


def setup_logging(config: Optional[Settings] = None):
    """
    Configure application logging using Loguru.

    Adds a stderr sink, an optional rotating file sink, the REQUEST level
    used by the request logging middleware, and intercepts standard library
    logging (including uvicorn's loggers).
    """
    config = config or default_settings
    level = config.LOG_LEVEL.upper()

    # Remove default handlers
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=config.LOG_FORMAT,
        backtrace=config.DEBUG,
        diagnose=config.DEBUG,
    )

    if config.LOG_TO_FILE:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        log_file_path = os.path.join(config.LOG_DIR, config.LOG_FILENAME)
        if config.LOG_JSON:
            logger.add(
                log_file_path,
                level=level,
                serialize=True,
                rotation=config.LOG_ROTATION,
                retention=config.LOG_RETENTION,
                compression="gz",
            )
        else:
            logger.add(
                log_file_path,
                level=level,
                format=config.LOG_FORMAT,
                rotation=config.LOG_ROTATION,
                retention=config.LOG_RETENTION,
                compression="gz",
            )

    _register_request_level()

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict.keys()):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    return logger


# REQUEST must exist before setup_logging() runs, e.g. under the test client.
_register_request_level()
