"""Process entry point for the URL shortener service."""

import sys
from typing import Optional

import uvicorn
from loguru import logger

from shortener.core.config import Settings, validate_startup
from shortener.core.logging import setup_logging


def run(config: Optional[Settings] = None) -> None:
    """Validate configuration, then serve until interrupted.

    Exits with status 1 before binding the port when the configuration
    cannot work, e.g. the database backend without DATABASE_URL.
    """
    config = config or Settings()
    setup_logging(config)

    check = validate_startup(config)
    if not check.ok:
        for error in check.errors:
            logger.critical(error)
        sys.exit(1)

    from shortener.main import create_app

    logger.info(f"Starting server on port {config.PORT}")
    uvicorn.run(
        create_app(config),
        host=config.HOST,
        port=config.PORT,
        log_config=None,
        proxy_headers=True,
    )
