"""Uvicorn entrypoint: `python main.py` or `uvicorn main:app`."""

import logging

from app import app
from config import get_settings

logger = logging.getLogger(__name__)


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Serving %s admin API on %s:%s", settings.shop_name, settings.backend_host, settings.backend_port)
    uvicorn.run(
        "main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
