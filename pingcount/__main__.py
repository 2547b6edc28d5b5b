"""Serve the ping counter with uvicorn: ``python -m pingcount``."""

from __future__ import annotations

import uvicorn

from pingcount.config import get_settings
from pingcount.lib.logger import get_logger

logger = get_logger("pingcount")


def main() -> None:
    settings = get_settings()
    logger.info("server_starting", extra={"url": f"http://{settings.host}:{settings.port}"})
    uvicorn.run(
        "pingcount.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
