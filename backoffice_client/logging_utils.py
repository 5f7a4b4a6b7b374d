from __future__ import annotations

import logging

LOGGER_NAME = "backoffice_client"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    # One handler per process even when the service is rebuilt.
    if not any(getattr(handler, "_backoffice_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._backoffice_handler = True
        logger.addHandler(handler)

    return logger


def mask_secret(value: str | None) -> str:
    if not value:
        return "<none>"
    if len(value) > 10:
        return f"{value[:4]}...{value[-4:]}"
    return "****"
