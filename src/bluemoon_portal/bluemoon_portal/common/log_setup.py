from __future__ import annotations

import logging

PACKAGE_LOGGER = "bluemoon_portal"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _PortalHandler(logging.StreamHandler):
    """Marker type so repeated app factories do not stack handlers."""


def configure_logging(level: str | int = "INFO", *, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    # Avoid duplicate attachment if create_app runs more than once
    if not any(isinstance(h, _PortalHandler) for h in logger.handlers):
        handler = _PortalHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
