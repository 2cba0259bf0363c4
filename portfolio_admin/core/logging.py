"""Logging setup"""

import logging
from typing import Optional

from portfolio_admin.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "portfolio_admin"


def setup_logging(debug: Optional[bool] = None) -> int:
    """
    Configure logging for the admin client.

    Root handlers are only installed when none exist yet; the package logger
    level always follows ``debug``.

    Args:
        debug: Force DEBUG level; defaults to ``settings.debug``

    Returns:
        The level applied to the package logger
    """
    if debug is None:
        debug = settings.debug
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    logging.getLogger(__name__).debug(f"Logging initialized for {settings.app_name}")
    return level
