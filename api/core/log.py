"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with key=value messages,
e.g. `logger.info("post_created post_id=%s", post_id)`.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level(), format=LOG_FORMAT)
