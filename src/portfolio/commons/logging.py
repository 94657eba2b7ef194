"""
Centralized logging.

Stdlib logging, configured in one place for the whole app. Feature modules
import `logger` from here instead of calling `logging.getLogger` themselves.
"""

from __future__ import annotations

import logging
from functools import lru_cache


@lru_cache
def initialize_logger() -> logging.Logger:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=logging.INFO,
    )
    return logging.getLogger("portfolio")


logger = initialize_logger()
