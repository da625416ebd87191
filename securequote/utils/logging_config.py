"""
Logging setup shared by the server and the command line client.
"""

import logging
from typing import Optional

from securequote.utils.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.
    
    Args:
        level: Override log level (default: settings.LOG_LEVEL)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")
