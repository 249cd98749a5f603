"""Logging setup shared by the application entry points."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "samba", level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger with a single stream handler.
    
    Safe to call repeatedly: handlers are only attached once per logger.
    
    Args:
        name: Logger name (defaults to the package root logger)
        level: Level name such as "DEBUG"; falls back to Config.LOG_LEVEL
        
    Returns:
        Configured logger
    """
    if level is None:
        from ..config import Config
        level = Config.LOG_LEVEL
    
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    if not any(getattr(h, "_samba_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._samba_handler = True
        logger.addHandler(handler)
    
    return logger
