"""Logging configuration for the bridge."""

import logging
import sys

LOGGER_NAME = "chatbridge"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Set up logging with proper handlers and formatters."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    
    # Clear any existing handlers
    logger.handlers.clear()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    
    logger.addHandler(console_handler)
    
    # Propagate to root so test capture and host applications still see records
    logger.propagate = True
    
    return logger


logger = logging.getLogger(LOGGER_NAME)
