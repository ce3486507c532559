"""
Logging configuration for pixel_world.

Provides centralized logging setup with appropriate levels and formatting.
"""

import logging
import sys
from typing import Optional


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Configure logging for pixel_world.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages (implies verbose)

    Returns:
        Configured logger instance
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger('pixel_world')
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Optional module name (defaults to 'pixel_world')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f'pixel_world.{name}')
    return logging.getLogger('pixel_world')
