"""
Logging Configuration
Sets up the package logger for the addon.
"""
import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configures the logger for the 'viewport_positioner' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
    """
    logger = logging.getLogger("viewport_positioner")
    logger.setLevel(level)

    # Addon reloads call this again; drop the previous handlers.
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.debug("Logging initialized.")
