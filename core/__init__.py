"""
================================================
Core infrastructure package for the synthesizer.
================================================

Centralized configuration and logging used by the execution provider and
the command line wrapper.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Executing against {config.db_host}")
"""

__version__ = "1.0.0"
__all__ = ['get_logger', 'setup_logging', 'config', 'Config']

from core.config import Config, config
from core.logger import get_logger, setup_logging
