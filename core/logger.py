"""
====================================================
Centralized logging configuration for the synthesizer.
====================================================

Provides one logging setup shared by the rendering engine, the execution
provider and the command line wrapper:
- Console output on stderr with optional ANSI colors
- Optional UTF-8 log file
- Level and destinations taken from core.config unless overridden

Engine modules only call ``logging.getLogger(__name__)``; nothing here is
required for rendering to work.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='sqlsynth.log')
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendered: SELECT * FROM t;")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from core.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format the record with a colored level name.

        The record is copied so other handlers still see the plain level name.
        """
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _resolve_level(level: Optional[str]) -> int:
    name = (level or config.log_level).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(_resolve_level(level))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    use_colors: Optional[bool] = None
) -> None:
    """Configure the root logger.

    Any argument left as None falls back to core.config. Existing root
    handlers are replaced, so calling this twice does not duplicate output.

    Args:
        log_level: Logging level name
        log_file: Optional log file name (e.g. 'sqlsynth.log')
        log_dir: Directory for log_file
        console_output: If True, log to stderr (stdout is left to command output)
        use_colors: If True, color the console level names

    Raises:
        ValueError: If log_level is not a known level name
    """
    level = _resolve_level(log_level)
    log_file = log_file if log_file is not None else config.logging.log_file
    use_colors = config.logging.use_colors if use_colors is None else use_colors

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        formatter_cls = ColoredFormatter if use_colors else logging.Formatter
        console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else config.logging.log_dir
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def _init_default_logging():
    """Set up logging from config if nothing has configured it yet."""
    if not logging.getLogger().handlers:
        setup_logging()


# Auto-initialize on import
_init_default_logging()
