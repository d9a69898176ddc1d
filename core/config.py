"""
==================================================
Configuration management for the SQL synthesizer.
==================================================

Loads settings from environment variables (.env file) and exposes a
centralized Config singleton. The rendering engine itself is pure and needs
no configuration; these settings drive the ambient pieces around it:

- Database connection parameters for the execution provider
- Logging level, destination and console colors

Example:
    >>> from core.config import config
    >>>
    >>> # SQLAlchemy URL for the execution provider
    >>> url = config.get_connection_url()
    >>>
    >>> # Logging settings
    >>> print(f"Level: {config.log_level}, file: {config.logging.log_file}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable (1/true/yes/on)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class DatabaseConfig:
    """Connection settings for the SQL execution provider.

    Attributes:
        drivername: SQLAlchemy driver name (e.g. 'postgresql+psycopg2')
        host: Database server hostname or IP address
        port: Database server port number
        user: Database username
        password: Database password
        database: Target database name
    """

    drivername: str
    host: str
    port: int
    user: str
    password: str
    database: str

    def get_connection_url(self, database: Optional[str] = None) -> URL:
        """Build a SQLAlchemy URL object.

        Args:
            database: Optional database name override

        Returns:
            SQLAlchemy URL with credentials escaped by SQLAlchemy itself
        """
        return URL.create(
            drivername=self.drivername,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=database or self.database
        )

    def get_connection_string(self, database: Optional[str] = None) -> str:
        """Get the connection string with the password masked.

        Args:
            database: Optional database name override

        Returns:
            Connection string safe to write to logs
        """
        return self.get_connection_url(database).render_as_string(hide_password=True)


@dataclass
class LoggingConfig:
    """Logging settings.

    Attributes:
        level: Root log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name; no file handler when unset
        log_dir: Directory for the log file
        use_colors: Colored console output
    """

    level: str
    log_file: Optional[str]
    log_dir: Path
    use_colors: bool


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig for the execution provider
        logging: LoggingConfig for core.logger

    Example:
        >>> config = Config()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            drivername=os.getenv('SQLSYNTH_DB_DRIVER', 'postgresql+psycopg2'),
            host=os.getenv('SQLSYNTH_DB_HOST', 'localhost'),
            port=int(os.getenv('SQLSYNTH_DB_PORT', '5432')),
            user=os.getenv('SQLSYNTH_DB_USER', 'postgres'),
            password=os.getenv('SQLSYNTH_DB_PASSWORD', ''),
            database=os.getenv('SQLSYNTH_DB_NAME', 'postgres')
        )

        project_root = Path(__file__).parent.parent
        self.logging = LoggingConfig(
            level=os.getenv('SQLSYNTH_LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('SQLSYNTH_LOG_FILE') or None,
            log_dir=Path(os.getenv('SQLSYNTH_LOG_DIR', str(project_root / 'logs'))),
            use_colors=_env_flag('SQLSYNTH_LOG_COLORS', True)
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_name(self) -> str:
        """Get target database name."""
        return self.db.database

    @property
    def log_level(self) -> str:
        """Get configured root log level."""
        return self.logging.level

    def get_connection_url(self, database: Optional[str] = None) -> URL:
        """Get the SQLAlchemy URL for the execution provider.

        Args:
            database: Optional database name override

        Returns:
            SQLAlchemy URL object
        """
        return self.db.get_connection_url(database)


# Global configuration instance
config = Config()
