"""
==================================================
SQL execution provider backed by SQLAlchemy.
==================================================

Runs rendered SQL text against a database. The synthesis engine never opens
connections itself; this module is the consumer of its output.

Connection parameters come from core.config (SQLSYNTH_DB_* variables). The
default driver is PostgreSQL through psycopg2, but any SQLAlchemy URL works.
Database errors are logged and re-raised unchanged. There are no retries.

Key Features:
    - Engine creation from config
    - Availability check
    - Execution of rendered statements, returning result rows

Example:
    >>> from sqlsynth.ddl import drop_table
    >>> from utils.database_utils import SqlExecutionProvider
    >>>
    >>> with SqlExecutionProvider() as provider:
    ...     provider.execute(drop_table('staging_orders'))
"""

import logging
from typing import Any, List, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config
from sqlsynth.errors import RenderResult

logger = logging.getLogger(__name__)


class ExecutionProviderError(Exception):
    """Exception raised when the provider is asked to run something it cannot."""
    pass


def create_sqlalchemy_engine(database: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine from config.

    Args:
        database: Optional database name override
        echo: Enable SQLAlchemy statement logging

    Returns:
        Configured SQLAlchemy Engine

    Example:
        >>> engine = create_sqlalchemy_engine()
        >>> with engine.connect() as conn:
        ...     conn.execute(text("SELECT 1"))
    """
    logger.debug(f"Creating engine for {config.db.get_connection_string(database)}")
    return create_engine(
        config.get_connection_url(database),
        echo=echo,
        pool_pre_ping=True  # Verify connections before using
    )


class SqlExecutionProvider:
    """Executes rendered SQL statements.

    Attributes:
        engine: SQLAlchemy Engine used for every statement

    Example:
        >>> provider = SqlExecutionProvider()
        >>> rows = provider.execute("SELECT name FROM users;")
        >>> provider.dispose()
    """

    def __init__(self, engine: Optional[Engine] = None, database: Optional[str] = None, echo: bool = False):
        self.engine = engine if engine is not None else create_sqlalchemy_engine(database, echo)

    def is_available(self) -> bool:
        """Return True if a connection can be opened and answers ``SELECT 1``."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.debug(f"Database not available: {e}")
            return False

    def execute(self, statement: Union[str, RenderResult]) -> List[Any]:
        """
        Execute one statement in its own transaction.

        Args:
            statement: SQL text, or a RenderResult from the synthesis engine

        Returns:
            Result rows, or an empty list for statements that return none

        Raises:
            ExecutionProviderError: If given a failed RenderResult or empty text
            SQLAlchemyError: Database errors, unchanged
        """
        if isinstance(statement, RenderResult):
            if not statement.ok:
                raise ExecutionProviderError(f"Cannot execute a failed render: {statement.failure}")
            statement = statement.sql
        if not statement or not statement.strip():
            raise ExecutionProviderError("Cannot execute empty SQL text")

        logger.debug(f"Executing: {statement}")
        try:
            with self.engine.begin() as conn:
                # Driver-level execution: rendered text carries no bind parameters
                result = conn.exec_driver_sql(statement)
                rows = list(result.fetchall()) if result.returns_rows else []
        except SQLAlchemyError as e:
            logger.error(f"Execution failed: {e}")
            raise

        logger.info(f"Executed statement, {len(rows)} row(s) returned")
        return rows

    def dispose(self) -> None:
        """Release the engine's connection pool."""
        self.engine.dispose()

    def __enter__(self) -> "SqlExecutionProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()
