"""
==========================
Utility Functions Package.
==========================

Helpers around the synthesis engine that touch the outside world.

Modules:
    database_utils: SQLAlchemy-backed execution of rendered SQL
"""

__version__ = "1.0.0"
__all__ = [
    'ExecutionProviderError',
    'SqlExecutionProvider',
    'create_sqlalchemy_engine',
]

from .database_utils import (
    ExecutionProviderError,
    SqlExecutionProvider,
    create_sqlalchemy_engine,
)
