"""
==========================================
Error taxonomy and render result values.
==========================================

Validators and aggregators raise SqlSynthesisError subclasses. Every public
rendering function converts them, at its boundary, into a RenderResult that
carries either the SQL text or a RenderFailure. Callers therefore branch on
``result.ok`` instead of catching exceptions, and a failed render never
carries partial SQL.

Classes:
    FailureReason: Reason codes of failed renders
    SqlSynthesisError: Base exception with a reason code
    ValidationError: Structural problems in the request
    UnsupportedFeatureError: Requests the engine deliberately does not support
    RequestLoadError: Malformed request documents (see sqlsynth.loader)
    RenderFailure: Reason code plus human-readable message
    RenderResult: Success-or-failure value returned by renderers

Example:
    >>> from sqlsynth.ddl import drop_table
    >>> result = drop_table('')
    >>> result.ok
    False
    >>> result.failure.reason
    <FailureReason.EMPTY_TABLE_NAME: 'empty_table_name'>
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FailureReason(Enum):
    """Reason codes carried by failed renders."""

    EMPTY_TABLE_NAME = "empty_table_name"
    EMPTY_DATABASE_NAME = "empty_database_name"
    EMPTY_COLUMNS = "empty_columns"
    EMPTY_COLUMN_NAME = "empty_column_name"
    EMPTY_VALUES = "empty_values"
    LENGTH_MISMATCH = "length_mismatch"
    MISSING_COLUMN_DEFINITION = "missing_column_definition"
    MISSING_DATA_TYPE = "missing_data_type"
    EMPTY_ORDER_BY = "empty_order_by"
    INVALID_ORDER_DIRECTION = "invalid_order_direction"
    JOIN_ARITY_MISMATCH = "join_arity_mismatch"
    INVALID_JOIN_KIND = "invalid_join_kind"
    AGGREGATE_TARGET = "aggregate_target"
    NO_TABLE_CONSTRAINTS = "no_table_constraints"
    MULTIPLE_FOREIGN_KEYS = "multiple_foreign_keys"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    INVALID_REQUEST = "invalid_request"

    @property
    def is_unsupported(self) -> bool:
        """True for request shapes the engine does not render."""
        return self in (FailureReason.MULTIPLE_FOREIGN_KEYS, FailureReason.UNSUPPORTED_OPERATION)


class SqlSynthesisError(Exception):
    """Base exception of the synthesis engine.

    Attributes:
        reason: FailureReason code
        message: Human-readable description
    """

    def __init__(self, reason: FailureReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class ValidationError(SqlSynthesisError):
    """Raised when a request breaks a structural invariant."""
    pass


class UnsupportedFeatureError(SqlSynthesisError):
    """Raised for features the engine does not support, such as a second foreign key."""
    pass


class RequestLoadError(SqlSynthesisError):
    """Raised when a request document cannot be turned into a request."""

    def __init__(self, message: str):
        super().__init__(FailureReason.INVALID_REQUEST, message)


@dataclass(frozen=True)
class RenderFailure:
    """Why a render failed.

    Attributes:
        reason: FailureReason code
        message: Human-readable description
        operation: Name of the rendering operation that failed
    """

    reason: FailureReason
    message: str
    operation: str = ""

    def to_error(self) -> SqlSynthesisError:
        """Rebuild the exception this failure was created from."""
        if self.reason is FailureReason.INVALID_REQUEST:
            return RequestLoadError(self.message)
        if self.reason.is_unsupported:
            return UnsupportedFeatureError(self.reason, self.message)
        return ValidationError(self.reason, self.message)

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


@dataclass(frozen=True)
class RenderResult:
    """Outcome of rendering one statement.

    Exactly one of ``sql`` and ``failure`` is set.
    """

    sql: Optional[str] = None
    failure: Optional[RenderFailure] = None

    @property
    def ok(self) -> bool:
        """True when SQL text was produced."""
        return self.failure is None

    @classmethod
    def success(cls, sql: str) -> "RenderResult":
        return cls(sql=sql)

    @classmethod
    def failed(cls, error: SqlSynthesisError, operation: str = "") -> "RenderResult":
        return cls(failure=RenderFailure(error.reason, error.message, operation))

    def unwrap(self) -> str:
        """Return the SQL text or raise the error behind the failure.

        Raises:
            SqlSynthesisError: The ValidationError/UnsupportedFeatureError that failed the render
        """
        if self.failure is not None:
            raise self.failure.to_error()
        return self.sql


def rendering(func: Callable[..., str]) -> Callable[..., RenderResult]:
    """Turn a SQL-building function that raises into one that returns RenderResult.

    Only SqlSynthesisError is converted; any other exception is a bug and
    propagates.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> RenderResult:
        try:
            sql = func(*args, **kwargs)
        except SqlSynthesisError as e:
            logger.error(f"Failed to render {func.__name__}: {e.message}")
            return RenderResult.failed(e, operation=func.__name__)
        logger.debug(f"Rendered {func.__name__}: {sql}")
        return RenderResult.success(sql)

    return wrapper
