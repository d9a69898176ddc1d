"""
====================================================
SQL statement synthesis engine.
====================================================

Renders DDL and DML text from a typed, validated in-memory description of
tables, columns, constraints, predicates, joins and ordering. Rendering is
pure: no connections, no parsing, no schema lookups.

The package is organized by concern:
    - vocabulary.py: Keywords and enumerations
    - models.py: Request data model (immutable except TableStatementRequest)
    - errors.py: Error taxonomy and RenderResult
    - validator.py: Structural checks shared by all renderers
    - predicates.py: WHERE/CHECK/ON predicates and join nesting
    - constraints.py: Inline and aggregate constraint text
    - ddl.py: CREATE/ALTER/DROP/TRUNCATE TABLE, CREATE/DROP DATABASE
    - dml.py: INSERT/UPDATE/DELETE
    - query_builder.py: SELECT variants (_builder suffix)
    - renderer.py: Dispatch of a TableStatementRequest to the above
    - loader.py: Requests from JSON documents

Architecture:
    - Every public rendering function returns a RenderResult
    - Validators raise; the rendering boundary converts errors into failures
    - ddl/dml/query_builder never import renderer.py (not vice versa)

Example:
    >>> from sqlsynth import PredicateChain, insert, select_builder
    >>>
    >>> insert('t', ['x', 5], column_names=['c1', 'c2']).sql
    "INSERT INTO t ( c1,c2 ) VALUES ('x',5 );"
    >>> select_builder('t', ['a'], where=PredicateChain().where('age', '>=', 18)).sql
    'SELECT a FROM t WHERE age>=18;'
"""

__version__ = "1.0.0"
__all__ = [
    # Model
    'ColumnDataType', 'ColumnDefinition', 'ConstraintChain', 'JoinSpec',
    'OrderBySpec', 'PredicateChain', 'PredicateCondition', 'SqlLiteral',
    'TableStatementRequest',
    # Errors
    'FailureReason', 'RenderFailure', 'RenderResult', 'SqlSynthesisError',
    'UnsupportedFeatureError', 'ValidationError',
    # DDL functions
    'create_table', 'create_table_from_lists', 'alter_table_add_columns',
    'alter_table_add_constraints', 'alter_table_drop_columns',
    'alter_table_modify_columns', 'drop_table', 'truncate_table',
    'create_database', 'drop_database',
    # DML functions
    'insert', 'update', 'delete',
    # Query builders
    'select_builder', 'aggregate_builder', 'order_by_builder', 'join_builder',
    # Dispatch
    'StatementRenderer',
]

from .ddl import (
    alter_table_add_columns,
    alter_table_add_constraints,
    alter_table_drop_columns,
    alter_table_modify_columns,
    create_database,
    create_table,
    create_table_from_lists,
    drop_database,
    drop_table,
    truncate_table,
)
from .dml import delete, insert, update
from .errors import (
    FailureReason,
    RenderFailure,
    RenderResult,
    SqlSynthesisError,
    UnsupportedFeatureError,
    ValidationError,
)
from .models import (
    ColumnDataType,
    ColumnDefinition,
    ConstraintChain,
    JoinSpec,
    OrderBySpec,
    PredicateChain,
    PredicateCondition,
    SqlLiteral,
    TableStatementRequest,
)
from .query_builder import aggregate_builder, join_builder, order_by_builder, select_builder
from .renderer import StatementRenderer
