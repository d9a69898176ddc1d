"""
=======================================
Request loading from JSON documents.
=======================================

Builds TableStatementRequests from plain dicts, as read from a JSON file.
This is the input format of the command line wrapper.

Document format:
    {
        "operation": "CREATE_TABLE",            # QueryType name or keyword
        "table": "users",
        "database": "shop",                     # CREATE/DROP DATABASE only
        "columns": [                            # DDL column definitions ...
            {"name": "id", "type": "INT",
             "constraints": ["not_null", {"auto_increment": 100}, "primary_key"]},
            {"name": "name", "type": "VARCHAR", "range": 255},
            {"name": "owner_id", "type": "INT",
             "constraints": [{"foreign_key": {"table": "owners", "column": "id"}}]},
            {"name": "age", "type": "INT",
             "constraints": [{"check": [{"field": "age", "operator": ">=", "value": 18}]}]}
        ],
        "columns": ["name", "age"],             # ... or plain names for DML/SELECT
        "values": ["x", 5],
        "where": [{"prefix": "", "field": "age", "operator": ">=", "value": 18}],
        "order_by": [["name", "asc"]],
        "join": {"tables": ["A", "B"], "kinds": ["INNER"],
                 "conditions": [{"field": "A.id", "operator": "=", "value": "B.a_id", "raw": true}]},
        "distinct": false,
        "aggregate": "COUNT"
    }

Conditions may also be given as [prefix, field, operator, value] lists.

Example:
    >>> from sqlsynth.loader import load_request
    >>> from sqlsynth.renderer import StatementRenderer
    >>>
    >>> request = load_request('requests/create_users.json')
    >>> print(StatementRenderer().render(request).sql)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from sqlsynth.errors import RequestLoadError, ValidationError
from sqlsynth.models import (
    ColumnDataType,
    ColumnDefinition,
    ConstraintChain,
    JoinSpec,
    OrderByItem,
    OrderBySpec,
    PredicateChain,
    PredicateCondition,
    SqlLiteral,
    TableStatementRequest,
)
from sqlsynth.vocabulary import AggregateFunction, QueryType, SqlDataType

logger = logging.getLogger(__name__)


def _lookup_enum(enum_cls, token: Any, what: str):
    """Find an enum member by name or value, case-insensitively."""
    if isinstance(token, enum_cls):
        return token
    normalized = str(token).strip().upper()
    for member in enum_cls:
        if normalized in (member.name, member.value.upper()):
            return member
    raise RequestLoadError(f"Unknown {what}: {token!r}")


def _condition(data: Union[Dict[str, Any], List[Any]]) -> PredicateCondition:
    if isinstance(data, (list, tuple)):
        if len(data) != 4:
            raise RequestLoadError(f"Condition lists need [prefix, field, operator, value]; got {data!r}")
        prefix, field, operator, value = data
    elif isinstance(data, dict):
        prefix = data.get('prefix')
        field = data.get('field')
        operator = data.get('operator')
        value = data.get('value')
        if data.get('raw') and value is not None:
            value = SqlLiteral.raw(str(value))
    else:
        raise RequestLoadError(f"Condition must be a list or an object; got {data!r}")

    try:
        return PredicateCondition(prefix, field, operator, value)
    except ValueError as e:
        raise RequestLoadError(str(e)) from e


def _predicate_chain(data: Any) -> PredicateChain:
    if not data:
        return PredicateChain()
    if not isinstance(data, list):
        raise RequestLoadError("Predicates must be a list of conditions")
    return PredicateChain(tuple(_condition(item) for item in data))


def _constraint_chain(items: Any) -> ConstraintChain:
    chain = ConstraintChain()
    for item in items or []:
        if isinstance(item, str):
            key, argument = item.strip().lower(), None
        elif isinstance(item, dict) and len(item) == 1:
            key, argument = next(iter(item.items()))
            key = key.strip().lower()
        else:
            raise RequestLoadError(f"Invalid constraint entry: {item!r}")

        if key == 'not_null':
            chain = chain.not_null()
        elif key == 'auto_increment':
            try:
                start_value = int(argument) if argument is not None else 1
            except (TypeError, ValueError) as e:
                raise RequestLoadError(f"auto_increment start value must be an integer; got {argument!r}") from e
            chain = chain.auto_increment(start_value)
        elif key == 'unique':
            chain = chain.unique()
        elif key == 'primary_key':
            chain = chain.primary_key()
        elif key == 'foreign_key':
            if not isinstance(argument, dict) or 'table' not in argument or 'column' not in argument:
                raise RequestLoadError("foreign_key needs {'table': ..., 'column': ...}")
            chain = chain.foreign_key(argument['table'], argument['column'])
        elif key == 'check':
            chain = chain.check(_predicate_chain(argument))
        else:
            raise RequestLoadError(f"Unknown constraint: {key!r}")
    return chain


def _data_type(data: Dict[str, Any]) -> ColumnDataType:
    if 'type' not in data:
        raise RequestLoadError(f"Column '{data.get('name')}' has no type")
    return ColumnDataType(
        kind=_lookup_enum(SqlDataType, data['type'], "data type"),
        range=data.get('range'),
        decimal=data.get('decimal'),
    )


def _column_definition(data: Any) -> ColumnDefinition:
    if not isinstance(data, dict):
        raise RequestLoadError(f"Column definition must be an object; got {data!r}")
    return ColumnDefinition(
        name=data.get('name', ''),
        data_type=_data_type(data),
        constraints=_constraint_chain(data.get('constraints')),
    )


def _order_by(data: Any) -> OrderBySpec:
    items = []
    for entry in data:
        if isinstance(entry, dict):
            items.append(OrderByItem(entry.get('column', ''), entry.get('direction', 'ASC')))
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            items.append(OrderByItem(entry[0], entry[1]))
        elif isinstance(entry, str):
            items.append(OrderByItem(entry))
        else:
            raise RequestLoadError(f"Invalid ORDER BY entry: {entry!r}")
    return OrderBySpec(tuple(items))


def _join(data: Any) -> JoinSpec:
    if not isinstance(data, dict):
        raise RequestLoadError("join must be an object with tables, kinds and conditions")
    try:
        return JoinSpec.from_lists(
            data.get('tables', []),
            data.get('kinds', []),
            [_condition(item) for item in data.get('conditions', [])],
        )
    except ValidationError as e:
        raise RequestLoadError(e.message) from e


def request_from_dict(data: Dict[str, Any]) -> TableStatementRequest:
    """Build a TableStatementRequest from a JSON-compatible dict.

    Args:
        data: Request document (see module docstring)

    Returns:
        TableStatementRequest ready for StatementRenderer

    Raises:
        RequestLoadError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise RequestLoadError("Request document must be a JSON object")
    if 'operation' not in data:
        raise RequestLoadError("Request document has no 'operation'")

    request = TableStatementRequest(
        operation=_lookup_enum(QueryType, data['operation'], "operation"),
        table=data.get('table', ''),
        database=data.get('database', ''),
        distinct=bool(data.get('distinct', False)),
    )

    columns = data.get('columns') or []
    if columns and all(isinstance(column, str) for column in columns):
        request.column_names = list(columns)
    else:
        request.columns = [_column_definition(column) for column in columns]
    if 'column_names' in data:
        request.column_names = list(data['column_names'])

    request.values = list(data.get('values') or [])
    request.where = _predicate_chain(data.get('where'))
    if data.get('order_by'):
        request.order_by = _order_by(data['order_by'])
    if data.get('join'):
        request.join = _join(data['join'])
    if data.get('aggregate'):
        request.aggregate = _lookup_enum(AggregateFunction, data['aggregate'], "aggregate function")

    logger.debug(f"Loaded {request.operation.name} request for '{request.table or request.database}'")
    return request


def load_request(path: Union[str, Path]) -> TableStatementRequest:
    """Read a JSON request document from ``path``.

    Raises:
        RequestLoadError: If the file cannot be read or parsed, or is malformed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise RequestLoadError(f"Cannot read request file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RequestLoadError(f"Invalid JSON in {path}: {e}") from e

    logger.info(f"Loaded request file {path}")
    return request_from_dict(data)
