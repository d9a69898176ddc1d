"""
========================================================
Comprehensive pytest suite for sqlsynth/loader.py
========================================================

Sections:
---------
1. Unit tests - Document fields to request fields
2. Integration tests - File loading and rendering
3. Edge case tests - Malformed documents

Available markers:
------------------
unit, integration, edge_case

Test Coverage:
--------------
- request_from_dict: operations, columns, constraints, where, order_by, join, aggregate
- load_request: reading JSON files, unreadable/invalid files

How to Execute:
---------------
All tests:          pytest tests/tests_sqlsynth/test_loader.py -v
By category:        pytest tests/tests_sqlsynth/test_loader.py -m edge_case
"""

import pytest

from sqlsynth.errors import FailureReason, RequestLoadError
from sqlsynth.loader import load_request, request_from_dict
from sqlsynth.models import (
    AutoIncrement,
    ColumnDataType,
    ForeignKey,
    NotNull,
    OrderByItem,
    PrimaryKey,
    SqlLiteral,
)
from sqlsynth.renderer import StatementRenderer
from sqlsynth.vocabulary import (
    AggregateFunction,
    ConditionPrefix,
    ConstraintKind,
    JoinKind,
    LiteralKind,
    QueryType,
    SqlDataType,
)


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
@pytest.mark.parametrize("token, expected", [
    ("CREATE_TABLE", QueryType.CREATE_TABLE),
    ("create table", QueryType.CREATE_TABLE),
    ("insert into", QueryType.INSERT),
    ("alter_table_drop_check", QueryType.ALTER_TABLE_DROP_CHECK),
])
def test_operation_by_name_or_keyword(token, expected):
    """Test operations can be named by enum name or keyword, any case."""
    assert request_from_dict({'operation': token}).operation is expected


@pytest.mark.unit
def test_column_definitions_with_constraints():
    """Test column objects become ColumnDefinitions with constraint chains."""
    request = request_from_dict({
        'operation': 'CREATE_TABLE',
        'table': 'Orders',
        'columns': [
            {'name': 'ID', 'type': 'int', 'constraints': ['not_null', {'auto_increment': 100}, 'primary_key']},
            {'name': 'Price', 'type': 'DECIMAL', 'range': 10, 'decimal': 2},
            {'name': 'PersonID', 'type': 'INT',
             'constraints': [{'foreign_key': {'table': 'Persons', 'column': 'ID'}}]},
            {'name': 'Qty', 'type': 'INT',
             'constraints': [{'check': [{'field': 'Qty', 'operator': '>', 'value': 0}]}]},
        ],
    })

    ident, price, person, qty = request.columns
    assert ident.constraints.items == (NotNull(), AutoIncrement(100), PrimaryKey())
    assert price.data_type == ColumnDataType(SqlDataType.DECIMAL, 10, 2)
    assert person.constraints.items == (ForeignKey('Persons', 'ID'),)
    assert qty.constraints.contains(ConstraintKind.CHECK)


@pytest.mark.unit
def test_plain_column_names_for_dml():
    """Test a list of strings fills column_names."""
    request = request_from_dict({'operation': 'INSERT', 'table': 't', 'columns': ['c1', 'c2'], 'values': ['x', 5]})

    assert request.column_names == ['c1', 'c2']
    assert request.columns == []
    assert request.values == ['x', 5]


@pytest.mark.unit
def test_where_conditions_as_objects_and_lists():
    """Test conditions may be objects or [prefix, field, operator, value] lists."""
    request = request_from_dict({
        'operation': 'SELECT',
        'table': 't',
        'where': [
            {'field': 'age', 'operator': '>=', 'value': 18},
            ['or', 'city', '=', 'Oslo'],
        ],
    })

    first, second = request.where
    assert first.prefix is ConditionPrefix.NONE
    assert first.value == SqlLiteral.of(18)
    assert second.prefix is ConditionPrefix.OR


@pytest.mark.unit
def test_order_by_join_and_aggregate():
    """Test ORDER BY pairs, join lists and aggregate names are converted."""
    request = request_from_dict({
        'operation': 'SELECT',
        'columns': ['a'],
        'order_by': [['name', 'asc'], {'column': 'age', 'direction': 'desc'}, 'id'],
        'join': {
            'tables': ['A', 'B'],
            'kinds': ['left'],
            'conditions': [{'field': 'A.id', 'operator': '=', 'value': 'B.id', 'raw': True}],
        },
        'aggregate': 'count',
        'distinct': True,
    })

    assert request.order_by.items == (
        OrderByItem('name', 'asc'), OrderByItem('age', 'desc'), OrderByItem('id', 'ASC')
    )
    assert request.join.kinds == (JoinKind.LEFT,)
    assert request.join.conditions[0].value.kind is LiteralKind.RAW
    assert request.aggregate is AggregateFunction.COUNT
    assert request.distinct is True


# =====================
# 2. INTEGRATION TESTS
# =====================

@pytest.mark.integration
def test_load_and_render_file(request_file):
    """Test a request file loads and renders to the expected SQL."""
    path = request_file({
        'operation': 'CREATE_TABLE',
        'table': 't',
        'columns': [
            {'name': 'id', 'type': 'INT', 'constraints': ['primary_key']},
            {'name': 'name', 'type': 'VARCHAR', 'range': 255, 'constraints': ['not_null']},
        ],
    })

    request = load_request(path)

    assert StatementRenderer().render(request).sql == (
        "CREATE TABLE t (id INT , name VARCHAR(255) NOT NULL , PRIMARY KEY(id));"
    )


# ====================
# 3. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
@pytest.mark.parametrize("document, message", [
    ([], "JSON object"),
    ({}, "no 'operation'"),
    ({'operation': 'MERGE'}, "Unknown operation"),
    ({'operation': 'CREATE_TABLE', 'columns': [{'name': 'a'}]}, "has no type"),
    ({'operation': 'CREATE_TABLE', 'columns': [{'name': 'a', 'type': 'UUID'}]}, "Unknown data type"),
    ({'operation': 'CREATE_TABLE', 'columns': [{'name': 'a', 'type': 'INT', 'constraints': ['sparse']}]},
     "Unknown constraint"),
    ({'operation': 'CREATE_TABLE',
      'columns': [{'name': 'a', 'type': 'INT', 'constraints': [{'foreign_key': 'x'}]}]},
     "foreign_key needs"),
    ({'operation': 'CREATE_TABLE',
      'columns': [{'name': 'a', 'type': 'INT', 'constraints': [{'auto_increment': 'ten'}]}]},
     "must be an integer"),
    ({'operation': 'SELECT', 'where': [['and', 'a', '=']]}, "Condition lists"),
    ({'operation': 'SELECT', 'where': [['xor', 'a', '=', 1]]}, "Unknown condition prefix"),
    ({'operation': 'SELECT', 'join': {'tables': ['A', 'B'], 'kinds': ['cross'], 'conditions': []}},
     "Unknown join kind"),
    ({'operation': 'SELECT', 'order_by': [42]}, "Invalid ORDER BY entry"),
])
def test_malformed_documents(document, message):
    """Test malformed documents raise RequestLoadError with a clear message."""
    with pytest.raises(RequestLoadError, match=message) as exc_info:
        request_from_dict(document)

    assert exc_info.value.reason is FailureReason.INVALID_REQUEST


@pytest.mark.edge_case
def test_missing_file(tmp_path):
    """Test a missing file raises RequestLoadError."""
    with pytest.raises(RequestLoadError, match="Cannot read request file"):
        load_request(tmp_path / 'missing.json')


@pytest.mark.edge_case
def test_invalid_json(request_file):
    """Test a file with broken JSON raises RequestLoadError."""
    path = request_file('{"operation": ')

    with pytest.raises(RequestLoadError, match="Invalid JSON"):
        load_request(path)
