"""
========================================================
Comprehensive pytest suite for sqlsynth/dml.py
========================================================

Sections:
---------
1. Unit tests - INSERT, UPDATE, DELETE text
2. Edge case tests - Value quoting, NULLs, failures

Available markers:
------------------
unit, edge_case

Test Coverage:
--------------
- insert: with and without explicit columns
- update: all rows and WHERE-filtered
- delete: all rows and WHERE-filtered
- render_value / where_clause helpers

How to Execute:
---------------
All tests:          pytest tests/tests_sqlsynth/test_dml.py -v
By category:        pytest tests/tests_sqlsynth/test_dml.py -m unit
"""

import pytest

from sqlsynth.dml import delete, insert, render_value, update, where_clause
from sqlsynth.errors import FailureReason
from sqlsynth.models import PredicateChain, SqlLiteral


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_insert_with_columns():
    """Test INSERT with explicit columns quotes strings only."""
    result = insert('t', ['x', 5], column_names=['c1', 'c2'])

    assert result.sql == "INSERT INTO t ( c1,c2 ) VALUES ('x',5 );"


@pytest.mark.unit
def test_insert_without_columns():
    """Test INSERT without a column list."""
    result = insert('t', ['x', 5])

    assert result.sql == "INSERT INTO t VALUES ('x',5 );"


@pytest.mark.unit
def test_update_all_rows():
    """Test UPDATE without WHERE sets every listed column."""
    result = update('t', ['a', 'b'], ['x', 5])

    assert result.sql == "UPDATE t SET a = 'x',b = 5;"


@pytest.mark.unit
def test_update_with_where():
    """Test UPDATE with a WHERE chain trims the predicate text."""
    result = update('t', ['a'], ['x'], where=PredicateChain().where('id', '=', 1))

    assert result.sql == "UPDATE t SET a = 'x' WHERE id=1;"


@pytest.mark.unit
def test_delete_all_rows():
    """Test DELETE without WHERE."""
    assert delete('t').sql == "DELETE FROM t;"


@pytest.mark.unit
def test_delete_with_where():
    """Test DELETE with a chained WHERE."""
    where = PredicateChain().where('id', '=', 1).or_('name', '=', 'bob')

    assert delete('t', where).sql == "DELETE FROM t WHERE id=1 OR name='bob';"


@pytest.mark.unit
def test_where_clause_helper():
    """Test the WHERE helper adds the keyword only for non-empty chains."""
    assert where_clause(None) == ""
    assert where_clause(PredicateChain()) == ""
    assert where_clause(PredicateChain().where('a', '>', 1)) == " WHERE a>1"


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
@pytest.mark.parametrize("value, expected", [
    (None, "NULL"),
    ("", "''"),
    ("O'Brien", "'O''Brien'"),
    (True, "TRUE"),
    (1.25, "1.25"),
    (SqlLiteral.raw("CURRENT_DATE"), "CURRENT_DATE"),
])
def test_render_value(value, expected):
    """Test DML values: NULL for None, always-quoted strings, raw expressions."""
    assert render_value(value) == expected


@pytest.mark.edge_case
def test_insert_column_value_mismatch():
    """Test INSERT fails when columns and values differ in length."""
    result = insert('t', ['x'], column_names=['a', 'b'])

    assert not result.ok
    assert result.failure.reason is FailureReason.LENGTH_MISMATCH


@pytest.mark.edge_case
def test_update_column_value_mismatch():
    """Test UPDATE fails when columns and values differ in length."""
    assert update('t', ['a', 'b'], [1]).failure.reason is FailureReason.LENGTH_MISMATCH


@pytest.mark.edge_case
def test_insert_requires_values():
    """Test INSERT needs values."""
    assert insert('t', []).failure.reason is FailureReason.EMPTY_VALUES


@pytest.mark.edge_case
def test_delete_requires_table():
    """Test DELETE needs a table name."""
    assert delete('').failure.reason is FailureReason.EMPTY_TABLE_NAME
