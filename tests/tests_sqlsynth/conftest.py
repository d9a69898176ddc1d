"""
Shared fixtures for sqlsynth tests.

Key fixtures:
- int_type / varchar_type: common ColumnDataTypes
- users_columns: id (PRIMARY KEY) and name (NOT NULL) column definitions
- persons_columns: a richer table with every constraint kind except FOREIGN KEY
"""

import pytest

from sqlsynth.models import (
    ColumnDataType,
    ColumnDefinition,
    ConstraintChain,
    PredicateChain,
)
from sqlsynth.vocabulary import SqlDataType


@pytest.fixture
def int_type():
    return ColumnDataType(SqlDataType.INT)


@pytest.fixture
def varchar_type():
    return ColumnDataType(SqlDataType.VARCHAR, 255)


@pytest.fixture
def users_columns(int_type, varchar_type):
    """Columns of the two-column example table."""
    return [
        ColumnDefinition('id', int_type, ConstraintChain().primary_key()),
        ColumnDefinition('name', varchar_type, ConstraintChain().not_null()),
    ]


@pytest.fixture
def persons_columns(int_type, varchar_type):
    """Columns with NOT NULL, AUTO_INCREMENT, UNIQUE, PRIMARY KEY and CHECK."""
    return [
        ColumnDefinition('ID', int_type, ConstraintChain().not_null().auto_increment(100).primary_key()),
        ColumnDefinition('LastName', varchar_type, ConstraintChain().not_null().unique()),
        ColumnDefinition('FirstName', varchar_type, ConstraintChain().unique()),
        ColumnDefinition('Age', int_type, ConstraintChain().check(PredicateChain().where('Age', '>=', 18))),
    ]
