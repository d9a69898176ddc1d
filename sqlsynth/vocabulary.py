"""
=====================================
SQL keyword tables and enumerations.
=====================================

Immutable vocabulary shared by every renderer: statement keywords, data
types, join kinds, aggregate functions, predicate prefixes and sort
directions. Everything here is a constant or an Enum, so it can be read
from any thread without locking.
"""

from enum import Enum

# Table statement keywords
FROM = "FROM"
WHERE = "WHERE"
ORDER_BY = "ORDER BY"
VALUES = "VALUES"
SET = "SET"
ON = "ON"
DISTINCT = "DISTINCT"
STAR = "*"

# Database statement keywords
CONSTRAINT = "CONSTRAINT"
UNIQUE = "UNIQUE"
PRIMARY_KEY = "PRIMARY KEY"
FOREIGN_KEY = "FOREIGN KEY"
REFERENCES = "REFERENCES"
CHECK = "CHECK"
ADD = "ADD"
DROP_COLUMN = "DROP COLUMN"
MODIFY_COLUMN = "MODIFY COLUMN"
NOT_NULL = "NOT NULL"
AUTO_INCREMENT = "AUTO_INCREMENT"
DROP_INDEX = "DROP INDEX"
DROP_PRIMARY_KEY = "DROP PRIMARY KEY"
DROP_FOREIGN_KEY = "DROP FOREIGN KEY"
DROP_CHECK = "DROP CHECK"

# Name prefixes of multi-column aggregate constraints
UNIQUE_PREFIX = "UC_"
PRIMARY_KEY_PREFIX = "PK_"
FOREIGN_KEY_PREFIX = "FK_"
CHECK_PREFIX = "CHK_"

STATEMENT_TERMINATOR = ";"


class QueryType(Enum):
    """Operation kinds a TableStatementRequest can ask for.

    The value is the leading keyword of the rendered statement.
    """

    SELECT = "SELECT"
    INSERT = "INSERT INTO"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE_DATABASE = "CREATE DATABASE"
    DROP_DATABASE = "DROP DATABASE"
    CREATE_TABLE = "CREATE TABLE"
    DROP_TABLE = "DROP TABLE"
    TRUNCATE_TABLE = "TRUNCATE TABLE"
    ALTER_TABLE_ADD = "ALTER TABLE ADD"
    ALTER_TABLE_ADD_CONSTRAINTS = "ALTER TABLE ADD CONSTRAINTS"
    ALTER_TABLE_DROP = "ALTER TABLE DROP"
    ALTER_TABLE_MODIFY = "ALTER TABLE MODIFY"
    ALTER_TABLE_DROP_UNIQUE = "ALTER TABLE DROP UNIQUE"
    ALTER_TABLE_DROP_PRIMARY_KEY = "ALTER TABLE DROP PRIMARY KEY"
    ALTER_TABLE_DROP_FOREIGN_KEY = "ALTER TABLE DROP FOREIGN KEY"
    ALTER_TABLE_DROP_CHECK = "ALTER TABLE DROP CHECK"

    @property
    def keyword(self) -> str:
        """Leading SQL keyword(s) of the statement."""
        if self.name.startswith("ALTER_TABLE"):
            return "ALTER TABLE"
        return self.value


class SqlDataType(Enum):
    """Column data types (MySQL spelling)."""

    # Text
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    TINYTEXT = "TINYTEXT"
    TEXT = "TEXT"
    BLOB = "BLOB"
    MEDIUMTEXT = "MEDIUMTEXT"
    MEDIUMBLOB = "MEDIUMBLOB"
    LONGTEXT = "LONGTEXT"
    LONGBLOB = "LONGBLOB"
    # Numeric
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    MEDIUMINT = "MEDIUMINT"
    INT = "INT"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    # Date
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    TIME = "TIME"
    YEAR = "YEAR"


class JoinKind(Enum):
    """Join kinds available to SELECT."""

    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    FULL = "FULL OUTER JOIN"


class AggregateFunction(Enum):
    """Single-column aggregate functions for SELECT."""

    MIN = "MIN"
    MAX = "MAX"
    AVG = "AVG"
    SUM = "SUM"
    COUNT = "COUNT"


class ConditionPrefix(Enum):
    """Boolean operator placed in front of a predicate condition."""

    NONE = ""
    NOT = "NOT"
    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, token) -> "ConditionPrefix":
        """Coerce None, a prefix or a keyword string (any case) to a prefix.

        Raises:
            ValueError: If the token is not NOT/AND/OR or empty
        """
        if token is None:
            return cls.NONE
        if isinstance(token, cls):
            return token
        normalized = str(token).strip().upper()
        for prefix in cls:
            if prefix.value == normalized:
                return prefix
        raise ValueError(f"Unknown condition prefix: {token!r}")


class SortDirection(Enum):
    """ORDER BY directions."""

    ASC = "ASC"
    DESC = "DESC"


class ConstraintKind(Enum):
    """Kinds of column constraint facts."""

    NOT_NULL = "NOT NULL"
    AUTO_INCREMENT = "AUTO_INCREMENT"
    UNIQUE = "UNIQUE"
    PRIMARY_KEY = "PRIMARY KEY"
    FOREIGN_KEY = "FOREIGN KEY"
    CHECK = "CHECK"


class LiteralKind(Enum):
    """Tag of a SqlLiteral; decides quoting."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    RAW = "raw"


class PredicateMode(Enum):
    """Where a predicate chain is being rendered."""

    WHERE = "WHERE"
    CHECK = "CHECK"
    JOIN_ON = "ON"
