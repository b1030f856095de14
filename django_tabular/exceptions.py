"""
Django-Tabular Exceptions

Configuration errors (unknown or duplicate column names, unparseable
queries) are raised immediately to the code defining the table.
Database errors are never wrapped: whatever the driver raises reaches
the caller unchanged.
"""


class TabularError(Exception):
    """Base class for django-tabular errors."""


class ColumnNotFound(TabularError, KeyError):
    """Raised when a column name is not defined on the table."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Column '{name}' not found")

    def __str__(self):
        return self.args[0]


class IndexOutOfRange(TabularError, IndexError):
    """Raised when a column index is outside the defined columns."""

    def __init__(self, index, count):
        self.index = index
        self.count = count
        super().__init__(f"Column index {index} out of range (0..{count - 1})")


class DuplicateColumnName(TabularError, ValueError):
    """Raised when two columns share the same name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Column '{name}' is already defined")


class QueryParseError(TabularError, ValueError):
    """Raised when column names cannot be read from a query."""
