"""
Django-Tabular: Server-side processing for DataTables

Turns DataTables requests (paging, global and per-column search,
ordering) into SQL over a SELECT statement and answers with the
envelope the widget expects.

Example:
    from django_tabular import TableQuery

    def users(request):
        return (
            TableQuery(request=request)
            .query("SELECT id, name, email FROM users")
            .hide("email")
            .generate()
        )
"""

__version__ = "26.10.0"

# Core table execution
from django_tabular.table import TableQuery, execute_table

# Columns
from django_tabular.columns import Column, ColumnCollection

# Query model
from django_tabular.sql import Query, parse_columns, parse_order_by, has_order_by

# Request parameters
from django_tabular.request import TableRequest, parse_bracketed, coerce_int

# Clause builders
from django_tabular.filters import build_where, build_global_filter, build_individual_filter
from django_tabular.ordering import build_order_by
from django_tabular.pagination import build_limit

# Database adapters
from django_tabular.db import DatabaseInterface, DjangoDatabase, DBAPIDatabase, quote_literal, quote_identifier

# Response utilities
from django_tabular.response import TableResponse, Row, format_rows

# Errors
from django_tabular.exceptions import (
    TabularError,
    ColumnNotFound,
    IndexOutOfRange,
    DuplicateColumnName,
    QueryParseError,
)

# Views
from django_tabular.views import TableQueryView

# Decorators
from django_tabular.decorators import datatable

# Configuration
from django_tabular.conf import tabular_settings

__all__ = [
    # Version
    "__version__",
    # Table
    "TableQuery",
    "execute_table",
    # Columns
    "Column",
    "ColumnCollection",
    # Query
    "Query",
    "parse_columns",
    "parse_order_by",
    "has_order_by",
    # Request
    "TableRequest",
    "parse_bracketed",
    "coerce_int",
    # Clauses
    "build_where",
    "build_global_filter",
    "build_individual_filter",
    "build_order_by",
    "build_limit",
    # Database
    "DatabaseInterface",
    "DjangoDatabase",
    "DBAPIDatabase",
    "quote_literal",
    "quote_identifier",
    # Response
    "TableResponse",
    "Row",
    "format_rows",
    # Errors
    "TabularError",
    "ColumnNotFound",
    "IndexOutOfRange",
    "DuplicateColumnName",
    "QueryParseError",
    # Views
    "TableQueryView",
    # Decorators
    "datatable",
    # Settings
    "tabular_settings",
]
