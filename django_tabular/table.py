"""
Django-Tabular Core Table Engine

Ties together column definitions, search, ordering and paging into one
server-side processing pass for a DataTables request.

Provides:
- TableQuery class for building and running a table endpoint
- execute_table function for procedural usage
"""

import logging

from django_tabular.columns import ColumnCollection
from django_tabular.conf import tabular_settings
from django_tabular.db import DjangoDatabase
from django_tabular.exceptions import TabularError
from django_tabular.filters import build_where
from django_tabular.ordering import build_order_by
from django_tabular.pagination import build_limit
from django_tabular.request import TableRequest
from django_tabular.response import TableResponse, format_rows
from django_tabular.sql import Query

logger = logging.getLogger("django_tabular")


class TableQuery:
    """
    Server-side processing for one table request.

    Define the query and its columns, then call generate() to count,
    filter, order and page the rows and build the response.

    Example:
        def users(request):
            return (
                TableQuery(request=request)
                .query("SELECT id, name, email, active FROM users")
                .edit("email", lambda row, name: row[name].lower())
                .add("link", lambda row, name: f"/users/{row['id']}/")
                .hide("active")
                .generate()
            )

        # Using a different connection
        table = TableQuery(DjangoDatabase("reporting"), request)
    """

    def __init__(self, db=None, request=None):
        """
        Initialize a TableQuery.

        Args:
            db: DatabaseInterface (default: DjangoDatabase on the
                configured DATABASE alias)
            request: Django HttpRequest, TableRequest or mapping of
                DataTables parameters
        """
        self.db = (db if db is not None else DjangoDatabase()).connect()
        self.request = TableRequest.coerce(request)

        self.sql = None
        self.columns = None
        self.rows = None
        self.records_total = None
        self.records_filtered = None

    def query(self, sql, columns=None):
        """
        Set the SELECT statement for the table.

        Args:
            sql: SELECT statement; columns are read from its select list
            columns: Optional explicit column names (required for SELECT *)
        """
        self.sql = Query(sql, columns)
        self.columns = ColumnCollection(self.sql.columns)
        return self

    def _require_query(self):
        if self.sql is None:
            raise TabularError("No query defined; call query() first")

    def add(self, name, formatter):
        """Add an output column computed from each row."""
        self._require_query()
        self.columns.add(name, formatter)
        return self

    def edit(self, name, formatter):
        """Change how an existing column is rendered."""
        self._require_query()
        self.columns.edit(name, formatter)
        return self

    def hide(self, *names):
        """Hide columns from output; hide("a", "b") or hide(["a", "b"])."""
        self._require_query()
        self.columns.hide(*names)
        return self

    def get(self, key):
        """
        Introspect the table.

        Args:
            key: "columns" for the column names, "query" for the last SQL run

        Raises:
            ValueError: For any other key
        """
        if key == "columns":
            self._require_query()
            return self.columns.names()
        if key == "query":
            self._require_query()
            return self.sql.full
        raise ValueError(f"Unknown attribute: {key!r}")

    def execute(self):
        """Count, filter, order and page the rows."""
        self._require_query()
        sql = self.sql

        self.columns.bind(self.request.columns)

        self.records_total = self.db.count(sql.base)
        where = build_where(self.request, self.columns, self.db)
        self.records_filtered = self.db.count(sql.base + where)

        order_by = build_order_by(self.request.order, self.columns, self.db, sql.default_order())
        sql.full = sql.base + where + order_by + build_limit(self.request)

        if tabular_settings.LOG_QUERIES:
            logger.info(
                "tabular_query",
                extra={
                    "query": sql.full,
                    "records_total": self.records_total,
                    "records_filtered": self.records_filtered,
                },
            )
        else:
            logger.debug(f"Table query: {sql.full}")

        self.rows = self.db.query(sql.full)
        return self

    def generate(self, as_json=True):
        """
        Run the table and build the DataTables response.

        Args:
            as_json: Return a JsonResponse (default) instead of a dict

        Returns:
            JsonResponse or dict with draw, recordsTotal, recordsFiltered, data
        """
        self.execute()

        response = TableResponse(
            draw=self.request.draw,
            records_total=self.records_total,
            records_filtered=self.records_filtered,
            data=format_rows(self.rows, self.columns),
        )

        if as_json:
            return response.to_json_response()
        return response.to_dict()


def execute_table(sql, request=None, db=None, as_json=False):
    """
    Run a table request for a SELECT statement.

    Convenience function that wraps TableQuery for tables that need no
    column customisation.

    Example:
        result = execute_table("SELECT id, name FROM users", {"draw": 1, "length": 5})
        result["recordsTotal"]
    """
    return TableQuery(db, request).query(sql).generate(as_json=as_json)
