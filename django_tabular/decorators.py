"""
Django-Tabular Decorators

Provides a function decorator turning a Django view into a DataTables
endpoint.
"""

from functools import wraps

from django_tabular.db import DjangoDatabase
from django_tabular.table import TableQuery


def datatable(sql, using=None, columns=None):
    """
    Decorator for serving a table from a function-based view.

    The decorated function receives the table (query set, not yet run)
    as the `table` keyword argument. It may customise columns and return
    None, in which case the table response is returned, or return its
    own response.

    Args:
        sql: SELECT statement for the table
        using: Optional database alias
        columns: Optional explicit column names (required for SELECT *)

    Example:
        from django_tabular import datatable

        @datatable("SELECT id, name, email FROM users")
        def user_table(request, table):
            table.edit("email", lambda row, name: row[name].lower())
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            table = TableQuery(DjangoDatabase(using), request).query(sql, columns)

            response = view_func(request, *args, table=table, **kwargs)
            if response is not None:
                return response

            return table.generate()

        return wrapped_view

    return decorator
