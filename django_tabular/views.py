"""
Django-Tabular Views

Provides a Django class-based view serving a DataTables endpoint.

Features:
- TableQueryView for declaring a table with a SELECT statement
- configure() hook for adding, editing and hiding columns
- GET (DataTables default) and POST requests
"""

from django.views import View
from django.views.decorators.csrf import csrf_exempt

from django_tabular.conf import tabular_settings
from django_tabular.db import DjangoDatabase
from django_tabular.table import TableQuery


class TableQueryView(View):
    """
    Generic view for a server-side DataTables endpoint.

    Subclass this view, set the SELECT statement and optionally
    customise the columns.

    CSRF Protection:
        By default, CSRF protection is ENABLED (secure by default).
        POST tables need the CSRF token sent by the client, or
        CSRF_EXEMPT=True in settings.

    Example:
        # views.py
        from django_tabular.views import TableQueryView

        class UserTableView(TableQueryView):
            sql = "SELECT id, name, email FROM users"

            def configure(self, table):
                table.add("link", lambda row, name: f"/users/{row['id']}/")
                table.hide("email")

        # urls.py
        urlpatterns = [
            path('tables/users/', UserTableView.as_view(), name='user-table'),
        ]
    """

    # Required: the SELECT statement
    sql = None

    # Optional: explicit column names (required for SELECT *)
    columns = None

    # Optional: database alias (defaults to DJANGO_TABULAR['DATABASE'])
    using = None

    @classmethod
    def as_view(cls, **initkwargs):
        """Override as_view to conditionally apply csrf_exempt based on settings."""
        view = super().as_view(**initkwargs)
        if tabular_settings.CSRF_EXEMPT:
            view = csrf_exempt(view)
        return view

    def get_sql(self):
        """Get the SELECT statement. Override for dynamic queries."""
        if self.sql is None:
            raise NotImplementedError(f"{type(self).__name__} must define 'sql' or override get_sql()")
        return self.sql

    def get_database(self):
        """Get the database adapter. Override to use another driver."""
        return DjangoDatabase(self.using)

    def configure(self, table):
        """Customise columns of the table. Override to add/edit/hide."""

    def get_table(self, request):
        table = TableQuery(self.get_database(), request)
        table.query(self.get_sql(), self.columns)
        self.configure(table)
        return table

    def get(self, request, *args, **kwargs):
        """Handle GET request for table data."""
        return self.handle_table(request)

    def post(self, request, *args, **kwargs):
        """Handle POST request for table data."""
        return self.handle_table(request)

    def handle_table(self, request):
        return self.get_table(request).generate()
