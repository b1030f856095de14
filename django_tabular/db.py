"""
Django-Tabular Database Adapters

The table pipeline needs a connection, a row count for a SQL statement,
the rows of a SQL statement, and quoting for search terms (literals)
and column names (identifiers).

Provides:
- DatabaseInterface describing those operations
- DjangoDatabase running on a configured Django connection
- DBAPIDatabase running on any PEP 249 connection (sqlite3, psycopg, ...)

Errors raised by the driver propagate unchanged.
"""

from django_tabular.conf import tabular_settings


def quote_literal(value, vendor=None):
    """
    Quote a scalar as a SQL string literal.

    Single quotes are doubled; MySQL additionally treats backslash as an
    escape character, so backslashes are doubled there.

    Examples:
        >>> quote_literal("%o'brien%")
        "'%o''brien%'"
        >>> quote_literal(None)
        'NULL'
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        value = int(value)

    text = str(value).replace("\x00", "")
    if vendor == "mysql":
        text = text.replace("\\", "\\\\")
    return "'" + text.replace("'", "''") + "'"


def quote_identifier(name, vendor=None):
    """
    Quote a column name for use in generated SQL.

    Examples:
        >>> quote_identifier("price * qty")
        '"price * qty"'
        >>> quote_identifier("order", vendor="mysql")
        '`order`'
    """
    if vendor == "mysql":
        return "`" + str(name).replace("`", "``") + "`"
    return '"' + str(name).replace('"', '""') + '"'


def dictfetchall(cursor):
    """Return all rows from a cursor as dicts keyed by column name."""
    names = [col[0] for col in cursor.description]
    return [dict(zip(names, row)) for row in cursor.fetchall()]


class DatabaseInterface:
    """
    Database operations used by TableQuery.

    Subclass and implement connect, count and query to run
    tables on another driver.
    """

    vendor = None

    def connect(self):
        """Acquire the connection. Returns self."""
        raise NotImplementedError

    def count(self, sql):
        """Return the number of rows produced by `sql`."""
        raise NotImplementedError

    def query(self, sql):
        """Return the rows produced by `sql` as a list of dicts."""
        raise NotImplementedError

    def escape(self, value):
        """Return `value` as a quoted SQL literal."""
        return quote_literal(value, self.vendor)

    def quote_name(self, name):
        """Return column `name` as a quoted SQL identifier."""
        return quote_identifier(name, self.vendor)

    @staticmethod
    def count_sql(sql):
        return f"SELECT COUNT(*) FROM ({sql}) c"


class DjangoDatabase(DatabaseInterface):
    """
    Database adapter over django.db.connections.

    Example:
        db = DjangoDatabase("reporting").connect()
        db.count("SELECT * FROM users")
    """

    def __init__(self, using=None):
        self.using = using or tabular_settings.DATABASE
        self.connection = None

    def connect(self):
        from django.db import connections

        self.connection = connections[self.using]
        self.connection.ensure_connection()
        return self

    @property
    def vendor(self):
        return self.connection.vendor if self.connection is not None else None

    def quote_name(self, name):
        return self.connection.ops.quote_name(name)

    def count(self, sql):
        with self.connection.cursor() as cursor:
            cursor.execute(self.count_sql(sql))
            return int(cursor.fetchone()[0])

    def query(self, sql):
        with self.connection.cursor() as cursor:
            cursor.execute(sql)
            return dictfetchall(cursor)


class DBAPIDatabase(DatabaseInterface):
    """
    Database adapter over a PEP 249 connection.

    Example:
        import sqlite3

        db = DBAPIDatabase(sqlite3.connect("app.db"), vendor="sqlite")
    """

    def __init__(self, connection, vendor=None):
        self.connection = connection
        self.vendor = vendor

    def connect(self):
        return self

    def count(self, sql):
        cursor = self.connection.cursor()
        try:
            cursor.execute(self.count_sql(sql))
            return int(cursor.fetchone()[0])
        finally:
            cursor.close()

    def query(self, sql):
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            return dictfetchall(cursor)
        finally:
            cursor.close()
