"""
Django-Tabular Response Utilities

Handles row formatting and the response envelope expected by the
DataTables client:

    {"draw": 1, "recordsTotal": 57, "recordsFiltered": 3, "data": [...]}

Each output row follows the client's column configuration: a column
whose display key is numeric fills the next array position, any other
column is emitted under its name. Rows mixing both are emitted as
objects with the positions as string keys.
"""

from django_tabular.conf import tabular_settings


class Row:
    """
    Output row made of positional and named entries.

    Example:
        >>> row = Row()
        >>> row.append(1)
        >>> row.append("john")
        >>> row.to_data()
        [1, 'john']
        >>> row.set("email", "j@x")
        >>> row.to_data()
        {'0': 1, '1': 'john', 'email': 'j@x'}
    """

    def __init__(self):
        self.entries = []
        self._next_position = 0

    def append(self, value):
        """Add a value at the next position."""
        self.entries.append((self._next_position, value))
        self._next_position += 1

    def set(self, name, value):
        """Add or replace a named value."""
        for i, (key, _) in enumerate(self.entries):
            if key == name:
                self.entries[i] = (name, value)
                return
        self.entries.append((name, value))

    def is_positional(self):
        return all(isinstance(key, int) for key, _ in self.entries)

    def to_data(self):
        """Convert to a JSON-ready list (positional only) or dict."""
        if self.is_positional():
            return [value for _, value in self.entries]
        return {str(key): value for key, value in self.entries}


def build_row(row, columns):
    """
    Format one result row through the visible columns.

    Args:
        row: Result row (dict keyed by column name)
        columns: ColumnCollection

    Returns:
        Row
    """
    result = Row()

    for column in columns.visible():
        value = column.value(row)
        if column.is_positional():
            result.append(value)
        else:
            result.set(column.name, value)

    return result


def format_rows(rows, columns):
    """Format result rows into the "data" list of the response."""
    return [build_row(row, columns).to_data() for row in rows]


class TableResponse:
    """
    Response envelope for a table request.

    Example:
        >>> response = TableResponse(draw=1, records_total=3, records_filtered=2, data=[])
        >>> response.to_dict()
        {'draw': 1, 'recordsTotal': 3, 'recordsFiltered': 2, 'data': []}
    """

    content_type = "application/json"

    def __init__(self, draw, records_total, records_filtered, data):
        self.draw = draw
        self.records_total = records_total
        self.records_filtered = records_filtered
        self.data = data

    def to_dict(self):
        """Convert response to dictionary for JSON serialization."""
        return {
            "draw": int(self.draw or 0),
            "recordsTotal": int(self.records_total),
            "recordsFiltered": int(self.records_filtered),
            "data": self.data,
        }

    def to_json_response(self):
        """
        Convert to Django JsonResponse.

        Values produced by formatters are encoded with DjangoJSONEncoder,
        so dates, decimals and UUIDs need no conversion.
        """
        from django.http import JsonResponse

        return JsonResponse(self.to_dict(), json_dumps_params=tabular_settings.JSON_DUMPS_PARAMS)
