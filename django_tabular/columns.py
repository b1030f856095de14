"""
Django-Tabular Columns

Column metadata and the ordered collection used to resolve request
column indices, pick search/order participants and shape output rows.

Column indices sent by the client refer to definition order, hidden
columns included, so hiding a column never shifts its neighbours.
"""

from django_tabular.exceptions import ColumnNotFound, DuplicateColumnName, IndexOutOfRange


def default_formatter(row, name):
    """Return the raw value of a column from a result row."""
    return row[name]


def is_numeric_key(value):
    """
    Whether a display key selects positional output.

    Examples:
        >>> is_numeric_key(0)
        True
        >>> is_numeric_key("3")
        True
        >>> is_numeric_key("name")
        False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().isdigit()


def _flag(value):
    """Read a DataTables boolean attribute ("true"/"false" or bool)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in ("false", "0", "")


class Column:
    """
    One output column.

    Attributes:
        name: Column name in the wrapped query (alias where given)
        formatter: Callable(row, name) producing the output value
        searchable: Whether global/individual search may use this column
        orderable: Whether the client may order by this column
        visible: Whether the column appears in output rows
        interactive: False for columns added in Python only; such
            columns have no SQL counterpart and are never searched or ordered
        data: Display key from the request ("columns[i][data]")
        search_value: Per-column search text from the request
    """

    def __init__(self, name, formatter=None, searchable=True, orderable=True, interactive=True):
        self.name = name
        self.formatter = formatter or default_formatter
        self.searchable = searchable
        self.orderable = orderable
        self.interactive = interactive
        self.visible = True
        self.reset()

    def reset(self):
        """Forget attributes bound from a previous request."""
        self.data = None
        self.search_value = None
        self.request_searchable = None
        self.request_orderable = None

    def bind(self, attrs):
        """Bind one request column entry ({data, searchable, orderable, search})."""
        self.data = attrs.get("data")
        self.request_searchable = _flag(attrs.get("searchable"))
        self.request_orderable = _flag(attrs.get("orderable"))

        search = attrs.get("search") or {}
        value = search.get("value") if isinstance(search, dict) else None
        self.search_value = str(value) if value not in (None, "") else None

    def hide(self):
        self.visible = False

    def is_searchable(self):
        return self.interactive and self.searchable and self.request_searchable is not False

    def is_orderable(self):
        return self.interactive and self.orderable and self.request_orderable is not False

    @property
    def display_key(self):
        """The request's display key, defaulting to the column name."""
        if self.data is None or self.data == "":
            return self.name
        return self.data

    def is_positional(self):
        return is_numeric_key(self.display_key)

    def value(self, row):
        return self.formatter(row, self.name)

    def __repr__(self):
        return f"<Column {self.name!r}>"


class ColumnCollection:
    """
    Ordered registry of the columns of one table.

    Example:
        columns = ColumnCollection(["id", "name", "email"])
        columns.add("link", lambda row, name: f"/users/{row['id']}")
        columns.hide("email")
        [c.name for c in columns.visible()]   # ['id', 'name', 'link']
        columns.get_by_index(2).name          # 'email'
    """

    def __init__(self, names=()):
        self.columns = []
        self._by_name = {}
        for name in names:
            self._append(Column(name))

    def _append(self, column):
        if column.name in self._by_name:
            raise DuplicateColumnName(column.name)
        self.columns.append(column)
        self._by_name[column.name] = column
        return column

    def __iter__(self):
        return iter(self.columns)

    def __len__(self):
        return len(self.columns)

    def add(self, name, formatter):
        """Register an output-only column computed by `formatter`."""
        return self._append(Column(name, formatter, interactive=False))

    def edit(self, name, formatter):
        """Replace the formatter of an existing column."""
        column = self.get(name)
        column.formatter = formatter
        return column

    def hide(self, *names):
        """
        Hide columns from output rows.

        Accepts names as arguments or as a single list: hide("a", "b")
        and hide(["a", "b"]) are equivalent. Every name is checked
        before any column is hidden.
        """
        if len(names) == 1 and isinstance(names[0], (list, tuple, set)):
            names = tuple(names[0])

        columns = [self.get(name) for name in names]
        for column in columns:
            column.hide()

    def get(self, name):
        try:
            return self._by_name[name]
        except KeyError:
            raise ColumnNotFound(name) from None

    def get_by_index(self, index):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Column index must be an integer, got {type(index).__name__}")
        if index < 0 or index >= len(self.columns):
            raise IndexOutOfRange(index, len(self.columns))
        return self.columns[index]

    def names(self):
        return [column.name for column in self.columns]

    def searchable(self):
        """Columns taking part in global search."""
        return [column for column in self.columns if column.is_searchable()]

    def searchable_with_value(self):
        """Searchable columns that carry a per-column search value."""
        return [column for column in self.columns if column.is_searchable() and column.search_value]

    def visible(self):
        """Columns shown in output rows, in definition order."""
        return [column for column in self.columns if column.visible]

    def bind(self, request_columns):
        """
        Bind request column attributes to columns.

        An entry whose "name" matches a defined column binds to that
        column; any other entry binds by its position. Entries past the
        last column are ignored.

        Args:
            request_columns: List of dicts as sent in "columns[i]"
        """
        for column in self.columns:
            column.reset()

        for index, attrs in enumerate(request_columns or []):
            if not isinstance(attrs, dict):
                continue
            column = self._by_name.get(attrs.get("name") or None)
            if column is None:
                if index >= len(self.columns):
                    continue
                column = self.columns[index]
            column.bind(attrs)
