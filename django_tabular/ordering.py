"""
Django-Tabular Ordering

Builds the ORDER BY clause of a table query from the request's
"order" directives.

Directives with an unknown direction, a bad column index, or a column
that is not orderable are dropped; the remaining ones are applied in
the order the client sent them. Without any, the statement's own ORDER BY
is restated on the outer query, or the first column is used.
"""

import logging

from django_tabular.exceptions import IndexOutOfRange
from django_tabular.request import coerce_int

logger = logging.getLogger("django_tabular")

DIRECTIONS = ("asc", "desc")


def valid_orders(order, columns):
    """
    Resolve order directives to (column, direction) pairs.

    Args:
        order: List of {"column": index, "dir": "asc"|"desc"}
        columns: ColumnCollection

    Returns:
        List of (Column, direction) tuples
    """
    valid = []

    for item in order or []:
        direction = str(item.get("dir") or "").strip().lower()
        if direction not in DIRECTIONS:
            logger.debug(f"Dropping order directive with direction {item.get('dir')!r}")
            continue

        index = coerce_int(item.get("column"), None)
        if index is None:
            logger.debug(f"Dropping order directive with column {item.get('column')!r}")
            continue

        try:
            column = columns.get_by_index(index)
        except IndexOutOfRange:
            logger.debug(f"Dropping order directive for column index {index}: out of range")
            continue

        if not column.is_orderable():
            logger.debug(f"Dropping order directive for column '{column.name}': not orderable")
            continue

        valid.append((column, direction))

    return valid


def build_order_by(order, columns, db, default_order=None):
    """
    Build the ORDER BY clause.

    When no directive survives, the statement's own order is used if it
    has one; otherwise rows are ordered by the first column ascending.

    Args:
        order: List of order directives from the request
        columns: ColumnCollection
        db: Database adapter used to quote column names
        default_order: The statement's ORDER BY as (name, direction)
            pairs, see Query.default_order(). None when it has none; an
            empty list adds no clause.

    Returns:
        " ORDER BY ..." or ""

    Examples:
        >>> build_order_by([{"column": "1", "dir": "desc"}], columns, db)
        ' ORDER BY "name" desc'
        >>> build_order_by([], columns, db)
        ' ORDER BY "id" asc'
        >>> build_order_by([], columns, db, [("name", "desc")])
        ' ORDER BY "name" desc'
    """
    terms = [(column.name, direction) for column, direction in valid_orders(order, columns)]

    if not terms:
        if default_order is not None:
            terms = default_order
        else:
            terms = [(columns.get_by_index(0).name, "asc")]

    if not terms:
        return ""
    return " ORDER BY " + ",".join(f"{db.quote_name(name)} {direction}" for name, direction in terms)
