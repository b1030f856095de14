"""
Django-Tabular Filter Utilities

Builds the WHERE clause of a table query from the request's search
terms.

Supports:
- Global search: every word must match at least one searchable column
- Individual search: every column with its own search value must match

Column names and search terms are quoted by the database adapter before
they are placed in SQL.
"""

import re

NON_WORD_RE = re.compile(r"\W+")


def search_words(text):
    """
    Split free search text into words.

    Runs of non-word characters act as separators.

    Examples:
        >>> search_words("alice  bob")
        ['alice', 'bob']
        >>> search_words("o'brien, j.")
        ['o', 'brien', 'j']
    """
    return NON_WORD_RE.sub(" ", text or "").split()


def like(column, value, db):
    """Build `"column" LIKE '%value%'` with name and value quoted by `db`."""
    return f"{db.quote_name(column.name)} LIKE {db.escape(f'%{value}%')}"


def build_global_filter(search_value, columns, db):
    """
    Build the global search condition.

    Args:
        search_value: Free search text from the request
        columns: Columns taking part in global search
        db: Database adapter used to quote terms

    Returns:
        SQL condition, or "" when there is nothing to search

    Example:
        >>> build_global_filter("alice bob", [name, email], db)
        "(\"name\" LIKE '%alice%' OR \"email\" LIKE '%alice%') AND (\"name\" LIKE '%bob%' OR ...)"
    """
    if not search_value or not columns:
        return ""

    groups = []
    for word in search_words(search_value):
        look = [like(column, word, db) for column in columns]
        groups.append("(" + " OR ".join(look) + ")")

    return " AND ".join(groups)


def build_individual_filter(columns, db):
    """
    Build the per-column search condition.

    Args:
        columns: Searchable columns carrying a search value

    Returns:
        SQL condition, or "" when no column has a value

    Example:
        >>> build_individual_filter([name, email], db)
        "(\"name\" LIKE '%jo%' AND \"email\" LIKE '%@x%')"
    """
    if not columns:
        return ""

    look = [like(column, column.search_value, db) for column in columns]
    return "(" + " AND ".join(look) + ")"


def build_where(request, columns, db):
    """
    Build the WHERE clause for a request.

    Args:
        request: TableRequest
        columns: ColumnCollection bound to the request
        db: Database adapter

    Returns:
        " WHERE ..." or "" when no search applies
    """
    conditions = [
        build_global_filter(request.search_value, columns.searchable(), db),
        build_individual_filter(columns.searchable_with_value(), db),
    ]
    conditions = [condition for condition in conditions if condition]

    if conditions:
        return " WHERE " + " AND ".join(conditions)
    return ""
