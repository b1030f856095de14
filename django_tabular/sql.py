"""
Django-Tabular Query Model

Holds the caller's SELECT statement and the SQL assembled from it.

The caller's statement is wrapped as a derived table so that column
aliases and computed expressions can be filtered and ordered by name:

    SELECT u.id, u.name, COUNT(o.id) AS orders FROM users u ...
    -> SELECT * FROM (SELECT u.id, u.name, COUNT(o.id) AS orders ...) t

Generated clauses refer to the derived table's columns by quoted name.
A derived table carries no row order of its own, so the statement's
ORDER BY is repeated on the outer query in terms of those names.

Column names and the statement's ORDER BY are read with sqlparse.
"""

import logging
import re

import sqlparse
from sqlparse import sql as sqlgroups
from sqlparse import tokens as T

from django_tabular.exceptions import QueryParseError

logger = logging.getLogger("django_tabular")

# Keywords closing an ORDER BY clause
ORDER_BY_END = ("LIMIT", "OFFSET", "FETCH", "FOR")

_DIRECTION_RE = re.compile(r"\s+(ASC|DESC)$", re.IGNORECASE)
_DOTTED_NAME_RE = re.compile(r'^[\w$"`\[\]]+(?:\s*\.\s*[\w$"`\[\]]+)+$')
_QUOTE_CHARS_RE = re.compile(r'["`\[\]]')


def _parse_statement(text):
    statements = [stmt for stmt in sqlparse.parse(text) if str(stmt).strip()]
    if not statements:
        raise QueryParseError("Query is empty")
    return statements[0]


def _is_noise(token):
    return token.is_whitespace or isinstance(token, sqlgroups.Comment) or token.ttype in T.Comment


def _select_list(statement):
    """Return the token holding the SELECT list of a statement."""
    seen_select = False
    for token in statement.tokens:
        if _is_noise(token):
            continue
        if not seen_select:
            if token.ttype is T.DML and token.normalized == "SELECT":
                seen_select = True
            continue
        if token.ttype is T.Keyword and token.normalized in ("DISTINCT", "ALL"):
            continue
        if token.ttype is T.Keyword and token.normalized == "FROM":
            break
        return token
    raise QueryParseError("Query has no SELECT list")


def _column_name(token):
    """
    Name under which a SELECT item is visible to the enclosing query.

    Examples:
        u.name               -> name
        COUNT(o.id) AS total -> total
        price * qty          -> price * qty

    An unaliased expression is named after its own text and referred to
    as a quoted identifier ("price * qty") in generated clauses. SQLite
    and MySQL name the derived column the same way; other engines need
    an alias.
    """
    if token.ttype is T.Wildcard or (isinstance(token, sqlgroups.Identifier) and token.is_wildcard()):
        raise QueryParseError("Cannot derive column names from a '*' select list; pass columns explicitly")

    if isinstance(token, sqlgroups.TokenList):
        alias = token.get_alias()
        if alias:
            return alias

    if isinstance(token, sqlgroups.Identifier):
        name = token.get_real_name()
        if name:
            return name

    return str(token).strip()


def _expression_text(token):
    """Text of a SELECT item without its alias."""
    if not isinstance(token, sqlgroups.TokenList) or not token.get_alias():
        return str(token).strip()

    idx, _ = token.token_next_by(m=(T.Keyword, "AS"))
    if idx is None:
        # "expression alias"
        idx, _ = token.token_prev(len(token.tokens))
    return "".join(str(t) for t in token.tokens[:idx]).strip()


def _select_items(text):
    select_list = _select_list(_parse_statement(text))

    if isinstance(select_list, sqlgroups.IdentifierList):
        return [token for token in select_list.get_identifiers() if not _is_noise(token)]
    return [select_list]


def parse_columns(text):
    """
    Parse the column names of a SELECT statement, in select-list order.

    Args:
        text: SQL SELECT statement

    Returns:
        List of column names (aliases where given)

    Raises:
        QueryParseError: If the statement has no SELECT list or uses '*'

    Examples:
        >>> parse_columns("SELECT id, name, email FROM users")
        ['id', 'name', 'email']
        >>> parse_columns("SELECT u.id, COUNT(o.id) AS orders FROM users u JOIN orders o ON o.user_id = u.id")
        ['id', 'orders']
    """
    return [_column_name(token) for token in _select_items(text)]


def _top_level_tokens(tokens):
    # Parenthesis groups hold subqueries and window specs, which do not order the result.
    for token in tokens:
        if isinstance(token, sqlgroups.Parenthesis):
            continue
        yield token
        if token.is_group:
            yield from _top_level_tokens(token.tokens)


def _find_order_by(statement):
    for token in _top_level_tokens(statement.tokens):
        if token.ttype is T.Keyword and token.normalized.split() == ["ORDER", "BY"]:
            return token
    return None


def has_order_by(text):
    """
    Whether a statement orders its own result with a top-level ORDER BY.

    Examples:
        >>> has_order_by("SELECT id FROM users ORDER BY id DESC")
        True
        >>> has_order_by("SELECT id FROM (SELECT id FROM users ORDER BY id) t")
        False
    """
    return _find_order_by(_parse_statement(text)) is not None


def parse_order_by(text):
    """
    Split the top-level ORDER BY of a statement into (expression, direction) terms.

    Returns:
        List of (expression text, "asc"|"desc") tuples; empty when the
        statement has no ORDER BY

    Examples:
        >>> parse_order_by("SELECT id, name FROM users ORDER BY name DESC, id")
        [('name', 'desc'), ('id', 'asc')]
        >>> parse_order_by("SELECT id FROM users ORDER BY COALESCE(a, b) LIMIT 5")
        [('COALESCE(a, b)', 'asc')]
    """
    order_by = _find_order_by(_parse_statement(text))
    if order_by is None:
        return []

    parent = order_by.parent
    parts, current, depth = [], [], 0

    for token in parent.tokens[parent.token_index(order_by) + 1:]:
        if token.ttype is T.Keyword and token.normalized in ORDER_BY_END:
            break
        if token.match(T.Punctuation, ";"):
            break
        for leaf in token.flatten():
            if leaf.match(T.Punctuation, "("):
                depth += 1
            elif leaf.match(T.Punctuation, ")"):
                depth -= 1
            elif depth == 0 and leaf.match(T.Punctuation, ","):
                parts.append("".join(current))
                current = []
                continue
            current.append(leaf.value)
    parts.append("".join(current))

    terms = []
    for part in parts:
        part = part.strip()
        if not part:
            continue
        match = _DIRECTION_RE.search(part)
        if match:
            terms.append((part[: match.start()].strip(), match.group(1).lower()))
        else:
            terms.append((part, "asc"))
    return terms


def _normalize(text):
    return " ".join(_QUOTE_CHARS_RE.sub("", text).lower().split())


class Query:
    """
    SQL for one table request.

    Attributes:
        bare: The caller's SELECT statement
        base: The statement wrapped as a derived table; counts and
            WHERE/ORDER BY/LIMIT clauses are applied to this
        full: base plus the generated clauses, set when the table runs
        columns: Column names read from the SELECT list
    """

    def __init__(self, text, columns=None):
        self.bare = text.strip().rstrip(";").rstrip()
        self.base = f"SELECT * FROM ({self.bare}) t"
        self.full = None

        if columns is not None:
            self.columns = list(columns)
            self._expressions = list(self.columns)
        else:
            items = _select_items(self.bare)
            self.columns = [_column_name(token) for token in items]
            self._expressions = [_expression_text(token) for token in items]

        self._has_default_order = None
        self._default_order = None

    def has_default_order(self):
        """Whether the caller's statement already declares an ORDER BY."""
        if self._has_default_order is None:
            self._has_default_order = has_order_by(self.bare)
        return self._has_default_order

    def resolve_order_term(self, expression):
        """
        Output column name an ORDER BY expression of the statement refers to.

        Matches a 1-based position, an output name, a select-list
        expression or a qualified name such as u.name. Returns None when
        the expression is not one of the output columns.
        """
        if expression.isdigit():
            position = int(expression) - 1
            if 0 <= position < len(self.columns):
                return self.columns[position]
            return None

        wanted = _normalize(expression)
        for name, text in zip(self.columns, self._expressions):
            if wanted in (_normalize(name), _normalize(text)):
                return name

        if _DOTTED_NAME_RE.match(expression):
            last = wanted.rsplit(".", 1)[-1].strip()
            for name in self.columns:
                if last == _normalize(name):
                    return name

        return None

    def default_order(self):
        """
        The statement's ORDER BY as (column name, direction) pairs.

        Returns None when the statement has no ORDER BY. When a term
        does not name an output column the order cannot be restated on
        the derived table and an empty list is returned.
        """
        if not self.has_default_order():
            return None

        if self._default_order is None:
            resolved = []
            for expression, direction in parse_order_by(self.bare):
                name = self.resolve_order_term(expression)
                if name is None:
                    logger.debug(f"Default order term {expression!r} is not an output column")
                    resolved = []
                    break
                resolved.append((name, direction))
            self._default_order = resolved

        return list(self._default_order)

    def __str__(self):
        return self.full if self.full is not None else self.base
