"""
Django-Tabular Pagination

Builds the LIMIT/OFFSET clause of a table query.

No LIMIT is applied when the client asks for all rows (length=-1) or
when the request carries no draw token, which marks a call that is not
coming from a paging widget.
"""

from django_tabular.conf import tabular_settings
from django_tabular.request import coerce_int

UNLIMITED = -1


def page_bounds(request):
    """
    Resolve the requested page.

    Args:
        request: TableRequest

    Returns:
        Tuple of (start, length); length is None when all rows are wanted

    Examples:
        >>> page_bounds(TableRequest({"draw": "1", "start": "20", "length": "10"}))
        (20, 10)
        >>> page_bounds(TableRequest({"draw": "1", "start": "abc", "length": "-1"}))
        (0, None)
    """
    default_length = tabular_settings.DEFAULT_LENGTH

    start = max(coerce_int(request.start), 0)
    length = coerce_int(request.length, default_length)

    if length == UNLIMITED or not request.has_draw():
        return start, None

    if length <= 0:
        length = default_length

    max_length = tabular_settings.MAX_LENGTH
    if max_length and length > max_length:
        length = max_length

    return start, length


def build_limit(request):
    """Build " LIMIT <length> OFFSET <start>", or "" when unpaginated."""
    start, length = page_bounds(request)
    if length is None:
        return ""
    return f" LIMIT {length} OFFSET {start}"
