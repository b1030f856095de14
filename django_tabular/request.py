"""
Django-Tabular Request Parameters

Reads the DataTables server-side parameters from a Django request or a
plain mapping.

DataTables sends nested parameters in bracket notation:

    draw=3&start=20&length=10&search[value]=jo
    &columns[0][data]=id&columns[0][search][value]=
    &order[0][column]=1&order[0][dir]=asc

which is decoded into:

    {
        "draw": "3", "start": "20", "length": "10",
        "search": {"value": "jo"},
        "columns": [{"data": "id", "search": {"value": ""}}],
        "order": [{"column": "1", "dir": "asc"}],
    }
"""

import json
import re

_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")
MAX_INDEX_GAP = 1024


def coerce_int(value, default=0):
    """
    Convert a request value to int, falling back to `default`.

    Examples:
        >>> coerce_int("20")
        20
        >>> coerce_int("7.9")
        7
        >>> coerce_int("abc")
        0
        >>> coerce_int(None, 10)
        10
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _split_key(key):
    match = _KEY_RE.match(key)
    if not match:
        return [key]
    return [match.group(1)] + _SEGMENT_RE.findall(match.group(2))


def _listify(value):
    """
    Turn dicts keyed only by integers ("0", "1", ...) into lists.

    Positions are kept: missing indices become None. Very sparse indices
    are compacted instead of allocating the gap.
    """
    if isinstance(value, dict):
        value = {key: _listify(item) for key, item in value.items()}
        if value and all(str(key).isdigit() for key in value):
            items = {int(key): item for key, item in value.items()}
            size = max(items) + 1
            if size > len(items) + MAX_INDEX_GAP:
                return [items[key] for key in sorted(items)]
            return [items.get(i) for i in range(size)]
        return value
    if isinstance(value, list):
        return [_listify(item) for item in value]
    return value


def parse_bracketed(items):
    """
    Decode bracket-notation parameters into nested dicts and lists.

    Args:
        items: Iterable of (key, value) pairs, e.g. QueryDict.items()

    Returns:
        Nested dict

    Examples:
        >>> parse_bracketed([("search[value]", "jo"), ("order[0][dir]", "asc")])
        {'search': {'value': 'jo'}, 'order': [{'dir': 'asc'}]}
    """
    result = {}

    for key, value in items:
        parts = _split_key(str(key))
        current = result
        for part in parts[:-1]:
            if part == "":
                part = str(len(current))
            nxt = current.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                current[part] = nxt
            current = nxt
        last = parts[-1]
        if last == "":
            last = str(len(current))
        current[last] = value

    return _listify(result)


def params_from_django(request):
    """
    Extract DataTables parameters from a Django HttpRequest.

    JSON bodies are used as-is; form-encoded POST data and query strings
    are decoded from bracket notation.
    """
    content_type = getattr(request, "content_type", "") or ""

    if request.method == "POST" and content_type.startswith("application/json"):
        try:
            body = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            body = {}
        return body if isinstance(body, dict) else {}

    source = request.POST if request.method == "POST" else request.GET
    return parse_bracketed(source.items())


class TableRequest:
    """
    The request fields the table pipeline reads.

    Example:
        params = TableRequest.from_django(request)
        params.draw          # 3
        params.search_value  # "jo"
        params.order         # [{"column": "1", "dir": "asc"}]
    """

    def __init__(self, params=None):
        self.params = parse_bracketed((params or {}).items())

    @classmethod
    def from_django(cls, request):
        return cls(params_from_django(request))

    @classmethod
    def coerce(cls, request):
        """Build a TableRequest from a TableRequest, HttpRequest, mapping or None."""
        if isinstance(request, cls):
            return request
        if request is None:
            return cls()
        if hasattr(request, "method") and hasattr(request, "GET"):
            return cls.from_django(request)
        return cls(request)

    def get(self, key, default=None):
        return self.params.get(key, default)

    @property
    def draw(self):
        """Draw token as an integer (0 when missing or invalid)."""
        return coerce_int(self.params.get("draw"))

    def has_draw(self):
        value = self.params.get("draw")
        return value is not None and value is not False and str(value).strip() not in ("", "0")

    @property
    def start(self):
        return self.params.get("start")

    @property
    def length(self):
        return self.params.get("length")

    @property
    def search_value(self):
        search = self.params.get("search")
        if isinstance(search, dict):
            value = search.get("value")
        else:
            value = search
        return None if value is None else str(value)

    @property
    def columns(self):
        # Positions matter: entries are bound to columns by index.
        columns = self.params.get("columns") or []
        return columns if isinstance(columns, list) else []

    @property
    def order(self):
        order = self.params.get("order") or []
        return [item for item in order if isinstance(item, dict)] if isinstance(order, list) else []
