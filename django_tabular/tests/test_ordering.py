"""
Tests for django_tabular.ordering module.
"""


def make_columns(names=("id", "name", "email")):
    from django_tabular.columns import ColumnCollection

    return ColumnCollection(names)


def make_db():
    from django_tabular.db import DatabaseInterface

    return DatabaseInterface()


class TestValidOrders:
    """Tests for valid_orders function."""

    def test_valid_directive(self):
        from django_tabular.ordering import valid_orders

        orders = valid_orders([{"column": "1", "dir": "desc"}], make_columns())
        assert [(c.name, d) for c, d in orders] == [("name", "desc")]

    def test_direction_case_insensitive(self):
        from django_tabular.ordering import valid_orders

        orders = valid_orders([{"column": 2, "dir": "ASC"}], make_columns())
        assert [(c.name, d) for c, d in orders] == [("email", "asc")]

    def test_invalid_entries_dropped(self):
        from django_tabular.ordering import valid_orders

        columns = make_columns()
        columns.get("email").orderable = False

        orders = valid_orders(
            [
                {"column": 0, "dir": "up"},
                {"column": "x", "dir": "asc"},
                {"column": 9, "dir": "asc"},
                {"column": -1, "dir": "asc"},
                {"column": 2, "dir": "asc"},
                {"column": 1, "dir": "asc"},
            ],
            columns,
        )

        assert [(c.name, d) for c, d in orders] == [("name", "asc")]

    def test_request_orderable_false_dropped(self):
        from django_tabular.ordering import valid_orders

        columns = make_columns()
        columns.bind([{"orderable": "false"}])

        assert valid_orders([{"column": 0, "dir": "asc"}], columns) == []


class TestBuildOrderBy:
    """Tests for build_order_by function."""

    def test_directives_in_request_order(self):
        from django_tabular.ordering import build_order_by

        sql = build_order_by([{"column": 2, "dir": "desc"}, {"column": 0, "dir": "asc"}], make_columns(), make_db())
        assert sql == ' ORDER BY "email" desc,"id" asc'

    def test_fallback_to_first_column(self):
        from django_tabular.ordering import build_order_by

        assert build_order_by([], make_columns(), make_db()) == ' ORDER BY "id" asc'

    def test_fallback_when_all_invalid(self):
        from django_tabular.ordering import build_order_by

        assert build_order_by([{"column": 7, "dir": "asc"}], make_columns(), make_db()) == ' ORDER BY "id" asc'

    def test_default_order_restated(self):
        from django_tabular.ordering import build_order_by

        sql = build_order_by([], make_columns(), make_db(), [("name", "desc"), ("id", "asc")])
        assert sql == ' ORDER BY "name" desc,"id" asc'

    def test_unresolved_default_order_adds_nothing(self):
        from django_tabular.ordering import build_order_by

        assert build_order_by([], make_columns(), make_db(), []) == ""

    def test_directives_override_default_order(self):
        from django_tabular.ordering import build_order_by

        sql = build_order_by([{"column": 1, "dir": "asc"}], make_columns(), make_db(), [("id", "desc")])
        assert sql == ' ORDER BY "name" asc'

    def test_hidden_column_orderable_by_index(self):
        from django_tabular.ordering import build_order_by

        columns = make_columns()
        columns.hide("name")

        assert build_order_by([{"column": 2, "dir": "asc"}], columns, make_db()) == ' ORDER BY "email" asc'

    def test_expression_column_quoted(self):
        from django_tabular.ordering import build_order_by

        columns = make_columns(("id", "price * qty"))

        assert build_order_by([{"column": 1, "dir": "desc"}], columns, make_db()) == ' ORDER BY "price * qty" desc'
