"""
Tests for django_tabular.decorators module.
"""

import json

import pytest


@pytest.mark.django_db
class TestDatatable:
    """Tests for datatable decorator."""

    def test_returns_table_response(self, users):
        from django.test import RequestFactory
        from django_tabular.decorators import datatable

        @datatable("SELECT id, name, email FROM users")
        def user_table(request, table):
            table.edit("email", lambda row, name: row[name].upper())
            table.hide("id")

        request = RequestFactory().get("/tables/users/", {"draw": "1", "length": "1"})
        data = json.loads(user_table(request).content)

        assert data == {
            "draw": 1,
            "recordsTotal": 3,
            "recordsFiltered": 3,
            "data": [{"name": "john", "email": "J@X"}],
        }

    def test_view_response_wins(self, users):
        from django.http import HttpResponseForbidden
        from django.test import RequestFactory
        from django_tabular.decorators import datatable

        @datatable("SELECT id, name FROM users")
        def user_table(request, table):
            return HttpResponseForbidden()

        response = user_table(RequestFactory().get("/tables/users/"))

        assert response.status_code == 403

    def test_passes_url_kwargs(self, users):
        from django.test import RequestFactory
        from django_tabular.decorators import datatable

        seen = {}

        @datatable("SELECT id, name FROM users")
        def user_table(request, table, group=None):
            seen["group"] = group
            seen["columns"] = table.get("columns")

        user_table(RequestFactory().get("/tables/users/", {"draw": "1"}), group="staff")

        assert seen == {"group": "staff", "columns": ["id", "name"]}

    def test_preserves_name(self):
        from django_tabular.decorators import datatable

        @datatable("SELECT id FROM users")
        def user_table(request, table):
            """User table."""

        assert user_table.__name__ == "user_table"
        assert user_table.__doc__ == "User table."
