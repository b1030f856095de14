"""
Tests for django_tabular.views module.
"""

import json

import pytest


def make_view_class(**attrs):
    from django_tabular.views import TableQueryView

    return type("UserTableView", (TableQueryView,), attrs)


@pytest.mark.django_db
class TestTableQueryView:
    """Tests for TableQueryView class."""

    def test_get(self, users):
        from django.test import RequestFactory

        view = make_view_class(sql="SELECT id, name, email FROM users").as_view()
        request = RequestFactory().get("/tables/users/", {"draw": "1", "length": "2", "search[value]": "jo"})

        response = view(request)

        assert response.status_code == 200
        assert json.loads(response.content) == {
            "draw": 1,
            "recordsTotal": 3,
            "recordsFiltered": 2,
            "data": [
                {"id": 1, "name": "john", "email": "j@x"},
                {"id": 3, "name": "joan", "email": "jo@x"},
            ],
        }

    def test_post_form(self, users):
        from django.test import RequestFactory

        view = make_view_class(sql="SELECT id, name FROM users").as_view()
        request = RequestFactory().post(
            "/tables/users/",
            {"draw": "2", "order[0][column]": "1", "order[0][dir]": "desc", "length": "1"},
        )

        data = json.loads(view(request).content)

        assert data["draw"] == 2
        assert data["data"] == [{"id": 1, "name": "john"}]

    def test_post_json(self, users):
        from django.test import RequestFactory

        view = make_view_class(sql="SELECT id, name FROM users").as_view()
        body = {"draw": 3, "start": 1, "length": 1, "order": [{"column": 0, "dir": "asc"}]}
        request = RequestFactory().post("/tables/users/", data=json.dumps(body), content_type="application/json")

        data = json.loads(view(request).content)

        assert data["data"] == [{"id": 2, "name": "amy"}]

    def test_configure_hook(self, users):
        from django.test import RequestFactory

        def configure(self, table):
            table.add("link", lambda row, name: f"/users/{row['id']}/")
            table.hide("email")

        view = make_view_class(sql="SELECT id, name, email FROM users", configure=configure).as_view()
        request = RequestFactory().get("/tables/users/", {"draw": "1", "length": "1"})

        data = json.loads(view(request).content)

        assert data["data"] == [{"id": 1, "name": "john", "link": "/users/1/"}]

    def test_explicit_columns_for_select_star(self, users):
        from django.test import RequestFactory

        view = make_view_class(sql="SELECT * FROM users", columns=["id", "name", "email"]).as_view()
        request = RequestFactory().get("/tables/users/", {"draw": "1", "search[value]": "amy"})

        data = json.loads(view(request).content)

        assert data["recordsFiltered"] == 1
        assert data["data"] == [{"id": 2, "name": "amy", "email": "a@x"}]

    def test_missing_sql(self):
        from django.test import RequestFactory

        view = make_view_class().as_view()

        with pytest.raises(NotImplementedError):
            view(RequestFactory().get("/tables/users/"))

    def test_database_alias(self):
        view = make_view_class(using="reporting")()
        assert view.get_database().using == "reporting"


class TestCsrf:
    """Tests for conditional csrf_exempt."""

    def test_csrf_enforced_by_default(self):
        view = make_view_class(sql="SELECT id FROM users").as_view()
        assert getattr(view, "csrf_exempt", False) is False

    def test_csrf_exempt_setting(self, settings):
        from django_tabular.conf import tabular_settings

        settings.DJANGO_TABULAR = {"CSRF_EXEMPT": True}
        tabular_settings.reload()

        view = make_view_class(sql="SELECT id FROM users").as_view()
        assert view.csrf_exempt is True
