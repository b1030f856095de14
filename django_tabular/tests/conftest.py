"""
Pytest configuration for django-tabular tests.
"""

import os
import sys

import pytest

# Add the package root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


USERS = [
    (1, "john", "j@x"),
    (2, "amy", "a@x"),
    (3, "joan", "jo@x"),
]


def pytest_configure():
    """Configure Django settings before tests run."""
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            SECRET_KEY="test-secret-key",
            DEBUG=True,
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django_tabular",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            USE_TZ=True,
            DJANGO_TABULAR={},
        )

    import django

    django.setup()


@pytest.fixture(autouse=True)
def reload_tabular_settings():
    """Drop cached django-tabular settings around each test."""
    from django_tabular.conf import tabular_settings

    tabular_settings.reload()
    yield
    tabular_settings.reload()


def create_users(rows=USERS):
    """Create and fill a `users` table on the default Django connection."""
    from django.db import connection

    with connection.cursor() as cursor:
        cursor.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
        for row in rows:
            cursor.execute("INSERT INTO users (id, name, email) VALUES (%s, %s, %s)", list(row))


@pytest.fixture
def users(db):
    """The three-user table used across pipeline tests."""
    create_users()
    return USERS


@pytest.fixture
def sqlite_db():
    """A DBAPIDatabase on a fresh in-memory sqlite3 connection with `users`."""
    import sqlite3

    from django_tabular.db import DBAPIDatabase

    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
    connection.executemany("INSERT INTO users (id, name, email) VALUES (?, ?, ?)", USERS)
    connection.commit()

    yield DBAPIDatabase(connection, vendor="sqlite")

    connection.close()
