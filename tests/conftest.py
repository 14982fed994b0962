"""Shared pytest fixtures for portal_db_client tests."""

from __future__ import annotations

pytest_plugins = [
    "tests.fixtures.config",
    "tests.fixtures.http",
    "tests.fixtures.log_state",
]
