"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings require Supabase credentials at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from copy import deepcopy
from datetime import datetime
from typing import Callable, Generator, Optional
from unittest.mock import patch
from uuid import uuid4

from tests.factories import BUSINESS_ID


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockAPIError(Exception):
    """Stand-in for postgrest APIError: carries the store's message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Chainable query builder over the client's in-memory tables.

    Filters are applied on execute(); inserts, updates and deletes persist.
    """

    def __init__(self, client: "MockSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._op = "select"
        self._payload = None
        self._filters: list[Callable[[dict], bool]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None
        self._count: Optional[str] = None
        self._is_single = False

    # Operations

    def select(self, *args, count: str = None, **kwargs):
        self._op = "select"
        self._count = count
        return self

    def insert(self, data):
        self._op = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._op = "update"
        self._payload = data
        return self

    def delete(self):
        self._op = "delete"
        return self

    # Filters / modifiers

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def range(self, start, end):
        return self

    def single(self):
        self._is_single = True
        return self

    def execute(self) -> MockSupabaseResponse:
        self._client.calls.append((self._table, self._op, deepcopy(self._payload)))
        self._client.raise_if_failing(self._table, self._op, self._payload)

        rows = self._client.rows(self._table)
        matched = [row for row in rows if all(f(row) for f in self._filters)]

        if self._op == "insert":
            return MockSupabaseResponse(data=self._insert(rows))

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
                row["updated_at"] = _now()
            return MockSupabaseResponse(data=deepcopy(matched))

        if self._op == "delete":
            remaining = [row for row in rows if row not in matched]
            rows[:] = remaining
            return MockSupabaseResponse(data=deepcopy(matched))

        if self._order:
            column, desc = self._order
            matched.sort(
                key=lambda r: (r.get(column) is None, r.get(column) or 0),
                reverse=desc
            )
        total = len(matched)
        if self._limit is not None:
            matched = matched[:self._limit]

        data = deepcopy(matched)
        if self._is_single:
            return MockSupabaseResponse(data=data[0] if data else None, count=total)
        return MockSupabaseResponse(data=data, count=total)

    def _insert(self, rows: list) -> list:
        items = self._payload if isinstance(self._payload, list) else [self._payload]
        inserted = []
        for item in items:
            row = {
                "id": str(uuid4()),
                "created_at": _now(),
                "updated_at": _now(),
                **deepcopy(item),
            }
            rows.append(row)
            inserted.append(deepcopy(row))
        return inserted


class MockSupabaseClient:
    """Mock Supabase client with persistent in-memory tables."""

    def __init__(self):
        self._tables: dict[str, list[dict]] = {}
        self._failures: list[tuple[str, str, str, Optional[Callable]]] = []
        self.calls: list[tuple[str, str, object]] = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = deepcopy(data)

    def rows(self, table_name: str) -> list[dict]:
        """Live rows of a table."""
        return self._tables.setdefault(table_name, [])

    def fail_on(
        self,
        table_name: str,
        op: str,
        message: str = "simulated store error",
        when: Optional[Callable[[object], bool]] = None
    ):
        """Make matching operations raise MockAPIError(message)."""
        self._failures.append((table_name, op, message, when))

    def raise_if_failing(self, table_name: str, op: str, payload) -> None:
        for fail_table, fail_op, message, when in self._failures:
            if fail_table == table_name and fail_op == op:
                if when is None or when(payload):
                    raise MockAPIError(message)

    def writes(self, table_name: Optional[str] = None) -> list:
        """Insert/update/delete calls made so far."""
        return [
            call for call in self.calls
            if call[1] != "select" and (table_name is None or call[0] == table_name)
        ]

    def table(self, name: str) -> MockSupabaseQuery:
        return MockSupabaseQuery(self, name)


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


# ===================
# FIXTURES
# ===================

@pytest.fixture(autouse=True)
def reset_process_state():
    """Clear cached views, service singletons and import slots between tests."""
    import services.product_service as product_module
    import services.category_service as category_module
    from services import query_cache_service
    from services import product_import_service

    query_cache_service.clear()
    product_module._product_service = None
    category_module._category_service = None
    product_import_service._active_imports.clear()
    yield
    query_cache_service.clear()
    product_module._product_service = None
    category_module._category_service = None
    product_import_service._active_imports.clear()


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Widget", "business_id": BUSINESS_ID, ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("categories", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.product_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.category_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase


@pytest.fixture
def business_id() -> str:
    return BUSINESS_ID


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            response = test_client_with_mock_db.get(
                "/api/products", headers={"X-Business-Id": BUSINESS_ID}
            )
    """
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)
