"""Pytest configuration for mbx tests."""

import httpx
import pytest

from mbx.cli.api_client import APIError
from mbx.cli.models import Entry
from mbx.constants import BATCH_SIZE


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the user's env, config file and log directory."""
    for name in ("MBX_API", "MBX_USR", "MBX_PWD", "MBX_LOG_LEVEL", "MBX_ENV_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MBX_CONFIG_PATH", str(tmp_path / "missing.yml"))
    monkeypatch.setenv("MBX_LOG_PATH", str(tmp_path / "logs" / "mbx.log"))


def make_entry(n: int) -> Entry:
    return Entry(id=f"id-{n}", sender=f"user{n}@example.com", subject=f"Subject {n}", message=f"Message {n}")


class FakeEntriesAPI:
    """In-memory stand-in for MailboxAPIClient over a list of entries."""

    def __init__(self, entries: list[Entry], batch_size: int = BATCH_SIZE):
        self.entries = list(entries)
        self.batch_size = batch_size
        self.page_calls: list[int] = []
        self.deleted: list[str] = []
        self.delete_error: APIError | None = None
        self.page_errors: dict[int, APIError] = {}

    def list_page(self, page: int) -> tuple[list[Entry], int | None]:
        self.page_calls.append(page)
        if page in self.page_errors:
            raise self.page_errors[page]
        start = page * self.batch_size
        page_count = max(1, -(-len(self.entries) // self.batch_size))
        next_page = page + 1 if page < page_count - 1 else None
        return self.entries[start : start + self.batch_size], next_page

    def delete_entry(self, entry_id: str) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(entry_id)
        self.entries = [e for e in self.entries if e.id != entry_id]


@pytest.fixture
def fake_api():
    """Factory for FakeEntriesAPI with `count` generated entries."""

    def _make(count: int) -> FakeEntriesAPI:
        return FakeEntriesAPI([make_entry(i) for i in range(count)])

    return _make


@pytest.fixture
def mock_transport():
    """Build an httpx.MockTransport that records requests."""

    def _make(handler):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(_record)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return _make
