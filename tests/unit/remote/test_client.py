"""Unit tests for remote/client.py"""

from types import SimpleNamespace

import pytest

from mdsync.config import Settings
from mdsync.remote.client import NotionSource, fetch_all


class PagedEndpoint:
    """Serves a fixed item list in cursor pages and records each call."""

    def __init__(self, items: list, per_page: int):
        self.items = items
        self.per_page = per_page
        self.calls: list[dict] = []

    def __call__(self, **kwargs) -> dict:
        self.calls.append(kwargs)
        start = int(kwargs.get("start_cursor") or 0)
        end = start + self.per_page
        has_more = end < len(self.items)
        return {
            "object": "list",
            "results": self.items[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }


@pytest.mark.parametrize("per_page", [1, 2, 3, 7, 100])
def test_fetch_all_concatenates_pages_in_order(per_page):
    """A listing split across N cursor pages yields the same ordered items as one page."""
    items = [{"id": str(i)} for i in range(7)]
    endpoint = PagedEndpoint(items, per_page)
    assert fetch_all(endpoint) == items
    assert len(endpoint.calls) == -(-len(items) // per_page)


def test_fetch_all_passes_previous_cursor():
    endpoint = PagedEndpoint([{"id": "a"}, {"id": "b"}, {"id": "c"}], per_page=1)
    fetch_all(endpoint, block_id="p1")
    assert [c.get("start_cursor") for c in endpoint.calls] == [None, "1", "2"]
    assert all(c["block_id"] == "p1" for c in endpoint.calls)


def test_fetch_all_empty_listing():
    assert fetch_all(PagedEndpoint([], per_page=10)) == []


def test_fetch_all_propagates_errors():
    """No retry: a failing call surfaces to the caller."""
    def boom(**kwargs):
        raise ConnectionError("down")
    with pytest.raises(ConnectionError):
        fetch_all(boom)


@pytest.fixture(name="client")
def client_fixture():
    """Object shaped like notion_client.Client with paged endpoints."""
    return SimpleNamespace(
        databases=SimpleNamespace(query=PagedEndpoint([{"id": "p1"}, {"id": "p2"}], per_page=1)),
        blocks=SimpleNamespace(children=SimpleNamespace(list=PagedEndpoint([{"type": "divider"}], per_page=5))),
    )


def test_published_pages_filters_by_status(client):
    source = NotionSource(client, "db1", status_property="State", status_value="Live")
    assert source.published_pages() == [{"id": "p1"}, {"id": "p2"}]
    call = client.databases.query.calls[0]
    assert call["database_id"] == "db1"
    assert call["filter"] == {"property": "State", "select": {"equals": "Live"}}


def test_block_children_uses_page_size(client):
    source = NotionSource(client, "db1", page_size=50)
    assert source.block_children("p1") == [{"type": "divider"}]
    call = client.blocks.children.list.calls[0]
    assert call["block_id"] == "p1"
    assert call["page_size"] == 50


def test_from_settings_builds_authenticated_client():
    settings = Settings(notion_token="secret_x", database_id="db9", status_value="Live", page_size=10)
    source = NotionSource.from_settings(settings)
    assert source.database_id == "db9"
    assert source.status_value == "Live"
    assert source.page_size == 10
    assert hasattr(source.client, "databases")
