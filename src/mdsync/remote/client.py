"""Paginated access to the Notion published-page listing and block children"""

from typing import Any, Callable

from notion_client import Client
from notion_client.helpers import iterate_paginated_api


def fetch_all(list_fn: Callable[..., dict], **kwargs: Any) -> list[dict]:
    """Follow next_cursor until has_more is false; return all results in order."""
    return list(iterate_paginated_api(list_fn, **kwargs))


class NotionSource:
    """Published pages and their child blocks from one Notion database."""

    def __init__(
        self,
        client: Client,
        database_id: str,
        status_property: str = "Status",
        status_value: str = "Published",
        page_size: int = 100,
        ):
        self.client = client
        self.database_id = database_id
        self.status_property = status_property
        self.status_value = status_value
        self.page_size = page_size

    @classmethod
    def from_settings(cls, settings) -> "NotionSource":
        """Build a source with an authenticated client from loaded Settings."""
        return cls(
            Client(auth=settings.notion_token),
            settings.database_id,
            settings.status_property,
            settings.status_value,
            settings.page_size,
        )

    def published_pages(self) -> list[dict]:
        """Return every page whose status select equals the published value."""
        return fetch_all(
            self.client.databases.query,
            database_id=self.database_id,
            filter={"property": self.status_property, "select": {"equals": self.status_value}},
        )

    def block_children(self, block_id: str) -> list[dict]:
        """Return the direct child blocks of a page or block (no recursion)."""
        return fetch_all(self.client.blocks.children.list, block_id=block_id, page_size=self.page_size)
