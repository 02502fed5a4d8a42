"""Root test configuration: raw Notion payload factories and a fake page source"""

import pytest


def _rich(text: str, href: str = None, **annotations) -> dict:
    return {
        "type": "text",
        "plain_text": text,
        "href": href,
        "annotations": {
            "bold": False, "italic": False, "code": False,
            "strikethrough": False, "underline": False, "color": "default",
            **annotations,
        },
    }


class FakeSource:
    """In-memory stand-in for NotionSource.

    pages: list of raw page dicts (listing order)
    blocks: page id -> list of raw block dicts
    fail_blocks: page ids whose block fetch raises
    """

    def __init__(self, pages=None, blocks=None, fail_blocks=(), fail_listing=False):
        self.pages = list(pages or [])
        self.blocks = dict(blocks or {})
        self.fail_blocks = set(fail_blocks)
        self.fail_listing = fail_listing
        self.block_calls: list[str] = []

    def published_pages(self) -> list[dict]:
        if self.fail_listing:
            raise ConnectionError("notion unavailable")
        return list(self.pages)

    def block_children(self, block_id: str) -> list[dict]:
        self.block_calls.append(block_id)
        if block_id in self.fail_blocks:
            raise ConnectionError(f"blocks unavailable for {block_id}")
        return list(self.blocks.get(block_id, []))


@pytest.fixture(name="rich")
def rich_fixture():
    """Factory for a single raw rich-text object."""
    return _rich


@pytest.fixture(name="make_block")
def make_block_fixture():
    """Factory for a raw Notion block: make_block('paragraph', 'text', **payload)."""
    def _make(block_type: str, text: str = None, **payload) -> dict:
        data = dict(payload)
        if text is not None:
            data["rich_text"] = [_rich(text)]
        return {"object": "block", "type": block_type, block_type: data}
    return _make


@pytest.fixture(name="make_page")
def make_page_fixture():
    """Factory for a raw Notion page with common blog properties."""
    def _make(
        notion_id: str,
        title: str = "Hello",
        date: str | None = "2024-03-01",
        slug: str | None = None,
        tags: list[str] = (),
        **extra,
    ) -> dict:
        props = {"Title": {"type": "title", "title": [_rich(title)]}}
        if date is not None:
            props["Publish Date"] = {"type": "date", "date": {"start": date}}
        if slug is not None:
            props["Slug"] = {"type": "rich_text", "rich_text": [_rich(slug)]}
        if tags:
            props["Tags"] = {"type": "multi_select", "multi_select": [{"name": t} for t in tags]}
        props.update(extra)
        return {"object": "page", "id": notion_id, "properties": props}
    return _make


@pytest.fixture(name="fake_source")
def fake_source_fixture():
    """Factory for a FakeSource."""
    return FakeSource
