"""Front matter serialization, post filenames, and identity token lookup"""

import re

import yaml

from mdsync.core.models import PostMetadata


IDENTITY_KEY = 'notion_id'
IDENTITY_RE = re.compile(rf'^{IDENTITY_KEY}:\s*"?([a-f0-9-]{{36}})"?', re.MULTILINE)


def _quote(value: str) -> str:
    """Return value as a single-line YAML double-quoted scalar.

    Control characters, NEL and line breaks are escaped by the emitter.
    """
    return yaml.safe_dump(value, default_style='"', allow_unicode=True, width=float("inf")).rstrip("\n")


def build_frontmatter(meta: PostMetadata, notion_id: str, layout: str = 'post') -> str:
    """Return the YAML front matter block with fields in a fixed order.

    Optional fields are only emitted when set; notion_id is always last.
    """
    lines = ['---', f"layout: {layout}", f"title: {_quote(meta.title)}",
             f"date: {meta.date.isoformat()}", f"slug: {meta.slug}"]

    if meta.tags:
        lines.append(f"tags: [{', '.join(_quote(t) for t in meta.tags)}]")
    if meta.description:
        lines.append(f"excerpt: {_quote(meta.description)}")
    if meta.cover_image:
        lines.append(f"cover_image: {_quote(meta.cover_image)}")
    if meta.canonical_url:
        lines.append(f"canonical_url: {_quote(meta.canonical_url)}")
    if meta.featured:
        lines.append("featured: true")

    lines.append(f"{IDENTITY_KEY}: {_quote(notion_id)}")
    lines.append('---')
    return '\n'.join(lines)


def compose_post(meta: PostMetadata, notion_id: str, body: str, layout: str = 'post') -> str:
    """Return full file content: front matter, blank line, body, trailing newline."""
    return f"{build_frontmatter(meta, notion_id, layout)}\n\n{body}\n"


def post_filename(meta: PostMetadata) -> str:
    """Return '{date}-{slug}.md' (lowercase)."""
    return f"{meta.date.isoformat()}-{meta.slug}.md".lower()


def read_identity(text: str) -> str | None:
    """Return the notion_id embedded in a post's front matter, or None."""
    m = IDENTITY_RE.search(text)
    return m.group(1) if m else None
