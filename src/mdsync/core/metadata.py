"""Post metadata extraction from Notion page properties"""

import datetime
from dataclasses import dataclass
from typing import Any, Callable

from mdsync.core.models import PostMetadata
from mdsync.core.utils.slug import slugify


def _read_text(prop: dict) -> str:
    """Plain text of a title or rich_text property."""
    items = prop.get('title') or prop.get('rich_text') or []
    return ''.join(i.get('plain_text') or '' for i in items).strip()


def _read_date(prop: dict) -> str:
    return ((prop.get('date') or {}).get('start') or '').strip()


def _read_tags(prop: dict) -> list[str]:
    # Deduplicated, remote order.
    return list(dict.fromkeys(o['name'] for o in prop.get('multi_select') or [] if o.get('name')))


def _read_file_url(prop: dict) -> str:
    """First file's URL, preferring an external link over a Notion-hosted file."""
    files = prop.get('files') or []
    if not files:
        return ''
    first = files[0]
    return (first.get('external') or {}).get('url') or (first.get('file') or {}).get('url') or ''


def _read_url(prop: dict) -> str:
    return (prop.get('url') or '').strip()


def _read_checkbox(prop: dict) -> bool:
    return bool(prop.get('checkbox'))


@dataclass(frozen=True)
class FieldRule:
    """Accepted property names in priority order, plus a reader for the typed value."""
    names:  tuple[str, ...]
    reader: Callable[[dict], Any]

    def resolve(self, properties: dict[str, dict], default: Any = None) -> Any:
        """Return the first present, non-empty value, else default."""
        for name in self.names:
            prop = properties.get(name)
            if not isinstance(prop, dict):
                continue
            value = self.reader(prop)
            if value:
                return value
        return default


FIELD_RULES: dict[str, FieldRule] = {
    'title':         FieldRule(('Title', 'title', 'Name'), _read_text),
    'slug':          FieldRule(('Slug', 'slug'), _read_text),
    'date':          FieldRule(('Publish Date', 'Date', 'Published'), _read_date),
    'tags':          FieldRule(('Tags', 'tags'), _read_tags),
    'description':   FieldRule(('Description', 'Excerpt', 'Summary'), _read_text),
    'cover_image':   FieldRule(('Cover Image', 'Cover'), _read_file_url),
    'canonical_url': FieldRule(('Canonical URL',), _read_url),
    'featured':      FieldRule(('Featured',), _read_checkbox),
}


def _parse_date(value: str) -> datetime.date:
    """Parse the calendar date from a Notion date start (date or datetime string)."""
    try:
        return datetime.date.fromisoformat(value[:10])
    except ValueError as e:
        raise ValueError(f"Invalid publish date {value!r}") from e


def extract_metadata(
    properties: dict[str, dict],
    today: datetime.date | None = None,
    require_date: bool = False,
    ) -> PostMetadata:
    """Resolve a page's property bag into PostMetadata.

    A missing slug is derived from the title. A missing date falls back to
    `today` (or the current date), unless require_date is set, in which case
    it raises ValueError.
    """
    title = FIELD_RULES['title'].resolve(properties, 'Untitled')
    slug = slugify(FIELD_RULES['slug'].resolve(properties, '')) or slugify(title) or 'untitled'

    raw_date = FIELD_RULES['date'].resolve(properties)
    if raw_date:
        date = _parse_date(raw_date)
    elif require_date:
        raise ValueError(f"Missing publish date for {title!r}")
    else:
        date = today or datetime.date.today()

    return PostMetadata(
        title=title,
        slug=slug,
        date=date,
        tags=FIELD_RULES['tags'].resolve(properties, []),
        description=FIELD_RULES['description'].resolve(properties, ''),
        cover_image=FIELD_RULES['cover_image'].resolve(properties, ''),
        canonical_url=FIELD_RULES['canonical_url'].resolve(properties, ''),
        featured=FIELD_RULES['featured'].resolve(properties, False),
    )
