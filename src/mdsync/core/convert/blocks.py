"""Notion block parsing and block-to-Markdown translation"""

from mdsync.core.convert.rich_text import format_spans, parse_rich_text, plain_text
from mdsync.core.models import BlockKind, ContentBlock


BLOCK_KIND_MAP: dict[str, BlockKind] = {
    'paragraph':          BlockKind.paragraph,
    'heading_1':          BlockKind.heading,
    'heading_2':          BlockKind.heading,
    'heading_3':          BlockKind.heading,
    'bulleted_list_item': BlockKind.bulleted,
    'numbered_list_item': BlockKind.numbered,
    'to_do':              BlockKind.checklist,
    'code':               BlockKind.code,
    'quote':              BlockKind.quote,
    'callout':            BlockKind.callout,
    'divider':            BlockKind.divider,
    'image':              BlockKind.image,
    'video':              BlockKind.video,
    'bookmark':           BlockKind.bookmark,
    'link_preview':       BlockKind.bookmark,
    'toggle':             BlockKind.toggle,
    'table_of_contents':  BlockKind.table_of_contents,
    'child_page':         BlockKind.child,
    'child_database':     BlockKind.child,
}

PLAIN_LANGUAGE = 'plain text'


def _media_url(data: dict) -> str:
    """Resolve a media URL, preferring the external reference over the hosted file."""
    for key in ('external', 'file'):
        url = (data.get(key) or {}).get('url')
        if url:
            return url
    return ''


def _heading_level(block_type: str) -> int | None:
    """Return 1-3 for 'heading_N' block types, else None."""
    if block_type.startswith('heading_') and block_type[-1].isdigit():
        return int(block_type[-1])
    return None


def parse_block(raw: dict) -> ContentBlock:
    """Convert a raw Notion block object into a ContentBlock."""
    block_type = raw.get('type') or ''
    data = raw.get(block_type) or {}
    kind = BLOCK_KIND_MAP.get(block_type, BlockKind.unknown)

    url = ''
    if kind in (BlockKind.image, BlockKind.video):
        url = _media_url(data)
    elif kind == BlockKind.bookmark:
        url = data.get('url') or ''

    icon = data.get('icon') or {}
    return ContentBlock(
        kind=kind,
        type=block_type,
        spans=parse_rich_text(data.get('rich_text')),
        caption=parse_rich_text(data.get('caption')),
        level=_heading_level(block_type),
        checked=bool(data.get('checked')),
        language=data.get('language'),
        icon=icon.get('emoji'),
        url=url,
    )


def _code(block: ContentBlock) -> str:
    lang = block.language if block.language and block.language != PLAIN_LANGUAGE else ''
    fenced = f"```{lang}\n{plain_text(block.spans)}\n```"
    caption = format_spans(block.caption)
    return f"{fenced}\n*{caption}*" if caption else fenced


def translate_block(block: ContentBlock) -> str | None:
    """Return the Markdown for one block, '' for a blank placeholder, or None to omit it.

    Toggle children are not rendered; only the summary line is emitted.
    """
    text = format_spans(block.spans)
    kind = block.kind

    if kind == BlockKind.paragraph:
        return text
    if kind == BlockKind.heading:
        return f"{'#' * (block.level or 1)} {text}"
    if kind == BlockKind.bulleted:
        return f"- {text}"
    if kind == BlockKind.numbered:
        # Every item uses "1."; the Markdown renderer numbers the list.
        return f"1. {text}"
    if kind == BlockKind.checklist:
        return f"- [{'x' if block.checked else ' '}] {text}"
    if kind == BlockKind.code:
        return _code(block)
    if kind == BlockKind.quote:
        return f"> {text}"
    if kind == BlockKind.callout:
        icon = f"{block.icon} " if block.icon else ''
        return f"> {icon}{text}"
    if kind == BlockKind.divider:
        return '---'
    if kind == BlockKind.image:
        return f"![{format_spans(block.caption)}]({block.url})"
    if kind == BlockKind.video:
        caption = format_spans(block.caption)
        return f"[▶ {caption or 'Watch video'}]({block.url})"
    if kind == BlockKind.bookmark:
        return f"[{block.url}]({block.url})"
    if kind == BlockKind.toggle:
        return f"<details>\n<summary>{text}</summary>\n\n</details>"
    if kind == BlockKind.table_of_contents:
        return ''
    return None
