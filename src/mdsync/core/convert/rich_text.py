"""Notion rich text to inline Markdown"""

from mdsync.core.models import TextSpan


def parse_rich_text(items: list[dict] | None) -> list[TextSpan]:
    """Convert a Notion rich_text array into TextSpans; missing annotations default to unset."""
    spans = []
    for item in items or []:
        ann = item.get("annotations") or {}
        spans.append(TextSpan(
            text=item.get("plain_text") or "",
            bold=bool(ann.get("bold")),
            italic=bool(ann.get("italic")),
            code=bool(ann.get("code")),
            strikethrough=bool(ann.get("strikethrough")),
            href=item.get("href") or None,
        ))
    return spans


def plain_text(spans: list[TextSpan]) -> str:
    """Concatenate span text with no formatting applied."""
    return "".join(s.text for s in spans)


def format_span(span: TextSpan) -> str:
    """Apply code, emphasis, strikethrough, then link wrapping to a single span."""
    text = span.text
    if not text:
        return ""

    # Order matters: the link is always the outermost layer.
    if span.code:
        text = f"`{text}`"
    if span.bold and span.italic:
        text = f"***{text}***"
    elif span.bold:
        text = f"**{text}**"
    elif span.italic:
        text = f"*{text}*"
    if span.strikethrough:
        text = f"~~{text}~~"
    if span.href:
        text = f"[{text}]({span.href})"
    return text


def format_spans(spans: list[TextSpan]) -> str:
    """Return the concatenated inline Markdown for an ordered list of spans."""
    return "".join(format_span(s) for s in spans)
