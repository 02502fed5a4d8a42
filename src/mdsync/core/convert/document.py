"""Assemble translated blocks into a single Markdown body"""

from mdsync.core.convert.blocks import translate_block
from mdsync.core.models import LIST_KINDS, ContentBlock


def assemble_body(blocks: list[ContentBlock]) -> str:
    """Join blocks with blank lines, keeping consecutive list items adjacent.

    Omitted blocks are skipped entirely and do not break up a list. A block
    rendering to '' still contributes its blank-line separator.
    """
    lines: list[str] = []
    prev_is_list = False

    for block in blocks:
        md = translate_block(block)
        if md is None:
            continue

        is_list = block.kind in LIST_KINDS
        if lines and not (is_list and prev_is_list):
            lines.append('')
        if md:
            lines.append(md)
        prev_is_list = is_list

    return '\n'.join(lines).strip()
