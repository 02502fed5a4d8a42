"""Data models for the Notion to Markdown conversion and sync pipeline"""

from dataclasses import dataclass, field
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BlockKind(str, Enum):
    """Restrict content blocks to the set of kinds the translator understands"""
    paragraph = "paragraph"
    heading = "heading"
    bulleted = "bulleted"
    numbered = "numbered"
    checklist = "checklist"
    code = "code"
    quote = "quote"
    callout = "callout"
    divider = "divider"
    image = "image"
    video = "video"
    bookmark = "bookmark"
    toggle = "toggle"
    table_of_contents = "table_of_contents"
    child = "child"
    unknown = "unknown"


LIST_KINDS = frozenset({BlockKind.bulleted, BlockKind.numbered, BlockKind.checklist})


class TextSpan(BaseModel):
    """A run of rich text with its inline annotations."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    bold: bool = False
    italic: bool = False
    code: bool = False
    strikethrough: bool = False
    href: Optional[str] = None


class ContentBlock(BaseModel):
    """A single typed Notion block, reduced to what the translator needs."""
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    type: str                        # raw Notion block type, e.g. 'heading_2'
    spans: list[TextSpan] = []
    caption: list[TextSpan] = []
    level: Optional[int] = None      # heading level (1-3); None for non-headings
    checked: bool = False
    language: Optional[str] = None
    icon: Optional[str] = None       # callout emoji
    url: str = ""                    # media / bookmark target


class PostMetadata(BaseModel):
    """Canonical post metadata resolved from a page's property bag."""
    title: str = "Untitled"
    slug: str
    date: datetime.date
    tags: list[str] = []
    description: str = ""
    cover_image: str = ""
    canonical_url: str = ""
    featured: bool = False


@dataclass
class SyncStats:
    """Outcome counters for one reconciliation pass."""
    created:   int = 0
    updated:   int = 0
    unchanged: int = 0
    errors:    int = 0
    removed:   int = 0
    renamed:   int = 0


@dataclass
class SyncChange:
    """One action taken (or planned) during a pass, in processing order."""
    status:   str              # created | updated | unchanged | renamed | removed | error
    filename: str
    diff:     list[str] = field(default_factory=list)
