"""Reconcile the published Notion pages against the local post directory"""

import datetime
import logging
from pathlib import Path
from typing import Protocol

from mdsync.core.convert.blocks import parse_block
from mdsync.core.convert.document import assemble_body
from mdsync.core.frontmatter import compose_post, post_filename, read_identity
from mdsync.core.metadata import extract_metadata
from mdsync.core.models import SyncChange, SyncStats
from mdsync.core.utils.diff import unified_diff


logger = logging.getLogger(__name__)


class PageSource(Protocol):
    def published_pages(self) -> list[dict]: ...
    def block_children(self, block_id: str) -> list[dict]: ...


class SyncEngine:
    """One reconciliation pass over a post directory.

    Construct a new engine per invocation; all pass state lives on the
    instance:
      existing       notion_id -> filename, scanned from local front matter
      initial_files  *.md names present before the pass began
      processed      notion_ids seen among this pass's published pages
      claimed        filename -> notion_id written (or kept) during this pass
    """

    def __init__(
        self,
        source: PageSource,
        output_dir: Path,
        *,
        layout: str = 'post',
        require_date: bool = False,
        today: datetime.date | None = None,
        dry_run: bool = False,
        show_diff: bool = False,
        ):
        self.source = source
        self.output_dir = Path(output_dir)
        self.layout = layout
        self.require_date = require_date
        self.today = today
        self.dry_run = dry_run
        self.show_diff = show_diff

        self.existing: dict[str, str] = {}
        self.initial_files: set[str] = set()
        self.processed: set[str] = set()
        self.claimed: dict[str, str] = {}
        self.stats = SyncStats()
        self.changes: list[SyncChange] = []

    def scan(self) -> dict[str, str]:
        """Index local posts by notion_id; unreadable or untagged files are skipped."""
        self.existing = {}
        self.initial_files = set()
        if not self.output_dir.is_dir():
            return self.existing

        for path in sorted(self.output_dir.glob('*.md')):
            self.initial_files.add(path.name)
            try:
                notion_id = read_identity(path.read_text(encoding='utf-8'))
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping unreadable %s: %s", path.name, e)
                continue
            if notion_id:
                self.existing[notion_id] = path.name
            else:
                logger.debug("Skipping %s: no notion_id", path.name)
        return self.existing

    def run(self) -> SyncStats:
        """Run a full pass: process every published page, then remove stale posts.

        Raises RuntimeError if the published-page listing cannot be fetched;
        nothing is reconciled in that case.
        """
        if not self.dry_run:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        self.scan()
        logger.info("Existing posts in %s: %d", self.output_dir, len(self.initial_files))

        try:
            pages = self.source.published_pages()
        except Exception as e:
            raise RuntimeError(f"Error querying Notion database: {e}") from e
        logger.info("Published posts in Notion: %d", len(pages))

        for page in pages:
            self._sync_page(page)
        self._remove_stale()
        return self.stats

    def _record(self, status: str, filename: str, diff: list[str] = None) -> None:
        self.changes.append(SyncChange(status, filename, diff or []))

    def _error(self, label: str, message: str) -> None:
        self.stats.errors += 1
        self._record('error', label)
        logger.error("%s: %s", label, message)

    def _delete(self, filename: str) -> None:
        if not self.dry_run:
            (self.output_dir / filename).unlink()

    def _sync_page(self, page: dict) -> None:
        """Process one published page; any failure is isolated to this page."""
        notion_id = page.get('id')
        if not notion_id:
            self._error('<missing id>', "page record has no id; skipped")
            return
        self.processed.add(notion_id)

        try:
            meta = extract_metadata(page.get('properties') or {}, self.today, self.require_date)
        except Exception as e:
            self._error(notion_id, f"could not read metadata: {e}")
            return

        logger.info('-> "%s"', meta.title)
        try:
            blocks = [parse_block(b) for b in self.source.block_children(notion_id)]
            content = compose_post(meta, notion_id, assemble_body(blocks), self.layout)
            filename = post_filename(meta)

            owner = self.claimed.get(filename)
            if owner is not None and owner != notion_id:
                self._error(filename, f"{notion_id} resolves to the same file as {owner}; skipped")
                return
            self.claimed[filename] = notion_id

            prev = self.existing.get(notion_id)
            # The old name may already have been rewritten by another page this pass.
            if prev and prev != filename and prev not in self.claimed:
                try:
                    self._delete(prev)
                except FileNotFoundError:
                    pass
                except OSError as e:
                    logger.warning("Could not remove %s: %s", prev, e)
                logger.info("renamed: %s -> %s", prev, filename)
                self.stats.renamed += 1
                self._record('renamed', prev)

            path = self.output_dir / filename
            old = path.read_text(encoding='utf-8') if path.exists() else None
            if old == content:
                self.stats.unchanged += 1
                self._record('unchanged', filename)
                return

            if not self.dry_run:
                path.write_text(content, encoding='utf-8')
            if prev is None and filename not in self.initial_files:
                self.stats.created += 1
                self._record('created', filename)
            else:
                self.stats.updated += 1
                diff = unified_diff(old, content, f"a/{filename}", f"b/{filename}") if self.show_diff and old else []
                self._record('updated', filename, diff)
        except Exception as e:
            self._error(meta.title, str(e))

    def _remove_stale(self) -> None:
        """Delete posts whose notion_id is no longer published; failures only warn."""
        for notion_id, filename in self.existing.items():
            if notion_id in self.processed or filename in self.claimed:
                continue
            try:
                self._delete(filename)
            except OSError as e:
                logger.warning("Could not remove %s: %s", filename, e)
                continue
            self.stats.removed += 1
            self._record('removed', filename)
            logger.info("removed (unpublished): %s", filename)
