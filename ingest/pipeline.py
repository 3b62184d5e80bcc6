"""
BookmarkShelf v1 - Ingest Pipeline

decode -> extract (per root) -> concatenate -> initialize store -> upsert
-> query. Any failure aborts the whole run; nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .chrome_parser import BookmarkRecord, ChromeParser
from .db import DEFAULT_BATCH_SIZE, UpsertResult, open_store

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """Outcome of a full ingest run"""
    source_path: Path
    db_path: Path
    extracted: int = 0
    upsert: UpsertResult = field(default_factory=UpsertResult)
    stored: list[BookmarkRecord] = field(default_factory=list)


def run_ingest(
    source_path: str | Path,
    db_path: str | Path,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> IngestResult:
    """
    Rebuild the store at db_path from the bookmarks file at source_path.

    Args:
        source_path: Chromium ``Bookmarks`` JSON file
        db_path: Store file; replaced if it exists
        batch_size: Records per upsert transaction

    Returns:
        IngestResult including every stored record

    Raises:
        BookmarkError subclasses from the parser or the store
    """
    result = IngestResult(source_path=Path(source_path), db_path=Path(db_path))

    records = ChromeParser(source_path).parse()
    result.extracted = len(records)
    logger.info(f"Extracted {len(records)} bookmarks from {source_path}")

    with open_store(db_path) as store:
        result.upsert = store.upsert(records, batch_size=batch_size)
        result.stored = store.query_all()

    logger.info(f"Store {db_path} now holds {len(result.stored)} bookmarks")
    return result
