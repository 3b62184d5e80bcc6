"""
BookmarkShelf v1 - Ingest Pipeline Tests
"""

import pytest

from ingest.chrome_parser import BookmarkRecord
from ingest.db import BookmarkStore
from ingest.errors import FormatError, NotFoundError
from ingest.pipeline import run_ingest


@pytest.mark.unit
class TestRunIngest:
    """Tests for the full decode -> store run."""

    def test_stores_deduplicated_bookmarks(self, bookmarks_file, db_path):
        """Test that the store holds each url once with its last name."""
        result = run_ingest(bookmarks_file, db_path)

        assert result.extracted == 4
        assert result.upsert.inserted == 3
        assert result.upsert.replaced == 1
        assert {r.url: r.name for r in result.stored} == {
            "https://www.python.org/": "Python again",
            "https://docs.python.org/3/": "Docs",
            "https://pypi.org/": "PyPI",
        }

    def test_rerun_overwrites(self, bookmarks_file, db_path):
        """Test that a second run does not accumulate rows."""
        first = run_ingest(bookmarks_file, db_path)
        second = run_ingest(bookmarks_file, db_path)

        assert first.stored == second.stored

    def test_store_is_readable_after_run(self, bookmarks_file, db_path):
        """Test that the store file is closed and reopenable."""
        run_ingest(bookmarks_file, db_path)

        with BookmarkStore.open(db_path) as store:
            assert store.count() == 3

    def test_missing_source(self, tmp_path, db_path):
        """Test that a missing bookmarks file aborts before touching the store."""
        with pytest.raises(NotFoundError):
            run_ingest(tmp_path / "Bookmarks", db_path)

        assert not db_path.exists()

    def test_malformed_source_keeps_previous_store(self, tmp_path, bookmarks_file, db_path):
        """Test that a decode failure leaves an earlier store untouched."""
        run_ingest(bookmarks_file, db_path)
        broken = tmp_path / "Broken"
        broken.write_text("{", encoding="utf-8")

        with pytest.raises(FormatError):
            run_ingest(broken, db_path)

        with BookmarkStore.open(db_path) as store:
            assert BookmarkRecord(name="PyPI", url="https://pypi.org/") in store.query_all()
