"""
BookmarkShelf v1 - Test Configuration and Fixtures

Shared fixtures for the unit tests.
"""

import json
from pathlib import Path
from typing import Callable

import pytest

from ingest.models import BookmarkNode

DATE_ADDED = "13311432144000000"


def url_node(node_id: str, name: str, url: str) -> dict:
    """Raw JSON dict for a url node"""
    return {
        "date_added": DATE_ADDED,
        "id": node_id,
        "name": name,
        "type": "url",
        "url": url,
    }


def folder_node(node_id: str, name: str, children: list[dict]) -> dict:
    """Raw JSON dict for a folder node"""
    return {
        "children": children,
        "date_added": DATE_ADDED,
        "date_modified": DATE_ADDED,
        "id": node_id,
        "name": name,
        "type": "folder",
    }


@pytest.fixture
def make_url() -> Callable[..., BookmarkNode]:
    """Build a validated url node"""
    def build(node_id: str, name: str, url: str) -> BookmarkNode:
        return BookmarkNode.model_validate(url_node(node_id, name, url))
    return build


@pytest.fixture
def make_folder() -> Callable[..., BookmarkNode]:
    """Build a validated folder node around already-built children"""
    def build(node_id: str, name: str, children: list[BookmarkNode]) -> BookmarkNode:
        node = BookmarkNode.model_validate(folder_node(node_id, name, []))
        node.children = list(children)
        return node
    return build


@pytest.fixture
def bookmarks_data() -> dict:
    """A small Chromium Bookmarks document covering all three roots"""
    return {
        "checksum": "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
        "roots": {
            "bookmark_bar": folder_node("1", "Bookmarks bar", [
                url_node("2", "Python", "https://www.python.org/"),
                folder_node("3", "Work", [
                    url_node("4", "Docs", "https://docs.python.org/3/"),
                    folder_node("5", "Empty", []),
                ]),
            ]),
            "other": folder_node("6", "Other bookmarks", [
                url_node("7", "PyPI", "https://pypi.org/"),
                url_node("8", "Python again", "https://www.python.org/"),
            ]),
            "synced": folder_node("9", "Mobile bookmarks", []),
        },
        "version": 1,
        "sync_metadata": "ignored",
    }


@pytest.fixture
def bookmarks_file(tmp_path: Path, bookmarks_data: dict) -> Path:
    """bookmarks_data written to disk"""
    path = tmp_path / "Bookmarks"
    path.write_text(json.dumps(bookmarks_data), encoding="utf-8")
    return path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location for a test store"""
    return tmp_path / "bookmarks.db"
