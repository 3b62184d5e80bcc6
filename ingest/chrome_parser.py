"""
BookmarkShelf v1 - Chromium Bookmarks Parser

Decodes the Chromium ``Bookmarks`` JSON file and flattens its folder trees
into an ordered list of bookmark records.

Example tree:
    Bookmarks bar
        - bookmark1
        Work
            - bookmark2
    Other bookmarks
        - bookmark3

flattens to [bookmark1, bookmark2, bookmark3].
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from pydantic import ValidationError

from .errors import FormatError, NotFoundError
from .models import BookmarkFile, BookmarkFolder, BookmarkNode

logger = logging.getLogger(__name__)

# Concatenation order of the root folders
ROOT_ORDER = ("bookmark_bar", "other", "synced")


@dataclass
class BookmarkRecord:
    """A flattened url node, ready for storage. ``url`` is the unique key."""
    name: str
    url: str


def _split_children(raw) -> tuple:
    """Separate a raw node dict from its raw children list"""
    if not isinstance(raw, dict):
        return raw, []
    children = raw.get("children", [])
    if not isinstance(children, list):
        raise FormatError(f"children of node {raw.get('id')!r} is not a list")
    return {k: v for k, v in raw.items() if k != "children"}, children


def _build_children(parent: BookmarkNode, raw_children: list) -> None:
    """
    Validate a raw subtree node by node and attach it under parent.

    Each node is validated without its children, which are filled in from
    an explicit stack, so nesting depth never recurses in pydantic.
    """
    stack = [(parent, raw_children)]
    while stack:
        node, raws = stack.pop()
        for raw in raws:
            fields, grandchildren = _split_children(raw)
            child = BookmarkNode.model_validate(fields)
            node.children.append(child)
            if grandchildren:
                stack.append((child, grandchildren))


def decode(raw: bytes | str) -> BookmarkFile:
    """
    Decode the raw contents of a ``Bookmarks`` file.

    Raises:
        FormatError: on malformed JSON, missing required fields or
            wrong field types
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise FormatError(f"Invalid bookmarks JSON: {e}") from e

    try:
        pending = []
        if isinstance(data, dict) and isinstance(data.get("roots"), dict):
            roots = dict(data["roots"])
            for key in ROOT_ORDER:
                if key in roots:
                    roots[key], raw_children = _split_children(roots[key])
                    pending.append((key, raw_children))
            data = {**data, "roots": roots}

        bookmark_file = BookmarkFile.model_validate(data)
        for key, raw_children in pending:
            _build_children(getattr(bookmark_file.roots, key), raw_children)
    except ValidationError as e:
        raise FormatError(
            f"Invalid bookmarks data ({e.error_count()} errors): {e}"
        ) from e

    return bookmark_file


def iter_bookmarks(nodes: Sequence[BookmarkNode]) -> Iterator[BookmarkRecord]:
    """
    Depth-first, pre-order, left-to-right walk over a sibling sequence.

    Url nodes yield a record and are not descended into. Folders splice in
    the records of their children. Empty folders and unknown node types
    contribute nothing. Duplicate urls are yielded once per leaf.

    Uses an explicit stack of (siblings, next index) frames so that tree
    depth does not grow the interpreter call stack.
    """
    stack: list[tuple[Sequence[BookmarkNode], int]] = [(nodes, 0)]

    while stack:
        siblings, index = stack.pop()
        if index >= len(siblings):
            continue

        node = siblings[index]
        # Resume this level at the next sibling once the node is done
        stack.append((siblings, index + 1))

        if node.is_url:
            yield BookmarkRecord(name=node.name, url=node.url)
        elif node.is_folder and node.children:
            stack.append((node.children, 0))
        elif not node.is_folder:
            logger.debug(f"Skipping node {node.id} of unknown type {node.type!r}")


def extract(nodes: Sequence[BookmarkNode]) -> list[BookmarkRecord]:
    """Flatten a sibling sequence into its ordered list of records"""
    return list(iter_bookmarks(nodes))


def root_folders(bookmark_file: BookmarkFile) -> list[tuple[str, BookmarkFolder]]:
    """The root folders in concatenation order, paired with their key"""
    return [(key, getattr(bookmark_file.roots, key)) for key in ROOT_ORDER]


def collect_bookmarks(bookmark_file: BookmarkFile) -> list[BookmarkRecord]:
    """Extract every root folder and concatenate bar -> other -> synced"""
    records: list[BookmarkRecord] = []
    for key, folder in root_folders(bookmark_file):
        extracted = extract(folder.children)
        logger.debug(f"Root {key}: {len(extracted)} bookmarks")
        records.extend(extracted)
    return records


class ChromeParser:
    """
    Parser for a Chromium ``Bookmarks`` file on disk.

    Reads the whole file, decodes it and flattens the bookmark bar, other
    and synced roots in that order.
    """

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)
        if not self.file_path.is_file():
            raise NotFoundError(f"Bookmarks file not found: {self.file_path}")

    def load(self) -> BookmarkFile:
        """Read and decode the file"""
        logger.info(f"Reading bookmarks from {self.file_path}")
        try:
            raw = self.file_path.read_bytes()
        except OSError as e:
            raise NotFoundError(f"Cannot read bookmarks file {self.file_path}: {e}") from e
        return decode(raw)

    def parse(self) -> list[BookmarkRecord]:
        """
        Parse the bookmarks file and return all bookmarks from every root.

        Returns:
            List of BookmarkRecord objects in traversal order
        """
        return collect_bookmarks(self.load())

    def get_stats(self) -> dict:
        """
        Get statistics about the bookmarks file without storing anything.

        Returns:
            Dictionary with file_path, version, per-root counts and totals
        """
        bookmark_file = self.load()

        roots = []
        total_bookmarks = 0
        for key, folder in root_folders(bookmark_file):
            records = extract(folder.children)
            roots.append({
                "key": key,
                "label": folder.name,
                "count": len(records),
                "unique": len({r.url for r in records}),
            })
            total_bookmarks += len(records)

        return {
            "file_path": str(self.file_path),
            "version": bookmark_file.version,
            "roots": roots,
            "total_bookmarks": total_bookmarks,
        }


def parse_bookmarks_file(file_path: str | Path) -> list[BookmarkRecord]:
    """
    Convenience function to parse a Chromium bookmarks file.

    Args:
        file_path: Path to the ``Bookmarks`` JSON file

    Returns:
        List of BookmarkRecord objects from all roots
    """
    parser = ChromeParser(file_path)
    return parser.parse()
