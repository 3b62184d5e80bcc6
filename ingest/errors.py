"""
BookmarkShelf v1 - Ingest Errors

Exception hierarchy shared by the decoder, the store and the CLI.
Every error wraps its underlying cause (``raise ... from exc``).
"""


class BookmarkError(Exception):
    """Base class for all ingest failures"""


class FormatError(BookmarkError):
    """The bookmarks file does not have the expected nested-object shape"""


class NotFoundError(BookmarkError):
    """An expected source artifact (bookmarks file, store) is absent"""


class StoreIOError(BookmarkError):
    """The store file could not be removed or opened"""


class SchemaError(BookmarkError):
    """The store schema could not be created"""


class QueryError(BookmarkError):
    """A read or write against an opened store failed"""
