"""Storage error hierarchy.

"Not found" is never an error: adapters return ``None`` for absent
items.  These exceptions cover backend I/O failures only, so callers can
offer a retry without having to tell them apart from bad input.
"""


class StorageError(Exception):
    """Base error for storage backend failures."""


class StorageUnavailableError(StorageError):
    """The storage medium could not be read or written."""


class CorruptDataError(StorageError):
    """A stored document could not be decoded."""
