"""Failures raised by the stores.

Every error message is already human-readable (cause + underlying detail)
so that the command bridge can hand ``str(e)`` straight to the caller.
"""
from __future__ import annotations


class StorageError(Exception):
    pass


class PathResolutionError(StorageError):
    """The host could not supply an application data directory."""


class DirectoryCreationError(StorageError):
    """The data directory (or one of its parents) could not be created."""


class SerializationError(StorageError):
    pass


class WriteError(StorageError):
    pass


class ReadError(StorageError):
    pass


class DeserializationError(StorageError):
    """File content is not valid JSON or does not match the record shape."""
