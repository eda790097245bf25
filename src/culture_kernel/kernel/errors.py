"""
Error taxonomy for the catalog kernel.

DecodeError is recovered locally (the record is dropped).
StoreError and InitError are fatal to the operation that raised them.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error raised by the kernel."""

    pass


class DecodeError(CatalogError):
    """A stored payload could not be turned back into a Ritual."""

    pass


class MalformedRecord(DecodeError):
    """Payload is not UTF-8 JSON describing an object."""

    pass


class SchemaMismatch(DecodeError):
    """Payload is well-formed but lacks (or mistypes) a required field."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class StoreError(CatalogError):
    """The catalog store could not complete an operation."""

    pass


class StoreIOError(StoreError):
    """Underlying database fault: disk full, permission denied, lock timeout."""

    pass


class WriteFailed(StoreError):
    """A write transaction was aborted; nothing from it is visible."""

    pass


class InitError(CatalogError):
    """Seeding could not complete, so the catalog must not be served."""

    pass


class ConfigError(CatalogError):
    """A setting from the environment could not be parsed."""

    pass
