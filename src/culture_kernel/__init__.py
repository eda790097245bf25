"""
culture-kernel: a ritual catalog served from an embedded store.

Public API re-exports from kernel/ (storage machinery) and render (output).
"""
from .kernel.codec import decode, decode_all, encode
from .kernel.errors import (
    CatalogError,
    ConfigError,
    DecodeError,
    InitError,
    MalformedRecord,
    SchemaMismatch,
    StoreError,
    StoreIOError,
    WriteFailed,
)
from .kernel.schema import Ritual
from .kernel.seeding import ensure_seeded, seed
from .kernel.store import CatalogStore
from .render import Rendering, is_terminal_client, negotiate, render_json, render_terminal

__version__ = "1.0.0"

__all__ = [
    # Schema
    "Ritual",
    # Codec
    "encode",
    "decode",
    "decode_all",
    # Store
    "CatalogStore",
    # Seeding
    "seed",
    "ensure_seeded",
    # Rendering
    "Rendering",
    "is_terminal_client",
    "negotiate",
    "render_json",
    "render_terminal",
    # Errors
    "CatalogError",
    "ConfigError",
    "DecodeError",
    "MalformedRecord",
    "SchemaMismatch",
    "StoreError",
    "StoreIOError",
    "WriteFailed",
    "InitError",
]
