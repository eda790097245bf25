"""
Kernel: storage and decoding machinery for the ritual catalog.

- schema: the Ritual record
- codec: Ritual <-> stored bytes
- store: transactional sqlite-backed table
- source: definition file loader
- seeding: self-healing initializer
"""
from .codec import decode, decode_all, encode
from .errors import (
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
from .schema import Ritual
from .seeding import ensure_seeded, seed
from .source import bundled_source_path, load_rituals
from .store import CatalogStore

__all__ = [
    "Ritual",
    "encode",
    "decode",
    "decode_all",
    "CatalogStore",
    "load_rituals",
    "bundled_source_path",
    "seed",
    "ensure_seeded",
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
