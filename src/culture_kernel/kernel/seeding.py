"""
Self-healing initialization.

The catalog is populated whenever its table is missing, so the store is
always queryable before the first request is served. Seeding overwrites by
id, which makes repeated runs harmless.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .errors import InitError, StoreError
from .source import load_rituals
from .store import CatalogStore

logger = logging.getLogger(__name__)


def seed(store: CatalogStore, source: Union[str, Path], replace: bool = False) -> int:
    """
    Load the definition source and write all of it, unconditionally.

    With `replace`, stored rituals absent from the source are removed in the
    same transaction; a bad source leaves the existing catalog untouched.

    Returns the number of distinct ids written.

    Raises:
        InitError: the source is missing or malformed, or the write failed.
    """
    rituals = load_rituals(source)
    try:
        store.put_all(rituals, replace=replace)
    except StoreError as e:
        raise InitError(f"Seeding {store.path} failed: {e}") from e
    return len({r.id for r in rituals})


def ensure_seeded(store: CatalogStore, source: Union[str, Path]) -> bool:
    """
    Seed the store only if its table does not exist yet.

    Returns True if seeding happened, False if the catalog was already there.
    """
    try:
        present = store.exists()
    except StoreError as e:
        raise InitError(f"Cannot inspect catalog {store.path}: {e}") from e

    if present:
        return False

    logger.info("Table 'rituals' missing in %s. Auto-seeding from %s", store.path, source)
    written = seed(store, source)
    logger.info("Auto-seeding complete: %d rituals", written)
    return True
