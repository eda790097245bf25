"""
Record codec: Ritual <-> bytes.

Payloads are UTF-8 JSON objects. Decoding ignores fields it does not know
and rejects payloads missing a field the current schema requires.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List

from pydantic import ValidationError

from .errors import DecodeError, MalformedRecord, SchemaMismatch
from .schema import Ritual

logger = logging.getLogger(__name__)


def encode(ritual: Ritual) -> bytes:
    # Fields dump in declaration order; modern_script keeps its insertion order.
    return json.dumps(ritual.model_dump(), ensure_ascii=False).encode("utf-8")


def decode(payload: bytes) -> Ritual:
    """
    Decode a stored payload.

    Raises:
        MalformedRecord: bytes are not UTF-8 JSON, or not a JSON object.
        SchemaMismatch: a required field is missing or has the wrong type.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedRecord(f"Undecodable payload: {e}") from e

    if not isinstance(data, dict):
        raise MalformedRecord(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return Ritual.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        record_id = data.get("id", "?")
        raise SchemaMismatch(
            f"Record {record_id!r} does not match the current schema: {', '.join(fields)}",
            fields=fields,
        ) from e


def decode_all(payloads: Iterable[bytes]) -> List[Ritual]:
    """Decode a batch, dropping (and logging) every payload that fails."""
    rituals: List[Ritual] = []
    for payload in payloads:
        try:
            rituals.append(decode(payload))
        except DecodeError as e:
            logger.warning("Skipping stored record: %s", e)
    return rituals
