"""
Deterministic fingerprints for analysis requests.

Mappings are rebuilt with their keys sorted so insertion order never affects
the digest; sequences keep their order. The canonical form is serialised as
compact JSON and hashed with SHA-256.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel


def normalize(value: Any) -> Any:
    """Return a canonical, JSON-serialisable copy of ``value``."""
    if isinstance(value, BaseModel):
        return normalize(value.model_dump())
    if isinstance(value, dict):
        return {str(key): normalize(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [normalize(item) for item in value]
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def fingerprint(value: Any) -> str:
    """Hex SHA-256 digest of the canonical form of ``value``."""
    canonical = json.dumps(
        normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
