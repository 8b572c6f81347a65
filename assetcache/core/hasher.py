"""Content hashing for cache-busting filenames and canonical serialization.

The filename hash is a cache key, not a security primitive: MD5 over the raw
bytes, re-encoded as URL-safe base64 and cut to 22 characters.  Output must
match other implementations byte for byte given the same input.
"""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Any

HASH_LENGTH = 22


def digest(content: bytes | str) -> str:
    """Return the 22-character URL-safe content hash of *content*.

    ``str`` input is hashed as its UTF-8 encoding.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    raw = hashlib.md5(content, usedforsecurity=False).digest()
    return base64.urlsafe_b64encode(raw).decode("ascii")[:HASH_LENGTH]


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")
