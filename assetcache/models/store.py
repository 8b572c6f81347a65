"""Persisted hash store document — the flat fallback file format."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

HASH_STORE_FORMAT = "assetcache.hashes"
HASH_STORE_VERSION = 1


class HashStoreDocument(BaseModel):
    """Schema-tagged, versioned base-name -> hash mapping.

    Serialized as canonical JSON.
    """

    model_config = ConfigDict(frozen=True)

    format: Literal["assetcache.hashes"] = HASH_STORE_FORMAT
    version: Literal[1] = HASH_STORE_VERSION
    hashes: dict[str, str] = Field(default_factory=dict)
