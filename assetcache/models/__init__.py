"""assetcache data models — all Pydantic v2, all frozen (immutable)."""

from assetcache.models.artifacts import Artifact
from assetcache.models.config import (
    AssetConfig,
    ExtensionConfig,
    TargetDefinition,
    UnknownExtensionError,
)
from assetcache.models.freshness import FreshnessResult, FreshnessVerdict
from assetcache.models.store import HASH_STORE_FORMAT, HASH_STORE_VERSION, HashStoreDocument
from assetcache.models.targets import BuildTarget, SourceRef

__all__ = [
    # config
    "AssetConfig",
    "ExtensionConfig",
    "TargetDefinition",
    "UnknownExtensionError",
    # targets
    "BuildTarget",
    "SourceRef",
    # artifacts
    "Artifact",
    # freshness
    "FreshnessResult",
    "FreshnessVerdict",
    # store
    "HASH_STORE_FORMAT",
    "HASH_STORE_VERSION",
    "HashStoreDocument",
]
