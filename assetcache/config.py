"""Runtime settings — env-driven.

Reads from a .env file and ASSETCACHE_* environment variables.  These settings
cover where the hash store lives and how remote sources are probed; which
targets exist and how they are cached is described by ``AssetConfig``.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_hash_store_path() -> Path:
    return Path(tempfile.gettempdir()) / "asset_compress_build_time"


class AssetCacheSettings(BaseSettings):
    """Runtime settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export ASSETCACHE_HASH_STORE_PATH=/var/cache/assets/hashes.json
        export ASSETCACHE_FAST_CACHE_PATH=/var/cache/assets/fast.db
        export ASSETCACHE_REMOTE_TIMEOUT_SECONDS=3
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ASSETCACHE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Hash store tiers
    hash_store_path: Path = Field(default_factory=_default_hash_store_path)
    fast_cache_path: Path | None = None  # SQLite file; in-memory when unset

    # Remote sources
    remote_timeout_seconds: float = Field(default=10.0, gt=0)
    max_redirects: int = Field(default=5, ge=0)


# Module-level singleton — import as `from assetcache.config import settings`
settings = AssetCacheSettings()
