"""AssetCache — the single entry point wiring the cache components together.

Usage::

    cache = AssetCache(config, generator)
    if not cache.is_fresh("libs.js"):
        cache.write("libs.js", generator.generate(...))
    url_name = cache.build_file_name("libs.js")
"""

from __future__ import annotations

import logging

from assetcache.config import AssetCacheSettings
from assetcache.config import settings as default_settings
from assetcache.core.artifact_writer import ArtifactWriter
from assetcache.core.collaborators import ConfigSourceCatalog, ContentGenerator, SourceCatalog
from assetcache.core.fast_cache import FastCache, MemoryFastCache, SqliteFastCache
from assetcache.core.freshness import FreshnessEngine
from assetcache.core.hash_store import FlatFileBackend, HashStore
from assetcache.core.hasher import digest
from assetcache.core.remote import RemoteMetadataResolver
from assetcache.models.artifacts import Artifact
from assetcache.models.config import AssetConfig
from assetcache.models.freshness import FreshnessResult

logger = logging.getLogger(__name__)


def build_hash_store(config: AssetConfig, settings: AssetCacheSettings) -> HashStore:
    """Create the two-tier hash store described by *config* and *settings*."""
    fast_cache: FastCache | None = None
    if config.cache_config:
        if settings.fast_cache_path is not None:
            fast_cache = SqliteFastCache(settings.fast_cache_path)
        else:
            fast_cache = MemoryFastCache()
    return HashStore(FlatFileBackend(settings.hash_store_path), fast_cache)


class AssetCache:
    """Freshness checks, hashed filenames and artifact writes for one config.

    Parameters
    ----------
    config:
        Extensions, targets, theme and configuration timestamp.
    generator:
        Produces target content when a hash must be computed.
    catalog:
        Target describer.  Defaults to ``ConfigSourceCatalog(config)``.
    store:
        Shared hash store.  Defaults to one built from *settings*.
    resolver:
        Remote timestamp resolver.  Defaults to one built from *settings*.
    settings:
        Runtime settings.  Defaults to the module-level singleton.
    """

    def __init__(
        self,
        config: AssetConfig,
        generator: ContentGenerator,
        *,
        catalog: SourceCatalog | None = None,
        store: HashStore | None = None,
        resolver: RemoteMetadataResolver | None = None,
        settings: AssetCacheSettings | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._catalog = catalog or ConfigSourceCatalog(config)
        self._store = store or build_hash_store(config, self._settings)
        self._resolver = resolver or RemoteMetadataResolver(
            timeout=self._settings.remote_timeout_seconds,
            max_redirects=self._settings.max_redirects,
        )
        self._writer = ArtifactWriter(self._catalog, self._store, generator)
        self._engine = FreshnessEngine(config, self._catalog, self._writer, self._resolver)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def store(self) -> HashStore:
        return self._store

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def write(self, name: str, content: bytes | str) -> Artifact:
        """Write a build's content to its cache file (see ``ArtifactWriter``)."""
        return self._writer.write(name, content)

    def is_fresh(self, name: str) -> bool:
        return self._engine.is_fresh(name)

    def check(self, name: str) -> FreshnessResult:
        return self._engine.check(name)

    def build_file_name(self, name: str, contents: bool = True) -> str:
        """Final filename for a build.  Resolves theme prefixes and hashes."""
        return self._writer.final_name(name, apply_hash=contents)

    def get_hash(self, name: str) -> str | None:
        return self._writer.get_hash(name)

    def set_hash(self, name: str, hash_value: str) -> bool:
        return self._writer.set_hash(name, hash_value)

    def clear_hashes(self) -> None:
        self._store.clear()

    @staticmethod
    def hash_from_contents(content: bytes | str) -> str:
        return digest(content)
