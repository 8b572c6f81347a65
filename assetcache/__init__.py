"""assetcache: freshness checks and cache-busting names for built asset bundles.

  - Freshness of cached builds against local and remote sources
  - Content-derived, URL-safe filename hashes
  - Two-tier hash store (fast cache + versioned JSON file)
"""

__version__ = "0.1.0"
__description__ = "Freshness engine and content-hash store for compiled asset bundles"

from assetcache.core.asset_cache import AssetCache
from assetcache.core.artifact_writer import CacheNotWritableError
from assetcache.core.hasher import digest

__all__ = ["AssetCache", "CacheNotWritableError", "digest", "__version__"]
