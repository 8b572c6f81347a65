"""Artifact naming and writing — theme prefixes, hash segments, cache files.

Final filenames look like ``<theme>-<stem>.v<hash>.<ext>``.  The hash is
always derived from content the generator actually produced; it is looked up
in the ``HashStore`` first and computed on a miss.

Writes are plain overwrites: two concurrent writers for the same target can
interleave.
"""

from __future__ import annotations

import logging
import os

from assetcache.core.collaborators import ContentGenerator, SourceCatalog
from assetcache.core.hash_store import HashStore
from assetcache.core.hasher import digest
from assetcache.models.artifacts import Artifact
from assetcache.models.targets import BuildTarget

logger = logging.getLogger(__name__)


class CacheNotWritableError(RuntimeError):
    """Raised when an extension's cache directory does not accept writes."""


def hash_file_name(file: str, hash_value: str | None) -> str:
    """Insert ``.v<hash>`` before the extension of *file*."""
    if not hash_value:
        return file
    stem, dot, ext = file.rpartition(".")
    if not dot:
        return f"{file}.v{hash_value}"
    return f"{stem}.v{hash_value}.{ext}"


class ArtifactWriter:
    """Resolves final artifact names and persists artifact bytes.

    Parameters
    ----------
    catalog:
        Describes targets (extension, theme, cache directory, hashing flag).
    store:
        Shared hash store.
    generator:
        Produces target content on a hash-store miss.
    """

    def __init__(
        self,
        catalog: SourceCatalog,
        store: HashStore,
        generator: ContentGenerator,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._generator = generator

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def final_name(self, name: str, apply_hash: bool = True) -> str:
        """Return the cache filename for target *name*.

        The theme prefix is always applied to themed targets; the hash
        segment only when *apply_hash* is set and hashing is enabled.
        """
        target = self._catalog.describe(name)
        if not apply_hash:
            return target.base_name
        return hash_file_name(target.base_name, self._hash_for(target))

    def get_hash(self, name: str) -> str | None:
        """Return the content hash of *name*, computing it on a miss.

        ``None`` when hashing is disabled for the target's extension.
        """
        return self._hash_for(self._catalog.describe(name))

    def set_hash(self, name: str, hash_value: str) -> bool:
        """Record *hash_value* for *name*.  No-op when hashing is disabled."""
        target = self._catalog.describe(name)
        if not target.file_hash:
            return False
        self._store.set(target.base_name, hash_value)
        return True

    def _hash_for(self, target: BuildTarget) -> str | None:
        if not target.file_hash:
            return None
        stored = self._store.lookup(target.base_name)
        if stored:
            return stored

        content = self._generator.generate(target)
        hash_value = digest(content)
        self._store.set(target.base_name, hash_value)
        logger.info("Computed hash %s for build %s.", hash_value, target.base_name)
        return hash_value

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, name: str, content: bytes | str) -> Artifact:
        """Write *content* to the cache file of target *name*.

        Raises
        ------
        CacheNotWritableError
            If the cache directory is missing or not writable.
        """
        target = self._catalog.describe(name)
        cache_dir = target.cache_dir
        if not (cache_dir.is_dir() and os.access(cache_dir, os.W_OK)):
            raise CacheNotWritableError(
                f"Cannot write cache file. Unable to write to {cache_dir}"
            )

        if isinstance(content, str):
            content = content.encode("utf-8")
        path = cache_dir / hash_file_name(target.base_name, self._hash_for(target))
        path.write_bytes(content)
        logger.debug("Wrote %d bytes to %s.", len(content), path)
        return Artifact.from_path(path)
