"""Two-tier, durable build-name -> content-hash store.

Read order: the fast cache (when configured) wins if it holds a non-empty
mapping; otherwise the flat hash file is read.  Every ``set`` rewrites the
full mapping to the fast cache and, unconditionally, to the flat file.

A missing or corrupted hash file reads as an empty mapping.  Staleness always
resolves toward recomputing a hash, never toward an error.

Concurrent writers are not coordinated: the last ``set`` wins.  The flat file
is replaced atomically, so readers never observe a torn document.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from assetcache.core.fast_cache import FastCache
from assetcache.core.hasher import canonical_json_bytes
from assetcache.models.store import HashStoreDocument

logger = logging.getLogger(__name__)

HASH_STORE_KEY = "asset_compress_build_time"
FILE_MODE = 0o644


class FlatFileBackend:
    """The flat fallback file holding a ``HashStoreDocument``.

    Parameters
    ----------
    path:
        Fixed location of the hash file.  Parent directories are created on
        first write.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, str] | None:
        """Return the stored mapping, or ``None`` if absent or unreadable."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Hash file %s is unreadable (%s); ignoring it.", self._path, exc)
            return None

        try:
            document = HashStoreDocument.model_validate_json(raw)
        except ValidationError:
            logger.warning("Hash file %s is malformed; treating it as empty.", self._path)
            return None
        return dict(document.hashes)

    def write(self, mapping: dict[str, str]) -> None:
        """Atomically replace the hash file with *mapping*."""
        document = HashStoreDocument(hashes=mapping)
        data = canonical_json_bytes(document.model_dump(mode="json"))

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self) -> None:
        self._path.unlink(missing_ok=True)


class HashStore:
    """Explicit store object for base build name -> hash mappings.

    Construct once and pass by reference to every component that needs
    hashes.  No state is cached in memory between calls; each read goes to
    the backends so several stores over the same file agree.

    Parameters
    ----------
    file_backend:
        The durable flat-file tier.
    fast_cache:
        Optional fast tier layered in front of the file.
    """

    def __init__(
        self,
        file_backend: FlatFileBackend,
        fast_cache: FastCache | None = None,
    ) -> None:
        self._file = file_backend
        self._fast_cache = fast_cache

    @property
    def file_backend(self) -> FlatFileBackend:
        return self._file

    @property
    def fast_cache(self) -> FastCache | None:
        return self._fast_cache

    def get(self) -> dict[str, str]:
        """Return the current base-name -> hash mapping (possibly empty)."""
        if self._fast_cache is not None:
            cached = self._fast_cache.read(HASH_STORE_KEY)
            if cached:
                return cached
        return self._file.read() or {}

    def lookup(self, build_name: str) -> str | None:
        """Return the hash stored for *build_name*, or ``None``."""
        return self.get().get(build_name) or None

    def set(self, build_name: str, hash_value: str) -> None:
        """Insert or overwrite *build_name* and persist the full mapping."""
        mapping = self.get()
        mapping[build_name] = hash_value
        if self._fast_cache is not None:
            self._fast_cache.write(HASH_STORE_KEY, mapping)
        self._file.write(mapping)
        logger.debug("Stored hash %s for build %s.", hash_value, build_name)

    def clear(self) -> None:
        """Forget every hash, starting a new store generation."""
        if self._fast_cache is not None:
            self._fast_cache.delete(HASH_STORE_KEY)
        self._file.delete()
        logger.info("Cleared hash store at %s.", self._file.path)
