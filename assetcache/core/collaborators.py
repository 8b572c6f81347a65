"""Collaborator boundaries for the cache layer.

Defines the ``SourceCatalog`` and ``ContentGenerator`` Protocols that
callers plug in, along with ``ConfigSourceCatalog``, a default catalog that
describes targets straight from an ``AssetConfig``.

Merging sources into content is not this package's concern; callers must
supply their own ``ContentGenerator``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from assetcache.models.config import AssetConfig
from assetcache.models.targets import BuildTarget, SourceRef


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class SourceCatalog(Protocol):
    """Protocol for source enumeration backends."""

    def describe(self, name: str) -> BuildTarget:
        """Return the extension, theme, sources and cache settings of *name*."""
        ...


@runtime_checkable
class ContentGenerator(Protocol):
    """Protocol for content generation backends.

    Only invoked when the hash store has no entry for a target.
    """

    def generate(self, target: BuildTarget) -> bytes:
        """Synchronously produce the merged content of *target*."""
        ...


# ---------------------------------------------------------------------------
# Default implementation
# ---------------------------------------------------------------------------


class ConfigSourceCatalog:
    """Describes build targets from an ``AssetConfig``.

    Relative file names are looked up in the extension's search paths; the
    first existing match wins.  A name found nowhere resolves to its first
    candidate path, which then fails the freshness mtime lookup.
    """

    def __init__(self, config: AssetConfig) -> None:
        self._config = config

    def describe(self, name: str) -> BuildTarget:
        ext = self._config.get_ext(name)
        ext_config = self._config.extension(ext)
        theme = self._config.theme if self._config.is_themed(name) else None
        sources = [
            self.resolve(file, ext_config.paths) for file in self._config.files(name)
        ]
        return BuildTarget(
            name=name,
            extension=ext,
            sources=sources,
            theme=theme,
            file_hash=self._config.file_hash_enabled(ext),
            cache_dir=self._config.cache_path(ext),
        )

    @staticmethod
    def resolve(file: str, search_paths: list[Path]) -> SourceRef:
        ref = SourceRef.from_location(file)
        if ref.remote or Path(file).is_absolute() or not search_paths:
            return ref

        candidates = [Path(base) / file for base in search_paths]
        for candidate in candidates:
            if candidate.exists():
                return SourceRef.from_location(candidate)
        return SourceRef.from_location(candidates[0])
