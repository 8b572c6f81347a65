"""Asset configuration models — per-extension cache settings and build targets."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class UnknownExtensionError(KeyError):
    """Raised when a lookup names an extension that is not configured."""


class ExtensionConfig(BaseModel):
    """Cache settings for one file extension (``js``, ``css``, ...)."""

    model_config = ConfigDict(frozen=True)

    cache_path: Path
    file_hash: bool = False
    paths: list[Path] = Field(default_factory=list)  # search paths for sources


class TargetDefinition(BaseModel):
    """A named build target and the source files that compose it."""

    model_config = ConfigDict(frozen=True)

    files: list[str] = Field(default_factory=list)
    theme: bool = False


class AssetConfig(BaseModel):
    """The configuration source consulted by the cache layer.

    ``modified_time`` is a single instant for the whole configuration, not
    per file.  Any artifact built at or before it is stale.

    Parameters
    ----------
    extensions:
        Per-extension cache directory, hashing flag and search paths.
    targets:
        Build target name -> definition.
    theme:
        Active theme name, applied as a prefix to themed targets.
    modified_time:
        Unix time of the last configuration change.
    cache_config:
        Whether the fast cache tier sits in front of the hash file.
    """

    model_config = ConfigDict(frozen=True)

    extensions: dict[str, ExtensionConfig] = Field(default_factory=dict)
    targets: dict[str, TargetDefinition] = Field(default_factory=dict)
    theme: str | None = None
    modified_time: float = 0.0
    cache_config: bool = False

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def get_ext(name: str) -> str:
        """Return the extension of a target name, without the dot."""
        _, _, ext = name.rpartition(".")
        return ext

    def extension(self, ext: str) -> ExtensionConfig:
        try:
            return self.extensions[ext]
        except KeyError:
            raise UnknownExtensionError(f"No configuration for extension: {ext!r}") from None

    def cache_path(self, ext: str) -> Path:
        return self.extension(ext).cache_path

    def file_hash_enabled(self, ext: str) -> bool:
        """Hashing flag for *ext*; unconfigured extensions never hash."""
        ext_config = self.extensions.get(ext)
        return ext_config is not None and ext_config.file_hash

    def is_themed(self, name: str) -> bool:
        target = self.targets.get(name)
        return bool(self.theme) and target is not None and target.theme

    def files(self, name: str) -> list[str]:
        target = self.targets.get(name)
        return list(target.files) if target is not None else []

    # ------------------------------------------------------------------
    # Copy-on-write modifiers
    # ------------------------------------------------------------------

    def with_file_hash(self, ext: str, enabled: bool) -> AssetConfig:
        """Return a copy with hashing switched on or off for *ext*."""
        updated = self.extension(ext).model_copy(update={"file_hash": enabled})
        return self.model_copy(update={"extensions": {**self.extensions, ext: updated}})

    def with_cache_path(self, ext: str, path: Path) -> AssetConfig:
        """Return a copy whose *ext* artifacts are cached under *path*."""
        current = self.extensions.get(ext)
        if current is None:
            updated = ExtensionConfig(cache_path=Path(path))
        else:
            updated = current.model_copy(update={"cache_path": Path(path)})
        return self.model_copy(update={"extensions": {**self.extensions, ext: updated}})
