"""Build target and source reference models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

_REMOTE_SCHEMES = ("http://", "https://")


class SourceRef(BaseModel):
    """A single input of a build target: a local path or a remote URL."""

    model_config = ConfigDict(frozen=True)

    location: str
    remote: bool = False

    @classmethod
    def from_location(cls, location: str | Path) -> SourceRef:
        """Classify *location* as remote when it carries an HTTP(S) scheme."""
        location = str(location)
        return cls(location=location, remote=location.lower().startswith(_REMOTE_SCHEMES))


class BuildTarget(BaseModel):
    """Everything the cache layer needs to know about one named bundle.

    Produced by a ``SourceCatalog``; read-only from the cache's perspective.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    extension: str
    sources: list[SourceRef] = Field(default_factory=list)
    theme: str | None = None
    file_hash: bool = False
    cache_dir: Path

    @property
    def base_name(self) -> str:
        """Target name with the theme prefix applied, without a hash segment."""
        if self.theme:
            return f"{self.theme}-{self.name}"
        return self.name
