"""On-disk artifact model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Artifact(BaseModel):
    """A built bundle as it exists in the cache directory.

    Freshness is never stored here; it is re-derived on every query.
    """

    model_config = ConfigDict(frozen=True)

    name: str  # final filename, themed and hashed
    path: Path
    modified_time: float
    size_bytes: int = 0

    @classmethod
    def from_path(cls, path: Path) -> Artifact:
        stat = path.stat()
        return cls(
            name=path.name,
            path=path,
            modified_time=stat.st_mtime,
            size_bytes=stat.st_size,
        )

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()
