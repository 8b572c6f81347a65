"""Freshness verdicts — why a cached artifact is or is not reusable."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from assetcache.models.targets import SourceRef


class FreshnessVerdict(str, Enum):
    """Outcome of a freshness check.  Only FRESH permits reuse."""

    FRESH = "fresh"
    MISSING_ARTIFACT = "missing_artifact"
    CONFIG_CHANGED = "config_changed"
    SOURCE_CHANGED = "source_changed"
    SOURCE_UNRESOLVABLE = "source_unresolvable"


class FreshnessResult(BaseModel):
    """Detailed freshness outcome for a single build target."""

    model_config = ConfigDict(frozen=True)

    target: str
    verdict: FreshnessVerdict
    artifact_path: Path
    build_time: float | None = None
    offending_source: SourceRef | None = None
    source_time: float | None = None

    @property
    def is_fresh(self) -> bool:
        return self.verdict is FreshnessVerdict.FRESH
