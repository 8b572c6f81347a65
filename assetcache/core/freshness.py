"""Freshness engine — is a cached build still valid?

A cached artifact is fresh only when it exists, the configuration changed
strictly before it was built, and every source is strictly older than it.
Equal timestamps count as stale: a same-instant write cannot be proven to
postdate the source.  Any source whose time cannot be determined is stale.
"""

from __future__ import annotations

import logging
from pathlib import Path

from assetcache.core.artifact_writer import ArtifactWriter
from assetcache.core.collaborators import SourceCatalog
from assetcache.core.remote import RemoteMetadataResolver
from assetcache.models.config import AssetConfig
from assetcache.models.freshness import FreshnessResult, FreshnessVerdict
from assetcache.models.targets import SourceRef

logger = logging.getLogger(__name__)


class FreshnessEngine:
    """Decides whether a target's cached artifact can be reused.

    Parameters
    ----------
    config:
        Supplies the global configuration modification time.
    catalog:
        Describes the target's sources and cache directory.
    writer:
        Resolves the expected (themed, hashed) artifact filename.
    resolver:
        Looks up last-modified times of remote sources.
    """

    def __init__(
        self,
        config: AssetConfig,
        catalog: SourceCatalog,
        writer: ArtifactWriter,
        resolver: RemoteMetadataResolver,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._writer = writer
        self._resolver = resolver

    def is_fresh(self, name: str) -> bool:
        return self.check(name).is_fresh

    def check(self, name: str) -> FreshnessResult:
        """Return the detailed freshness verdict for target *name*."""
        target = self._catalog.describe(name)
        artifact_path = target.cache_dir / self._writer.final_name(name)

        if not artifact_path.exists():
            return self._stale(name, FreshnessVerdict.MISSING_ARTIFACT, artifact_path)

        build_time = artifact_path.stat().st_mtime
        if self._config.modified_time >= build_time:
            return self._stale(
                name, FreshnessVerdict.CONFIG_CHANGED, artifact_path, build_time
            )

        for source in target.sources:
            source_time = self.source_time(source)
            if source_time is None:
                return self._stale(
                    name,
                    FreshnessVerdict.SOURCE_UNRESOLVABLE,
                    artifact_path,
                    build_time,
                    source,
                )
            if source_time >= build_time:
                return self._stale(
                    name,
                    FreshnessVerdict.SOURCE_CHANGED,
                    artifact_path,
                    build_time,
                    source,
                    source_time,
                )

        return FreshnessResult(
            target=name,
            verdict=FreshnessVerdict.FRESH,
            artifact_path=artifact_path,
            build_time=build_time,
        )

    def source_time(self, source: SourceRef) -> float | None:
        """Modification time of *source*, or ``None`` when unknown."""
        if source.remote:
            return self._resolver.last_modified(source.location)
        try:
            return Path(source.location).stat().st_mtime
        except OSError:
            return None

    @staticmethod
    def _stale(
        name: str,
        verdict: FreshnessVerdict,
        artifact_path: Path,
        build_time: float | None = None,
        source: SourceRef | None = None,
        source_time: float | None = None,
    ) -> FreshnessResult:
        logger.debug(
            "Build %s is stale (%s)%s.",
            name,
            verdict.value,
            f" because of {source.location}" if source is not None else "",
        )
        return FreshnessResult(
            target=name,
            verdict=verdict,
            artifact_path=artifact_path,
            build_time=build_time,
            offending_source=source,
            source_time=source_time,
        )
