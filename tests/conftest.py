"""Shared test fixtures for assetcache."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from requests.structures import CaseInsensitiveDict

from assetcache.config import AssetCacheSettings
from assetcache.core.hash_store import FlatFileBackend, HashStore
from assetcache.models.config import AssetConfig, ExtensionConfig, TargetDefinition
from assetcache.models.targets import BuildTarget


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingGenerator:
    """ContentGenerator that returns fixed content and records each call."""

    def __init__(self, content: bytes = b"generated content") -> None:
        self.content = content
        self.calls: list[BuildTarget] = []

    def generate(self, target: BuildTarget) -> bytes:
        self.calls.append(target)
        return self.content


Route = dict[str, str] | tuple[int, dict[str, str]] | Exception


class FakeResponse:
    """Minimal stand-in for ``requests.Response`` used as a context manager."""

    def __init__(self, headers: dict[str, str] | None = None, status_code: int | None = None) -> None:
        self.headers = CaseInsensitiveDict(headers or {})
        if status_code is None:
            status_code = 302 if "Location" in self.headers else 200
        self.status_code = status_code
        self.closed = False

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed = True


class FakeSession:
    """Session double mapping URLs to header dicts, (status, headers) pairs or exceptions."""

    def __init__(self, routes: dict[str, Route]) -> None:
        self.routes = routes
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append((url, kwargs))
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, tuple):
            status_code, headers = route
            return FakeResponse(headers, status_code)
        return FakeResponse(route)


def set_mtime(path: Path, when: float) -> None:
    """Set both atime and mtime of *path* to *when*."""
    os.utime(path, (when, when))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> float:
    return time.time()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Directory that receives built artifacts."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory holding source files, all dated an hour in the past."""
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def make_source(source_dir: Path, now: float) -> Callable[..., Path]:
    """Factory fixture: create a source file with a given age in seconds."""

    def _factory(name: str, content: str = "", age: float = 3600.0) -> Path:
        path = source_dir / name
        path.write_text(content, encoding="utf-8")
        set_mtime(path, now - age)
        return path

    return _factory


@pytest.fixture
def asset_config(cache_dir: Path, source_dir: Path, now: float) -> AssetConfig:
    """A config with js and css extensions and a few targets, changed a minute ago."""
    return AssetConfig(
        extensions={
            "js": ExtensionConfig(cache_path=cache_dir, paths=[source_dir]),
            "css": ExtensionConfig(cache_path=cache_dir, paths=[source_dir]),
        },
        targets={
            "libs.js": TargetDefinition(files=["library_file.js", "local_script.js"]),
            "empty.js": TargetDefinition(),
            "themed.css": TargetDefinition(files=["background.css"], theme=True),
        },
        modified_time=now - 60,
    )


@pytest.fixture
def hash_file(tmp_path: Path) -> Path:
    return tmp_path / "state" / "asset_compress_build_time"


@pytest.fixture
def hash_store(hash_file: Path) -> HashStore:
    """A file-only hash store in a temp directory."""
    return HashStore(FlatFileBackend(hash_file))


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def test_settings(hash_file: Path) -> AssetCacheSettings:
    """Settings pointing the hash store into the temp directory."""
    return AssetCacheSettings(hash_store_path=hash_file, _env_file=None)


@pytest.fixture
def touch() -> Callable[[Path, float], None]:
    """Return a helper that sets a file's modification time."""
    return set_mtime


@pytest.fixture
def make_session() -> Callable[..., FakeSession]:
    """Factory fixture: build a FakeSession from a URL -> headers routing table."""

    def _factory(routes: dict[str, Route]) -> FakeSession:
        return FakeSession(routes)

    return _factory
