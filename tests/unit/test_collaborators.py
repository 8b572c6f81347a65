"""Tests for the collaborator protocols and ConfigSourceCatalog."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetcache.core.collaborators import ConfigSourceCatalog, ContentGenerator, SourceCatalog
from assetcache.models.config import AssetConfig, ExtensionConfig, TargetDefinition, UnknownExtensionError


class TestProtocols:
    def test_catalog_satisfies_protocol(self, asset_config):
        assert isinstance(ConfigSourceCatalog(asset_config), SourceCatalog)

    def test_generator_satisfies_protocol(self, generator):
        assert isinstance(generator, ContentGenerator)


class TestConfigSourceCatalog:
    def test_describe(self, asset_config, make_source, source_dir: Path, cache_dir: Path):
        make_source("library_file.js")
        make_source("local_script.js")
        target = ConfigSourceCatalog(asset_config).describe("libs.js")
        assert target.name == "libs.js"
        assert target.extension == "js"
        assert target.theme is None
        assert target.file_hash is False
        assert target.cache_dir == cache_dir
        assert [s.location for s in target.sources] == [
            str(source_dir / "library_file.js"),
            str(source_dir / "local_script.js"),
        ]
        assert not any(s.remote for s in target.sources)

    def test_first_existing_search_path_wins(self, tmp_path: Path, cache_dir: Path):
        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / "app.js").write_text("", encoding="utf-8")
        config = AssetConfig(
            extensions={"js": ExtensionConfig(cache_path=cache_dir, paths=[first, second])},
            targets={"all.js": TargetDefinition(files=["app.js"])},
        )
        target = ConfigSourceCatalog(config).describe("all.js")
        assert target.sources[0].location == str(second / "app.js")

    def test_unfound_file_resolves_to_first_candidate(self, asset_config, source_dir: Path):
        target = ConfigSourceCatalog(asset_config).describe("libs.js")
        assert target.sources[0].location == str(source_dir / "library_file.js")

    def test_remote_and_absolute_files_untouched(self, asset_config, tmp_path: Path):
        absolute = str(tmp_path / "abs.js")
        targets = {"mix.js": TargetDefinition(files=["https://cdn.test/a.js", absolute])}
        config = asset_config.model_copy(update={"targets": targets})
        sources = ConfigSourceCatalog(config).describe("mix.js").sources
        assert sources[0].location == "https://cdn.test/a.js"
        assert sources[0].remote is True
        assert sources[1].location == absolute
        assert sources[1].remote is False

    def test_theme_applied_only_to_themed_targets(self, asset_config):
        config = asset_config.model_copy(update={"theme": "blue"})
        catalog = ConfigSourceCatalog(config)
        assert catalog.describe("themed.css").theme == "blue"
        assert catalog.describe("themed.css").base_name == "blue-themed.css"
        assert catalog.describe("libs.js").theme is None

    def test_hashing_flag_and_cache_dir_follow_config(self, asset_config, tmp_path: Path):
        config = asset_config.with_file_hash("js", True).with_cache_path("js", tmp_path / "out")
        target = ConfigSourceCatalog(config).describe("libs.js")
        assert target.file_hash is True
        assert target.cache_dir == tmp_path / "out"
        assert ConfigSourceCatalog(config).describe("themed.css").file_hash is False

    def test_unknown_extension(self, asset_config):
        with pytest.raises(UnknownExtensionError):
            ConfigSourceCatalog(asset_config).describe("readme.txt")
