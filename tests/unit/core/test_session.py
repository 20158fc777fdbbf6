"""Tests for BuildSession discovery and orchestration."""

import logging
from pathlib import Path

import pytest

from fxpack.core.models import BuildOptions
from fxpack.core.resources import Resource, ScriptResource
from fxpack.core.session import BuildSession


class TestDiscover:
    def test_finds_nested_resources(self, session, make_resource):
        root_a = make_resource("A", {})
        root_b = make_resource("B", {}, parent="[core]/[deep]")

        assert session.discover() == {
            "A": root_a.as_posix(),
            "B": root_b.as_posix(),
        }

    def test_directories_without_manifest_are_ignored(self, session, make_resource):
        make_resource("A", manifest=None, files={"x.lua": ""})

        assert session.discover() == {}

    def test_manifest_at_source_root_is_ignored(self, session, source_dir):
        (source_dir / "manifest.yaml").write_text("{}\n")

        assert session.discover() == {}

    def test_duplicate_names_keep_first(self, session, make_resource, caplog):
        first = make_resource("X", {}, parent="a")
        make_resource("X", {}, parent="b")

        with caplog.at_level(logging.WARNING):
            discovered = session.discover()

        assert discovered == {"X": first.as_posix()}
        assert "Duplicate resource X" in caplog.text


class TestResourceLookup:
    def test_creates_resource_from_discovery(self, session, make_resource):
        make_resource("A", {})

        resource = session.resource("A")

        assert isinstance(resource, ScriptResource)
        assert session.resource("A") is resource

    def test_unknown_resource(self, session):
        assert session.resource("missing") is None

    def test_custom_resource_class(self, build_config, make_resource):
        make_resource("A", {})

        session = BuildSession(config=build_config, resource_class=Resource)

        assert type(session.resource("A")) is Resource

    def test_resources_share_session_hooks(self, session, make_resource):
        make_resource("A", {})

        assert session.resource("A")._hooks is session.hooks


class TestBuild:
    @pytest.mark.asyncio
    async def test_builds_all_discovered(self, session, make_resource, build_config):
        make_resource("A", {})
        make_resource("B", {})

        results = await session.build()

        assert list(results) == ["A", "B"]
        assert all(result.success for result in results.values())
        for name in ("A", "B"):
            assert Path(build_config.output_target(name), "fxmanifest.lua").exists()

    @pytest.mark.asyncio
    async def test_unknown_name_does_not_stop_others(self, session, make_resource):
        make_resource("A", {})

        results = await session.build(["missing", "A"])

        assert results["missing"].success is False
        assert results["missing"].message == "Resource not found."
        assert results["A"].success is True

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_others(self, session, make_resource):
        make_resource("A", {"files": ["$C/*.lua:one.lua"]})
        make_resource("B", {})
        make_resource("C", {}, files={"a.lua": "", "b.lua": ""})

        results = await session.build(["A", "B"])

        assert results["A"].success is False
        assert results["B"].success is True

    @pytest.mark.asyncio
    async def test_referenced_resource_is_reused(self, session, make_resource):
        make_resource("A", {"files": ["$B/data.json"]})
        make_resource("B", {}, files={"data.json": "{}"})

        results = await session.build(["A", "B"], BuildOptions())

        assert results["A"].resource_inclusions == ["B"]
        assert session.registry.names() == ["A", "B"]


class TestClean:
    def test_clean_removes_build_folders(self, session, make_resource, build_config):
        make_resource("A", {})
        folder = Path(build_config.build_cache_dir("A"))
        folder.mkdir(parents=True)

        session.clean(["A", "missing"])

        assert not folder.exists()
