"""Unit tests for package.json merging (appforge.builder.manifest)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from appforge.builder.manifest import (
    BASE_MANIFESTS,
    ManifestMerger,
    default_manifest,
    parse_extra_dependency,
)
from appforge.models import BuildConfig, Framework

pytestmark = pytest.mark.unit


@pytest.fixture
def merger() -> ManifestMerger:
    return ManifestMerger()


# ---------------------------------------------------------------------------
# Pure merge
# ---------------------------------------------------------------------------


class TestMerge:
    def test_later_plugin_wins(self, merger, make_plugin, react_config):
        first = make_plugin("first", dependencies={"x": "^1.0.0", "a": "1"})
        second = make_plugin("second", dependencies={"x": "^2.0.0", "b": "2"})
        manifest = merger.merge({"name": "t"}, [first, second], react_config)
        assert manifest["dependencies"] == {"x": "^2.0.0", "a": "1", "b": "2"}

    def test_merge_is_deterministic(self, merger, make_plugin, react_config):
        plugins = [
            make_plugin("first", dependencies={"x": "^1.0.0"}),
            make_plugin("second", dependencies={"x": "^2.0.0"}),
        ]
        base = {"name": "t", "dependencies": {"react": "^18"}}
        assert merger.merge(base, plugins, react_config) == merger.merge(base, plugins, react_config)

    def test_plugin_overrides_base(self, merger, make_plugin, react_config):
        base = {"name": "t", "dependencies": {"react": "^18.0.0", "keep": "1"}}
        plugin = make_plugin(dependencies={"react": "^19.0.0"})
        manifest = merger.merge(base, [plugin], react_config)
        assert manifest["dependencies"] == {"react": "^19.0.0", "keep": "1"}

    def test_base_is_not_mutated(self, merger, make_plugin, react_config):
        base = {"name": "t", "dependencies": {"react": "^18"}}
        merger.merge(base, [make_plugin(dependencies={"zustand": "^4"})], react_config)
        assert base == {"name": "t", "dependencies": {"react": "^18"}}

    def test_name_is_app_name(self, merger, react_config):
        assert merger.merge({"name": "vite-template"}, [], react_config)["name"] == "demo-app"

    def test_other_fields_preserved(self, merger, react_config):
        base = {"name": "t", "type": "module", "scripts": {"dev": "vite"}}
        manifest = merger.merge(base, [], react_config)
        assert manifest["type"] == "module"
        assert manifest["scripts"] == {"dev": "vite"}

    def test_empty_dev_dependencies_removed(self, merger, react_config):
        manifest = merger.merge({"name": "t"}, [], react_config)
        assert manifest["dependencies"] == {}
        assert "devDependencies" not in manifest

    def test_dev_dependencies_merged(self, merger, make_plugin, react_config):
        base = {"name": "t", "devDependencies": {"vite": "^5"}}
        plugin = make_plugin(dev_dependencies={"@types/x": "^1"})
        manifest = merger.merge(base, [plugin], react_config)
        assert manifest["devDependencies"] == {"vite": "^5", "@types/x": "^1"}

    @pytest.mark.parametrize("section", [["react"], "react@18", 42, None])
    def test_non_object_sections_are_treated_as_empty(
        self, merger, make_plugin, react_config, section
    ):
        base = {"name": "t", "dependencies": section, "devDependencies": section}
        plugin = make_plugin(dependencies={"zustand": "^4"}, dev_dependencies={"vite": "^5"})
        manifest = merger.merge(base, [plugin], react_config)
        assert manifest["dependencies"] == {"zustand": "^4"}
        assert manifest["devDependencies"] == {"vite": "^5"}

    def test_none_base_uses_framework_default(self, merger, make_plugin):
        config = BuildConfig(app_name="v", framework="vue", package_manager="npm")
        manifest = merger.merge(None, [make_plugin(dependencies={"pinia": "^2"})], config)
        assert manifest["dependencies"] == {"vue": "^3.4.15", "pinia": "^2"}
        assert manifest["version"] == "0.1.0"
        assert manifest["private"] is True

    def test_extra_dependencies_after_plugins(self, merger, make_plugin):
        config = BuildConfig(
            app_name="demo",
            framework="react",
            package_manager="npm",
            extra_dependencies=["axios@^1.6.0", "x@9", "lodash"],
        )
        manifest = merger.merge({}, [make_plugin(dependencies={"x": "1"})], config)
        assert manifest["dependencies"] == {"x": "9", "axios": "^1.6.0", "lodash": "latest"}


class TestDefaults:
    @pytest.mark.parametrize("framework", list(Framework))
    def test_default_manifest_per_framework(self, framework):
        config = BuildConfig(app_name="demo", framework=framework, package_manager="npm")
        manifest = default_manifest(config)
        assert manifest["name"] == "demo"
        assert manifest["dependencies"] == BASE_MANIFESTS[framework]["dependencies"]

    def test_default_manifest_is_a_copy(self, react_config):
        default_manifest(react_config)["dependencies"]["mutated"] = "1"
        assert "mutated" not in BASE_MANIFESTS[Framework.REACT]["dependencies"]

    @pytest.mark.parametrize(
        "spec, expected",
        [
            ("lodash", ("lodash", "latest")),
            ("left-pad@1.3.0", ("left-pad", "1.3.0")),
            ("@scope/pkg", ("@scope/pkg", "latest")),
            ("@scope/pkg@^2.1", ("@scope/pkg", "^2.1")),
            ("trailing@", ("trailing", "latest")),
        ],
    )
    def test_parse_extra_dependency(self, spec, expected):
        assert parse_extra_dependency(spec) == expected


# ---------------------------------------------------------------------------
# Disk round trip
# ---------------------------------------------------------------------------


class TestPatch:
    @pytest.mark.asyncio
    async def test_writes_merged_manifest(self, merger, make_plugin, react_config, tmp_path: Path):
        (tmp_path / "package.json").write_text(
            json.dumps({"name": "t", "dependencies": {"react": "^18"}}), encoding="utf-8"
        )
        await merger.patch(tmp_path, [make_plugin(dependencies={"zustand": "^4"})], react_config)

        text = (tmp_path / "package.json").read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '\n  "dependencies": {\n' in text
        assert json.loads(text)["dependencies"] == {"react": "^18", "zustand": "^4"}

    @pytest.mark.asyncio
    async def test_unparsable_base_falls_back_to_default(
        self, merger, make_plugin, react_config, tmp_path: Path
    ):
        (tmp_path / "package.json").write_text("{ not json", encoding="utf-8")
        plugins = [
            make_plugin("router", dependencies={"react-router-dom": "^6.20.0"}),
            make_plugin("store", dependencies={"zustand": "^4.4.7"}),
        ]
        manifest = await merger.patch(tmp_path, plugins, react_config)

        assert manifest["dependencies"]["react"] == "^18.2.0"
        assert manifest["dependencies"]["react-router-dom"] == "^6.20.0"
        assert manifest["dependencies"]["zustand"] == "^4.4.7"
        assert json.loads((tmp_path / "package.json").read_text(encoding="utf-8")) == manifest

    @pytest.mark.asyncio
    async def test_missing_base_falls_back_to_default(self, merger, react_config, tmp_path: Path):
        manifest = await merger.patch(tmp_path, [], react_config)
        assert manifest["scripts"]["dev"] == "vite"
        assert (tmp_path / "package.json").exists()

    def test_non_object_base_is_unparsable(self, merger, tmp_path: Path):
        (tmp_path / "package.json").write_text("[]", encoding="utf-8")
        assert merger.read_base(tmp_path) is None

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, merger, react_config, tmp_path: Path):
        missing_parent = tmp_path / "file-not-dir"
        missing_parent.write_text("x", encoding="utf-8")
        with pytest.raises(OSError):
            await merger.patch(missing_parent, [], react_config)
