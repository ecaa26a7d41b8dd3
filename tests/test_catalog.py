"""
Tests for turning the package manifest into planner groups.
"""

from __future__ import annotations

import pytest

from gaming_setup.catalog import build_groups, flatpak_apps, helper_packages
from gaming_setup.config import SetupConfig
from gaming_setup.lib.manifests import load_packages_manifest
from gaming_setup.planner import AllOf, FirstOf, SkipReason, plan


@pytest.fixture
def manifest():
    return load_packages_manifest()


def by_id(groups):
    return {g.group_id: g for g in groups}


class TestBundledManifest:
    def test_group_kinds(self, manifest):
        groups = by_id(build_groups(manifest, SetupConfig()))
        assert isinstance(groups["winehq"], FirstOf)
        assert isinstance(groups["winehq_vkd3d"], FirstOf)
        assert isinstance(groups["power_tuning"], AllOf)
        assert [r.name for r in groups["winehq"].requests] == ["winehq-staging", "winehq-devel", "winehq-stable"]

    def test_toggles_drive_enable_flags(self, manifest):
        groups = by_id(build_groups(manifest, SetupConfig(obs=False, winehq=True)))
        assert all(not r.enabled for r in groups["obs"].requests)
        assert all(r.enabled for r in groups["winehq"].requests)
        assert all(r.enabled for r in groups["wine"].requests)

    def test_i386_names_kept(self, manifest):
        groups = by_id(build_groups(manifest, SetupConfig()))
        assert [r.name for r in groups["libs_32bit"].requests] == ["libvulkan1:i386", "libgl1-mesa-dri:i386"]

    def test_flatpaks_follow_toggles(self, manifest):
        assert [a.app_id for a in flatpak_apps(manifest, SetupConfig())] == ["net.davidotek.pupgui2"]
        apps = flatpak_apps(manifest, SetupConfig(steam_flatpak=True, protonup_flatpak=False))
        assert [a.app_id for a in apps] == ["com.valvesoftware.Steam"]

    def test_helper_packages(self, manifest):
        assert "software-properties-common" in helper_packages(manifest)


class TestEndToEndPlanning:
    def test_vkd3d_appears_once_with_winehq(self, manifest):
        available = {"vkd3d", "vkd3d-tools", "winehq-stable", "gamemode"}
        groups = build_groups(manifest, SetupConfig(winehq=True))
        result = plan(groups, lambda n: n in available)
        assert result.to_install.count("vkd3d") == 1
        assert result.to_install[:3] == ("winehq-stable", "vkd3d", "vkd3d-tools")

    def test_winehq_disabled_skips_winehq(self, manifest):
        available = {"winehq-staging", "gamemode"}
        result = plan(build_groups(manifest, SetupConfig()), lambda n: n in available)
        assert "winehq-staging" not in result.to_install
        assert ("winehq-staging", SkipReason.DISABLED) in [(s.name, s.reason) for s in result.skipped]
        assert "gamemode" in result.to_install


class TestManifestErrors:
    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="kind"):
            build_groups({"apt_groups": [{"id": "x", "kind": "some", "packages": ["a"]}]}, SetupConfig())

    def test_unknown_toggle(self):
        with pytest.raises(ValueError, match="unknown toggle"):
            build_groups({"apt_groups": [{"id": "x", "toggle": "doom", "packages": ["a"]}]}, SetupConfig())

    def test_packages_must_be_list(self):
        with pytest.raises(ValueError, match="list"):
            build_groups({"apt_groups": [{"id": "x", "packages": "a b"}]}, SetupConfig())

    def test_flatpak_requires_app(self):
        with pytest.raises(ValueError, match="app is required"):
            flatpak_apps({"flatpaks": [{"id": "x"}]}, SetupConfig())

    def test_custom_manifest_path(self, tmp_path):
        p = tmp_path / "packages.yaml"
        p.write_text("apt_groups:\n  - id: only\n    packages: [htop]\n", encoding="utf-8")
        groups = build_groups(load_packages_manifest(str(p)), SetupConfig())
        assert [g.group_id for g in groups] == ["only"]
        assert isinstance(groups[0], AllOf)
