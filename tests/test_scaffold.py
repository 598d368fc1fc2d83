"""Tests for addon scaffolding (enfusion_mcp.scaffold)."""

from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from enfusion_mcp.config import Config
from enfusion_mcp.formats.enfusion_text import SerializationError
from enfusion_mcp.formats.guid import BASE_GAME_GUID
from enfusion_mcp.scaffold import ADDON_DIRECTORIES, ModScaffolder, ScaffoldError, derive_prefix


pytestmark = pytest.mark.unit


class TestDerivePrefix:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("MyCustomMod", "MCM"),
            ("ZombieDefense", "ZD"),
            ("AVeryLongCamelCaseName", "AVL"),
            ("zombies", "ZOM"),
        ],
    )
    def test_derive(self, name, expected):
        assert derive_prefix(name) == expected


class TestModScaffolder:
    async def test_creates_layout(self, config: Config, addons_dir: Path):
        result = await ModScaffolder(config).create("MyAddon", title="My Addon")

        addon = addons_dir / "MyAddon"
        assert result.addon_dir == addon.resolve()
        for directory in ADDON_DIRECTORIES:
            assert (addon / directory).is_dir()
        assert result.created_files == ["MyAddon.gproj", "Language/MyAddon.st"]

    async def test_gproj_contents(self, config: Config, addons_dir: Path):
        result = await ModScaffolder(config).create(
            "MyAddon", title="My Addon", dependencies=["1A2B3C4D5E6F7081"]
        )
        text = (addons_dir / "MyAddon" / "MyAddon.gproj").read_text(encoding="utf-8")
        assert text.startswith('GameProject\n{\n\tID "MyAddon"\n')
        assert f'\tGUID "{result.guid}"\n' in text
        assert f'\t\t"{BASE_GAME_GUID}"\n\t\t"1A2B3C4D5E6F7081"\n' in text
        assert re.fullmatch(r"[0-9A-F]{16}", result.guid)

    async def test_string_table(self, config: Config, addons_dir: Path):
        await ModScaffolder(config).create("MyAddon", description="Adds things & stuff")
        text = (addons_dir / "MyAddon" / "Language" / "MyAddon.st").read_text(encoding="utf-8")
        assert '<Key Id="STR_MyAddon_Mod_Title">' in text
        assert "<Original>MyAddon</Original>" in text
        assert "<Original>Adds things &amp; stuff</Original>" in text

    async def test_without_string_table(self, config: Config, addons_dir: Path):
        result = await ModScaffolder(config).create("MyAddon", include_string_table=False)
        assert result.created_files == ["MyAddon.gproj"]
        assert not (addons_dir / "MyAddon" / "Language" / "MyAddon.st").exists()

    async def test_explicit_project_path(self, tmp_path: Path):
        target = tmp_path / "elsewhere"
        target.mkdir()
        await ModScaffolder(Config()).create("MyAddon", project_path=target)
        assert (target / "MyAddon" / "MyAddon.gproj").is_file()

    async def test_prefix(self, config: Config):
        result = await ModScaffolder(config).create("ZombieDefense")
        assert result.prefix == "ZD"
        result = await ModScaffolder(config).create("Other", prefix="XYZ")
        assert result.prefix == "XYZ"

    async def test_no_project_path(self):
        with pytest.raises(ScaffoldError, match="No project path"):
            await ModScaffolder(Config()).create("MyAddon")

    async def test_existing_directory(self, config: Config, addons_dir: Path):
        (addons_dir / "MyAddon").mkdir()
        with pytest.raises(ScaffoldError, match="already exists"):
            await ModScaffolder(config).create("MyAddon")

    @pytest.mark.parametrize("name", ["..", "a/b", "bad:name"])
    async def test_unsafe_name(self, config: Config, name: str):
        with pytest.raises(ScaffoldError, match="Invalid addon name"):
            await ModScaffolder(config).create(name)

    async def test_invalid_prefix(self, config: Config, addons_dir: Path):
        with pytest.raises(ScaffoldError):
            await ModScaffolder(config).create("MyAddon", prefix="1bad")
        assert not (addons_dir / "MyAddon").exists()

    async def test_summary(self, config: Config):
        result = await ModScaffolder(config).create("MyAddon")
        summary = result.summary()
        assert summary.startswith("## Addon Created: MyAddon")
        assert f"GUID: {result.guid}" in summary
        assert "  Scripts/Game/" in summary
        assert "- Language/MyAddon.st" in summary

    async def test_whitespace_project_path_falls_back_to_config(
        self, config: Config, addons_dir: Path
    ):
        await ModScaffolder(config).create("MyAddon", project_path="   ")
        assert (addons_dir / "MyAddon" / "MyAddon.gproj").is_file()


class TestScaffoldFailures:
    async def test_unserializable_title_leaves_nothing(self, config: Config, addons_dir: Path):
        with pytest.raises(SerializationError):
            await ModScaffolder(config).create("MyAddon", title="Line\nBreak")
        assert not (addons_dir / "MyAddon").exists()

    async def test_retry_after_failure_succeeds(self, config: Config, addons_dir: Path):
        scaffolder = ModScaffolder(config)
        with pytest.raises(SerializationError):
            await scaffolder.create("MyAddon", dependencies=["1A2B3C4D5E6F7081\n"])
        result = await scaffolder.create("MyAddon", title="Line Break")
        assert (addons_dir / "MyAddon" / "MyAddon.gproj").is_file()
        assert result.created_files == ["MyAddon.gproj", "Language/MyAddon.st"]

    async def test_write_failure_removes_partial_addon(self, config: Config, addons_dir: Path):
        with patch("enfusion_mcp.scaffold.write_text_file", side_effect=OSError("disk full")):
            with pytest.raises(ScaffoldError, match="disk full"):
                await ModScaffolder(config).create("MyAddon")
        assert not (addons_dir / "MyAddon").exists()
