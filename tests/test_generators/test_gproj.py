"""Tests for .gproj project file generation.

Covers:
- Exact reference layout end to end
- Base game dependency always first, deduplication
- Title / GUID defaults
- Optional ScriptProjectManagerSettings block
- Option validation
"""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from enfusion_mcp.formats.enfusion_text import find_child, get_property
from enfusion_mcp.formats.guid import BASE_GAME_GUID, is_guid
from enfusion_mcp.generators.gproj import (
    GAME_DEFINES,
    WORKBENCH_DEFINES,
    GprojOptions,
    build_gproj,
    generate_gproj,
    gproj_filename,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class TestGenerateGproj:
    def test_reference_layout(self, reference_gproj):
        text = generate_gproj(
            GprojOptions(
                name="MyAddon",
                title="My Addon",
                guid="6156F2F771D5D73D",
                dependencies=["1A2B3C4D5E6F7081"],
            )
        )
        assert text == reference_gproj

    def test_deterministic_with_fixed_guid(self):
        opts = GprojOptions(name="MyAddon", guid="6156F2F771D5D73D")
        assert generate_gproj(opts) == generate_gproj(opts)

    def test_generated_guid(self):
        root = build_gproj(GprojOptions(name="MyAddon"))
        assert is_guid(get_property(root, "GUID"))

    def test_title_defaults_to_name(self):
        root = build_gproj(GprojOptions(name="MyAddon"))
        assert get_property(root, "TITLE") == "MyAddon"

    def test_title_with_quotes_is_escaped(self):
        text = generate_gproj(GprojOptions(name="MyAddon", title='The "Best" Addon'))
        assert '\tTITLE "The \\"Best\\" Addon"\n' in text

    def test_filename(self):
        assert gproj_filename("MyAddon") == "MyAddon.gproj"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


class TestDependencies:
    def test_base_game_only(self):
        root = build_gproj(GprojOptions(name="A"))
        assert find_child(root, "Dependencies").values == [BASE_GAME_GUID]

    def test_base_game_first(self):
        root = build_gproj(GprojOptions(name="A", dependencies=["1111111111111111"]))
        assert find_child(root, "Dependencies").values == [BASE_GAME_GUID, "1111111111111111"]

    def test_duplicates_removed_in_first_seen_order(self):
        deps = ["2222222222222222", BASE_GAME_GUID, "1111111111111111", "2222222222222222"]
        root = build_gproj(GprojOptions(name="A", dependencies=deps))
        assert find_child(root, "Dependencies").values == [
            BASE_GAME_GUID,
            "2222222222222222",
            "1111111111111111",
        ]


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


class TestConfigurations:
    def test_platform_blocks_are_empty_by_default(self):
        root = build_gproj(GprojOptions(name="A"))
        configs = find_child(root, "Configurations")
        assert [c.instance_id for c in configs.children] == ["PC", "HEADLESS"]
        assert all(c.children == [] for c in configs.children)

    def test_script_config_under_pc(self):
        root = build_gproj(GprojOptions(name="A", include_script_config=True))
        configs = find_child(root, "Configurations")
        pc = find_child(configs, "GameProjectConfig", "PC")
        headless = find_child(configs, "GameProjectConfig", "HEADLESS")

        settings = find_child(pc, "ScriptProjectManagerSettings")
        assert settings is not None
        assert re.fullmatch(r"\{[0-9A-F]{16}\}", settings.instance_id)
        assert headless.children == []

        script_configs = find_child(settings, "Configurations")
        workbench = find_child(script_configs, "ScriptConfigurationClass", "workbench")
        game = find_child(script_configs, "ScriptConfigurationClass", "game")
        assert find_child(workbench, "Defines").values == list(WORKBENCH_DEFINES)
        assert find_child(game, "Defines").values == list(GAME_DEFINES)

    def test_script_config_serialized(self):
        text = generate_gproj(GprojOptions(name="A", include_script_config=True))
        assert re.search(r'\t\t\tScriptProjectManagerSettings "\{[0-9A-F]{16}\}"\n', text)
        assert '\t\t\t\t\t\tDefines\n\t\t\t\t\t\t{\n\t\t\t\t\t\t\t"PLATFORM_WINDOWS"\n' in text


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestGprojOptions:
    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            GprojOptions(name="")

    @pytest.mark.parametrize("guid", ["abc", "6156f2f771d5d73d", "6156F2F771D5D73DX"])
    def test_bad_guid_rejected(self, guid):
        with pytest.raises(ValidationError):
            GprojOptions(name="A", guid=guid)
