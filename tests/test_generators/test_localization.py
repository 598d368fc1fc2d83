"""Tests for .st string table generation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from enfusion_mcp.generators.localization import (
    StringTableEntry,
    StringTableOptions,
    derive_string_key,
    generate_string_table,
    string_table_filename,
)


pytestmark = pytest.mark.unit


class TestGenerateStringTable:
    def test_layout(self, renderer):
        opts = StringTableOptions(
            mod_name="MyMod",
            entries=[StringTableEntry(key="STR_MyMod_Mod_Title", original="My Mod")],
        )
        assert generate_string_table(opts, renderer) == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<StringTable>\n"
            '\t<Package Name="MyMod">\n'
            '\t\t<Key Id="STR_MyMod_Mod_Title">\n'
            "\t\t\t<Original>My Mod</Original>\n"
            "\t\t</Key>\n"
            "\t</Package>\n"
            "</StringTable>\n"
        )

    def test_no_entries(self, renderer):
        text = generate_string_table(StringTableOptions(mod_name="MyMod"), renderer)
        assert "<Key" not in text
        assert '\t<Package Name="MyMod">\n\t</Package>\n' in text

    def test_entry_order_preserved(self, renderer):
        entries = [StringTableEntry(key=k, original=k) for k in ("STR_C", "STR_A", "STR_B")]
        text = generate_string_table(StringTableOptions(mod_name="M", entries=entries), renderer)
        assert text.index("STR_C") < text.index("STR_A") < text.index("STR_B")

    def test_xml_escaping(self, renderer):
        opts = StringTableOptions(
            mod_name="A&B",
            entries=[StringTableEntry(key="STR_X", original='Fish & "Chips" <1>')],
        )
        text = generate_string_table(opts, renderer)
        assert 'Name="A&amp;B"' in text
        assert "<Original>Fish &amp; &quot;Chips&quot; &lt;1&gt;</Original>" in text

    def test_default_renderer(self):
        text = generate_string_table(StringTableOptions(mod_name="M"))
        assert text.startswith("<?xml")


class TestHelpers:
    def test_derive_string_key(self):
        assert derive_string_key("My Mod", "Faction", "Name") == "STR_MyMod_Faction_Name"

    def test_derive_string_key_strips_punctuation(self):
        assert derive_string_key("Zombie-Defense!", "Mod", "Title") == "STR_ZombieDefense_Mod_Title"

    def test_filename(self):
        assert string_table_filename("MyMod") == "MyMod.st"

    def test_empty_key_rejected(self):
        with pytest.raises(ValidationError):
            StringTableEntry(key="")
