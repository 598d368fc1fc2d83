"""``.st`` string table generation (XML format)."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from .renderer import TemplateRenderer

STRING_TABLE_TEMPLATE = "stringtable.st.j2"


class StringTableEntry(BaseModel):
    """A single localised string."""

    key: str = Field(..., min_length=1, description='String key, e.g. "STR_MyMod_FactionName"')
    original: str = Field(default="", description="English (original) text")


class StringTableOptions(BaseModel):
    """Pydantic model describing the string table to generate."""

    mod_name: str = Field(..., min_length=1)
    entries: list[StringTableEntry] = Field(default_factory=list)


def _context(opts: StringTableOptions) -> dict[str, object]:
    return {"mod_name": opts.mod_name, "entries": opts.entries}


def generate_string_table(
    opts: StringTableOptions, renderer: TemplateRenderer | None = None
) -> str:
    """Generate the text of a ``.st`` string table."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(STRING_TABLE_TEMPLATE, _context(opts))


def derive_string_key(mod_name: str, context: str, label: str) -> str:
    """Build a string key from its parts.

    ``derive_string_key("My Mod", "Faction", "Name")`` -> ``"STR_MyMod_Faction_Name"``
    """

    def clean(part: str) -> str:
        return re.sub(r"[^a-zA-Z0-9]+", "", part)

    return f"STR_{clean(mod_name)}_{clean(context)}_{clean(label)}"


def string_table_filename(mod_name: str) -> str:
    return f"{mod_name}.st"
