"""``.conf`` config file generation.

Supports four config types, each rooted at a different script class:

* ``mission-header``    -- ``SCR_MissionHeader`` (scenario definition)
* ``faction``           -- ``SCR_Faction``
* ``entity-catalog``    -- ``SCR_EntityCatalog`` (categorised prefab list)
* ``editor-placeables`` -- ``SCR_PlaceableEntitiesRegistry`` (Game Master content)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, NamedTuple, Optional

from pydantic import BaseModel, Field

from enfusion_mcp.formats.enfusion_text import Node, create_node, serialize, set_property


class ConfigType(str, Enum):
    """Supported config templates."""
    MISSION_HEADER = "mission-header"
    FACTION = "faction"
    ENTITY_CATALOG = "entity-catalog"
    EDITOR_PLACEABLES = "editor-placeables"


class ConfigTypeInfo(NamedTuple):
    root_type: str
    subdirectory: str


CONFIG_TYPE_INFO: dict[ConfigType, ConfigTypeInfo] = {
    ConfigType.MISSION_HEADER: ConfigTypeInfo("SCR_MissionHeader", "Missions"),
    ConfigType.FACTION: ConfigTypeInfo("SCR_Faction", "Configs/Factions"),
    ConfigType.ENTITY_CATALOG: ConfigTypeInfo("SCR_EntityCatalog", "Configs/EntityCatalogs"),
    ConfigType.EDITOR_PLACEABLES: ConfigTypeInfo(
        "SCR_PlaceableEntitiesRegistry", "Configs/Editor"
    ),
}

DEFAULT_FACTION_COLOR = "0,100,200,255"
DEFAULT_CATEGORY = "Custom"


class ConfigOptions(BaseModel):
    """Pydantic model describing the config file to generate."""

    config_type: ConfigType
    name: str = Field(..., min_length=1, description="Config name, used for the filename")
    faction_key: Optional[str] = Field(default=None, description="Faction key (faction)")
    faction_color: Optional[str] = Field(
        default=None, description='RGBA string such as "0,100,200,255" (faction)'
    )
    flag_path: Optional[str] = Field(default=None, description="Flag texture path (faction)")
    world_path: Optional[str] = Field(default=None, description=".ent world file (mission-header)")
    scenario_name: Optional[str] = Field(default=None, description="Display name (mission-header)")
    scenario_description: Optional[str] = Field(
        default=None, description="Scenario description (mission-header)"
    )
    prefab_refs: list[str] = Field(
        default_factory=list,
        description="Prefab resource paths (entity-catalog, editor-placeables)",
    )
    category_name: Optional[str] = Field(
        default=None, description="Category name (entity-catalog, editor-placeables)"
    )


def build_config(opts: ConfigOptions) -> Node:
    """Build the node tree for *opts*."""
    root = create_node(CONFIG_TYPE_INFO[opts.config_type].root_type)
    _BUILDERS[opts.config_type](root, opts)
    return root


def generate_config(opts: ConfigOptions) -> str:
    """Generate the text of a ``.conf`` file."""
    return serialize(build_config(opts))


def config_subdirectory(config_type: ConfigType | str) -> str:
    """Addon-relative directory where configs of *config_type* live."""
    return CONFIG_TYPE_INFO[ConfigType(config_type)].subdirectory


def config_filename(name: str) -> str:
    return f"{name}.conf"


def derive_faction_key(name: str) -> str:
    """``"US Army"`` -> ``"us_army"``."""
    return re.sub(r"[^a-z0-9]+", "_", name.lower())


# ---------------------------------------------------------------------------
# Per-type builders
# ---------------------------------------------------------------------------


def _build_mission_header(root: Node, opts: ConfigOptions) -> None:
    set_property(root, "m_sName", opts.scenario_name or opts.name)
    set_property(root, "m_sDescription", opts.scenario_description or "")
    set_property(root, "m_sWorldFile", opts.world_path or "")
    set_property(root, "m_sIcon", "")
    set_property(root, "m_bIsModded", "1")


def _build_faction(root: Node, opts: ConfigOptions) -> None:
    set_property(root, "m_sKey", opts.faction_key or derive_faction_key(opts.name))
    set_property(root, "m_sName", opts.name)
    set_property(root, "m_Color", opts.faction_color or DEFAULT_FACTION_COLOR)
    set_property(root, "m_sFlagPath", opts.flag_path or "")


def _entry_list_builder(entry_type: str) -> Callable[[Node, ConfigOptions], None]:
    def build(root: Node, opts: ConfigOptions) -> None:
        set_property(root, "m_sCategoryName", opts.category_name or DEFAULT_CATEGORY)
        if not opts.prefab_refs:
            return
        entries = root.add_child(create_node("m_aEntries"))
        for ref in opts.prefab_refs:
            entries.add_child(create_node(entry_type, properties=[("m_sPrefab", ref)]))

    return build


_BUILDERS: dict[ConfigType, Callable[[Node, ConfigOptions], None]] = {
    ConfigType.MISSION_HEADER: _build_mission_header,
    ConfigType.FACTION: _build_faction,
    ConfigType.ENTITY_CATALOG: _entry_list_builder("SCR_EntityCatalogEntry"),
    ConfigType.EDITOR_PLACEABLES: _entry_list_builder("SCR_PlaceableEntity"),
}
