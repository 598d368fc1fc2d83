"""``.et`` entity prefab generation.

A prefab is a root entity block with an ``ID`` and an optional parent
reference, holding its components in a ``components`` block::

    GenericEntity : "{GUID}Prefabs/Base.et"
    {
    	ID "0123456789ABCDEF"
    	components
    	{
    		MeshObject "{89ABCDEF01234567}"
    		{
    			Object ""
    		}
    	}
    }
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from enfusion_mcp.formats.enfusion_text import Node, create_node, find_child, serialize
from enfusion_mcp.formats.guid import generate_guid

EDITABLE_COMPONENT = "SCR_EditableEntityComponent"


class PrefabType(str, Enum):
    """Supported prefab templates."""
    CHARACTER = "character"
    VEHICLE = "vehicle"
    WEAPON = "weapon"
    SPAWNPOINT = "spawnpoint"
    GAMEMODE = "gamemode"
    INTERACTIVE = "interactive"
    GENERIC = "generic"


class ComponentDef(BaseModel):
    """A component to add to the prefab."""

    type: str = Field(..., min_length=1, description='Component class, e.g. "RigidBody"')
    properties: dict[str, str] = Field(
        default_factory=dict, description="Component property key/value pairs"
    )


class PrefabTypeInfo(NamedTuple):
    entity_type: str
    subdirectory: str
    default_components: tuple[ComponentDef, ...]


def _components(*specs: tuple[str, dict[str, str]]) -> tuple[ComponentDef, ...]:
    return tuple(ComponentDef(type=kind, properties=props) for kind, props in specs)


PREFAB_TYPE_INFO: dict[PrefabType, PrefabTypeInfo] = {
    PrefabType.CHARACTER: PrefabTypeInfo(
        "SCR_ChimeraCharacter",
        "Prefabs/Characters",
        _components(
            ("InventoryStorageManagerComponent", {}),
            ("SCR_CharacterControllerComponent", {}),
        ),
    ),
    PrefabType.VEHICLE: PrefabTypeInfo(
        "Vehicle",
        "Prefabs/Vehicles",
        _components(("VehicleControllerComponent", {}), ("MeshObject", {})),
    ),
    PrefabType.WEAPON: PrefabTypeInfo(
        "Weapon_Base",
        "Prefabs/Weapons",
        _components(("WeaponComponent", {}), ("MeshObject", {})),
    ),
    PrefabType.SPAWNPOINT: PrefabTypeInfo(
        "GenericEntity", "Prefabs/Systems", _components(("SCR_SpawnPoint", {}))
    ),
    PrefabType.GAMEMODE: PrefabTypeInfo(
        "GenericEntity",
        "Prefabs/Systems",
        _components(("SCR_BaseGameMode", {}), ("SCR_RespawnSystemComponent", {})),
    ),
    PrefabType.INTERACTIVE: PrefabTypeInfo(
        "GenericEntity",
        "Prefabs/Props",
        _components(
            ("MeshObject", {"Object": ""}),
            ("RigidBody", {"ModelGeometry": "1"}),
            ("ActionsManagerComponent", {}),
        ),
    ),
    PrefabType.GENERIC: PrefabTypeInfo("GenericEntity", "Prefabs", ()),
}


class PrefabOptions(BaseModel):
    """Pydantic model describing the prefab to generate."""

    name: str = Field(..., min_length=1, description="Prefab name, used for the filename")
    prefab_type: PrefabType
    parent_prefab: Optional[str] = Field(
        default=None,
        description='Parent prefab to inherit from, e.g. "{GUID}Prefabs/Weapons/AK47.et"',
    )
    components: list[ComponentDef] = Field(
        default_factory=list, description="Components added after the type's defaults"
    )
    description: Optional[str] = Field(
        default=None, description="Game Master display name (m_sDisplayName)"
    )


def build_prefab(opts: PrefabOptions) -> Node:
    """Build the entity node tree for *opts*.

    Every component gets a fresh ``{GUID}`` instance id.  A description is
    stored as ``m_sDisplayName`` on the editable entity component, which is
    added when neither the defaults nor *opts* provide one.
    """
    info = PREFAB_TYPE_INFO[opts.prefab_type]
    root = create_node(
        info.entity_type,
        inheritance=opts.parent_prefab or None,
        properties=[("ID", generate_guid())],
    )

    components = create_node(
        "components",
        children=[_component_node(c) for c in (*info.default_components, *opts.components)],
    )
    if opts.description:
        editable = find_child(components, EDITABLE_COMPONENT)
        if editable is None:
            editable = components.add_child(_component_node(ComponentDef(type=EDITABLE_COMPONENT)))
        editable.add_property("m_sDisplayName", opts.description)

    if components.children:
        root.add_child(components)
    return root


def generate_prefab(opts: PrefabOptions) -> str:
    """Generate the text of an ``.et`` prefab file."""
    return serialize(build_prefab(opts))


def prefab_subdirectory(prefab_type: PrefabType | str) -> str:
    """Addon-relative directory where prefabs of *prefab_type* live."""
    return PREFAB_TYPE_INFO[PrefabType(prefab_type)].subdirectory


def prefab_filename(name: str) -> str:
    return f"{name}.et"


def needs_mesh_model(prefab_type: PrefabType | str) -> bool:
    """Whether the prefab carries a ``MeshObject`` that must be given a model."""
    return PrefabType(prefab_type) in (PrefabType.INTERACTIVE, PrefabType.GENERIC)


def _component_node(component: ComponentDef) -> Node:
    return create_node(
        component.type,
        instance_id=f"{{{generate_guid()}}}",
        properties=list(component.properties.items()),
    )
