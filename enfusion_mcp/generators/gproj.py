"""``.gproj`` project file generation for Arma Reforger addons."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from enfusion_mcp.formats.enfusion_text import Node, create_node, serialize
from enfusion_mcp.formats.guid import BASE_GAME_GUID, generate_guid, is_guid
from enfusion_mcp.formats.ordered_set import OrderedSet

PLATFORM_CONFIGS: tuple[str, ...] = ("PC", "HEADLESS")

WORKBENCH_DEFINES: tuple[str, ...] = ("PLATFORM_WINDOWS", "ENF_WB", "WORKBENCH")
GAME_DEFINES: tuple[str, ...] = ("PLATFORM_WINDOWS",)


class GprojOptions(BaseModel):
    """Pydantic model describing the project file to generate."""

    name: str = Field(..., min_length=1, description="Addon name, used as ID and filename")
    title: Optional[str] = Field(default=None, description="Human-readable title; defaults to name")
    guid: Optional[str] = Field(default=None, description="Project GUID; generated when omitted")
    dependencies: list[str] = Field(
        default_factory=list,
        description="Extra dependency GUIDs. The base game is always included.",
    )
    include_script_config: bool = Field(
        default=False,
        description="Add ScriptProjectManagerSettings with workbench/game defines under PC",
    )

    @field_validator("guid")
    @classmethod
    def _check_guid(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_guid(value):
            raise ValueError("GUID must be 16 uppercase hexadecimal characters")
        return value


def build_gproj(opts: GprojOptions) -> Node:
    """Build the ``GameProject`` node tree for *opts*."""
    guid = opts.guid or generate_guid()
    title = opts.title if opts.title is not None else opts.name

    deps: OrderedSet[str] = OrderedSet([BASE_GAME_GUID])
    deps.update(opts.dependencies)

    root = create_node(
        "GameProject",
        properties=[("ID", opts.name), ("GUID", guid), ("TITLE", title)],
        children=[create_node("Dependencies", values=deps.to_list())],
    )

    configurations = root.add_child(create_node("Configurations"))
    for platform in PLATFORM_CONFIGS:
        config = configurations.add_child(create_node("GameProjectConfig", instance_id=platform))
        if platform == "PC" and opts.include_script_config:
            config.add_child(_script_settings())

    return root


def generate_gproj(opts: GprojOptions) -> str:
    """Generate the text of a ``.gproj`` file."""
    return serialize(build_gproj(opts))


def gproj_filename(name: str) -> str:
    return f"{name}.gproj"


def _script_settings() -> Node:
    def defines(config_name: str, names: tuple[str, ...]) -> Node:
        return create_node(
            "ScriptConfigurationClass",
            instance_id=config_name,
            children=[create_node("Defines", values=list(names))],
        )

    return create_node(
        "ScriptProjectManagerSettings",
        instance_id=f"{{{generate_guid()}}}",
        children=[
            create_node(
                "Configurations",
                children=[
                    defines("workbench", WORKBENCH_DEFINES),
                    defines("game", GAME_DEFINES),
                ],
            )
        ],
    )
