"""enfusion-mcp generators -- produce Arma Reforger addon files.

Class-syntax files (``.gproj``, ``.conf``, ``.et``, ``.layout``) are built as
node trees and passed through the Enfusion text serializer; string tables are
rendered from a Jinja2 template and server configs are plain JSON.

Quick usage::

    from enfusion_mcp.generators import GprojOptions, generate_gproj

    text = generate_gproj(GprojOptions(name="MyAddon", dependencies=[...]))
"""

from enfusion_mcp.generators.config import (
    ConfigOptions,
    ConfigType,
    config_filename,
    config_subdirectory,
    generate_config,
)
from enfusion_mcp.generators.gproj import GprojOptions, generate_gproj, gproj_filename
from enfusion_mcp.generators.layout import LayoutOptions, LayoutType, WidgetDef, generate_layout
from enfusion_mcp.generators.localization import (
    StringTableEntry,
    StringTableOptions,
    derive_string_key,
    generate_string_table,
)
from enfusion_mcp.generators.prefab import ComponentDef, PrefabOptions, PrefabType, generate_prefab
from enfusion_mcp.generators.renderer import TemplateRenderer
from enfusion_mcp.generators.server_config import ServerConfigOptions, generate_server_config

__all__ = [
    "ComponentDef",
    "ConfigOptions",
    "ConfigType",
    "GprojOptions",
    "LayoutOptions",
    "LayoutType",
    "PrefabOptions",
    "PrefabType",
    "ServerConfigOptions",
    "StringTableEntry",
    "StringTableOptions",
    "TemplateRenderer",
    "WidgetDef",
    "config_filename",
    "config_subdirectory",
    "derive_string_key",
    "generate_config",
    "generate_gproj",
    "generate_layout",
    "generate_prefab",
    "generate_server_config",
    "generate_string_table",
    "gproj_filename",
]
