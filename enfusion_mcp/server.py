"""
MCP Server - Expose enfusion-mcp generators as MCP tools.

This server exposes the following tools to MCP clients:
- mod_create: Scaffold a new addon folder with its .gproj
- gproj_create: Generate a .gproj project file
- config_create: Generate a .conf config (and write it into an addon)
- string_table_create: Generate a .st string table
- server_config_create: Generate a dedicated server JSON config
- prefab_create: Generate an .et entity prefab
- layout_create: Generate a .layout UI widget tree
- guid_generate: Generate fresh resource GUIDs
- api_lookup: Look up a script class in the static API index
- api_search: Search classes, methods and groups in the API index
- wiki_search: Search the tutorial and guide pages

Usage::

    python -m enfusion_mcp.server
    enfusion-mcp --project-path "C:/Users/me/Documents/My Games/ArmaReforgerWorkbench/addons"
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Literal, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from enfusion_mcp import __version__
from enfusion_mcp.config import Config, load_config
from enfusion_mcp.formats.enfusion_text import SerializationError
from enfusion_mcp.formats.guid import generate_guid
from enfusion_mcp.generators.config import (
    ConfigOptions,
    ConfigType,
    config_filename,
    config_subdirectory,
    generate_config,
)
from enfusion_mcp.generators.gproj import GprojOptions, generate_gproj
from enfusion_mcp.generators.layout import (
    LAYOUT_SUBDIRECTORY,
    LayoutOptions,
    LayoutType,
    WidgetDef,
    generate_layout,
    layout_filename,
)
from enfusion_mcp.generators.localization import (
    StringTableEntry,
    StringTableOptions,
    generate_string_table,
)
from enfusion_mcp.generators.prefab import (
    ComponentDef,
    PrefabOptions,
    PrefabType,
    generate_prefab,
    needs_mesh_model,
    prefab_filename,
    prefab_subdirectory,
)
from enfusion_mcp.generators.renderer import TemplateRenderer, write_text_file
from enfusion_mcp.generators.server_config import ServerConfigOptions, generate_server_config
from enfusion_mcp.index.loader import IndexData, MethodMatch, load_index
from enfusion_mcp.index.models import ClassInfo, ClassSource, GroupInfo, WikiPage, WikiSource
from enfusion_mcp.scaffold import ModScaffolder, ScaffoldError
from enfusion_mcp.utils import (
    UnsafePathError,
    print_error,
    print_info,
    print_summary_table,
    safe_path,
    validate_filename,
)

SERVER_NAME = "enfusion-mcp"

MAX_GUIDS = 100
MAX_SEARCH_RESULTS = 50
MAX_WIKI_RESULTS = 10
MAX_PAGE_CHARS = 2000

# ValueError covers pydantic ValidationError and UnsafePathError.
_GENERATION_ERRORS = (SerializationError, ValueError)


def _fenced(content: str, lang: str = "") -> str:
    return f"```{lang}\n{content.rstrip(chr(10))}\n```"


class EnfusionTools:
    """
    Tool implementations shared by the MCP server.

    Every tool returns text.  Invalid input is reported as an error message
    in the result instead of raising, so the calling agent can correct it.
    """

    def __init__(
        self,
        config: Config,
        index: IndexData | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.index = index if index is not None else IndexData()
        self.renderer = renderer or TemplateRenderer()
        self.scaffolder = ModScaffolder(config, self.renderer)

    # ------------------------------------------------------------------
    # Project files
    # ------------------------------------------------------------------

    async def mod_create(
        self,
        name: str,
        description: str = "",
        title: Optional[str] = None,
        prefix: Optional[str] = None,
        dependencies: Optional[list[str]] = None,
        project_path: Optional[str] = None,
    ) -> str:
        """Scaffold a new Arma Reforger addon (mod): folders, .gproj and string table."""
        try:
            result = await self.scaffolder.create(
                name,
                title=title,
                description=description,
                prefix=prefix,
                dependencies=dependencies,
                project_path=project_path,
            )
        except (ScaffoldError, *_GENERATION_ERRORS, OSError) as exc:
            print_error(f"mod_create failed: {exc}")
            return f"Error creating addon: {exc}"
        return result.summary()

    def gproj_create(
        self,
        name: str,
        title: Optional[str] = None,
        guid: Optional[str] = None,
        dependencies: Optional[list[str]] = None,
        include_script_config: bool = False,
    ) -> str:
        """Generate a .gproj project file. The base game dependency is always included."""
        try:
            content = generate_gproj(
                GprojOptions(
                    name=name,
                    title=title,
                    guid=guid,
                    dependencies=dependencies or [],
                    include_script_config=include_script_config,
                )
            )
        except _GENERATION_ERRORS as exc:
            return f"Error generating project file: {exc}"
        return _fenced(content)

    def config_create(
        self,
        config_type: ConfigType,
        name: str,
        faction_key: Optional[str] = None,
        faction_color: Optional[str] = None,
        flag_path: Optional[str] = None,
        world_path: Optional[str] = None,
        scenario_name: Optional[str] = None,
        scenario_description: Optional[str] = None,
        prefab_refs: Optional[list[str]] = None,
        category_name: Optional[str] = None,
        project_path: Optional[str] = None,
    ) -> str:
        """Create a .conf config: mission header, faction, entity catalog or editor placeables.

        The file is written under the addon root when one is given or
        configured; an existing file is never overwritten.
        """
        try:
            validate_filename(name)
            opts = ConfigOptions(
                config_type=config_type,
                name=name,
                faction_key=faction_key,
                faction_color=faction_color,
                flag_path=flag_path,
                world_path=world_path,
                scenario_name=scenario_name,
                scenario_description=scenario_description,
                prefab_refs=prefab_refs or [],
                category_name=category_name,
            )
            content = generate_config(opts)
        except _GENERATION_ERRORS as exc:
            return f"Error creating config: {exc}"
        return self._write_generated(
            "config",
            config_subdirectory(opts.config_type),
            config_filename(name),
            content,
            project_path,
        )

    def prefab_create(
        self,
        name: str,
        prefab_type: PrefabType,
        parent_prefab: Optional[str] = None,
        components: Optional[list[ComponentDef]] = None,
        description: Optional[str] = None,
        project_path: Optional[str] = None,
    ) -> str:
        """Create an Entity Template (.et) prefab: character, vehicle, weapon, spawn point,
        game mode, interactive prop or generic entity.

        Visible prefabs need their MeshObject 'Object' property set to a .xob
        model path, e.g. '{5F4C4181F065B447}Assets/Props/Military/Barrels/BarrelGreen_01.xob'.
        """
        try:
            validate_filename(name)
            opts = PrefabOptions(
                name=name,
                prefab_type=prefab_type,
                parent_prefab=parent_prefab,
                components=components or [],
                description=description,
            )
            content = generate_prefab(opts)
        except _GENERATION_ERRORS as exc:
            return f"Error creating prefab: {exc}"
        text = self._write_generated(
            "prefab",
            prefab_subdirectory(opts.prefab_type),
            prefab_filename(name),
            content,
            project_path,
        )
        if needs_mesh_model(opts.prefab_type) and not text.startswith("Error"):
            text += (
                "\n\nNOTE: the MeshObject 'Object' property is empty. Set it to a base game "
                ".xob model path or the entity will be invisible in-game."
            )
        return text

    def layout_create(
        self,
        name: str,
        layout_type: LayoutType,
        root_widget_type: Optional[str] = None,
        anchor: Optional[str] = None,
        offset: Optional[str] = None,
        widgets: Optional[list[WidgetDef]] = None,
        project_path: Optional[str] = None,
    ) -> str:
        """Create a UI .layout widget tree: HUD element, menu, dialog, list or custom."""
        try:
            validate_filename(name)
            opts = LayoutOptions(
                name=name,
                layout_type=layout_type,
                root_widget_type=root_widget_type,
                anchor=anchor,
                offset=offset,
                widgets=widgets or [],
            )
            content = generate_layout(opts)
        except _GENERATION_ERRORS as exc:
            return f"Error creating layout: {exc}"
        return self._write_generated(
            "layout", LAYOUT_SUBDIRECTORY, layout_filename(name), content, project_path
        )

    def _write_generated(
        self,
        kind: str,
        subdir: str,
        filename: str,
        content: str,
        project_path: Optional[str],
    ) -> str:
        """Write *content* to ``<addon>/<subdir>/<filename>`` and describe the outcome.

        Without a project path the content is only returned.  An existing
        file is never overwritten.
        """
        if project_path and project_path.strip():
            base = project_path
        elif self.config.has_project_path:
            base = self.config.project_path
        else:
            return (
                f"Generated {kind} (no project path configured -- not written to disk):\n\n"
                f"{_fenced(content)}\n\n"
                "Set ENFUSION_PROJECT_PATH to write files automatically."
            )

        try:
            target = safe_path(Path(base, subdir), filename)
            if target.exists():
                return (
                    f"File already exists: {subdir}/{filename}\n\n"
                    f"Generated content (not written):\n\n{_fenced(content)}"
                )
            write_text_file(target, content)
        except (UnsafePathError, OSError) as exc:
            print_error(f"{kind}_create failed: {exc}")
            return f"Error creating {kind}: {exc}"
        return f"{kind.capitalize()} created: {subdir}/{filename}\n\n{_fenced(content)}"

    def string_table_create(self, mod_name: str, entries: list[StringTableEntry]) -> str:
        """Generate a .st string table (XML) for the given keys and English texts."""
        try:
            opts = StringTableOptions(mod_name=mod_name, entries=entries)
        except ValidationError as exc:
            return f"Error generating string table: {exc}"
        return _fenced(generate_string_table(opts, self.renderer), "xml")

    def server_config_create(
        self,
        name: str,
        mod_name: Optional[str] = None,
        mod_id: Optional[str] = None,
        scenario_id: str = "",
        max_players: int = 32,
        port: int = 2001,
        a2s_port: int = 17777,
        visible: bool = False,
        password: str = "",
    ) -> str:
        """Generate a dedicated server JSON config for local testing."""
        try:
            opts = ServerConfigOptions(
                name=name,
                mod_name=mod_name,
                mod_id=mod_id,
                scenario_id=scenario_id,
                max_players=max_players,
                port=port,
                a2s_port=a2s_port,
                visible=visible,
                password=password,
            )
        except ValidationError as exc:
            return f"Error generating server config: {exc}"
        return _fenced(generate_server_config(opts), "json")

    def guid_generate(self, count: int = 1) -> str:
        """Generate one or more 16-character uppercase hex resource GUIDs."""
        if count < 1 or count > MAX_GUIDS:
            return f"Error: count must be between 1 and {MAX_GUIDS}"
        return "\n".join(generate_guid() for _ in range(count))

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    def api_lookup(self, class_name: str) -> str:
        """Look up an Enfusion/Arma script class by name in the API index."""
        info = self.index.get_class(class_name)
        if info is None:
            return f'Class not found: "{class_name}"'
        return _describe_class(info, self.index.subclasses(info.name))

    def api_search(
        self,
        query: str,
        type: Literal["class", "method", "group", "any"] = "any",
        source: Literal["enfusion", "arma", "all"] = "all",
        limit: int = 10,
    ) -> str:
        """Search the script API by class name, method name, group or keyword."""
        if limit < 1 or limit > MAX_SEARCH_RESULTS:
            return f"Error: limit must be between 1 and {MAX_SEARCH_RESULTS}"

        if type == "group":
            group = self.index.get_group(query)
            if group is None:
                return f'No group found named "{query}".'
            return _describe_group(group)

        classes = self.index.search_classes(query, source, limit) if type != "method" else []
        methods = self.index.search_methods(query, source, limit) if type != "class" else []
        if type == "any":
            methods = methods[: max(limit - len(classes), 0)]

        if not classes and not methods:
            what = {"class": "classes", "method": "methods"}.get(type)
            if what:
                return f'No {what} found matching "{query}".'
            return f'No results found for "{query}".'

        if len(classes) == 1 and not methods:
            info = classes[0]
            return _describe_class(info, self.index.subclasses(info.name))

        parts = [_summarize_class(info) for info in classes]
        parts.extend(_summarize_method(match) for match in methods)
        return "\n\n---\n\n".join(parts)

    def wiki_search(self, query: str, limit: int = 5) -> str:
        """Search tutorial and guide pages about Enfusion and Arma Reforger modding."""
        if limit < 1 or limit > MAX_WIKI_RESULTS:
            return f"Error: limit must be between 1 and {MAX_WIKI_RESULTS}"
        pages = self.index.search_wiki(query, limit)
        if not pages:
            return (
                f'No wiki/tutorial pages found matching "{query}". Try broader terms like '
                '"replication", "entities", "scripting" or "components".'
            )
        return "\n\n---\n\n".join(_describe_page(page) for page in pages)


_SOURCE_LABELS = {
    ClassSource.ENFUSION: "Enfusion Engine",
    ClassSource.ARMA: "Arma Reforger",
}

_WIKI_LABELS = {
    WikiSource.BISTUDIO_WIKI: "BI Community Wiki",
    WikiSource.ENFUSION: "Enfusion Engine docs",
    WikiSource.ARMA: "Arma Reforger docs",
}

MAX_SUBCLASSES_SHOWN = 10


def _describe_class(info: ClassInfo, subclasses: list[str]) -> str:
    lines = [f"# {info.name}", f"Source: {info.source.value}"]
    if info.group:
        lines.append(f"Group: {info.group}")
    if info.parents:
        lines.append(f"Inherits: {', '.join(info.parents)}")
    if subclasses:
        shown = ", ".join(subclasses[:MAX_SUBCLASSES_SHOWN])
        extra = len(subclasses) - MAX_SUBCLASSES_SHOWN
        lines.append(f"Direct subclasses: {shown}" + (f" ... and {extra} more" if extra > 0 else ""))
    if info.brief:
        lines.extend(["", info.brief])
    if info.methods:
        lines.extend(["", "## Methods"])
        lines.extend(f"- `{m.signature or m.name}` {m.description}".rstrip() for m in info.methods)
    if info.properties:
        lines.extend(["", "## Properties"])
        for prop in info.properties:
            decl = f"{prop.type} {prop.name}" if prop.type else prop.name
            lines.append(f"- `{decl}`")
    if info.docs_url:
        lines.extend(["", f"Docs: {info.docs_url}"])
    return "\n".join(lines)


def _summarize_class(info: ClassInfo) -> str:
    header = f"**Class:** {info.name} ({_SOURCE_LABELS[info.source]}"
    header += f" > {info.group})" if info.group else ")"
    return f"{header}\n{info.brief}".rstrip()


def _summarize_method(match: MethodMatch) -> str:
    owner, method = match.owner, match.method
    label = _SOURCE_LABELS[owner.source] + (f" > {owner.group}" if owner.group else "")
    lines = [f"**Method:** {owner.name}.{method.signature or method.name}"]
    if method.description:
        lines.append(method.description)
    lines.append(f"({label})")
    return "\n".join(lines)


def _describe_group(group: GroupInfo) -> str:
    lines = [f"# {group.name}"]
    if group.description:
        lines.extend(["", group.description])
    if group.classes:
        lines.extend(["", f"## Classes ({len(group.classes)})"])
        lines.extend(f"- {name}" for name in group.classes)
    return "\n".join(lines)


def _describe_page(page: WikiPage) -> str:
    source = _WIKI_LABELS[page.source] + (f" ({page.url})" if page.url else "")
    content = page.content
    if len(content) > MAX_PAGE_CHARS:
        content = (
            f"{content[:MAX_PAGE_CHARS]}\n\n... (truncated, {len(page.content)} chars total)"
        )
    return f"## {page.title}\nSource: {source}\n\n{content}"


# ---------------------------------------------------------------------------
# Server wiring
# ---------------------------------------------------------------------------

_TOOL_NAMES: tuple[str, ...] = (
    "mod_create",
    "gproj_create",
    "config_create",
    "string_table_create",
    "server_config_create",
    "prefab_create",
    "layout_create",
    "guid_generate",
    "api_lookup",
    "api_search",
    "wiki_search",
)


def build_server(config: Config, index: IndexData | None = None) -> FastMCP:
    """Create a FastMCP server with every tool registered.

    Args:
        config: Effective configuration.
        index: Preloaded index; loaded from ``config.data_dir`` when omitted.
    """
    if index is None:
        index = load_index(config.data_dir)

    server = FastMCP(SERVER_NAME)
    tools = EnfusionTools(config, index)
    for name in _TOOL_NAMES:
        server.add_tool(getattr(tools, name), name=name)
    return server


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``enfusion-mcp`` / ``python -m enfusion_mcp.server``."""
    parser = argparse.ArgumentParser(
        description="enfusion-mcp -- Arma Reforger addon generators over MCP (stdio)",
    )
    parser.add_argument(
        "--project-path",
        default=None,
        help="Parent directory for addons (overrides ENFUSION_PROJECT_PATH)",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory containing the API/wiki index (overrides ENFUSION_MCP_DATA_DIR)",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the effective configuration to stderr and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    config = load_config()
    overrides = {}
    if args.project_path:
        overrides["project_path"] = args.project_path
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if overrides:
        config = config.merged(overrides)

    if args.show_config:
        print_summary_table(
            {key: str(value) for key, value in config.model_dump().items()},
            title="enfusion-mcp configuration",
        )
        return

    server = build_server(config)
    print_info(f"{SERVER_NAME} {__version__} server started")
    server.run("stdio")


if __name__ == "__main__":
    main()
