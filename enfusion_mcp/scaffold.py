"""Addon scaffolding.

Creates the standard Arma Reforger addon folder layout and writes the
``.gproj`` project file (plus an optional string table) for a new mod.
"""

from __future__ import annotations

import asyncio
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from enfusion_mcp.config import Config
from enfusion_mcp.formats.enfusion_text import get_property, serialize
from enfusion_mcp.generators.gproj import GprojOptions, build_gproj, gproj_filename
from enfusion_mcp.generators.localization import (
    StringTableEntry,
    StringTableOptions,
    derive_string_key,
    generate_string_table,
    string_table_filename,
)
from enfusion_mcp.generators.renderer import TemplateRenderer, write_text_file
from enfusion_mcp.utils import (
    UnsafePathError,
    print_success,
    safe_path,
    validate_enforce_identifier,
)

ADDON_DIRECTORIES: tuple[str, ...] = (
    "Scripts/Game",
    "Prefabs",
    "PrefabsEditable",
    "Configs",
    "Language",
    "Missions",
    "UI",
    "Worlds",
)


class ScaffoldError(Exception):
    """Raised when an addon cannot be created."""


@dataclass
class ScaffoldResult:
    """Outcome of a successful :meth:`ModScaffolder.create` call."""

    name: str
    addon_dir: Path
    guid: str
    prefix: str
    created_files: list[str] = field(default_factory=list)

    def summary(self) -> str:
        """Markdown summary suitable for returning from a tool call."""
        lines = [
            f"## Addon Created: {self.name}",
            f"Path: {self.addon_dir}",
            f"GUID: {self.guid}",
            f"Class prefix: {self.prefix}",
            "",
            "### Created Files",
        ]
        lines.extend(f"- {f}" for f in self.created_files)
        lines.extend(["", "### Directory Structure", f"{self.name}/", f"  {gproj_filename(self.name)}"])
        lines.extend(f"  {directory}/" for directory in ADDON_DIRECTORIES)
        return "\n".join(lines)


def derive_prefix(name: str) -> str:
    """Derive a 2-4 character class prefix from an addon name.

    ``"MyCustomMod"`` -> ``"MCM"``, ``"ZombieDefense"`` -> ``"ZD"``.
    """
    uppers = re.sub(r"[^A-Z]", "", name)
    if 2 <= len(uppers) <= 4:
        return uppers
    if len(uppers) > 4:
        return uppers[:3]
    return name[:3].upper()


class ModScaffolder:
    """Creates new addons under a parent directory.

    The parent directory defaults to ``config.project_path``.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    async def create(
        self,
        name: str,
        *,
        title: Optional[str] = None,
        description: str = "",
        prefix: Optional[str] = None,
        dependencies: Optional[list[str]] = None,
        project_path: Optional[str | Path] = None,
        include_string_table: bool = True,
    ) -> ScaffoldResult:
        """Create the addon folder tree and its project files.

        Args:
            name: Addon name; becomes the folder name, project ID and
                ``<name>.gproj``.
            title: Display title, defaults to *name*.
            description: Stored as the first string table entry.
            prefix: Class name prefix, derived from *name* when omitted.
            dependencies: Extra dependency GUIDs for the project file.
            project_path: Parent directory; overrides the configured one.
            include_string_table: Also write ``Language/<name>.st``.

        Returns:
            A ``ScaffoldResult`` listing every file written.

        Raises:
            ScaffoldError: If no parent directory is known, the name or
                prefix is invalid, the addon directory already exists, or
                writing fails (the partial directory is removed).
            SerializationError: If a title or dependency cannot be
                serialized.  Nothing is written in that case.
        """
        if project_path and str(project_path).strip():
            base = str(project_path)
        elif self.config.has_project_path:
            base = self.config.project_path
        else:
            raise ScaffoldError(
                "No project path configured. Set ENFUSION_PROJECT_PATH or pass project_path."
            )

        try:
            addon_dir = safe_path(base, name)
            class_prefix = prefix or derive_prefix(name)
            validate_enforce_identifier(class_prefix)
        except UnsafePathError as exc:
            raise ScaffoldError(f"Invalid addon name: {exc}") from exc

        if addon_dir.exists():
            raise ScaffoldError(
                f"Directory already exists: {addon_dir}\n"
                "Use a different name or delete the existing directory."
            )

        # Nothing touches the disk until every file has been rendered.
        root = build_gproj(
            GprojOptions(name=name, title=title, dependencies=dependencies or [])
        )
        files: dict[str, str] = {gproj_filename(name): serialize(root)}
        if include_string_table:
            table = self._string_table(name, title or name, description)
            files[f"Language/{string_table_filename(name)}"] = generate_string_table(
                table, self.renderer
            )

        try:
            await self._create_directories(addon_dir)
            for relative, content in files.items():
                await asyncio.to_thread(write_text_file, addon_dir / relative, content)
        except OSError as exc:
            await asyncio.to_thread(shutil.rmtree, addon_dir, ignore_errors=True)
            raise ScaffoldError(f"Failed to write addon files: {exc}") from exc

        print_success(f"Addon scaffolded: {addon_dir}")
        return ScaffoldResult(
            name=name,
            addon_dir=addon_dir,
            guid=get_property(root, "GUID") or "",
            prefix=class_prefix,
            created_files=list(files),
        )

    async def _create_directories(self, addon_dir: Path) -> None:
        def _mkdirs() -> None:
            for directory in ADDON_DIRECTORIES:
                (addon_dir / directory).mkdir(parents=True, exist_ok=True)

        await asyncio.to_thread(_mkdirs)

    @staticmethod
    def _string_table(name: str, title: str, description: str) -> StringTableOptions:
        entries = [StringTableEntry(key=derive_string_key(name, "Mod", "Title"), original=title)]
        if description:
            entries.append(
                StringTableEntry(
                    key=derive_string_key(name, "Mod", "Description"), original=description
                )
            )
        return StringTableOptions(mod_name=name, entries=entries)
