"""enfusion-mcp configuration.

Settings are resolved in layers, each overriding the previous one:

1. Built-in defaults.
2. ``enfusion-mcp.config.json`` next to the installed package.
3. ``~/.enfusion-mcp/config.json`` in the user's home directory.
4. Environment variables (``ENFUSION_WORKBENCH_PATH``,
   ``ENFUSION_PROJECT_PATH``, ``ENFUSION_MCP_DATA_DIR``).

JSON files may use either camelCase keys (``workbenchPath``) or the
snake_case field names.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from enfusion_mcp.utils import load_json, print_debug, print_warning

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_WORKBENCH_PATH = r"C:\Program Files (x86)\Steam\steamapps\common\Arma Reforger Tools"
DEFAULT_DATA_DIR = PACKAGE_DIR.parent / "data"

LOCAL_CONFIG_NAME = "enfusion-mcp.config.json"
HOME_CONFIG_DIR = ".enfusion-mcp"
HOME_CONFIG_NAME = "config.json"

ENV_VARS: dict[str, str] = {
    "ENFUSION_WORKBENCH_PATH": "workbench_path",
    "ENFUSION_PROJECT_PATH": "project_path",
    "ENFUSION_MCP_DATA_DIR": "data_dir",
}


class Config(BaseModel):
    """Runtime configuration shared by every tool."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    workbench_path: str = Field(
        default=DEFAULT_WORKBENCH_PATH,
        description='Path to the "Arma Reforger Tools" installation',
    )
    project_path: str = Field(
        default="",
        description="Default parent directory for addons; empty disables writing",
    )
    data_dir: Path = Field(
        default=DEFAULT_DATA_DIR,
        description="Directory containing the scraped API/wiki index",
    )

    @property
    def has_project_path(self) -> bool:
        return bool(self.project_path.strip())

    def merged(self, overrides: dict[str, Any]) -> "Config":
        """Return a copy with *overrides* (aliases or field names) applied."""
        names = {info.alias or name: name for name, info in type(self).model_fields.items()}
        data = self.model_dump()
        for key, value in overrides.items():
            data[names.get(key, key)] = value
        return type(self).model_validate(data)

    def with_env(self, environ: dict[str, str] | None = None) -> "Config":
        """Return a copy with environment variable overrides applied.

        Empty variables are ignored.
        """
        env = os.environ if environ is None else environ
        overrides = {field: env[var] for var, field in ENV_VARS.items() if env.get(var)}
        return self.merged(overrides) if overrides else self


def _read_layer(path: Path) -> dict[str, Any]:
    """Read one optional config file; unreadable files are skipped with a warning."""
    if not path.exists():
        return {}
    try:
        data = load_json(path)
    except (OSError, ValueError) as exc:
        print_warning(f"Failed to load config from {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        print_warning(f"Ignoring config {path}: expected a JSON object")
        return {}
    return data


def load_config(
    *,
    package_dir: Path | None = None,
    home_dir: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Config:
    """Resolve the effective configuration from all layers.

    Args:
        package_dir: Directory searched for ``enfusion-mcp.config.json``.
            Defaults to the directory above the package.
        home_dir: Home directory.  Defaults to ``Path.home()``.
        environ: Environment mapping.  Defaults to ``os.environ``.

    Returns:
        A validated ``Config``.  A layer that fails validation is skipped with
        a warning rather than aborting start-up.
    """
    package_dir = package_dir if package_dir is not None else PACKAGE_DIR.parent
    home_dir = home_dir if home_dir is not None else Path.home()

    config = Config()
    for path in (
        package_dir / LOCAL_CONFIG_NAME,
        home_dir / HOME_CONFIG_DIR / HOME_CONFIG_NAME,
    ):
        layer = _read_layer(path)
        if not layer:
            continue
        try:
            config = config.merged(layer)
        except ValidationError as exc:
            print_warning(f"Ignoring invalid config {path}: {exc.error_count()} error(s)")

    config = config.with_env(environ)
    print_debug(f"Config loaded: {config.model_dump_json()}")
    return config
