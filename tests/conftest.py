"""Shared pytest fixtures for the enfusion-mcp test suite.

Provides reusable fixtures for:
- Temporary addon parent directories and configs
- The reference .gproj document
- A small on-disk API / wiki index
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from enfusion_mcp.config import Config
from enfusion_mcp.generators.renderer import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Config
# ---------------------------------------------------------------------------

@pytest.fixture
def addons_dir(tmp_path: Path) -> Path:
    """Parent directory that addons are scaffolded into."""
    path = tmp_path / "addons"
    path.mkdir()
    return path


@pytest.fixture
def config(addons_dir: Path, tmp_path: Path) -> Config:
    """Config pointing at temporary project and data directories."""
    return Config(project_path=str(addons_dir), data_dir=tmp_path / "data")


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Reference documents
# ---------------------------------------------------------------------------

@pytest.fixture
def reference_gproj() -> str:
    """The canonical project file layout, with one extra dependency."""
    return (
        "GameProject\n"
        "{\n"
        '\tID "MyAddon"\n'
        '\tGUID "6156F2F771D5D73D"\n'
        '\tTITLE "My Addon"\n'
        "\tDependencies\n"
        "\t{\n"
        '\t\t"58D0FB3206B6F859"\n'
        '\t\t"1A2B3C4D5E6F7081"\n'
        "\t}\n"
        "\tConfigurations\n"
        "\t{\n"
        "\t\tGameProjectConfig PC\n"
        "\t\t{\n"
        "\t\t}\n"
        "\t\tGameProjectConfig HEADLESS\n"
        "\t\t{\n"
        "\t\t}\n"
        "\t}\n"
        "}\n"
    )


# ---------------------------------------------------------------------------
# Index data
# ---------------------------------------------------------------------------

SAMPLE_ENFUSION_CLASSES: list[dict[str, Any]] = [
    {
        "name": "IEntity",
        "source": "enfusion",
        "brief": "Base entity interface.",
        "description": "",
        "parents": [],
        "children": ["GenericEntity"],
        "group": "Entities",
        "sourceFile": "IEntity.c",
        "methods": [
            {
                "name": "GetOrigin",
                "returnType": "vector",
                "signature": "vector GetOrigin()",
                "params": [],
                "description": "World position.",
            }
        ],
        "protectedMethods": [],
        "staticMethods": [],
        "enums": [],
        "properties": [],
        "protectedProperties": [],
        "docsUrl": "https://example.invalid/IEntity",
    },
    {
        "name": "GenericEntity",
        "source": "enfusion",
        "parents": ["IEntity"],
        "group": "Entities",
    },
]

SAMPLE_ARMA_CLASSES: list[dict[str, Any]] = [
    {
        "name": "SCR_BaseGameMode",
        "source": "arma",
        "brief": "Base game mode.",
        "parents": ["GenericEntity"],
        "group": "GameMode",
        "properties": [{"name": "m_iMaxPlayers", "type": "int", "description": ""}],
    },
]

SAMPLE_GROUPS: list[dict[str, Any]] = [
    {"name": "Entities", "description": "Entity classes", "classes": ["IEntity", "GenericEntity"]},
]

SAMPLE_HIERARCHY: list[dict[str, Any]] = [
    {"name": "IEntity", "children": ["GenericEntity"]},
]

SAMPLE_WIKI_PAGES: list[dict[str, Any]] = [
    {"title": "Modding Basics", "source": "bistudio-wiki", "content": "Create an addon first."},
    {"title": "Replication", "source": "enfusion", "content": "RplProp and addon state."},
]


def write_index(data_dir: Path) -> Path:
    """Write the sample index files below *data_dir*."""
    api = data_dir / "api"
    wiki = data_dir / "wiki"
    api.mkdir(parents=True, exist_ok=True)
    wiki.mkdir(parents=True, exist_ok=True)
    (api / "enfusion-classes.json").write_text(json.dumps(SAMPLE_ENFUSION_CLASSES), encoding="utf-8")
    (api / "arma-classes.json").write_text(json.dumps(SAMPLE_ARMA_CLASSES), encoding="utf-8")
    (api / "groups.json").write_text(json.dumps(SAMPLE_GROUPS), encoding="utf-8")
    (api / "hierarchy.json").write_text(json.dumps(SAMPLE_HIERARCHY), encoding="utf-8")
    (wiki / "pages.json").write_text(json.dumps(SAMPLE_WIKI_PAGES), encoding="utf-8")
    return data_dir


@pytest.fixture
def index_dir(tmp_path: Path) -> Path:
    """A data directory populated with a small sample index."""
    return write_index(tmp_path / "data")
