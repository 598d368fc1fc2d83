"""Pydantic v2 models for the scraped Enfusion API and wiki index.

The JSON files use camelCase keys; every model accepts those as aliases as
well as the snake_case field names.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _IndexModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ClassSource(str, Enum):
    """Which API a class belongs to."""
    ENFUSION = "enfusion"
    ARMA = "arma"


class WikiSource(str, Enum):
    """Where a wiki page was scraped from."""
    ENFUSION = "enfusion"
    ARMA = "arma"
    BISTUDIO_WIKI = "bistudio-wiki"


# ---------------------------------------------------------------------------
# Class members
# ---------------------------------------------------------------------------

class ParamInfo(_IndexModel):
    """A single method parameter."""
    name: str
    type: str = ""
    default_value: str = ""


class MethodInfo(_IndexModel):
    """A method or function on a class."""
    name: str
    return_type: str = ""
    signature: str = ""
    params: list[ParamInfo] = Field(default_factory=list)
    description: str = ""


class EnumValue(_IndexModel):
    name: str
    value: str = ""
    description: str = ""


class EnumInfo(_IndexModel):
    """An enum type defined within a class or standalone."""
    name: str
    description: str = ""
    values: list[EnumValue] = Field(default_factory=list)


class PropertyInfo(_IndexModel):
    """A member variable."""
    name: str
    type: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# Top-level records
# ---------------------------------------------------------------------------

class ClassInfo(_IndexModel):
    """A script API class or interface, e.g. ``IEntity`` or ``SCR_BaseGameMode``."""

    name: str
    source: ClassSource
    brief: str = ""
    description: str = ""
    parents: list[str] = Field(default_factory=list, description="Direct parents only")
    children: list[str] = Field(default_factory=list, description="Direct descendants only")
    group: str = ""
    source_file: str = ""
    methods: list[MethodInfo] = Field(default_factory=list)
    protected_methods: list[MethodInfo] = Field(default_factory=list)
    static_methods: list[MethodInfo] = Field(default_factory=list)
    enums: list[EnumInfo] = Field(default_factory=list)
    properties: list[PropertyInfo] = Field(default_factory=list)
    protected_properties: list[PropertyInfo] = Field(default_factory=list)
    docs_url: str = ""


class GroupInfo(_IndexModel):
    """A documentation group such as "Entities" or "Replication"."""
    name: str
    description: str = ""
    classes: list[str] = Field(default_factory=list)


class HierarchyNode(_IndexModel):
    name: str
    children: list[str] = Field(default_factory=list)


class WikiPage(_IndexModel):
    """A tutorial or guide page."""
    title: str
    source: WikiSource
    content: str = ""
    filename: Optional[str] = None
    url: Optional[str] = None
