"""Static Enfusion API / wiki index: models and loader."""

from enfusion_mcp.index.loader import IndexData, MethodMatch, load_index
from enfusion_mcp.index.models import (
    ClassInfo,
    ClassSource,
    EnumInfo,
    EnumValue,
    GroupInfo,
    HierarchyNode,
    MethodInfo,
    ParamInfo,
    PropertyInfo,
    WikiPage,
    WikiSource,
)

__all__ = [
    "ClassInfo",
    "ClassSource",
    "EnumInfo",
    "EnumValue",
    "GroupInfo",
    "HierarchyNode",
    "IndexData",
    "MethodMatch",
    "MethodInfo",
    "ParamInfo",
    "PropertyInfo",
    "WikiPage",
    "WikiSource",
    "load_index",
]
