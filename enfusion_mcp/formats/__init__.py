"""Enfusion text format support: node model, serializer and identifiers.

Quick usage::

    from enfusion_mcp.formats import create_node, serialize

    root = create_node("GameProject", properties=[("ID", "MyAddon")])
    root.add_child(create_node("Dependencies", values=["58D0FB3206B6F859"]))
    text = serialize(root)
"""

from enfusion_mcp.formats.enfusion_text import (
    Node,
    NodeOptions,
    Property,
    SerializationError,
    create_node,
    escape_string,
    find_child,
    get_property,
    serialize,
    set_property,
)
from enfusion_mcp.formats.guid import BASE_GAME_GUID, generate_guid, is_guid
from enfusion_mcp.formats.ordered_set import OrderedSet

__all__ = [
    "BASE_GAME_GUID",
    "Node",
    "NodeOptions",
    "OrderedSet",
    "Property",
    "SerializationError",
    "create_node",
    "escape_string",
    "find_child",
    "generate_guid",
    "get_property",
    "is_guid",
    "serialize",
    "set_property",
]
