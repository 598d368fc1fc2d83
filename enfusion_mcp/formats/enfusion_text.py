"""Node model and serializer for the Enfusion text serialization format.

The format is used by ``.gproj``, ``.conf``, ``.et`` and ``.layer`` files.  A
document is a single root block::

    GameProject
    {
    	ID "MyAddon"
    	Dependencies
    	{
    		"58D0FB3206B6F859"
    	}
    }

Producers build a tree with :func:`create_node`, mutate it freely and hand the
root to :func:`serialize`, which returns the complete document.  Only writing
is supported; there is no reader.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SerializationError(Exception):
    """Raised when a node tree contains something that cannot be rendered."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


# ---------------------------------------------------------------------------
# Node model
# ---------------------------------------------------------------------------


@dataclass
class Property:
    """A single ``Key "value"`` assignment inside a block."""

    key: str
    value: str


@dataclass
class Node:
    """One block in the engine's class syntax.

    Attributes:
        kind: Block type name, e.g. ``"GameProject"``.
        instance_id: Identifier following the kind on the header line
            (``"PC"`` in ``GameProjectConfig PC``).
        inheritance: Parent reference rendered as ``: "parent"`` after the
            header.
        properties: Ordered key/value pairs.  Duplicate keys are kept.
        children: Nested blocks.  Producers may append after construction.
        values: Bare quoted values with no key (dependency lists, defines).
    """

    kind: str
    instance_id: Optional[str] = None
    inheritance: Optional[str] = None
    properties: list[Property] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    values: list[str] = field(default_factory=list)

    def add_child(self, child: Node) -> Node:
        """Append *child* to this block and return it."""
        self.children.append(child)
        return child

    def add_property(self, key: str, value: str) -> Property:
        """Append a property, even if *key* is already present."""
        prop = Property(key, value)
        self.properties.append(prop)
        return prop

    def add_value(self, value: str) -> None:
        self.values.append(value)


@dataclass
class NodeOptions:
    """Recognised fields for :func:`create_node`, each with its default."""

    instance_id: Optional[str] = None
    inheritance: Optional[str] = None
    properties: list[Property] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    values: list[str] = field(default_factory=list)


def create_node(
    kind: str,
    options: NodeOptions | None = None,
    **fields: object,
) -> Node:
    """Create a new :class:`Node`.

    Fields may be given either as a :class:`NodeOptions` instance or as
    keyword arguments with the same names (``instance_id=...``,
    ``properties=[...]`` and so on), but not both.  Property entries may be
    :class:`Property` objects or ``(key, value)`` pairs.

    Sequences are copied, so the returned node owns its own lists.  Nothing is
    validated here; malformed content is reported by :func:`serialize`.

    Raises:
        TypeError: If both *options* and keyword fields are given, or a
            keyword is not a recognised field.
    """
    if options is not None and fields:
        raise TypeError("create_node() takes either options or keyword fields, not both")
    if options is None:
        options = NodeOptions(**fields)  # type: ignore[arg-type]

    return Node(
        kind=kind,
        instance_id=options.instance_id,
        inheritance=options.inheritance,
        properties=[_as_property(p) for p in options.properties],
        children=list(options.children),
        values=list(options.values),
    )


def set_property(node: Node, key: str, value: str) -> None:
    """Set *key* on *node*, replacing the first existing entry in place."""
    for prop in node.properties:
        if prop.key == key:
            prop.value = value
            return
    node.properties.append(Property(key, value))


def get_property(node: Node, key: str) -> Optional[str]:
    """Return the value of the first property named *key*, or ``None``."""
    for prop in node.properties:
        if prop.key == key:
            return prop.value
    return None


def find_child(node: Node, kind: str, instance_id: Optional[str] = None) -> Optional[Node]:
    """Return the first direct child of *kind* (and *instance_id*, if given)."""
    for child in node.children:
        if child.kind != kind:
            continue
        if instance_id is None or child.instance_id == instance_id:
            return child
    return None


def _as_property(entry: object) -> Property:
    if isinstance(entry, Property):
        return Property(entry.key, entry.value)
    if isinstance(entry, tuple) and len(entry) == 2:
        return Property(entry[0], entry[1])
    # Left for serialize() to reject.
    return entry  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------

INDENT = "\t"

_BARE_ID = re.compile(r"^[A-Za-z0-9_]+$")
_GUID_ID = re.compile(r"^[0-9A-F]{16}$")


def escape_string(value: str) -> str:
    """Escape *value* for use inside a double-quoted slot.

    Backslashes and double quotes are prefixed with a backslash.  Line breaks
    would split the block structure and are rejected.

    Raises:
        SerializationError: If *value* is not a string or contains a line
            break.
    """
    if not isinstance(value, str):
        raise SerializationError(f"expected a string, got {type(value).__name__}")
    if "\n" in value or "\r" in value:
        raise SerializationError(f"line breaks are not allowed in values: {value!r}")
    return value.replace("\\", "\\\\").replace('"', '\\"')


def serialize(root: Node) -> str:
    """Render *root* and its whole subtree to Enfusion text.

    The result ends with a newline.  Output is byte-identical for identical
    trees.

    Raises:
        SerializationError: If the tree holds a non-string where text is
            expected, an empty kind, a line break inside a value, a child
            that is not a :class:`Node`, or a cycle.
    """
    lines: list[str] = []
    _render(root, 0, lines, active=set(), path="")
    return "\n".join(lines) + "\n"


def _render(node: Node, depth: int, lines: list[str], active: set[int], path: str) -> None:
    if not isinstance(node, Node):
        raise SerializationError(f"expected a Node, got {type(node).__name__}", path)
    if not isinstance(node.kind, str) or not node.kind:
        raise SerializationError("block kind must be a non-empty string", path)
    if _needs_quoting(node.kind):
        raise SerializationError(f"invalid block kind: {node.kind!r}", path)

    path = f"{path}/{node.kind}" if path else node.kind
    if id(node) in active:
        raise SerializationError("node tree contains a cycle", path)
    active.add(id(node))

    pad = INDENT * depth
    inner = INDENT * (depth + 1)

    lines.append(pad + _header(node, path))
    lines.append(pad + "{")

    for prop in node.properties:
        lines.append(f"{inner}{_property_line(prop, path)}")

    for child in node.children:
        _render(child, depth + 1, lines, active, path)

    for value in node.values:
        lines.append(f'{inner}"{_escape(value, path)}"')

    lines.append(pad + "}")
    active.discard(id(node))


def _header(node: Node, path: str) -> str:
    header = node.kind
    if node.instance_id is not None:
        if _is_bare_id(node.instance_id):
            header += f" {node.instance_id}"
        else:
            header += f' "{_escape(node.instance_id, path)}"'
    if node.inheritance is not None:
        header += f' : "{_escape(node.inheritance, path)}"'
    return header


def _is_bare_id(value: object) -> bool:
    # 16-digit hex ids are quoted even though they are bare words.
    return (
        isinstance(value, str)
        and bool(_BARE_ID.match(value))
        and not _GUID_ID.match(value)
    )


def _property_line(prop: Property, path: str) -> str:
    if not isinstance(prop, Property):
        raise SerializationError(f"expected a Property, got {type(prop).__name__}", path)
    if not isinstance(prop.key, str) or not prop.key or _needs_quoting(prop.key):
        raise SerializationError(f"invalid property key: {prop.key!r}", path)
    return f'{prop.key} "{_escape(prop.value, path)}"'


def _escape(value: object, path: str) -> str:
    try:
        return escape_string(value)  # type: ignore[arg-type]
    except SerializationError as exc:
        raise SerializationError(str(exc), path) from None


def _needs_quoting(word: str) -> bool:
    # Kinds and keys are emitted bare; whitespace or syntax characters would
    # change the block structure.
    return any(ch.isspace() or ch in '{}":' for ch in word)
