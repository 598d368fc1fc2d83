"""``.layout`` UI widget tree generation.

Each widget is a block named after its widget class with a ``{GUID}`` id, a
``Name`` property, an optional ``Slot`` (anchor and offset) and nested widgets
under ``Children``.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from enfusion_mcp.formats.enfusion_text import Node, create_node, serialize
from enfusion_mcp.formats.guid import generate_guid

LAYOUT_SUBDIRECTORY = "UI/layouts"

DEFAULT_ROOT_WIDGET = "FrameWidgetClass"


class LayoutType(str, Enum):
    """Supported layout templates."""
    HUD = "hud"
    MENU = "menu"
    DIALOG = "dialog"
    LIST = "list"
    CUSTOM = "custom"


class WidgetDef(BaseModel):
    """A widget and, optionally, its nested children."""

    type: str = Field(..., min_length=1, description='Widget class, e.g. "TextWidgetClass"')
    name: str = Field(..., min_length=1, description="Name used by FindAnyWidget() lookups")
    anchor: Optional[str] = Field(
        default=None, description='"left top right bottom" as 0-1 floats'
    )
    offset: Optional[str] = Field(
        default=None, description='"left top right bottom" in pixels relative to the anchor'
    )
    properties: dict[str, str] = Field(default_factory=dict)
    children: list[WidgetDef] = Field(default_factory=list)


class LayoutTypeInfo(NamedTuple):
    anchor: str
    offset: str
    default_widgets: tuple[WidgetDef, ...]


def _background(color: str) -> WidgetDef:
    return WidgetDef(
        type="ImageWidgetClass",
        name="Background",
        anchor="0 0 1 1",
        offset="0 0 0 0",
        properties={"Color": color},
    )


def _text(name: str, anchor: str, offset: str, **properties: str) -> WidgetDef:
    return WidgetDef(
        type="TextWidgetClass", name=name, anchor=anchor, offset=offset, properties=properties
    )


LAYOUT_TYPE_INFO: dict[LayoutType, LayoutTypeInfo] = {
    LayoutType.HUD: LayoutTypeInfo(
        "0 1 0 1",
        "20 -120 220 -20",
        (
            _background("0 0 0 150"),
            _text("TitleText", "0 0 1 0", "8 5 -8 25", Text="HUD Widget", ExactFontSize="14"),
        ),
    ),
    LayoutType.MENU: LayoutTypeInfo(
        "0.5 0.5 0.5 0.5",
        "-200 -150 200 150",
        (
            _background("20 20 20 220"),
            _text(
                "TitleText", "0 0 1 0", "16 10 -16 40",
                Text="Menu Title", ExactFontSize="24", Align="1",
            ),
        ),
    ),
    LayoutType.DIALOG: LayoutTypeInfo(
        "0.5 0.5 0.5 0.5",
        "-160 -100 160 100",
        (
            _background("30 30 30 230"),
            _text(
                "MessageText", "0 0 1 0.7", "16 16 -16 -16",
                Text="Dialog message", ExactFontSize="16",
            ),
            WidgetDef(
                type="ButtonWidgetClass",
                name="ConfirmButton",
                anchor="0.5 0.7 0.5 0.7",
                offset="-60 10 60 40",
                properties={"Text": "OK"},
            ),
        ),
    ),
    LayoutType.LIST: LayoutTypeInfo(
        "0 0 0.3 1",
        "10 10 -10 -10",
        (
            _background("10 10 10 200"),
            _text("ListTitle", "0 0 1 0", "8 5 -8 25", Text="List", ExactFontSize="16"),
        ),
    ),
    LayoutType.CUSTOM: LayoutTypeInfo("0 0 1 1", "0 0 0 0", ()),
}


class LayoutOptions(BaseModel):
    """Pydantic model describing the layout to generate."""

    name: str = Field(..., min_length=1, description="Layout name, used for the filename")
    layout_type: LayoutType
    root_widget_type: Optional[str] = Field(
        default=None, description=f"Root widget class, defaults to {DEFAULT_ROOT_WIDGET}"
    )
    anchor: Optional[str] = Field(default=None, description="Root anchor override")
    offset: Optional[str] = Field(default=None, description="Root offset override")
    widgets: list[WidgetDef] = Field(
        default_factory=list, description="Widgets added after the type's defaults"
    )


def build_layout(opts: LayoutOptions) -> Node:
    """Build the widget node tree for *opts*."""
    info = LAYOUT_TYPE_INFO[opts.layout_type]
    root = create_node(
        opts.root_widget_type or DEFAULT_ROOT_WIDGET,
        instance_id=f"{{{generate_guid()}}}",
        properties=[("Name", f"{opts.name}Root")],
    )
    root.add_child(_slot(opts.anchor or info.anchor, opts.offset or info.offset))

    widgets = [*info.default_widgets, *opts.widgets]
    if widgets:
        root.add_child(create_node("Children", children=[_widget_node(w) for w in widgets]))
    return root


def generate_layout(opts: LayoutOptions) -> str:
    """Generate the text of a ``.layout`` file."""
    return serialize(build_layout(opts))


def layout_filename(name: str) -> str:
    return f"{name}.layout"


def _slot(anchor: Optional[str], offset: Optional[str]) -> Node:
    slot = create_node("Slot", instance_id=f"FrameWidgetSlot {{{generate_guid()}}}")
    if anchor:
        slot.add_property("Anchor", anchor)
    if offset:
        slot.add_property("Offset", offset)
    return slot


def _widget_node(widget: WidgetDef) -> Node:
    node = create_node(
        widget.type,
        instance_id=f"{{{generate_guid()}}}",
        properties=[("Name", widget.name)],
    )
    if widget.anchor or widget.offset:
        node.add_child(_slot(widget.anchor, widget.offset))
    for key, value in widget.properties.items():
        node.add_property(key, value)
    if widget.children:
        node.add_child(create_node("Children", children=[_widget_node(c) for c in widget.children]))
    return node
