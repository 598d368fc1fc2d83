"""Jinja2 template rendering for XML-based Enfusion files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``enfusion_mcp/generators/templates/`` directory.  Class-syntax files are
produced by the node serializer instead; templates cover formats with a fixed
shape such as string tables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from enfusion_mcp.utils import ensure_dir


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def xml_escape(value: Any) -> str:
    """Escape the five XML special characters using named entities."""
    text = str(value)
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


class TemplateRenderer:
    """Renders Jinja2 templates for Enfusion file generation.

    Templates use explicit ``| xml`` filters rather than autoescaping so the
    entity set matches what Workbench itself writes.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["xml"] = xml_escape

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"stringtable.st.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


def write_text_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write UTF-8 content.

    Newlines are written verbatim so output is identical on every platform.
    """
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
