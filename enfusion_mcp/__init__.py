"""enfusion-mcp -- generators for Arma Reforger (Enfusion engine) addon files.

Builds ``.gproj`` project files, ``.conf`` configs, ``.st`` string tables and
dedicated server configs, and exposes them as MCP tools.
"""

__version__ = "0.4.7"
