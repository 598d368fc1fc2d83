"""Dedicated server JSON config generation."""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_GAME_PORT = 2001
DEFAULT_A2S_PORT = 17777
DEFAULT_MAX_PLAYERS = 32


class ServerConfigOptions(BaseModel):
    """Pydantic model describing a local test server."""

    name: str = Field(..., min_length=1, description="Server display name")
    mod_name: Optional[str] = Field(default=None, description="Addon ID from the .gproj")
    mod_id: Optional[str] = Field(default=None, description="Addon GUID from the .gproj")
    scenario_id: str = Field(
        default="", description='Scenario resource, e.g. "{GUID}Missions/MissionHeader.conf"'
    )
    max_players: int = Field(default=DEFAULT_MAX_PLAYERS, ge=1, le=256)
    port: int = Field(default=DEFAULT_GAME_PORT, ge=1, le=65535)
    a2s_port: int = Field(default=DEFAULT_A2S_PORT, ge=1, le=65535)
    visible: bool = Field(default=False, description="List in the public server browser")
    password: str = Field(default="")


def build_server_config(opts: ServerConfigOptions) -> dict[str, Any]:
    """Return the server config as a plain dict (key order is significant)."""
    return {
        "dedicatedServerId": "",
        "region": "US",
        "gameHostBindAddress": "",
        "gameHostBindPort": opts.port,
        "gameHostRegisterBindAddress": "",
        "gameHostRegisterPort": opts.port,
        "a2s": {
            "address": "",
            "port": opts.a2s_port,
        },
        "game": {
            "name": opts.name,
            "password": opts.password,
            "scenarioId": opts.scenario_id,
            "maxPlayers": opts.max_players,
            "visible": opts.visible,
            "gameProperties": {
                "serverMaxViewDistance": 1600,
                "serverMinGrassDistance": 50,
                "fastValidation": True,
                "battlEye": False,
            },
            "mods": _mod_list(opts),
        },
    }


def generate_server_config(opts: ServerConfigOptions) -> str:
    """Generate the server config as pretty-printed JSON."""
    return json.dumps(build_server_config(opts), indent=2, ensure_ascii=False)


def _mod_list(opts: ServerConfigOptions) -> list[dict[str, str]]:
    if not opts.mod_name and not opts.mod_id:
        return []
    return [{"modId": opts.mod_id or "", "name": opts.mod_name or "", "version": ""}]
