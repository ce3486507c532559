"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
import json

import pytest

from pixel_world.assets import parse_sprite_sheet, parse_project
from pixel_world.types import SpriteSheet, LevelProject


def _frame(x: int, duration: int = 100) -> dict:
    return {
        "frame": {"x": x, "y": 0, "w": 32, "h": 32},
        "rotated": False,
        "trimmed": False,
        "spriteSourceSize": {"x": 0, "y": 0, "w": 32, "h": 32},
        "sourceSize": {"w": 32, "h": 32},
        "duration": duration,
    }


@pytest.fixture
def sheet_export() -> dict:
    """Frame-packing export with four frames listed out of order."""
    return {
        "frames": {
            "character 2.aseprite": _frame(64),
            "character 0.aseprite": _frame(0),
            "character 3.aseprite": _frame(96, duration=200),
            "character 1.aseprite": _frame(32),
        },
        "meta": {
            "app": "http://www.aseprite.org/",
            "version": "1.3",
            "image": "character.png",
            "format": "RGBA8888",
            "size": {"w": 128, "h": 32},
            "scale": "1",
            "frameTags": [
                {"name": "walk", "from": 0, "to": 2, "direction": "forward", "color": "#000000ff"},
                {"name": "wait", "from": 3, "to": 3, "direction": "forward", "color": "#000000ff"},
            ],
            "layers": [{"name": "Layer 1", "opacity": 255, "blendMode": "normal"}],
            "slices": [],
        },
    }


@pytest.fixture
def sprite_sheet(sheet_export) -> SpriteSheet:
    """Parsed sheet: walk = frames 0..2 at 0.1s, wait = frame 3 at 0.2s."""
    return parse_sprite_sheet(sheet_export)


@pytest.fixture
def sheet_file(tmp_path, sheet_export):
    """Sprite sheet export written to disk."""
    path = tmp_path / "character.json"
    path.write_text(json.dumps(sheet_export), encoding="utf-8")
    return path


SQUARE = "[[0,0],[1,0],[1,1],[0,1]]"
SLAB = "[[0,0.5],[1,0.5],[1,1],[0,1]]"


def _level(identifier: str, world_x: int, world_y: int, tileset_uid: int = 1) -> dict:
    return {
        "identifier": identifier,
        "worldX": world_x,
        "worldY": world_y,
        "layerInstances": [
            {
                "__type": "Entities",
                "__gridSize": 16,
                "entityInstances": [
                    {"identifier": "PlayerStart", "px": [8, 8], "fieldInstances": []},
                    {
                        "identifier": "Enemy",
                        "px": [40, 8],
                        "fieldInstances": [{"identifier": "name", "value": "test"}],
                    },
                    {
                        "identifier": "Enemy",
                        "px": [24, 8],
                        "fieldInstances": [{"identifier": "name", "value": "ghost"}],
                    },
                ],
            },
            {
                "__type": "Tiles",
                "tilesetDefUid": tileset_uid,
                "gridSize": 16,
                "__cWid": 4,
                "__cHei": 2,
                "gridTiles": [
                    {"px": [0, 16], "t": 0},
                    {"px": [16, 16], "t": 0},
                    {"px": [32, 16], "t": 0},
                    {"px": [48, 0], "t": 5},
                ],
            },
            {"__type": "IntGrid", "__gridSize": 16},
        ],
    }


@pytest.fixture
def level_export() -> dict:
    """Level project: one level with a row of three solid tiles."""
    return {
        "levels": [_level("Level_0", 16, 32)],
        "defs": {
            "tilesets": [
                {
                    "uid": 1,
                    "tileGridSize": 16,
                    "cWid": 4,
                    "cHei": 4,
                    "relPath": "tiles.png",
                    "customData": [
                        {"tileId": 0, "data": SQUARE},
                        {"tileId": 1, "data": SLAB},
                        {"tileId": "bad", "data": SQUARE},
                        {"tileId": 2, "data": "not json"},
                    ],
                }
            ]
        },
    }


@pytest.fixture
def two_level_export(level_export) -> dict:
    """Project where Level_1 references a tileset that does not exist."""
    data = copy.deepcopy(level_export)
    data["levels"].append(_level("Level_1", 0, 0, tileset_uid=99))
    return data


@pytest.fixture
def level_project(level_export) -> LevelProject:
    return parse_project(level_export)


@pytest.fixture
def level_file(tmp_path, level_export):
    """Level export written to disk."""
    path = tmp_path / "world.ldtk"
    path.write_text(json.dumps(level_export), encoding="utf-8")
    return path
