"""Asset parsing and loading."""

from .sprite_sheet import frame_key, parse_sprite_sheet
from .sprite_loader import SpriteSheetLoader, load_sprite_sheet, read_atlas_size, crop_frames
from .level_loader import (
    LevelLoader,
    decode_collision,
    find_level,
    load_project,
    parse_project,
    resolve_tilesets,
    spawn_events,
)

__all__ = [
    "frame_key",
    "parse_sprite_sheet",
    "SpriteSheetLoader",
    "load_sprite_sheet",
    "read_atlas_size",
    "crop_frames",
    "LevelLoader",
    "decode_collision",
    "find_level",
    "load_project",
    "parse_project",
    "resolve_tilesets",
    "spawn_events",
]
