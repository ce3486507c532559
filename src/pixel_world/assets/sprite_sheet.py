"""Frame-packing export parser.

Turns the JSON export of a sprite editor (a `frames` mapping keyed by
frame file name plus `meta.frameTags`) into an ordered frame list and
named animation clips.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from pixel_world.errors import MalformedAssetError
from pixel_world.logging_config import get_logger
from pixel_world.types import AnimationClip, Frame, FrameRect, SpriteSheet, TextureAtlas

logger = get_logger("assets.sprite_sheet")

# Digits after a non-digit, optionally followed by a file extension:
# "walk 12.aseprite" -> 12, "12.aseprite" -> no key
FRAME_KEY_PATTERN = re.compile(r"\D(\d+)(?:\.[A-Za-z_][\w-]*)?$")


def frame_key(name: str) -> Optional[int]:
    """Extract the numeric ordering key from a frame name.

    Returns:
        The trailing number preceding the extension, or None.
    """
    match = FRAME_KEY_PATTERN.search(name)
    if match is None:
        return None
    return int(match.group(1))


def parse_sprite_sheet(
    export: dict[str, Any],
    base_path: Optional[Path] = None,
    strict: bool = False,
    asset: Optional[str] = None,
) -> SpriteSheet:
    """Parse a frame-packing export into a SpriteSheet.

    Args:
        export: Decoded export with `frames` and `meta`.
        base_path: Directory `meta.image` is relative to.
        strict: Reject frame names without a numeric key.
        asset: Asset name used in error messages.

    Returns:
        The parsed, immutable sprite sheet.

    Raises:
        MalformedAssetError: If the export does not have the expected shape.
    """
    try:
        frames_data = export["frames"]
        meta = export["meta"]
        if not isinstance(frames_data, dict):
            raise TypeError("frames must be an object keyed by frame name")

        keyed: list[tuple[int, str, dict[str, Any]]] = []
        for name, value in frames_data.items():
            key = frame_key(name)
            if key is None:
                if strict:
                    raise MalformedAssetError(f"frame name has no numeric key: {name!r}", asset=asset)
                logger.debug("Dropping frame without numeric key: %s", name)
                continue
            keyed.append((key, name, value))

        keyed.sort(key=lambda item: (item[0], item[1]))

        frames: list[Frame] = []
        rects: list[FrameRect] = []
        last_key: Optional[int] = None
        for key, name, value in keyed:
            if key == last_key:
                logger.warning("Duplicate frame key %d, dropping %s", key, name)
                continue
            last_key = key
            rect = value["frame"]
            rects.append(FrameRect(int(rect["x"]), int(rect["y"]), int(rect["w"]), int(rect["h"])))
            frames.append(Frame(index=len(frames), duration=int(value["duration"]) / 1000.0))

        clips: dict[str, AnimationClip] = {}
        for tag in meta.get("frameTags", []):
            start = int(tag["from"])
            end = int(tag["to"])
            clip_frames = tuple(frames[i] for i in range(start, end + 1) if 0 <= i < len(frames))
            clips[tag["name"]] = AnimationClip(
                name=tag["name"],
                frames=clip_frames,
                direction=tag.get("direction", "forward"),
            )

        atlas = None
        if "image" in meta:
            image = Path(meta["image"])
            if base_path is not None:
                image = base_path / image
            size = meta.get("size", {"w": 0, "h": 0})
            atlas = TextureAtlas(image=image, size=(int(size["w"]), int(size["h"])), rects=tuple(rects))
    except MalformedAssetError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedAssetError(f"invalid sprite sheet export: {e!r}", asset=asset) from e

    logger.debug("Parsed %d frames and %d clips from %s", len(frames), len(clips), asset or "export")
    return SpriteSheet(frames=tuple(frames), rects=tuple(rects), clips=clips, atlas=atlas)
