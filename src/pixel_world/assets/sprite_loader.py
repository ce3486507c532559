"""Sprite sheet loading and caching."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from PIL import Image

from pixel_world.errors import MalformedAssetError
from pixel_world.logging_config import get_logger
from pixel_world.types import SpriteSheet
from .sprite_sheet import parse_sprite_sheet

logger = get_logger("assets.sprite_loader")


class SpriteSheetLoader:
    """Loads and caches sprite sheets."""

    def __init__(self, asset_path: Optional[Path] = None, strict: bool = False):
        """Initialize the sprite sheet loader.

        Args:
            asset_path: Base path for sprite sheet exports.
            strict: Reject frame names without a numeric key.
        """
        self._asset_path = Path(asset_path) if asset_path else Path("assets")
        self._strict = strict
        self._cache: dict[str, SpriteSheet] = {}

    def load(self, sheet_id: str) -> Optional[SpriteSheet]:
        """Load a sprite sheet by ID (its path relative to the asset path).

        Args:
            sheet_id: The sheet identifier, e.g. "images/character.json".

        Returns:
            The loaded SpriteSheet or None if the file does not exist.

        Raises:
            MalformedAssetError: If the file is not a valid export.
        """
        if sheet_id in self._cache:
            return self._cache[sheet_id]

        path = self._asset_path / sheet_id
        if not path.exists():
            return None

        sheet = load_sprite_sheet(path, strict=self._strict, asset=sheet_id)
        self._cache[sheet_id] = sheet
        return sheet

    def register(self, sheet_id: str, sheet: SpriteSheet) -> None:
        """Register a sprite sheet in the cache."""
        self._cache[sheet_id] = sheet

    def get(self, sheet_id: str) -> Optional[SpriteSheet]:
        """Get a sprite sheet from cache."""
        return self._cache.get(sheet_id)

    def preload_all(self) -> list[str]:
        """Preload all exports under the asset path.

        Returns:
            IDs of the sheets that failed to parse.
        """
        failed: list[str] = []
        if not self._asset_path.exists():
            return failed

        for json_file in sorted(self._asset_path.rglob("*.json")):
            sheet_id = json_file.relative_to(self._asset_path).as_posix()
            if sheet_id in self._cache:
                continue
            try:
                self.load(sheet_id)
            except MalformedAssetError as e:
                logger.error("Skipping sprite sheet %s: %s", sheet_id, e)
                failed.append(sheet_id)
        return failed


def load_sprite_sheet(path: Path | str, strict: bool = False, asset: Optional[str] = None) -> SpriteSheet:
    """Read and parse an export file; the atlas image resolves next to it."""
    path = Path(path)
    asset = asset or path.name
    try:
        with open(path, "r", encoding="utf-8") as f:
            export = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedAssetError(f"invalid JSON: {e}", asset=asset) from e
    return parse_sprite_sheet(export, base_path=path.parent, strict=strict, asset=asset)


def read_atlas_size(path: Path | str) -> tuple[int, int]:
    """Read the pixel size of an atlas image."""
    with Image.open(path) as img:
        return img.size


def crop_frames(sheet: SpriteSheet, image: Optional[Image.Image] = None) -> list[Image.Image]:
    """Cut every frame of a sheet out of its atlas image, in frame order.

    Args:
        sheet: The parsed sprite sheet.
        image: Atlas image; read from `sheet.atlas.image` when omitted.

    Raises:
        MalformedAssetError: If a frame rect lies outside the image.
    """
    if image is None:
        if sheet.atlas is None:
            raise MalformedAssetError("sprite sheet has no atlas image")
        with Image.open(sheet.atlas.image) as img:
            img.load()
            return crop_frames(sheet, img)

    width, height = image.size
    crops = []
    for rect in sheet.rects:
        if rect.x < 0 or rect.y < 0 or rect.x + rect.w > width or rect.y + rect.h > height:
            raise MalformedAssetError(f"frame rect {rect} outside atlas of size {image.size}")
        crops.append(image.crop(rect.as_box()))
    return crops
