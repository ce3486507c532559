"""Error types raised while loading assets and building level geometry."""

from __future__ import annotations

from typing import Optional


class AssetError(Exception):
    """Base error for a failed asset or level load."""

    def __init__(self, message: str, asset: Optional[str] = None, level: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.asset = asset
        self.level = level

    def with_context(self, asset: Optional[str] = None, level: Optional[str] = None) -> "AssetError":
        """Fill in missing asset/level context and return self."""
        if self.asset is None:
            self.asset = asset
        if self.level is None:
            self.level = level
        return self

    def __str__(self) -> str:
        where = [part for part in (self.asset, self.level) if part]
        if where:
            return f"{' / '.join(where)}: {self.message}"
        return self.message


class MalformedAssetError(AssetError):
    """The export does not have the expected shape."""


class MissingReferenceError(AssetError):
    """A level identifier or tileset uid could not be resolved."""


class MissingFieldError(AssetError):
    """A required entity field is absent."""


class GeometryError(AssetError):
    """Collision geometry could not be interpreted as polygons."""
