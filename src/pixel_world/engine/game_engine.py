"""Main engine for Pixel World."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pixel_world.assets import (
    SpriteSheetLoader,
    find_level,
    load_project,
    load_sprite_sheet,
    parse_project,
    resolve_tilesets,
    spawn_events,
)
from pixel_world.config import PipelineConfig
from pixel_world.errors import AssetError
from pixel_world.logging_config import get_logger
from pixel_world.physics import build_level_colliders
from pixel_world.types import (
    AnimatedInstance,
    LevelProject,
    LoadedLevel,
    SpriteSheet,
    TileLayerRender,
)
from .entity import EntityManager
from .reporter import ErrorReporter, LoadReport
from .spawn_queue import SpawnEventQueue
from .systems import AnimationSystem

logger = get_logger("engine.game_engine")


class GameEngine:
    """Coordinates asset loading, spawning and animation playback."""

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        asset_path: Optional[Path] = None,
        reporter: Optional[ErrorReporter] = None,
    ):
        """Initialize the game engine.

        Args:
            config: Pipeline configuration.
            asset_path: Base path sprite sheets are loaded from.
            reporter: Receives every load report.
        """
        self._config = config or PipelineConfig()
        self._sheets = SpriteSheetLoader(asset_path, strict=self._config.strict_frame_names)
        self._reporter = reporter or ErrorReporter()
        self._spawn_queue = SpawnEventQueue()
        self._entity_manager = EntityManager(self._config)
        self._levels: dict[str, LoadedLevel] = {}

        self._systems = [AnimationSystem()]

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def reporter(self) -> ErrorReporter:
        return self._reporter

    @property
    def spawn_queue(self) -> SpawnEventQueue:
        return self._spawn_queue

    @property
    def levels(self) -> dict[str, LoadedLevel]:
        return dict(self._levels)

    @property
    def instances(self) -> list[AnimatedInstance]:
        return self._entity_manager.instances

    @property
    def entities(self) -> EntityManager:
        return self._entity_manager

    def register_sprite_sheet(self, sheet_id: str, sheet: SpriteSheet) -> None:
        """Make a parsed sprite sheet available to instances."""
        self._sheets.register(sheet_id, sheet)

    def get_sprite_sheet(self, sheet_id: str) -> Optional[SpriteSheet]:
        return self._sheets.get(sheet_id)

    def load_sprite_sheet(self, path: Union[Path, str], sheet_id: Optional[str] = None) -> LoadReport:
        """Load a sprite sheet export from disk and register it.

        Args:
            path: The export file.
            sheet_id: Registration ID; defaults to the configured character sheet.

        Returns:
            The load report; a failed sheet is left unregistered.
        """
        sheet_id = sheet_id or self._config.character_sheet
        report = LoadReport(asset=sheet_id)
        try:
            sheet = load_sprite_sheet(path, strict=self._config.strict_frame_names, asset=sheet_id)
        except OSError as e:
            report.fail(AssetError(f"cannot read {path}: {e}"))
        except AssetError as e:
            report.fail(e)
        else:
            self._sheets.register(sheet_id, sheet)
            report.loaded.append(sheet_id)
        return self._reporter.report(report)

    def load_level_project(
        self,
        source: Union[Path, str, dict[str, Any]],
        identifiers: Optional[Iterable[str]] = None,
    ) -> LoadReport:
        """Load levels from a level project and build their collision geometry.

        Each level is built independently: a failing level is reported and
        left absent, the others still load. Spawn events of a level are
        queued only once the level built.

        Args:
            source: Path to the export file, or the decoded export.
            identifiers: Levels to build; defaults to the configured ones.

        Returns:
            The load report.
        """
        if isinstance(source, dict):
            asset = "<level project>"
        else:
            asset = Path(source).name
        report = LoadReport(asset=asset)

        try:
            if isinstance(source, dict):
                project = parse_project(source, asset=asset)
            else:
                project = load_project(source, asset=asset)
        except OSError as e:
            report.fail(AssetError(f"cannot read {source}: {e}"))
            return self._reporter.report(report)
        except AssetError as e:
            report.fail(e)
            return self._reporter.report(report)

        if identifiers is None:
            identifiers = self._config.level_identifiers

        for identifier in identifiers:
            try:
                loaded = self._build_level(project, identifier)
            except AssetError as e:
                report.fail(e.with_context(level=identifier))
                continue
            self._levels[identifier] = loaded
            report.loaded.append(identifier)

        return self._reporter.report(report)

    def _build_level(self, project: LevelProject, identifier: str) -> LoadedLevel:
        level = find_level(project, identifier)
        tilesets = resolve_tilesets(project, level)
        events = spawn_events(level)
        colliders = build_level_colliders(level, tilesets, self._config)

        base_path = project.file_path.parent if project.file_path else None
        tile_layers = []
        for index, layer in level.tiles_layers():
            tileset = tilesets[layer.tileset_uid]
            tile_layers.append(
                TileLayerRender(
                    layer_index=index,
                    atlas=tileset.atlas(base_path),
                    sprites=layer.tile_sprites(level.offset),
                    grid=layer.grid(),
                )
            )

        self._spawn_queue.extend(events)
        logger.info(
            "Built %s: %d tile layers, %d shapes, %d spawn events",
            identifier,
            len(tile_layers),
            sum(len(c.shapes) for c in colliders),
            len(events),
        )
        return LoadedLevel(
            identifier=identifier,
            offset=level.offset,
            tile_layers=tile_layers,
            colliders=colliders,
            spawn_count=len(events),
        )

    def update(self, dt: float) -> None:
        """Update the world.

        Args:
            dt: Delta time in seconds since last update.
        """
        for event in self._spawn_queue.drain():
            self._entity_manager.spawn(event)

        instances = self._entity_manager.instances
        for system in self._systems:
            system.update(instances, self._sheets.get, dt)
