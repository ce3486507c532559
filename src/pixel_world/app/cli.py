"""Command line entry point for inspecting exports."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from pixel_world.config import PipelineConfig
from pixel_world.engine import GameEngine
from pixel_world.logging_config import setup_logging


def _load_config(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig.from_file(args.config) if args.config else PipelineConfig()
    if getattr(args, "pixels_per_unit", None):
        config = replace(config, pixels_per_unit=args.pixels_per_unit)
    if getattr(args, "strict", False):
        config = replace(config, strict_frame_names=True)
    return config


def inspect_level(args: argparse.Namespace) -> int:
    """Print levels, collision outlines, shapes and spawn events."""
    config = _load_config(args)
    engine = GameEngine(config)
    identifiers = args.level or None
    report = engine.load_level_project(args.level_file, identifiers)

    for identifier, level in engine.levels.items():
        print(f"{identifier}  offset=({level.offset.x:g}, {level.offset.y:g})")
        for render in level.tile_layers:
            print(
                f"  layer {render.layer_index}: {len(render.sprites)} tiles, "
                f"grid {render.grid.shape[1]}x{render.grid.shape[0]}, atlas {render.atlas.image}"
            )
        for colliders in level.colliders:
            physics = colliders.to_physics_units(config.pixels_per_unit)
            print(
                f"  colliders {colliders.layer_index}: {len(colliders.outlines)} outlines, "
                f"{len(colliders.shapes)} shapes at ({physics.position[0]:g}, {physics.position[1]:g})"
            )

    for event in engine.spawn_queue.drain():
        name = f" {event.name}" if event.name else ""
        print(f"  {event.level}: {event.type.value}{name} at ({event.position.x:g}, {event.position.y:g})")

    for failure in report.failures:
        print(f"FAILED {failure}")
    return 0 if report.ok else 1


def inspect_sheet(args: argparse.Namespace) -> int:
    """Print the frames and clips of a sprite sheet export."""
    config = _load_config(args)
    engine = GameEngine(config)
    sheet_id = Path(args.sheet_file).name
    report = engine.load_sprite_sheet(args.sheet_file, sheet_id=sheet_id)

    sheet = engine.get_sprite_sheet(sheet_id)
    if sheet is not None:
        if sheet.atlas is not None:
            print(f"atlas {sheet.atlas.image} {sheet.atlas.size[0]}x{sheet.atlas.size[1]}")
        for frame, rect in zip(sheet.frames, sheet.rects):
            print(f"  frame {frame.index}: {rect.w}x{rect.h} at ({rect.x}, {rect.y}) {frame.duration:g}s")
        for clip in sheet.clips.values():
            indices = ", ".join(str(frame.index) for frame in clip.frames)
            print(f"  clip {clip.name} ({clip.direction}): [{indices}]")

    for failure in report.failures:
        print(f"FAILED {failure}")
    return 0 if report.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-world",
        description="Pixel World - inspect sprite sheet and level exports",
    )
    parser.add_argument("--config", help="JSON pipeline config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show INFO messages")
    parser.add_argument("--debug", action="store_true", help="Show DEBUG messages")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="Build a level project's colliders")
    inspect_parser.add_argument("level_file", help="Level export file")
    inspect_parser.add_argument(
        "--level",
        action="append",
        help="Level identifier to build (repeatable, defaults to the config's)",
    )
    inspect_parser.add_argument(
        "--pixels-per-unit",
        type=float,
        help="Pixels per physics unit",
    )
    inspect_parser.set_defaults(handler=inspect_level)

    sheet_parser = subparsers.add_parser("sheet", help="List a sprite sheet's frames and clips")
    sheet_parser.add_argument("sheet_file", help="Sprite sheet export file")
    sheet_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject frame names without a numeric suffix",
    )
    sheet_parser.set_defaults(handler=inspect_sheet)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
