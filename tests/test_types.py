"""Tests for type definitions."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from pixel_world.types import (
    AnimatedInstance,
    AnimationState,
    ConvexSubShape,
    EntityKind,
    FrameRect,
    LayerColliders,
    Position,
    SpawnEvent,
    SpawnEventType,
    TextureAtlas,
)


class TestPosition:
    """Tests for Position."""

    def test_add(self):
        """Test adding positions."""
        assert Position(1, 2) + Position(3, -4) == Position(4, -2)

    def test_copy(self):
        """Test a copy is independent."""
        pos = Position(1, 2)
        copy = pos.copy()
        copy.x = 5
        assert pos.x == 1


class TestFrameRect:
    """Tests for FrameRect."""

    def test_corners(self):
        rect = FrameRect(10, 20, 30, 40)
        assert rect.min == (10, 20)
        assert rect.max == (40, 60)
        assert rect.as_box() == (10, 20, 40, 60)


class TestTextureAtlas:
    """Tests for grid atlases."""

    def test_from_grid(self):
        """Test a grid atlas is laid out row-major."""
        atlas = TextureAtlas.from_grid("tiles.png", 16, 3, 2)
        assert atlas.image == Path("tiles.png")
        assert atlas.size == (48, 32)
        assert len(atlas) == 6
        assert atlas.rects[2] == FrameRect(32, 0, 16, 16)
        assert atlas.rects[3] == FrameRect(0, 16, 16, 16)


class TestConvexSubShape:
    """Tests for collider shapes."""

    def test_area(self):
        """Test counter-clockwise shapes have positive area."""
        shape = ConvexSubShape(points=np.array([[0, 0], [2, 0], [2, 3], [0, 3]], dtype=float))
        assert shape.area == pytest.approx(6.0)

    def test_layer_to_physics_units(self):
        """Test outlines and shapes scale while the original is kept."""
        points = np.array([[0, 0], [32, 0], [32, 32]], dtype=float)
        layer = LayerColliders(
            layer_index=2,
            position=(64.0, -32.0),
            outlines=[points + 64.0],
            shapes=[ConvexSubShape(points=points)],
        )
        scaled = layer.to_physics_units(32.0)
        assert scaled.layer_index == 2
        assert scaled.position == (2.0, -1.0)
        np.testing.assert_allclose(scaled.shapes[0].points, [[0, 0], [1, 0], [1, 1]])
        np.testing.assert_allclose(scaled.outlines[0], [[2, 2], [3, 2], [3, 3]])
        assert layer.shapes[0].points[1, 0] == 32.0


class TestSpawnEvent:
    """Tests for spawn events."""

    def test_constructors(self):
        player = SpawnEvent.player(Position(1, 1), level="Level_0")
        enemy = SpawnEvent.enemy("test", Position(2, 2))
        assert player.type == SpawnEventType.SPAWN_PLAYER
        assert player.name is None
        assert player.level == "Level_0"
        assert enemy.type == SpawnEventType.SPAWN_ENEMY
        assert enemy.name == "test"


class TestAnimatedInstance:
    """Tests for animated instances."""

    def test_copy(self):
        """Test copying an instance copies its state."""
        instance = AnimatedInstance(
            id="player_0",
            kind=EntityKind.PLAYER,
            position=Position(0, 0),
            sheet_id="hero",
            animation=AnimationState(current_clip="wait"),
        )
        copy = instance.copy()
        copy.position.x = 10
        copy.animation.set_clip("walk")
        assert instance.position.x == 0
        assert instance.animation.current_clip == "wait"
