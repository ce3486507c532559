"""Tests for animation playback."""

from __future__ import annotations

import pytest

from pixel_world.engine.systems import AnimationSystem
from pixel_world.types import (
    AnimatedInstance,
    AnimationClip,
    AnimationState,
    EntityKind,
    Frame,
    FrameTimer,
    PlaybackPhase,
    Position,
    SpriteSheet,
)


@pytest.fixture
def three_frame_sheet() -> SpriteSheet:
    """Sheet with a 3-frame clip at 0.1s per frame and an empty clip."""
    frames = tuple(Frame(index=i, duration=0.1) for i in range(3))
    return SpriteSheet(
        frames=frames,
        rects=(),
        clips={
            "run": AnimationClip(name="run", frames=frames),
            "empty": AnimationClip(name="empty", frames=()),
        },
    )


def _playing(sheet: SpriteSheet, loop: bool) -> AnimationState:
    state = AnimationState(speed=2.0)
    state.set_clip("run", loop=loop)
    state.advance(sheet, 0.05)
    return state


class TestFrameTimer:
    """Tests for the one-shot frame timer."""

    def test_finishes_once(self):
        """Test the timer reports finishing only on the finishing tick."""
        timer = FrameTimer()
        timer.reset(0.1)
        assert timer.tick(0.05) is False
        assert timer.tick(0.05) is True
        assert timer.tick(0.05) is False
        assert timer.finished

    def test_reset(self):
        """Test reset clears elapsed time."""
        timer = FrameTimer()
        timer.reset(0.1)
        timer.tick(0.08)
        assert timer.remaining == pytest.approx(0.02)
        timer.reset(0.2)
        assert timer.elapsed == 0.0
        assert not timer.finished


class TestSetClip:
    """Tests for clip selection."""

    def test_new_clip_resets(self, three_frame_sheet):
        """Test a new clip resets the frame index and marks dirty."""
        state = _playing(three_frame_sheet, loop=True)
        state.advance(three_frame_sheet, 0.05)
        assert state.frame_index == 1

        state.set_clip("empty", loop=False)
        assert state.current_clip == "empty"
        assert state.frame_index == 0
        assert state.loop is False
        assert state.dirty is True
        assert state.phase == PlaybackPhase.DIRTY

    def test_same_clip_is_noop(self, three_frame_sheet):
        """Test selecting the active clip leaves index and timer alone."""
        state = _playing(three_frame_sheet, loop=True)
        state.advance(three_frame_sheet, 0.05)
        state.advance(three_frame_sheet, 0.01)
        timer_before = (state.timer.duration, state.timer.elapsed)

        state.set_clip("run", loop=False)

        assert state.frame_index == 1
        assert (state.timer.duration, state.timer.elapsed) == timer_before
        assert state.loop is True
        assert state.dirty is False


class TestAdvance:
    """Tests for advancing playback over time."""

    def test_dirty_consumes_no_time(self, three_frame_sheet):
        """Test the first advance commits frame 0 regardless of elapsed time."""
        state = AnimationState(speed=2.0)
        state.set_clip("run")
        changed = state.advance(three_frame_sheet, 10.0)
        assert changed is True
        assert state.frame_index == 0
        assert state.displayed_frame == 0
        assert state.dirty is False
        assert state.timer.duration == pytest.approx(0.05)
        assert state.timer.elapsed == 0.0
        assert state.phase == PlaybackPhase.PLAYING

    def test_looping_scenario(self, three_frame_sheet):
        """Test 0.05s ticks at speed 2 step 0 -> 1 -> 2 -> 0 when looping."""
        state = _playing(three_frame_sheet, loop=True)
        assert state.frame_index == 0

        indices = []
        for _ in range(3):
            state.advance(three_frame_sheet, 0.05)
            indices.append(state.frame_index)
        assert indices == [1, 2, 0]

    def test_non_looping_scenario(self, three_frame_sheet):
        """Test a non-looping clip freezes on its last frame."""
        state = _playing(three_frame_sheet, loop=False)

        indices = []
        for _ in range(3):
            state.advance(three_frame_sheet, 0.05)
            indices.append(state.frame_index)
        assert indices == [1, 2, 2]
        assert state.phase == PlaybackPhase.FROZEN

    def test_frozen_ignores_time(self, three_frame_sheet):
        """Test a frozen state never changes again until a new clip."""
        state = _playing(three_frame_sheet, loop=False)
        for _ in range(3):
            state.advance(three_frame_sheet, 0.05)
        timer_before = (state.timer.duration, state.timer.elapsed)

        for _ in range(5):
            assert state.advance(three_frame_sheet, 1.0) is False
        assert state.frame_index == 2
        assert (state.timer.duration, state.timer.elapsed) == timer_before

        state.set_clip("other")
        assert state.phase == PlaybackPhase.DIRTY

    def test_timer_not_elapsed(self, three_frame_sheet):
        """Test short ticks accumulate before the frame changes."""
        state = _playing(three_frame_sheet, loop=True)
        assert state.advance(three_frame_sheet, 0.02) is False
        assert state.advance(three_frame_sheet, 0.02) is False
        assert state.frame_index == 0
        assert state.advance(three_frame_sheet, 0.02) is True
        assert state.frame_index == 1

    def test_overflow_discarded(self, three_frame_sheet):
        """Test a long tick advances only one frame."""
        state = _playing(three_frame_sheet, loop=True)
        state.advance(three_frame_sheet, 1.0)
        assert state.frame_index == 1
        assert state.timer.elapsed == 0.0

    def test_speed_override(self, three_frame_sheet):
        """Test the speed argument overrides the state's speed."""
        state = AnimationState()
        state.set_clip("run")
        state.advance(three_frame_sheet, 0.0, speed=4.0)
        assert state.timer.duration == pytest.approx(0.025)

    def test_invalid_speed(self, three_frame_sheet):
        """Test a non-positive speed is rejected."""
        state = AnimationState()
        state.set_clip("run")
        with pytest.raises(ValueError):
            state.advance(three_frame_sheet, 0.1, speed=0.0)

    def test_empty_clip_is_noop(self, three_frame_sheet):
        """Test a clip without frames never changes the state."""
        state = AnimationState()
        state.set_clip("empty")
        assert state.advance(three_frame_sheet, 0.1) is False
        for _ in range(3):
            assert state.advance(three_frame_sheet, 1.0) is False
        assert state.frame_index == 0
        assert state.displayed_frame is None

    def test_unknown_clip_is_noop(self, three_frame_sheet):
        """Test a clip missing from the sheet never changes the state."""
        state = AnimationState()
        state.set_clip("missing")
        assert state.advance(three_frame_sheet, 0.1) is False
        assert state.advance(three_frame_sheet, 0.1) is False
        assert state.displayed_frame is None

    def test_displayed_frame_is_sheet_ordinal(self, sprite_sheet):
        """Test the displayed frame is the sheet index, not the clip index."""
        state = AnimationState()
        state.set_clip("wait")
        state.advance(sprite_sheet, 0.0)
        assert state.frame_index == 0
        assert state.displayed_frame == 3

    def test_copy_is_independent(self, three_frame_sheet):
        """Test a copied state does not share its timer."""
        state = _playing(three_frame_sheet, loop=True)
        clone = state.copy()
        clone.advance(three_frame_sheet, 0.05)
        assert clone.frame_index == 1
        assert state.frame_index == 0
        assert state.timer.elapsed == 0.0


class TestAnimationSystem:
    """Tests for the per-tick animation system."""

    def _instance(self, instance_id: str, sheet_id: str) -> AnimatedInstance:
        animation = AnimationState(speed=2.0)
        animation.set_clip("run")
        return AnimatedInstance(
            id=instance_id,
            kind=EntityKind.PLAYER,
            position=Position(0, 0),
            sheet_id=sheet_id,
            animation=animation,
        )

    def test_updates_each_instance(self, three_frame_sheet):
        """Test every instance with a registered sheet is advanced."""
        sheets = {"hero": three_frame_sheet}
        a = self._instance("a", "hero")
        b = self._instance("b", "hero")
        system = AnimationSystem()

        changed = system.update([a, b], sheets.get, 0.05)
        assert changed == [a, b]
        system.update([a, b], sheets.get, 0.05)
        assert a.animation.frame_index == 1
        assert b.animation.frame_index == 1

    def test_skips_missing_sheet(self, three_frame_sheet):
        """Test instances whose sheet is not registered are left dirty."""
        instance = self._instance("a", "unknown")
        changed = AnimationSystem().update([instance], {}.get, 0.05)
        assert changed == []
        assert instance.animation.dirty is True
