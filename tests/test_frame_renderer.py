"""
FRAME RENDERER TESTS
====================

Per-frame composition (what gets drawn, in which style) and drawing onto an
off-screen pygame surface.
"""

import logging

import numpy as np
import pygame
import pytest

import constants
from animation_state import AnimationState
from clock_reading import ClockReading
from frame_renderer import FrameRenderer, background_hue, hsba
from main import run_clock_loop


@pytest.fixture
def renderer(rng):
    return FrameRenderer(AnimationState(rng))


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


# =============================================================================
# COMPOSITION
# =============================================================================

def test_three_thirty_scenario(renderer):
    frame = renderer.compose(ClockReading(3, 30, 0))

    current = [a.index for a in frame.anchors if a.is_current_hour]
    assert current == [3]

    assert len(frame.segments) == 33
    assert frame.segments[-1].highlighted
    assert not any(s.highlighted for s in frame.segments[:-1])
    assert [s.connection for s in frame.segments] == list(renderer.state.schedule[:33])


def test_afternoon_hour_wraps_to_dial(renderer):
    frame = renderer.compose(ClockReading(15, 0, 0))
    assert [a.index for a in frame.anchors if a.is_current_hour] == [3]
    assert frame.segments == []


def test_midnight_and_noon_highlight_top_anchor(renderer):
    for hour_of_day in (0, 12):
        frame = renderer.compose(ClockReading(hour_of_day, 5, 0))
        assert [a.index for a in frame.anchors if a.is_current_hour] == [0]


def test_current_anchor_pulses(renderer):
    sizes = []
    for _ in range(80):
        frame = renderer.compose(ClockReading(7, 0, 0))
        sizes.append(frame.anchors[7].size)
        assert frame.anchors[2].size == constants.ANCHOR_SIZE
        assert frame.anchors[2].glow == constants.ANCHOR_GLOW
    assert min(sizes) >= 5.0 - 1e-9
    assert max(sizes) <= 15.0 + 1e-9
    assert max(sizes) - min(sizes) > 5.0


def test_segments_follow_drifted_anchors(renderer):
    frame = renderer.compose(ClockReading(9, 59, 0))
    positions = renderer.state.anchors.positions
    assert len(frame.segments) == 66
    for segment in frame.segments:
        np.testing.assert_array_equal(segment.start, positions[segment.connection.i])
        np.testing.assert_array_equal(segment.end, positions[segment.connection.j])


def test_frame_counter_and_trail_advance(renderer):
    for expected in range(1, 6):
        frame = renderer.compose(ClockReading(1, 2, 3, 400))
        assert frame.frame_count == expected
        assert len(frame.particles.lives) == expected
    np.testing.assert_allclose(frame.comet, [np.cos(np.radians(-90 + 3.4 * 6)) * 260,
                                            np.sin(np.radians(-90 + 3.4 * 6)) * 260])


def test_minute_change_logged_once(renderer):
    handler = _ListHandler()
    logger = logging.getLogger("constellation_clock")
    old_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        renderer.compose(ClockReading(4, 10, 0))
        renderer.compose(ClockReading(4, 10, 1))
        renderer.compose(ClockReading(4, 11, 0))
    finally:
        logger.removeHandler(handler)
        logger.setLevel(old_level)
    minute_lines = [m for m in handler.messages if m.startswith("Current minute")]
    assert len(minute_lines) == 2
    assert "11" in minute_lines[1]


# =============================================================================
# COLORS
# =============================================================================

def test_background_hue_maps_hour_of_day():
    assert background_hue(0) == pytest.approx(220.0)
    assert background_hue(23) == pytest.approx(300.0)
    assert background_hue(11.5) == pytest.approx(260.0)


def test_hsba_conversion():
    white = hsba((0, 0, 100, 100))
    assert (white.r, white.g, white.b, white.a) == (255, 255, 255, 255)
    red = hsba((0, 100, 100))
    assert (red.r, red.g, red.b) == (255, 0, 0)
    transparent = hsba((200, 50, 50, 0))
    assert transparent.a == 0


# =============================================================================
# DRAWING
# =============================================================================

def test_draw_on_offscreen_surface(renderer):
    screen = pygame.Surface((800, 800))
    frame = renderer.render(screen, ClockReading(3, 30, 0))

    head = hsba(constants.COMET_HEAD_COLOR)
    assert tuple(screen.get_at((400, 140)))[:3] == (head.r, head.g, head.b)

    background = hsba((frame.background_hue, constants.BACKGROUND_SATURATION,
                       constants.BACKGROUND_BRIGHTNESS, 100))
    assert tuple(screen.get_at((0, 0)))[:3] == (background.r, background.g, background.b)


def test_resize_keeps_layout_and_schedule(renderer):
    schedule = renderer.state.schedule
    base = renderer.state.anchors.base_positions.copy()
    renderer.render(pygame.Surface((640, 480)), ClockReading(10, 45, 12))
    renderer.render(pygame.Surface((1024, 700)), ClockReading(10, 45, 13))
    assert renderer.state.schedule is schedule
    np.testing.assert_array_equal(renderer.state.anchors.base_positions, base)


def test_clock_loop_handles_resize_then_quit(renderer):
    screen = pygame.display.set_mode((400, 300), pygame.RESIZABLE)
    pygame.event.clear()
    schedule = renderer.state.schedule
    base = renderer.state.anchors.base_positions.copy()

    pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, size=(320, 240), w=320, h=240))
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    run_clock_loop(renderer, screen, pygame.time.Clock())

    assert pygame.display.get_surface().get_size() == (320, 240)
    assert renderer.state.frame_count == 1
    assert renderer.state.schedule is schedule
    np.testing.assert_array_equal(renderer.state.anchors.base_positions, base)
