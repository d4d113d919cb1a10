# frame_renderer.py

import logging
from collections import namedtuple
from typing import Optional
import numpy as np
import pygame
import constants
from animation_state import AnimationState
from clock_reading import ClockReading
from comet import comet_position
from connection_scheduler import connections_for_minute

logger = logging.getLogger("constellation_clock")

# --- Frame description ---
# compose() produces these plain records; draw() turns them into pixels.
# Coordinates are relative to the centre of the clock face.
WebSegment = namedtuple('WebSegment', ['connection', 'start', 'end', 'highlighted'])
AnchorMark = namedtuple('AnchorMark', ['index', 'position', 'size', 'glow', 'is_current_hour'])
ParticleSnapshot = namedtuple('ParticleSnapshot', ['positions', 'lives', 'hues', 'sizes'])
Frame = namedtuple('Frame', [
    'reading', 'frame_count', 'background_hue', 'segments', 'anchors', 'comet', 'particles'
])

def hsba(color) -> pygame.Color:
    """
    Converts an (hue, saturation, brightness, alpha) tuple in the
    (360, 100, 100, 100) model to a pygame.Color.
    """
    hue, saturation, brightness = color[0], color[1], color[2]
    alpha = color[3] if len(color) > 3 else 100
    result = pygame.Color(0, 0, 0)
    result.hsva = (
        float(np.clip(hue, 0, 360)),
        float(np.clip(saturation, 0, 100)),
        float(np.clip(brightness, 0, 100)),
        float(np.clip(alpha, 0, 100)),
    )
    return result

def _point(offset, center):
    """Screen coordinates for an offset from the face centre."""
    return (float(offset[0] + center[0]), float(offset[1] + center[1]))

def background_hue(hour_of_day: int) -> float:
    """Maps hour of day [0, 23] linearly onto [BACKGROUND_HUE_MIN, BACKGROUND_HUE_MAX]."""
    span = constants.BACKGROUND_HUE_MAX - constants.BACKGROUND_HUE_MIN
    return constants.BACKGROUND_HUE_MIN + hour_of_day / 23.0 * span


class FrameRenderer:
    """
    Runs the per-frame update of an AnimationState and draws the result.

    Data Contract:
    - Inputs:
        - state (AnimationState): Built once at startup, mutated every frame.
    - Side Effects: compose() advances the frame counter, recomputes anchor
      drift and ages the particle trail. draw() only touches the surface.
    - Invariants: The per-frame order is fixed: drift, background, web,
      anchors, comet and trail.
    """
    def __init__(self, state: AnimationState):
        self.state = state

    def render(self, screen: pygame.Surface, reading: Optional[ClockReading] = None) -> Frame:
        """The per-frame entry point: compose from the wall clock, then draw."""
        if reading is None:
            reading = ClockReading.now()
        frame = self.compose(reading)
        self.draw(screen, frame)
        return frame

    def compose(self, reading: ClockReading) -> Frame:
        state = self.state
        frame_count = state.advance_frame()

        positions = state.anchors.update_drift(frame_count, state.noise)
        hue = background_hue(reading.hour_of_day)
        segments = self._compose_web(reading.minute, positions)
        anchors = self._compose_anchors(reading.hour, frame_count, positions)

        comet = comet_position(reading.smooth_seconds)
        state.trail.spawn(comet)
        state.trail.tick()
        trail = state.trail
        particles = ParticleSnapshot(
            trail.positions.copy(), trail.lives.copy(), trail.hues.copy(), trail.sizes.copy()
        )

        return Frame(reading, frame_count, hue, segments, anchors, comet, particles)

    def _compose_web(self, minute: int, positions: np.ndarray):
        revealed = connections_for_minute(self.state.schedule, minute)
        if minute != self.state.last_minute:
            logger.info(f"Current minute: {minute}. Revealed connections: {len(revealed)}")
            self.state.last_minute = minute

        newest = len(revealed) - 1
        return [
            WebSegment(connection, positions[connection.i].copy(), positions[connection.j].copy(), k == newest)
            for k, connection in enumerate(revealed)
        ]

    def _compose_anchors(self, hour: int, frame_count: int, positions: np.ndarray):
        wave = np.sin(frame_count * constants.PULSE_RATE)
        anchors = []
        for i in range(self.state.anchors.count):
            is_current = i == hour
            if is_current:
                size = wave * constants.CURRENT_ANCHOR_PULSE + constants.CURRENT_ANCHOR_BASE_SIZE
                glow = constants.CURRENT_ANCHOR_BASE_GLOW + wave * constants.CURRENT_ANCHOR_GLOW_PULSE
            else:
                size = constants.ANCHOR_SIZE
                glow = constants.ANCHOR_GLOW
            anchors.append(AnchorMark(i, positions[i].copy(), float(size), float(glow), is_current))
        return anchors

    # --- Drawing ---

    def draw(self, screen: pygame.Surface, frame: Frame):
        """
        Draws a composed frame. Crisp shapes go onto an alpha layer, glowing
        shapes also leave a halo on a glow layer that is blurred and added on
        top of the background (bloom pass).
        """
        width, height = screen.get_size()
        center = np.array([width / 2.0, height / 2.0])

        screen.fill(hsba((frame.background_hue, constants.BACKGROUND_SATURATION,
                          constants.BACKGROUND_BRIGHTNESS, 100)))
        layer = pygame.Surface((width, height), pygame.SRCALPHA)
        glow_layer = pygame.Surface((width, height), pygame.SRCALPHA)

        self._draw_web(layer, glow_layer, center, frame.segments)
        self._draw_anchors(layer, glow_layer, center, frame.anchors)
        self._draw_comet(layer, glow_layer, center, frame.comet, frame.particles)

        self._apply_bloom(screen, glow_layer)
        screen.blit(layer, (0, 0))

    def _draw_web(self, layer, glow_layer, center, segments):
        standard = hsba(constants.WEB_COLOR)
        recent = hsba(constants.WEB_RECENT_COLOR)
        for segment in segments:
            start = _point(segment.start, center)
            end = _point(segment.end, center)
            if segment.highlighted:
                self._glow_line(glow_layer, start, end, constants.WEB_RECENT_GLOW, constants.WEB_RECENT_GLOW_COLOR)
                pygame.draw.line(layer, recent, start, end, constants.WEB_RECENT_WIDTH)
            else:
                pygame.draw.aaline(layer, standard, start, end)

    def _draw_anchors(self, layer, glow_layer, center, anchors):
        for anchor in anchors:
            position = _point(anchor.position, center)
            if anchor.is_current_hour:
                fill, glow_color = constants.CURRENT_ANCHOR_COLOR, constants.CURRENT_ANCHOR_GLOW_COLOR
            else:
                fill, glow_color = constants.ANCHOR_COLOR, constants.ANCHOR_GLOW_COLOR
            self._glow_circle(glow_layer, position, anchor.size, anchor.glow, glow_color)
            pygame.draw.circle(layer, hsba(fill), position, anchor.size / 2.0)

    def _draw_comet(self, layer, glow_layer, center, comet, particles):
        for position, life, hue, size in zip(*particles):
            color = hsba((hue, constants.PARTICLE_SATURATION, constants.PARTICLE_BRIGHTNESS, life))
            pygame.draw.circle(layer, color, _point(position, center), float(size) / 2.0)

        head = _point(comet, center)
        self._glow_circle(glow_layer, head, constants.COMET_HEAD_SIZE, constants.COMET_GLOW, constants.COMET_GLOW_COLOR)
        pygame.draw.circle(layer, hsba(constants.COMET_HEAD_COLOR), head, constants.COMET_HEAD_SIZE / 2.0)

    def _glow_circle(self, glow_layer, position, size, glow, color):
        color = hsba((color[0], color[1], color[2], constants.GLOW_HALO_ALPHA))
        pygame.draw.circle(glow_layer, color, position, (size + glow) / 2.0)

    def _glow_line(self, glow_layer, start, end, glow, color):
        color = hsba((color[0], color[1], color[2], constants.GLOW_HALO_ALPHA))
        pygame.draw.line(glow_layer, color, start, end, max(1, int(glow // 3)))

    def _apply_bloom(self, screen, glow_layer):
        width, height = screen.get_size()
        scale = constants.BLOOM_RADIUS
        scaled_size = (max(1, width // scale), max(1, height // scale))
        scaled_surface = pygame.transform.smoothscale(glow_layer, scaled_size)
        blurred_surface = pygame.transform.smoothscale(scaled_surface, (width, height))

        intensity = constants.BLOOM_INTENSITY
        blurred_surface.fill((intensity, intensity, intensity), special_flags=pygame.BLEND_RGB_MULT)
        screen.blit(blurred_surface, (0, 0), special_flags=pygame.BLEND_RGB_ADD)
