#!/usr/bin/env python3
"""
Bezier Rope Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the Bezier chain and the current
  SimulationConfig; all access is guarded by a re-entrant lock for thread-safety.
- Maps the pointer to control-point targets, steps the spring-damper physics at a fixed
  60 Hz, and draws the sampled curves, tangent arrows and control points.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  stepping physics, and drawing. It locks the SimulationController around short critical
  sections to read/update shared state, and draws from a snapshot outside the lock.
- The UI class runs in the main thread via Dear PyGui. It swaps in new configuration values
  from its callbacks and syncs its widgets on a periodic frame callback.

Units and conventions
- Screen pixels throughout; the viewport size is the canvas size of the chain.
- Physics constants are per frame; the controller always advances in 1/60 s steps.
- Colors are RGB tuples in 0..255.

Running
1) Install: `pip install -e .` (pulls in pygame and dearpygui)
2) Run: `bezier-sim` or `python bezier_sim.py`

Viewport keys: T tangents, C control points, P physics, G gradient, R reset,
1-4 presets, Esc quit. Move the mouse (or drag a finger) to bend the rope.
"""

import colorsys
import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from bezier_core.chain import create_chain
from bezier_core.config import SimulationConfig
from bezier_core.constants import (
    ARROW_HEAD_SIZE,
    BACKGROUND_COLOR,
    CONTROL_POINT_COLOR,
    CONTROL_POLYGON_COLOR,
    CURVE_COLOR,
    CURVE_WIDTH,
    DAMPING_RANGE,
    FIXED_POINT_COLOR,
    FRAME_DT,
    FRAME_RATE,
    GLOW_COLOR,
    GRADIENT_STOPS,
    HUD_COLOR,
    JUNCTION_POINT_COLOR,
    MAX_STEPS_PER_FRAME,
    SAFE_COORD_LIMIT,
    STIFFNESS_RANGE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from bezier_core.data_models import PhysicsPreset, TangentSample
from bezier_core.input_mapping import apply_pointer
from bezier_core.logging_config import setup_logging
from bezier_core.presets_loader import load_presets
from bezier_core.vector_utils import Vector2D, clamp

logger = logging.getLogger("bezier_sim")

# ============================================================
# Simulation Controller (Shared State)
# ============================================================


@dataclass
class FrameSnapshot:
    """Everything the renderer needs for one frame, copied out under the lock."""
    config: SimulationConfig
    curves: List[List[Tuple[float, float]]] = field(default_factory=list)
    tangents: List[List[TangentSample]] = field(default_factory=list)
    polygons: List[List[Tuple[float, float]]] = field(default_factory=list)
    points: List[Tuple[Tuple[float, float], str]] = field(default_factory=list)  # (pos, kind)


class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT,
                 config: Optional[SimulationConfig] = None,
                 presets: Optional[List[PhysicsPreset]] = None):
        self.lock = threading.RLock()
        self.running = True  # app running
        self.config = config or SimulationConfig()
        self.presets = presets if presets is not None else load_presets()
        self.width = width
        self.height = height
        self.chain = create_chain(self.config.segment_count, width, height)
        self.last_status_msg: Optional[str] = None

        # Latest pointer position, applied at the start of the next tick
        self._pending_pointer: Optional[Tuple[float, float]] = None
        self._accumulator = 0.0

    def _rebuild(self):
        self.chain = create_chain(self.config.segment_count, self.width, self.height)
        self._pending_pointer = None
        self._accumulator = 0.0

    def update_config(self, **changes) -> bool:
        """Swap in a new configuration; rebuilds the chain if the segment count changed."""
        return self._swap_config(lambda config: config.updated(**changes), changes)

    def _swap_config(self, build, what) -> bool:
        with self.lock:
            try:
                new_config = build(self.config)
            except ValueError as exc:
                logger.warning("Rejected settings %s: %s", what, exc)
                self.last_status_msg = f"Rejected: {exc}"
                return False
            rebuild = new_config.segment_count != self.config.segment_count
            self.config = new_config
            if rebuild:
                self._rebuild()
                logger.info("Chain rebuilt with %d segments", new_config.segment_count)
            return True

    def toggle(self, name: str) -> bool:
        with self.lock:
            value = not getattr(self.config, name)
            self.update_config(**{name: value})
            return value

    def apply_preset(self, index: int) -> Optional[PhysicsPreset]:
        with self.lock:
            if not 0 <= index < len(self.presets):
                return None
            preset = self.presets[index]
            if self._swap_config(lambda config: config.with_preset(preset), preset.name):
                self.last_status_msg = f"Preset: {preset.name}"
                logger.info("Applied preset %s (k=%.2f, c=%.2f)",
                            preset.name, preset.spring_stiffness, preset.damping)
                return preset
            return None

    def reset(self):
        with self.lock:
            self._rebuild()
            self.last_status_msg = "Simulation reset."
        logger.info("Simulation reset")

    def resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            return
        with self.lock:
            if (width, height) == (self.width, self.height):
                return
            self.width = width
            self.height = height
            self._rebuild()

    def set_pointer(self, x: float, y: float):
        with self.lock:
            self._pending_pointer = (float(x), float(y))

    def step_physics(self, dt_real_seconds: float) -> int:
        """
        Advance physics by whole 1/60 s ticks covering the elapsed wall time.

        At most MAX_STEPS_PER_FRAME ticks run per call; time beyond that (a stall, a window
        drag) is dropped rather than replayed. Returns the number of ticks taken.
        """
        with self.lock:
            if self._pending_pointer is not None:
                apply_pointer(self.chain, *self._pending_pointer)
                self._pending_pointer = None

            self._accumulator += max(0.0, dt_real_seconds)
            steps = int(self._accumulator / FRAME_DT)
            if steps > MAX_STEPS_PER_FRAME:
                steps = MAX_STEPS_PER_FRAME
                self._accumulator = 0.0
            else:
                self._accumulator -= steps * FRAME_DT

            for _ in range(steps):
                self.chain.update(self.config)
            return steps

    def snapshot(self) -> FrameSnapshot:
        with self.lock:
            config = self.config
            snap = FrameSnapshot(config=config)
            seen = set()
            for curve in self.chain.curves:
                snap.curves.append([p.as_tuple() for p in curve.sample_points(config.curve_sample_count)])
                if config.show_tangents:
                    snap.tangents.append(list(curve.sample_tangents(config.tangent_count)))
                if config.show_control_points:
                    pts = curve.control_points()
                    snap.polygons.append([p.position.as_tuple() for p in pts])
                    for role, p in enumerate(pts):
                        if id(p) in seen:
                            continue
                        seen.add(id(p))
                        if p.is_fixed:
                            kind = "fixed"
                        elif role in (1, 2):
                            kind = "control"
                        else:
                            kind = "junction"
                        snap.points.append((p.position.as_tuple(), kind))
            return snap

# ============================================================
# Drawing helpers
# ============================================================

_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (OSError, RuntimeError):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def lerp_color(a, b, f):
    return tuple(int(round(a[i] + (b[i] - a[i]) * f)) for i in range(3))


def gradient_color(f: float):
    """Color at fraction f in [0, 1] along GRADIENT_STOPS (evenly spaced stops)."""
    f = clamp(f, 0.0, 1.0)
    spans = len(GRADIENT_STOPS) - 1
    idx = min(int(f * spans), spans - 1)
    return lerp_color(GRADIENT_STOPS[idx], GRADIENT_STOPS[idx + 1], f * spans - idx)


def tangent_color(curve_index: int, curve_count: int, t: float):
    hue = ((curve_index / max(curve_count, 1) + t) * 180 + 180) % 360
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, 0.6, 0.7)
    return (int(r * 255), int(g * 255), int(b * 255))


def arrow_wings(tip: Vector2D, direction: Vector2D, size: float) -> List[Vector2D]:
    """End points of the two arrowhead strokes, swept back 30 degrees either side of direction."""
    cos_a, sin_a = math.cos(math.pi / 6), math.sin(math.pi / 6)
    back = direction.scale(-size)
    wings = []
    for s in (sin_a, -sin_a):
        rotated = Vector2D(back.dot(Vector2D(cos_a, -s)), back.dot(Vector2D(s, cos_a)))
        wings.append(tip.add(rotated))
    return wings


def draw_arrow_head(surface, tip: Vector2D, direction: Vector2D, color):
    tip_s = _safe_point(tip.as_tuple())
    if tip_s is None:
        return
    for wing in arrow_wings(tip, direction, ARROW_HEAD_SIZE):
        wing_s = _safe_point(wing.as_tuple())
        if wing_s:
            pygame.draw.line(surface, color, tip_s, wing_s, 2)


def draw_dashed_line(surface, color, start, end, dash=5, gap=5):
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return
    ux, uy = dx / length, dy / length
    pos = 0.0
    while pos < length:
        stop = min(pos + dash, length)
        pygame.draw.line(surface, color,
                         (start[0] + ux * pos, start[1] + uy * pos),
                         (start[0] + ux * stop, start[1] + uy * stop), 1)
        pos += dash + gap

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: maps pointer input to targets, steps physics, draws the chain.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.surface = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Bezier Rope - Viewport")
        with self.sim.lock:
            size = (self.sim.width, self.sim.height)
        self.surface = pygame.display.set_mode(size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        logger.info("Viewport opened at %dx%d", *size)

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()
            self.sim.step_physics(real_dt)
            self.draw()

            self.clock.tick(FRAME_RATE)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.sim.resize(event.w, event.h)

            elif event.type == pygame.MOUSEMOTION:
                self.sim.set_pointer(*event.pos)

            elif event.type == pygame.FINGERMOTION:
                w, h = self.surface.get_size()
                self.sim.set_pointer(event.x * w, event.y * h)

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key):
        toggles = {
            pygame.K_t: "show_tangents",
            pygame.K_c: "show_control_points",
            pygame.K_p: "physics_enabled",
            pygame.K_g: "show_gradient",
        }
        presets = {pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2, pygame.K_4: 3}
        if key in toggles:
            value = self.sim.toggle(toggles[key])
            with self.sim.lock:
                self.sim.last_status_msg = f"{toggles[key]}: {'ON' if value else 'OFF'}"
        elif key in presets:
            self.sim.apply_preset(presets[key])
        elif key == pygame.K_r:
            self.sim.reset()
        elif key == pygame.K_ESCAPE:
            self.sim.running = False
            self.running = False

    def draw_curves(self, surf, snap: FrameSnapshot):
        total = sum(len(c) for c in snap.curves)
        done = 0
        for samples in snap.curves:
            pts = [p for p in (_safe_point(s) for s in samples) if p]
            if len(pts) < 2:
                done += len(samples)
                continue
            if snap.config.show_gradient:
                glow = lerp_color(BACKGROUND_COLOR, GLOW_COLOR, 0.35)
                pygame.draw.lines(surf, glow, False, pts, CURVE_WIDTH + 6)
                for i in range(1, len(pts)):
                    color = gradient_color((done + i) / max(total - 1, 1))
                    pygame.draw.line(surf, color, pts[i - 1], pts[i], CURVE_WIDTH)
            else:
                pygame.draw.lines(surf, CURVE_COLOR, False, pts, CURVE_WIDTH)
            done += len(samples)

    def draw_tangents(self, surf, snap: FrameSnapshot):
        n = len(snap.tangents)
        length = snap.config.tangent_length
        for curve_index, samples in enumerate(snap.tangents):
            for sample in samples:
                if sample.speed == 0.0 or length <= 0:
                    continue
                start = _safe_point(sample.point.as_tuple())
                tip = sample.arrow_end(length)
                end = _safe_point(tip.as_tuple())
                if not (start and end):
                    continue
                color = tangent_color(curve_index, n, sample.t)
                pygame.draw.line(surf, color, start, end, 2)
                draw_arrow_head(surf, tip, sample.direction, color)

    def draw_control_points(self, surf, snap: FrameSnapshot):
        for polygon in snap.polygons:
            pts = [_safe_point(p) for p in polygon]
            for a, b in zip(pts, pts[1:]):
                if a and b:
                    draw_dashed_line(surf, CONTROL_POLYGON_COLOR, a, b)

        colors = {"fixed": FIXED_POINT_COLOR, "control": CONTROL_POINT_COLOR, "junction": JUNCTION_POINT_COLOR}
        for pos, kind in snap.points:
            p = _safe_point(pos)
            if p is None:
                continue
            radius = 6 if kind == "control" else 8
            gfxdraw.filled_circle(surf, p[0], p[1], radius, colors[kind])
            gfxdraw.aacircle(surf, p[0], p[1], radius, FIXED_POINT_COLOR)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        snap = self.sim.snapshot()
        self.draw_curves(surf, snap)
        if snap.config.show_tangents:
            self.draw_tangents(surf, snap)
        if snap.config.show_control_points:
            self.draw_control_points(surf, snap)

        # HUD text
        cfg = snap.config
        draw_text(surf, "Move: bend | T tangents | C points | P physics | G gradient | R reset | 1-4 presets",
                  10, 10, HUD_COLOR)
        draw_text(surf, f"FPS: {self.clock.get_fps():.0f}  k={cfg.spring_stiffness:.2f}  c={cfg.damping:.2f}  "
                        f"[{'Physics' if cfg.physics_enabled else 'Direct'}]", 10, 30, HUD_COLOR)

        pygame.display.flip()

# ============================================================
# Dear PyGui UI
# ============================================================


class UI:
    """
    Dear PyGui interface: physics sliders, display toggles, presets, reset.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.status_msg_id = None
        self._build_ui()

        # Periodic UI sync without using timers (for wider DPG version support)
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        with self.sim.lock:
            cfg = self.sim.config
            presets = list(self.sim.presets)

        dpg.create_context()
        dpg.create_viewport(title='Bezier Rope - Controls', width=380, height=640)

        with dpg.window(label="Controls", width=360, height=620, pos=(10, 10), tag="main_window"):
            dpg.add_text("Physics")
            dpg.add_slider_float(label="Spring stiffness", min_value=STIFFNESS_RANGE[0], max_value=STIFFNESS_RANGE[1],
                                 default_value=cfg.spring_stiffness, width=200, format="%.2f",
                                 callback=self._setting("spring_stiffness", float), tag="stiffness_slider")
            dpg.add_slider_float(label="Damping", min_value=DAMPING_RANGE[0], max_value=DAMPING_RANGE[1],
                                 default_value=cfg.damping, width=200, format="%.2f",
                                 callback=self._setting("damping", float), tag="damping_slider")
            dpg.add_checkbox(label="Enable physics", default_value=cfg.physics_enabled,
                             callback=self._setting("physics_enabled", bool), tag="physics_checkbox")

            dpg.add_separator()
            dpg.add_text("Display")
            dpg.add_slider_float(label="Tangent length", min_value=10.0, max_value=100.0,
                                 default_value=cfg.tangent_length, width=200, format="%.0f",
                                 callback=self._setting("tangent_length", float), tag="tangent_length_slider")
            dpg.add_slider_int(label="Tangent count", min_value=2, max_value=30,
                               default_value=cfg.tangent_count, width=200,
                               callback=self._setting("tangent_count", int), tag="tangent_count_slider")
            dpg.add_slider_int(label="Curve samples", min_value=10, max_value=300,
                               default_value=cfg.curve_sample_count, width=200,
                               callback=self._setting("curve_sample_count", int), tag="curve_samples_slider")
            dpg.add_checkbox(label="Show tangents", default_value=cfg.show_tangents,
                             callback=self._setting("show_tangents", bool), tag="tangents_checkbox")
            dpg.add_checkbox(label="Show control points", default_value=cfg.show_control_points,
                             callback=self._setting("show_control_points", bool), tag="points_checkbox")
            dpg.add_checkbox(label="Gradient", default_value=cfg.show_gradient,
                             callback=self._setting("show_gradient", bool), tag="gradient_checkbox")

            dpg.add_separator()
            dpg.add_text("Chain")
            dpg.add_slider_int(label="Segments", min_value=1, max_value=8,
                               default_value=cfg.segment_count, width=200,
                               callback=self._setting("segment_count", int), tag="segments_slider")

            dpg.add_separator()
            dpg.add_text("Presets")
            with dpg.group(horizontal=True):
                for index, preset in enumerate(presets):
                    button = dpg.add_button(label=preset.name, user_data=index,
                                            callback=lambda s, a, u: self._apply_preset(u))
                    if preset.description:
                        with dpg.tooltip(button):
                            dpg.add_text(f"{preset.description} (k={preset.spring_stiffness:.2f}, "
                                         f"c={preset.damping:.2f})")
            dpg.add_button(label="Reset", callback=self._reset)
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _setting(self, name, cast):
        def callback(sender, app_data, user_data=None):
            try:
                value = cast(app_data)
            except (TypeError, ValueError):
                self._set_error(f"Invalid value for {name}.")
                return
            if not self.sim.update_config(**{name: value}):
                with self.sim.lock:
                    msg = self.sim.last_status_msg
                    self.sim.last_status_msg = None
                self._set_error(msg or f"Invalid value for {name}.")
        return callback

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _apply_preset(self, index: int):
        preset = self.sim.apply_preset(index)
        if preset is None:
            self._set_error("Preset could not be applied.")

    def _reset(self):
        self.sim.reset()

    def _sync_ui_with_sim(self):
        """
        Periodic UI update so changes made from the viewport keys (presets, toggles) show up
        in the widgets, plus the latest status message.
        """
        if not self.sim.running:
            dpg.stop_dearpygui()
            return
        with self.sim.lock:
            cfg = self.sim.config
            msg = self.sim.last_status_msg
            self.sim.last_status_msg = None
        widget_values = {
            "stiffness_slider": cfg.spring_stiffness,
            "damping_slider": cfg.damping,
            "physics_checkbox": cfg.physics_enabled,
            "tangent_length_slider": cfg.tangent_length,
            "tangent_count_slider": cfg.tangent_count,
            "curve_samples_slider": cfg.curve_sample_count,
            "tangents_checkbox": cfg.show_tangents,
            "points_checkbox": cfg.show_control_points,
            "gradient_checkbox": cfg.show_gradient,
            "segments_slider": cfg.segment_count,
        }
        for tag, value in widget_values.items():
            if dpg.get_value(tag) != value:
                dpg.set_value(tag, value)
        if msg:
            self._set_status(msg)
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================


def main():
    setup_logging()
    sim = SimulationController()

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    UI(sim)

    # R in the controls window resets too
    with dpg.handler_registry():
        def key_release(sender, app_data):
            if app_data == dpg.mvKey_R:
                sim.reset()
        dpg.add_key_release_handler(callback=key_release)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
