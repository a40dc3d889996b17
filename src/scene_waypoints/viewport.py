# Copyright (C) 2025 Frederik Pasch
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions
# and limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""
Pan and zoom state of the scene view.

Zooming scales the visible world rectangle around a focal point. Panning is
triggered by hovering between the axes and the window edge: every call of
:meth:`ViewportController.tick_pan` moves the view one step towards the
pointer, faster the closer the pointer is to the window edge. The host event
loop calls ``tick_pan`` once per frame until it returns False.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Tuple

from .common.config import EditorConfig, Rect
from .data_model import ImageReference, ViewportState, WorldPoint

logger = logging.getLogger(__name__)


class PanDirection(Enum):
    """Direction in which the view moves."""

    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    UP = "up"


def _clamp_range(lo: float, hi: float, lower: float, upper: float) -> Tuple[float, float]:
    return max(lo, lower), min(hi, upper)


def _shift_range(lo: float, hi: float, delta: float,
                 lower: float, upper: float) -> Tuple[float, float]:
    span = hi - lo
    new_lo = max(min(lo + delta, upper - span), lower)
    return new_lo, min(new_lo + span, upper)


class ViewportController:
    """
    Owns the visible world rectangle and computes pan and zoom updates.

    The view never leaves the world extent of the scene image.
    """

    def __init__(self, reference: ImageReference,
                 axes_rect: Rect = (0.09, 0.12, 0.82, 0.85),
                 zoom_factor: float = 1.1,
                 pan_max_fraction: float = 0.01,
                 pan_window_margin: float = 0.95,
                 max_zoom_out_fraction: float = 0.95,
                 frame_interval: float = 0.02):
        """
        Initialize the controller showing the full image.

        Args:
            reference: spatial reference of the scene image
            axes_rect: (left, bottom, width, height) of the axes in the window,
                in window-normalized units
            zoom_factor: scale applied per scroll step
            pan_max_fraction: largest pan step as a fraction of the axis span
            pan_window_margin: fraction of the axes-to-window distance beyond
                which the pointer counts as outside the window
            max_zoom_out_fraction: span fraction of the full extent above
                which the view counts as fully zoomed out
            frame_interval: nominal time between two pan ticks in seconds
        """
        self.reference = reference
        self.axes_rect = axes_rect
        self.zoom_factor = zoom_factor
        self.pan_max_fraction = pan_max_fraction
        self.pan_window_margin = pan_window_margin
        self.max_zoom_out_fraction = max_zoom_out_fraction
        self.frame_interval = frame_interval

        self._state = self.full_extent()
        self._pan_snapshot: Optional[ViewportState] = None

    @classmethod
    def from_config(cls, reference: ImageReference, config: EditorConfig) -> "ViewportController":
        return cls(reference,
                   axes_rect=config.axes_rect,
                   zoom_factor=config.zoom_factor,
                   pan_max_fraction=config.pan_max_fraction,
                   pan_window_margin=config.pan_window_margin,
                   max_zoom_out_fraction=config.max_zoom_out_fraction,
                   frame_interval=config.pan_interval_ms / 1000.0)

    @property
    def state(self) -> ViewportState:
        return self._state

    @state.setter
    def state(self, state: ViewportState) -> None:
        ref = self.reference
        x_range = _clamp_range(*state.x_range, ref.x_min, ref.x_max)
        y_range = _clamp_range(*state.y_range, ref.y_min, ref.y_max)
        if x_range[1] <= x_range[0] or y_range[1] <= y_range[0]:
            raise ValueError(f"Viewport {state} does not overlap the scene extent")
        self._state = ViewportState(x_range=x_range, y_range=y_range)

    def full_extent(self) -> ViewportState:
        ref = self.reference
        return ViewportState(x_range=(ref.x_min, ref.x_max), y_range=(ref.y_min, ref.y_max))

    def reset(self) -> ViewportState:
        """Show the full scene and stop panning."""
        self._state = self.full_extent()
        self.end_pan()
        return self._state

    # Zoom

    def zoom(self, focal: WorldPoint, scroll_delta: float) -> ViewportState:
        """
        Scale the view around a focal point.

        Args:
            focal: world point that keeps its position on screen
            scroll_delta: scroll steps, positive values zoom out

        Returns:
            The new viewport state
        """
        if scroll_delta == 0:
            return self._state

        scale = self.zoom_factor ** scroll_delta
        ref = self.reference
        x_range = self._scaled_range(self._state.x_range, focal.x, scale, ref.x_min, ref.x_max)
        y_range = self._scaled_range(self._state.y_range, focal.y, scale, ref.y_min, ref.y_max)
        self._state = ViewportState(x_range=x_range, y_range=y_range)
        logger.debug(f"Zoom {scroll_delta:+g} at ({focal.x:.2f}, {focal.y:.2f}): "
                     f"x {x_range}, y {y_range}")
        return self._state

    @staticmethod
    def _scaled_range(current: Tuple[float, float], focal: float, scale: float,
                      lower: float, upper: float) -> Tuple[float, float]:
        lo = (current[0] - focal) * scale + focal
        hi = (current[1] - focal) * scale + focal
        lo, hi = _clamp_range(lo, hi, lower, upper)
        if hi <= lo:
            # focal point far outside the scene, keep the axis unchanged
            return current
        return lo, hi

    def is_max_zoomed_out(self) -> bool:
        """Check if the view shows (almost) the whole scene on both axes."""
        return (self._state.x_span > self.max_zoom_out_fraction * self.reference.world_width
                and self._state.y_span > self.max_zoom_out_fraction * self.reference.world_height)

    # Pan

    @property
    def is_panning(self) -> bool:
        return self._pan_snapshot is not None

    def start_pan(self, snapshot: Optional[ViewportState] = None) -> None:
        """
        Begin a pan session.

        Pan speed and window-edge distances are computed from the snapshot
        for the whole session.

        Args:
            snapshot: viewport to measure against, defaults to the current one
        """
        self._pan_snapshot = snapshot if snapshot is not None else self._state

    def end_pan(self) -> None:
        self._pan_snapshot = None

    def edge_distances(self, snapshot: Optional[ViewportState] = None) -> Dict[PanDirection, float]:
        """
        Get the world distance between each axes side and the window edge.

        Args:
            snapshot: viewport used for the world scale, defaults to the
                pan snapshot or the current viewport
        """
        view = snapshot or self._pan_snapshot or self._state
        left, bottom, width, height = self.axes_rect
        return {
            PanDirection.LEFT: view.x_span * left / width,
            PanDirection.RIGHT: view.x_span * (1.0 - (left + width)) / width,
            PanDirection.DOWN: view.y_span * bottom / height,
            PanDirection.UP: view.y_span * (1.0 - (bottom + height)) / height,
        }

    def pan_direction(self, pointer: WorldPoint) -> Optional[PanDirection]:
        """Get the direction to pan for a pointer outside the view, if any."""
        x_lo, x_hi = self._state.x_range
        y_lo, y_hi = self._state.y_range
        if pointer.x < x_lo:
            return PanDirection.LEFT
        if pointer.x > x_hi:
            return PanDirection.RIGHT
        if pointer.y < y_lo:
            return PanDirection.DOWN
        if pointer.y > y_hi:
            return PanDirection.UP
        return None

    def _pointer_offset(self, pointer: WorldPoint, direction: PanDirection) -> float:
        x_lo, x_hi = self._state.x_range
        y_lo, y_hi = self._state.y_range
        if direction is PanDirection.LEFT:
            return x_lo - pointer.x
        if direction is PanDirection.RIGHT:
            return pointer.x - x_hi
        if direction is PanDirection.DOWN:
            return y_lo - pointer.y
        return pointer.y - y_hi

    def _room(self, direction: PanDirection) -> float:
        """World distance the view can still move in a direction."""
        ref = self.reference
        if direction is PanDirection.LEFT:
            return self._state.x_range[0] - ref.x_min
        if direction is PanDirection.RIGHT:
            return ref.x_max - self._state.x_range[1]
        if direction is PanDirection.DOWN:
            return self._state.y_range[0] - ref.y_min
        return ref.y_max - self._state.y_range[1]

    def tick_pan(self, pointer: WorldPoint, direction: Optional[PanDirection] = None,
                 dt: Optional[float] = None, blocked: bool = False) -> bool:
        """
        Move the view one step towards a pointer outside the axes.

        Args:
            pointer: pointer position in world coordinates of the current view
            direction: pan direction, inferred from the pointer if omitted
            dt: time since the previous tick in seconds, ticks later than the
                nominal frame interval take proportionally larger steps
            blocked: True if another interaction forbids panning

        Returns:
            True if the view moved, False if panning has stopped
        """
        if self._pan_snapshot is None or blocked or self.is_max_zoomed_out():
            return False

        if direction is None:
            direction = self.pan_direction(pointer)
            if direction is None:
                return False

        offset = self._pointer_offset(pointer, direction)
        edge_distance = self.edge_distances()[direction]
        room = self._room(direction)
        if offset <= 0 or edge_distance <= 0 or room <= 0:
            return False
        if offset >= edge_distance * self.pan_window_margin:
            # pointer left the window
            return False

        horizontal = direction in (PanDirection.LEFT, PanDirection.RIGHT)
        snapshot_span = self._pan_snapshot.x_span if horizontal else self._pan_snapshot.y_span
        max_step = self.pan_max_fraction * snapshot_span
        step = max_step * offset / edge_distance
        if dt is not None and self.frame_interval > 0:
            # late frames catch up, early ones do not slow down
            step = min(step * max(dt / self.frame_interval, 1.0), max_step)
        step = min(step, room)
        if step <= 0:
            return False

        sign = -1.0 if direction in (PanDirection.LEFT, PanDirection.DOWN) else 1.0
        ref = self.reference
        if horizontal:
            x_range = _shift_range(*self._state.x_range, sign * step, ref.x_min, ref.x_max)
            self._state = ViewportState(x_range=x_range, y_range=self._state.y_range)
        else:
            y_range = _shift_range(*self._state.y_range, sign * step, ref.y_min, ref.y_max)
            self._state = ViewportState(x_range=self._state.x_range, y_range=y_range)
        return True
