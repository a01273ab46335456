"""Value types for Fibonacci spiral geometry.

World coordinates follow the screen convention used by the SVG output:
``top`` is the smaller y value and y grows downward.  All coordinates are
plain Python ints so that large squares stay exact.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

# Ordered palette, cycled by ``SquareRecord.color_slot``.
PALETTE: Tuple[str, ...] = (
    "#ff0000",  # red
    "#0000ff",  # blue
    "#00ff00",  # green
    "#800080",  # purple
    "#ffa500",  # orange
    "#00ffff",  # cyan
    "#ff00ff",  # magenta
    "#ffff00",  # yellow
)

PALETTE_SIZE = len(PALETTE)

# Every arc sweeps a quarter turn towards decreasing angles.
ARC_SWEEP = -90

# Unit vectors for the four axis angles, exact in integer arithmetic.
_UNIT = {
    0: (1, 0),
    90: (0, 1),
    180: (-1, 0),
    270: (0, -1),
}


class SpiralDirection(Enum):
    """Side of the previous square on which a square is attached."""
    SEED = "seed"
    UP = "up"
    LEFT = "left"
    DOWN = "down"
    RIGHT = "right"


class Corner(Enum):
    """Rectangle corner, named as ``(vertical, horizontal)`` edge pair."""
    TOP_LEFT = ("top", "left")
    TOP_RIGHT = ("top", "right")
    BOTTOM_LEFT = ("bottom", "left")
    BOTTOM_RIGHT = ("bottom", "right")

    def adjacent(self) -> Tuple["Corner", "Corner"]:
        """The two corners sharing an edge with this one."""
        vertical, horizontal = self.value
        flip_v = "bottom" if vertical == "top" else "top"
        flip_h = "right" if horizontal == "left" else "left"
        return Corner((flip_v, horizontal)), Corner((vertical, flip_h))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world coordinates."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def corner(self, corner: Corner) -> Tuple[int, int]:
        vertical, horizontal = corner.value
        return getattr(self, horizontal), getattr(self, vertical)

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def shared_edge(self, other: "Rect") -> Tuple[Optional[str], int]:
        """
        Finds the edge of ``self`` that touches ``other``.

        Args:
            other: The neighbouring rectangle.

        Returns:
            A ``(side, length)`` tuple, where ``side`` names the edge of ``self``
            ('top', 'bottom', 'left' or 'right') and ``length`` is the length of
            the overlapping segment.  ``(None, 0)`` if the rectangles only touch
            at a point or not at all.
        """
        horizontal_overlap = min(self.right, other.right) - max(self.left, other.left)
        vertical_overlap = min(self.bottom, other.bottom) - max(self.top, other.top)

        if horizontal_overlap > 0:
            if self.top == other.bottom:
                return "top", horizontal_overlap
            if self.bottom == other.top:
                return "bottom", horizontal_overlap
        if vertical_overlap > 0:
            if self.left == other.right:
                return "left", vertical_overlap
            if self.right == other.left:
                return "right", vertical_overlap
        return None, 0

    def overlaps(self, other: "Rect") -> bool:
        """True if the interiors intersect."""
        return (min(self.right, other.right) > max(self.left, other.left)
                and min(self.bottom, other.bottom) > max(self.top, other.top))

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return self.left, self.top, self.right, self.bottom


def unit_vector(angle: int) -> Tuple[int, int]:
    """Exact unit vector for a multiple of 90 degrees."""
    try:
        return _UNIT[angle % 360]
    except KeyError:
        raise ValueError(f"Angle must be a multiple of 90 degrees, got {angle}") from None


@dataclass(frozen=True)
class ArcElement:
    """
    Quarter-circle arc inside one square.

    The arc is centered on ``pivot`` (a corner of the square), has a radius
    equal to the square's side and sweeps ``ARC_SWEEP`` degrees starting at
    ``start_angle``.  The point at angle ``a`` is ``pivot + r * (cos a, sin a)``.
    """
    pivot: Corner
    start_angle: int
    sweep: int = ARC_SWEEP

    @property
    def end_angle(self) -> int:
        return (self.start_angle + self.sweep) % 360

    def center(self, rect: Rect) -> Tuple[int, int]:
        return rect.corner(self.pivot)

    def point_at(self, rect: Rect, angle: int) -> Tuple[int, int]:
        cx, cy = self.center(rect)
        ux, uy = unit_vector(angle)
        r = rect.width
        return cx + r * ux, cy + r * uy

    def start_point(self, rect: Rect) -> Tuple[int, int]:
        return self.point_at(rect, self.start_angle)

    def end_point(self, rect: Rect) -> Tuple[int, int]:
        return self.point_at(rect, self.end_angle)

    def tangent_at(self, angle: int) -> Tuple[int, int]:
        # Direction of travel for a sweep towards decreasing angles.
        ux, uy = unit_vector(angle)
        return uy, -ux

    def start_tangent(self) -> Tuple[int, int]:
        return self.tangent_at(self.start_angle)

    def end_tangent(self) -> Tuple[int, int]:
        return self.tangent_at(self.end_angle)

    def sample(self, rect: Rect, steps: int = 16) -> np.ndarray:
        """
        Samples the arc as a polyline.

        Args:
            rect: The square the arc is drawn in.
            steps: Number of segments; the result has ``steps + 1`` points.

        Returns:
            A ``(steps + 1, 2)`` float array of ``(x, y)`` points, from the start
            point to the end point.
        """
        cx, cy = self.center(rect)
        r = float(rect.width)
        angles = np.radians(np.linspace(self.start_angle, self.start_angle + self.sweep, steps + 1))
        return np.column_stack((cx + r * np.cos(angles), cy + r * np.sin(angles)))


class ArcResolver:
    """
    Maps a direction to the arc drawn inside the square.

    Every arc sweeps -90 degrees, so each start angle is the previous square's
    end angle: SEED 90 -> 0, UP 0 -> 270, LEFT 270 -> 180, DOWN 180 -> 90,
    RIGHT 90 -> 0, then UP again.  The pivots put the end of one arc on the
    start of the next.
    """

    TABLE: Dict[SpiralDirection, ArcElement] = {
        SpiralDirection.SEED: ArcElement(Corner.TOP_LEFT, 90),
        SpiralDirection.UP: ArcElement(Corner.BOTTOM_LEFT, 0),
        SpiralDirection.LEFT: ArcElement(Corner.BOTTOM_RIGHT, 270),
        SpiralDirection.DOWN: ArcElement(Corner.TOP_RIGHT, 180),
        SpiralDirection.RIGHT: ArcElement(Corner.TOP_LEFT, 90),
    }

    @staticmethod
    def resolve(direction: SpiralDirection) -> ArcElement:
        try:
            return ArcResolver.TABLE[direction]
        except KeyError:
            raise AssertionError(f"No arc for direction {direction!r}") from None


assert set(ArcResolver.TABLE) == set(SpiralDirection)


@dataclass(frozen=True)
class SquareRecord:
    """One square of the spiral."""
    index: int
    value: int
    rect: Rect
    color_slot: int
    direction: SpiralDirection

    @property
    def color(self) -> str:
        return PALETTE[self.color_slot]

    @property
    def arc(self) -> ArcElement:
        return ArcResolver.resolve(self.direction)

    def to_dict(self, arc_steps: int = 16) -> dict:
        arc = self.arc
        return {
            "index": self.index,
            "value": self.value,
            "rect": list(self.rect.to_tuple()),
            "color_slot": self.color_slot,
            "color": self.color,
            "direction": self.direction.name,
            "arc": {
                "pivot": list(arc.center(self.rect)),
                "pivot_corner": arc.pivot.name,
                "start_angle": arc.start_angle,
                "sweep": arc.sweep,
                "radius": self.rect.width,
                "points": arc.sample(self.rect, arc_steps).tolist(),
            },
        }
