"""Plane geometry helpers: points, rotated shapes, intersections and colours."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

_HEX_COLOUR = re.compile(r"#([0-9a-fA-F]{6})")


def _qround(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return int(math.ceil(value - 0.5))


@dataclass(frozen=True)
class Point:
    """A point on the drawing plane (y grows downwards)."""

    x: float = 0
    y: float = 0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def scaled(self, factor: float) -> "Point":
        """Multiply by ``factor`` and round to whole coordinates."""
        return Point(_qround(self.x * factor), _qround(self.y * factor))

    def divided(self, factor: float) -> "Point":
        """Divide by ``factor`` and round to whole coordinates."""
        return Point(_qround(self.x / factor), _qround(self.y / factor))


class IntersectionType(IntEnum):
    NO = 0
    BOUNDED = 1
    UNBOUNDED = 2


def correct_point(point: Point, first: Point, last: Point) -> Point:
    """Clamp ``point`` into the rectangle spanned by ``first`` and ``last``."""
    left, top, right, bottom = first.x, first.y, last.x, last.y
    x, y = point.x, point.y
    if point.x < left:
        x = left
    elif point.x > right:
        x = right
    if point.y < top:
        y = top
    elif point.y > bottom:
        y = bottom
    return Point(float(x), float(y))


def rgb2hex(r: int, g: int, b: int) -> str:
    """Format a colour as ``#rrggbb`` using space-padded hex fields."""
    return ("#%2x%2x%2x" % (r, g, b))[:7]


def hex2rgb(text: str) -> Tuple[int, int, int]:
    """Parse ``#rrggbb``; raise ValueError for anything else."""
    match = _HEX_COLOUR.fullmatch(text)
    if match is None:
        raise ValueError(f"not a hex colour: {text!r}")
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _center(first: Point, last: Point) -> Point:
    return Point((first.x + last.x) / 2, (first.y + last.y) / 2)


def _rotate_about(point: Point, center: Point, angle: float) -> Point:
    """Rotate by ``angle`` radians with the screen's clockwise convention."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    dx, dy = point.x - center.x, point.y - center.y
    return Point(
        center.x + dx * cos_a - dy * sin_a,
        center.y + dx * sin_a + dy * cos_a,
    )


def rotated_rectangle(first: Point, last: Point, angle: float) -> List[Point]:
    """Corners of the rectangle turned by ``angle`` radians about its centre.

    The order is top-left, top-right, bottom-right, bottom-left.
    """
    center = _center(first, last)
    corners = [
        Point(first.x, first.y),
        Point(last.x, first.y),
        Point(last.x, last.y),
        Point(first.x, last.y),
    ]
    return [_rotate_about(corner, center, -angle) for corner in corners]


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd containment test for a closed polygon."""
    inside = False
    vertices = list(polygon)
    for a, b in zip(vertices, vertices[1:] + vertices[:1]):
        if (a.y > point.y) != (b.y > point.y):
            cross_x = a.x + (point.y - a.y) * (b.x - a.x) / (b.y - a.y)
            if point.x < cross_x:
                inside = not inside
    return inside


def contain_rectangle(point: Point, first: Point, last: Point, angle: float) -> bool:
    """Whether ``point`` lies in the rotated rectangle."""
    return point_in_polygon(point, rotated_rectangle(first, last, angle))


def contain_ellipse(point: Point, first: Point, last: Point, angle: float) -> bool:
    """Whether ``point`` lies in the ellipse inscribed in the rotated rectangle."""
    rx = abs(last.x - first.x) / 2
    ry = abs(last.y - first.y) / 2
    if rx == 0 or ry == 0:
        return False
    center = _center(first, last)
    local = _rotate_about(point, center, angle) - center
    return (local.x / rx) ** 2 + (local.y / ry) ** 2 < 1


def segment_intersection(
    a1: Point, a2: Point, b1: Point, b2: Point
) -> Tuple[IntersectionType, Optional[Point]]:
    """Intersect segment ``a1-a2`` with segment ``b1-b2``.

    Returns the kind of intersection and the point where the lines meet,
    or ``(IntersectionType.NO, None)`` for parallel lines.
    """
    ax, ay = a2.x - a1.x, a2.y - a1.y
    bx, by = b1.x - b2.x, b1.y - b2.y
    cx, cy = a1.x - b1.x, a1.y - b1.y
    denominator = ay * bx - ax * by
    if denominator == 0 or not math.isfinite(denominator):
        return IntersectionType.NO, None
    reciprocal = 1.0 / denominator
    na = (by * cx - bx * cy) * reciprocal
    nb = (ax * cy - ay * cx) * reciprocal
    point = Point(a1.x + ax * na, a1.y + ay * na)
    if 0 <= na <= 1 and 0 <= nb <= 1:
        return IntersectionType.BOUNDED, point
    return IntersectionType.UNBOUNDED, point


def rectangle_intersections(
    first: Point, last: Point, angle: float, p1: Point, p2: Point
) -> List[Tuple[IntersectionType, Optional[Point]]]:
    """Intersect the segment ``p1-p2`` with each side of the rotated rectangle."""
    corners = rotated_rectangle(first, last, angle)
    return [
        segment_intersection(p1, p2, start, end)
        for start, end in zip(corners, corners[1:] + corners[:1])
    ]