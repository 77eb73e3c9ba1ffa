"""Classes (tables) drawn on the canvas, and lists of them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field as dc_field
from typing import List, Tuple

from erdraft.consts import (
    DELTA_ANGLE,
    MAX_FIGURE_SIZE,
    MAX_NEAR_SIZE,
    MIN_FIGURE_SIZE,
    FieldRelationType,
    FigureType,
)
from erdraft.field import Field, FieldList
from erdraft.geometry import Point, point_in_polygon


def _trunc_point(x: float, y: float) -> Point:
    """Whole coordinates, dropping the fraction toward zero."""
    return Point(math.trunc(x), math.trunc(y))


def _midpoint(first: Point, last: Point) -> Point:
    return Point((first.x + last.x) / 2, (first.y + last.y) / 2)


def _half_diagonal(first: Point, last: Point) -> float:
    return math.hypot(last.x - first.x, last.y - first.y) / 2


def _line_length(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def _line_angle(p1: Point, p2: Point) -> float:
    """Direction of ``p1 -> p2`` in degrees, counter-clockwise on screen."""
    theta = math.degrees(math.atan2(-(p2.y - p1.y), p2.x - p1.x))
    if theta < 0:
        theta += 360
    return 0.0 if math.isclose(theta, 360) else theta


def _with_length(p1: Point, p2: Point, length: float) -> Point:
    """End point of the line ``p1 -> p2`` stretched to ``length``."""
    old = _line_length(p1, p2)
    if old > 0:
        return Point(
            p1.x + length * (p2.x - p1.x) / old,
            p1.y + length * (p2.y - p1.y) / old,
        )
    return p2


def _with_angle(p1: Point, length: float, angle: float) -> Point:
    """End point of a line from ``p1`` with ``length`` at ``angle`` degrees."""
    radians = math.radians(angle)
    return Point(p1.x + math.cos(radians) * length, p1.y - math.sin(radians) * length)


def _angle_to(a1: Point, a2: Point, b1: Point, b2: Point) -> float:
    """Counter-clockwise angle in degrees from line ``a`` to line ``b``."""
    if math.isclose(_line_length(a1, a2), 0, abs_tol=1e-12) or math.isclose(
        _line_length(b1, b2), 0, abs_tol=1e-12
    ):
        return 0.0
    delta = _line_angle(b1, b2) - _line_angle(a1, a2)
    if math.isclose(delta, 360):
        return 0.0
    return delta + 360 if delta < 0 else delta


def _turn(point: Point, center: Point, angle: float) -> Point:
    """Rotate ``point`` about ``center`` by ``angle`` radians (y grows down)."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    dx, dy = point.x - center.x, point.y - center.y
    return Point(center.x + dx * cos_a - dy * sin_a, center.y + dx * sin_a + dy * cos_a)


@dataclass
class Entity:
    """A class (table) box with its fields and drawing state."""

    figure_type: FigureType = FigureType.NONE
    first_pos: Point = dc_field(default_factory=Point)
    last_pos: Point = dc_field(default_factory=Point)
    title_pos: Point = dc_field(default_factory=Point)
    angle_pos: Point = dc_field(default_factory=Point)
    resize_pos: Point = dc_field(default_factory=Point)
    hover: bool = False
    hover_title: bool = False
    hover_first: bool = False
    hover_last: bool = False
    hover_angle: bool = False
    hover_resize: bool = False
    hover_center: bool = False
    edit_text: bool = False
    edit_options: bool = False
    angle: float = 0.0
    select: bool = False
    angles_count: int = -1
    logical_name: str = ""
    physical_name: str = ""
    changed: bool = False
    fields: FieldList = dc_field(default_factory=FieldList)

    def contain(self, pos: Point) -> bool:
        """Whether ``pos`` lies in the regular polygon inscribed around the box."""
        n = self.angles_count
        if n < 3:
            return False
        center = _midpoint(self.first_pos, self.last_pos)
        radius = _half_diagonal(self.first_pos, self.last_pos)
        polygon = [
            Point(
                center.x + math.cos(2 * math.pi * i / n - math.pi / 2 - self.angle) * radius,
                center.y + math.sin(2 * math.pi * i / n - math.pi / 2 - self.angle) * radius,
            )
            for i in range(n)
        ]
        return point_in_polygon(pos, polygon)

    def contain_title(self, pos: Point) -> bool:
        """Whether ``pos`` lies in the title strip, turned with the box."""
        center = _midpoint(self.first_pos, self.last_pos)
        first, title = self.first_pos, self.title_pos
        corners = [
            Point(first.x, first.y),
            Point(title.x, first.y),
            Point(title.x, title.y),
            Point(first.x, title.y),
        ]
        polygon = [_turn(corner, center, -self.angle) for corner in corners]
        return point_in_polygon(pos, polygon)

    def move(self, start: Point, end: Point) -> None:
        """Shift the box and its fields by ``end - start``."""
        if self.figure_type == FigureType.NONE:
            raise ValueError("cannot move a figure of type none")
        diff = end - start
        self.first_pos += diff
        self.title_pos += diff
        self.last_pos += diff
        self.angle_pos += diff
        self.resize_pos += diff
        for item in self.fields:
            item.first_pos += diff
            item.last_pos += diff

    def center(self) -> Point:
        """The whole-number centre of the box."""
        if self.figure_type == FigureType.NONE:
            raise ValueError("a figure of type none has no centre")
        return Point(
            math.trunc((self.first_pos.x + self.last_pos.x) / 2),
            math.trunc((self.first_pos.y + self.last_pos.y) / 2),
        )

    def valid(self) -> bool:
        """Whether the box has an acceptable size."""
        width = abs(self.last_pos.x - self.first_pos.x + 1)
        height = abs(self.last_pos.y - self.first_pos.y + 1)
        big_enough = width > MIN_FIGURE_SIZE and height > MIN_FIGURE_SIZE
        small_enough = width < MAX_FIGURE_SIZE and height < MAX_FIGURE_SIZE
        if self.figure_type == FigureType.TRIANGLE:
            return big_enough or small_enough
        return big_enough and small_enough

    def near_points(self, pt1: Point, pt2: Point) -> bool:
        """Whether two points are within the grab distance of each other."""
        return math.hypot(pt2.x - pt1.x, pt2.y - pt1.y) <= MAX_NEAR_SIZE

    def calc_angle_point(self, pt: Point) -> None:
        """Turn the box so that its rotation handle points at ``pt``."""
        center = _midpoint(self.first_pos, self.last_pos)
        radius = _half_diagonal(self.first_pos, self.last_pos)
        end = _with_length(center, pt, radius + DELTA_ANGLE)
        self.angle_pos = _trunc_point(end.x, end.y)
        self.angle = math.radians(_angle_to(center, self.first_pos, center, end))
        self.title_pos = Point(self.last_pos.x, self.title_pos.y)
        for item in self.fields:
            item.angle = self.angle

    def calc_angle_resize_point(self, height: int) -> None:
        """Place the rotation and resize handles and the title corner."""
        center = _midpoint(self.first_pos, self.last_pos)
        radius = _half_diagonal(self.first_pos, self.last_pos)
        upward = _with_length(center, self.first_pos, radius + DELTA_ANGLE)
        self.angle_pos = _trunc_point(upward.x, upward.y)
        downward = _with_length(center, self.last_pos, radius + DELTA_ANGLE)
        self.resize_pos = _trunc_point(downward.x, downward.y)
        self.title_pos = Point(self.last_pos.x, self.first_pos.y + height)

    def calc_first_last_point(self, pt: Point) -> None:
        """Resize the box so that its resize handle sits at ``pt``."""
        self.resize_pos = pt
        diagonal = _line_length(self.first_pos, pt)
        last = _with_length(self.first_pos, pt, diagonal - DELTA_ANGLE)
        self.last_pos = _trunc_point(last.x, last.y)

        center = _midpoint(self.first_pos, self.last_pos)
        length = _line_length(center, self.resize_pos)
        direction = _line_angle(center, self.first_pos) + math.degrees(self.angle)
        handle = _with_angle(center, length, direction)
        self.angle_pos = _trunc_point(handle.x, handle.y)

        self.title_pos = Point(self.last_pos.x, self.title_pos.y)
        for item in self.fields:
            item.last_pos = Point(self.last_pos.x, item.last_pos.y)

    def oscillation(self, dx: int, dy: int) -> None:
        """Jiggle the box outline by ``(dx, dy)``."""
        dp = Point(dx, dy)
        self.first_pos += dp
        self.last_pos -= dp
        self.title_pos -= dp
        self.angle_pos += dp
        self.resize_pos -= dp

    def enum_fields(self, relation_type: FieldRelationType) -> FieldList:
        """The fields with the given key role, in order."""
        return FieldList(f for f in self.fields if f.relation_type == relation_type)

    def aggregate_fields(self, pk: List[Field], fk: List[Field], nn: List[Field]) -> None:
        """Replace the fields by primary keys, then foreign keys, then the rest."""
        self.fields[:] = [*pk, *fk, *nn]

    def field_recalc(self) -> None:
        """Stack the field rows under the title, each as tall as the one above."""
        previous = None
        for item in self.fields:
            if previous is None:
                first = Point(self.first_pos.x, self.title_pos.y)
                last = Point(
                    self.title_pos.x,
                    self.title_pos.y + self.title_pos.y - self.first_pos.y,
                )
            else:
                first = Point(previous.first_pos.x, previous.last_pos.y)
                last = Point(
                    previous.last_pos.x,
                    previous.last_pos.y + previous.last_pos.y - previous.first_pos.y,
                )
            item.first_pos = first
            item.last_pos = last
            previous = item


class EntityList(List[Entity]):
    """The classes of a project, in drawing order (last is topmost)."""

    def _topmost(self, predicate) -> int:
        for index in range(len(self) - 1, -1, -1):
            if predicate(self[index]):
                return index
        return -1

    def hover_clear(self) -> None:
        for item in self:
            item.hover = False
            item.hover_first = False
            item.hover_last = False
            item.hover_angle = False
            item.hover_resize = False
            item.hover_title = False
            item.hover_center = False
            item.fields.hover_clear()

    def hover_title(self, pos: Point) -> int:
        """Index of the topmost class whose title is under ``pos``, or -1."""
        return self._topmost(lambda item: item.contain_title(pos))

    def hover_index(self, pos: Point) -> int:
        """Index of the topmost class under ``pos``, or -1."""
        return self._topmost(lambda item: item.contain(pos))

    def hover_angle_index(self, pos: Point) -> int:
        return self._topmost(lambda item: item.near_points(item.angle_pos, pos))

    def hover_resize_index(self, pos: Point) -> int:
        return self._topmost(lambda item: item.near_points(item.resize_pos, pos))

    def hover_first_index(self, pos: Point) -> int:
        return self._topmost(lambda item: item.near_points(item.first_pos, pos))

    def hover_last_index(self, pos: Point) -> int:
        return self._topmost(lambda item: item.near_points(item.last_pos, pos))

    def hover_center_index(self, pos: Point) -> int:
        def near_center(item: Entity) -> bool:
            center = Point(
                math.trunc((item.first_pos.x + item.last_pos.x) / 2),
                math.trunc((item.first_pos.y + item.last_pos.y) / 2),
            )
            return item.near_points(center, pos)

        return self._topmost(near_center)

    def select_clear(self) -> None:
        for item in self:
            item.select = False

    def edit_clear(self) -> None:
        for item in self:
            item.edit_text = False
            item.edit_options = False
            for f in item.fields:
                f.edit_text = False
                f.edit_options = False

    def edit_title(self, text: str) -> None:
        """Rename the first class or field being edited to ``text``."""
        for item in self:
            if item.edit_text or item.edit_options:
                item.logical_name = item.physical_name = text
                return
            for f in item.fields:
                if f.edit_text or f.edit_options:
                    f.logical_name = f.physical_name = text
                    return

    def find_edit(self) -> Tuple[int, int]:
        """``(class_index, field_index)`` of what is being edited.

        A class edited as a whole gives a field index of -1; nothing edited
        gives ``(-1, -1)``.
        """
        for index, item in enumerate(self):
            if item.edit_text or item.edit_options:
                return index, -1
            field_index = item.fields.find_edit()
            if field_index >= 0:
                return index, field_index
        return -1, -1

    def find_from_fk(self) -> Tuple[int, int]:
        """``(class_index, field_index)`` of the first foreign-key source field."""
        for index, item in enumerate(self):
            field_index = item.fields.find_from_fk()
            if field_index >= 0:
                return index, field_index
        return -1, -1

    def field_at(self, n: int, m: int) -> Field:
        return self[n].fields[m]

    def delete_field(self, n: int, m: int) -> None:
        del self[n].fields[m]