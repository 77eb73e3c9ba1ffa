"""Relations (foreign keys) between classes, and lists of them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field as dc_field
from typing import List, Optional, Sequence

from erdraft.consts import (
    DEFAULT_TOLERANCE,
    Cardinality,
    Deferrability,
    RelationKind,
    RelationRule,
    RelationType,
)
from erdraft.entity import Entity
from erdraft.geometry import (
    IntersectionType,
    Point,
    correct_point,
    rectangle_intersections,
)


@dataclass
class Relation:
    """A line between two classes, given by their indices in the class list."""

    relation_type: RelationType = RelationType.NONE
    source: int = -1
    target: int = -1
    first_pos: Point = dc_field(default_factory=Point)
    last_pos: Point = dc_field(default_factory=Point)
    hover: bool = False
    changed: bool = False
    name: str = ""
    pk_table_label: str = ""
    fk_table_label: str = ""
    kind: RelationKind = RelationKind.NON_IDENTIFYING
    cardinality_pk: Cardinality = Cardinality.EXACTLY_ONE
    cardinality_fk: Cardinality = Cardinality.ZERO_OR_MORE
    deferrability: Deferrability = Deferrability.NOT_DEFERRABLE
    update_rule: RelationRule = RelationRule.NO_ACTION
    delete_rule: RelationRule = RelationRule.NO_ACTION
    dx: int = 30
    dy: int = 30

    def calculate(self, source: Entity, target: Entity) -> None:
        """Anchor the line at the centres of the two classes."""
        if self.relation_type == RelationType.NONE:
            raise ValueError("relation with type none")
        self.first_pos = source.center()
        self.last_pos = target.center()

    @staticmethod
    def distance_point_to_line(p1: Point, p2: Point, p: Point) -> float:
        """Distance from ``p`` to the infinite line through ``p1`` and ``p2``."""
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        if math.isclose(dx, 0, abs_tol=1e-12) and math.isclose(dy, 0, abs_tol=1e-12):
            return math.hypot(p.x - p1.x, p.y - p1.y)
        numerator = abs(dy * p.x - dx * p.y + p2.x * p1.y - p2.y * p1.x)
        return numerator / math.sqrt(dx * dx + dy * dy)

    @staticmethod
    def is_point_near_line(
        p1: Point, p2: Point, p: Point, tolerance: float = DEFAULT_TOLERANCE
    ) -> bool:
        """Whether ``p`` is close to the line and within the segment's bounds."""
        if Relation.distance_point_to_line(p1, p2, p) < tolerance:
            return (
                min(p1.x, p2.x) <= p.x <= max(p1.x, p2.x)
                and min(p1.y, p2.y) <= p.y <= max(p1.y, p2.y)
            )
        return False

    def contain(self, point: Point, classes: Sequence[Entity]) -> bool:
        """Whether ``point`` lies on the drawn part of the line between the boxes."""
        source = classes[self.source]
        target = classes[self.target]
        pt1 = self.first_pos + Point(self.dx, -self.dy)
        pt2 = self.last_pos + Point(-self.dy, self.dx)
        start = correct_point(pt1, source.first_pos, source.last_pos)
        end = correct_point(pt2, target.first_pos, target.last_pos)

        crossing_from = [
            p
            for kind, p in rectangle_intersections(
                source.first_pos, source.last_pos, source.angle, start, end
            )
            if kind == IntersectionType.BOUNDED
        ]
        crossing_to = [
            p
            for kind, p in rectangle_intersections(
                target.first_pos, target.last_pos, target.angle, start, end
            )
            if kind == IntersectionType.BOUNDED
        ]
        for a in crossing_from:
            a_int = Point(math.trunc(a.x), math.trunc(a.y))
            for b in crossing_to:
                b_int = Point(math.trunc(b.x), math.trunc(b.y))
                if self.is_point_near_line(a_int, b_int, point):
                    return True
        return False

    def move(self, start: Point, end: Point) -> None:
        """Shift the line's end by ``end - start``."""
        self.last_pos += end - start

    def oscillation(self, dx: int, dy: int) -> None:
        """Jiggle the line's ends by ``(dx, dy)`` in opposite directions."""
        dp = Point(dx, dy)
        self.first_pos -= dp
        self.last_pos += dp


class RelationList(List[Relation]):
    """The relations of a project, in drawing order (last is topmost)."""

    def validate(self, source: int, target: int) -> bool:
        """Whether no relation joins ``source`` to ``target`` yet."""
        return not any(r.source == source and r.target == target for r in self)

    def calculate(self, classes: Sequence[Entity]) -> None:
        for item in self:
            item.calculate(classes[item.source], classes[item.target])

    def hover_clear(self) -> None:
        for item in self:
            item.hover = False

    def hover_index(self, pos: Point, classes: Sequence[Entity]) -> int:
        """Index of the topmost relation under ``pos``, or -1."""
        for index in range(len(self) - 1, -1, -1):
            if self[index].contain(pos, classes):
                return index
        return -1

    def remove_item(self, item: Relation) -> None:
        """Remove every occurrence of this very object."""
        self[:] = [r for r in self if r is not item]


def build_relation(
    relation_type: RelationType,
    source: int = -1,
    target: int = -1,
    first: Optional[Point] = None,
    last: Optional[Point] = None,
) -> Relation:
    """A new relation of the given type joining two class indices."""
    return Relation(
        relation_type=relation_type,
        source=source,
        target=target,
        first_pos=first if first is not None else Point(),
        last_pos=last if last is not None else Point(),
    )