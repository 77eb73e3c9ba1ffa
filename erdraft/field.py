"""Table fields (columns) and lists of them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field as dc_field
from typing import Any, List

from erdraft.consts import FieldDataType, FieldRelationType
from erdraft.geometry import Point, point_in_polygon


@dataclass
class Field:
    """A column of a class (table) with its drawing state."""

    logical_name: str = ""
    physical_name: str = ""
    relation_type: FieldRelationType = FieldRelationType.NONE
    data_type: FieldDataType = FieldDataType.NONE
    precision: int = 0
    scale: int = 0
    allows_nulls: bool = False
    auto_increment: bool = False
    default_value: str = ""
    remarks: str = ""

    hover: bool = False
    first_pos: Point = dc_field(default_factory=Point)
    last_pos: Point = dc_field(default_factory=Point)
    angle: float = 0.0
    edit_text: bool = False
    edit_options: bool = False
    changed: bool = False
    from_fk: bool = False

    def contain_title(self, pos: Point, owner: Any) -> bool:
        """Whether ``pos`` lies in this field's row, turned with its owner.

        The row is rotated by the field's angle about the centre of the
        owner's rectangle (``owner.first_pos`` to ``owner.last_pos``).
        """
        cx = (owner.first_pos.x + owner.last_pos.x) / 2
        cy = (owner.first_pos.y + owner.last_pos.y) / 2
        cos_a, sin_a = math.cos(-self.angle), math.sin(-self.angle)
        first, last = self.first_pos, self.last_pos
        corners = [
            (first.x, first.y),
            (last.x, first.y),
            (last.x, last.y),
            (first.x, last.y),
        ]
        polygon = [
            Point(
                cx + (x - cx) * cos_a - (y - cy) * sin_a,
                cy + (x - cx) * sin_a + (y - cy) * cos_a,
            )
            for x, y in corners
        ]
        return point_in_polygon(pos, polygon)


class FieldList(List[Field]):
    """The ordered fields of one class."""

    def hover_title(self, pos: Point, owner: Any) -> int:
        """Index of the topmost field under ``pos``, or -1."""
        for index in range(len(self) - 1, -1, -1):
            if self[index].contain_title(pos, owner):
                return index
        return -1

    def find_edit(self) -> int:
        """Index of the first field being edited, or -1."""
        return next(
            (i for i, f in enumerate(self) if f.edit_text or f.edit_options), -1
        )

    def find_from_fk(self) -> int:
        """Index of the first field marked as a foreign-key source, or -1."""
        return next((i for i, f in enumerate(self) if f.from_fk), -1)

    def hover_clear(self) -> None:
        for item in self:
            item.hover = False

    def remove_item(self, item: Field) -> None:
        """Remove every occurrence of this very object."""
        self[:] = [f for f in self if f is not item]