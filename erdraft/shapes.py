"""Concrete class shapes and factories for classes, fields and relations' ends."""

from __future__ import annotations

from dataclasses import dataclass

from erdraft.consts import FigureType
from erdraft.entity import Entity
from erdraft.field import Field
from erdraft.geometry import Point, contain_ellipse, contain_rectangle


@dataclass
class Rectangle(Entity):
    """A rectangular class box."""

    figure_type: FigureType = FigureType.RECTANGLE
    angles_count: int = 4

    def contain(self, pos: Point) -> bool:
        """Whether ``pos`` lies in the box, turned by its angle."""
        return contain_rectangle(pos, self.first_pos, self.last_pos, self.angle)


@dataclass
class Ellipse(Entity):
    """An elliptic class box."""

    figure_type: FigureType = FigureType.ELLIPSE
    angles_count: int = 0

    def contain(self, pos: Point) -> bool:
        """Whether ``pos`` lies in the ellipse inscribed in the turned box."""
        return contain_ellipse(pos, self.first_pos, self.last_pos, self.angle)


@dataclass
class Triangle(Entity):
    """A triangular class box."""

    figure_type: FigureType = FigureType.TRIANGLE
    angles_count: int = 3


_SHAPES = {
    FigureType.TRIANGLE: Triangle,
    FigureType.ELLIPSE: Ellipse,
    FigureType.RECTANGLE: Rectangle,
}


def build_figure(figure_type: FigureType) -> Entity:
    """A new, empty class of the given shape."""
    if figure_type == FigureType.NONE:
        raise ValueError("figure with type none")
    try:
        shape = _SHAPES[FigureType(figure_type)]
    except (KeyError, ValueError):
        raise ValueError(f"unknown figure: {figure_type!r}") from None
    return shape()


def build_figure_between(
    figure_type: FigureType,
    first: Point,
    last: Point,
    height: int,
    class_prefix: str = "",
    table_prefix: str = "",
) -> Entity:
    """A class spanning ``first`` to ``last`` with its handles placed.

    The corners are swapped when ``first`` lies right of or below ``last``.
    """
    if first.x > last.x or first.y > last.y:
        first, last = last, first
    item = build_figure(figure_type)
    item.first_pos = first
    item.last_pos = last
    item.calc_angle_resize_point(height)
    item.logical_name = class_prefix
    item.physical_name = table_prefix
    return item


def build_field(first: Point, last: Point) -> Field:
    """A new field occupying the row from ``first`` to ``last``."""
    return Field(first_pos=first, last_pos=last)