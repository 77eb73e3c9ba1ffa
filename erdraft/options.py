"""Project settings together with its classes and relations."""

from __future__ import annotations

import copy as _copy
import json
import math
from typing import Any, Dict, Mapping, Type, TypeVar

from erdraft.consts import (
    APP_VARIANT,
    DEFAULT_RATIO,
    HEIGHT_TO_PADDING,
    MAXIMUM_RATIO,
    MINIMUM_RATIO,
    PRECISION_RATIO,
    ActionType,
    DatabaseType,
    FigureType,
    RelationNotation,
    RelationType,
)
from erdraft.entity import EntityList
from erdraft.geometry import Point
from erdraft.jsonio import (
    entities_from_json,
    entities_to_json,
    relations_from_json,
    relations_to_json,
)
from erdraft.relation import RelationList

_E = TypeVar("_E")

# Colour, pen, arrow and brush codes as stored in project files.
COLOR_WHITE = 3
COLOR_GREEN = 8
COLOR_DARK_GREEN = 14
COLOR_DARK_BLUE = 15

PEN_NONE = 0
PEN_SOLID = 1
PEN_DASH = 2
PEN_DOT = 3

ARROW_NONE = 0

BRUSH_NONE = 0
BRUSH_SOLID = 1


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _enum(kind: Type[_E], data: Mapping[str, Any], key: str) -> _E:
    value = _int(data, key)
    try:
        return kind(value)  # type: ignore[call-arg]
    except ValueError:
        raise ValueError(f"invalid {key}: {value}") from None


def _round_half_away(value: float) -> float:
    if value >= 0:
        return math.floor(value + 0.5)
    return math.ceil(value - 0.5)


class AppOptions:
    """Drawing settings, the current tool state and the project's content."""

    def __init__(self) -> None:
        self.init()

    def init(self) -> None:
        """Reset every setting to its default and empty the project."""
        self.app_variant = APP_VARIANT
        self.project_name = ""
        self.database_name = ""
        self.table_prefix = ""
        self.class_prefix = ""
        self.width = 1.0
        self.height = 12
        self.padding = self.height // HEIGHT_TO_PADDING
        self.width_hover = 3.0
        self.pen_color = "#000000"
        self.pen_color_select = "#A72920"
        self.pen_color_rotate = COLOR_DARK_GREEN
        self.pen_color_resize = COLOR_DARK_BLUE
        self.brush_color = COLOR_GREEN
        self.bkg_color = COLOR_WHITE
        self.pen_style = PEN_SOLID
        self._pen_fk_style = PEN_DASH
        self._pen_select_style = PEN_DOT
        self.arrow_type = ARROW_NONE
        self.brush_style = BRUSH_NONE
        self.brush_title_style = BRUSH_SOLID
        self.brush_title_color = "#D0F0C0"
        self.cp_radius = 2.0
        self.figure_type = FigureType.RECTANGLE
        self.action_type = ActionType.ADD_FIGURE
        self.index_from = -1
        self.relation_type = RelationType.LINE_NONDIRECT
        self.arrow_angle = 10
        self.arrow_size = 15.0
        self.database_type = DatabaseType.MYSQL
        self.changed = False
        self.select_group = False
        self._ratio = DEFAULT_RATIO
        self.relation_notation = RelationNotation.BACHMAN
        self.clear_pos()
        self.classes = EntityList()
        self.relations = RelationList()

    def copy(self) -> "AppOptions":
        """An independent deep copy of the settings and the project."""
        return _copy.deepcopy(self)

    def clear_pos(self) -> None:
        self.first_pos = Point(0, 0)
        self.last_pos = Point(0, 0)

    def clear_state(self, with_select: bool = True) -> None:
        """Forget the transient tool state, and the selection if asked."""
        self.index_from = -1
        self.changed = False
        if with_select:
            self.classes.select_clear()
        self.select_group = False
        self.clear_pos()

    def class_relation_copy(self) -> "AppOptions":
        """Drop every class that is not selected, with its relations."""
        for index in range(len(self.classes) - 1, -1, -1):
            if not self.classes[index].select:
                self.class_relation_delete(index)
        return self

    def class_relation_paste(self, other: "AppOptions") -> None:
        """Append another project's classes and relations to this one.

        The other project's relations are re-indexed in place to point at
        the appended classes.
        """
        delta = len(self.classes)
        self.classes.extend(other.classes)
        for relation in other.relations:
            relation.source += delta
            relation.target += delta
            self.relations.append(relation)

    def class_relation_delete(self, n: int) -> bool:
        """Delete class ``n`` and its relations; False if there is no such class."""
        if n < 0 or n >= len(self.classes):
            return False
        self.relations[:] = [
            r for r in self.relations if r.source != n and r.target != n
        ]
        for relation in self.relations:
            if relation.source > n:
                relation.source -= 1
            if relation.target > n:
                relation.target -= 1
        del self.classes[n]
        return True

    @staticmethod
    def rotate_figure_type(figure_type: FigureType) -> FigureType:
        """The shape that follows ``figure_type`` when cycling shapes."""
        return {
            FigureType.TRIANGLE: FigureType.TRIANGLE,
            FigureType.ELLIPSE: FigureType.RECTANGLE,
            FigureType.RECTANGLE: FigureType.ELLIPSE,
        }.get(figure_type, FigureType.NONE)

    @staticmethod
    def rotate_relation_type(relation_type: RelationType) -> RelationType:
        """The line style that follows ``relation_type`` when cycling styles."""
        return {
            RelationType.LINE_NONDIRECT: RelationType.LINE_BIDIRECT,
            RelationType.LINE_BIDIRECT: RelationType.LINE_DIRECT_LEFT,
            RelationType.LINE_DIRECT_LEFT: RelationType.LINE_DIRECT_RIGHT,
            RelationType.LINE_DIRECT_RIGHT: RelationType.LINE_NONDIRECT,
        }.get(relation_type, RelationType.NONE)

    def pen_fk_style(self) -> int:
        """Pen style of foreign-key lines; a missing pen becomes dashed."""
        if self._pen_fk_style == PEN_NONE:
            self._pen_fk_style = PEN_DASH
        return self._pen_fk_style

    def pen_select_style(self) -> int:
        """Pen style of the selection frame; a missing pen becomes dashed."""
        if self._pen_select_style == PEN_NONE:
            self._pen_select_style = PEN_DASH
        return self._pen_select_style

    def ratio(self) -> float:
        """The zoom ratio, reset to the default when out of range."""
        if self._ratio < MINIMUM_RATIO or self._ratio > MAXIMUM_RATIO:
            self._ratio = DEFAULT_RATIO
        return self._ratio

    def set_ratio(self, value: float) -> None:
        """Set the zoom ratio rounded to one decimal place."""
        self._ratio = _round_half_away(value * PRECISION_RATIO) / PRECISION_RATIO

    def to_json(self) -> Dict[str, Any]:
        """The saved form of the project."""
        return {
            "m_nAppVariant": int(self.app_variant),
            "m_nWidth": float(self.width),
            "m_nWidthHover": float(self.width_hover),
            "m_PenColor": self.pen_color,
            "m_PenColorSelect": self.pen_color_select,
            "m_PenColorRotate": int(self.pen_color_rotate),
            "m_PenColorResize": int(self.pen_color_resize),
            "m_BrushColor": int(self.brush_color),
            "m_BkgColor": int(self.bkg_color),
            "m_PenStyle": int(self.pen_style),
            "m_PenFKStyle": int(self._pen_fk_style),
            "m_ArrowType": int(self.arrow_type),
            "m_BrushStyle": int(self.brush_style),
            "m_BrushTitleStyle": int(self.brush_title_style),
            "m_BrushTitleColor": self.brush_title_color,
            "m_nCPRadius": float(self.cp_radius),
            "m_nFigureType": int(self.figure_type),
            "m_nActionType": int(self.action_type),
            "m_nRelationType": int(self.relation_type),
            "m_nDatabaseType": int(self.database_type),
            "m_ProjectName": self.project_name,
            "m_DatabaseName": self.database_name,
            "m_TablePrefix": self.table_prefix,
            "m_ClassPrefix": self.class_prefix,
            "m_nRelationNotation": int(self.relation_notation),
            "m_ClassList": entities_to_json(self.classes),
            "m_RelationList": relations_to_json(self.relations),
        }

    def from_json(self, data: Mapping[str, Any]) -> "AppOptions":
        """Load the saved members from ``data`` and return self.

        Widths and the handle radius are read as whole numbers. Raises
        ValueError for an unknown enumeration value.
        """
        self.app_variant = _int(data, "m_nAppVariant")
        self.width = float(_int(data, "m_nWidth"))
        self.width_hover = float(_int(data, "m_nWidthHover"))
        self.pen_color = _str(data, "m_PenColor")
        self.pen_color_select = _str(data, "m_PenColorSelect")
        self.pen_color_rotate = _int(data, "m_PenColorRotate")
        self.pen_color_resize = _int(data, "m_PenColorResize")
        self.brush_color = _int(data, "m_BrushColor")
        self.bkg_color = _int(data, "m_BkgColor")
        self.pen_style = _int(data, "m_PenStyle")
        self._pen_fk_style = _int(data, "m_PenFKStyle")
        self.arrow_type = _int(data, "m_ArrowType")
        self.brush_style = _int(data, "m_BrushStyle")
        self.brush_title_style = _int(data, "m_BrushTitleStyle")
        self.brush_title_color = _str(data, "m_BrushTitleColor")
        self.cp_radius = float(_int(data, "m_nCPRadius"))
        self.figure_type = _enum(FigureType, data, "m_nFigureType")
        self.action_type = _enum(ActionType, data, "m_nActionType")
        self.relation_type = _enum(RelationType, data, "m_nRelationType")
        self.database_type = _enum(DatabaseType, data, "m_nDatabaseType")
        self.project_name = _str(data, "m_ProjectName")
        self.database_name = _str(data, "m_DatabaseName")
        self.table_prefix = _str(data, "m_TablePrefix")
        self.class_prefix = _str(data, "m_ClassPrefix")
        self.relation_notation = _enum(RelationNotation, data, "m_nRelationNotation")
        self.classes = entities_from_json(_object(data, "m_ClassList"))
        self.relations = relations_from_json(_object(data, "m_RelationList"))
        return self


def dumps(options: AppOptions) -> str:
    """The project as an indented JSON document."""
    return json.dumps(options.to_json(), indent=4)


def loads(text: str, options: AppOptions) -> AppOptions:
    """Load a JSON document into ``options`` and return it.

    Raises ValueError when the text is not JSON or not a JSON object.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("project document is not a JSON object")
    return options.from_json(data)