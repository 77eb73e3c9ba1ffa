"""Application constants, enumerations and small comparison helpers."""

from __future__ import annotations

import bisect
import functools
from enum import IntEnum
from typing import Any, Callable, Optional, Sequence, Tuple

APP_NAME = "erdraft"
APP_VERSION = "1.0.0"
APP_DATA_VERSION = 0

APP_VARIANT_FULL = 1
APP_VARIANT_DEMO = 2
APP_VARIANT = APP_VARIANT_DEMO

MAX_NEAR_SIZE = 10
MIN_FIGURE_SIZE = 10
MAX_FIGURE_SIZE = 500
DEFAULT_TOLERANCE = 10
DELTA_ANGLE = 10.0
DELTA_RESIZE = 10.0
HEIGHT_TO_PADDING = 4
DEFAULT_PADDING = 7
DEFAULT_SCROLL_SIZE = 16

DEFAULT_RATIO_STEP = 0.1
PRECISION_RATIO = 10
MAXIMUM_RATIO = 1.6
MINIMUM_RATIO = 0.4
DEFAULT_RATIO = 1.0

MAX_RECENT_FILES = 5

ADD_DEFAULT_WIDTH = 100
ADD_DEFAULT_HEIGHT = 120

DEFAULT_PRINTER_DPI = 300
DEFAULT_MSG_TIMEOUT = 3000


class ExportType(IntEnum):
    NONE = 0
    BIN = 1
    JSON = 2


EXPORT_FORMAT = ExportType.JSON


class ActionType(IntEnum):
    NONE = 0
    ADD_FIGURE = 1
    ADD_RELATION = 2
    MOVE = 3
    DELETE = 4


class DatabaseType(IntEnum):
    NONE = 0
    MYSQL = 1


class FigureType(IntEnum):
    NONE = 0
    TRIANGLE = 1
    ELLIPSE = 2
    RECTANGLE = 3


class FieldRelationType(IntEnum):
    NONE = 0
    PRIMARY_KEY = 1
    FOREIGN_KEY = 2


class FieldDataType(IntEnum):
    NONE = 0
    INTEGER = 1
    DECIMAL = 2
    TIMESTAMP = 3
    TIME = 4
    DATE = 5
    BLOB = 6
    VARCHAR = 7
    CHAR = 8


class RelationType(IntEnum):
    NONE = 0
    LINE_NONDIRECT = 1
    LINE_BIDIRECT = 2
    LINE_DIRECT_LEFT = 3
    LINE_DIRECT_RIGHT = 4


class RelationRule(IntEnum):
    CASCADE = 0
    RESTRICT = 1
    NO_ACTION = 2
    SET_NULL = 3
    SET_DEFAULT = 4


class Deferrability(IntEnum):
    NOT_DEFERRABLE = 0
    INITIALLY_DEFERRED = 1
    INITIALLY_IMMEDIATE = 2


class Cardinality(IntEnum):
    ZERO_OR_MORE = 0
    ONE_OR_MORE = 1
    ZERO_OR_ONE = 2
    EXACTLY_ONE = 3


class RelationKind(IntEnum):
    NON_IDENTIFYING = 0
    IDENTIFYING = 1


class RelationNotation(IntEnum):
    BACHMAN = 0
    MIN_MAX = 1
    CROWS_FOOT = 2


def compare(a: Any, b: Any) -> int:
    """Three-way comparison; strings compare case-insensitively.

    Returns -1, 0 or 1.
    """
    if isinstance(a, str) and isinstance(b, str):
        a, b = a.lower(), b.lower()
    if a == b:
        return 0
    return 1 if a > b else -1


def bindex(
    items: Sequence[Any],
    value: Any,
    key: Optional[Callable[[Any], Any]] = None,
) -> Tuple[int, int]:
    """Binary search in a sequence sorted by ``compare`` on ``key``.

    Returns ``(index, insert_index)``: ``index`` is the position of an
    equal item or -1, ``insert_index`` is where ``value`` would go to keep
    the order.
    """
    if key is None:
        key = _identity
    ordering = functools.cmp_to_key(compare)
    wanted = key(value)
    insert = bisect.bisect_left(
        items, ordering(wanted), key=lambda item: ordering(key(item))
    )
    if insert < len(items) and compare(key(items[insert]), wanted) == 0:
        return insert, insert
    return -1, insert


def _identity(item: Any) -> Any:
    return item