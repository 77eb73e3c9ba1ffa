"""Entity-relationship diagram model: geometry, undo history, JSON storage and SQL DDL output."""

__version__ = "1.0.0"

__all__ = [
    "consts",
    "dialects",
    "entity",
    "field",
    "geometry",
    "history",
    "jsonio",
    "logger",
    "options",
    "relation",
    "shapes",
    "sql",
]