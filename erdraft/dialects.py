"""SQL dialects: column type names per database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from erdraft.consts import DatabaseType, FieldDataType


class SqlDatabase(ABC):
    """A target database for generated SQL."""

    @abstractmethod
    def column_type(self, data_type: FieldDataType) -> str:
        """The column type name for ``data_type``; empty when there is none."""


_MYSQL_TYPES = {
    FieldDataType.NONE: "",
    FieldDataType.INTEGER: "INT",
    FieldDataType.DECIMAL: "DECIMAL",
    FieldDataType.TIMESTAMP: "TIMRSTAMP",
    FieldDataType.TIME: "TIME",
    FieldDataType.DATE: "DATE",
    FieldDataType.BLOB: "BLOB",
    FieldDataType.VARCHAR: "VARCHAR",
    FieldDataType.CHAR: "CHAR",
}


class MySQL(SqlDatabase):
    def column_type(self, data_type: FieldDataType) -> str:
        return _MYSQL_TYPES.get(data_type, "")


def build_database(database_type: DatabaseType) -> Optional[SqlDatabase]:
    """The dialect for ``database_type``, or None when there is none."""
    if database_type == DatabaseType.MYSQL:
        return MySQL()
    return None