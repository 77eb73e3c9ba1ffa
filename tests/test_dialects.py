import pytest

from erdraft.consts import DatabaseType, FieldDataType
from erdraft.dialects import MySQL, SqlDatabase, build_database


@pytest.mark.parametrize(
    "data_type, expected",
    [
        (FieldDataType.NONE, ""),
        (FieldDataType.INTEGER, "INT"),
        (FieldDataType.DECIMAL, "DECIMAL"),
        (FieldDataType.TIMESTAMP, "TIMRSTAMP"),
        (FieldDataType.TIME, "TIME"),
        (FieldDataType.DATE, "DATE"),
        (FieldDataType.BLOB, "BLOB"),
        (FieldDataType.VARCHAR, "VARCHAR"),
        (FieldDataType.CHAR, "CHAR"),
    ],
)
def test_mysql_column_types(data_type, expected):
    assert MySQL().column_type(data_type) == expected


def test_build_mysql():
    db = build_database(DatabaseType.MYSQL)
    assert isinstance(db, MySQL)
    assert db.column_type(FieldDataType.INTEGER) == "INT"


def test_build_none_gives_none():
    assert build_database(DatabaseType.NONE) is None


def test_abstract_base_cannot_be_built():
    with pytest.raises(TypeError):
        SqlDatabase()