"""DDL generation for a project's classes and relations."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from erdraft.consts import (
    DatabaseType,
    Deferrability,
    FieldRelationType,
    RelationRule,
)
from erdraft.dialects import SqlDatabase, build_database
from erdraft.entity import Entity
from erdraft.field import Field
from erdraft.relation import Relation

_RULES = {
    RelationRule.CASCADE: " CASCADE",
    RelationRule.RESTRICT: " RESTRICT",
    RelationRule.NO_ACTION: " NO ACTION",
    RelationRule.SET_NULL: " SET NULL",
    RelationRule.SET_DEFAULT: " SET DEFAULT",
}

_DEFERRABILITY = {
    Deferrability.NOT_DEFERRABLE: "",
    Deferrability.INITIALLY_DEFERRED: " DEFERRABLE INITIALLY DEFERRED\n",
    Deferrability.INITIALLY_IMMEDIATE: " DEFERRABLE INITIALLY IMMEDIATE\n",
}


class SqlWriter:
    """Accumulates SQL statements for one database dialect."""

    def __init__(self, database: SqlDatabase, entities: Sequence[Entity]) -> None:
        if database is None:
            raise ValueError("no database dialect given")
        self.database = database
        self.entities = entities
        self._parts: List[str] = []
        self._primary_keys: List[str] = []

    def write_field(self, field: Field, is_last: bool) -> None:
        """Write one column definition; all but the last end with a comma."""
        if field.relation_type == FieldRelationType.PRIMARY_KEY:
            self._primary_keys.append(field.physical_name)

        text = field.physical_name
        column_type = self.database.column_type(field.data_type)
        if column_type:
            text += " " + column_type
        if field.scale > 0:
            text += "(" + str(field.scale)
            if field.precision > 0:
                text += "," + str(field.precision)
            text += ")"
        if field.auto_increment:
            text += " AUTO INCRENEMT"
        if not field.allows_nulls:
            text += " NOT NULL"
        if field.default_value:
            text += " " + field.default_value
        if not is_last:
            text += ","
        self._parts.append(text + "\n")

    def write_entity(self, entity: Entity) -> None:
        """Write the CREATE TABLE statement of one class."""
        self._parts.append("CREATE TABLE " + entity.physical_name + " (\n")
        self._primary_keys = []
        last = len(entity.fields) - 1
        for index, field in enumerate(entity.fields):
            self.write_field(field, index == last)
        if self._primary_keys:
            self._parts.append("PRIMARY KEY (" + "".join(self._primary_keys) + ")\n")
        self._parts.append(");\n\n")

    def write_relation(self, relation: Relation) -> None:
        """Write the ALTER TABLE statement adding one foreign key."""
        source = self.entities[relation.source]
        target = self.entities[relation.target]
        pk = ",".join(
            f.physical_name for f in source.enum_fields(FieldRelationType.PRIMARY_KEY)
        )
        fk = ",".join(
            f.physical_name for f in target.enum_fields(FieldRelationType.FOREIGN_KEY)
        )
        # The update clause follows the delete rule, as saved projects expect.
        rule = _RULES.get(relation.delete_rule, "")
        text = (
            "ALTER TABLE " + target.physical_name
            + " ADD CONSTRAINT " + relation.name + "\n"
            + "FOREIGN KEY (" + fk + ")\n"
            + "REFERENCES " + source.physical_name + " (" + pk + ")\n"
            + "ON DELETE" + rule + "\n"
            + "ON UPDATE" + rule + "\n"
            + _DEFERRABILITY.get(relation.deferrability, "")
            + "\n"
        )
        self._parts.append(text)

    def write_all(self, relations: Iterable[Relation]) -> None:
        """Write every class, then every relation."""
        for entity in self.entities:
            self.write_entity(entity)
        for relation in relations:
            self.write_relation(relation)

    def text(self) -> str:
        return "".join(self._parts)


def generate_sql(
    entities: Sequence[Entity],
    relations: Iterable[Relation],
    database_type: DatabaseType = DatabaseType.MYSQL,
) -> str:
    """The whole DDL script for a project.

    Raises ValueError when the database type has no dialect.
    """
    database = build_database(database_type)
    if database is None:
        raise ValueError(f"no SQL dialect for database type {database_type!r}")
    writer = SqlWriter(database, entities)
    writer.write_all(relations)
    return writer.text()