"""JSON form of points, fields, classes and relations as saved in projects."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Type, TypeVar

from erdraft.consts import (
    Cardinality,
    Deferrability,
    FieldDataType,
    FieldRelationType,
    FigureType,
    RelationKind,
    RelationRule,
    RelationType,
)
from erdraft.entity import Entity, EntityList
from erdraft.field import Field, FieldList
from erdraft.geometry import Point
from erdraft.relation import Relation, RelationList, build_relation
from erdraft.shapes import build_figure

_E = TypeVar("_E")


def _int(data: Mapping[str, Any], key: str) -> int:
    """An integer member; 0 when missing or not integral."""
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _array(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    return list(value) if isinstance(value, list) else []


def _enum(kind: Type[_E], data: Mapping[str, Any], key: str) -> _E:
    value = _int(data, key)
    try:
        return kind(value)  # type: ignore[call-arg]
    except ValueError:
        raise ValueError(f"invalid {key}: {value}") from None


def point_to_json(point: Point) -> Dict[str, int]:
    return {"x": int(point.x), "y": int(point.y)}


def point_from_json(data: Mapping[str, Any]) -> Point:
    return Point(_int(data, "x"), _int(data, "y"))


def field_to_json(field: Field) -> Dict[str, Any]:
    return {
        "m_nAngle": float(field.angle),
        "m_LogicalName": field.logical_name,
        "m_PhysicalName": field.physical_name,
        "m_nFieldRelationType": int(field.relation_type),
        "m_nFieldDataType": int(field.data_type),
        "m_nPrecission": int(field.precision),
        "m_nScale": int(field.scale),
        "m_bAllowsNulls": bool(field.allows_nulls),
        "m_bAutoIncrement": bool(field.auto_increment),
        "m_DefaultValue": field.default_value,
        "m_Remarks": field.remarks,
        "m_nFirstPos": point_to_json(field.first_pos),
        "m_nLastPos": point_to_json(field.last_pos),
    }


def field_from_json(data: Mapping[str, Any]) -> Field:
    return Field(
        angle=_float(data, "m_nAngle"),
        logical_name=_str(data, "m_LogicalName"),
        physical_name=_str(data, "m_PhysicalName"),
        relation_type=_enum(FieldRelationType, data, "m_nFieldRelationType"),
        data_type=_enum(FieldDataType, data, "m_nFieldDataType"),
        precision=_int(data, "m_nPrecission"),
        scale=_int(data, "m_nScale"),
        allows_nulls=_bool(data, "m_bAllowsNulls"),
        auto_increment=_bool(data, "m_bAutoIncrement"),
        default_value=_str(data, "m_DefaultValue"),
        remarks=_str(data, "m_Remarks"),
        first_pos=point_from_json(_object(data, "m_nFirstPos")),
        last_pos=point_from_json(_object(data, "m_nLastPos")),
    )


def _fields_to_json(fields: Iterable[Field]) -> Dict[str, Any]:
    return {"FieldList": [field_to_json(f) for f in fields]}


def _fields_from_json(data: Mapping[str, Any]) -> FieldList:
    return FieldList(
        field_from_json(item if isinstance(item, Mapping) else {})
        for item in _array(data, "FieldList")
    )


def entity_to_json(entity: Entity) -> Dict[str, Any]:
    return {
        "m_nFigureType": int(entity.figure_type),
        "m_nAnglesCount": int(entity.angles_count),
        "m_nAngle": float(entity.angle),
        "m_LogicalName": entity.logical_name,
        "m_PhysicalName": entity.physical_name,
        "m_nFirstPos": point_to_json(entity.first_pos),
        "m_nLastPos": point_to_json(entity.last_pos),
        "m_nTitlePos": point_to_json(entity.title_pos),
        "m_nAnglePos": point_to_json(entity.angle_pos),
        "m_nResizePos": point_to_json(entity.resize_pos),
        "m_FieldList": _fields_to_json(entity.fields),
    }


def entity_from_json(data: Mapping[str, Any], entity: Entity) -> Entity:
    """Fill ``entity`` from ``data`` and return it."""
    entity.figure_type = _enum(FigureType, data, "m_nFigureType")
    entity.angles_count = _int(data, "m_nAnglesCount")
    entity.angle = _float(data, "m_nAngle")
    entity.logical_name = _str(data, "m_LogicalName")
    entity.physical_name = _str(data, "m_PhysicalName")
    entity.first_pos = point_from_json(_object(data, "m_nFirstPos"))
    entity.last_pos = point_from_json(_object(data, "m_nLastPos"))
    entity.title_pos = point_from_json(_object(data, "m_nTitlePos"))
    entity.angle_pos = point_from_json(_object(data, "m_nAnglePos"))
    entity.resize_pos = point_from_json(_object(data, "m_nResizePos"))
    entity.fields[:] = _fields_from_json(_object(data, "m_FieldList"))
    return entity


def entities_to_json(entities: Iterable[Entity]) -> Dict[str, Any]:
    items = list(entities)
    return {
        "FigureTypes": [int(e.figure_type) for e in items],
        "FigureItems": [entity_to_json(e) for e in items],
    }


def entities_from_json(data: Mapping[str, Any]) -> EntityList:
    """Build the classes by their listed shapes, then fill them in order.

    Raises ValueError for a shape of type none or an unknown shape.
    """
    result = EntityList(
        build_figure(FigureType(t) if t in FigureType._value2member_map_ else t)
        for t in (_int({"v": v}, "v") for v in _array(data, "FigureTypes"))
    )
    for entity, item in zip(result, _array(data, "FigureItems")):
        entity_from_json(item if isinstance(item, Mapping) else {}, entity)
    return result


def relation_to_json(relation: Relation) -> Dict[str, Any]:
    return {
        "m_nRelationType": int(relation.relation_type),
        "m_nFrom": int(relation.source),
        "m_nTo": int(relation.target),
        "m_Name": relation.name,
        "m_PKTableLabel": relation.pk_table_label,
        "m_FKTableLabel": relation.fk_table_label,
        "m_nType": int(relation.kind),
        "m_nCardinalityPKTable": int(relation.cardinality_pk),
        "m_nCardinalityFKTable": int(relation.cardinality_fk),
        "m_nDeferrability": int(relation.deferrability),
        "m_nUpdateRule": int(relation.update_rule),
        "m_nDeleteRule": int(relation.delete_rule),
        "m_nFirstPos": point_to_json(relation.first_pos),
        "m_nLastPos": point_to_json(relation.last_pos),
    }


def relation_from_json(data: Mapping[str, Any], relation: Relation) -> Relation:
    """Fill ``relation`` from ``data`` and return it."""
    relation.relation_type = _enum(RelationType, data, "m_nRelationType")
    relation.source = _int(data, "m_nFrom")
    relation.target = _int(data, "m_nTo")
    relation.name = _str(data, "m_Name")
    relation.pk_table_label = _str(data, "m_PKTableLabel")
    relation.fk_table_label = _str(data, "m_FKTableLabel")
    relation.kind = _enum(RelationKind, data, "m_nType")
    relation.cardinality_pk = _enum(Cardinality, data, "m_nCardinalityPKTable")
    relation.cardinality_fk = _enum(Cardinality, data, "m_nCardinalityFKTable")
    relation.deferrability = _enum(Deferrability, data, "m_nDeferrability")
    relation.update_rule = _enum(RelationRule, data, "m_nUpdateRule")
    relation.delete_rule = _enum(RelationRule, data, "m_nDeleteRule")
    relation.first_pos = point_from_json(_object(data, "m_nFirstPos"))
    relation.last_pos = point_from_json(_object(data, "m_nLastPos"))
    return relation


def relations_to_json(relations: Iterable[Relation]) -> Dict[str, Any]:
    items = list(relations)
    return {
        "RelationTypes": [int(r.relation_type) for r in items],
        "RelationItems": [relation_to_json(r) for r in items],
    }


def relations_from_json(data: Mapping[str, Any]) -> RelationList:
    result = RelationList()
    for value in _array(data, "RelationTypes"):
        number = _int({"v": value}, "v")
        try:
            kind = RelationType(number)
        except ValueError:
            raise ValueError(f"unknown relation type: {number}") from None
        result.append(build_relation(kind))
    for relation, item in zip(result, _array(data, "RelationItems")):
        relation_from_json(item if isinstance(item, Mapping) else {}, relation)
    return result