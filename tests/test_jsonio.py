import json

import pytest

from erdraft.consts import (
    Cardinality,
    Deferrability,
    FieldDataType,
    FieldRelationType,
    FigureType,
    RelationRule,
    RelationType,
)
from erdraft.field import Field
from erdraft.geometry import Point
from erdraft.jsonio import (
    entities_from_json,
    entities_to_json,
    entity_from_json,
    entity_to_json,
    field_from_json,
    field_to_json,
    point_from_json,
    point_to_json,
    relation_from_json,
    relation_to_json,
    relations_from_json,
    relations_to_json,
)
from erdraft.relation import build_relation
from erdraft.shapes import Ellipse, Rectangle, Triangle


def _field(name="id"):
    return Field(
        logical_name=name,
        physical_name=name,
        relation_type=FieldRelationType.PRIMARY_KEY,
        data_type=FieldDataType.INTEGER,
        precision=2,
        scale=10,
        allows_nulls=True,
        auto_increment=True,
        default_value="0",
        remarks="note",
        first_pos=Point(1, 2),
        last_pos=Point(30, 40),
        angle=0.5,
    )


def _entity():
    entity = Rectangle(
        first_pos=Point(10, 20),
        last_pos=Point(110, 140),
        title_pos=Point(110, 36),
        angle_pos=Point(0, 5),
        resize_pos=Point(120, 150),
        angle=0.25,
        logical_name="User",
        physical_name="users",
    )
    entity.fields.extend([_field("id"), _field("name")])
    return entity


def test_point_keys():
    assert point_to_json(Point(3, -4)) == {"x": 3, "y": -4}


def test_point_round_trip():
    assert point_from_json(point_to_json(Point(7, 9))) == Point(7, 9)


def test_point_missing_members_are_zero():
    assert point_from_json({}) == Point(0, 0)


def test_field_round_trip_keeps_saved_members():
    original = _field()
    restored = field_from_json(field_to_json(original))
    assert restored == original


def test_field_json_uses_project_key_names():
    data = field_to_json(_field())
    assert data["m_LogicalName"] == "id"
    assert data["m_nFieldRelationType"] == int(FieldRelationType.PRIMARY_KEY)
    assert data["m_nFirstPos"] == {"x": 1, "y": 2}


def test_field_drawing_state_is_not_saved():
    original = _field()
    original.hover = True
    original.edit_text = True
    restored = field_from_json(field_to_json(original))
    assert restored.hover is False
    assert restored.edit_text is False


def test_field_json_is_serializable():
    text = json.dumps(field_to_json(_field()))
    assert field_from_json(json.loads(text)) == _field()


def test_entity_round_trip():
    original = _entity()
    restored = entity_from_json(entity_to_json(original), Rectangle())
    assert restored == original


def test_entity_fields_nested_under_field_list():
    data = entity_to_json(_entity())
    names = [f["m_LogicalName"] for f in data["m_FieldList"]["FieldList"]]
    assert names == ["id", "name"]


def test_entity_from_json_replaces_fields():
    target = Rectangle()
    target.fields.append(_field("old"))
    entity_from_json(entity_to_json(_entity()), target)
    assert [f.logical_name for f in target.fields] == ["id", "name"]


def test_entities_round_trip_keeps_shapes():
    items = [_entity(), Ellipse(logical_name="e"), Triangle(logical_name="t")]
    restored = entities_from_json(entities_to_json(items))
    assert [type(e) for e in restored] == [Rectangle, Ellipse, Triangle]
    assert restored[0] == items[0]
    assert restored[2].logical_name == "t"


def test_entities_lists_figure_types():
    data = entities_to_json([Ellipse(), Rectangle()])
    assert data["FigureTypes"] == [int(FigureType.ELLIPSE), int(FigureType.RECTANGLE)]


def test_entities_with_fewer_items_than_types():
    data = entities_to_json([_entity()])
    data["FigureTypes"].append(int(FigureType.TRIANGLE))
    restored = entities_from_json(data)
    assert len(restored) == 2
    assert restored[1].logical_name == ""


def test_entities_type_none_raises():
    with pytest.raises(ValueError):
        entities_from_json({"FigureTypes": [0], "FigureItems": []})


def test_entities_unknown_type_raises():
    with pytest.raises(ValueError):
        entities_from_json({"FigureTypes": [42], "FigureItems": []})


def test_entities_empty():
    assert entities_from_json({}) == []


def _relation():
    relation = build_relation(RelationType.LINE_BIDIRECT, 0, 1, Point(5, 6), Point(70, 80))
    relation.name = "fk_user"
    relation.pk_table_label = "pk"
    relation.fk_table_label = "fk"
    relation.cardinality_pk = Cardinality.ONE_OR_MORE
    relation.cardinality_fk = Cardinality.ZERO_OR_ONE
    relation.deferrability = Deferrability.INITIALLY_DEFERRED
    relation.update_rule = RelationRule.CASCADE
    relation.delete_rule = RelationRule.SET_NULL
    return relation


def test_relation_round_trip():
    original = _relation()
    restored = relation_from_json(relation_to_json(original), build_relation(RelationType.NONE))
    assert restored == original


def test_relation_json_keys():
    data = relation_to_json(_relation())
    assert data["m_nFrom"] == 0
    assert data["m_nTo"] == 1
    assert data["m_Name"] == "fk_user"


def test_relations_round_trip():
    items = [_relation(), build_relation(RelationType.LINE_DIRECT_LEFT, 1, 0)]
    data = relations_to_json(items)
    assert data["RelationTypes"] == [int(RelationType.LINE_BIDIRECT), int(RelationType.LINE_DIRECT_LEFT)]
    assert relations_from_json(data) == items


def test_relations_unknown_type_raises():
    with pytest.raises(ValueError):
        relations_from_json({"RelationTypes": [99], "RelationItems": []})