import json

import pytest

from erdraft.consts import (
    DEFAULT_RATIO,
    FigureType,
    RelationType,
)
from erdraft.geometry import Point
from erdraft.options import (
    PEN_DASH,
    PEN_NONE,
    AppOptions,
    dumps,
    loads,
)
from erdraft.relation import build_relation
from erdraft.shapes import build_figure_between


def _project(count=3):
    options = AppOptions()
    for i in range(count):
        item = build_figure_between(
            FigureType.RECTANGLE, Point(i * 200, 0), Point(i * 200 + 100, 120), 20
        )
        item.physical_name = f"t{i}"
        options.classes.append(item)
    return options


def test_defaults_from_source():
    options = AppOptions()
    assert options.pen_color == "#000000"
    assert options.pen_color_select == "#A72920"
    assert options.brush_title_color == "#D0F0C0"
    assert options.height == 12
    assert options.index_from == -1
    assert options.figure_type == FigureType.RECTANGLE
    assert options.relation_type == RelationType.LINE_NONDIRECT
    assert options.ratio() == DEFAULT_RATIO
    assert len(options.classes) == 0 and len(options.relations) == 0


def test_init_resets_project():
    options = _project()
    options.project_name = "shop"
    options.init()
    assert options.project_name == ""
    assert len(options.classes) == 0


@pytest.mark.parametrize(
    "given, expected",
    [
        (FigureType.TRIANGLE, FigureType.TRIANGLE),
        (FigureType.ELLIPSE, FigureType.RECTANGLE),
        (FigureType.RECTANGLE, FigureType.ELLIPSE),
        (FigureType.NONE, FigureType.NONE),
    ],
)
def test_rotate_figure_type(given, expected):
    assert AppOptions.rotate_figure_type(given) == expected


def test_rotate_relation_type_cycles():
    start = RelationType.LINE_NONDIRECT
    seen = [start]
    current = start
    for _ in range(4):
        current = AppOptions.rotate_relation_type(current)
        seen.append(current)
    assert seen[-1] == start
    assert set(seen[:4]) == {
        RelationType.LINE_NONDIRECT,
        RelationType.LINE_BIDIRECT,
        RelationType.LINE_DIRECT_LEFT,
        RelationType.LINE_DIRECT_RIGHT,
    }
    assert AppOptions.rotate_relation_type(RelationType.NONE) == RelationType.NONE


def test_ratio_out_of_range_resets():
    options = AppOptions()
    options.set_ratio(5.0)
    assert options.ratio() == DEFAULT_RATIO


def test_set_ratio_rounds_to_one_decimal():
    options = AppOptions()
    options.set_ratio(1.14)
    assert options.ratio() == pytest.approx(1.1)


def test_pen_styles_replace_missing_pen():
    options = AppOptions()
    options.from_json({**options.to_json(), "m_PenFKStyle": PEN_NONE})
    assert options.pen_fk_style() == PEN_DASH
    options._pen_select_style = PEN_NONE
    assert options.pen_select_style() == PEN_DASH


def test_class_relation_delete_reindexes():
    options = _project(3)
    options.relations.append(build_relation(RelationType.LINE_NONDIRECT, 0, 1))
    options.relations.append(build_relation(RelationType.LINE_NONDIRECT, 0, 2))
    options.relations.append(build_relation(RelationType.LINE_NONDIRECT, 2, 0))
    assert options.class_relation_delete(1) is True
    assert [c.physical_name for c in options.classes] == ["t0", "t2"]
    assert [(r.source, r.target) for r in options.relations] == [(0, 1), (1, 0)]


def test_class_relation_delete_out_of_range():
    options = _project(2)
    assert options.class_relation_delete(-1) is False
    assert options.class_relation_delete(2) is False
    assert len(options.classes) == 2


def test_class_relation_copy_keeps_selected():
    options = _project(3)
    options.classes[0].select = True
    options.classes[2].select = True
    options.relations.append(build_relation(RelationType.LINE_NONDIRECT, 0, 2))
    options.relations.append(build_relation(RelationType.LINE_NONDIRECT, 1, 2))
    result = options.class_relation_copy()
    assert result is options
    assert [c.physical_name for c in options.classes] == ["t0", "t2"]
    assert [(r.source, r.target) for r in options.relations] == [(0, 1)]


def test_class_relation_paste_offsets_indices():
    target = _project(2)
    source = _project(2)
    source.relations.append(build_relation(RelationType.LINE_NONDIRECT, 0, 1))
    target.class_relation_paste(source)
    assert len(target.classes) == 4
    assert [(r.source, r.target) for r in target.relations] == [(2, 3)]


def test_copy_is_independent():
    options = _project(2)
    clone = options.copy()
    clone.classes[0].physical_name = "changed"
    del clone.classes[1]
    assert options.classes[0].physical_name == "t0"
    assert len(options.classes) == 2


def test_clear_state():
    options = _project(2)
    options.classes[0].select = True
    options.index_from = 1
    options.select_group = True
    options.first_pos = Point(5, 5)
    options.clear_state()
    assert options.index_from == -1
    assert options.select_group is False
    assert options.first_pos == Point(0, 0)
    assert not any(c.select for c in options.classes)


def test_clear_state_keeps_selection_when_asked():
    options = _project(1)
    options.classes[0].select = True
    options.clear_state(False)
    assert options.classes[0].select is True


def test_json_round_trip():
    options = _project(2)
    options.project_name = "shop"
    options.relations.append(build_relation(RelationType.LINE_BIDIRECT, 0, 1))
    text = dumps(options)
    restored = loads(text, AppOptions())
    assert restored.project_name == "shop"
    assert [c.physical_name for c in restored.classes] == ["t0", "t1"]
    assert restored.relations[0].relation_type == RelationType.LINE_BIDIRECT
    assert dumps(restored) == text


def test_json_keys_match_format():
    data = json.loads(dumps(AppOptions()))
    assert data["m_PenColor"] == "#000000"
    assert data["m_ClassList"] == {"FigureTypes": [], "FigureItems": []}
    assert "m_nRatio" not in data


def test_from_json_rejects_unknown_figure_type():
    options = AppOptions()
    with pytest.raises(ValueError):
        options.from_json({"m_nFigureType": 42})


def test_loads_rejects_non_object():
    with pytest.raises(ValueError):
        loads("[1, 2]", AppOptions())
    with pytest.raises(ValueError):
        loads("not json", AppOptions())