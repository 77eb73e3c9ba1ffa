# erdraft

`erdraft` is the data model behind an entity-relationship diagram editor.
It holds a diagram of tables (entities), their columns (fields) and the
foreign-key relations between them in memory. It answers geometric
questions about the drawing, keeps an undo/redo history of snapshots,
saves and loads the diagram as JSON and writes SQL DDL for it.

## Installation

```
pip install erdraft
```

It has no runtime dependencies beyond the standard library.

## Modules

- `erdraft.consts`: the enumerations used throughout (`FigureType`,
  `FieldRelationType`, `FieldDataType`, `RelationType`, `RelationRule`,
  `Deferrability`, `Cardinality`, `RelationKind`, `RelationNotation`,
  `ActionType`, `DatabaseType`, `ExportType`), size and zoom limits, and two
  helpers: `compare(a, b)`, a three-way comparison that ignores the case of
  strings, and `bindex(items, value, key)`, a binary search that returns
  `(index, insert_index)`.
- `erdraft.geometry`: the immutable `Point`, `correct_point` (clamp into a
  rectangle), `rotated_rectangle`, `point_in_polygon`, the rotated hit tests
  `contain_rectangle` and `contain_ellipse`, `segment_intersection` and
  `rectangle_intersections` (with `IntersectionType`), and the colour helpers
  `rgb2hex` and `hex2rgb` (the latter raises `ValueError` for anything that
  is not `#rrggbb`).
- `erdraft.field`: `Field`, a column with its SQL properties and drawing
  state, and `FieldList` with hover and edit lookups.
- `erdraft.entity`: `Entity`, a table box with its fields, move, resize and
  rotation handles, and `EntityList` with the topmost-hit lookups
  (`hover_index`, `hover_title`, `hover_angle_index`, ...), selection and
  edit tracking (`find_edit`, `edit_title`, `find_from_fk`).
- `erdraft.shapes`: the concrete figures `Rectangle`, `Ellipse` and
  `Triangle`, and the factories `build_figure`, `build_figure_between` and
  `build_field`. `build_figure` raises `ValueError` for `FigureType.NONE` or
  an unknown type.
- `erdraft.relation`: `Relation`, a line between two entities given by their
  indices, `RelationList`, and `build_relation`.
- `erdraft.history`: `History`, an undo/redo stack of string snapshots that
  merges repeated edits of the same target into one step.
- `erdraft.jsonio`: conversion of points, fields, entities and relations to
  and from JSON-ready dictionaries.
- `erdraft.dialects`: `SqlDatabase`, its MySQL implementation `MySQL`, and
  `build_database`.
- `erdraft.sql`: `SqlWriter` and `generate_sql`, which produce
  `CREATE TABLE` statements for every entity followed by
  `ALTER TABLE ... ADD CONSTRAINT` statements for every relation.
- `erdraft.options`: `AppOptions`, the whole document with its drawing
  settings, tool state, entities (`classes`) and relations (`relations`),
  and `dumps` / `loads` to turn it into a JSON document and back. `loads`
  raises `ValueError` when the text is not a JSON object or holds an unknown
  enumeration value.
- `erdraft.logger`: a small levelled `Logger` writing printf-style messages
  to a stream, and the `func_trace` context manager.

## Example

```python
from erdraft.consts import DatabaseType, FieldDataType, FieldRelationType, FigureType
from erdraft.field import Field
from erdraft.geometry import Point
from erdraft.history import History
from erdraft.options import AppOptions, dumps, loads
from erdraft.shapes import build_figure_between
from erdraft.sql import generate_sql

options = AppOptions()
history = History(lambda: dumps(options), lambda text: loads(text, options))

customer = build_figure_between(
    FigureType.RECTANGLE, Point(10, 10), Point(110, 130), 16, "", ""
)
customer.logical_name = customer.physical_name = "customer"
customer.fields.append(
    Field(
        logical_name="id",
        physical_name="id",
        relation_type=FieldRelationType.PRIMARY_KEY,
        data_type=FieldDataType.INTEGER,
    )
)
customer.field_recalc()
options.classes.append(customer)
history.save("add customer")

text = dumps(options)                  # JSON document
restored = loads(text, AppOptions())

print(generate_sql(options.classes, options.relations, DatabaseType.MYSQL))

history.undo()                         # back to the empty project
```

## What it does not do

`erdraft` is a model only. It has no window, canvas or drawing code, no
dialogs for editing entities, fields or relations, and no command-line
program. It does not connect to a database: `generate_sql` returns the DDL
as a string, and MySQL is the only dialect. Projects are stored as JSON
only; there is no binary file format.

## Running the tests

```
pip install -e ".[test]"
pytest
```