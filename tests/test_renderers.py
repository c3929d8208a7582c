import json
from datetime import datetime, timezone

import pytest

from schema_erd.cardinality import determine_cardinality, ONE_TO_MANY
from schema_erd.dbml_writer import to_dbml
from schema_erd.json_writer import to_json, load_json_diagram
from schema_erd.mermaid_writer import to_mermaid
from schema_erd.model import Column, Relationship, SchemaModel, Table
from schema_erd.options import DiagramFormat, DiagramOptions
from schema_erd.plantuml_writer import to_plantuml
from schema_erd.render import render

NOW = datetime(2026, 10, 19, 2, 43, 5, tzinfo=timezone.utc)


class TestMermaid:
    def test_single_table_example(self, users_only):
        out = to_mermaid(users_only)
        assert "erDiagram" in out
        assert "    users {" in out
        assert "        integer id 🔑 NOT NULL" in out
        assert "        varchar(50) username NOT NULL" in out
        assert "        varchar(100) email NOT NULL" in out
        assert ONE_TO_MANY not in out
        assert "-->|FK:" not in out

    def test_default_suffix(self):
        schema = SchemaModel(tables=(Table("t", (Column("status", "text", default="'new'"),)),))
        assert "        text status DEFAULT 'new'" in to_mermaid(schema)

    def test_relationship_lines(self, full_schema):
        out = to_mermaid(full_schema)
        assert '    orders ||--o{ ||--o{ users : "user_id -> id"' in out
        assert "    orders -->|FK: user_id| users" in out

    def test_node_classes(self, full_schema):
        plain = Table("notes", (Column("body", "text"),))
        out = to_mermaid(full_schema.with_tables(full_schema.tables + (plain,)))
        assert "    users[users<br/>3 columns]:::primaryTable" in out
        assert "    audit_log[audit_log<br/>2 columns]:::foreignTable" in out
        assert "    notes[notes<br/>1 columns]:::regularTable" in out
        assert "classDef primaryTable" in out
        assert out.count("```mermaid") == 2


class TestPlantUML:
    def test_entities(self, parsed):
        out = to_plantuml(parsed)
        assert out.startswith("@startuml\n")
        assert out.rstrip().endswith("@enduml")
        assert 'entity "users" {' in out
        assert "  * id : integer <<PK>> <<NOT NULL>>" in out
        assert "  * user_id : integer <<FK>> <<NOT NULL>>" in out
        assert "  * email : varchar(100)\n" in out

    def test_relationships(self, full_schema):
        out = to_plantuml(full_schema)
        assert '"orders" ||--o{--||--o{ "users" : user_id -> id' in out


class TestDBML:
    def test_header_and_tables(self, full_schema):
        out = to_dbml(full_schema, generated_at=NOW)
        assert out.startswith("// Database Schema Definition\n")
        assert "// Generated: 2026-10-19T02:43:05+00:00" in out
        assert "// Tables: 3, Relationships: 2" in out
        assert "Table users {" in out
        assert "  id integer [pk] [not null] [default: nextval('users_id_seq')]" in out
        assert "  status text [default: 'new']" in out

    def test_ref_from_table_foreign_key(self, parsed):
        out = to_dbml(parsed, generated_at=NOW)
        assert "  user_id integer [ref: > users.id] [not null]" in out
        assert "  order_id integer [ref: > orders.id]" in out

    def test_ref_falls_back_to_relationship(self):
        schema = SchemaModel(
            tables=(Table("a", (Column("b_id", "int", fk=True),)),),
            relationships=(
                Relationship("x", "b_id", "wrong", "id"),
                Relationship("a", "b_id", "b", "id"),
            ),
        )
        assert "  b_id int [ref: > b.id]" in to_dbml(schema, generated_at=NOW)

    def test_ref_unknown(self):
        schema = SchemaModel(tables=(Table("a", (Column("b_id", "int", fk=True),)),))
        assert "[ref: > unknown.unknown]" in to_dbml(schema, generated_at=NOW)

    def test_index_block(self, full_schema):
        out = to_dbml(full_schema, DiagramOptions(format="dbml"), NOW)
        assert "// Indexes" in out
        assert "Index users_pkey on users (id) [unique] [pk]" in out
        assert "Index idx_orders_user_status on orders (user_id, status)\n" in out

    def test_index_block_disabled(self, full_schema):
        out = to_dbml(full_schema, DiagramOptions(format="dbml", include_indexes=False), NOW)
        assert "// Indexes" not in out
        assert "users_pkey" not in out


class TestJSON:
    def test_missing_values_omitted(self):
        schema = SchemaModel(tables=(Table("t", (Column("a", "int"),)),))
        table = json.loads(to_json(schema, generated_at=NOW))["database"]["tables"][0]
        assert "defaultValue" not in table["columns"][0]
        assert "primaryKey" not in table
        assert load_json_diagram(to_json(schema)).to_schema().tables == schema.tables

    def test_structure(self, full_schema):
        data = json.loads(to_json(full_schema, generated_at=NOW))
        assert data["metadata"]["format"] == "json"
        assert data["metadata"]["version"] == "1.0"
        db = data["database"]
        assert db["views"] == [] and db["functions"] == [] and db["triggers"] == []
        users = db["tables"][0]
        assert users["name"] == "users"
        assert users["primaryKey"] == "id"
        assert users["columns"][0] == {
            "name": "id",
            "type": "integer",
            "isPrimary": True,
            "isForeign": False,
            "nullable": False,
            "defaultValue": "nextval('users_id_seq')",
        }
        assert db["tables"][1]["foreignKeys"] == [
            {"column": "user_id", "referencedTable": "users", "referencedColumn": "id"}
        ]
        assert db["relationships"][0]["constraintName"] == "fk_orders_user"
        assert db["relationships"][0]["deleteRule"] == "CASCADE"
        assert db["indexes"][0]["clustered"] is False

    def test_round_trip_counts(self, full_schema):
        data = json.loads(to_json(full_schema))
        assert len(data["database"]["tables"]) == len(full_schema.tables)
        assert [len(t["columns"]) for t in data["database"]["tables"]] == [len(t.columns) for t in full_schema.tables]
        assert len(data["database"]["relationships"]) == len(full_schema.relationships)

    def test_load_back_to_schema(self, full_schema):
        doc = load_json_diagram(to_json(full_schema, generated_at=NOW))
        back = doc.to_schema()
        assert back.tables == full_schema.tables
        assert back.relationships == full_schema.relationships
        assert back.indexes == full_schema.indexes
        assert doc.metadata.generated_at == NOW


class TestCardinality:
    def test_constant_pair(self):
        rels = [
            Relationship("a", "b_id", "b", "id"),
            Relationship("x", "id", "y", "id", "uq", "CASCADE", "CASCADE"),
        ]
        pairs = {determine_cardinality(r) for r in rels}
        assert pairs == {(ONE_TO_MANY, ONE_TO_MANY)}


class TestOrderPreservation:
    @pytest.mark.parametrize("fmt", list(DiagramFormat))
    def test_reordered_tables_reorder_output(self, full_schema, fmt):
        names = [t.name for t in full_schema.tables]
        forward = render(full_schema, fmt, generated_at=NOW)
        reordered = full_schema.with_tables(reversed(full_schema.tables))
        backward = render(reordered, fmt, generated_at=NOW)

        def order_of(text):
            return sorted(names, key=lambda n: text.index(n))

        assert order_of(forward) == names
        assert order_of(backward) == list(reversed(names))

    @pytest.mark.parametrize(
        "fmt, first, second",
        [
            (DiagramFormat.MERMAID, '"user_id -> id"', '"order_id -> id"'),
            (DiagramFormat.PLANTUML, ": user_id -> id", ": order_id -> id"),
            (DiagramFormat.JSON, "fk_orders_user", "fk_audit_order"),
        ],
    )
    def test_relationship_order(self, full_schema, fmt, first, second):
        out = render(full_schema, fmt, generated_at=NOW)
        assert out.index(first) < out.index(second)

        swapped = full_schema.with_relationships(reversed(full_schema.relationships))
        out = render(swapped, fmt, generated_at=NOW)
        assert out.index(second) < out.index(first)
