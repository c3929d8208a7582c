from datetime import datetime, timezone

from schema_erd.docs_writer import to_er_documentation, write_er_documentation
from schema_erd.sink import DirectorySink

NOW = datetime(2026, 10, 19, 2, 43, 5, tzinfo=timezone.utc)


def test_documentation_sections(full_schema):
    doc = to_er_documentation(full_schema, NOW)
    assert doc.startswith("# Entity-Relationship Diagram Documentation")
    assert "- **Total Tables:** 3" in doc
    assert "- **Total Relationships:** 2" in doc
    assert "- **Total Triggers:** 0" in doc
    assert "erDiagram" in doc
    assert "```plantuml\n@startuml" in doc
    assert "```dbml\n// Database Schema Definition" in doc
    assert "- `id` (integer) 🔑 Primary Key NOT NULL" in doc
    assert "- `user_id` (integer) 🔗 Foreign Key NOT NULL" in doc
    assert "**Foreign Keys:** `user_id` → `users.id`" in doc
    assert "**Primary Key:** None" in doc
    assert "### orders.user_id → users.id" in doc
    assert "- **Delete Rule:** CASCADE" in doc
    assert "- **Fields:** user_id, status" in doc
    assert "- **Clustered:** No" in doc


def test_write_documentation(full_schema, tmp_path):
    path = write_er_documentation(full_schema, DirectorySink(tmp_path), NOW)
    assert path.name == "er-diagram-documentation-2026-10-19T02-43-05.md"
    assert "## Table Details" in path.read_text(encoding="utf-8")
