from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from schema_erd.model import SchemaModel
from schema_erd.options import DiagramOptions
from schema_erd.mermaid_writer import to_mermaid
from schema_erd.plantuml_writer import to_plantuml
from schema_erd.dbml_writer import to_dbml
from schema_erd.sink import OutputSink, timestamped_name

def _yes_no(v: bool) -> str:
    return "Yes" if v else "No"

def to_er_documentation(schema: SchemaModel, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)

    lines = []
    lines.append("# Entity-Relationship Diagram Documentation\n")
    lines.append(f"**Generated:** {now.isoformat()}")
    lines.append("**Database:** PostgreSQL")
    lines.append("**Analysis Type:** Comprehensive ER Diagram Analysis\n")
    lines.append("---\n")

    lines.append("## Schema Overview\n")
    lines.append(f"- **Total Tables:** {len(schema.tables)}")
    lines.append(f"- **Total Relationships:** {len(schema.relationships)}")
    lines.append(f"- **Total Indexes:** {len(schema.indexes)}")
    lines.append(f"- **Total Views:** {len(schema.views)}")
    lines.append(f"- **Total Functions:** {len(schema.functions)}")
    lines.append(f"- **Total Triggers:** {len(schema.triggers)}\n")
    lines.append("---\n")

    lines.append("## ER Diagrams\n")
    lines.append("### 1. Mermaid ER Diagram\n")
    lines.append(to_mermaid(schema, DiagramOptions(format="mermaid")))
    lines.append("### 2. PlantUML ER Diagram\n")
    lines.append("```plantuml")
    lines.append(to_plantuml(schema, DiagramOptions(format="plantuml")).rstrip("\n"))
    lines.append("```\n")
    lines.append("### 3. DBML Schema Definition\n")
    lines.append("```dbml")
    lines.append(to_dbml(schema, DiagramOptions(format="dbml"), now).rstrip("\n"))
    lines.append("```\n")
    lines.append("---\n")

    lines.append("## Table Details\n")
    for t in schema.tables:
        lines.append(f"### {t.name}\n")
        lines.append("**Columns:**")
        for c in t.columns:
            flags = []
            if c.pk: flags.append("🔑 Primary Key")
            if c.fk: flags.append("🔗 Foreign Key")
            if not c.nullable: flags.append("NOT NULL")
            flag_s = f" {' '.join(flags)}" if flags else ""
            lines.append(f"- `{c.name}` ({c.db_type}){flag_s}")
        lines.append("")
        lines.append(f"**Primary Key:** {t.primary_key or 'None'}")
        fks = ", ".join(f"`{fk.column}` → `{fk.ref_table}.{fk.ref_column}`" for fk in t.foreign_keys)
        lines.append(f"**Foreign Keys:** {fks or 'None'}\n")
    lines.append("---\n")

    lines.append("## Relationship Details\n")
    for r in schema.relationships:
        lines.append(f"### {r.source_table}.{r.source_column} → {r.target_table}.{r.target_column}\n")
        lines.append(f"- **Constraint:** {r.constraint_name}")
        lines.append(f"- **Delete Rule:** {r.delete_rule}")
        lines.append(f"- **Update Rule:** {r.update_rule}\n")
    lines.append("---\n")

    lines.append("## Index Information\n")
    for i in schema.indexes:
        lines.append(f"### {i.name}\n")
        lines.append(f"- **Table:** {i.table}")
        lines.append(f"- **Fields:** {', '.join(i.fields)}")
        lines.append(f"- **Unique:** {_yes_no(i.unique)}")
        lines.append(f"- **Primary:** {_yes_no(i.primary)}")
        lines.append(f"- **Clustered:** {_yes_no(i.clustered)}\n")
    lines.append("---\n")

    lines.append("## Diagram Usage\n")
    lines.append("### Mermaid")
    lines.append("- Use in GitHub, GitLab, or any Markdown viewer that supports Mermaid")
    lines.append("- Copy the Mermaid code block to https://mermaid.live/\n")
    lines.append("### PlantUML")
    lines.append("- Use the PlantUML online server or a local PlantUML install\n")
    lines.append("### DBML")
    lines.append("- Paste into https://dbdiagram.io/ for an interactive diagram\n")

    return "\n".join(lines)

def write_er_documentation(schema: SchemaModel, sink: OutputSink, now: datetime | None = None) -> Path:
    now = now or datetime.now(timezone.utc)
    return sink.write(to_er_documentation(schema, now), timestamped_name("er-diagram-documentation", "md", now))
