from __future__ import annotations
from schema_erd.model import SchemaModel, Column, Table
from schema_erd.options import DiagramOptions
from schema_erd.cardinality import determine_cardinality

PK_GLYPH = "🔑"
FK_GLYPH = "🔗"

CLASS_DEFS = {
    "primaryTable": "fill:#e1f5fe,stroke:#01579b,stroke-width:2px",
    "foreignTable": "fill:#f3e5f5,stroke:#4a148c,stroke-width:2px",
    "regularTable": "fill:#f1f8e9,stroke:#33691e,stroke-width:1px",
}

def column_line(c: Column) -> str:
    line = f"        {c.db_type} {c.name}"
    if c.pk:
        line += f" {PK_GLYPH}"
    if c.fk:
        line += f" {FK_GLYPH}"
    if not c.nullable:
        line += " NOT NULL"
    if c.default is not None:
        line += f" DEFAULT {c.default}"
    return line

def node_class(t: Table) -> str:
    # PK 보유 > FK 보유 > 그 외 순서
    if t.primary_columns:
        return "primaryTable"
    if t.foreign_columns:
        return "foreignTable"
    return "regularTable"

def to_mermaid(schema: SchemaModel, options: DiagramOptions | None = None) -> str:
    lines: list[str] = []
    lines.append("### Entity-Relationship Diagram (Mermaid)\n")
    lines.append("```mermaid")
    lines.append("erDiagram")

    for t in schema.tables:
        lines.append(f"    {t.name} {{")
        for c in t.columns:
            lines.append(column_line(c))
        lines.append("    }")

    for r in schema.relationships:
        card = determine_cardinality(r)
        lines.append(
            f"    {r.source_table} {card.source} {card.target} {r.target_table} : "
            f"\"{r.source_column} -> {r.target_column}\""
        )
    lines.append("```\n")

    # 테이블 관계 그래프
    lines.append("### Table Relationship Graph\n")
    lines.append("```mermaid")
    lines.append("graph TD")
    lines.append("    %% Table Nodes")
    for t in schema.tables:
        lines.append(f"    {t.name}[{t.name}<br/>{len(t.columns)} columns]:::{node_class(t)}")

    lines.append("")
    lines.append("    %% Relationships")
    for r in schema.relationships:
        lines.append(f"    {r.source_table} -->|FK: {r.source_column}| {r.target_table}")

    lines.append("")
    lines.append("    %% Styling")
    for name, style in CLASS_DEFS.items():
        lines.append(f"    classDef {name} {style}")
    lines.append("```\n")

    lines.append("")
    return "\n".join(lines)
