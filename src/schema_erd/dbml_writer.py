from __future__ import annotations
from datetime import datetime, timezone
from schema_erd.model import SchemaModel, Table, Column
from schema_erd.options import DiagramOptions

def ref_target(table: Table, c: Column, schema: SchemaModel) -> str:
    # 1) 테이블 자신의 Foreign Keys 항목
    fk = table.foreign_key_for(c.name)
    if fk is not None:
        return f"{fk.ref_table}.{fk.ref_column}"
    # 2) source table + column 이 모두 일치하는 첫 relationship
    for r in schema.relationships:
        if r.source_table == table.name and r.source_column == c.name:
            return f"{r.target_table}.{r.target_column}"
    return "unknown.unknown"

def col_settings(table: Table, c: Column, schema: SchemaModel) -> str:
    settings = []
    if c.pk:
        settings.append("pk")
    if c.fk:
        settings.append(f"ref: > {ref_target(table, c, schema)}")
    if not c.nullable:
        settings.append("not null")
    if c.default is not None:
        settings.append(f"default: {c.default}")
    return "".join(f" [{s}]" for s in settings)

def to_dbml(schema: SchemaModel, options: DiagramOptions | None = None, generated_at: datetime | None = None) -> str:
    options = options or DiagramOptions(format="dbml")
    generated_at = generated_at or datetime.now(timezone.utc)

    lines: list[str] = []
    lines.append("// Database Schema Definition")
    lines.append(f"// Generated: {generated_at.isoformat()}")
    lines.append(f"// Tables: {len(schema.tables)}, Relationships: {len(schema.relationships)}\n")

    # Tables (문서 순서 유지)
    for table in schema.tables:
        lines.append(f"Table {table.name} {{")
        for col in table.columns:
            lines.append(f"  {col.name} {col.db_type}{col_settings(table, col, schema)}")
        lines.append("}\n")

    # Indexes
    if options.include_indexes:
        lines.append("// Indexes")
        for idx in schema.indexes:
            line = f"Index {idx.name} on {idx.table} ({', '.join(idx.fields)})"
            if idx.unique:
                line += " [unique]"
            if idx.primary:
                line += " [pk]"
            lines.append(line)
        lines.append("")

    lines.append("")
    return "\n".join(lines)
