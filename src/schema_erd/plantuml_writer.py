from __future__ import annotations
from schema_erd.model import SchemaModel, Column
from schema_erd.options import DiagramOptions
from schema_erd.cardinality import determine_cardinality

HEADER = [
    "@startuml",
    "!theme plain",
    "skinparam linetype ortho",
    "skinparam classAttributeIconSize 0",
    "",
]

def attribute_line(c: Column) -> str:
    line = f"  * {c.name} : {c.db_type}"
    if c.pk:
        line += " <<PK>>"
    if c.fk:
        line += " <<FK>>"
    if not c.nullable:
        line += " <<NOT NULL>>"
    return line

def to_plantuml(schema: SchemaModel, options: DiagramOptions | None = None) -> str:
    lines: list[str] = list(HEADER)

    for t in schema.tables:
        lines.append(f"entity \"{t.name}\" {{")
        for c in t.columns:
            lines.append(attribute_line(c))
        lines.append("}\n")

    for r in schema.relationships:
        card = determine_cardinality(r)
        lines.append(
            f"\"{r.source_table}\" {card.source}--{card.target} \"{r.target_table}\" : "
            f"{r.source_column} -> {r.target_column}"
        )

    lines.append("@enduml")
    lines.append("")
    return "\n".join(lines)
