from __future__ import annotations
from datetime import datetime, timezone
from schema_erd.model import SchemaModel
from schema_erd.options import DiagramOptions
from schema_erd.json_models import DiagramDocument

def to_json(schema: SchemaModel, options: DiagramOptions | None = None, generated_at: datetime | None = None) -> str:
    doc = DiagramDocument.from_schema(schema, generated_at or datetime.now(timezone.utc))
    # 값이 없는 키(defaultValue, primaryKey)는 출력하지 않음
    return doc.model_dump_json(by_alias=True, indent=2, exclude_none=True)

def load_json_diagram(text: str) -> DiagramDocument:
    return DiagramDocument.model_validate_json(text)
