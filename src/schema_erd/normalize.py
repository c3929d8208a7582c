from __future__ import annotations
from schema_erd.model import SchemaModel, Relationship

def relationships_from_foreign_keys(model: SchemaModel) -> SchemaModel:
    """
    테이블의 Foreign Keys 항목으로 Relationship 을 만들어 붙인 새 모델을 반환한다.
    기존 relationship 은 앞에 그대로 두고, 같은 (table, column) 은 다시 추가하지 않는다.
    """
    rels = list(model.relationships)
    seen = {(r.source_table, r.source_column) for r in rels}

    for t in model.tables:
        for fk in t.foreign_keys:
            if (t.name, fk.column) in seen:
                continue
            seen.add((t.name, fk.column))
            rels.append(Relationship(
                source_table=t.name,
                source_column=fk.column,
                target_table=fk.ref_table,
                target_column=fk.ref_column,
                constraint_name=f"fk_{t.name}_{fk.column}",
            ))

    return model.with_relationships(rels)
