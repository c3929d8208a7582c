from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

@dataclass(frozen=True)
class Column:
    name: str
    db_type: str
    nullable: bool = True
    default: Optional[str] = None
    pk: bool = False
    fk: bool = False

@dataclass(frozen=True)
class ForeignKey:
    column: str
    ref_table: str
    ref_column: str

@dataclass(frozen=True)
class Table:
    name: str
    columns: Tuple[Column, ...] = ()
    primary_key: Optional[str] = None
    foreign_keys: Tuple[ForeignKey, ...] = ()

    @property
    def primary_columns(self) -> list[Column]:
        return [c for c in self.columns if c.pk]

    @property
    def foreign_columns(self) -> list[Column]:
        return [c for c in self.columns if c.fk]

    def foreign_key_for(self, column: str) -> Optional[ForeignKey]:
        for fk in self.foreign_keys:
            if fk.column == column:
                return fk
        return None

@dataclass(frozen=True)
class Index:
    name: str
    table: str
    fields: Tuple[str, ...] = ()
    unique: bool = False
    primary: bool = False
    clustered: bool = False

@dataclass(frozen=True)
class Relationship:
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    constraint_name: str = ""
    delete_rule: str = "NO ACTION"
    update_rule: str = "NO ACTION"

@dataclass(frozen=True)
class Summary:
    # 문서에 적힌 값 그대로 (파싱된 엔티티 수로 재계산하지 않음)
    total_tables: Optional[int] = None
    total_views: Optional[int] = None
    total_functions: Optional[int] = None
    total_triggers: Optional[int] = None
    total_indexes: Optional[int] = None
    total_relationships: Optional[int] = None

@dataclass(frozen=True)
class SchemaModel:
    tables: Tuple[Table, ...] = ()
    relationships: Tuple[Relationship, ...] = ()
    indexes: Tuple[Index, ...] = ()
    summary: Summary = field(default_factory=Summary)
    # view/function/trigger 추출은 구현하지 않음: 항상 빈 tuple
    views: Tuple[dict, ...] = ()
    functions: Tuple[dict, ...] = ()
    triggers: Tuple[dict, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tables

    def table(self, name: str) -> Optional[Table]:
        for t in self.tables:
            if t.name == name:
                return t
        return None

    def with_tables(self, tables) -> "SchemaModel":
        return replace(self, tables=tuple(tables))

    def with_relationships(self, relationships) -> "SchemaModel":
        return replace(self, relationships=tuple(relationships))

    def with_indexes(self, indexes) -> "SchemaModel":
        return replace(self, indexes=tuple(indexes))
