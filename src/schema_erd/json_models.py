"""JSON 다이어그램 문서 Pydantic 모델 (camelCase 키)."""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from schema_erd.model import SchemaModel, Table, Column, ForeignKey, Index, Relationship


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ColumnDoc(_CamelModel):
    name: str
    type: str
    is_primary: bool = False
    is_foreign: bool = False
    nullable: bool = True
    default_value: Optional[str] = None


class ForeignKeyDoc(_CamelModel):
    column: str
    referenced_table: str
    referenced_column: str


class TableDoc(_CamelModel):
    name: str
    columns: list[ColumnDoc] = Field(default_factory=list)
    primary_key: Optional[str] = None
    foreign_keys: list[ForeignKeyDoc] = Field(default_factory=list)


class RelationshipDoc(_CamelModel):
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    constraint_name: str = ""
    delete_rule: str = "NO ACTION"
    update_rule: str = "NO ACTION"


class IndexDoc(_CamelModel):
    name: str
    table: str
    fields: list[str] = Field(default_factory=list)
    unique: bool = False
    primary: bool = False
    clustered: bool = False


class DatabaseDoc(_CamelModel):
    tables: list[TableDoc] = Field(default_factory=list)
    relationships: list[RelationshipDoc] = Field(default_factory=list)
    indexes: list[IndexDoc] = Field(default_factory=list)
    views: list[Any] = Field(default_factory=list)
    functions: list[Any] = Field(default_factory=list)
    triggers: list[Any] = Field(default_factory=list)


class MetadataDoc(_CamelModel):
    generated_at: datetime
    format: str = "json"
    version: str = "1.0"


class DiagramDocument(_CamelModel):
    metadata: MetadataDoc
    database: DatabaseDoc

    @classmethod
    def from_schema(cls, schema: SchemaModel, generated_at: datetime) -> "DiagramDocument":
        return cls(
            metadata=MetadataDoc(generated_at=generated_at),
            database=DatabaseDoc(
                tables=[
                    TableDoc(
                        name=t.name,
                        columns=[
                            ColumnDoc(
                                name=c.name,
                                type=c.db_type,
                                is_primary=c.pk,
                                is_foreign=c.fk,
                                nullable=c.nullable,
                                default_value=c.default,
                            )
                            for c in t.columns
                        ],
                        primary_key=t.primary_key,
                        foreign_keys=[
                            ForeignKeyDoc(column=fk.column, referenced_table=fk.ref_table, referenced_column=fk.ref_column)
                            for fk in t.foreign_keys
                        ],
                    )
                    for t in schema.tables
                ],
                relationships=[
                    RelationshipDoc(
                        source_table=r.source_table,
                        source_column=r.source_column,
                        target_table=r.target_table,
                        target_column=r.target_column,
                        constraint_name=r.constraint_name,
                        delete_rule=r.delete_rule,
                        update_rule=r.update_rule,
                    )
                    for r in schema.relationships
                ],
                indexes=[
                    IndexDoc(
                        name=i.name,
                        table=i.table,
                        fields=list(i.fields),
                        unique=i.unique,
                        primary=i.primary,
                        clustered=i.clustered,
                    )
                    for i in schema.indexes
                ],
                views=list(schema.views),
                functions=list(schema.functions),
                triggers=list(schema.triggers),
            ),
        )

    def to_schema(self) -> SchemaModel:
        db = self.database
        return SchemaModel(
            tables=tuple(
                Table(
                    name=t.name,
                    columns=tuple(
                        Column(
                            name=c.name,
                            db_type=c.type,
                            nullable=c.nullable,
                            default=c.default_value,
                            pk=c.is_primary,
                            fk=c.is_foreign,
                        )
                        for c in t.columns
                    ),
                    primary_key=t.primary_key,
                    foreign_keys=tuple(
                        ForeignKey(column=fk.column, ref_table=fk.referenced_table, ref_column=fk.referenced_column)
                        for fk in t.foreign_keys
                    ),
                )
                for t in db.tables
            ),
            relationships=tuple(
                Relationship(
                    source_table=r.source_table,
                    source_column=r.source_column,
                    target_table=r.target_table,
                    target_column=r.target_column,
                    constraint_name=r.constraint_name,
                    delete_rule=r.delete_rule,
                    update_rule=r.update_rule,
                )
                for r in db.relationships
            ),
            indexes=tuple(
                Index(
                    name=i.name,
                    table=i.table,
                    fields=tuple(i.fields),
                    unique=i.unique,
                    primary=i.primary,
                    clustered=i.clustered,
                )
                for i in db.indexes
            ),
        )
