"""Markdown 스키마 문서 → Mermaid / PlantUML / DBML / JSON ER 다이어그램."""
from schema_erd.model import SchemaModel, Table, Column, ForeignKey, Index, Relationship, Summary
from schema_erd.options import DiagramFormat, DiagramOptions
from schema_erd.parsers.markdown import MarkdownSchemaParser, parse_schema_markdown
from schema_erd.render import UnsupportedFormatError, render, generate_diagram
