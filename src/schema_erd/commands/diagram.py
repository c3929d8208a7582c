"""ER 다이어그램 생성: 스키마 마크다운 → Mermaid / PlantUML / DBML / JSON."""
from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from schema_erd.config import settings
from schema_erd.model import SchemaModel
from schema_erd.parsers.markdown import parse_schema_file
from schema_erd.normalize import relationships_from_foreign_keys
from schema_erd.options import DiagramFormat, DiagramOptions
from schema_erd.render import DiagramResult, generate_diagram, render_all, diagram_filename
from schema_erd.docs_writer import write_er_documentation
from schema_erd.sink import OutputSink, DirectorySink, DualLocationSink

console = Console(stderr=True)


class EmptySchemaError(RuntimeError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No table sections found in {path}")


def build_sink(out_dir: Path | None = None) -> OutputSink:
    base = out_dir or settings.output_dir
    if settings.central_dir is not None:
        return DualLocationSink(settings.central_dir, base)
    return DirectorySink(base)


def load_schema(schema_file: Path, derive_relationships: bool = False) -> SchemaModel:
    parsed = parse_schema_file(schema_file)
    schema = parsed.model
    console.print(f"[bold]Schema file:[/bold] {parsed.path}")
    console.print(f"Parsed [green]{len(schema.tables)}[/green] tables")
    if schema.is_empty:
        raise EmptySchemaError(parsed.path)
    if derive_relationships:
        schema = relationships_from_foreign_keys(schema)
        console.print(f"Derived [green]{len(schema.relationships)}[/green] relationships from foreign keys")
    return schema


def run_diagram(
    schema_file: Path,
    fmt: str = "mermaid",
    out_dir: Path | None = None,
    include_indexes: bool = True,
    derive_relationships: bool = False,
) -> DiagramResult:
    schema = load_schema(schema_file, derive_relationships)
    options = DiagramOptions(format=fmt, include_indexes=include_indexes)
    result = generate_diagram(schema, options, sink=build_sink(out_dir))
    console.print(
        f"[bold green]{result.metadata.format.upper()}:[/bold green] {result.file_path} "
        f"(tables={result.metadata.tables}, relationships={result.metadata.relationships}, "
        f"indexes={result.metadata.indexes})"
    )
    return result


def run_all(
    schema_file: Path,
    out_dir: Path | None = None,
    derive_relationships: bool = False,
) -> dict[DiagramFormat, Path]:
    schema = load_schema(schema_file, derive_relationships)
    sink = build_sink(out_dir)
    now = datetime.now(timezone.utc)
    paths = {}
    for fmt, content in render_all(schema).items():
        paths[fmt] = sink.write(content, diagram_filename(fmt, now))
        console.print(f"[bold green]{fmt.value.upper()}:[/bold green] {paths[fmt]}")
    return paths


def run_docs(
    schema_file: Path,
    out_dir: Path | None = None,
    derive_relationships: bool = False,
) -> Path:
    schema = load_schema(schema_file, derive_relationships)
    path = write_er_documentation(schema, build_sink(out_dir))
    console.print(f"[bold green]Docs:[/bold green] {path}")
    return path
