"""
스키마 마크다운 → ER 다이어그램 CLI.
- schema-erd render: 단일 포맷 (mermaid / plantuml / dbml / json)
- schema-erd all: 네 포맷 모두
- schema-erd docs: ER 문서(MD)
- schema-erd summary / latest / watch
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table as RichTable

from schema_erd.config import settings
from schema_erd.commands import diagram as cmd_diagram
from schema_erd.commands.diagram import EmptySchemaError
from schema_erd.parsers.markdown import parse_schema_file
from schema_erd.options import DiagramOptions
from schema_erd.render import UnsupportedFormatError, resolve_format, render
from schema_erd.scanner import schema_file_availability

console = Console()

app = typer.Typer(
    name="schema-erd",
    add_completion=False,
    help="PostgreSQL 스키마 마크다운 문서로 ER 다이어그램 생성 (Mermaid, PlantUML, DBML, JSON)",
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG 로그 출력")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _schema_file_arg() -> Path:
    return typer.Argument(..., exists=True, dir_okay=False, help="스키마 마크다운 파일")


def _empty(e: EmptySchemaError) -> typer.Exit:
    console.print(f"[yellow]{e}[/yellow]")
    return typer.Exit(code=1)


@app.command("render")
def render_cmd(
    schema_file: Path = _schema_file_arg(),
    fmt: str = typer.Option(settings.default_format, "--format", "-f", help="mermaid | plantuml | dbml | json"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리 (기본: SCHEMA_ERD_OUTPUT_DIR)"),
    indexes: bool = typer.Option(True, "--indexes/--no-indexes", help="(DBML) 인덱스 블록 포함"),
    derive_relationships: bool = typer.Option(False, help="Foreign Keys 항목으로 relationship 생성"),
    stdout: bool = typer.Option(False, "--stdout", help="파일 대신 표준 출력"),
):
    """단일 포맷 ER 다이어그램 생성."""
    try:
        resolve_format(fmt)
        if stdout:
            schema = cmd_diagram.load_schema(schema_file, derive_relationships)
            typer.echo(render(schema, fmt, DiagramOptions(format=fmt, include_indexes=indexes)))
            return
        cmd_diagram.run_diagram(
            schema_file,
            fmt,
            out_dir=out_dir,
            include_indexes=indexes,
            derive_relationships=derive_relationships,
        )
    except UnsupportedFormatError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)
    except EmptySchemaError as e:
        raise _empty(e)


@app.command("all")
def all_cmd(
    schema_file: Path = _schema_file_arg(),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리"),
    derive_relationships: bool = typer.Option(False, help="Foreign Keys 항목으로 relationship 생성"),
):
    """네 포맷 모두 생성."""
    try:
        cmd_diagram.run_all(schema_file, out_dir=out_dir, derive_relationships=derive_relationships)
    except EmptySchemaError as e:
        raise _empty(e)


@app.command("docs")
def docs_cmd(
    schema_file: Path = _schema_file_arg(),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리"),
    derive_relationships: bool = typer.Option(False, help="Foreign Keys 항목으로 relationship 생성"),
):
    """ER 문서(다이어그램 + 테이블/관계/인덱스 상세) 생성."""
    try:
        cmd_diagram.run_docs(schema_file, out_dir=out_dir, derive_relationships=derive_relationships)
    except EmptySchemaError as e:
        raise _empty(e)


@app.command("summary")
def summary_cmd(schema_file: Path = _schema_file_arg()):
    """파싱 결과와 문서에 적힌 요약 카운터 비교 출력."""
    parsed = parse_schema_file(schema_file)
    schema = parsed.model

    tbl = RichTable(title=f"{parsed.path.name}")
    tbl.add_column("Table")
    tbl.add_column("Columns", justify="right")
    tbl.add_column("PK")
    tbl.add_column("FKs", justify="right")
    for t in schema.tables:
        tbl.add_row(t.name, str(len(t.columns)), t.primary_key or "-", str(len(t.foreign_keys)))
    console.print(tbl)

    s = schema.summary
    counters = {
        "Tables": s.total_tables,
        "Views": s.total_views,
        "Functions": s.total_functions,
        "Triggers": s.total_triggers,
        "Indexes": s.total_indexes,
        "Relationships": s.total_relationships,
    }
    for label, value in counters.items():
        console.print(f"[bold]Total {label}:[/bold] {value if value is not None else '-'}")

    if schema.is_empty:
        console.print("[yellow]No table sections found.[/yellow]")
        raise typer.Exit(code=1)


@app.command("latest")
def latest_cmd(
    directory: Path = typer.Argument(Path("."), file_okay=False, help="스키마 파일을 찾을 디렉터리"),
    max_age_hours: float = typer.Option(settings.max_age_hours, help="이 시간보다 오래되면 unavailable"),
):
    """가장 최근 스키마 마크다운 파일 조회."""
    info = schema_file_availability(directory, max_age_hours, prefix=settings.schema_file_prefix)
    if info.path is None:
        console.print(f"[yellow]No {settings.schema_file_prefix}*.md file in {directory}[/yellow]")
        raise typer.Exit(code=1)
    status = "[green]available[/green]" if info.available else "[yellow]stale[/yellow]"
    console.print(f"{info.path} ({info.age_hours:.1f}h old) {status}")


@app.command("watch")
def watch_cmd(
    schema_file: Path = _schema_file_arg(),
    fmt: str = typer.Option(settings.default_format, "--format", "-f", help="mermaid | plantuml | dbml | json"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리"),
    derive_relationships: bool = typer.Option(False, help="Foreign Keys 항목으로 relationship 생성"),
):
    """스키마 파일이 바뀔 때마다 다이어그램 재생성."""
    try:
        resolve_format(fmt)
    except UnsupportedFormatError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    from schema_erd.watch import watch

    console.print(f"[bold]Watching[/bold] {schema_file} (Ctrl+C to stop)")
    watch(schema_file, fmt, out_dir=out_dir, derive_relationships=derive_relationships)


if __name__ == "__main__":
    app()
