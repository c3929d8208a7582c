"""
포맷별 다이어그램 렌더링 디스패치.

render() 는 I/O 없는 순수 변환이고, generate_diagram() 이 메타데이터 계산과
sink 로의 전달을 담당한다.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
import logging

from schema_erd.model import SchemaModel
from schema_erd.options import DiagramFormat, DiagramOptions
from schema_erd.mermaid_writer import to_mermaid
from schema_erd.plantuml_writer import to_plantuml
from schema_erd.dbml_writer import to_dbml
from schema_erd.json_writer import to_json
from schema_erd.sink import OutputSink, DirectorySink, timestamped_name

logger = logging.getLogger(__name__)

FILE_EXTENSIONS = {
    DiagramFormat.MERMAID: "md",
    DiagramFormat.PLANTUML: "puml",
    DiagramFormat.DBML: "dbml",
    DiagramFormat.JSON: "json",
}


class UnsupportedFormatError(ValueError):
    def __init__(self, fmt: object):
        self.format = fmt
        super().__init__(f"Unsupported format: {fmt}")


@dataclass(frozen=True)
class DiagramMetadata:
    tables: int
    relationships: int
    indexes: int
    format: str
    generated_at: datetime


@dataclass(frozen=True)
class DiagramResult:
    content: str
    metadata: DiagramMetadata
    file_path: Path | None = None


def resolve_format(fmt: str | DiagramFormat) -> DiagramFormat:
    if isinstance(fmt, DiagramFormat):
        return fmt
    try:
        return DiagramFormat(fmt)
    except ValueError:
        raise UnsupportedFormatError(fmt) from None


def file_extension(fmt: str | DiagramFormat) -> str:
    try:
        return FILE_EXTENSIONS[resolve_format(fmt)]
    except UnsupportedFormatError:
        return "txt"


def diagram_filename(fmt: str | DiagramFormat, now: datetime) -> str:
    return timestamped_name("er-diagram", file_extension(fmt), now)


def render(
    schema: SchemaModel,
    fmt: str | DiagramFormat,
    options: DiagramOptions | None = None,
    generated_at: datetime | None = None,
) -> str:
    fmt = resolve_format(fmt)
    options = options or DiagramOptions(format=fmt.value)
    generated_at = generated_at or datetime.now(timezone.utc)

    if fmt is DiagramFormat.MERMAID:
        return to_mermaid(schema, options)
    if fmt is DiagramFormat.PLANTUML:
        return to_plantuml(schema, options)
    if fmt is DiagramFormat.DBML:
        return to_dbml(schema, options, generated_at)
    return to_json(schema, options, generated_at)


def render_all(schema: SchemaModel, options: DiagramOptions | None = None) -> dict[DiagramFormat, str]:
    """모든 포맷을 병렬 렌더링 (모델은 불변이라 조율 불필요)."""
    generated_at = datetime.now(timezone.utc)
    with ThreadPoolExecutor(max_workers=len(DiagramFormat)) as pool:
        futures = {
            fmt: pool.submit(render, schema, fmt, options, generated_at)
            for fmt in DiagramFormat
        }
        return {fmt: f.result() for fmt, f in futures.items()}


def generate_diagram(
    schema: SchemaModel,
    options: DiagramOptions,
    sink: OutputSink | None = None,
    now: datetime | None = None,
) -> DiagramResult:
    now = now or datetime.now(timezone.utc)
    fmt = resolve_format(options.format)

    content = render(schema, fmt, options, now)

    if sink is None and options.output_path is not None:
        sink = DirectorySink(options.output_path)

    file_path = None
    if sink is not None:
        file_path = sink.write(content, diagram_filename(fmt, now))

    metadata = DiagramMetadata(
        tables=len(schema.tables),
        relationships=len(schema.relationships),
        indexes=len(schema.indexes),
        format=fmt.value,
        generated_at=now,
    )
    logger.info(
        "ER diagram generated (%s): tables=%d relationships=%d indexes=%d",
        fmt.value.upper(), metadata.tables, metadata.relationships, metadata.indexes,
    )
    return DiagramResult(content=content, metadata=metadata, file_path=file_path)
