"""
마크다운 스키마 문서 파서.

업스트림 리포팅 도구가 생성한 PostgreSQL 스키마 마크다운(`### Table: `users``)을
읽어 SchemaModel 로 변환한다. 문서는 수동 편집/부분 재생성으로 깨져 있을 수 있으므로
테이블 섹션 단위, 컬럼 행 단위로 실패를 격리한다 (warning 로그 후 건너뜀).
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import logging
import re

from schema_erd.model import SchemaModel, Table, Column, ForeignKey, Summary
from schema_erd.parsers.base import Parser

logger = logging.getLogger(__name__)

# `### Table: `` 와 `#### Table: `` 두 가지 깊이 모두 테이블 섹션 시작
SECTION_RE = re.compile(r"#{3,4} Table: `")
TABLE_NAME_RE = re.compile(r"^([^`\n]+)`")

COLUMNS_LABEL = "**Columns:**"
STOP_LABELS = ("**Primary Key:**", "**Foreign Keys:**", "**DDL:**")
FOREIGN_KEYS_LABEL = "**Foreign Keys:**"

PRIMARY_KEY_RE = re.compile(r"\*\*Primary Key:\*\*\s*`([^`]+)`")
FOREIGN_KEY_LINE_RE = re.compile(r"\s*`([^`]+)`\s*→\s*`([^`]+)\.([^`]+)`")

PK_MARKER = "🔑"
FK_MARKER = "🔗"
MIN_COLUMN_CELLS = 7
# 구분선 행: 파이프, 대시, 콜론, 공백만으로 구성
SEPARATOR_RE = re.compile(r"^\s*\|?[\s:|-]*-[\s:|-]*\|?\s*$")

SUMMARY_PATTERNS = {
    "total_tables": re.compile(r"\*\*Total Tables:\*\*\s*(\d+)"),
    "total_views": re.compile(r"\*\*Total Views:\*\*\s*(\d+)"),
    "total_functions": re.compile(r"\*\*Total Functions:\*\*\s*(\d+)"),
    "total_triggers": re.compile(r"\*\*Total Triggers:\*\*\s*(\d+)"),
    "total_indexes": re.compile(r"\*\*Total Indexes:\*\*\s*(\d+)"),
    "total_relationships": re.compile(r"\*\*Total Relationships:\*\*\s*(\d+)"),
}

# 컬럼 표 상태
SEEK_COLUMNS = "seek_columns"
SEEK_HEADER = "seek_header"
ROWS = "rows"


@dataclass(frozen=True)
class ParsedSchemaFile:
    model: SchemaModel
    path: Path
    last_modified: datetime


def split_sections(content: str) -> list[str]:
    """섹션 마커 기준으로 문서를 나눈다. 각 섹션은 마커 바로 뒤 텍스트부터 시작."""
    starts = [m.end() for m in SECTION_RE.finditer(content)]
    ends = [m.start() for m in SECTION_RE.finditer(content)][1:] + [len(content)]
    return [content[s:e] for s, e in zip(starts, ends)]


def parse_column_row(row: str) -> Column | None:
    # 앞뒤 공백과 파이프 제거 후 셀 분리
    clean = row.strip()
    if clean.startswith("|"):
        clean = clean[1:]
    if clean.endswith("|"):
        clean = clean[:-1]
    cells = [c.strip() for c in clean.split("|")]

    if len(cells) < MIN_COLUMN_CELLS:
        logger.warning("Dropping column row with %d cells (need %d): %s", len(cells), MIN_COLUMN_CELLS, row.strip())
        return None

    name, db_type, nullable, default, primary, foreign = cells[:6]
    return Column(
        name=name.replace("`", ""),
        db_type=db_type.replace("`", ""),
        nullable=nullable.lower() == "yes",
        default=default if default != "" else None,
        pk=PK_MARKER in primary,
        fk=FK_MARKER in foreign,
    )


def extract_columns(section: str) -> list[Column]:
    columns: list[Column] = []
    state = SEEK_COLUMNS

    for line in section.split("\n"):
        if state == SEEK_COLUMNS:
            if COLUMNS_LABEL in line:
                state = SEEK_HEADER
            continue

        if state == SEEK_HEADER:
            if "|" in line and "Column" in line and "Type" in line:
                state = ROWS
            continue

        # ROWS
        if any(label in line for label in STOP_LABELS):
            break
        if "|" not in line or SEPARATOR_RE.match(line):
            continue
        try:
            col = parse_column_row(line)
        except Exception as e:
            logger.warning("Could not parse column row %r: %s", line.strip(), e)
            continue
        if col is not None:
            columns.append(col)

    logger.debug("Found %d columns", len(columns))
    return columns


def extract_primary_key(section: str) -> str | None:
    m = PRIMARY_KEY_RE.search(section)
    return m.group(1) if m else None


def extract_foreign_keys(section: str) -> list[ForeignKey]:
    lines = section.split("\n")
    start = next((i for i, line in enumerate(lines) if FOREIGN_KEYS_LABEL in line), None)
    if start is None:
        return []

    fks: list[ForeignKey] = []
    for line in lines[start + 1:]:
        stripped = line.lstrip()
        # 다음 라벨/헤딩에서 종료
        if stripped.startswith("**") or stripped.startswith("#"):
            break
        m = FOREIGN_KEY_LINE_RE.search(line)
        if m:
            fks.append(ForeignKey(column=m.group(1), ref_table=m.group(2), ref_column=m.group(3)))
    return fks


def parse_table_section(section: str) -> Table | None:
    m = TABLE_NAME_RE.match(section)
    if not m:
        return None
    return Table(
        name=m.group(1).strip(),
        columns=tuple(extract_columns(section)),
        primary_key=extract_primary_key(section),
        foreign_keys=tuple(extract_foreign_keys(section)),
    )


def extract_summary(content: str) -> Summary:
    found = {}
    for key, pattern in SUMMARY_PATTERNS.items():
        m = pattern.search(content)
        if m:
            found[key] = int(m.group(1))
    return Summary(**found)


class MarkdownSchemaParser(Parser):
    def can_parse(self, path: Path, text: str) -> bool:
        return path.suffix.lower() == ".md" and bool(SECTION_RE.search(text))

    def parse(self, text: str) -> SchemaModel:
        return SchemaModel(
            tables=tuple(self.extract_tables(text)),
            relationships=self.extract_relationships(text),
            indexes=self.extract_indexes(text),
            summary=extract_summary(text),
            views=self.extract_views(text),
            functions=self.extract_functions(text),
            triggers=self.extract_triggers(text),
        )

    def extract_tables(self, content: str) -> list[Table]:
        tables: dict[str, Table] = {}
        for i, section in enumerate(split_sections(content), start=1):
            try:
                table = parse_table_section(section)
            except Exception as e:
                logger.warning("Could not parse table section %d: %s", i, e)
                continue
            if table is None:
                logger.warning("Skipping table section %d: no closing backtick after table name", i)
                continue
            if table.name in tables:
                # 먼저 나온 정의 우선
                logger.debug("Duplicate table section %d for %s ignored", i, table.name)
                continue
            tables[table.name] = table

        logger.info("Parsed %d unique tables from markdown", len(tables))
        return list(tables.values())

    # 아래 추출 지점들은 의도적으로 비워둠 (항상 빈 tuple)
    def extract_views(self, content: str) -> tuple:
        return ()

    def extract_functions(self, content: str) -> tuple:
        return ()

    def extract_triggers(self, content: str) -> tuple:
        return ()

    def extract_indexes(self, content: str) -> tuple:
        return ()

    def extract_relationships(self, content: str) -> tuple:
        return ()


def parse_schema_markdown(text: str) -> SchemaModel:
    return MarkdownSchemaParser().parse(text)


def parse_schema_file(path: Path) -> ParsedSchemaFile:
    path = Path(path)
    logger.info("Parsing schema file: %s", path)
    text = path.read_text(encoding="utf-8", errors="ignore")
    model = parse_schema_markdown(text)
    return ParsedSchemaFile(
        model=model,
        path=path,
        last_modified=datetime.fromtimestamp(path.stat().st_mtime),
    )
