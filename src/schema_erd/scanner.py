from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
import time

@dataclass
class SchemaFileAvailability:
    available: bool
    path: Path | None = None
    age_hours: float | None = None

@dataclass
class SchemaFileInfo:
    path: Path
    size: int
    last_modified: datetime

def find_schema_files(root: Path, prefix: str = "postgres-schema-", suffix: str = ".md") -> list[Path]:
    root = Path(root)
    if not root.is_dir():
        return []
    return [f for f in root.iterdir() if f.is_file() and f.name.startswith(prefix) and f.name.endswith(suffix)]

def find_latest_schema_file(root: Path, prefix: str = "postgres-schema-", suffix: str = ".md") -> Path | None:
    """
    root 바로 아래의 스키마 마크다운 중 가장 최근에 수정된 파일.
    없으면 None.
    """
    files = find_schema_files(root, prefix, suffix)
    if not files:
        return None
    return max(files, key=lambda f: f.stat().st_mtime)

def schema_file_availability(
    root: Path,
    max_age_hours: float = 24,
    prefix: str = "postgres-schema-",
) -> SchemaFileAvailability:
    latest = find_latest_schema_file(root, prefix)
    if latest is None:
        return SchemaFileAvailability(available=False)

    age_hours = (time.time() - latest.stat().st_mtime) / 3600
    return SchemaFileAvailability(
        available=age_hours <= max_age_hours,
        path=latest,
        age_hours=age_hours,
    )

def latest_schema_file_info(root: Path, prefix: str = "postgres-schema-") -> SchemaFileInfo | None:
    latest = find_latest_schema_file(root, prefix)
    if latest is None:
        return None
    st = latest.stat()
    return SchemaFileInfo(path=latest, size=st.st_size, last_modified=datetime.fromtimestamp(st.st_mtime))
