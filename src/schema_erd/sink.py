from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Protocol
import logging

logger = logging.getLogger(__name__)

class OutputSink(Protocol):
    def write(self, text: str, filename: str) -> Path: ...

def timestamped_name(stem: str, ext: str, now: datetime) -> str:
    # 2026-10-19T02:43:00.123 -> 2026-10-19T02-43-00
    stamp = now.isoformat().replace(":", "-").replace(".", "-")[:19]
    return f"{stem}-{stamp}.{ext}"

class DirectorySink:
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def write(self, text: str, filename: str) -> Path:
        out_path = self.directory / filename
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", out_path)
        return out_path

class DualLocationSink:
    """
    같은 내용을 중앙 보관 위치(<central>/<subdir>/)와 프로젝트 위치 두 곳에 기록.
    반환값은 프로젝트 쪽 경로.
    """

    def __init__(self, central_dir: Path, project_dir: Path, subdir: str = "diagrams"):
        self.central = DirectorySink(Path(central_dir) / subdir if subdir else Path(central_dir))
        self.project = DirectorySink(project_dir)

    def write(self, text: str, filename: str) -> Path:
        self.central.write(text, filename)
        return self.project.write(text, filename)
