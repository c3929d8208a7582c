from __future__ import annotations
from pathlib import Path
import logging
import time

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from schema_erd.commands.diagram import run_diagram, EmptySchemaError

logger = logging.getLogger(__name__)

class Handler(FileSystemEventHandler):
    def __init__(self, schema_file: Path, fmt: str, out_dir: Path | None, derive_relationships: bool):
        self.schema_file = schema_file.resolve()
        self.fmt = fmt
        self.out_dir = out_dir
        self.derive_relationships = derive_relationships
        self._last = 0.0

    def on_any_event(self, event):
        if event.is_directory:
            return
        # 임시 파일 저장 후 rename 하는 에디터는 moved 이벤트의 dest_path 로 들어옴
        paths = [event.src_path, getattr(event, "dest_path", None)]
        if not any(p and Path(p).resolve() == self.schema_file for p in paths):
            return

        # 저장 시 여러 이벤트가 연달아 오므로 간단 debounce
        now = time.time()
        if now - self._last < 0.8:
            return
        self._last = now

        try:
            run_diagram(self.schema_file, self.fmt, out_dir=self.out_dir, derive_relationships=self.derive_relationships)
        except EmptySchemaError as e:
            logger.warning("%s", e)
        except OSError as e:
            # 삭제 후 재생성 저장 중에는 파일이 잠시 없을 수 있음
            logger.warning("Could not re-render %s: %s", self.schema_file, e)

def watch(schema_file: Path, fmt: str, out_dir: Path | None = None, derive_relationships: bool = False) -> None:
    handler = Handler(schema_file, fmt, out_dir, derive_relationships)
    obs = Observer()
    obs.schedule(handler, str(schema_file.resolve().parent), recursive=False)
    obs.start()
    try:
        while True:
            time.sleep(1)
    finally:
        obs.stop()
        obs.join()
