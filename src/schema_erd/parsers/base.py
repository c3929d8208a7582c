from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from schema_erd.model import SchemaModel

class Parser(ABC):
    @abstractmethod
    def can_parse(self, path: Path, text: str) -> bool: ...
    @abstractmethod
    def parse(self, text: str) -> SchemaModel: ...
