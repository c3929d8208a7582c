from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel

class DiagramFormat(str, Enum):
    MERMAID = "mermaid"
    PLANTUML = "plantuml"
    DBML = "dbml"
    JSON = "json"

class DiagramOptions(BaseModel):
    # 필수. 자유 문자열로 받고 render() 에서 검증 (지원하지 않으면 UnsupportedFormatError)
    format: str
    include_indexes: bool = True
    include_constraints: bool = True
    include_data_types: bool = True
    include_cardinality: bool = True
    include_descriptions: bool = False
    diagram_style: Literal["detailed", "simplified", "minimal"] = "detailed"
    output_path: Optional[Path] = None
