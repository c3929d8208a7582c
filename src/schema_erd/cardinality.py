from __future__ import annotations
from typing import NamedTuple
from schema_erd.model import Relationship

ONE_TO_MANY = "||--o{"

class Cardinality(NamedTuple):
    source: str
    target: str

def determine_cardinality(relationship: Relationship) -> Cardinality:
    # 실제 유일성 제약/데이터를 보지 않고 항상 one-to-many 로 표기
    return Cardinality(source=ONE_TO_MANY, target=ONE_TO_MANY)
