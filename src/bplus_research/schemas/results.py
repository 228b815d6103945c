"""Pydantic schemas for aggregated search output.

Defines ResultItem and ResultSet.
"""

from pydantic import BaseModel, Field
from typing import Dict, List


class ResultItem(BaseModel):
    source: str
    title: str = ""
    url: str = ""
    content: str = ""


class ResultSet(BaseModel):
    query: str = ""
    results: List[ResultItem] = Field(default_factory=list)
    failures: Dict[str, str] = Field(default_factory=dict)
    succeeded: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.results
