from __future__ import annotations
from typing import List, Optional, Literal
from pydantic import BaseModel, Field

ClauseKind = Literal["fact", "rule", "goal", "not-horn"]

class Step(BaseModel):
    key: str
    label: str
    rendered: str
    error: bool = False

class LexWarning(BaseModel):
    char: str
    offset: int
    message: str

class LiteralOut(BaseModel):
    positive: bool
    atom: str

class ClauseOut(BaseModel):
    index: int
    literals: List[LiteralOut] = Field(default_factory=list)
    kind: ClauseKind
    horn: bool
    rendered: str

class RunResult(BaseModel):
    version: str
    source_text: str
    notation: Literal["latex", "text"] = "latex"
    ok: bool = True
    steps: List[Step] = Field(default_factory=list)
    warnings: List[LexWarning] = Field(default_factory=list)
    clauses: List[ClauseOut] = Field(default_factory=list)
    all_horn: Optional[bool] = None
    tptp: List[str] = Field(default_factory=list)
    report_md: str = ""

    def step(self, key: str) -> Optional[Step]:
        for s in self.steps:
            if s.key == key:
                return s
        return None

    @property
    def error(self) -> Optional[Step]:
        return next((s for s in self.steps if s.error), None)
