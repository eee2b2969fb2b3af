from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
from ..fol.clauses import Clause

FACT = "fact"
RULE = "rule"
GOAL = "goal"
NOT_HORN = "not-horn"
KINDS = (FACT, RULE, GOAL, NOT_HORN)


def count_polarity(clause: Clause) -> Tuple[int, int]:
    pos = sum(1 for l in clause if l.positive)
    return pos, len(clause) - pos


def is_horn(clause: Clause) -> bool:
    return count_polarity(clause)[0] <= 1


def classify_clause(clause: Clause) -> str:
    """fact: one positive literal alone; rule: one positive with negatives;
    goal: no positive literal; anything with two or more positives is not Horn."""
    pos, neg = count_polarity(clause)
    if pos == 0:
        return GOAL
    if pos == 1:
        return FACT if neg == 0 else RULE
    return NOT_HORN


@dataclass
class HornReport:
    kinds: List[str] = field(default_factory=list)

    @property
    def all_horn(self) -> bool:
        return all(k != NOT_HORN for k in self.kinds)


def classify_clauses(clauses: List[Clause]) -> HornReport:
    return HornReport(kinds=[classify_clause(c) for c in clauses])
