from __future__ import annotations
from dataclasses import dataclass, field
from typing import Set
from ..fol.ast import Formula, symbols


@dataclass
class NameContext:
    """Fresh-name source for one formula-to-clauses run.

    Holds the two counters (renamed bound variables, Skolem symbols) and every
    identifier already taken, so generated names never collide with names
    written in the input or handed out earlier in the run.
    """
    taken: Set[str] = field(default_factory=set)
    rename_count: int = 0
    skolem_count: int = 0

    @classmethod
    def for_formula(cls, phi: Formula) -> "NameContext":
        return cls(taken=symbols(phi))

    def fresh_variable(self, base: str) -> str:
        while True:
            self.rename_count += 1
            name = f"{base}_{self.rename_count}"
            if name not in self.taken:
                self.taken.add(name)
                return name

    def fresh_skolem(self, prefix: str) -> str:
        while True:
            self.skolem_count += 1
            name = f"{prefix}{self.skolem_count}"
            if name not in self.taken:
                self.taken.add(name)
                return name
