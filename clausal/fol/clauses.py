from __future__ import annotations
from dataclasses import dataclass
from typing import List, Type, Union
from .ast import Pred, Not, And, Or, Formula
from ..errors import TransformationError


@dataclass(frozen=True)
class Literal:
    positive: bool
    atom: Pred


Clause = List[Literal]


def _flatten(phi: Formula, node: Type[Union[And, Or]]) -> List[Formula]:
    """Operands of a nested ``node`` chain, left to right, whatever the nesting."""
    out: List[Formula] = []
    stack = [phi]
    while stack:
        f = stack.pop()
        if isinstance(f, node):
            stack.extend((f.right, f.left))
        else:
            out.append(f)
    return out


def _literal(phi: Formula) -> Literal:
    if isinstance(phi, Pred):
        return Literal(True, phi)
    if isinstance(phi, Not) and isinstance(phi.sub, Pred):
        return Literal(False, phi.sub)
    raise TransformationError("extract_clauses", f"{type(phi).__name__} node inside a clause is not a literal")


def extract_clauses(cnf: Formula) -> List[Clause]:
    return [[_literal(l) for l in _flatten(c, Or)] for c in _flatten(cnf, And)]
