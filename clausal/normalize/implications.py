from __future__ import annotations
from typing import Any, List
from ..fol.ast import Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, fold
from ..errors import TransformationError


def _eliminate(phi: Formula, args: List[Formula], _: Any) -> Formula:
    if isinstance(phi, Implies):
        return Or(Not(args[0]), args[1])
    if isinstance(phi, Iff):
        left, right = args
        return And(Or(Not(left), right), Or(Not(right), left))
    if isinstance(phi, (And, Or)):
        return type(phi)(*args)
    if isinstance(phi, Not):
        return Not(args[0])
    if isinstance(phi, (Forall, Exists)):
        return type(phi)(phi.var, args[0])
    if isinstance(phi, Pred):
        return phi
    raise TransformationError("eliminate_implications", f"unknown node {type(phi).__name__}")


def eliminate_implications(phi: Formula) -> Formula:
    """Rewrite A -> B as ~A | B and A <-> B as (A -> B) & (B -> A), everywhere."""
    return fold(phi, _eliminate)
