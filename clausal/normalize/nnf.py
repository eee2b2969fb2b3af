from __future__ import annotations
from typing import Any, List, Tuple
from ..fol.ast import Pred, Not, And, Or, Forall, Exists, Formula, fold
from ..errors import TransformationError

_DUAL = {And: Or, Or: And, Forall: Exists, Exists: Forall}

Polarities = Tuple[Formula, Formula]


def to_nnf(phi: Formula) -> Formula:
    """Push negations down to the atoms. Expects implications already eliminated."""
    return fold(phi, _nnf)[0]


def _nnf(phi: Formula, args: List[Polarities], _: Any) -> Polarities:
    # (NNF of phi, NNF of ~phi), built from the same pair for each child
    if isinstance(phi, Pred):
        return phi, Not(phi)
    if isinstance(phi, Not):
        pos, neg = args[0]
        return neg, pos
    if isinstance(phi, (And, Or)):
        (lp, ln), (rp, rn) = args
        return type(phi)(lp, rp), _DUAL[type(phi)](ln, rn)
    if isinstance(phi, (Forall, Exists)):
        pos, neg = args[0]
        return type(phi)(phi.var, pos), _DUAL[type(phi)](phi.var, neg)
    raise TransformationError("to_nnf", f"{type(phi).__name__} node left in formula; eliminate implications first")
