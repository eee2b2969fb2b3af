from __future__ import annotations
from typing import Dict, List
from ..fol.ast import Var, Func, Term, Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, fold
from ..errors import TransformationError

Substitution = Dict[str, Term]


def substitute_term(t: Term, sub: Substitution) -> Term:
    if isinstance(t, Var):
        return sub.get(t.name, t)
    if isinstance(t, Func):
        return Func(t.name, tuple(substitute_term(a, sub) for a in t.args))
    raise TransformationError("substitute", f"unknown term {type(t).__name__}")


def _hide_rebound(phi: Formula, sub: Substitution) -> Substitution:
    if isinstance(phi, (Forall, Exists)) and phi.var in sub:
        return {k: v for k, v in sub.items() if k != phi.var}
    return sub


def _rebuild(phi: Formula, args: List[Formula], sub: Substitution) -> Formula:
    if isinstance(phi, Pred):
        if not sub:
            return phi
        return Pred(phi.name, tuple(substitute_term(t, sub) for t in phi.args))
    if isinstance(phi, Not):
        return Not(args[0])
    if isinstance(phi, (And, Or, Implies, Iff)):
        return type(phi)(*args)
    if isinstance(phi, (Forall, Exists)):
        return type(phi)(phi.var, args[0])
    raise TransformationError("substitute", f"unknown node {type(phi).__name__}")


def substitute(phi: Formula, sub: Substitution) -> Formula:
    """Replace free variable occurrences according to ``sub``.

    A quantifier rebinding a mapped name hides it from its body.
    """
    if not sub:
        return phi
    return fold(phi, _rebuild, enter=_hide_rebound, context=sub)
