from __future__ import annotations
from typing import Any, List, Tuple, Type, Union
from ..fol.ast import Pred, Not, And, Or, Forall, Exists, Formula, fold
from ..errors import TransformationError

Quantifier = Tuple[Type[Union[Forall, Exists]], str]
Prefix = List[Quantifier]


def pull_quantifiers(phi: Formula) -> Tuple[Prefix, Formula]:
    """Split a renamed NNF formula into its quantifier list and a quantifier-free matrix.

    Binders keep their left-to-right order of appearance; the left operand's
    binders come before the right operand's.
    """
    return fold(phi, _pull)


def _pull(phi: Formula, args: List[Tuple[Prefix, Formula]], _: Any) -> Tuple[Prefix, Formula]:
    if isinstance(phi, (Forall, Exists)):
        prefix, matrix = args[0]
        return [(type(phi), phi.var)] + prefix, matrix
    if isinstance(phi, (And, Or)):
        (lq, lm), (rq, rm) = args
        return lq + rq, type(phi)(lm, rm)
    if isinstance(phi, Not):
        # unreachable for NNF input, where negation only wraps atoms
        prefix, matrix = args[0]
        return prefix, Not(matrix)
    if isinstance(phi, Pred):
        return [], phi
    raise TransformationError("to_prenex", f"{type(phi).__name__} node left in formula")


def build_prenex(prefix: Prefix, matrix: Formula) -> Formula:
    phi = matrix
    for node, var in reversed(prefix):
        phi = node(var, phi)
    return phi


def split_prefix(phi: Formula) -> Tuple[Prefix, Formula]:
    """Peel the leading quantifiers off a prenex formula."""
    prefix: Prefix = []
    while isinstance(phi, (Forall, Exists)):
        prefix.append((type(phi), phi.var))
        phi = phi.body
    return prefix, phi


def to_prenex(phi: Formula) -> Formula:
    return build_prenex(*pull_quantifiers(phi))
