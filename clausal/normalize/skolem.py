from __future__ import annotations
from typing import List
from ..fol.ast import Var, Func, Forall, Formula
from .names import NameContext
from .prenex import split_prefix
from .substitute import Substitution, substitute

SKOLEM_CONSTANT_PREFIX = "c"
SKOLEM_FUNCTION_PREFIX = "f"


def skolemize(phi: Formula, names: NameContext) -> Formula:
    """Drop the quantifier prefix of a prenex formula, replacing existentials.

    An existential with no universal before it becomes a fresh constant c<n>;
    otherwise a fresh function f<n> over every universal seen so far, in order.
    The universals stay as free variables of the returned matrix.
    """
    prefix, matrix = split_prefix(phi)
    universals: List[str] = []
    sub: Substitution = {}
    for node, var in prefix:
        if node is Forall:
            universals.append(var)
        elif not universals:
            sub[var] = Func(names.fresh_skolem(SKOLEM_CONSTANT_PREFIX))
        else:
            sub[var] = Func(names.fresh_skolem(SKOLEM_FUNCTION_PREFIX), tuple(Var(u) for u in universals))
    return substitute(matrix, sub)
