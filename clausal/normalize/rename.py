from __future__ import annotations
from typing import List
from ..fol.ast import Var, Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, fold
from ..errors import TransformationError
from .names import NameContext
from .substitute import Substitution, substitute


def rename_bound_variables(phi: Formula, names: NameContext) -> Formula:
    """Give every quantifier its own variable (alpha-conversion).

    Each binder x becomes x_<n>, numbered in pre-order; its free occurrences in
    the body follow. An inner binder that reuses x shadows the outer one and
    gets a name of its own.
    """
    def enter(f: Formula, env: Substitution) -> Substitution:
        if isinstance(f, (Forall, Exists)):
            return {**env, f.var: Var(names.fresh_variable(f.var))}
        return env

    def visit(f: Formula, args: List[Formula], env: Substitution) -> Formula:
        if isinstance(f, (Forall, Exists)):
            return type(f)(env[f.var].name, args[0])
        if isinstance(f, (And, Or, Implies, Iff)):
            return type(f)(*args)
        if isinstance(f, Not):
            return Not(args[0])
        if isinstance(f, Pred):
            return substitute(f, env)
        raise TransformationError("rename_bound_variables", f"unknown node {type(f).__name__}")

    return fold(phi, visit, enter=enter, context={})
