from __future__ import annotations
from typing import Any, Callable, List, Type, Union
from ..fol.ast import Pred, Not, And, Or, Formula, fold
from ..errors import TransformationError

Connective = Type[Union[And, Or]]


def to_cnf(phi: Formula) -> Formula:
    """Distribute | over & until no disjunction has a conjunction below it."""
    return _distribute(phi, And, Or, "to_cnf")


def to_dnf(phi: Formula) -> Formula:
    """Distribute & over | until no conjunction has a disjunction below it."""
    return _distribute(phi, Or, And, "to_dnf")


def _graft(phi: Formula, node: Connective, leaf: Callable[[Formula], Formula]) -> Formula:
    """Rebuild the ``node`` skeleton of ``phi`` with each operand below it replaced by ``leaf(operand)``."""
    return fold(phi, lambda f, args, _: node(*args) if isinstance(f, node) else leaf(f),
                kids=lambda f: (f.left, f.right) if isinstance(f, node) else ())


def _distribute(phi: Formula, outer: Connective, inner: Connective, stage: str) -> Formula:
    # No subsumption or deduplication: the result can grow exponentially.
    def visit(f: Formula, args: List[Formula], _: Any) -> Formula:
        if isinstance(f, outer):
            return outer(*args)
        if isinstance(f, inner):
            a, b = args
            # both sides are already normal: pair every outer operand of a with every one of b
            return _graft(a, outer, lambda x: _graft(b, outer, lambda y: inner(x, y)))
        if isinstance(f, Not):
            return Not(args[0])
        if isinstance(f, Pred):
            return f
        raise TransformationError(stage, f"{type(f).__name__} node left in matrix")
    return fold(phi, visit)
