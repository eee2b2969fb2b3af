from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Set, Tuple, Union


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class Func:
    """Function application. With no arguments it is a constant."""
    name: str
    args: Tuple["Term", ...] = ()


Term = Union[Var, Func]


@dataclass(frozen=True)
class Pred:
    name: str
    args: Tuple[Term, ...] = ()


@dataclass(frozen=True)
class Not:
    sub: "Formula"


@dataclass(frozen=True)
class And:
    left: "Formula"
    right: "Formula"


@dataclass(frozen=True)
class Or:
    left: "Formula"
    right: "Formula"


@dataclass(frozen=True)
class Implies:
    left: "Formula"
    right: "Formula"


@dataclass(frozen=True)
class Iff:
    left: "Formula"
    right: "Formula"


@dataclass(frozen=True)
class Forall:
    var: str
    body: "Formula"


@dataclass(frozen=True)
class Exists:
    var: str
    body: "Formula"


Formula = Union[Pred, Not, And, Or, Implies, Iff, Forall, Exists]

BINARY = (And, Or, Implies, Iff)
QUANTIFIERS = (Forall, Exists)


def is_literal(phi: Formula) -> bool:
    return isinstance(phi, Pred) or (isinstance(phi, Not) and isinstance(phi.sub, Pred))


def _term_symbols(t: Term, out: Set[str]) -> None:
    out.add(t.name)
    if isinstance(t, Func):
        for a in t.args:
            _term_symbols(a, out)


def symbols(phi: Formula) -> Set[str]:
    """Every identifier in a formula: predicates, functions, free and bound variables."""
    out: Set[str] = set()
    stack: List[Formula] = [phi]
    while stack:
        f = stack.pop()
        if isinstance(f, Pred):
            out.add(f.name)
            for t in f.args:
                _term_symbols(t, out)
        elif isinstance(f, Not):
            stack.append(f.sub)
        elif isinstance(f, BINARY):
            stack.extend((f.left, f.right))
        elif isinstance(f, QUANTIFIERS):
            out.add(f.var)
            stack.append(f.body)
    return out


def subformulas(phi: Formula) -> List[Formula]:
    """Pre-order listing of every node in the tree."""
    out: List[Formula] = []
    stack: List[Formula] = [phi]
    while stack:
        f = stack.pop()
        out.append(f)
        if isinstance(f, Not):
            stack.append(f.sub)
        elif isinstance(f, BINARY):
            stack.extend((f.right, f.left))
        elif isinstance(f, QUANTIFIERS):
            stack.append(f.body)
    return out


def function_symbols(phi: Formula) -> List[str]:
    """Names of function terms (Skolem symbols) in order of first occurrence."""
    seen: List[str] = []
    def walk(t: Term) -> None:
        if isinstance(t, Func):
            if t.name not in seen:
                seen.append(t.name)
            for a in t.args:
                walk(a)
    for f in subformulas(phi):
        if isinstance(f, Pred):
            for t in f.args:
                walk(t)
    return seen


def children(phi: Formula) -> Tuple[Formula, ...]:
    if isinstance(phi, Not):
        return (phi.sub,)
    if isinstance(phi, BINARY):
        return (phi.left, phi.right)
    if isinstance(phi, QUANTIFIERS):
        return (phi.body,)
    return ()


Visit = Callable[[Formula, List[Any], Any], Any]


def fold(phi: Formula, visit: Visit, *, enter: Optional[Callable[[Formula, Any], Any]] = None,
         context: Any = None, kids: Callable[[Formula], Tuple[Formula, ...]] = children) -> Any:
    """Bottom-up walk over an explicit stack, so nesting depth is not limited by recursion.

    ``visit(node, results, context)`` receives the results already computed for
    the node's children, left to right. ``enter(node, context)`` runs in
    pre-order, left to right, on every node that has children and returns the
    context its children see; ``visit`` gets that same context for the node.
    ``kids`` decides what counts as a child.
    """
    results: List[Any] = []
    stack: List[Tuple[Formula, Any, bool]] = [(phi, context, False)]
    while stack:
        f, ctx, entered = stack.pop()
        sub = kids(f)
        if entered or not sub:
            n = len(sub)
            args = results[len(results) - n:]
            del results[len(results) - n:]
            results.append(visit(f, args, ctx))
            continue
        inner = enter(f, ctx) if enter else ctx
        stack.append((f, inner, True))
        stack.extend((k, inner, False) for k in reversed(sub))
    return results[0]
