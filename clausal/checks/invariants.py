# clausal/checks/invariants.py
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List
from ..fol.ast import Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, subformulas, function_symbols

@dataclass
class Issue:
    code: str         # e.g., "NEGATED_CONNECTIVE", "DUPLICATE_BINDER"
    path: str         # stage key the issue was found after (e.g., "nnf")
    message: str
    severity: str = "error"

def _binders(phi: Formula) -> List[str]:
    return [f.var for f in subformulas(phi) if isinstance(f, (Forall, Exists))]

def check_no_implications(phi: Formula, path: str = "no_implications") -> List[Issue]:
    found = [f for f in subformulas(phi) if isinstance(f, (Implies, Iff))]
    if found:
        return [Issue("IMPLICATION_LEFT", path, f"{len(found)} implication/biconditional node(s) remain")]
    return []

def check_nnf(phi: Formula, path: str = "nnf") -> List[Issue]:
    issues: List[Issue] = []
    for f in subformulas(phi):
        if isinstance(f, Not) and not isinstance(f.sub, Pred):
            issues.append(Issue("NEGATED_CONNECTIVE", path, f"negation wraps a {type(f.sub).__name__} node"))
    return issues + check_no_implications(phi, path)

def check_unique_binders(phi: Formula, path: str = "renamed") -> List[Issue]:
    dup = [v for v, n in Counter(_binders(phi)).items() if n > 1]
    return [Issue("DUPLICATE_BINDER", path, f"variable {v!r} is bound more than once") for v in sorted(dup)]

def check_prenex(phi: Formula, path: str = "prenex") -> List[Issue]:
    while isinstance(phi, (Forall, Exists)):
        phi = phi.body
    if any(isinstance(f, (Forall, Exists)) for f in subformulas(phi)):
        return [Issue("QUANTIFIER_IN_MATRIX", path, "quantifier found below the prefix")]
    return []

def check_skolemized(phi: Formula, user_symbols: Iterable[str], path: str = "skolem") -> List[Issue]:
    issues: List[Issue] = []
    if any(isinstance(f, (Forall, Exists)) for f in subformulas(phi)):
        issues.append(Issue("QUANTIFIER_LEFT", path, "quantifier node remains after Skolemization"))
    clash = sorted(set(function_symbols(phi)) & set(user_symbols))
    for name in clash:
        issues.append(Issue("SKOLEM_CLASH", path, f"Skolem symbol {name!r} also appears in the input"))
    return issues

def check_cnf(phi: Formula, path: str = "cnf") -> List[Issue]:
    for f in subformulas(phi):
        if isinstance(f, Or) and (isinstance(f.left, And) or isinstance(f.right, And)):
            return [Issue("CONJUNCTION_UNDER_DISJUNCTION", path, "a disjunction has a conjunction operand")]
    return []

def check_dnf(phi: Formula, path: str = "dnf") -> List[Issue]:
    for f in subformulas(phi):
        if isinstance(f, And) and (isinstance(f.left, Or) or isinstance(f.right, Or)):
            return [Issue("DISJUNCTION_UNDER_CONJUNCTION", path, "a conjunction has a disjunction operand")]
    return []
