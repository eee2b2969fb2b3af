from __future__ import annotations
import re
from typing import List
from .ast import Var, Func, Term, Pred
from .clauses import Clause, Literal
def _san(s: str) -> str:
    s = re.sub(r'[^A-Za-z0-9_]', '_', s.strip()); return s or "x"
def _lower(n: str) -> str:
    if n[0].islower(): return n
    return n[0].lower()+n[1:] if n[0].isalpha() else "s"+n
def term(t: Term) -> str:
    if isinstance(t, Var):
        n=_san(t.name)
        if n[0].isupper(): return n
        return n[0].upper()+n[1:] if n[0].isalpha() else "V"+n
    n=_lower(_san(t.name))
    if isinstance(t, Func) and t.args:
        return f"{n}({','.join(term(a) for a in t.args)})"
    return n
def atom(a: Pred) -> str:
    pred=_lower(_san(a.name))
    args=",".join(term(t) for t in a.args)
    return f"{pred}({args})" if args else pred
def literal(l: Literal) -> str:
    return atom(l.atom) if l.positive else f"~{atom(l.atom)}"
def clause(c: Clause) -> str:
    if not c: return "$false"
    return " | ".join(literal(l) for l in c)
def cnf(name: str, role: str, c: Clause) -> str:
    return f"cnf({_san(name)}, {role}, ({clause(c)}))."
def clauses_to_tptp(cs: List[Clause], *, prefix: str = "c") -> List[str]:
    return [cnf(f"{prefix}{i}", "axiom", c) for i, c in enumerate(cs, 1)]
