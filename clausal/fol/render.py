from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Union
from .ast import Var, Func, Term, Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, BINARY, QUANTIFIERS, children, fold
from .clauses import Clause
from ..errors import TransformationError


@dataclass(frozen=True)
class Notation:
    name: str
    neg: str
    conj: str
    disj: str
    implies: str
    iff: str
    forall: str
    exists: str
    quant_sep: str
    arg_sep: str
    empty_clause: str
    empty_set: str
    line_sep: str


LATEX = Notation(
    name="latex",
    neg="\\lnot ", conj=" \\land ", disj=" \\lor ",
    implies=" \\rightarrow ", iff=" \\leftrightarrow ",
    forall="\\forall ", exists="\\exists ", quant_sep=" \\, ",
    arg_sep=",",
    empty_clause="\\text{empty clause}", empty_set="\\text{empty set}",
    line_sep=" \\\\ ",
)

TEXT = Notation(
    name="text",
    neg="¬", conj=" ∧ ", disj=" ∨ ",
    implies=" → ", iff=" ↔ ",
    forall="∀", exists="∃", quant_sep=". ",
    arg_sep=", ",
    empty_clause="□", empty_set="∅",
    line_sep="\n",
)

NOTATIONS = {n.name: n for n in (LATEX, TEXT)}


def notation(name: Union[str, Notation]) -> Notation:
    if isinstance(name, Notation):
        return name
    try:
        return NOTATIONS[name]
    except KeyError:
        raise ValueError(f"unknown notation {name!r}; expected one of {sorted(NOTATIONS)}")


def term(t: Term, n: Notation = LATEX) -> str:
    if isinstance(t, Var):
        return t.name
    if isinstance(t, Func):
        if not t.args:
            return t.name
        return t.name + "(" + n.arg_sep.join(term(a, n) for a in t.args) + ")"
    raise TransformationError("render", f"unknown term {type(t).__name__}")


def formula(phi: Formula, n: Notation = LATEX) -> str:
    infix = {And: n.conj, Or: n.disj, Implies: n.implies, Iff: n.iff}
    binder = {Forall: n.forall, Exists: n.exists}

    def visit(f: Formula, args: List[str], _: Any) -> str:
        # prefix forms (negation, quantifiers, atoms) delimit themselves
        shown = [f"({s})" if isinstance(k, BINARY) else s for k, s in zip(children(f), args)]
        if isinstance(f, Pred):
            if not f.args:
                return f.name
            return f.name + "(" + n.arg_sep.join(term(t, n) for t in f.args) + ")"
        if isinstance(f, Not):
            return n.neg + shown[0]
        if isinstance(f, BINARY):
            return shown[0] + infix[type(f)] + shown[1]
        if isinstance(f, QUANTIFIERS):
            return binder[type(f)] + f.var + n.quant_sep + shown[0]
        raise TransformationError("render", f"unknown node {type(f).__name__}")

    return fold(phi, visit)


def clause(c: Clause, n: Notation = LATEX) -> str:
    if not c:
        return n.empty_clause
    return n.disj.join(formula(l.atom, n) if l.positive else n.neg + formula(l.atom, n) for l in c)


def clauses(cs: List[Clause], n: Notation = LATEX) -> str:
    if not cs:
        return n.empty_set
    return n.conj.join(f"({clause(c, n)})" for c in cs)


def message(text: str, n: Notation = LATEX) -> str:
    """Plain prose inside the markup (errors, verdicts)."""
    if n is not LATEX:
        return text
    escaped = text.replace("\\", "\\textbackslash ")
    for ch in "{}_#%&$":
        escaped = escaped.replace(ch, "\\" + ch)
    escaped = escaped.replace("~", "\\textasciitilde ").replace("^", "\\textasciicircum ")
    return "\\text{" + escaped + "}"


def horn_table(cs: List[Clause], kinds: List[str], n: Notation = LATEX) -> str:
    rows = []
    for i, (c, kind) in enumerate(zip(cs, kinds), 1):
        label = f"C_{{{i}}}" if n is LATEX else f"C{i}"
        rows.append(f"{label}: ({clause(c, n)}){n.implies}{message(kind, n)}")
    return n.line_sep.join(rows)


def to_latex(phi: Formula) -> str:
    return formula(phi, LATEX)


def to_text(phi: Formula) -> str:
    return formula(phi, TEXT)
