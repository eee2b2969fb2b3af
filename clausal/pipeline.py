from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import clausal as _clausal_pkg
from .core.model import RunResult, Step, LexWarning, LiteralOut, ClauseOut
from .errors import ClausalError, TransformationError
from .settings import Settings
from .fol.ast import Formula, symbols
from .fol.lexer import scan
from .fol.parser import Parser
from .fol.clauses import Clause, extract_clauses
from .fol import render
from .fol.tptp import clauses_to_tptp
from .normalize.names import NameContext
from .normalize.implications import eliminate_implications
from .normalize.nnf import to_nnf
from .normalize.rename import rename_bound_variables
from .normalize.prenex import to_prenex
from .normalize.skolem import skolemize
from .normalize.distribute import to_cnf, to_dnf
from .checks.horn import classify_clauses, is_horn
from .checks import invariants
from .report.render import to_markdown

log = logging.getLogger(__name__)

LABELS: Dict[str, str] = {
    "original": "Original formula",
    "no_implications": "Eliminate → and ↔ (implications/equivalences)",
    "nnf": "NNF: negation normal form",
    "renamed": "Rename bound variables (alpha-conversion)",
    "prenex": "Prenex form (quantifiers in front)",
    "skolem": "Skolemization (replace ∃ by functions/constants)",
    "cnf": "CNF: conjunctive normal form",
    "clauses": "Clausal form (set of clauses)",
    "horn": "Horn clause analysis",
    "horn_summary": "Horn summary",
    "dnf": "DNF: disjunctive normal form (comparison)",
    "parse_error": "Parser error",
    "stage_error": "Transformation error",
}

@dataclass
class Outcome:
    """Either the value a stage produced or the error it raised."""
    value: Any = None
    error: Optional[ClausalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

def attempt(fn: Callable[..., Any], *args: Any) -> Outcome:
    try:
        return Outcome(value=fn(*args))
    except ClausalError as e:
        return Outcome(error=e)

def _verified(fn: Callable[[Formula], Formula], check: Optional[Callable[[Formula], List[invariants.Issue]]]) -> Callable[[Formula], Formula]:
    if check is None:
        return fn
    def run(phi: Formula) -> Formula:
        out = fn(phi)
        issues = check(out)
        if issues:
            first = issues[0]
            raise TransformationError(first.path, f"[{first.code}] {first.message}")
        return out
    return run

def parse_text(text: str, *, strict: bool = False) -> Tuple[Outcome, List[LexWarning]]:
    """Lex and parse, returning the outcome plus any characters the lexer skipped."""
    warnings: List[LexWarning] = []
    def _parse() -> Formula:
        tokens, skipped = scan(text, strict=strict)
        warnings.extend(LexWarning(char=s.char, offset=s.offset, message=s.message) for s in skipped)
        return Parser(tokens).parse()
    return attempt(_parse), warnings

def stage_chain(names: NameContext, user_symbols: set, check: bool) -> List[Tuple[str, Callable[[Formula], Formula]]]:
    """The formula-to-formula stages in order, keyed by step name."""
    chain = [
        ("no_implications", eliminate_implications, invariants.check_no_implications),
        ("nnf", to_nnf, invariants.check_nnf),
        ("renamed", lambda phi: rename_bound_variables(phi, names), invariants.check_unique_binders),
        ("prenex", to_prenex, invariants.check_prenex),
        ("skolem", lambda phi: skolemize(phi, names), lambda phi: invariants.check_skolemized(phi, user_symbols)),
        ("cnf", to_cnf, invariants.check_cnf),
    ]
    return [(key, _verified(fn, chk if check else None)) for key, fn, chk in chain]

def _clause_models(clauses: List[Clause], kinds: List[str], n: render.Notation) -> List[ClauseOut]:
    return [
        ClauseOut(
            index=i,
            literals=[LiteralOut(positive=l.positive, atom=render.formula(l.atom, n)) for l in c],
            kind=kind,
            horn=is_horn(c),
            rendered=render.clause(c, n),
        )
        for i, (c, kind) in enumerate(zip(clauses, kinds), 1)
    ]

def run_pipeline(text: str, *, notation: Optional[str] = None, strict_lexing: Optional[bool] = None,
                 check_invariants: Optional[bool] = None, settings: Optional[Settings] = None) -> RunResult:
    """Convert one formula to clausal form, keeping every intermediate stage.

    A parse failure yields a single error step. A later failure keeps the
    steps produced so far and appends one error step.
    """
    settings = settings or Settings.from_env()
    n = render.notation(notation or settings.notation)
    strict = settings.strict_lexing if strict_lexing is None else strict_lexing
    check = settings.check_invariants if check_invariants is None else check_invariants

    res = RunResult(version=_clausal_pkg.__version__, source_text=text, notation=n.name)
    steps = res.steps

    def add(key: str, rendered: str) -> None:
        steps.append(Step(key=key, label=LABELS[key], rendered=rendered))

    def fail(key: str, err: ClausalError) -> RunResult:
        log.error("%s: %s", LABELS[key], err)
        steps.append(Step(key="error", label=LABELS[key], rendered=render.message(str(err), n), error=True))
        res.ok = False
        res.report_md = to_markdown(res)
        return res

    parsed, res.warnings = parse_text(text, strict=strict)
    if not parsed.ok:
        return fail("parse_error", parsed.error)
    ast: Formula = parsed.value

    names = NameContext.for_formula(ast)
    forms: Dict[str, Formula] = {"original": ast}
    add("original", render.formula(ast, n))

    current = ast
    for key, fn in stage_chain(names, symbols(ast), check):
        out = attempt(fn, current)
        if not out.ok:
            return fail("stage_error", out.error)
        current = forms[key] = out.value
        if log.isEnabledFor(logging.DEBUG):
            log.debug("%s: %s", key, render.to_text(current))
        add(key, render.formula(current, n))

    out = attempt(extract_clauses, forms["cnf"])
    if not out.ok:
        return fail("stage_error", out.error)
    clauses: List[Clause] = out.value
    add("clauses", render.clauses(clauses, n))

    if clauses:
        report = classify_clauses(clauses)
        res.clauses = _clause_models(clauses, report.kinds, n)
        res.all_horn = report.all_horn
        add("horn", render.horn_table(clauses, report.kinds, n))
        verdict = "all clauses are Horn" if report.all_horn else "not all clauses are Horn"
        add("horn_summary", render.message(verdict, n))
    else:
        add("horn", render.message("no clauses found", n))
    res.tptp = clauses_to_tptp(clauses)

    dnf = _verified(to_dnf, invariants.check_dnf if check else None)
    out = attempt(dnf, forms["skolem"])
    if not out.ok:
        return fail("stage_error", out.error)
    add("dnf", render.formula(out.value, n))

    res.report_md = to_markdown(res)
    return res
