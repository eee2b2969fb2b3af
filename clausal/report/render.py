from __future__ import annotations
from typing import List
from ..core.model import RunResult, Step

def _fmt_step(s: Step, notation: str) -> str:
    if notation == "latex":
        body = "\n".join(f"$${line.strip()}$$" for line in s.rendered.split(" \\\\ "))
    else:
        body = f"```\n{s.rendered}\n```"
    head = f"## {'⚠ ' if s.error else ''}{s.label}\n"
    return f"{head}\n{body}\n"

def to_markdown(res: RunResult) -> str:
    lines: List[str] = []
    lines.append("# Clausal Form Report\n")
    lines.append(f"**Input:** `{res.source_text.strip()}`")
    status = "✓ converted" if res.ok else "✗ failed"
    lines.append(f"**Status:** {status}")
    if res.all_horn is not None:
        lines.append(f"**Horn:** {'all clauses are Horn' if res.all_horn else 'not all clauses are Horn'}")
    lines.append("")

    if res.warnings:
        lines.append("## Lexer warnings\n")
        for w in res.warnings:
            lines.append(f"- {w.message}")
        lines.append("")

    for s in res.steps:
        lines.append(_fmt_step(s, res.notation))

    if res.clauses:
        lines.append("## Clauses\n")
        lines.append("| # | clause | + | − | kind |")
        lines.append("|---|--------|---|---|------|")
        for c in res.clauses:
            pos = sum(1 for l in c.literals if l.positive)
            neg = len(c.literals) - pos
            shown = f"${c.rendered}$" if res.notation == "latex" else c.rendered
            lines.append(f"| C{c.index} | {shown} | {pos} | {neg} | {c.kind} |")
        lines.append("")

    if res.tptp:
        lines.append("## TPTP\n")
        lines.append("```")
        lines.extend(res.tptp)
        lines.append("```")
    return "\n".join(lines).rstrip() + "\n"
