from __future__ import annotations
import argparse, os, json, sys, logging
import clausal as _clausal_pkg
from .pipeline import run_pipeline
from .settings import Settings, NOTATIONS


def main(argv=None):
    parser = argparse.ArgumentParser(description=f"Clausal form converter (v{_clausal_pkg.__version__})")
    parser.add_argument("formula", nargs="?", help="Formula to convert (quote it for the shell)")
    parser.add_argument("--file", help="Read the formula from a text file instead")
    parser.add_argument("--out", help="Output folder for steps.json, report.md and clauses.p")
    parser.add_argument("--notation", choices=NOTATIONS, help="Rendering of each step (default: latex, or CLAUSAL_NOTATION)")
    parser.add_argument("--strict-lex", action="store_true", help="Fail on characters the lexer does not recognize instead of skipping them")
    parser.add_argument("--check-invariants", action="store_true", help="Verify each stage's structural invariant")
    parser.add_argument("-V","--version", action="store_true", help="Print version and module path and exit")
    args = parser.parse_args(argv)

    if args.version:
        print(f"clausal v{_clausal_pkg.__version__} @ {_clausal_pkg.__file__}")
        return 0

    settings = Settings.from_env()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            text = f.read()
    elif args.formula is not None:
        text = args.formula
    else:
        parser.error("give a formula or --file")

    if not text.strip():
        print("[CLAUSAL] Empty formula; nothing to do.")
        return 1

    res = run_pipeline(text,
                       notation=args.notation,
                       strict_lexing=True if args.strict_lex else None,
                       check_invariants=True if args.check_invariants else None,
                       settings=settings)

    if res.warnings:
        print("\n⚠️  Lexer skipped characters:")
        for w in res.warnings:
            print(f"  • {w.message}")

    for step in res.steps:
        marker = "❌ " if step.error else ""
        print(f"\n[{marker}{step.label}]")
        print(step.rendered)

    if args.out:
        os.makedirs(args.out, exist_ok=True)
        with open(os.path.join(args.out, "steps.json"), "w", encoding="utf-8") as f: json.dump(res.model_dump(), f, indent=2, ensure_ascii=False)
        with open(os.path.join(args.out, "report.md"), "w", encoding="utf-8") as f: f.write(res.report_md)
        with open(os.path.join(args.out, "clauses.p"), "w", encoding="utf-8") as f: f.write("\n".join(res.tptp)+("\n" if res.tptp else ""))
        print("\nWrote:", args.out)

    return 0 if res.ok else 1

if __name__ == "__main__":
    sys.exit(main())
