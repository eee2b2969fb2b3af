from __future__ import annotations
import os, json
from typing import Any, Dict, List, Optional

from clausal.core.model import RunResult
from clausal.settings import Settings

# Get the test directory path relative to this file
TEST_DIR = os.path.dirname(os.path.abspath(__file__))

def load_cases() -> List[Dict[str, Any]]:
    """Load the formula cases from cases/ (shared with run.py)."""
    cases_dir = os.path.join(TEST_DIR, "cases")
    out = []
    for name in sorted(os.listdir(cases_dir)):
        if name.endswith(".json"):
            with open(os.path.join(cases_dir, name), "r", encoding="utf-8") as f:
                out.append(json.load(f))
    return out

def load_case(case_id: str) -> Dict[str, Any]:
    for c in load_cases():
        if c["id"] == case_id:
            return c
    raise KeyError(case_id)

def run_case(formula: str, *, notation: str = "text", strict_lexing: bool = False,
             check_invariants: bool = True, settings: Optional[Settings] = None) -> RunResult:
    """Run one formula through clausal.pipeline.run_pipeline.

    Uses default Settings (not the environment) so CLAUSAL_* variables set on
    the test machine do not change results. Invariant checks are on by default.
    """
    from clausal.pipeline import run_pipeline
    return run_pipeline(formula, notation=notation, strict_lexing=strict_lexing,
                        check_invariants=check_invariants, settings=settings or Settings())

def rendered(res: RunResult, key: str) -> str:
    step = res.step(key)
    if step is None:
        raise AssertionError(f"no {key!r} step in {[s.key for s in res.steps]}")
    return step.rendered
