from __future__ import annotations
import os
from dataclasses import dataclass

NOTATIONS = ("latex", "text")

@dataclass
class Settings:
    notation: str = "latex"
    strict_lexing: bool = False
    check_invariants: bool = False
    saved_dir: str = "saved"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        s = cls(
            notation=os.getenv("CLAUSAL_NOTATION", "latex").strip().lower(),
            strict_lexing=os.getenv("CLAUSAL_STRICT_LEX") is not None,
            check_invariants=os.getenv("CLAUSAL_CHECK_INVARIANTS") is not None,
            saved_dir=os.getenv("CLAUSAL_SAVED_DIR", "saved"),
            log_level=os.getenv("CLAUSAL_LOG_LEVEL", "WARNING").upper(),
        )
        if s.notation not in NOTATIONS:
            raise ValueError(f"CLAUSAL_NOTATION must be one of {NOTATIONS}, got {s.notation!r}")
        return s
