from __future__ import annotations
from typing import Optional

END_OF_INPUT = "end of input"

class ClausalError(Exception): ...

class LexicalError(ClausalError):
    """Raised in strict lexing mode for a character no recognizer accepts."""
    def __init__(self, char: str, offset: int):
        self.char = char
        self.offset = offset
        super().__init__(f"unrecognized character {char!r} at offset {offset}")

class FormulaSyntaxError(ClausalError):
    """Parser failure: what the grammar expected and what it actually saw."""
    def __init__(self, expected: str, found: str, offset: Optional[int] = None, detail: Optional[str] = None):
        self.expected = expected
        self.found = found
        self.offset = offset
        self.detail = detail
        msg = f"expected {expected}, found {found}"
        if offset is not None:
            msg += f" at offset {offset}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)

class TransformationError(ClausalError):
    """A rewrite stage met a tree it cannot handle (never produced by the parser)."""
    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage}: {message}")
