from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple
from ..errors import LexicalError

log = logging.getLogger(__name__)

# Math-mode delimiter left over from LaTeX input (e.g. "$\forall x P(x)$")
DELIMITER = "$"

_WORD_END = r"(?![A-Za-z0-9_])"

def _commands(*names: str) -> str:
    # a LaTeX control word ends at the first non-letter: \top is not \to + p
    return "|".join(rf"\\{name}(?![A-Za-z])" for name in names)

# Ordered: the first recognizer matching at the current position wins.
TOKEN_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("WS",      re.compile(r"\s+")),
    ("FORALL",  re.compile(_commands("forall") + r"|∀|forall" + _WORD_END)),
    ("EXISTS",  re.compile(_commands("exists") + r"|∃|exists" + _WORD_END)),
    ("NOT",     re.compile(_commands("neg", "lnot") + r"|¬|~|!|not" + _WORD_END)),
    ("AND",     re.compile(_commands("land", "wedge") + r"|∧|&|and" + _WORD_END)),
    ("OR",      re.compile(_commands("lor", "vee") + r"|∨|\||or" + _WORD_END)),
    ("IMPLIES", re.compile(_commands("rightarrow", "to") + r"|→|->")),
    ("IFF",     re.compile(_commands("leftrightarrow") + r"|↔|<->|<=>")),
    ("LPAREN",  re.compile(r"\(")),
    ("RPAREN",  re.compile(r"\)")),
    ("COMMA",   re.compile(r",")),
    ("DOT",     re.compile(r"\.")),
    ("IDENT",   re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
]

@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    offset: int = 0

@dataclass(frozen=True)
class LexicalSkip:
    """A character dropped by the lexer. Offsets index the prepared string."""
    char: str
    offset: int

    @property
    def message(self) -> str:
        return f"ignored unrecognized character {self.char!r} at offset {self.offset}"

def prepare(s: str) -> str:
    return s.replace(DELIMITER, " ").strip()

def scan(s: str, *, strict: bool = False) -> Tuple[List[Token], List[LexicalSkip]]:
    """Tokenize ``s``, returning the tokens and the characters that were skipped.

    Unrecognized characters are dropped and reported as skips; with ``strict``
    the first one raises LexicalError instead.
    """
    s = prepare(s)
    tokens: List[Token] = []
    skipped: List[LexicalSkip] = []
    i = 0
    while i < len(s):
        for kind, pattern in TOKEN_PATTERNS:
            m = pattern.match(s, i)
            if m:
                if kind != "WS":
                    tokens.append(Token(kind, m.group(0), i))
                i = m.end()
                break
        else:
            if strict:
                raise LexicalError(s[i], i)
            skip = LexicalSkip(s[i], i)
            log.warning(skip.message)
            skipped.append(skip)
            i += 1
    return tokens, skipped

def tokenize(s: str, *, strict: bool = False) -> List[Token]:
    return scan(s, strict=strict)[0]
