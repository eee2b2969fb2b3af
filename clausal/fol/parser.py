from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, Type, Union
from .ast import Pred, Not, And, Or, Implies, Iff, Forall, Exists, Formula, Var
from .lexer import Token, tokenize
from ..errors import FormulaSyntaxError, END_OF_INPUT

# Tokens that cannot begin a formula; a quantifier's variable run that ends
# in front of one of these gives its last identifier back as the body.
_NO_FORMULA_START = {None, "AND", "OR", "IMPLIES", "IFF", "RPAREN", "COMMA"}

# Binary connectives: binding strength (loosest first), node, groups to the right
_BINARY = {
    "IFF":     (1, Iff, True),
    "IMPLIES": (2, Implies, True),
    "OR":      (3, Or, False),
    "AND":     (4, And, False),
}

_PREFIX = ("NOT", "QUANT")

Binder = Tuple[Type[Union[Forall, Exists]], List[str]]
Op = Tuple[str, Optional[Binder]]


def parse(text: str, *, strict: bool = False) -> Formula:
    return Parser(tokenize(text, strict=strict)).parse()


class Parser:
    """Operator-precedence parser over a token list, one token of lookahead.

    Precedence from loosest to tightest: <->, ->, |, &, then unary forms
    (negation, quantifiers, parentheses, atoms). -> and <-> group to the right.
    Operands and pending operators live on explicit stacks, so neither long
    chains nor deep parenthesization grow the call stack.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    # --- token helpers ---
    def _peek(self, ahead: int = 0) -> Optional[Token]:
        i = self.pos + ahead
        return self.tokens[i] if i < len(self.tokens) else None

    def _kind(self, ahead: int = 0) -> Optional[str]:
        t = self._peek(ahead)
        return t.kind if t else None

    def _accept(self, kind: str) -> Optional[Token]:
        t = self._peek()
        if t and t.kind == kind:
            self.pos += 1
            return t
        return None

    def _expect(self, kind: str, expected: Optional[str] = None) -> Token:
        t = self._accept(kind)
        if t is None:
            raise self._error(expected or kind)
        return t

    def _error(self, expected: str, detail: Optional[str] = None) -> FormulaSyntaxError:
        t = self._peek()
        if t is None:
            return FormulaSyntaxError(expected, END_OF_INPUT, detail=detail)
        return FormulaSyntaxError(expected, t.kind, t.offset, detail=detail)

    # --- grammar ---
    def parse(self) -> Formula:
        phi = self.formula()
        if self.pos < len(self.tokens):
            extra = " ".join(t.text for t in self.tokens[self.pos:])
            raise self._error(END_OF_INPUT, detail=f"trailing tokens: {extra}")
        return phi

    def formula(self) -> Formula:
        """Parse one formula, stopping before the first token that cannot continue it."""
        operands: List[Formula] = []
        ops: List[Op] = []
        depth = 0
        while True:
            # operand position: any number of prefix forms, then a group or an atom
            kind = self._kind()
            if kind == "NOT":
                self.pos += 1
                ops.append(("NOT", None))
                continue
            if kind in ("FORALL", "EXISTS"):
                ops.append(("QUANT", self._binder()))
                continue
            if kind == "LPAREN":
                self.pos += 1
                ops.append(("LPAREN", None))
                depth += 1
                continue
            if kind != "IDENT":
                raise self._error("formula")
            operands.append(self._atom())

            # operator position
            while True:
                self._close_prefixes(operands, ops)
                kind = self._kind()
                if kind in _BINARY:
                    self._reduce(operands, ops, kind)
                    self.pos += 1
                    ops.append((kind, None))
                    break
                if kind == "RPAREN" and depth:
                    self.pos += 1
                    self._reduce(operands, ops)
                    ops.pop()
                    depth -= 1
                    continue
                if depth:
                    raise self._error("RPAREN")
                self._reduce(operands, ops)
                return operands.pop()

    @staticmethod
    def _close_prefixes(operands: List[Formula], ops: List[Op]) -> None:
        # negations and quantifiers scope over the unary operand just completed
        while ops and ops[-1][0] in _PREFIX:
            kind, binder = ops.pop()
            phi = operands.pop()
            if kind == "NOT":
                phi = Not(phi)
            else:
                node, names = binder
                for name in reversed(names):
                    phi = node(name, phi)
            operands.append(phi)

    @staticmethod
    def _reduce(operands: List[Formula], ops: List[Op], incoming: Optional[str] = None) -> None:
        """Apply pending binary connectives that bind at least as tightly as ``incoming``.

        With no incoming connective, reduce down to the nearest open parenthesis.
        """
        while ops and ops[-1][0] in _BINARY:
            prec, node, _ = _BINARY[ops[-1][0]]
            if incoming is not None:
                new_prec, _, right = _BINARY[incoming]
                if prec < new_prec or (prec == new_prec and right):
                    return
            ops.pop()
            rhs = operands.pop()
            lhs = operands.pop()
            operands.append(node(lhs, rhs))

    def _arg_list_at(self, ahead: int) -> bool:
        """True when tokens from ``ahead`` read as "( IDENT {, IDENT} )" or "( )"."""
        if self._kind(ahead) != "LPAREN":
            return False
        i = ahead + 1
        if self._kind(i) == "RPAREN":
            return True
        while self._kind(i) == "IDENT":
            if self._kind(i + 1) == "RPAREN":
                return True
            if self._kind(i + 1) != "COMMA":
                return False
            i += 2
        return False

    def _binder(self) -> Binder:
        q = self._peek()
        self.pos += 1
        names: List[str] = []
        # the first identifier is always a variable; later ones stop in front
        # of an argument list, which makes them the body's predicate
        while self._kind() == "IDENT" and not (names and self._arg_list_at(1)):
            names.append(self._peek().text)
            self.pos += 1
        if not names:
            raise self._error("IDENT", detail=f"bound variable after {q.text}")
        if len(names) > 1 and self._kind() in _NO_FORMULA_START:
            # "forall x P & Q": P is the body, not a second variable
            names.pop()
            self.pos -= 1
        self._accept("DOT")
        return (Forall if q.kind == "FORALL" else Exists), names

    def _atom(self) -> Pred:
        name = self._expect("IDENT").text
        if not self._accept("LPAREN"):
            return Pred(name)
        args: List[Var] = []
        if self._accept("RPAREN"):
            return Pred(name)
        while True:
            expected = "IDENT or RPAREN" if not args else "IDENT"
            args.append(Var(self._expect("IDENT", expected).text))
            if self._accept("RPAREN"):
                return Pred(name, tuple(args))
            self._expect("COMMA", "COMMA or RPAREN")
