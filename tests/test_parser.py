import unittest

from clausal.errors import FormulaSyntaxError, END_OF_INPUT
from clausal.fol.ast import Var, Pred, Not, And, Or, Implies, Iff, Forall, Exists
from clausal.fol.parser import parse
from clausal.fol.clauses import extract_clauses

p, q, r = Pred("p"), Pred("q"), Pred("r")

def P(*vs):
    return Pred("P", tuple(Var(v) for v in vs))


class TestParser(unittest.TestCase):
    def test_precedence(self):
        self.assertEqual(parse("p | q & r"), Or(p, And(q, r)))
        self.assertEqual(parse("p & q -> r"), Implies(And(p, q), r))
        self.assertEqual(parse("p -> q <-> r"), Iff(Implies(p, q), r))
        self.assertEqual(parse("~p & q"), And(Not(p), q))

    def test_associativity(self):
        self.assertEqual(parse("p & q & r"), And(And(p, q), r))
        self.assertEqual(parse("p | q | r"), Or(Or(p, q), r))
        self.assertEqual(parse("p -> q -> r"), Implies(p, Implies(q, r)))
        self.assertEqual(parse("p <-> q <-> r"), Iff(p, Iff(q, r)))

    def test_parentheses_and_negation(self):
        self.assertEqual(parse("~~p"), Not(Not(p)))
        self.assertEqual(parse("(p | q) & r"), And(Or(p, q), r))
        self.assertEqual(parse("~(p)"), Not(p))

    def test_predicates(self):
        self.assertEqual(parse("P(x, y)"), P("x", "y"))
        self.assertEqual(parse("P()"), Pred("P"))
        self.assertEqual(parse("P"), Pred("P"))

    def test_quantifiers(self):
        self.assertEqual(parse("forall x P(x)"), Forall("x", P("x")))
        self.assertEqual(parse("exists x. P(x)"), Exists("x", P("x")))
        self.assertEqual(parse("forall x (P(x) -> Q)"), Forall("x", Implies(P("x"), Pred("Q"))))
        self.assertEqual(parse("forall x exists y P(x,y)"), Forall("x", Exists("y", P("x", "y"))))
        self.assertEqual(parse("∀x ∃y. P(x, y)"), Forall("x", Exists("y", P("x", "y"))))

    def test_variable_lists(self):
        self.assertEqual(parse("forall x y P(x,y)"), Forall("x", Forall("y", P("x", "y"))))
        self.assertEqual(parse("forall x y. P"), Forall("x", Forall("y", Pred("P"))))
        self.assertEqual(parse("forall x y (P(x) | P(y))"),
                         Forall("x", Forall("y", Or(P("x"), P("y")))))

    def test_quantifier_scope_is_unary(self):
        self.assertEqual(parse("forall x P(x) & Q"), And(Forall("x", P("x")), Pred("Q")))
        self.assertEqual(parse("forall x P & Q"), And(Forall("x", Pred("P")), Pred("Q")))
        self.assertEqual(parse("forall x y P"), Forall("x", Forall("y", Pred("P"))))
        self.assertEqual(parse("~forall x P(x)"), Not(Forall("x", P("x"))))

    def test_long_chain(self):
        n = 3000
        phi = parse(" & ".join(f"p{i}" for i in range(n)))
        cs = extract_clauses(phi)
        self.assertEqual(len(cs), n)
        self.assertEqual(cs[0][0].atom.name, "p0")
        self.assertEqual(cs[-1][0].atom.name, f"p{n - 1}")

    def test_deep_nesting(self):
        n = 2000
        self.assertEqual(parse("(" * n + "p" + ")" * n), p)
        phi = parse("~" * n + "p")
        depth = 0
        while isinstance(phi, Not):
            phi, depth = phi.sub, depth + 1
        self.assertEqual((depth, phi), (n, p))
        phi = parse(" -> ".join(f"p{i}" for i in range(n)))
        self.assertEqual(phi.left, Pred("p0"))
        self.assertIsInstance(phi.right, Implies)

    def test_mixed_precedence_in_groups(self):
        self.assertEqual(parse("(p | q) & r -> p"), Implies(And(Or(p, q), r), p))
        self.assertEqual(parse("~(p & q) | ~~r"), Or(Not(And(p, q)), Not(Not(r))))
        self.assertEqual(parse("forall x (P(x) <-> exists y ~P(y)) & q"),
                         And(Forall("x", Iff(P("x"), Exists("y", Not(P("y"))))), q))

    def _error(self, text):
        with self.assertRaises(FormulaSyntaxError) as cm:
            parse(text)
        return cm.exception

    def test_unclosed_predicate(self):
        e = self._error("P(")
        self.assertEqual((e.expected, e.found), ("IDENT or RPAREN", END_OF_INPUT))
        self.assertEqual(str(e), "expected IDENT or RPAREN, found end of input")

    def test_argument_errors(self):
        e = self._error("P(x")
        self.assertEqual((e.expected, e.found), ("COMMA or RPAREN", END_OF_INPUT))
        e = self._error("P(x,)")
        self.assertEqual((e.expected, e.found, e.offset), ("IDENT", "RPAREN", 4))
        e = self._error("P(x y)")
        self.assertEqual((e.expected, e.found), ("COMMA or RPAREN", "IDENT"))

    def test_missing_bound_variable(self):
        e = self._error("forall (P)")
        self.assertEqual((e.expected, e.found, e.offset), ("IDENT", "LPAREN", 7))
        self.assertIn("bound variable after forall", str(e))

    def test_missing_formula(self):
        self.assertEqual(self._error("").found, END_OF_INPUT)
        e = self._error("& p")
        self.assertEqual((e.expected, e.found, e.offset), ("formula", "AND", 0))
        self.assertEqual(self._error("p ->").expected, "formula")
        self.assertEqual(self._error("forall x").expected, "formula")

    def test_unclosed_group(self):
        e = self._error("(p & q")
        self.assertEqual((e.expected, e.found), ("RPAREN", END_OF_INPUT))

    def test_trailing_tokens(self):
        e = self._error("p q")
        self.assertEqual((e.expected, e.found, e.offset), (END_OF_INPUT, "IDENT", 2))
        self.assertEqual(e.detail, "trailing tokens: q")


if __name__ == "__main__":
    unittest.main()
