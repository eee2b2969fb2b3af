import unittest

from clausal.fol.ast import Pred
from clausal.fol.clauses import Literal
from clausal.checks.horn import (FACT, RULE, GOAL, NOT_HORN, classify_clause, classify_clauses,
                                 count_polarity, is_horn)

p, q, r = Pred("p"), Pred("q"), Pred("r")
pos = lambda a: Literal(True, a)
neg = lambda a: Literal(False, a)


class TestHorn(unittest.TestCase):
    def test_kinds(self):
        self.assertEqual(classify_clause([pos(p)]), FACT)
        self.assertEqual(classify_clause([neg(p), neg(q), pos(r)]), RULE)
        self.assertEqual(classify_clause([neg(p), neg(q)]), GOAL)
        self.assertEqual(classify_clause([pos(p), pos(q)]), NOT_HORN)

    def test_positive_literal_position_irrelevant(self):
        self.assertEqual(classify_clause([pos(r), neg(p)]), RULE)

    def test_empty_clause_is_goal(self):
        self.assertEqual(classify_clause([]), GOAL)
        self.assertTrue(is_horn([]))

    def test_counts(self):
        self.assertEqual(count_polarity([pos(p), neg(q), neg(r)]), (1, 2))
        self.assertFalse(is_horn([pos(p), pos(q), neg(r)]))

    def test_report(self):
        report = classify_clauses([[pos(p)], [neg(p), pos(q)]])
        self.assertEqual(report.kinds, [FACT, RULE])
        self.assertTrue(report.all_horn)
        report = classify_clauses([[pos(p)], [pos(p), pos(q)]])
        self.assertFalse(report.all_horn)


if __name__ == "__main__":
    unittest.main()
