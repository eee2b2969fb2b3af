import io, json, os, shutil, tempfile, unittest
from contextlib import redirect_stdout

from clausal.cli import main


def run(*argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        rc = main(list(argv))
    return rc, buf.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_prints_steps(self):
        rc, out = run("forall x (P(x) -> Q(x))", "--notation", "text")
        self.assertEqual(rc, 0)
        self.assertIn("[Original formula]", out)
        self.assertIn("(¬P(x_1) ∨ Q(x_1))", out)

    def test_writes_outputs(self):
        out_dir = os.path.join(self.tmp, "out")
        rc, _ = run("exists x P(x)", "--notation", "text", "--out", out_dir)
        self.assertEqual(rc, 0)
        with open(os.path.join(out_dir, "steps.json"), encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["clauses"][0]["rendered"], "P(c1)")
        with open(os.path.join(out_dir, "clauses.p"), encoding="utf-8") as f:
            self.assertEqual(f.read(), "cnf(c1, axiom, (p(c1))).\n")
        self.assertTrue(os.path.exists(os.path.join(out_dir, "report.md")))

    def test_file_input(self):
        path = os.path.join(self.tmp, "in.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("P or Q\n")
        rc, out = run("--file", path, "--notation", "text")
        self.assertEqual(rc, 0)
        self.assertIn("not all clauses are Horn", out)

    def test_failures(self):
        rc, out = run("P(", "--notation", "text")
        self.assertEqual(rc, 1)
        self.assertIn("expected IDENT or RPAREN, found end of input", out)
        rc, _ = run("P & # Q", "--strict-lex")
        self.assertEqual(rc, 1)
        rc, _ = run("   ")
        self.assertEqual(rc, 1)

    def test_check_invariants(self):
        rc, _ = run("~(p -> q) | forall x exists y R(x, y)", "--check-invariants")
        self.assertEqual(rc, 0)

    def test_version(self):
        rc, out = run("-V")
        self.assertEqual(rc, 0)
        self.assertTrue(out.startswith("clausal v"))


if __name__ == "__main__":
    unittest.main()
