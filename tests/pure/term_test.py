import sys
import unittest

from lcomp.pure.term import Abs, App, SymbolTable, Var, Visitor, deep_recursion, RECURSION_LIMIT


class CountingVisitor(Visitor):
    """Counts nodes of each variant."""

    def visit_var(self, var, ctx):
        ctx["var"] += 1

    def visit_app(self, app, ctx):
        ctx["app"] += 1
        self.visit(app.operator, ctx)
        self.visit(app.operand, ctx)

    def visit_abs(self, abs_, ctx):
        ctx["abs"] += 1
        self.visit(abs_.body, ctx)


class SymbolTableTestCase(unittest.TestCase):

    def test_intern(self):
        symbols = SymbolTable()
        self.assertIs(symbols.intern("x"), symbols.intern("x"))
        self.assertIsNot(symbols.intern("x"), symbols.intern("y"))
        self.assertEqual(2, len(symbols))
        self.assertIn("x", symbols)
        self.assertNotIn("z", symbols)

    def test_tables_are_independent(self):
        first, second = SymbolTable(), SymbolTable()
        self.assertIsNot(first.intern("x"), second.intern("x"))
        self.assertEqual(first.intern("x"), second.intern("x"))


class TermTestCase(unittest.TestCase):

    def test_str(self):
        x, f = Var("x"), Var("f")
        cases = {
            "x": x,
            "(f x)": App(f, x),
            "(λ (x) x)": Abs(x, x),
            "(λ (x) ((f x) (λ (f) f)))": Abs(x, App(App(f, x), Abs(f, f))),
        }
        for expected, term in cases.items():
            self.assertEqual(expected, str(term), expected)

    def test_repr(self):
        self.assertEqual("App('(f x)')", repr(App(Var("f"), Var("x"))))

    def test_equality(self):
        x, y = Var("x"), Var("y")
        self.assertEqual(Abs(x, App(x, y)), Abs(Var("x"), App(Var("x"), Var("y"))))
        self.assertNotEqual(Abs(x, x), Abs(y, y))
        self.assertNotEqual(App(x, y), App(y, x))
        self.assertNotEqual(x, App(x, x))

    def test_immutable(self):
        app = App(Var("f"), Var("x"))
        with self.assertRaises(AttributeError):
            app.operand = Var("y")


class VisitorTestCase(unittest.TestCase):

    def test_dispatch(self):
        x = Var("x")
        counts = {"var": 0, "app": 0, "abs": 0}
        CountingVisitor().visit(Abs(x, App(App(x, x), Abs(x, x))), counts)
        self.assertEqual({"var": 3, "app": 2, "abs": 2}, counts)

    def test_not_a_term(self):
        should_raise = ["x", None, 3, ("x",)]
        for case in should_raise:
            self.assertRaises(TypeError, CountingVisitor().visit, case, {})

    def test_must_handle_every_variant(self):
        class Partial(Visitor):
            def visit_var(self, var, ctx):
                return var

            def visit_app(self, app, ctx):
                return app

        self.assertRaises(TypeError, Partial)


class DeepRecursionTestCase(unittest.TestCase):

    def test_raises_and_restores(self):
        previous = sys.getrecursionlimit()
        with deep_recursion():
            self.assertGreaterEqual(sys.getrecursionlimit(), RECURSION_LIMIT)
        self.assertEqual(previous, sys.getrecursionlimit())

    def test_never_lowers(self):
        previous = sys.getrecursionlimit()
        with deep_recursion(10):
            self.assertEqual(previous, sys.getrecursionlimit())

    def test_restores_on_error(self):
        previous = sys.getrecursionlimit()
        with self.assertRaises(ValueError):
            with deep_recursion():
                raise ValueError()
        self.assertEqual(previous, sys.getrecursionlimit())


if __name__ == '__main__':
    unittest.main()
