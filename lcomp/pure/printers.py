"""Code generation: renders a λ-term in one of several textual notations. Renderers differ only in syntax, never in
semantics, and are total over all terms (closed or not).

    scheme: (λ (x) (f x))
    json:   ['λ', ['x'], ['f', 'x']]
    js:     (x => f(x))
    py:     (lambda x: (((f)(x))))

A rendered js/py term can be fed to the matching runtime directly, e.g. a numeral decodes in Python as
`eval(py(term))(lambda n: n + 1)(0)`.
"""

from lcomp.pure.term import LAMBDA, Var, Visitor, deep_recursion


class SchemePrinter(Visitor):

    def visit_var(self, var, ctx):
        return var.name

    def visit_app(self, app, ctx):
        return f"({self.visit(app.operator)} {self.visit(app.operand)})"

    def visit_abs(self, abs_, ctx):
        return f"({LAMBDA} ({self.visit(abs_.param)}) {self.visit(abs_.body)})"


class JsonPrinter(Visitor):
    """Nested arrays; variable names are quoted."""

    def visit_var(self, var, ctx):
        return f"'{var.name}'"

    def visit_app(self, app, ctx):
        return f"[{self.visit(app.operator)}, {self.visit(app.operand)}]"

    def visit_abs(self, abs_, ctx):
        return f"['{LAMBDA}', [{self.visit(abs_.param)}], {self.visit(abs_.body)}]"


class JsPrinter(Visitor):
    """Arrow functions. The operator of an application is only parenthesized if it is not a bare variable."""

    def visit_var(self, var, ctx):
        return var.name

    def visit_app(self, app, ctx):
        if isinstance(app.operator, Var):
            return f"{self.visit(app.operator)}({self.visit(app.operand)})"
        return f"({self.visit(app.operator)})({self.visit(app.operand)})"

    def visit_abs(self, abs_, ctx):
        return f"({self.visit(abs_.param)} => {self.visit(abs_.body)})"


class PyPrinter(Visitor):

    def visit_var(self, var, ctx):
        return var.name

    def visit_app(self, app, ctx):
        return f"(({self.visit(app.operator)})({self.visit(app.operand)}))"

    def visit_abs(self, abs_, ctx):
        return f"(lambda {abs_.param.name}: ({self.visit(abs_.body)}))"


TARGETS = {
    "scheme": SchemePrinter(),
    "json": JsonPrinter(),
    "js": JsPrinter(),
    "py": PyPrinter(),
}


def render(term, target="scheme"):
    """Renders term in the notation named by target (one of TARGETS)."""
    try:
        printer = TARGETS[target]
    except KeyError:
        raise ValueError(f"unknown target '{target}', expected one of {sorted(TARGETS)}") from None

    with deep_recursion():
        return printer.visit(term)


def scheme(term):
    return render(term, "scheme")


def json(term):
    return render(term, "json")


def js(term):
    return render(term, "js")


def py(term):
    return render(term, "py")
