"""Compilation of surface nodes to closed λ-terms, in two passes.

1. Desugaring: a syntax-directed translation of every special form into single-parameter λs and single-operand
   applications:

    (λ (p1 ... pN) body)              ~> (λ (p1) (λ (p2) ... (λ (pN) body)))     ; N = 0 binds a throwaway _
    (f a1 ... aN)                     ~> (... ((f a1) a2) ... aN)                ; (f) applies f to `nothing`
    (if c t e)                        ~> (c (λ () t) (λ () e))
    (and a b)                         ~> (if a b #f)
    (or a b)                          ~> (if a #t b)
    (let ((v1 e1) ... (vN eN)) body)  ~> ((λ (v1 ... vN) body) e1 ... eN)        ; vI cannot see eJ
    (letrec ((f lam)) body)           ~> (let ((f (Y (λ (f) lam)))) body)
    (quote ())                        ~> nil
    integers and strings              ~> Church numerals and lists of them (see numerical.py)

   `and`/`or` cannot be primitives: primitives are strict, and these must short-circuit.

   `_` is reserved: the thunks built for `if` (and so `and`/`or`) bind it, so a user variable named `_` is shadowed
   inside their branches. `((λ (_) (if #t _ 0)) 5)` evaluates to `nothing`, not 5.

2. Expansion: every free variable is replaced by its value in an Environment of closed terms, so the result is
   closed. Bound variables map to themselves, which is why `(λ (+) (+ 0 0))` keeps its own `+` instead of the
   primitive one: substituting source text before desugaring would get this wrong.
"""

from lcomp.lang import names, numerical
from lcomp.lang.error import DesugarError
from lcomp.lang.parser import Atom, Int, Str, Tuple, parse, tuple_of
from lcomp.pure.environment import Environment
from lcomp.pure.term import LAMBDA, Abs, App, SymbolTable, Visitor, deep_recursion


# closed constants used by the sugar rules, parsed once
Y = parse(names.S_Y)
NIL = parse(names.S_NIL)
TRUE = parse(names.S_TRUE)
FALSE = parse(names.S_FALSE)

THROWAWAY = "_"


class Desugarer:
    """Translates surface nodes to (possibly open) λ-terms. Stateless apart from the symbol table it interns into."""

    def __init__(self, symbols=None):
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.forms = {
            LAMBDA: self.desugar_lambda,
            names.LAMBDA_ALIAS: self.desugar_lambda,
            names.IF: self.desugar_if,
            names.AND: self.desugar_and,
            names.OR: self.desugar_or,
            names.LET: self.desugar_let,
            names.LET_REC: self.desugar_letrec,
            names.QUOTE: self.desugar_quote,
        }

    def desugar(self, node):
        """Returns the λ-term for node."""
        if isinstance(node, Tuple):
            if not node.elements:
                raise DesugarError("'{}' is not an expression (did you mean (quote ())?)", str(node))

            head = node.elements[0]
            if isinstance(head, Atom) and head.name in self.forms:
                return self.forms[head.name](node)
            return self.desugar_apply(node)

        elif isinstance(node, Int):
            return self.desugar(numerical.cnumber(node.value))

        elif isinstance(node, Str):
            return self.desugar(numerical.cstring(node.value))

        elif isinstance(node, Atom):
            return self.symbols.intern(node.name)

        raise TypeError(f"'{node!r}' is not a surface node")

    def desugar_lambda(self, node):
        _check_arity(node, 3)
        __, params, body = node.elements
        if not isinstance(params, Tuple):
            raise DesugarError("parameters of '{}' must be a list of names", str(node))

        term = self.desugar(body)
        if not params.elements:
            return Abs(self.symbols.intern(THROWAWAY), term)

        for param in reversed(params.elements):
            term = Abs(self.param(param, node), term)
        return term

    def desugar_if(self, node):
        _check_arity(node, 4)
        __, cond, then, or_else = node.elements
        thunk = Atom(LAMBDA), tuple_of()
        return self.desugar(tuple_of(cond, tuple_of(*thunk, then), tuple_of(*thunk, or_else)))

    def desugar_and(self, node):
        _check_arity(node, 3)
        __, left, right = node.elements
        return self.desugar(tuple_of(Atom(names.IF), left, right, FALSE))

    def desugar_or(self, node):
        _check_arity(node, 3)
        __, left, right = node.elements
        return self.desugar(tuple_of(Atom(names.IF), left, TRUE, right))

    def desugar_let(self, node):
        _check_arity(node, 3)
        __, bindings, body = node.elements

        params, args = [], []
        for name, value in self.bindings(bindings, node):
            params.append(name)
            args.append(value)

        return self.desugar(tuple_of(tuple_of(Atom(LAMBDA), tuple_of(*params), body), *args))

    def desugar_letrec(self, node):
        _check_arity(node, 3)
        __, bindings, body = node.elements

        pairs = self.bindings(bindings, node)
        if len(pairs) != 1:
            raise DesugarError("'{}' must bind exactly one name", str(node))
        (name, lam), = pairs

        fixed = tuple_of(Y, tuple_of(Atom(LAMBDA), tuple_of(name), lam))
        return self.desugar(tuple_of(Atom(names.LET), tuple_of(tuple_of(name, fixed)), body))

    def desugar_quote(self, node):
        _check_arity(node, 2)
        datum = node.elements[1]
        if not isinstance(datum, Tuple) or datum.elements:
            raise DesugarError("'{}' is not supported: only (quote ()) can be quoted", str(node))
        return self.desugar(NIL)

    def desugar_apply(self, node):
        head, *args = node.elements
        term = self.desugar(head)
        if not args:
            return App(term, self.symbols.intern(names.VOID))

        for arg in args:
            term = App(term, self.desugar(arg))
        return term

    def param(self, node, form):
        """Returns the Var for a parameter, which must be a name."""
        if not isinstance(node, Atom):
            raise DesugarError("parameter '{}' of '{}' is not a name", (str(node), str(form)))
        return self.symbols.intern(node.name)

    @staticmethod
    def bindings(node, form):
        """Returns [(name, value)] from a binding list ((name value) ...)."""
        if not isinstance(node, Tuple):
            raise DesugarError("bindings of '{}' must be a list of (name value) pairs", str(form))

        pairs = []
        for binding in node.elements:
            if not isinstance(binding, Tuple) or len(binding.elements) != 2:
                raise DesugarError("binding '{}' of '{}' must be a (name value) pair", (str(binding), str(form)))
            name, value = binding.elements
            if not isinstance(name, Atom):
                raise DesugarError("binding '{}' of '{}' must bind a name", (str(binding), str(form)))
            pairs.append((name, value))
        return pairs


def _check_arity(node, size):
    if len(node.elements) != size:
        msg = "'{}' expects {} operands, got {}"
        raise DesugarError(msg, (str(node), str(size - 1), str(len(node.elements) - 1)))


class Expander(Visitor):
    """Closes a term over an Environment[Term]: free variables are substituted by their (closed) values."""

    def visit_var(self, var, env):
        return env.lookup(var)

    def visit_app(self, app, env):
        return App(self.visit(app.operator, env), self.visit(app.operand, env))

    def visit_abs(self, abs_, env):
        scope = env.child()
        scope.define(abs_.param, abs_.param)
        return Abs(abs_.param, self.visit(abs_.body, scope))


def desugar(node, symbols=None):
    """Returns the (possibly open) λ-term for node."""
    with deep_recursion():
        return Desugarer(symbols).desugar(node)


def expand(term, env):
    """Returns term with every free variable replaced by its value in env."""
    with deep_recursion():
        return Expander().visit(term, env)


def boot_env(symbols=None, visitor=None):
    """Returns a root Environment holding every primitive, each desugared and then passed through visitor against the
    partially built environment, in dependency order. With the default Expander the values are closed terms; with the
    FFI HostCompiler they are executable host functions.
    """
    symbols = symbols if symbols is not None else SymbolTable()
    visitor = visitor if visitor is not None else Expander()

    env = Environment()
    with deep_recursion():
        for name, source in names.PRIMITIVES.items():
            env.define(symbols.intern(name), visitor.visit(desugar(parse(source), symbols), env))
    return env


def compile(source, env=None, symbols=None):
    """Compiles one top-level form of source to a closed λ-term. env defaults to a fresh bootstrap environment;
    pass a child of one to make extra bindings visible.
    """
    symbols = symbols if symbols is not None else SymbolTable()
    if env is None:
        env = boot_env(symbols)
    return expand(desugar(parse(source), symbols), env)
