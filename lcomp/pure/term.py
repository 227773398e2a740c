"""Pure lambda calculus terms: the intermediate representation and the final output of the compiler.

The `pure` directory contains nothing specific to the Scheme-like surface language: only λ-terms, the scope chain
used to resolve them, and the textual renderers.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <variable>                 ; "variable"
           | "λ" <variable> "." <λ-term>  ; "abstraction"
                                        ; - single parameter only: currying is done by the desugarer
           | <λ-term> <λ-term>          ; "application"
                                        ; - exactly one operand: multi-argument calls are curried
```

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         https://en.wikipedia.org/wiki/Visitor_pattern
"""

import sys
from abc import abstractmethod, ABC
from contextlib import contextmanager
from dataclasses import dataclass


LAMBDA = "λ"
RECURSION_LIMIT = 100_000  # structural recursion over terms and Church-encoded values nests deeply


@contextmanager
def deep_recursion(limit=None):
    """Temporarily raises the interpreter's recursion limit to limit (RECURSION_LIMIT if None). Never lowers it."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit if limit is not None else RECURSION_LIMIT))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Term(ABC):
    """Superclass of the three λ-term variants. Terms are immutable; str() gives the scheme-like notation."""

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


@dataclass(frozen=True, repr=False)
class Var(Term):
    """Variable reference. Use SymbolTable.intern instead of instantiating directly so that equal names are the
    identical object within one session.
    """
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True, repr=False)
class App(Term):
    """Application of operator to exactly one operand."""
    operator: Term
    operand: Term

    def __str__(self):
        return f"({self.operator} {self.operand})"


@dataclass(frozen=True, repr=False)
class Abs(Term):
    """Single-parameter abstraction."""
    param: Var
    body: Term

    def __str__(self):
        return f"({LAMBDA} ({self.param}) {self.body})"


class SymbolTable:
    """Interns variable names. Owned by a single compilation session, so names never outlive it."""

    def __init__(self):
        self._symbols = {}

    def intern(self, name):
        """Returns the unique Var for name in this table, creating it if needed."""
        var = self._symbols.get(name)
        if var is None:
            var = self._symbols[name] = Var(name)
        return var

    def __contains__(self, name):
        return name in self._symbols

    def __len__(self):
        return len(self._symbols)


class Visitor(ABC):
    """A total function over Var, App and Abs. Every consumer of terms (printers, expander, host compiler) is one
    Visitor, and must implement all three visit_* methods to be instantiable.
    """

    def visit(self, term, ctx=None):
        """Dispatches term to the method for its variant."""
        if isinstance(term, Var):
            return self.visit_var(term, ctx)
        elif isinstance(term, App):
            return self.visit_app(term, ctx)
        elif isinstance(term, Abs):
            return self.visit_abs(term, ctx)
        raise TypeError(f"'{term!r}' is not a λ-term")

    @abstractmethod
    def visit_var(self, var, ctx):
        """Visits a Var."""

    @abstractmethod
    def visit_app(self, app, ctx):
        """Visits an App. Implementations recurse into app.operator and app.operand as needed."""

    @abstractmethod
    def visit_abs(self, abs_, ctx):
        """Visits an Abs. Implementations recurse into abs_.body as needed."""
