"""Foreign function interface between λ-terms and Python: un-Churchification.

A closed term is compiled to a host function (a Python callable taking and returning such callables) by
HostCompiler, the same kind of Visitor as the printers. The result is then decoded by applying it to "probe"
functions and looking at what comes back:

    natify:    n(succ)(zero), then count how many times the result can be peeled before zero's terminator shows up
    boolify:   b(λ_.TRUE)(λ_.FALSE), then an identity comparison against the two probes
    listify:   l(on_cons)(on_nil), where the probes rebuild the list as host Pairs
    stringify: listify(natify), then ASCII character codes to str

There is no encoder here: host values are encoded as surface syntax by numerical.encode (see Session.call).
"""

from functools import partial

from lcomp.lang.error import DecodeError
from lcomp.pure.environment import Environment
from lcomp.pure.term import Visitor, deep_recursion


class HostCompiler(Visitor):
    """Compiles a λ-term to a host function over an Environment of host functions."""

    def visit_var(self, var, env):
        return env.lookup(var)

    def visit_app(self, app, env):
        return self.visit(app.operator, env)(self.visit(app.operand, env))

    def visit_abs(self, abs_, env):
        def closure(arg):
            scope = env.child()
            scope.define(abs_.param, arg)
            return self.visit(abs_.body, scope)

        closure.__qualname__ = f"λ{abs_.param.name}"
        return closure


def to_host(term, env=None):
    """Returns the host function for term. env must bind every free variable of term (closed terms need none)."""
    with deep_recursion():
        return HostCompiler().visit(term, env if env is not None else Environment())


class Pair:
    """Host cons cell produced by listify. The empty list is Pair() (no car, no cdr)."""

    def __init__(self, car=None, cdr=None):
        self.car = car
        self.cdr = cdr

    @classmethod
    def of(cls, *items):
        """Pair.of(3, 4) == Pair(3, Pair(4, Pair()))."""
        pair = cls()
        for item in reversed(items):
            pair = cls(item, pair)
        return pair

    @property
    def is_nil(self):
        return self.cdr is None

    def to_list(self):
        return list(self)

    def __iter__(self):
        pair = self
        while not pair.is_nil:
            yield pair.car
            pair = pair.cdr

    def __len__(self):
        return sum(1 for __ in self)

    def __eq__(self, other):
        return isinstance(other, Pair) and self.car == other.car and self.cdr == other.cdr

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        if self.is_nil:
            return "nil"
        return f"({self.car!r} {self.cdr!r})"


def _nil(f):
    return f


def _zero(f):
    return None  # terminator


def _succ(n):
    return lambda f: lambda z: f(n(f(z)))


def _true(f):
    return f


def _false(f):
    return f


class _Boxed:
    """A host value passed back out through a probe. Behaves like _nil if anything applies it."""

    def __init__(self, value):
        self.value = value

    def __call__(self, f):
        return f


def natify(churched):
    """Returns the int encoded by a Church numeral host function."""
    with deep_recursion():
        f = churched(_succ)(_zero)
        num = -1
        while f is not None:
            if f is _nil or not callable(f):
                raise DecodeError("'{}' is not a Church numeral", repr(churched))
            f = f(_nil)
            num += 1
        return num


def boolify(churched):
    """Returns the bool encoded by a Church boolean host function."""
    with deep_recursion():
        result = churched(lambda __: _true)(lambda __: _false)
    if result is _true:
        return True
    elif result is _false:
        return False
    raise DecodeError("'{}' is not a Church boolean", repr(churched))


def listify(decoder, churched=None):
    """Returns the host Pair chain encoded by a Church list, each element decoded with decoder. With churched
    omitted, returns the decoder for such lists instead (listify(natify) is a decoder of lists of numerals).
    """
    if churched is None:
        return partial(listify, decoder)

    def on_cons(car):
        return lambda cdr: _Boxed(Pair(decoder(car), listify(decoder, cdr)))

    def on_nil(__):
        return _Boxed(Pair())

    with deep_recursion():
        boxed = churched(on_cons)(on_nil)
    if not isinstance(boxed, _Boxed):
        raise DecodeError("'{}' is not a Church list", repr(churched))
    return boxed.value


def stringify(churched):
    """Returns the ASCII str encoded by a Church list of character codes."""
    codes = listify(natify, churched).to_list()
    if any(code > 0x7f for code in codes):
        raise DecodeError("'{}' is not an ASCII string", repr(codes))
    return bytes(codes).decode("ascii")


DECODERS = {
    "nat": natify,
    "bool": boolify,
    "str": stringify,
    "list": listify(natify),
}
