"""Natural numbers, strings and lists encoded in the surface language. Note that operations on them are not
implemented here (see names.PRIMITIVES) and that every encoding is built as surface syntax, so the desugarer turns it
into λ-terms like any other program and the FFI bridge needs no separate encoder.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lcomp.lang.error import DesugarError
from lcomp.lang.names import CONS, FALSE, QUOTE, TRUE
from lcomp.lang.parser import Atom, Int, Str, tuple_of
from lcomp.pure.term import LAMBDA, Abs, App, Var


def cnumber(num):
    """Returns the Church numeral of num as surface syntax: (λ (f z) (f (f ... (f z))))."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise DesugarError("expected natural number, got '{}'", str(num))

    f, z = Atom("f"), Atom("z")
    applied = z
    for __ in range(num):
        applied = tuple_of(f, applied)
    return tuple_of(Atom(LAMBDA), tuple_of(f, z), applied)


def clist(nodes):
    """Returns surface syntax for the list of nodes: (cons n1 (cons n2 ... (quote ())))."""
    result = tuple_of(Atom(QUOTE), tuple_of())
    for node in reversed(nodes):
        result = tuple_of(Atom(CONS), node, result)
    return result


def cstring(string):
    """Returns surface syntax for string as a list of character-code numerals."""
    return clist([Int(ord(char)) for char in string])


def encode(value):
    """Returns surface syntax for a host value: bool, natural number, str, or (nested) list/tuple of those."""
    if isinstance(value, bool):
        return Atom(TRUE if value else FALSE)
    elif isinstance(value, int):
        return Int(value)
    elif isinstance(value, str):
        return Str(value)
    elif isinstance(value, (list, tuple)):
        return clist([encode(item) for item in value])
    raise DesugarError("'{}' has no Church encoding", repr(value))


def number(cnum):
    """Returns int given a Church numeral λ-term, structurally (no evaluation). If cnum isn't one, returns None.
    Inspection helper for compiled terms: nothing in the pipeline depends on it, natify decodes by running instead.
    """
    if not isinstance(cnum, Abs) or not isinstance(cnum.body, Abs):
        return None

    f, z = cnum.param, cnum.body.param
    if f == z:
        return None

    num = 0
    body = cnum.body.body
    while isinstance(body, App):
        if body.operator != f:
            return None
        body = body.operand
        num += 1

    return num if isinstance(body, Var) and body == z else None
