"""lcomp: compiles a small Scheme-like language to closed terms of the pure λ-calculus, renders them as scheme, json,
js or py, and runs them through Church-encoding decoders.

>>> from lcomp import compile, natify, scheme, to_host
>>> natify(to_host(compile("(+ 3 4)")))
7
>>> scheme(compile("(λ (x y) x)"))
'(λ (x) (λ (y) x))'
"""

from lcomp.lang.compiler import boot_env, compile, desugar, expand
from lcomp.lang.error import DecodeError, DesugarError, GenericException, ParseError, RedefinitionError, \
    UnboundNameError
from lcomp.lang.ffi import Pair, boolify, listify, natify, stringify, to_host
from lcomp.lang.parser import parse
from lcomp.lang.session import Session
from lcomp.pure.environment import Environment
from lcomp.pure.printers import TARGETS, js, json, py, render, scheme
from lcomp.pure.term import Abs, App, SymbolTable, Var
