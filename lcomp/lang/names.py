"""Reserved words of the surface language and the source of every primitive in the bootstrap environment.

Primitives are written in the surface language itself and may use multi-parameter λs and special forms: the
desugarer curries them like any other program. Every primitive is a closed term, so they can be inlined into each
other's source freely; PRIMITIVES also lists them in dependency order for the bootstrap.

Source: https://en.wikipedia.org/wiki/Church_encoding
"""

from lcomp.pure.term import LAMBDA


VOID = "nothing"
LAMBDA_ALIAS = "lambda"
QUOTE = "quote"
DEFINE = "define"  # only meaningful at the top level of a Session

# Booleans and conditionals
TRUE = "#t"
FALSE = "#f"
IF = "if"
AND = "and"
OR = "or"
NOT = "not"

# Numerals
IS_ZERO = "zero?"
SUCC = "succ"
PRED = "pred"
SUM = "+"
SUB = "-"
MUL = "*"
POW = "^"
MOD = "%"
DIV = "/"
EQ = "="
NE = "!="
LE = "<="
GE = ">="
LT = "<"
GT = ">"

# Lists
NIL = "nil"
CONS = "cons"
CAR = "car"
CDR = "cdr"
IS_PAIR = "pair?"
IS_NULL = "null?"

# Bindings
LET = "let"
LET_REC = "letrec"

# Combinators
Y = "Y"
ERROR = "error"

KEYWORDS = [LAMBDA, LAMBDA_ALIAS, IF, AND, OR, LET, LET_REC, QUOTE]


# Ω behind a throwaway parameter: the object language has no exceptions, so an error is a term that never returns
S_ERROR = f"({LAMBDA} (_) (({LAMBDA} (f) (f f)) ({LAMBDA} (f) (f f))))"

# applicative-order fixed point combinator; the η-expanded (λ (x) ...) keeps strict evaluation from unrolling forever
# https://www.slideshare.net/yinwang0/reinventing-the-ycombinator
S_Y = (f"(({LAMBDA} (y) ({LAMBDA} (F) (F ({LAMBDA} (x) (((y y) F) x))))) "
       f"({LAMBDA} (y) ({LAMBDA} (F) (F ({LAMBDA} (x) (((y y) F) x))))))")

S_VOID = f"({LAMBDA} ({VOID}) {VOID})"

S_NIL = f"({LAMBDA} (on_cons on_nil) (on_nil {S_VOID}))"

# booleans select a thunk and force it with void
S_TRUE = f"({LAMBDA} (t f) (t {S_VOID}))"
S_FALSE = f"({LAMBDA} (t f) (f {S_VOID}))"

S_THUNK_TRUE = f"({LAMBDA} (_) {S_TRUE})"
S_THUNK_FALSE = f"({LAMBDA} (_) {S_FALSE})"

S_NOT = f"({LAMBDA} (b) (b {S_THUNK_FALSE} {S_THUNK_TRUE}))"

S_IS_ZERO = f"({LAMBDA} (n) ((n {S_THUNK_FALSE}) {S_TRUE}))"

S_SUCC = f"({LAMBDA} (n f z) (f (n f z)))"

S_SUM = f"({LAMBDA} (n m f z) (m f (n f z)))"

S_MUL = f"({LAMBDA} (n m f z) (m (n f) z))"

S_ONE = f"({LAMBDA} (f z) (f z))"

S_POW = f"({LAMBDA} (m n) ((n ({S_MUL} m)) {S_ONE}))"

S_PRED = f"({LAMBDA} (n f z) (n ({LAMBDA} (g h) (h (g f))) ({LAMBDA} (u) z) ({LAMBDA} (u) u)))"

# monus: there are no negative naturals, so m - n is 0 whenever n > m
S_SUB = f"({LAMBDA} (n m) (m {S_PRED} n))"

S_EQ = f"({LAMBDA} (x y) ({AND} ({S_IS_ZERO} ({S_SUB} x y)) ({S_IS_ZERO} ({S_SUB} y x))))"

S_NE = f"({LAMBDA} (x y) ({S_NOT} ({S_EQ} x y)))"

S_LE = f"({LAMBDA} (m n) ({S_IS_ZERO} ({S_SUB} m n)))"
S_GE = f"({LAMBDA} (m n) ({S_IS_ZERO} ({S_SUB} n m)))"

S_LT = f"({LAMBDA} (m n) ({AND} ({S_LE} m n) ({S_NE} m n)))"
S_GT = f"({LAMBDA} (m n) ({AND} ({S_GE} m n) ({S_NE} m n)))"

# (Y (λ (mod) (λ (m n) (if (<= n m) (mod (- m n) n) m)))), diverging on n = 0
S_MOD = (f"({S_Y} ({LAMBDA} (mod) ({LAMBDA} (m n) "
         f"({IF} ({S_EQ} n 0) {S_ERROR} ({IF} ({S_LE} n m) (mod ({S_SUB} m n) n) m)))))")
S_DIV = (f"({S_Y} ({LAMBDA} (div) ({LAMBDA} (m n) "
         f"({IF} ({S_EQ} n 0) {S_ERROR} ({IF} ({S_LE} n m) ({S_SUM} 1 (div ({S_SUB} m n) n)) 0)))))")

S_CONS = f"({LAMBDA} (car cdr on_cons on_nil) (on_cons car cdr))"

S_CAR = f"({LAMBDA} (list) (list ({LAMBDA} (car cdr) car) {S_ERROR}))"
S_CDR = f"({LAMBDA} (list) (list ({LAMBDA} (car cdr) cdr) {S_ERROR}))"

S_IS_PAIR = f"({LAMBDA} (list) (list ({LAMBDA} (_) {S_THUNK_TRUE}) {S_THUNK_FALSE}))"
S_IS_NULL = f"({LAMBDA} (list) (list ({LAMBDA} (_) {S_THUNK_FALSE}) {S_THUNK_TRUE}))"


PRIMITIVES = {
    VOID: S_VOID,
    Y: S_Y,
    ERROR: S_ERROR,

    # Booleans
    TRUE: S_TRUE,
    FALSE: S_FALSE,
    NOT: S_NOT,

    # Numerals
    IS_ZERO: S_IS_ZERO,
    SUCC: S_SUCC,
    PRED: S_PRED,
    SUM: S_SUM,
    MUL: S_MUL,
    POW: S_POW,
    SUB: S_SUB,
    EQ: S_EQ,
    NE: S_NE,
    LE: S_LE,
    GE: S_GE,
    LT: S_LT,
    GT: S_GT,
    MOD: S_MOD,
    DIV: S_DIV,

    # Lists
    NIL: S_NIL,
    CONS: S_CONS,
    CAR: S_CAR,
    CDR: S_CDR,
    IS_PAIR: S_IS_PAIR,
    IS_NULL: S_IS_NULL,
}
