import unittest
from unittest import mock

from lcomp.lang.error import DecodeError
from lcomp.lang.ffi import DECODERS, Pair, boolify, listify, natify, stringify, to_host
from lcomp.lang.parser import parse
from lcomp.lang.compiler import desugar
from lcomp.lang.session import Session
from lcomp.pure.environment import Environment


FACTORIAL = """
(letrec ((f (λ (n)
              (if (= n 0)
                  1
                  (* n (f (- n 1)))))))
  (f 5))
"""


class UnChurchificationTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.session = Session()

    def nat(self, source):
        return self.session.run(source, natify)

    def bool(self, source):
        return self.session.run(source, boolify)

    def test_numerals(self):
        for num in range(21):
            self.assertEqual(num, self.nat(str(num)), num)

    def test_booleans(self):
        cases = {
            "#t": True,
            "#f": False,
            "(and #t #t)": True,
            "(and #t #f)": False,
            "(and #f #t)": False,
            "(or #f #f)": False,
            "(or #t #f)": True,
            "(or #f #t)": True,
            "(not #t)": False,
            "(not #f)": True,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.bool(case), case)

    def test_arithmetic(self):
        cases = {
            "(+ 0 0)": 0,
            "(+ 0 1)": 1,
            "(+ 3 4)": 7,
            "(- 3 1)": 2,
            "(- 3 4)": 0,
            "(- 0 1)": 0,
            "(* 0 2)": 0,
            "(* 3 4)": 12,
            "(^ 2 3)": 8,
            "(^ 3 0)": 1,
            "(/ 7 2)": 3,
            "(/ 2 7)": 0,
            "(% 7 3)": 1,
            "(% 6 3)": 0,
            "(succ 4)": 5,
            "(pred 4)": 3,
            "(pred 0)": 0,
            "(let ((x 3) (y 4)) (+ x y))": 7,
            "(if (zero? 0) 1 2)": 1,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.nat(case), case)

    def test_comparisons(self):
        cases = {
            "(zero? 0)": True,
            "(zero? 2)": False,
            "(= 3 3)": True,
            "(= 3 4)": False,
            "(!= 3 4)": True,
            "(!= 4 4)": False,
            "(< 2 3)": True,
            "(< 3 3)": False,
            "(> 3 2)": True,
            "(> 2 3)": False,
            "(<= 3 3)": True,
            "(>= 2 3)": False,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.bool(case), case)

    def test_lists(self):
        churched = to_host(self.session.compile("(cons 3 (cons 4 (quote ())))"))
        self.assertEqual(Pair.of(3, 4), listify(natify, churched))
        self.assertEqual(Pair(3, Pair(4, Pair())), listify(natify)(churched))
        self.assertEqual("(3 (4 nil))", repr(listify(natify, churched)))
        self.assertEqual(Pair(), DECODERS["list"](to_host(self.session.compile("nil"))))

        self.assertEqual(3, self.nat("(car (cons 3 4))"))
        self.assertEqual(4, self.nat("(cdr (cons 3 4))"))

        cases = {
            "(null? (quote ()))": True,
            "(null? (cons 3 4))": False,
            "(pair? (cons 3 4))": True,
            "(pair? (quote ()))": False,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.bool(case), case)

    def test_nested_lists(self):
        churched = to_host(self.session.compile("(cons (cons 1 (quote ())) (cons (quote ()) (quote ())))"))
        self.assertEqual(Pair.of(Pair.of(1), Pair()), listify(listify(natify), churched))

    def test_strings(self):
        cases = ["Hello", "", "a (b) ; c"]
        for case in cases:
            self.assertEqual(case, self.session.run(f"\"{case}\"", stringify), case)

    def test_recursion(self):
        self.assertEqual(120, self.nat(FACTORIAL))

    def test_open_term(self):
        sentinel = object()
        env = Environment(bindings={"f": lambda a: a, "x": sentinel})
        self.assertIs(sentinel, to_host(desugar(parse("(f x)")), env))

    def test_decode_mismatch(self):
        cases = {
            boolify: "0",
            natify: "#t",
            DECODERS["list"]: "(cons 3 4)",
            stringify: "(cons 200 (quote ()))",
        }
        for decoder, source in cases.items():
            self.assertRaises(DecodeError, decoder, to_host(self.session.compile(source)))

    def test_division_by_zero_diverges(self):
        with mock.patch("lcomp.pure.term.RECURSION_LIMIT", 5000):
            should_diverge = ["(/ 1 0)", "(% 1 0)", "(car (quote ()))"]
            for case in should_diverge:
                with self.assertRaises(RecursionError):
                    natify(to_host(self.session.compile(case)))


class PairTestCase(unittest.TestCase):

    def test_of(self):
        self.assertTrue(Pair.of().is_nil)
        self.assertEqual([1, 2, 3], Pair.of(1, 2, 3).to_list())
        self.assertEqual(3, len(Pair.of(1, 2, 3)))
        self.assertEqual(0, len(Pair()))

    def test_equality(self):
        self.assertEqual(Pair.of(1, 2), Pair(1, Pair(2, Pair())))
        self.assertNotEqual(Pair.of(1, 2), Pair.of(1))
        self.assertNotEqual(Pair.of(1), [1])
        self.assertEqual(hash(Pair.of(1, 2)), hash(Pair.of(1, 2)))

    def test_repr(self):
        cases = {"nil": Pair(), "(1 nil)": Pair.of(1), "((1 nil) (2 nil))": Pair.of(Pair.of(1), 2)}
        for expected, pair in cases.items():
            self.assertEqual(expected, repr(pair), expected)


if __name__ == '__main__':
    unittest.main()
