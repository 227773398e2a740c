import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from lcomp.main import main


PROGRAM = """
(define compose (λ (f g x) (f (g x))))
(compose succ succ 3)
(λ (x) x)
"""


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, source):
        path = os.path.join(self.tmp.name, "prog.scm")
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue().splitlines()

    def test_scheme(self):
        lines = self.run_main(self.write("(λ (x y) (y x))"))
        self.assertEqual(["(λ (x) (λ (y) (y x)))"], lines)

    def test_target(self):
        lines = self.run_main(self.write("(λ (x y) (y x))"), "-t", "js")
        self.assertEqual(["(x => (y => y(x)))"], lines)

    def test_decode(self):
        path = self.write(PROGRAM.replace("(λ (x) x)", "(* 2 3)"))
        self.assertEqual(["5", "6"], self.run_main(path, "--decode", "nat"))

    def test_errors_exit(self):
        should_exit = ["(λ (x) x", "(f 1)", "(define x)"]
        for case in should_exit:
            with self.assertRaises(SystemExit) as context:
                self.run_main(self.write(case))
            self.assertEqual(1, context.exception.code, case)

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as context:
            self.run_main(os.path.join(self.tmp.name, "missing.scm"))
        self.assertEqual(1, context.exception.code)

    def test_bad_arguments(self):
        with self.assertRaises(SystemExit) as context:
            with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
                main([self.write("1"), "-t", "c"])
        self.assertEqual(2, context.exception.code)


if __name__ == '__main__':
    unittest.main()
