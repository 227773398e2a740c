"""Compiles Scheme-like source files to closed λ-terms, or runs the interactive compiler shell. Also uses the error
handling context manager. Called from the lcomp console script.
"""

import argparse

from lcomp.lang.error import ErrorHandler
from lcomp.lang.ffi import DECODERS
from lcomp.lang.session import Session
from lcomp.lang.shell import Shell
from lcomp.pure.printers import TARGETS


def main(argv=None):
    """Runs lcomp. Called from the lcomp console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lcomp", description="Scheme to λ-calculus compiler")
        parser.add_argument("file", help="file to compile (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-t", "--target", help="notation of the output", choices=sorted(TARGETS),
                            default="scheme")
        parser.add_argument("-d", "--decode", help="run each form and decode its result instead of printing it",
                            choices=sorted(DECODERS))
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, args.target, args.decode, cmd_line=False)
            sess.load()
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, args.target, args.decode, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
