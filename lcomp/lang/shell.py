"""Handles interactive/command-line mode for lcomp. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Scheme to λ-calculus compiler shell."""
    intro = "λ-calculus compiler :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Compiles an arbitrary form and prints its rendering."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_target(self, arg):
        """Switches the output notation: target scheme|json|js|py."""
        with self.sess.error_handler:
            self.sess.configure(arg.strip() or "scheme")

    def do_decode(self, arg):
        """Runs forms and decodes their results instead of printing them: decode nat|bool|str|list."""
        with self.sess.error_handler:
            self.sess.configure(self.sess.target, arg.strip() or None)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lcomp compiler!\n\n"
              "Every form you type is compiled to a closed term of the pure λ-calculus and\n"
              "printed. Special forms: λ (or lambda), if, and, or, let, letrec, quote.\n"
              "Use (define name expr) to name a term for later forms.\n\n"
              "Try '(+ 3 4)'. Then type 'decode nat' and try it again: the term is run and\n"
              "its Church numeral turned back into 7. 'target js' switches the notation.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits compiler shell."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits compiler shell."""
        return True
