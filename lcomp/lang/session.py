"""Session control for lcomp. A Session owns everything that lives longer than one compile call: the symbol table,
the bootstrap environment and any top-level definitions. It is used both to compile files and by the interactive
shell.

On top of the core language, a Session understands one top-level statement:

```
<define_stmt> ::= "(" "define" <name> <expr> ")"    ; binds name for every later form of the session
```

Every other top-level form is compiled, then rendered (or executed and decoded) when run is called.
"""

from lcomp.lang import compiler, names, numerical
from lcomp.lang.error import DesugarError, GenericException
from lcomp.lang.ffi import DECODERS, to_host
from lcomp.lang.parser import Atom, Tuple, parse, parse_all, tuple_of
from lcomp.pure.printers import TARGETS, render
from lcomp.pure.term import SymbolTable, deep_recursion


class Session:
    """Governs a lcomp session, with control over the scope of top-level definitions."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler=None, path=SH_FILE, target="scheme", decoder=None, cmd_line=False):
        self.error_handler = error_handler
        if self.error_handler is not None:
            self.error_handler.register_file(path)
            if cmd_line:
                self.error_handler.fatal = False

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.target = None   # printer used by run when there is no decoder
        self.decoder = None  # name of the DECODERS entry used by run, if any
        self.configure(target, decoder)

        self.symbols = SymbolTable()
        self.to_exec = []  # list of (line num, source form, closed term) waiting for run
        self.results = []  # rendered/decoded outputs of run

        self._env = None

    def configure(self, target="scheme", decoder=None):
        """Sets how run outputs terms: rendered in target notation, or executed and decoded if decoder is given."""
        if target not in TARGETS:
            raise GenericException("unknown target '{}'", target, diagnosis=False)
        if decoder is not None and decoder not in DECODERS:
            raise GenericException("unknown decoder '{}'", decoder, diagnosis=False)

        self.target = target
        self.decoder = decoder

    @property
    def env(self):
        """Innermost scope of the session: the bootstrap environment plus every definition so far."""
        if self._env is None:
            self._env = compiler.boot_env(self.symbols).child()
        return self._env

    def load(self, path=None):
        """Adds every form in the file at path (self.path by default)."""
        path = path if path is not None else self.path
        try:
            with open(path, "r") as file:
                source = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)
        self.add(source)

    def add(self, source, line_num=1):
        """Parses source and adds each of its top-level forms to the session. Definitions take effect immediately;
        other forms are compiled now and executed when run is called.
        """
        self._register(source, line_num)

        pending = []  # queued only once every form of source compiles
        with deep_recursion():
            for node in parse_all(source):
                if Session.is_define(node):
                    __, name, value = Session._define_form(node)
                    self.define(name.name, value)
                else:
                    pending.append((line_num, str(node), self.compile(node)))

        self.to_exec.extend(pending)
        self._unregister()

    def compile(self, source):
        """Compiles source (text or a parsed node) against the session's environment."""
        if isinstance(source, str):
            return compiler.compile(source, self.env, self.symbols)
        return compiler.expand(compiler.desugar(source, self.symbols), self.env)

    def define(self, name, source):
        """Binds name to the compiled source for the rest of the session. Redefining a name shadows it."""
        term = self.compile(source)
        if name in self.env and self.error_handler is not None:
            self.error_handler.warn("'{}' shadows an earlier definition", name)

        self._env = self.env.child()
        self._env.define(self.symbols.intern(name), term)
        return term

    def execute(self, term):
        """Renders term with self.target, or runs and decodes it with self.decoder."""
        if self.decoder is None:
            return render(term, self.target)
        return DECODERS[self.decoder](to_host(term))

    def run(self, source=None, decoder=None):
        """Without arguments, executes every pending form and appends the outputs to self.results. With source,
        compiles, executes and decodes (with decoder, a decoding function, if given) just that form and returns it.
        """
        if source is not None:
            term = self.compile(source)
            return decoder(to_host(term)) if decoder is not None else self.execute(term)

        pending, self.to_exec = self.to_exec, []  # a failing form is not retried by the next run
        for line_num, form, term in pending:
            self._register(form, line_num)
            self.results.append(self.execute(term))
            self._unregister()

    def call(self, source, *args, decoder=None):
        """Applies the function in source to host values, each Church-encoded by numerical.encode, and runs the
        application like run does: call("(λ (x y) (+ x y))", 3, 4, decoder=natify) returns 7.
        """
        return self.run(tuple_of(parse(source), *(numerical.encode(arg) for arg in args)), decoder)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)

    @staticmethod
    def is_define(node):
        return isinstance(node, Tuple) and node.elements and node.elements[0] == Atom(names.DEFINE)

    @staticmethod
    def _define_form(node):
        if len(node.elements) != 3 or not isinstance(node.elements[1], Atom):
            raise DesugarError("'{}' must have the form (define name expr)", str(node))
        return node.elements

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Joins a continued line onto add_to_prev. Returns the joined line and whether it still needs more input,
        i.e. whether its parentheses are unbalanced.
        """
        line = f"{add_to_prev}\n{line}" if add_to_prev else line
        return line, line.count("(") > line.count(")")

    def _register(self, source, line_num):
        if self.error_handler is not None:
            self.error_handler.register_line(self.path, source.strip().split("\n")[0], line_num)

    def _unregister(self):
        if self.error_handler is not None:
            self.error_handler.remove_line(self.path)
