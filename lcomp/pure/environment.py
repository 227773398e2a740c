"""Scope chains mapping variable names to values.

The value domain is up to the owner: the expander binds names to Terms, the host compiler binds them to host
functions. A child scope only holds a reference to its parent, never the other way around.
"""

from lcomp.lang.error import RedefinitionError, UnboundNameError


class Environment:
    """One scope of a singly-linked chain. Names are bound at most once per scope; lookups walk outward to the root."""

    def __init__(self, parent=None, bindings=None):
        self.parent = parent
        self.bindings = {}

        for name, value in (bindings or {}).items():
            self.define(name, value)

    @staticmethod
    def _key(var):
        """Vars and plain strings are both accepted as names."""
        return var if isinstance(var, str) else var.name

    def define(self, var, value):
        """Binds var to value in this scope. Raises RedefinitionError if var is already bound here."""
        name = Environment._key(var)
        if name in self.bindings:
            raise RedefinitionError("'{}' is already defined in this scope", name)
        self.bindings[name] = value

    def lookup(self, var):
        """Returns the value of the innermost binding of var. Raises UnboundNameError if there is none."""
        name = Environment._key(var)
        env = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent
        raise UnboundNameError("'{}' is not defined", name)

    def child(self, bindings=None):
        """Returns a new scope whose parent is self."""
        return Environment(self, bindings)

    def names(self):
        """Names bound in this scope (not its parents), in definition order."""
        return list(self.bindings)

    def __contains__(self, var):
        name = Environment._key(var)
        env = self
        while env is not None:
            if name in env.bindings:
                return True
            env = env.parent
        return False

    def __len__(self):
        return len(self.bindings)

    def __repr__(self):
        return f"Environment(names={self.names()}, parent={'None' if self.parent is None else '...'})"
