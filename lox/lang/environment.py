"""Lexical scope for the lox language. Environments form a singly-linked chain through their enclosing attribute: the
global environment is the root, and every block that is entered gets a child of the environment active when it began.
"""

from lox.lang.error import LoxRuntimeError


class Environment:
    """Mapping of variable name to value, with an optional enclosing Environment."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Binds name in this environment only. Redefinition overwrites; a same-named binding in an enclosing
        environment is shadowed, not touched.
        """
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest environment that defines it."""
        env = self._resolve(name)
        return env.values[name.lexeme]

    def assign(self, name, value):
        """Overwrites the binding of token name in the nearest environment that defines it and returns the previous
        value. Assigning to a name that was never declared is an error.
        """
        env = self._resolve(name)
        previous = env.values[name.lexeme]
        env.values[name.lexeme] = value
        return previous

    def _resolve(self, name):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env
            env = env.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __repr__(self):
        return f"Environment(values={self.values!r}, enclosing={self.enclosing!r})"
