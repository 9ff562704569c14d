# src/monkey/environment.py

class Environment:
    """A scope: name bindings plus an optional link to the enclosing scope.

    Function objects hold a reference to the Environment they were defined
    in, and every call creates a new Environment whose ``outer`` is that
    captured scope, never the caller's.  Environments are shared by
    reference, so a binding made later in an outer scope is visible to every
    closure that captured it.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def __contains__(self, name):
        if name in self.store:
            return True
        if self.outer is not None:
            return name in self.outer
        return False

    def get(self, name, default=None):
        """Look ``name`` up here, then in each enclosing scope in turn."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return default

    def set(self, name, value):
        """Bind ``name`` in this scope, shadowing any outer binding."""
        self.store[name] = value
        return value

    def depth(self):
        """Number of scopes between this one and the root (the root is 0)."""
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return depth

    def __repr__(self):
        return f"Environment(names={sorted(self.store)}, depth={self.depth()})"
