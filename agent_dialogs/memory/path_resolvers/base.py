# agent_dialogs/memory/path_resolvers/base.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Base path resolver interface."""

from abc import ABC, abstractmethod


class PathResolver(ABC):
    """Rewrites a shorthand path into a canonical, scope-qualified path.

    Implementations are pure: no side effects, and a path that carries no
    alias the resolver recognizes is returned unchanged.
    """

    @abstractmethod
    def transform_path(self, path: str) -> str:
        """Transform the path.

        Args:
            path: Path to inspect.

        Returns:
            The transformed path, or the input if nothing applies.
        """
        raise NotImplementedError()


class AliasPathResolver(PathResolver):
    """Replaces a leading alias with a prefix (and optional postfix).

    Only a leading alias is significant; an alias character in the middle of
    a path is part of a property name. A bare alias with nothing after it is
    left alone.
    """

    def __init__(self, alias: str, prefix: str, postfix: str = ""):
        self.alias = alias.strip()
        self.prefix = prefix.strip()
        self.postfix = postfix.strip()

    def transform_path(self, path: str) -> str:
        path = path.strip()
        if path.startswith(self.alias) and len(path) > len(self.alias):
            return f"{self.prefix}{path[len(self.alias):]}{self.postfix}"
        return path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.alias!r} -> {self.prefix!r})"
