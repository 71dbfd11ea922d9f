# agent_dialogs/memory/path_resolvers/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Path resolvers: shorthand alias expansion for memory paths."""

from .base import PathResolver, AliasPathResolver
from .aliases import (
    DollarPathResolver,
    HashPathResolver,
    PercentPathResolver,
    AtAtPathResolver,
)
from .at_path_resolver import AtPathResolver

__all__ = [
    "PathResolver",
    "AliasPathResolver",
    "DollarPathResolver",
    "HashPathResolver",
    "PercentPathResolver",
    "AtAtPathResolver",
    "AtPathResolver",
]
