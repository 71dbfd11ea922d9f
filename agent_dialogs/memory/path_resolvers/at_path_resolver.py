# agent_dialogs/memory/path_resolvers/at_path_resolver.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""The ``@`` alias: first value of a recognized entity."""

from ..constants import FIRST_FUNCTION, TurnPath
from .base import AliasPathResolver


class AtPathResolver(AliasPathResolver):
    """Resolves ``@entity`` to the entity's first recognized value.

    ``@city`` -> ``turn.recognized.entities.city.first()``
    ``@city.name`` -> ``turn.recognized.entities.city.first().name``
    ``@city[0]`` -> ``turn.recognized.entities.city.first()[0]``

    The entity name ends at the earliest ``.`` or ``[``, or at the end of the
    path. ``@@`` paths are left to AtAtPathResolver.
    """

    PREFIX = f"{TurnPath.ENTITIES}."
    DELIMITERS = (".", "[")

    def __init__(self):
        super().__init__("@", "")

    def transform_path(self, path: str) -> str:
        path = path.strip()
        if not path.startswith("@") or len(path) <= 1 or path.startswith("@@"):
            return path

        end = len(path)
        for delim in self.DELIMITERS:
            index = path.find(delim)
            if 0 <= index < end:
                end = index

        entity = path[1:end]
        suffix = path[end:]
        return f"{self.PREFIX}{entity}.{FIRST_FUNCTION}{suffix}"
