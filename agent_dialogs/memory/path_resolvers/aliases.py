# agent_dialogs/memory/path_resolvers/aliases.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Built-in single-prefix aliases."""

from ..constants import ScopePath, TurnPath
from .base import AliasPathResolver


class DollarPathResolver(AliasPathResolver):
    """``$name`` -> ``dialog.name``"""

    def __init__(self):
        super().__init__("$", f"{ScopePath.DIALOG}.")


class HashPathResolver(AliasPathResolver):
    """``#Intent`` -> ``turn.recognized.intents.Intent``"""

    def __init__(self):
        super().__init__("#", f"{TurnPath.INTENTS}.")


class PercentPathResolver(AliasPathResolver):
    """``%prop`` -> ``class.prop``"""

    def __init__(self):
        super().__init__("%", f"{ScopePath.CLASS}.")


class AtAtPathResolver(AliasPathResolver):
    """``@@entity`` -> ``turn.recognized.entities.entity`` (all values)"""

    def __init__(self):
        super().__init__("@@", f"{TurnPath.ENTITIES}.")
