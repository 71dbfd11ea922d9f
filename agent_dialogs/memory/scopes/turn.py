# agent_dialogs/memory/scopes/turn.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Ephemeral per-turn scratch memory."""

from typing import TYPE_CHECKING, Any

from ..constants import ScopePath, TURN_STATE_KEY
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext


class TurnMemoryScope(MemoryScope):
    """``turn``: a dict kept in turn_state, discarded when the turn ends."""

    read_only = False

    def __init__(self):
        super().__init__(ScopePath.TURN)

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        turn_state = dialog_context.context.turn_state
        memory = turn_state.get(TURN_STATE_KEY)
        if not isinstance(memory, (dict, list)):
            memory = {}
            turn_state[TURN_STATE_KEY] = memory
        return memory

    def get_memory_for_update(self, dialog_context: "DialogContext") -> Any:
        return self.get_memory(dialog_context)

    def set_memory(self, dialog_context: "DialogContext", memory: Any) -> None:
        self._require_memory(memory)
        dialog_context.context.turn_state[TURN_STATE_KEY] = memory
