# agent_dialogs/memory/scopes/agent_state.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Scopes backed by persisted agent state (user, conversation)."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from ...errors import Errors, MemoryBindingError, generate_exception
from ...state.agent_state import AgentState
from ..constants import CONVERSATION_STATE_KEY, ScopePath, USER_STATE_KEY
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext

logger = logging.getLogger(__name__)


class AgentStateMemoryScope(MemoryScope):
    """Binds to the cached object of an AgentState registered in turn_state.

    The AgentState must be registered under ``state_key`` and loaded (see
    ``DialogStateManager.load_all_scopes``) before writes are possible.
    The root object itself can never be replaced.
    """

    read_only = False

    def __init__(self, name: str, state_key: str):
        super().__init__(name)
        self.state_key = state_key

    def _agent_state(self, dialog_context: "DialogContext") -> Optional[AgentState]:
        return dialog_context.context.turn_state.get(self.state_key)

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        agent_state = self._agent_state(dialog_context)
        if agent_state is None:
            return {}
        memory = agent_state.get(dialog_context.context)
        if memory is None:
            logger.warning(f"{self.state_key} was read before being loaded")
            return {}
        return memory

    def get_memory_for_update(self, dialog_context: "DialogContext") -> Any:
        agent_state = self._agent_state(dialog_context)
        memory = agent_state.get(dialog_context.context) if agent_state is not None else None
        if memory is None:
            raise generate_exception(
                MemoryBindingError,
                Errors.STATE_KEY_NOT_AVAILABLE,
                params={"stateKey": self.state_key},
            )
        return memory

    def set_memory(self, dialog_context: "DialogContext", memory: Any) -> None:
        self._require_memory(memory)
        if self._agent_state(dialog_context) is None:
            raise generate_exception(
                MemoryBindingError,
                Errors.STATE_KEY_NOT_AVAILABLE,
                params={"stateKey": self.state_key},
            )
        raise generate_exception(MemoryBindingError, Errors.CANNOT_REPLACE_ROOT_AGENT_STATE)

    async def load(self, dialog_context: "DialogContext", force: bool = False) -> None:
        agent_state = self._agent_state(dialog_context)
        if agent_state is not None:
            await agent_state.load(dialog_context.context, force)

    async def save_changes(self, dialog_context: "DialogContext", force: bool = False) -> None:
        agent_state = self._agent_state(dialog_context)
        if agent_state is not None:
            await agent_state.save_changes(dialog_context.context, force)

    async def delete(self, dialog_context: "DialogContext") -> None:
        agent_state = self._agent_state(dialog_context)
        if agent_state is not None:
            await agent_state.delete(dialog_context.context)


class UserMemoryScope(AgentStateMemoryScope):
    """``user``: state that follows the user across conversations."""

    def __init__(self):
        super().__init__(ScopePath.USER, USER_STATE_KEY)


class ConversationMemoryScope(AgentStateMemoryScope):
    """``conversation``: state shared by everyone in the conversation."""

    def __init__(self):
        super().__init__(ScopePath.CONVERSATION, CONVERSATION_STATE_KEY)
