# agent_dialogs/state/agent_state.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""User and conversation state persisted between turns."""

from abc import ABC, abstractmethod
import hashlib
import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..turn_context import TurnContext
from .storage import ETAG_ANY, ETAG_KEY, Storage, json_default

logger = logging.getLogger(__name__)


class CachedAgentState(BaseModel):
    """State loaded for the current turn plus its change hash."""

    state: dict[str, Any] = Field(default_factory=dict)
    hash: str = ""


def calculate_change_hash(state: dict[str, Any]) -> str:
    """Hash a state object, ignoring its eTag."""
    rest = {key: value for key, value in state.items() if key != ETAG_KEY}
    payload = json.dumps(rest, sort_keys=True, default=json_default)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class AgentState(ABC):
    """Base class for state persisted in a Storage under a per-turn key.

    The loaded object is cached in ``turn_state`` for the rest of the turn.
    Memory scopes read and mutate that cached object in place;
    ``save_changes`` writes it back only when its hash changed.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.state_key = f"{type(self).__name__}:cache"

    @abstractmethod
    def get_storage_key(self, context: TurnContext) -> str:
        """Compute the storage key for the turn.

        Raises:
            ValueError: If the activity lacks a required identifier.
        """
        raise NotImplementedError()

    def _cached(self, context: TurnContext) -> Optional[CachedAgentState]:
        return context.turn_state.get(self.state_key)

    async def load(self, context: TurnContext, force: bool = False) -> dict[str, Any]:
        """Load state into the turn cache, reading storage if needed.

        Args:
            context: Current turn.
            force: Re-read storage even if already cached.

        Returns:
            The cached state object.
        """
        cached = self._cached(context)
        if force or cached is None:
            key = self.get_storage_key(context)
            logger.debug(f"Reading storage with key {key}")
            items = await self.storage.read([key])
            state = items.get(key) or {}
            cached = CachedAgentState(state=state, hash=calculate_change_hash(state))
            context.turn_state[self.state_key] = cached
        return cached.state

    async def save_changes(self, context: TurnContext, force: bool = False) -> None:
        """Write the cached state back if it changed (or when forced)."""
        cached = self._cached(context)
        if not force and (cached is None or cached.hash == calculate_change_hash(cached.state)):
            return
        if cached is None:
            cached = CachedAgentState()

        cached.state[ETAG_KEY] = ETAG_ANY
        key = self.get_storage_key(context)
        logger.debug(f"Writing storage with key {key}")
        await self.storage.write({key: cached.state})
        cached.hash = calculate_change_hash(cached.state)
        context.turn_state[self.state_key] = cached

    def clear(self, context: TurnContext) -> None:
        """Replace the cached state with an empty object that will be saved."""
        context.turn_state[self.state_key] = CachedAgentState()

    async def delete(self, context: TurnContext) -> None:
        """Drop the cached state and delete it from storage."""
        context.turn_state.pop(self.state_key, None)
        key = self.get_storage_key(context)
        logger.debug(f"Deleting storage with key {key}")
        await self.storage.delete([key])

    def get(self, context: TurnContext) -> Optional[dict[str, Any]]:
        """Return the cached state, or None if it was not loaded this turn."""
        cached = self._cached(context)
        return cached.state if cached is not None else None


def _require(value: Optional[str], name: str) -> str:
    if not value:
        raise ValueError(f"missing activity.{name}")
    return value


class UserState(AgentState):
    """State keyed by channel and user: ``<channelId>/users/<userId>``."""

    def get_storage_key(self, context: TurnContext) -> str:
        activity = context.activity
        channel_id = _require(activity.channel_id, "channelId")
        user_id = _require(activity.from_property.id if activity.from_property else None, "from.id")
        return f"{channel_id}/users/{user_id}"


class ConversationState(AgentState):
    """State keyed by channel and conversation: ``<channelId>/conversations/<conversationId>``."""

    def get_storage_key(self, context: TurnContext) -> str:
        activity = context.activity
        channel_id = _require(activity.channel_id, "channelId")
        conversation_id = _require(
            activity.conversation.id if activity.conversation else None, "conversation.id"
        )
        return f"{channel_id}/conversations/{conversation_id}"
