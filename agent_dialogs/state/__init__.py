# agent_dialogs/state/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""State persistence: storage providers and per-turn agent state."""

from .storage import Storage, MemoryStorage, StoreItems
from .redis_storage import RedisStorage
from .agent_state import AgentState, UserState, ConversationState, CachedAgentState

__all__ = [
    "Storage",
    "MemoryStorage",
    "RedisStorage",
    "StoreItems",
    "AgentState",
    "UserState",
    "ConversationState",
    "CachedAgentState",
]
