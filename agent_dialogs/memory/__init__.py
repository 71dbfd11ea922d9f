# agent_dialogs/memory/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Dialog memory: scopes, path resolvers and the state manager."""

from .constants import (
    ScopePath,
    TurnPath,
    FIRST_FUNCTION,
    STATE_MANAGER_CONFIGURATION_KEY,
)
from .path import MISSING, Segment, parse_path
from .path_resolvers import (
    PathResolver,
    AliasPathResolver,
    DollarPathResolver,
    HashPathResolver,
    PercentPathResolver,
    AtAtPathResolver,
    AtPathResolver,
)
from .scopes import (
    MemoryScope,
    TurnMemoryScope,
    AgentStateMemoryScope,
    UserMemoryScope,
    ConversationMemoryScope,
    DialogMemoryScope,
    ThisMemoryScope,
    ClassMemoryScope,
    DialogClassMemoryScope,
    DialogContextMemoryScope,
    SettingsMemoryScope,
)
from .state_manager import DialogStateManager, DialogStateManagerConfiguration
from .component import DialogsComponentRegistration

__all__ = [
    "ScopePath",
    "TurnPath",
    "FIRST_FUNCTION",
    "STATE_MANAGER_CONFIGURATION_KEY",
    "MISSING",
    "Segment",
    "parse_path",
    "PathResolver",
    "AliasPathResolver",
    "DollarPathResolver",
    "HashPathResolver",
    "PercentPathResolver",
    "AtAtPathResolver",
    "AtPathResolver",
    "MemoryScope",
    "TurnMemoryScope",
    "AgentStateMemoryScope",
    "UserMemoryScope",
    "ConversationMemoryScope",
    "DialogMemoryScope",
    "ThisMemoryScope",
    "ClassMemoryScope",
    "DialogClassMemoryScope",
    "DialogContextMemoryScope",
    "SettingsMemoryScope",
    "DialogStateManager",
    "DialogStateManagerConfiguration",
    "DialogsComponentRegistration",
]
