# agent_dialogs/memory/scopes/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Memory scopes: named regions of dialog memory."""

from .base import MemoryScope
from .turn import TurnMemoryScope
from .agent_state import AgentStateMemoryScope, UserMemoryScope, ConversationMemoryScope
from .dialog import DialogMemoryScope, ThisMemoryScope, is_container
from .class_scope import ClassMemoryScope, DialogClassMemoryScope
from .dialog_context import DialogContextMemoryScope
from .settings import SettingsMemoryScope

__all__ = [
    "MemoryScope",
    "TurnMemoryScope",
    "AgentStateMemoryScope",
    "UserMemoryScope",
    "ConversationMemoryScope",
    "DialogMemoryScope",
    "ThisMemoryScope",
    "is_container",
    "ClassMemoryScope",
    "DialogClassMemoryScope",
    "DialogContextMemoryScope",
    "SettingsMemoryScope",
]
