# agent_dialogs/memory/scopes/settings.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Read-only application settings."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from ...config import load_settings
from ..constants import CONFIGURATION_KEY, ScopePath, SETTINGS_KEY
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext


class SettingsMemoryScope(MemoryScope):
    """``settings``: nested configuration values.

    Uses the settings given at construction; otherwise expands the flat
    mapping registered in turn_state under ``"configuration"`` (keys like
    ``luis:endpoint`` or ``LUIS__ENDPOINT``). The result is cached in
    turn_state for the rest of the turn.
    """

    def __init__(self, initial_settings: Optional[dict[str, Any]] = None):
        super().__init__(ScopePath.SETTINGS, include_in_snapshot=False)
        self.initial_settings = initial_settings

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        turn_state = dialog_context.context.turn_state
        settings = turn_state.get(SETTINGS_KEY)
        if settings is None:
            if self.initial_settings is not None:
                settings = self.initial_settings
            else:
                configuration = turn_state.get(CONFIGURATION_KEY)
                settings = load_settings(configuration) if isinstance(configuration, Mapping) else {}
            turn_state[SETTINGS_KEY] = settings
        return settings
