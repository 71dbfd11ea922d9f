# agent_dialogs/memory/scopes/class_scope.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Read-only views of dialog definitions (class, dialogClass)."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from ...dialog import ContainerDialog, Dialog, ValueExpression
from ..constants import ScopePath
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext

logger = logging.getLogger(__name__)


class ClassMemoryScope(MemoryScope):
    """``class``: properties of the active dialog's definition.

    Returns a fresh copy on every read. Properties that are ValueExpressions
    are evaluated against the dialog state; ones that fail are left out.
    """

    def __init__(self, name: str = ScopePath.CLASS):
        super().__init__(name, include_in_snapshot=False)

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        if dialog_context.active_dialog is None:
            return {}
        dialog = self.on_find_dialog(dialog_context)
        if dialog is None:
            return {}

        clone: dict[str, Any] = {}
        for key, prop in dialog.memory_properties().items():
            if isinstance(prop, ValueExpression):
                value, error = prop.try_get_value(dialog_context.state)
                if error is not None:
                    logger.debug(f"Skipping {dialog.id}.{key}: {error}")
                    continue
                clone[key] = value
            else:
                clone[key] = prop
        return clone

    def on_find_dialog(self, dialog_context: "DialogContext") -> Optional[Dialog]:
        return dialog_context.find_dialog(dialog_context.active_dialog.id)


class DialogClassMemoryScope(ClassMemoryScope):
    """``dialogClass``: properties of the nearest container's definition.

    Uses the active dialog if it is a container, else the parent context's
    active dialog, else falls back to the active dialog.
    """

    def __init__(self):
        super().__init__(ScopePath.DIALOG_CLASS)

    def on_find_dialog(self, dialog_context: "DialogContext") -> Optional[Dialog]:
        dialog = dialog_context.find_dialog(dialog_context.active_dialog.id)
        if isinstance(dialog, ContainerDialog):
            return dialog

        parent = dialog_context.parent
        if parent is not None and parent.active_dialog is not None:
            parent_dialog = parent.find_dialog(parent.active_dialog.id)
            if parent_dialog is not None:
                return parent_dialog

        return dialog
