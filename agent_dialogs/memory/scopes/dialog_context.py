# agent_dialogs/memory/scopes/dialog_context.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Reflection over the dialog stack tree."""

from typing import TYPE_CHECKING, Any, Optional

from ...dialog import ContainerDialog
from ..constants import ACTION_SCOPE_PREFIX, ScopePath
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext


def _peek_child(dialog_context: "DialogContext") -> Optional["DialogContext"]:
    """Child context of an active container, without storing a new child stack."""
    instance = dialog_context.active_dialog
    if instance is None:
        return None
    dialog = dialog_context.find_dialog(instance.id)
    if isinstance(dialog, ContainerDialog):
        return dialog.create_child_context(dialog_context, persist=False)
    return None


class DialogContextMemoryScope(MemoryScope):
    """``dialogContext``: ``{stack, activeDialog, parent}``.

    ``stack`` lists dialog ids from the leaf-most active dialog outward to
    the root, skipping internal ``ActionScope[`` entries.
    """

    def __init__(self):
        super().__init__(ScopePath.DIALOG_CONTEXT, include_in_snapshot=False)

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        current = dialog_context
        child = _peek_child(current)
        while child is not None:
            current = child
            child = _peek_child(current)

        stack: list[str] = []
        while current is not None:
            for instance in reversed(current.stack):
                if not instance.id.startswith(ACTION_SCOPE_PREFIX):
                    stack.append(instance.id)
            current = current.parent

        active = dialog_context.active_dialog
        parent = dialog_context.parent
        return {
            "stack": stack,
            "activeDialog": active.id if active is not None else None,
            "parent": parent.active_dialog.id
            if parent is not None and parent.active_dialog is not None
            else None,
        }
