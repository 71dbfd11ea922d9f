# agent_dialogs/memory/scopes/dialog.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Scopes bound to dialog instance state (dialog, this)."""

from typing import TYPE_CHECKING, Any, Optional

from ...dialog import ContainerDialog
from ...errors import Errors, MemoryBindingError, generate_exception
from ..constants import ScopePath
from .base import MemoryScope

if TYPE_CHECKING:
    from ...dialog_context import DialogContext


def _active_dialog_undefined() -> MemoryBindingError:
    return generate_exception(MemoryBindingError, Errors.ACTIVE_DIALOG_UNDEFINED)


def is_container(dialog_context: Optional["DialogContext"]) -> bool:
    """True if the context's active dialog is defined as a ContainerDialog."""
    if dialog_context is None or dialog_context.active_dialog is None:
        return False
    dialog = dialog_context.find_dialog(dialog_context.active_dialog.id)
    return isinstance(dialog, ContainerDialog)


class DialogMemoryScope(MemoryScope):
    """``dialog``: state of the nearest container dialog.

    Binds to the active dialog if it is a container; otherwise to the
    parent context's active dialog if that is a container. The walk stops
    there: with neither, the scope is unbound.
    """

    read_only = False

    def __init__(self):
        super().__init__(ScopePath.DIALOG)

    def bound_context(self, dialog_context: "DialogContext") -> Optional["DialogContext"]:
        if is_container(dialog_context):
            return dialog_context
        if is_container(dialog_context.parent):
            return dialog_context.parent
        return None

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        bound = self.bound_context(dialog_context)
        return bound.active_dialog.state if bound is not None else {}

    def get_memory_for_update(self, dialog_context: "DialogContext") -> Any:
        bound = self.bound_context(dialog_context)
        if bound is None:
            raise _active_dialog_undefined()
        return bound.active_dialog.state

    def set_memory(self, dialog_context: "DialogContext", memory: Any) -> None:
        self._require_memory(memory)
        bound = self.bound_context(dialog_context)
        if bound is None:
            raise _active_dialog_undefined()
        bound.active_dialog.state = memory


class ThisMemoryScope(MemoryScope):
    """``this``: state of the active dialog instance itself."""

    read_only = False

    def __init__(self):
        super().__init__(ScopePath.THIS)

    def get_memory(self, dialog_context: "DialogContext") -> Any:
        active = dialog_context.active_dialog
        return active.state if active is not None else {}

    def get_memory_for_update(self, dialog_context: "DialogContext") -> Any:
        active = dialog_context.active_dialog
        if active is None:
            raise _active_dialog_undefined()
        return active.state

    def set_memory(self, dialog_context: "DialogContext", memory: Any) -> None:
        self._require_memory(memory)
        active = dialog_context.active_dialog
        if active is None:
            raise _active_dialog_undefined()
        active.state = memory
