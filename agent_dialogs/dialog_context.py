# agent_dialogs/dialog_context.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Live dialog-execution context: one level of the dialog stack tree."""

from typing import TYPE_CHECKING, Optional

from .dialog import ContainerDialog, Dialog, DialogInstance, DialogState
from .dialog_set import DialogSet
from .turn_context import TurnContext

if TYPE_CHECKING:
    from .memory.state_manager import DialogStateManager


class DialogContext:
    """A dialog stack bound to a dialog set and the current turn.

    Contexts form a tree: a container dialog's child stack gets its own
    context whose ``parent`` is the container's context.

    Attributes:
        dialogs: Definitions that can run on this stack.
        context: The current turn.
        parent: Context of the enclosing container, None at the root.
    """

    def __init__(
        self,
        dialogs: DialogSet,
        context: TurnContext,
        state: DialogState,
        parent: Optional["DialogContext"] = None,
    ):
        self.dialogs = dialogs
        self.context = context
        self.parent = parent
        self._dialog_state = state
        self._state_manager: Optional["DialogStateManager"] = None

    @property
    def stack(self) -> list[DialogInstance]:
        return self._dialog_state.dialog_stack

    @property
    def active_dialog(self) -> Optional[DialogInstance]:
        """The innermost running dialog, or None for an empty stack."""
        return self.stack[-1] if self.stack else None

    @property
    def child(self) -> Optional["DialogContext"]:
        """Context of the active dialog's child stack, if it is a container."""
        instance = self.active_dialog
        if instance is None:
            return None
        dialog = self.find_dialog(instance.id)
        if isinstance(dialog, ContainerDialog):
            return dialog.create_child_context(self)
        return None

    def find_dialog(self, dialog_id: str) -> Optional[Dialog]:
        """Find a definition in this context's set, then in the parents'."""
        dialog = self.dialogs.find(dialog_id)
        if dialog is None and self.parent is not None:
            dialog = self.parent.find_dialog(dialog_id)
        return dialog

    @property
    def state(self) -> "DialogStateManager":
        """Path-addressable memory view over this context."""
        if self._state_manager is None:
            from .memory.state_manager import DialogStateManager

            self._state_manager = DialogStateManager(self)
        return self._state_manager
