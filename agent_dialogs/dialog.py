# agent_dialogs/dialog.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Dialog definitions, dialog instances and the container capability."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, Field

from .errors import AgentError, DialogConfigurationError, Errors, generate_exception

if TYPE_CHECKING:
    from .dialog_context import DialogContext
    from .dialog_set import DialogSet
    from .memory.state_manager import DialogStateManager

CHILD_DIALOG_STATE = "dialogs"


class DialogInstance(BaseModel):
    """A running dialog on the stack.

    Attributes:
        id: ID of the dialog definition.
        state: The instance's own mutable memory.
        version: Version of the definition when the instance started.
    """

    id: str
    state: Any = Field(default_factory=dict)
    version: Optional[str] = None


class DialogState(BaseModel):
    """A dialog stack. The active (innermost) dialog is last."""

    dialog_stack: list[DialogInstance] = Field(default_factory=list)


class ValueExpression(ABC):
    """A dialog property whose value is computed from memory."""

    @abstractmethod
    def try_get_value(self, state: "DialogStateManager") -> tuple[Any, Optional[Exception]]:
        """Evaluate against the dialog state.

        Returns:
            (value, None) on success, (None, error) on failure.
        """
        raise NotImplementedError()


class PathExpression(ValueExpression):
    """Expression that reads a memory path, e.g. ``PathExpression("$retries")``."""

    def __init__(self, path: str):
        self.path = path

    def try_get_value(self, state: "DialogStateManager") -> tuple[Any, Optional[Exception]]:
        try:
            return state.get_value(self.path), None
        except AgentError as e:
            return None, e

    def __repr__(self) -> str:
        return f"PathExpression({self.path!r})"


class Dialog:
    """Base class for dialog definitions.

    A definition is static: runtime data lives in DialogInstance.state. The
    definition's public, non-callable attributes are exposed read-only
    through the ``class`` and ``dialogClass`` memory scopes.
    """

    def __init__(self, dialog_id: Optional[str] = None):
        self._id = dialog_id

    @property
    def id(self) -> str:
        if self._id is None:
            self._id = self.on_compute_id()
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        self._id = value

    def get_version(self) -> str:
        """Version used to detect changed dialog sets. Defaults to the ID."""
        return self.id

    def on_compute_id(self) -> str:
        """Compute an ID when none was given. Subclasses override this."""
        raise generate_exception(DialogConfigurationError, Errors.ON_COMPUTE_ID_NOT_IMPLEMENTED)

    def memory_properties(self) -> dict[str, Any]:
        """Public, non-callable attributes, plus ``id``."""
        properties: dict[str, Any] = {"id": self.id}
        for key, value in vars(self).items():
            if key.startswith("_") or callable(value):
                continue
            properties[key] = value
        return properties


class DialogDependencies(ABC):
    """Capability of dialogs that need other dialogs added alongside them."""

    @abstractmethod
    def get_dependencies(self) -> list[Dialog]:
        raise NotImplementedError()


class ContainerDialog(Dialog):
    """A dialog that hosts child dialogs and owns their collective state.

    The child stack is kept in the container instance's state under
    ``"dialogs"``, so the ``dialog`` memory scope of a child binds to the
    container's state.
    """

    def __init__(self, dialog_id: Optional[str] = None):
        super().__init__(dialog_id)
        from .dialog_set import DialogSet

        self._dialogs = DialogSet()

    @property
    def dialogs(self) -> "DialogSet":
        return self._dialogs

    def add_dialog(self, dialog: Dialog) -> "ContainerDialog":
        self._dialogs.add(dialog)
        return self

    def find_dialog(self, dialog_id: str) -> Optional[Dialog]:
        return self._dialogs.find(dialog_id)

    def get_version(self) -> str:
        return f"{self.id}:{self._dialogs.get_version()}"

    def create_child_context(
        self, dc: "DialogContext", persist: bool = True
    ) -> Optional["DialogContext"]:
        """Build the context for this container's child stack.

        Args:
            dc: Context whose active dialog is an instance of this container.
            persist: Store a created or converted child stack in the instance
                state. Read-only walks pass False to leave state untouched.

        Returns:
            Child DialogContext, or None if the instance has no dict state.
        """
        from .dialog_context import DialogContext

        instance = dc.active_dialog
        if instance is None or not isinstance(instance.state, dict):
            return None

        child_state = instance.state.get(CHILD_DIALOG_STATE)
        if not isinstance(child_state, DialogState):
            if isinstance(child_state, dict):
                child_state = DialogState.model_validate(child_state)
            else:
                child_state = DialogState()
            if persist:
                instance.state[CHILD_DIALOG_STATE] = child_state

        return DialogContext(self._dialogs, dc.context, child_state, parent=dc)
