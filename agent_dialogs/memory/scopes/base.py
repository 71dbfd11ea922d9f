# agent_dialogs/memory/scopes/base.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Base memory scope interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ...errors import Errors, MemoryBindingError, generate_exception

if TYPE_CHECKING:
    from ...dialog_context import DialogContext


class MemoryScope(ABC):
    """A named region of memory bound to an object reachable from a DialogContext.

    Reads are lenient: ``get_memory`` returns ``{}`` when nothing is bound.
    Writes are strict: ``get_memory_for_update`` and ``set_memory`` raise
    when there is no object a write could land on. The base implementation
    is read-only.

    Attributes:
        name: Scope name, the first segment of canonical paths.
        include_in_snapshot: Whether get_memory_snapshot includes the scope.
        read_only: Whether writes and deletes below the root are rejected.
    """

    read_only = True

    def __init__(self, name: str, include_in_snapshot: bool = True):
        self.name = name
        self.include_in_snapshot = include_in_snapshot

    @abstractmethod
    def get_memory(self, dialog_context: "DialogContext") -> Any:
        """Return the scope's backing object, ``{}`` if nothing is bound."""
        raise NotImplementedError()

    def get_memory_for_update(self, dialog_context: "DialogContext") -> Any:
        """Return the backing object that writes below the scope root mutate.

        Raises:
            MemoryBindingError: If the scope is read-only or unbound.
        """
        raise self._not_supported("setValue")

    def set_memory(self, dialog_context: "DialogContext", memory: Any) -> None:
        """Replace the scope's backing object.

        Raises:
            MemoryBindingError: If memory is None, or the scope cannot be replaced.
        """
        self._require_memory(memory)
        raise self._not_supported("setMemory")

    def check_writable(self, operation: str) -> None:
        """Raise MEMORY_SCOPE_OPERATION_NOT_SUPPORTED for read-only scopes."""
        if self.read_only:
            raise self._not_supported(operation)

    async def load(self, dialog_context: "DialogContext", force: bool = False) -> None:
        """Load the backing object before the turn. No-op by default."""

    async def save_changes(self, dialog_context: "DialogContext", force: bool = False) -> None:
        """Persist the backing object after the turn. No-op by default."""

    async def delete(self, dialog_context: "DialogContext") -> None:
        """Delete the backing object. No-op by default."""

    def _require_memory(self, memory: Any) -> None:
        if memory is None:
            raise generate_exception(
                MemoryBindingError,
                Errors.UNDEFINED_MEMORY_OBJECT,
                params={"scopeName": type(self).__name__},
            )

    def _not_supported(self, operation: str) -> MemoryBindingError:
        return generate_exception(
            MemoryBindingError,
            Errors.MEMORY_SCOPE_OPERATION_NOT_SUPPORTED,
            params={"scopeName": type(self).__name__, "operation": operation},
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
