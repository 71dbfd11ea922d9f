# agent_dialogs/memory/state_manager.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Path-addressable view over all memory scopes of a dialog context."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any, Optional

from ..errors import DialogConfigurationError, Errors, PathError, generate_exception
from .constants import FIRST_FUNCTION, ScopePath, STATE_MANAGER_CONFIGURATION_KEY
from .path import MISSING, Segment, find_key, parse_path, read_segment, to_plain
from .path_resolvers import PathResolver
from .scopes import MemoryScope

if TYPE_CHECKING:
    from ..dialog_context import DialogContext

logger = logging.getLogger(__name__)


def index_scopes(scopes: Iterable[MemoryScope]) -> dict[str, MemoryScope]:
    """Map scope names to scopes, rejecting duplicate names."""
    index: dict[str, MemoryScope] = {}
    for scope in scopes:
        if scope.name in index:
            raise generate_exception(
                DialogConfigurationError, Errors.DUPLICATE_MEMORY_SCOPE, params={"scope": scope.name}
            )
        index[scope.name] = scope
    return index


@dataclass
class DialogStateManagerConfiguration:
    """Resolvers and scopes used by every DialogStateManager in a turn.

    Attributes:
        path_resolvers: Alias resolvers, tried in order.
        memory_scopes: Registered scopes; names must be unique.
        default_scope: Scope that paths without a known scope name are
            relative to. None makes such paths an error.
        max_resolution_depth: Maximum alias rewrites for one path.
        allow_nested_paths: Whether ``[nested.path]`` indices are evaluated.
    """

    path_resolvers: list[PathResolver] = field(default_factory=list)
    memory_scopes: list[MemoryScope] = field(default_factory=list)
    default_scope: Optional[str] = ScopePath.DIALOG
    max_resolution_depth: int = 10
    allow_nested_paths: bool = True

    def __post_init__(self):
        index_scopes(self.memory_scopes)


class DialogStateManager:
    """Reads, writes and deletes memory by path.

    Paths are alias-expanded (``$name`` -> ``dialog.name``), parsed into
    segments, and walked from the memory of the scope named by the first
    segment. Reads never fail on missing data; writes create intermediate
    containers and fail only where no value can be stored.

    Example:
        dc.state.set_value("user.profile.name", "Ada")
        dc.state.get_value("user.profile.name")  # "Ada"
        dc.state.get_value("@city")  # turn.recognized.entities.city.first()
    """

    def __init__(
        self,
        dialog_context: "DialogContext",
        configuration: Optional[DialogStateManagerConfiguration] = None,
    ):
        self.dialog_context = dialog_context
        turn_state = dialog_context.context.turn_state

        if configuration is None:
            configuration = turn_state.get(STATE_MANAGER_CONFIGURATION_KEY)
        if configuration is None:
            from .component import DialogsComponentRegistration

            configuration = DialogsComponentRegistration().create_configuration()

        # Child contexts created later in the turn share this configuration
        turn_state.setdefault(STATE_MANAGER_CONFIGURATION_KEY, configuration)
        self.configuration = configuration
        self._scopes = index_scopes(configuration.memory_scopes)

    # Paths

    def get_memory_scope(self, name: str) -> Optional[MemoryScope]:
        """Return the scope registered under name (case-sensitive)."""
        return self._scopes.get(name)

    def transform_path(self, path: str) -> str:
        """Expand aliases until no resolver changes the path.

        Each pass applies the first resolver whose output differs.

        Raises:
            PathError: If the path still changes after max_resolution_depth
                rewrites.
        """
        current = path.strip()
        for _ in range(self.configuration.max_resolution_depth + 1):
            transformed = current
            for resolver in self.configuration.path_resolvers:
                transformed = resolver.transform_path(current)
                if transformed != current:
                    break
            if transformed == current:
                return current
            logger.debug(f"Resolved '{current}' to '{transformed}'")
            current = transformed

        raise generate_exception(PathError, Errors.PATH_RESOLUTION_FAILED, params={"path": path})

    def parse_path(self, path: str, allow_nested_paths: bool = True) -> list[Segment]:
        """Parse a canonical path into segments; nested paths are evaluated."""
        nested = allow_nested_paths and self.configuration.allow_nested_paths
        return parse_path(path, self.get_value if nested else None)

    def _resolve(self, path: str) -> tuple[Optional[MemoryScope], list[Segment]]:
        segments = self.parse_path(self.transform_path(path))
        if not segments:
            return None, segments

        head = segments[0]
        scope = self.get_memory_scope(head) if isinstance(head, str) else None
        if scope is None and self.configuration.default_scope:
            scope = self.get_memory_scope(self.configuration.default_scope)
            if scope is not None:
                segments = [scope.name] + segments
        return scope, segments

    # Reads

    def get_value(self, path: str, default: Any = None) -> Any:
        """Return the value at path, or default if any segment is missing.

        Stored None values also yield the default.
        """
        if not path or not path.strip():
            return default

        scope, segments = self._resolve(path)
        if scope is None:
            logger.warning(f"No memory scope named '{segments[0]}' for path '{path}'")
            return default

        value = scope.get_memory(self.dialog_context)
        for segment in segments[1:]:
            value = read_segment(value, segment)
            if value is MISSING or value is None:
                return default
        return default if value is None else value

    def get_memory_snapshot(self) -> dict[str, Any]:
        """Plain copy of every scope marked include_in_snapshot."""
        return {
            scope.name: to_plain(scope.get_memory(self.dialog_context))
            for scope in self._scopes.values()
            if scope.include_in_snapshot
        }

    # Writes

    def set_value(self, path: str, value: Any) -> None:
        """Store value at path, creating intermediate containers.

        A path naming only a scope replaces the scope's memory. Writing an
        index equal to a list's length appends; ``x.first()`` writes the
        first element of list x.

        Raises:
            PathError: If the path is empty, malformed, or crosses a value
                that cannot hold children.
            DialogConfigurationError: If the scope is unknown.
            MemoryBindingError: If the scope is read-only or unbound.
        """
        if not path or not path.strip():
            raise generate_exception(PathError, Errors.PATH_NOT_SPECIFIED)

        scope, segments = self._resolve(path)
        if scope is None:
            raise generate_exception(
                DialogConfigurationError,
                Errors.SCOPE_NOT_FOUND,
                params={"scope": segments[0] if segments else path},
            )

        if len(segments) == 1:
            scope.set_memory(self.dialog_context, value)
            return

        memory = scope.get_memory_for_update(self.dialog_context)
        body = segments[1:]

        if body[-1] == FIRST_FUNCTION and len(body) > 1:
            parent = self._walk_for_update(memory, body[:-1], path)
            existing = read_segment(parent, body[-2])
            if isinstance(existing, list):
                if existing:
                    existing[0] = value
                else:
                    existing.append(value)
            elif existing is MISSING or existing is None:
                self._assign(parent, body[-2], [value], path)
            else:
                # first() of a non-list is the value itself
                self._assign(parent, body[-2], value, path)
            return

        container = self._walk_for_update(memory, body, path)
        self._assign(container, body[-1], value, path)

    def _walk_for_update(self, memory: Any, body: list[Segment], path: str) -> Any:
        """Descend through all but the last segment, creating containers."""
        for segment, next_segment in zip(body[:-1], body[1:]):
            memory = self._descend(memory, segment, next_segment, path)
        return memory

    def _descend(self, container: Any, segment: Segment, next_segment: Segment, path: str) -> Any:
        def new_child():
            return [] if isinstance(next_segment, int) or next_segment == FIRST_FUNCTION else {}

        if segment == FIRST_FUNCTION:
            if isinstance(container, list):
                if not container:
                    container.append(new_child())
                return container[0]
            return container

        if isinstance(container, dict):
            key = find_key(container, segment)
            if key is None:
                key = str(segment)
            child = container.get(key)
            if child is None:
                child = new_child()
                container[key] = child
            return child

        if isinstance(container, list) and isinstance(segment, int):
            if segment < len(container):
                if container[segment] is None:
                    container[segment] = new_child()
                return container[segment]
            if segment == len(container):
                child = new_child()
                container.append(child)
                return child
            raise self._unable_to_update(path)

        if self._has_attribute(container, segment):
            child = getattr(container, segment)
            if child is None:
                child = new_child()
                setattr(container, segment, child)
            return child

        raise self._unable_to_update(path)

    def _assign(self, container: Any, segment: Segment, value: Any, path: str) -> None:
        if segment == FIRST_FUNCTION:
            if isinstance(container, list):
                if container:
                    container[0] = value
                else:
                    container.append(value)
                return
            raise self._unable_to_update(path)

        if isinstance(container, dict):
            key = find_key(container, segment)
            container[key if key is not None else str(segment)] = value
        elif isinstance(container, list) and isinstance(segment, int):
            if segment < len(container):
                container[segment] = value
            elif segment == len(container):
                container.append(value)
            else:
                raise self._unable_to_update(path)
        elif self._has_attribute(container, segment):
            setattr(container, segment, value)
        else:
            raise self._unable_to_update(path)

    @staticmethod
    def _has_attribute(container: Any, segment: Segment) -> bool:
        if not isinstance(segment, str) or segment.startswith("_"):
            return False
        if container is None or isinstance(container, (str, bytes, int, float, bool, list, tuple)):
            return False
        return hasattr(container, segment) and not callable(getattr(container, segment))

    @staticmethod
    def _unable_to_update(path: str) -> PathError:
        return generate_exception(PathError, Errors.UNABLE_TO_UPDATE_VALUE, params={"path": path})

    # Deletes

    def delete_value(self, path: str) -> None:
        """Remove the property or list element at path.

        Deleting something that does not exist is a no-op, including paths
        into a scope that is not bound to anything.

        Raises:
            PathError: If the path has no segment below the scope.
            DialogConfigurationError: If the scope is unknown.
            MemoryBindingError: If the scope is read-only.
        """
        scope, segments = self._resolve(path or "")
        if scope is None and segments:
            raise generate_exception(
                DialogConfigurationError,
                Errors.SCOPE_NOT_FOUND_FOR_DELETE,
                params={"scope": segments[0]},
            )
        if len(segments) < 2:
            raise generate_exception(PathError, Errors.INVALID_DELETE_PATH, params={"path": path})

        scope.check_writable("deleteValue")
        memory = scope.get_memory(self.dialog_context)
        for segment in segments[1:-1]:
            memory = read_segment(memory, segment)
            if memory is MISSING or memory is None:
                return

        last = segments[-1]
        if last == FIRST_FUNCTION:
            if isinstance(memory, list) and memory:
                del memory[0]
        elif isinstance(memory, list) and isinstance(last, int):
            if last < len(memory):
                del memory[last]
        elif isinstance(memory, Mapping):
            key = find_key(memory, last)
            if key is not None:
                del memory[key]
        elif self._has_attribute(memory, last):
            setattr(memory, last, None)

    # Persistence

    async def load_all_scopes(self, force: bool = False) -> None:
        """Load every scope's backing store."""
        for scope in self._scopes.values():
            await scope.load(self.dialog_context, force)

    async def save_all_changes(self, force: bool = False) -> None:
        """Persist every scope's backing store."""
        for scope in self._scopes.values():
            await scope.save_changes(self.dialog_context, force)

    async def delete_scopes_memory(self, name: str) -> None:
        """Delete the backing store of the named scope, if registered."""
        scope = self.get_memory_scope(name)
        if scope is not None:
            await scope.delete(self.dialog_context)
        else:
            logger.debug(f"No memory scope named '{name}' to delete")

    # Mapping-style access

    def __contains__(self, path: str) -> bool:
        return self.get_value(path, MISSING) is not MISSING

    def __getitem__(self, path: str) -> Any:
        return self.get_value(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set_value(path, value)

    def __delitem__(self, path: str) -> None:
        self.delete_value(path)
