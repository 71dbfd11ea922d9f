# agent_dialogs/memory/path.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Parsing of canonical memory paths and reading through object graphs.

Grammar::

    path     := segment ( '.' segment | '[' index ']' | '.first()' )*
    index    := digits | 'quoted' | "quoted" | nested-path

A parsed path is a list of segments: ``str`` property names, ``int``
indices, and the ``"first()"`` function marker. ``first()`` cannot clash
with a property name because parentheses are not valid name characters.
"""

from collections.abc import Mapping
import re
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel

from ..errors import Errors, PathError, generate_exception
from .constants import FIRST_FUNCTION

Segment = Union[str, int]

MISSING: Any = type("Missing", (), {"__repr__": lambda self: "MISSING"})()

_QUOTES = ("'", '"')
_INVALID_NAME_CHARS = set("[]().'\"")
_INDEX_PATTERN = re.compile(r"-?\d+")


def _invalid(path: str) -> PathError:
    return generate_exception(PathError, Errors.INVALID_PATH_CHARACTERS, params={"path": path})


def _closing_bracket(path: str, start: int) -> int:
    """Index of the ``]`` matching the ``[`` at start."""
    depth = 0
    quote: Optional[str] = None
    for i in range(start + 1, len(path)):
        char = path[i]
        if quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            if depth == 0:
                return i
            depth -= 1
    raise _invalid(path)


def _parse_index(
    path: str,
    content: str,
    resolve_nested: Optional[Callable[[str], Any]],
) -> Segment:
    if not content:
        raise _invalid(path)

    if content[0] in _QUOTES:
        quote = content[0]
        if len(content) < 2 or content[-1] != quote or quote in content[1:-1]:
            raise _invalid(path)
        return content[1:-1]

    if _INDEX_PATTERN.fullmatch(content):
        index = int(content)
        if index < 0:
            raise generate_exception(
                PathError, Errors.NEGATIVE_INDEX_NOT_ALLOWED, params={"path": path}
            )
        return index

    if resolve_nested is None:
        raise _invalid(path)

    value = resolve_nested(content)
    if value is None:
        raise generate_exception(
            PathError, Errors.PATH_RESOLUTION_FAILED, params={"path": content}
        )
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise generate_exception(
                PathError, Errors.NEGATIVE_INDEX_NOT_ALLOWED, params={"path": path}
            )
        return value
    return str(value)


def parse_path(
    path: str,
    resolve_nested: Optional[Callable[[str], Any]] = None,
) -> list[Segment]:
    """Split a canonical path into segments.

    Args:
        path: Canonical path (aliases already resolved).
        resolve_nested: Evaluates bracketed nested paths such as
            ``user.items[turn.index]``. None disallows nested paths.

    Returns:
        Segments; empty for an empty path.

    Raises:
        PathError: On invalid characters, empty segments or negative indices.
    """
    path = path.strip()
    segments: list[Segment] = []
    name = ""
    closed = False  # just consumed ']' or '()'
    i = 0

    while i < len(path):
        char = path[i]
        if char == ".":
            if name:
                segments.append(name)
                name = ""
            elif not closed:
                raise _invalid(path)
            closed = False
            i += 1
            if i == len(path):
                raise _invalid(path)
        elif char == "[":
            if name:
                segments.append(name)
                name = ""
            elif not segments:
                raise _invalid(path)
            end = _closing_bracket(path, i)
            segments.append(_parse_index(path, path[i + 1:end].strip(), resolve_nested))
            closed = True
            i = end + 1
        elif char == "(":
            if f"{name}()" != FIRST_FUNCTION or not segments or path[i + 1:i + 2] != ")":
                raise _invalid(path)
            segments.append(FIRST_FUNCTION)
            name = ""
            closed = True
            i += 2
        elif char in _INVALID_NAME_CHARS or char.isspace() or closed:
            raise _invalid(path)
        else:
            name += char
            i += 1

    if name:
        segments.append(name)
    return segments


def find_key(memory: Mapping, key: Segment) -> Optional[Any]:
    """Find the stored key matching ``key``: exact first, then case-insensitive."""
    if key in memory:
        return key
    text = str(key)
    if text in memory:
        return text
    lowered = text.lower()
    for candidate in memory.keys():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return candidate
    return None


def read_segment(value: Any, segment: Segment) -> Any:
    """Read one segment below value; MISSING if it is absent.

    ``first()`` yields the first element of a list (MISSING when empty) and
    any other value unchanged. Indices past the end are MISSING.
    """
    if segment == FIRST_FUNCTION:
        if isinstance(value, (list, tuple)):
            return value[0] if value else MISSING
        return value

    if isinstance(value, Mapping):
        key = find_key(value, segment)
        return value[key] if key is not None else MISSING

    if isinstance(segment, int):
        if isinstance(value, (list, tuple)) and segment < len(value):
            return value[segment]
        return MISSING

    if value is None or isinstance(value, (str, bytes, int, float, bool, list, tuple)):
        return MISSING

    # Models and plain objects expose their public attributes
    if segment.startswith("_"):
        return MISSING
    attribute = getattr(value, segment, MISSING)
    if callable(attribute):
        return MISSING
    return attribute


def to_plain(value: Any) -> Any:
    """Copy a memory value into plain dicts, lists and scalars."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value
