# agent_dialogs/config.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0

from dataclasses import dataclass, field, asdict
import os
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from dotenv import load_dotenv

SETTINGS_SEPARATORS: Tuple[str, ...] = (":", "__")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_env(dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    if dotenv_path is not None:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    settings_prefix = os.getenv("DIALOGS_SETTINGS_PREFIX", "AGENT_")
    flat_settings = {
        key[len(settings_prefix):]: value
        for key, value in os.environ.items()
        if settings_prefix and key.startswith(settings_prefix) and len(key) > len(settings_prefix)
    }

    return {
        "default_scope": os.getenv("DIALOGS_DEFAULT_SCOPE", "dialog") or None,
        "max_resolution_depth": int(os.getenv("DIALOGS_MAX_RESOLUTION_DEPTH", 10)),
        "allow_nested_paths": _env_bool(os.getenv("DIALOGS_ALLOW_NESTED_PATHS", "true")),
        "settings_prefix": settings_prefix,
        "settings": load_settings(flat_settings),
    }


def load_settings(
    flat: Mapping[str, Any],
    separators: Iterable[str] = SETTINGS_SEPARATORS,
) -> Dict[str, Any]:
    """Expand flat configuration keys into a nested settings dict.

    ``{"luis:endpoint": "x", "LUIS__KEY": "y"}`` becomes
    ``{"luis": {"endpoint": "x"}, "LUIS": {"KEY": "y"}}``. When a key is
    both a leaf and a parent, the nested dict wins.

    Args:
        flat: Flat key/value configuration.
        separators: Strings that split a key into nested segments.

    Returns:
        Nested dictionary of settings.
    """
    separators = tuple(separators)
    settings: Dict[str, Any] = {}
    for key in sorted(flat.keys(), key=len):
        normalized = key
        for sep in separators[1:]:
            normalized = normalized.replace(sep, separators[0])
        parts = [p for p in normalized.split(separators[0]) if p]
        if not parts:
            continue

        node = settings
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        if not isinstance(node.get(parts[-1]), dict):
            node[parts[-1]] = flat[key]
    return settings


@dataclass
class DialogsConfig:
    default_scope: Optional[str] = "dialog"  # None disables the fallback scope
    max_resolution_depth: int = 10
    allow_nested_paths: bool = True
    settings_prefix: str = "AGENT_"
    settings: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def update(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    @classmethod
    def from_env(cls, dotenv_file: Optional[str] = None) -> "DialogsConfig":
        env = get_env(dotenv_file)
        return cls(**env)
