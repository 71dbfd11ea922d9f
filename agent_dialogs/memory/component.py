# agent_dialogs/memory/component.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Registration of the built-in memory scopes and path resolvers."""

import logging
from typing import Iterator, Optional

from ..config import DialogsConfig
from .path_resolvers import (
    AtAtPathResolver,
    AtPathResolver,
    DollarPathResolver,
    HashPathResolver,
    PathResolver,
    PercentPathResolver,
)
from .scopes import (
    ClassMemoryScope,
    ConversationMemoryScope,
    DialogClassMemoryScope,
    DialogContextMemoryScope,
    DialogMemoryScope,
    MemoryScope,
    SettingsMemoryScope,
    ThisMemoryScope,
    TurnMemoryScope,
    UserMemoryScope,
)
from .state_manager import DialogStateManagerConfiguration

logger = logging.getLogger(__name__)


class DialogsComponentRegistration:
    """Provides the default scopes and resolvers for dialog memory.

    Resolvers are ordered so that ``@@`` is tried before ``@``.
    """

    def __init__(self, config: Optional[DialogsConfig] = None):
        self.config = config or DialogsConfig()

    def get_memory_scopes(self) -> Iterator[MemoryScope]:
        yield TurnMemoryScope()
        yield SettingsMemoryScope(self.config.settings or None)
        yield DialogMemoryScope()
        yield DialogContextMemoryScope()
        yield DialogClassMemoryScope()
        yield ClassMemoryScope()
        yield ThisMemoryScope()
        yield ConversationMemoryScope()
        yield UserMemoryScope()

    def get_path_resolvers(self) -> Iterator[PathResolver]:
        yield DollarPathResolver()
        yield HashPathResolver()
        yield AtAtPathResolver()
        yield AtPathResolver()
        yield PercentPathResolver()

    def create_configuration(self) -> DialogStateManagerConfiguration:
        configuration = DialogStateManagerConfiguration(
            path_resolvers=list(self.get_path_resolvers()),
            memory_scopes=list(self.get_memory_scopes()),
            default_scope=self.config.default_scope,
            max_resolution_depth=self.config.max_resolution_depth,
            allow_nested_paths=self.config.allow_nested_paths,
        )
        logger.debug(
            f"Registered {len(configuration.memory_scopes)} memory scopes and "
            f"{len(configuration.path_resolvers)} path resolvers"
        )
        return configuration
