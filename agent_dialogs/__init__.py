# agent_dialogs/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Dialog memory and path resolution for conversational agents."""

__version__ = "0.1.0"

from .errors import (
    AgentError,
    DialogConfigurationError,
    ErrorDefinition,
    Errors,
    MemoryBindingError,
    PathError,
    RecognizerError,
    StorageError,
    generate_exception,
)
from .config import DialogsConfig, load_settings
from .recognizer_result import IntentScore, RecognizerResult, TopIntent, get_top_scoring_intent
from .turn_context import Activity, ChannelAccount, ConversationAccount, TurnContext
from .dialog import (
    ContainerDialog,
    Dialog,
    DialogDependencies,
    DialogInstance,
    DialogState,
    PathExpression,
    ValueExpression,
)
from .dialog_set import DialogSet
from .dialog_context import DialogContext
from .state import ConversationState, MemoryStorage, RedisStorage, Storage, UserState
from .memory import (
    DialogStateManager,
    DialogStateManagerConfiguration,
    DialogsComponentRegistration,
    MemoryScope,
    PathResolver,
)

__all__ = [
    "AgentError",
    "DialogConfigurationError",
    "ErrorDefinition",
    "Errors",
    "MemoryBindingError",
    "PathError",
    "RecognizerError",
    "StorageError",
    "generate_exception",
    "DialogsConfig",
    "load_settings",
    "IntentScore",
    "RecognizerResult",
    "TopIntent",
    "get_top_scoring_intent",
    "Activity",
    "ChannelAccount",
    "ConversationAccount",
    "TurnContext",
    "ContainerDialog",
    "Dialog",
    "DialogDependencies",
    "DialogInstance",
    "DialogState",
    "PathExpression",
    "ValueExpression",
    "DialogSet",
    "DialogContext",
    "ConversationState",
    "MemoryStorage",
    "RedisStorage",
    "Storage",
    "UserState",
    "DialogStateManager",
    "DialogStateManagerConfiguration",
    "DialogsComponentRegistration",
    "MemoryScope",
    "PathResolver",
]
