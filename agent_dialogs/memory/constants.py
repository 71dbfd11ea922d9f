# agent_dialogs/memory/constants.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Well-known scope names, memory paths and turn-state keys."""


class ScopePath:
    """Names of the built-in memory scopes."""

    USER = "user"
    CONVERSATION = "conversation"
    DIALOG = "dialog"
    DIALOG_CLASS = "dialogClass"
    DIALOG_CONTEXT = "dialogContext"
    THIS = "this"
    CLASS = "class"
    SETTINGS = "settings"
    TURN = "turn"


class TurnPath:
    """Paths into turn memory written by recognizers."""

    RECOGNIZED = "turn.recognized"
    TOP_INTENT = "turn.recognized.intent"
    TOP_SCORE = "turn.recognized.score"
    TEXT = "turn.recognized.text"
    INTENTS = "turn.recognized.intents"
    ENTITIES = "turn.recognized.entities"


# Turn-state keys
USER_STATE_KEY = "UserState"
CONVERSATION_STATE_KEY = "ConversationState"
TURN_STATE_KEY = "turn"
CONFIGURATION_KEY = "configuration"
SETTINGS_KEY = "settings"
STATE_MANAGER_CONFIGURATION_KEY = "DialogStateManagerConfiguration"

# Dialog ids starting with this are internal bookkeeping
ACTION_SCOPE_PREFIX = "ActionScope["

# Path function returning the first element of a list
FIRST_FUNCTION = "first()"
