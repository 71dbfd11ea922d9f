# tests/conftest.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Shared fixtures for agent_dialogs tests.

Builds a turn with user and conversation state registered, and a dialog
tree of one container ("form") hosting one leaf dialog ("prompt").
"""

import pytest
import pytest_asyncio

from agent_dialogs.dialog import ContainerDialog, Dialog, DialogInstance, DialogState
from agent_dialogs.dialog_context import DialogContext
from agent_dialogs.dialog_set import DialogSet
from agent_dialogs.memory.constants import CONVERSATION_STATE_KEY, USER_STATE_KEY
from agent_dialogs.state import ConversationState, MemoryStorage, UserState
from agent_dialogs.turn_context import (
    Activity,
    ChannelAccount,
    ConversationAccount,
    TurnContext,
)


class PromptDialog(Dialog):
    """Leaf dialog with a couple of definition properties."""

    def __init__(self, dialog_id: str = "prompt", prompt: str = "What is your name?"):
        super().__init__(dialog_id)
        self.prompt = prompt
        self.max_turns = 3


class FormDialog(ContainerDialog):
    """Container dialog hosting a PromptDialog."""

    def __init__(self, dialog_id: str = "form"):
        super().__init__(dialog_id)
        self.title = "Profile"
        self.add_dialog(PromptDialog())


@pytest.fixture
def activity():
    """A message activity from user1 in conv1."""
    return Activity(
        text="hello",
        channel_id="test",
        from_property=ChannelAccount(id="user1", name="User One"),
        recipient=ChannelAccount(id="bot"),
        conversation=ConversationAccount(id="conv1"),
    )


@pytest.fixture
def storage():
    """In-process storage shared by user and conversation state."""
    return MemoryStorage()


@pytest.fixture
def user_state(storage):
    return UserState(storage)


@pytest.fixture
def conversation_state(storage):
    return ConversationState(storage)


@pytest.fixture
def turn_context(activity, user_state, conversation_state):
    """Turn with user and conversation state registered but not loaded."""
    context = TurnContext(activity)
    context.turn_state[USER_STATE_KEY] = user_state
    context.turn_state[CONVERSATION_STATE_KEY] = conversation_state
    return context


@pytest_asyncio.fixture
async def loaded_turn_context(turn_context, user_state, conversation_state):
    """Turn with user and conversation state loaded."""
    await user_state.load(turn_context)
    await conversation_state.load(turn_context)
    return turn_context


@pytest.fixture
def dialogs():
    """Root dialog set: the form container and a standalone prompt."""
    dialog_set = DialogSet()
    dialog_set.add(FormDialog())
    dialog_set.add(PromptDialog("greeting", prompt="Hi there"))
    return dialog_set


@pytest.fixture
def root_context(dialogs, turn_context):
    """Root DialogContext with an empty stack."""
    return DialogContext(dialogs, turn_context, DialogState())


@pytest.fixture
def form_contexts(root_context):
    """(root, child): form running at the root, prompt active in its child stack."""
    root_context.stack.append(DialogInstance(id="form", state={"step": "name"}))
    child = root_context.child
    child.stack.append(DialogInstance(id="prompt", state={"attempt": 1}))
    return root_context, child


@pytest.fixture
def greeting_context(root_context):
    """Root context whose active dialog is a plain (non-container) dialog."""
    root_context.stack.append(DialogInstance(id="greeting", state={"count": 2}))
    return root_context
