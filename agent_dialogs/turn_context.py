# agent_dialogs/turn_context.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Per-turn context handed to dialogs.

Only the activity identifiers that state storage keys need are modelled
here; the full activity schema lives with the channel protocol.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChannelAccount(BaseModel):
    """A user or agent on a channel."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None


class ConversationAccount(BaseModel):
    """The conversation an activity belongs to."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    is_group: Optional[bool] = Field(default=None, alias="isGroup")


class Activity(BaseModel):
    """Inbound activity of the current turn.

    Attributes:
        type: Activity type (e.g., "message").
        text: Message text, if any.
        channel_id: Channel the activity arrived on.
        from_property: Sender, serialized as ``from``.
        recipient: The agent.
        conversation: Conversation the activity belongs to.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "message"
    text: Optional[str] = None
    channel_id: Optional[str] = Field(default=None, alias="channelId")
    from_property: Optional[ChannelAccount] = Field(default=None, alias="from")
    recipient: Optional[ChannelAccount] = None
    conversation: Optional[ConversationAccount] = None


class TurnContext:
    """Context for a single turn.

    Thread-safe: No. A turn is processed by exactly one logical task.

    Attributes:
        activity: The inbound activity.
        turn_state: Per-turn services and scratch objects, keyed by
            well-known strings (see ``agent_dialogs.memory.constants``).
    """

    def __init__(self, activity: Activity, turn_state: Optional[dict[str, Any]] = None):
        self.activity = activity
        self.turn_state: dict[str, Any] = turn_state if turn_state is not None else {}
