# agent_dialogs/recognizer_result.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Recognizer output and top-intent selection."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import Errors, RecognizerError, generate_exception

NO_INTENT_SCORE = -1.0


class IntentScore(BaseModel):
    """Confidence for one intent. Recognizers may attach extra properties."""

    model_config = ConfigDict(extra="allow")

    score: Optional[float] = None


class RecognizerResult(BaseModel):
    """Result of running a recognizer over an utterance.

    Produced once per turn and consumed by dialog logic, usually through the
    ``turn.recognized`` memory path.

    Attributes:
        text: Utterance that was recognized.
        altered_text: Utterance after spell checking or similar rewriting.
        intents: Intent name -> IntentScore, in recognizer order.
        entities: Recognized entities, shape defined by the recognizer.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    text: str = ""
    altered_text: Optional[str] = Field(default=None, alias="alteredText")
    intents: dict[str, IntentScore] = Field(default_factory=dict)
    entities: Optional[Any] = None

    def get_top_scoring_intent(self) -> "TopIntent":
        return get_top_scoring_intent(self)

    def to_memory(self) -> dict[str, Any]:
        """Project the result into the plain dict stored at ``turn.recognized``.

        Besides the result fields, the top intent and its score are exposed
        as ``intent`` and ``score``.
        """
        top = self.get_top_scoring_intent()
        memory = self.model_dump(by_alias=True, exclude_none=True)
        memory.setdefault("entities", {})
        memory["intent"] = top.intent
        memory["score"] = top.score
        return memory


@dataclass(frozen=True)
class TopIntent:
    intent: str
    score: float


def _intent_score(intent: Any) -> float:
    if isinstance(intent, IntentScore):
        score = intent.score
    elif isinstance(intent, Mapping):
        score = intent.get("score")
    else:
        score = getattr(intent, "score", None)
    return NO_INTENT_SCORE if score is None else score


def get_top_scoring_intent(
    result: Union[RecognizerResult, Mapping[str, Any], None],
) -> TopIntent:
    """Select the highest scoring intent of a recognizer result.

    Intents are visited in insertion order. A missing score counts as -1 and
    only a strictly greater score replaces the current best, so the first
    intent wins ties.

    Args:
        result: RecognizerResult or an equivalent mapping.

    Returns:
        TopIntent; ``TopIntent("", -1)`` when there are no intents.

    Raises:
        RecognizerError: If result is None or has no intents collection.
    """
    if isinstance(result, Mapping):
        intents = result.get("intents")
    else:
        intents = getattr(result, "intents", None)

    if result is None or intents is None:
        raise generate_exception(RecognizerError, Errors.EMPTY_RECOGNIZER_RESULT)

    top_intent = ""
    top_score = NO_INTENT_SCORE
    for name, intent in intents.items():
        score = _intent_score(intent)
        if not top_intent or score > top_score:
            top_intent = name
            top_score = score

    return TopIntent(intent=top_intent, score=top_score)
