"""Summary: Domain model dataclasses for email generation.

Importance: Defines the request, payload, and result shapes shared by every stage of the pipeline.
Alternatives: Pass nested dicts between functions and validate keys ad hoc.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

DEFAULT_TONE = "professional"


class Mode(str, Enum):
    """Summary: Generation mode selected by the caller.

    Importance: Every downstream branch depends on this single binary choice.
    Alternatives: Carry a raw boolean flag through the pipeline.
    """

    REPLY = "reply"
    COMPOSE = "compose"


@dataclass(frozen=True)
class GenerationRequest:
    """Summary: Normalized inbound request for one generation.

    Importance: Guarantees a non-blank tone and an explicit mode before prompts are built.
    Alternatives: Re-check optional fields at every use site.
    """

    content: str
    tone: str
    mode: Mode

    @staticmethod
    def create(content: str | None, tone: str | None = None, is_reply: bool | None = None) -> "GenerationRequest":
        """Summary: Build a request from optional transport fields.

        Importance: Applies the tone default and mode mapping in one place.
        Alternatives: Let the API layer fill defaults through schema validation.
        """

        normalized_tone = (tone or "").strip() or DEFAULT_TONE
        mode = Mode.REPLY if is_reply is True else Mode.COMPOSE
        return GenerationRequest(content=content or "", tone=normalized_tone, mode=mode)

    @property
    def is_reply(self) -> bool:
        return self.mode is Mode.REPLY


@dataclass(frozen=True)
class ExtractedArtifacts:
    """Summary: Greeting, duration, and date pulled from a raw instruction.

    Importance: Shared by hardened prompt construction and the fallback template.
    Alternatives: Re-run the regular expressions wherever a value is needed.
    """

    greeting_override: str | None = None
    duration: str | None = None
    pretty_date: str | None = None


def _user_contents(user_prompt: str) -> list[dict[str, Any]]:
    return [{"role": "user", "parts": [{"text": user_prompt}]}]


@dataclass(frozen=True)
class ReplyPayload:
    """Summary: Backend request for reply mode.

    Importance: Has no system instruction field, so a reply can never carry the compose directive.
    Alternatives: Use one payload class with an optional system block.
    """

    user_prompt: str

    def to_json(self) -> dict[str, Any]:
        return {"contents": _user_contents(self.user_prompt)}


@dataclass(frozen=True)
class ComposePayload:
    """Summary: Backend request for compose mode.

    Importance: Always pairs the user prompt with the outbound-only system instruction.
    Alternatives: Prepend the system text to the user prompt.
    """

    user_prompt: str
    system_prompt: str

    def to_json(self) -> dict[str, Any]:
        return {
            "system_instruction": {"role": "system", "parts": [{"text": self.system_prompt}]},
            "contents": _user_contents(self.user_prompt),
        }


PromptPayload = Union[ReplyPayload, ComposePayload]


@dataclass(frozen=True)
class GenerationResult:
    """Summary: Final text returned for a request with its provenance.

    Importance: Lets callers and logs see whether the backend or the template produced the email.
    Alternatives: Return only the text and log provenance internally.
    """

    text: str
    source: str
    attempts: int
