"""Summary: Acceptability check for composed emails.

Importance: Detects drafts that read like replies or HR responses instead of the sender's own request.
Alternatives: Use an LLM-based judge for higher recall.
"""

from __future__ import annotations

from dataclasses import dataclass

REPLY_STYLE_PHRASES = (
    "thank you for your email",
    "regarding your request",
    "as per your email",
    "following up on your email",
    "we will review",
    "i will get back to you",
    "we will get back to you",
    "once we receive",
    "could you confirm",
    "please clarify",
    "as discussed in your email",
    "thanks for reaching out",
)

LEAVE_KEYWORDS = ("leave", "holiday", "time off", "vacation")


@dataclass(frozen=True)
class OutboundLeaveClassifier:
    """Summary: Substring rules for first-person leave requests.

    Importance: Deterministic, so the fallback template can be guaranteed to pass.
    Alternatives: Train a supervised classifier on labelled drafts.
    """

    def is_acceptable(self, text: str | None) -> bool:
        """Summary: Return True when text reads as an outbound leave request.

        Importance: Gates whether a backend draft is returned or retried.
        Alternatives: Score drafts and pick the best of several samples.

        Any denylisted reply phrase rejects the text outright. Otherwise both
        first-person framing and leave vocabulary must be present.
        """

        if text is None or not text.strip():
            return False
        lowered = text.lower()
        if any(phrase in lowered for phrase in REPLY_STYLE_PHRASES):
            return False
        return _is_first_person(lowered) and _mentions_leave(lowered)


def _is_first_person(lowered: str) -> bool:
    return (
        " i " in lowered
        or lowered.startswith("i ")
        or "i'm " in lowered
        or "i would like" in lowered
    )


def _mentions_leave(lowered: str) -> bool:
    return any(keyword in lowered for keyword in LEAVE_KEYWORDS)
