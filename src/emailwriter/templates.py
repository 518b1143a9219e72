"""Summary: Deterministic fallback email template.

Importance: Guarantees a well-formed leave request when generation fails validation twice.
Alternatives: Return an error and ask the user to try again.
"""

from __future__ import annotations

from emailwriter.classifier import REPLY_STYLE_PHRASES
from emailwriter.instructions import extract_artifacts
from emailwriter.models import ExtractedArtifacts
from emailwriter.prompts import DEFAULT_GREETING

COVERAGE_SENTENCE = (
    "I have organized my tasks and arranged coverage with [colleague's name]. "
    "I will remain reachable by email for any urgent queries."
)
CLOSING = "Best regards,\n[Your Name]"


def request_sentence(artifacts: ExtractedArtifacts) -> str:
    """Summary: Pick the leave request sentence from the available details.

    Importance: Prefers the most specific sentence the instruction supports.
    Alternatives: Always use placeholders for duration and date.
    """

    duration, pretty_date = artifacts.duration, artifacts.pretty_date
    if duration and pretty_date:
        return f"I would like to request {duration} leave starting {pretty_date}."
    if duration:
        return f"I would like to request {duration} leave."
    if pretty_date:
        return f"I would like to request leave on {pretty_date}."
    return "I would like to request leave."


def fallback_greeting(artifacts: ExtractedArtifacts) -> str:
    """Summary: Return the greeting override unless it reads like a reply.

    Importance: A denylisted phrase in the greeting would make the fallback fail the classifier.
    Alternatives: Always use the default greeting in the fallback.
    """

    override = artifacts.greeting_override
    if not override or any(phrase in override.lower() for phrase in REPLY_STYLE_PHRASES):
        return DEFAULT_GREETING
    return override


def build_fallback_email(artifacts: ExtractedArtifacts) -> str:
    """Summary: Assemble the fallback email from extracted artifacts.

    Importance: Never calls the backend and always passes the acceptability check.
    Alternatives: Ship a single static email body.
    """

    greeting = fallback_greeting(artifacts)
    body = f"{request_sentence(artifacts)} {COVERAGE_SENTENCE}"
    return "\n\n".join([greeting, body, CLOSING])


def fallback_for_instruction(instruction: str) -> str:
    """Summary: Build the fallback email straight from an instruction."""

    return build_fallback_email(extract_artifacts(instruction))
