"""Summary: Instruction normalization and artifact extraction.

Importance: Turns a chatty user instruction into intent text plus greeting, duration, and date hints.
Alternatives: Ask the language model to extract these fields as structured output.
"""

from __future__ import annotations

import re
from datetime import date

from emailwriter.models import ExtractedArtifacts

_VERBS = r"(write|draft|generate|create|compose)"
_NOUN_TAIL = r"(an?\s+)?(email|mail|message)\s*(about|regarding|for)?\s*"

LEADING_PHRASES = (
    re.compile(r"^\s*(please\s+)?" + _VERBS + r"\s+" + _NOUN_TAIL, re.IGNORECASE),
    re.compile(r"^\s*" + _VERBS + r"\s*(me|for\s*me)\s*" + _NOUN_TAIL, re.IGNORECASE),
    re.compile(r"^\s*(i\s+want|i'd\s+like)\s+you\s+to\s*" + _VERBS + r"\s*" + _NOUN_TAIL, re.IGNORECASE),
)
EDGE_QUOTES = re.compile(r"^([\"'`]+)|([\"'`]+)$")
GREETING_PATTERN = re.compile(r"^(hello|hi|dear)\s+[^,\n]{0,60},", re.IGNORECASE)
DATE_PATTERN = re.compile(r"\b(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})\b")
DURATION_PATTERN = re.compile(r"\b(\d{1,2})\s*(day|days)\b", re.IGNORECASE)

# English names regardless of process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def normalize_instruction(raw: str | None) -> str:
    """Summary: Strip imperative framing such as "please write an email about".

    Importance: Keeps the prompt focused on intent instead of the request to write.
    Alternatives: Send the raw instruction and rely on the model to ignore framing.
    """

    text = (raw or "").strip()
    for pattern in LEADING_PHRASES:
        text = pattern.sub("", text, count=1)
    text = EDGE_QUOTES.sub("", text)
    return text.strip()


def extract_greeting_override(instruction: str | None) -> str | None:
    """Summary: Return an explicit leading salutation like "Dear Priya,".

    Importance: Lets the user pick the greeting instead of the default.
    Alternatives: Always use a fixed greeting.
    """

    if instruction is None:
        return None
    match = GREETING_PATTERN.match(instruction.strip())
    if not match:
        return None
    return match.group(0).strip()


def detect_and_pretty_date(instruction: str | None) -> str | None:
    """Summary: Find the first numeric date and render it as "DD MonthName YYYY".

    Importance: Gives prompts and the fallback an unambiguous date.
    Alternatives: Infer day/month order from the user's locale.

    The numbers are always read as day-month-year. Values that do not form a
    calendar date are rendered as zero-padded "DD-MM-YYYY" instead.
    """

    if instruction is None:
        return None
    match = DATE_PATTERN.search(instruction)
    if not match:
        return None
    day, month, year = int(match.group(1)), int(match.group(2)), match.group(3)
    try:
        date(int(year), month, day)
    except ValueError:
        return f"{day:02d}-{month:02d}-{year}"
    return f"{day:02d} {MONTH_NAMES[month - 1]} {year}"


def extract_duration(instruction: str | None) -> str | None:
    """Summary: Return the first "<n> day(s)" phrase with corrected plural."""

    if instruction is None:
        return None
    match = DURATION_PATTERN.search(instruction)
    if not match:
        return None
    count = match.group(1)
    return f"{count} {'day' if count == '1' else 'days'}"


def extract_artifacts(instruction: str | None) -> ExtractedArtifacts:
    """Summary: Bundle greeting, duration, and date extracted from an instruction.

    Importance: Derives the hints once per request for every consumer.
    Alternatives: Call each extractor at its use site.
    """

    return ExtractedArtifacts(
        greeting_override=extract_greeting_override(instruction),
        duration=extract_duration(instruction),
        pretty_date=detect_and_pretty_date(instruction),
    )
