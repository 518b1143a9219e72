"""Summary: Prompt texts and backend payload construction.

Importance: Keeps the exact wording sent to the model in one reviewable place.
Alternatives: Store prompt templates in external files loaded at startup.
"""

from __future__ import annotations

from emailwriter.models import (
    ComposePayload,
    ExtractedArtifacts,
    GenerationRequest,
    PromptPayload,
    ReplyPayload,
)

DEFAULT_GREETING = "Hello mam,"

COMPOSE_SYSTEM_PROMPT = (
    "You draft NEW outbound emails written by the sender to the recipient. "
    "This is never a reply. Never write as HR or the recipient. "
    "Always write in first person (I, my) as the sender. "
    "Do not ask questions; if any details are missing, use reasonable placeholders."
)

REPLY_TEMPLATE = """You are helping me write an email REPLY.
Write the reply in a {tone} tone.

Requirements:
- This IS a reply to the message below.
- Do NOT include a subject line.
- Write in FIRST PERSON (I, my).
- Keep it concise, clear, and courteous.
- Include a short greeting and closing.
- If dates/actions are implied, restate them clearly.

Original email:
---
{original_email}
---
"""

HARD_CONSTRAINTS_TEMPLATE = """HARD CONSTRAINTS (must follow):
- This is NOT a reply. Do NOT include phrases like:
  "Thank you for your email", "Regarding your request", "As per your email",
  "I will get back to you", "We will review", or any HR/recipient-style responses.
- Do NOT include a subject line.
- Write in FIRST PERSON (I, my) as the sender.
- Polite, clear, and to the point (about 50–120 words).
- Include a simple closing like:
  "Best regards,\\n[Your Name]"
- Do NOT ask questions or request clarifications; if details are missing, use placeholders.
- {greeting_rule}

Date handling:
- If a single date like 9-11-2025 is given, assume day-month-year (09 November 2025).
"""

HARDENED_RULE = (
    "\nAdditional rule: Your previous draft resembled a reply. Rewrite this as a NEW outbound "
    "email from the sender to their manager. Do not reference 'your email' or 'your request'.\n"
)

COMPOSE_TEMPLATE = """Draft a NEW email FROM ME (the employee) TO MY MANAGER in a {tone} tone.

{constraints}
{hardened_rule}

USER INSTRUCTION (intent):
---
{instruction}
---

Example style (reference only; do NOT copy):
Hello mam,

I would like to request leave for two days on [dates/period]. I have organized my tasks and arranged coverage with [colleague's name]. I will remain reachable by email for any urgent queries.

Best regards,
[Your Name]
"""


def build_reply_prompt(tone: str, original_email: str) -> str:
    """Summary: Build the user prompt for reply mode.

    Importance: Quotes the original thread verbatim so the reply stays grounded.
    Alternatives: Summarize the thread before prompting.
    """

    return REPLY_TEMPLATE.format(tone=tone, original_email=original_email)


def greeting_rule(artifacts: ExtractedArtifacts) -> str:
    """Summary: Return the greeting line instruction for compose prompts."""

    if artifacts.greeting_override is not None:
        return f'Start the email EXACTLY with: "{artifacts.greeting_override}"'
    return f'Start the email with: "{DEFAULT_GREETING}"'


def build_compose_prompt(
    tone: str, instruction: str, artifacts: ExtractedArtifacts, hardened: bool
) -> str:
    """Summary: Build the user prompt for compose mode.

    Importance: Encodes the outbound-only constraints that the classifier later checks.
    Alternatives: Rely on the system instruction alone.
    """

    constraints = HARD_CONSTRAINTS_TEMPLATE.format(greeting_rule=greeting_rule(artifacts))
    return COMPOSE_TEMPLATE.format(
        tone=tone,
        constraints=constraints,
        hardened_rule=HARDENED_RULE if hardened else "",
        instruction=instruction,
    )


def build_payload(
    request: GenerationRequest,
    instruction: str,
    artifacts: ExtractedArtifacts,
    hardened: bool = False,
) -> PromptPayload:
    """Summary: Build the backend payload variant for a request.

    Importance: Reply payloads never carry a system block; compose payloads always do.
    Alternatives: Assemble nested dicts inline before each call.

    Artifacts are extracted once per request by the caller and are only read
    in compose mode.
    """

    if request.is_reply:
        return ReplyPayload(user_prompt=build_reply_prompt(request.tone, instruction))
    return ComposePayload(
        user_prompt=build_compose_prompt(request.tone, instruction, artifacts, hardened),
        system_prompt=COMPOSE_SYSTEM_PROMPT,
    )
