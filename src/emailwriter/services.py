"""Summary: Email generation orchestration.

Importance: Sequences normalization, prompting, generation, validation, retry, and fallback.
Alternatives: Embed the retry logic directly in the HTTP handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from emailwriter.ai import GenerationClient
from emailwriter.classifier import OutboundLeaveClassifier
from emailwriter.instructions import extract_artifacts, normalize_instruction
from emailwriter.models import ExtractedArtifacts, GenerationRequest, GenerationResult
from emailwriter.prompts import build_payload
from emailwriter.templates import build_fallback_email

logger = logging.getLogger(__name__)

REPLY_APOLOGY = "Sorry, I couldn't generate the email content right now."
LOG_PREVIEW_CHARS = 160


@dataclass(frozen=True)
class EmailGeneratorService:
    """Summary: Produces a reply or a validated outbound email per request.

    Importance: Bounds every request to two backend calls with a deterministic floor.
    Alternatives: Retry until the classifier accepts a draft.
    """

    client: GenerationClient
    classifier: OutboundLeaveClassifier = field(default_factory=OutboundLeaveClassifier)

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Summary: Run the generation protocol for one request.

        Importance: Central entry point shared by the API and CLI.
        Alternatives: Expose separate reply and compose services.

        Reply mode returns the first draft (or an apology when empty) without
        validation. Compose mode validates, retries once with a hardened
        prompt, then falls back to the deterministic template.
        """

        if request.is_reply:
            instruction = request.content
            artifacts = ExtractedArtifacts()
        else:
            instruction = normalize_instruction(request.content)
            artifacts = extract_artifacts(instruction)
        logger.info(
            "Email generate request -> mode: %s, tone: %s, content: %s",
            request.mode.value,
            request.tone,
            _preview(instruction, LOG_PREVIEW_CHARS),
        )

        text = self.client.generate_text(build_payload(request, instruction, artifacts, hardened=False))
        if request.is_reply:
            if not text:
                return GenerationResult(text=REPLY_APOLOGY, source="reply_apology", attempts=1)
            return GenerationResult(text=text, source="reply", attempts=1)

        if self.classifier.is_acceptable(text):
            return GenerationResult(text=text, source="first_attempt", attempts=1)

        logger.warning("Compose output not acceptable (reply/HR or not a first-person leave request). Regenerating.")
        retry_text = self.client.generate_text(build_payload(request, instruction, artifacts, hardened=True))
        if self.classifier.is_acceptable(retry_text):
            return GenerationResult(text=retry_text, source="second_attempt", attempts=2)

        logger.warning("Second attempt failed validation. Falling back to deterministic template.")
        fallback = build_fallback_email(artifacts)
        return GenerationResult(text=fallback, source="fallback", attempts=2)

    def generate_email(self, content: str | None, tone: str | None = None, is_reply: bool | None = None) -> str:
        """Summary: Generate an email from raw transport fields.

        Importance: Matches the inbound contract of content, optional tone, and optional reply flag.
        Alternatives: Require callers to build GenerationRequest themselves.
        """

        result = self.generate(GenerationRequest.create(content, tone, is_reply))
        logger.info("Email generated from %s after %s backend call(s).", result.source, result.attempts)
        return result.text


def _preview(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."
