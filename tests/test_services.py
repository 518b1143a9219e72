"""Summary: Tests for the generation orchestrator.

Importance: Validates the reply path, retry protocol, and deterministic fallback end to end.
Alternatives: Test each stage in isolation only.
"""

from __future__ import annotations

import pytest

from emailwriter import services
from emailwriter.ai import GeminiProvider, GenerationClient, MockAiProvider
from emailwriter.instructions import extract_artifacts
from emailwriter.models import ComposePayload, ExtractedArtifacts, GenerationRequest, Mode, ReplyPayload
from emailwriter.services import REPLY_APOLOGY, EmailGeneratorService

GOOD_DRAFT = (
    "Hello mam,\n\nI would like to request leave on 09 November 2025 for a family function. "
    "I have handed over my tasks.\n\nBest regards,\n[Your Name]"
)
REPLY_DRAFT = "Thank you for your email. We will review your leave request and get back to you."


def _service(responses: list[object]) -> tuple[EmailGeneratorService, MockAiProvider]:
    provider = MockAiProvider(responses)
    return EmailGeneratorService(client=GenerationClient(provider)), provider


def test_request_defaults_tone_and_mode() -> None:
    """Summary: Verify GenerationRequest fills the tone and maps the reply flag.

    Importance: Tone is never blank and mode is always explicit.
    Alternatives: Validate in the HTTP schema only.
    """

    request = GenerationRequest.create(None, "   ", None)
    assert request.content == ""
    assert request.tone == "professional"
    assert request.mode is Mode.COMPOSE
    assert GenerationRequest.create("x", " Casual ", True).tone == "Casual"
    assert GenerationRequest.create("x", None, True).mode is Mode.REPLY
    assert GenerationRequest.create("x", None, False).mode is Mode.COMPOSE


def test_compose_accepts_first_attempt() -> None:
    service, provider = _service([GOOD_DRAFT])
    result = service.generate(GenerationRequest.create("write an email about leave on 9-11-2025"))
    assert result.text == GOOD_DRAFT
    assert result.source == "first_attempt"
    assert result.attempts == 1
    assert len(provider.payloads) == 1
    assert "Additional rule" not in provider.payloads[0].user_prompt


def test_compose_retries_with_hardened_prompt() -> None:
    """Summary: A reply-shaped first draft triggers one hardened retry.

    Importance: Confirms the second prompt carries the rewrite rule.
    Alternatives: Return the first draft regardless of shape.
    """

    service, provider = _service([REPLY_DRAFT, GOOD_DRAFT])
    result = service.generate(GenerationRequest.create("leave on 9-11-2025"))
    assert result.text == GOOD_DRAFT
    assert result.source == "second_attempt"
    assert result.attempts == 2
    assert len(provider.payloads) == 2
    assert all(isinstance(payload, ComposePayload) for payload in provider.payloads)
    assert "Your previous draft resembled a reply." in provider.payloads[1].user_prompt


def test_compose_falls_back_after_two_rejections() -> None:
    """Summary: Two rejected drafts produce the deterministic template.

    Importance: Backend calls are bounded and the caller still gets an email.
    Alternatives: Keep retrying until accepted.
    """

    service, provider = _service([REPLY_DRAFT])
    result = service.generate(
        GenerationRequest.create("write an email about requesting leave on 9-11-2025", None, False)
    )
    assert result.source == "fallback"
    assert len(provider.payloads) == 2
    assert "I would like to request leave on 09 November 2025." in result.text
    assert "---\nrequesting leave on 9-11-2025\n---" in provider.payloads[0].user_prompt


def test_compose_fallback_uses_greeting_and_duration() -> None:
    service, _ = _service([""])
    result = service.generate(GenerationRequest.create("hello sir, I need 2 days leave for personal reasons"))
    assert result.source == "fallback"
    assert result.text.startswith("hello sir,\n\nI would like to request 2 days leave. ")


def test_compose_backend_failures_reach_fallback() -> None:
    service, provider = _service([RuntimeError("timeout")])
    result = service.generate(GenerationRequest.create("need 1 day leave"))
    assert result.source == "fallback"
    assert "I would like to request 1 day leave." in result.text
    assert len(provider.payloads) == 2


def test_reply_blank_returns_apology() -> None:
    """Summary: An empty reply draft yields the fixed apology string.

    Importance: Reply callers never receive blank text.
    Alternatives: Raise an HTTP error for empty generations.
    """

    service, provider = _service([{"candidates": []}])
    result = service.generate(GenerationRequest.create("Original thread text", None, True))
    assert result.text == REPLY_APOLOGY
    assert result.source == "reply_apology"
    assert len(provider.payloads) == 1


def test_reply_skips_validation_and_normalization() -> None:
    """Summary: Reply drafts are returned as-is, even with HR-style phrases.

    Importance: The classifier and fallback apply to compose mode only.
    Alternatives: Validate replies with a separate classifier.
    """

    service, provider = _service([REPLY_DRAFT])
    content = "write an email about the budget review"
    result = service.generate(GenerationRequest.create(content, "friendly", True))
    assert result.text == REPLY_DRAFT
    assert result.source == "reply"
    assert len(provider.payloads) == 1
    payload = provider.payloads[0]
    assert isinstance(payload, ReplyPayload)
    assert f"---\n{content}\n---" in payload.user_prompt
    assert "friendly tone" in payload.user_prompt


def test_generate_email_returns_text() -> None:
    service, _ = _service([GOOD_DRAFT])
    assert service.generate_email("leave tomorrow", None, None) == GOOD_DRAFT


def test_compose_extracts_artifacts_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """Summary: Both prompts and the fallback share one extraction.

    Importance: Artifacts are derived once per request.
    Alternatives: Extract in every consumer.
    """

    calls: list[str] = []

    def counting_extract(instruction: str) -> ExtractedArtifacts:
        calls.append(instruction)
        return extract_artifacts(instruction)

    monkeypatch.setattr(services, "extract_artifacts", counting_extract)
    service, provider = _service([REPLY_DRAFT])
    result = service.generate(GenerationRequest.create("Dear Ravi, I need 2 days leave"))
    assert result.source == "fallback"
    assert calls == ["Dear Ravi, I need 2 days leave"]
    assert result.text.startswith("Dear Ravi,\n\nI would like to request 2 days leave. ")
    assert all('EXACTLY with: "Dear Ravi,"' in payload.user_prompt for payload in provider.payloads)


def test_compose_reaches_fallback_with_malformed_endpoint() -> None:
    provider = GeminiProvider("generativelanguage.example/x", "k")
    service = EmailGeneratorService(client=GenerationClient(provider))
    result = service.generate(GenerationRequest.create("write an email about requesting leave on 9-11-2025"))
    assert result.source == "fallback"
    assert "I would like to request leave on 09 November 2025." in result.text
