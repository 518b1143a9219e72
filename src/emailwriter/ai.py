"""Summary: Generation backends and the client adapter used by the pipeline.

Importance: Isolates network access and response parsing so generation failures never break a request.
Alternatives: Call the Gemini SDK directly from the orchestrator.
"""

from __future__ import annotations

import http.client
import json
import logging
import time
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable

from emailwriter.config import AppConfig
from emailwriter.models import PromptPayload

logger = logging.getLogger(__name__)


class AiProvider(ABC):
    """Summary: Abstract interface for one generation call.

    Importance: Allows swapping the live backend for a deterministic one in tests.
    Alternatives: Use a single vendor SDK and accept lock-in risk.
    """

    @abstractmethod
    def generate(self, payload: PromptPayload) -> dict[str, Any]:
        """Summary: Send a payload and return the decoded JSON response.

        Importance: Standardizes what the client adapter parses.
        Alternatives: Return provider-specific response objects directly.

        Raises RuntimeError on transport, request-building, or decoding failures.
        """


class GeminiProvider(AiProvider):
    """Summary: Provider for the Gemini generateContent HTTP API.

    Importance: Produces the drafts and replies in production.
    Alternatives: Use the google-generativeai client library.
    """

    def __init__(self, api_url: str, api_key: str, timeout_seconds: float = 60) -> None:
        """Summary: Initialize the Gemini provider.

        Importance: Stores endpoint and credential once for repeated requests.
        Alternatives: Resolve configuration per request.
        """

        self._api_url = api_url
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    def generate(self, payload: PromptPayload) -> dict[str, Any]:
        """Summary: POST the payload to Gemini and decode the reply.

        Importance: Performs exactly one network call per attempt.
        Alternatives: Stream partial responses.
        """

        started = time.time()
        try:
            request = urllib.request.Request(
                url=f"{self._api_url}?key={self._api_key}",
                data=json.dumps(payload.to_json()).encode("utf-8"),
                headers={"Content-Type": "application/json"},
                method="POST",
            )
            with urllib.request.urlopen(request, timeout=self._timeout_seconds) as response:
                raw = json.loads(response.read().decode("utf-8"))
        except (OSError, http.client.HTTPException, ValueError) as exc:
            raise RuntimeError(f"Gemini request failed: {exc}") from exc
        logger.debug("Gemini responded in %s ms.", int((time.time() - started) * 1000))
        return raw


class MockAiProvider(AiProvider):
    """Summary: Deterministic provider for local runs and tests.

    Importance: Exercises the whole pipeline without network access.
    Alternatives: Record and replay real backend traffic.

    Each call consumes the next scripted response; the last one repeats once
    the script runs out. A string is wrapped in a Gemini-shaped response, a
    dict is returned as-is, and an exception instance is raised. Without a
    script the provider echoes the start of the prompt.
    """

    def __init__(self, responses: Iterable[Any] | None = None) -> None:
        self._responses = list(responses or [])
        self.payloads: list[PromptPayload] = []

    def generate(self, payload: PromptPayload) -> dict[str, Any]:
        self.payloads.append(payload)
        if not self._responses:
            return candidate_response(f"[mock] {payload.user_prompt[:240]}")
        scripted = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(scripted, Exception):
            raise scripted
        if isinstance(scripted, dict):
            return scripted
        return candidate_response(str(scripted))


def candidate_response(text: str) -> dict[str, Any]:
    """Summary: Wrap text in the Gemini response shape."""

    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def extract_response_text(raw: Any) -> str:
    """Summary: Pull generated text out of a Gemini response.

    Importance: Treats every unexpected shape as "no text" rather than an error.
    Alternatives: Validate the response with a strict schema and raise.

    Reads candidates[0].content.parts[0].text, then candidates[0].content.text.
    """

    if not isinstance(raw, dict):
        return ""
    candidates = raw.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if isinstance(parts, list) and parts and isinstance(parts[0], dict):
        text = parts[0].get("text")
        if isinstance(text, str) and text.strip():
            return text
    text = content.get("text")
    if isinstance(text, str) and text.strip():
        return text
    return ""


@dataclass(frozen=True)
class GenerationClient:
    """Summary: Adapter that turns one provider call into plain text.

    Importance: Absorbs backend failures into an empty string so retry and fallback can proceed.
    Alternatives: Propagate errors and let the orchestrator decide.
    """

    provider: AiProvider

    def generate_text(self, payload: PromptPayload) -> str:
        """Summary: Call the provider once and return stripped text or "".

        Importance: Keeps generation failures non-fatal.
        Alternatives: Retry transport failures inside the adapter.
        """

        try:
            raw = self.provider.generate(payload)
        except Exception as exc:
            logger.warning("Generation call failed: %s", exc, exc_info=True)
            return ""
        return extract_response_text(raw).strip()


@dataclass(frozen=True)
class AiProviderFactory:
    """Summary: Factory for selecting the provider from configuration.

    Importance: Keeps provider selection logic centralized.
    Alternatives: Wire providers manually at the application entrypoint.
    """

    config: AppConfig

    def build(self) -> AiProvider:
        """Summary: Construct the configured provider.

        Importance: Fails at startup, not per request, when the credential is missing.
        Alternatives: Use dependency injection frameworks.
        """

        if self.config.ai_provider == "gemini":
            if not self.config.gemini_api_key:
                raise ValueError("GEMINI_API_KEY is required for gemini provider")
            return GeminiProvider(
                self.config.gemini_api_url,
                self.config.gemini_api_key,
                self.config.request_timeout_seconds,
            )
        if self.config.ai_provider == "mock":
            return MockAiProvider()
        raise ValueError(f"Unknown AI provider: {self.config.ai_provider}")
