"""Summary: Application factory wiring core services.

Importance: Centralizes dependency creation for the CLI and API layers.
Alternatives: Instantiate services manually in each entrypoint.
"""

from __future__ import annotations

from dataclasses import dataclass

from emailwriter.ai import AiProvider, AiProviderFactory, GenerationClient
from emailwriter.classifier import OutboundLeaveClassifier
from emailwriter.config import AppConfig
from emailwriter.services import EmailGeneratorService


@dataclass(frozen=True)
class AppServices:
    """Summary: Bundle of core services for the email writer.

    Importance: Simplifies passing dependencies to UI or API layers.
    Alternatives: Use a dependency injection container.
    """

    generator: EmailGeneratorService
    provider: AiProvider
    config: AppConfig


def build_services(config: AppConfig, provider: AiProvider | None = None) -> AppServices:
    """Summary: Build core services from configuration.

    Importance: Provides a single construction path; the provider is built once per process.
    Alternatives: Construct the provider per request.
    """

    ai_provider = provider or AiProviderFactory(config).build()
    generator = EmailGeneratorService(
        client=GenerationClient(ai_provider),
        classifier=OutboundLeaveClassifier(),
    )
    return AppServices(generator=generator, provider=ai_provider, config=config)
