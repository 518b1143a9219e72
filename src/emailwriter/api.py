"""Summary: FastAPI application for the email writer.

Importance: Exposes the generation pipeline to browser extensions and other HTTP clients.
Alternatives: Use a CLI-only workflow or a different web framework.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from emailwriter.ai import AiProvider
from emailwriter.app import build_services
from emailwriter.config import AppConfig


class EmailGenerateRequest(BaseModel):
    """Summary: Request payload for email generation.

    Importance: Accepts the camelCase fields sent by existing clients.
    Alternatives: Use query parameters instead of JSON payloads.
    """

    model_config = ConfigDict(populate_by_name=True)

    email_content: str | None = Field(default=None, alias="emailContent")
    tone: str | None = None
    is_reply: bool | None = Field(default=None, alias="isReply")


def create_app(config: AppConfig, provider: AiProvider | None = None) -> FastAPI:
    """Summary: Create a FastAPI app wired to the generation service.

    Importance: Ensures the API layer shares one configuration and provider for its lifetime.
    Alternatives: Instantiate services globally outside the factory.
    """

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = FastAPI(title="Email Writer API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    services = build_services(config, provider)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Summary: Health check endpoint.

        Importance: Supports uptime checks in local and cloud deployments.
        Alternatives: Use a metrics endpoint only.
        """

        return {"status": "ok"}

    @app.post("/api/email/generate", response_class=PlainTextResponse)
    def generate_email(payload: EmailGenerateRequest) -> str:
        """Summary: Generate a reply or a new outbound email.

        Importance: The single inbound operation of the service.
        Alternatives: Split reply and compose into separate endpoints.
        """

        return services.generator.generate_email(
            payload.email_content, payload.tone, payload.is_reply
        )

    return app


app = create_app(AppConfig.from_env())
