"""Summary: Application configuration for the email writer.

Importance: Centralizes packaged defaults, .env, and environment overrides in one read-only value.
Alternatives: Use a dedicated settings library like Pydantic Settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULTS_PATH = Path(__file__).with_name("defaults.json")


@dataclass(frozen=True)
class AppConfig:
    """Summary: Holds backend endpoint, credential, and server settings.

    Importance: Built once at startup and injected so no component re-reads settings per call.
    Alternatives: Read environment variables lazily inside each provider.
    """

    ai_provider: str
    gemini_api_url: str
    gemini_api_key: str | None
    request_timeout_seconds: float
    api_host: str
    api_port: int
    cors_origins: list[str]

    @staticmethod
    def from_env(defaults_path: Path = DEFAULTS_PATH, dotenv_path: Path = Path(".env")) -> "AppConfig":
        """Summary: Build configuration from defaults, .env, and environment.

        Importance: Keeps every variable declared in the defaults file while allowing overrides.
        Alternatives: Parse only environment variables without a defaults file.
        """

        defaults = load_defaults(defaults_path)
        load_dotenv(dotenv_path)
        return AppConfig(
            ai_provider=os.getenv("EMAILWRITER_AI_PROVIDER", defaults["ai_provider"]),
            gemini_api_url=os.getenv("GEMINI_API_URL", defaults["gemini_api_url"]),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or defaults["gemini_api_key"] or None,
            request_timeout_seconds=float(
                os.getenv("EMAILWRITER_TIMEOUT_SECONDS", defaults["request_timeout_seconds"])
            ),
            api_host=os.getenv("EMAILWRITER_API_HOST", defaults["api_host"]),
            api_port=int(os.getenv("EMAILWRITER_API_PORT", defaults["api_port"])),
            cors_origins=split_csv(os.getenv("EMAILWRITER_CORS_ORIGINS", defaults["cors_origins"])),
        )


def load_defaults(path: Path) -> dict[str, str]:
    """Summary: Read the packaged provider, Gemini, and server defaults.

    Importance: A missing defaults.json means a broken install, so it fails loudly at startup.
    Alternatives: Hardcode fallback values next to each AppConfig field.
    """

    if not path.exists():
        raise FileNotFoundError(f"Defaults file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def load_dotenv(path: Path) -> None:
    """Summary: Load the Gemini key and other overrides from a local .env file.

    Importance: Lets developers keep the Gemini key in a git-ignored file; real environment values win.
    Alternatives: Use python-dotenv or OS-specific secret stores.

    Blank lines, comments, and lines without "=" are skipped.
    """

    if not path.exists():
        return
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        entry = raw_line.strip()
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        name, value = entry.split("=", 1)
        os.environ.setdefault(name.strip(), value.strip())


def split_csv(value: str) -> list[str]:
    """Summary: Split a comma-separated setting into trimmed items."""

    return [item.strip() for item in value.split(",") if item.strip()]
