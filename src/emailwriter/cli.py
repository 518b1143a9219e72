"""Summary: Command-line interface for the email writer.

Importance: Lets users draft emails from a terminal without running the API.
Alternatives: Use a CLI framework like Typer or Click.
"""

from __future__ import annotations

import argparse
import logging

from emailwriter.app import build_services
from emailwriter.config import AppConfig
from emailwriter.models import GenerationRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Summary: Build the CLI argument parser.

    Importance: Defines supported commands for local operation.
    Alternatives: Read a JSON request from stdin.
    """

    parser = argparse.ArgumentParser(description="Email Writer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Compose an email or draft a reply")
    generate.add_argument("content", type=str, help="Instruction, or the original email with --reply")
    generate.add_argument("--tone", type=str, default=None)
    generate.add_argument("--reply", action="store_true", help="Reply to the given email")
    generate.add_argument(
        "--show-source", action="store_true", help="Log which stage produced the email"
    )
    return parser


def run_cli(argv: list[str] | None = None) -> None:
    """Summary: Execute CLI commands based on arguments.

    Importance: Drives local drafting through the same service as the API.
    Alternatives: Invoke the service via an HTTP API.
    """

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    services = build_services(AppConfig.from_env())

    if args.command == "generate":
        request = GenerationRequest.create(args.content, args.tone, args.reply)
        result = services.generator.generate(request)
        if args.show_source:
            logger.info("Source: %s, backend calls: %s", result.source, result.attempts)
        print(result.text)
        return


if __name__ == "__main__":
    run_cli()
