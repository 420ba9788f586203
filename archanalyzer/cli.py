"""CLI entrypoints for archanalyzer commands."""

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path

from .host import ConsoleHost
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_logging_options(parser: argparse.ArgumentParser, *, inherited: bool = False) -> None:
    # Subcommands repeat the flags without clobbering values given before the command.
    flag_default = argparse.SUPPRESS if inherited else False
    path_default = argparse.SUPPRESS if inherited else None
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=flag_default,
        help="Show debug output, including skipped key files and request details.",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=flag_default,
        help="Hide progress messages; only warnings and errors are logged.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=path_default,
        help="Also write debug logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archanalyzer",
        description="Summarise a project's structure and ask an LLM for an architecture report.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyse a project and print a markdown architecture report.",
    )
    _add_logging_options(analyze_parser, inherited=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--provider",
        default=None,
        help="Model provider identifier (defaults to the configured provider or 'openai').",
    )
    analyze_parser.add_argument(
        "--api-key",
        default=None,
        help="Provider API key (defaults to .archanalyzer.yml or ARCHANALYZER_API_KEY/OPENAI_API_KEY).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing /analyze.",
    )
    _add_logging_options(serve_parser, inherited=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for archanalyzer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=args.log_file,
    )

    if args.command == "analyze":
        host = ConsoleHost(output=args.output)
        previous = signal.signal(signal.SIGINT, lambda *_: host.token.cancel())
        try:
            result = Orchestrator().run_path(
                args.path,
                host,
                api_key=args.api_key,
                provider=args.provider,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        finally:
            signal.signal(signal.SIGINT, previous)
        if result is None:
            parser.exit(130, "Analysis cancelled.\n")
        if not result.ok:
            parser.exit(1)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
