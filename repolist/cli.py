"""CLI entrypoint for repolist."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import httpx

from .config import load_config
from .errors import ConfigError, RepoListError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repolist",
        description="Generate a README listing of an organization's client libraries.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Discover repositories, collect metadata and write libraries.json and README.md.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory holding the template and receiving the outputs (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repolist commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "generate":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        try:
            with Orchestrator(config) as orchestrator:
                result = orchestrator.run()
        except (RepoListError, httpx.HTTPError, OSError) as exc:
            parser.exit(1, f"repolist generate failed: {exc!r}\nRun with --verbose for more details.\n")
        print(f"README written to {_relativize(result.readme_path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path | None) -> str:
    if path is None:
        return ""
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
