"""Command-line entry point for ``create-geo-app``.

Usage::

    create-geo-app my-app
    create-geo-app my-app --docs --output-dir ~/projects
    python -m create_geo_app --help
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError
from rich.markup import escape

from create_geo_app.config import Config
from create_geo_app.orchestrator import SetupError, SetupOrchestrator
from create_geo_app.utils import console, err_console, is_valid_project_name, print_error

USAGE = "create-geo-app <project-name> [--docs] [--output-dir DIR] [--skip-preflight]"

FEATURES = [
    "Next.js 16 with TypeScript",
    "Turbopack for faster development",
    "Biome for linting and formatting",
    "shadcn/ui with all components",
    "Tailwind CSS and App Router",
    "Dark mode support with next-themes",
    "Optional MDX documentation section (--docs)",
]

NETWORK_HINT = "Please check your internet connection and try again."

HYPHEN_ERROR = "Error: Project name must not start with a hyphen"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse reports usage errors with exit status 2; this tool uses 1."""

    def error(self, message: str) -> NoReturn:
        print_error(f"Error: {escape(message)}")
        err_console.print(f"Usage: {USAGE}", markup=False)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="create-geo-app", add_help=False)
    parser.add_argument("project_name", nargs="?", default=None)
    parser.add_argument("--docs", action="store_true", default=None)
    parser.add_argument("--output-dir", "-o", type=Path, default=None)
    parser.add_argument("--skip-preflight", action="store_true")
    return parser


def print_help() -> None:
    """Print usage, an example and the feature summary to stdout."""
    console.print(f"Usage: {USAGE}", markup=False, highlight=False)
    console.print("\nDescription:")
    console.print("  Creates a Next.js 16 app with shadcn/ui pre-configured")
    console.print("\nOptions:")
    console.print("  --docs              Add an MDX documentation section", markup=False)
    console.print("  --output-dir DIR    Create the project inside DIR (default: .)", markup=False)
    console.print("  --skip-preflight    Do not probe the npm registry first", markup=False)
    console.print("  -h, --help          Show this message and exit", markup=False)
    console.print("\nExample:")
    console.print("  create-geo-app my-app")
    console.print("\nFeatures:")
    for feature in FEATURES:
        console.print(f"  - {feature}", markup=False)


def _is_hyphenated_name(arg: str) -> bool:
    return arg.startswith("-") and not arg.startswith("--") and is_valid_project_name(arg)


def _usage_error(*lines: str) -> NoReturn:
    for line in lines:
        print_error(line)
    err_console.print("\nUse --help for more information", markup=False)
    sys.exit(1)


def make_config(args: argparse.Namespace) -> Config:
    """Merge CLI flags over ``Config.from_env()``."""
    config = Config.from_env()
    update: dict[str, object] = {"project_name": args.project_name}
    if args.docs is not None:
        update["docs"] = args.docs
    if args.output_dir is not None:
        update["output_dir"] = args.output_dir.expanduser()
    if args.skip_preflight:
        update["preflight"] = False
    return config.model_copy(update=update)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-geo-app`` and ``python -m create_geo_app``."""
    raw_args = sys.argv[1:] if argv is None else list(argv)

    # Help wins over everything else, including invalid arguments.
    if "--help" in raw_args or "-h" in raw_args:
        print_help()
        sys.exit(0)

    parser = build_parser()
    args, extras = parser.parse_known_args(raw_args)
    # A name like "-app" is read as an option, so argparse never hands it over.
    if any(_is_hyphenated_name(arg) for arg in extras) or (
        args.project_name and args.project_name.startswith("-")
    ):
        _usage_error(HYPHEN_ERROR)
    if extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")

    if not args.project_name:
        _usage_error("Please provide a project name:", f"  {escape(USAGE)}")

    if not is_valid_project_name(args.project_name):
        _usage_error(
            "Error: Project name must contain only lowercase letters, numbers, and hyphens"
        )

    try:
        config = make_config(args)
    except (ValidationError, ValueError) as exc:
        _usage_error(f"Error: Invalid configuration: {escape(str(exc))}")
    if config.project_dir.exists():
        _usage_error(f"Error: {escape(str(config.project_dir))} already exists")

    orchestrator = SetupOrchestrator(config)
    try:
        asyncio.run(orchestrator.run())
    except SetupError as exc:
        print_error(f"\nError during setup: {escape(str(exc))}")
        err_console.print(NETWORK_HINT, markup=False)
        sys.exit(1)

    cd_target = (
        config.project_name
        if config.output_dir == Path(".")
        else str(config.project_dir)
    )
    console.print("\nTo start developing:")
    console.print(f"  cd {cd_target}", markup=False, highlight=False)
    console.print("  npm run dev", markup=False, highlight=False)
    console.print(
        f"\nYour Next.js 16 app with shadcn/ui and dark mode is ready!"
        f"{' Docs live at /docs.' if config.docs else ''}"
    )


if __name__ == "__main__":
    main()
