"""CLI entry point for github2omnifocus."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="github2omnifocus",
        description="Mirror GitHub issues, pull requests and notifications into OmniFocus",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config file name in ~/.config/github2omnifocus, or a path (default: $G2O_CONFIG "
        "or config.json)",
    )
    parser.add_argument(
        "--account",
        default=None,
        help="Only sync this account from the config file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the changes that would be made without touching OmniFocus",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args, falling back to G2O_* environment variables
    settings_kwargs: dict = {}
    if args.config:
        settings_kwargs["config"] = args.config
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    # Import here so --help and --version stay fast
    from .cli.sync import run_sync

    raise SystemExit(run_sync(settings, account=args.account, dry_run=args.dry_run))


if __name__ == "__main__":
    main()
