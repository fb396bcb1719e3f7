"""Command-line front door for mdtree.

Parses CLI options, loads (or scaffolds) the configuration, and dispatches
into one synchronization run. Returns a process exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import PROJECT_CONFIG_FILENAME, load_config
from .errors import ConfigMissing, TreeDocError
from .scaffold import initialize_configuration
from .sync import render_preview, run_sync

# Package-root logger: the handler installed here also receives every
# ``mdtree.*`` module logger through propagation.
logger = logging.getLogger(__package__)

LOG_FORMAT = "[TREE-GEN] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtree",
        description="Render the project directory tree into a Markdown file between tree markers.",
    )
    parser.add_argument("--config", type=Path, default=None, help=f"Config file (default: ./{PROJECT_CONFIG_FILENAME}).")
    parser.add_argument("--root", type=Path, default=None, help="Override the root directory to walk.")
    parser.add_argument("--target", type=Path, default=None, help="Override the Markdown file to update.")
    parser.add_argument("--descriptions", type=Path, default=None, help="Override the descriptions YAML file.")
    parser.add_argument("--ignore", type=Path, default=None, help="Override the ignore rules file.")
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the rendered tree block and exit without writing any file.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route package logs to stdout with the tool's message prefix."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def _run_first_time_setup(base_dir: Path) -> int:
    logger.info("Main config file (%s) not found.", PROJECT_CONFIG_FILENAME)
    logger.info("Running one-time setup...")
    initialize_configuration(base_dir)
    logger.info("Setup complete! All necessary files have been created.")
    logger.info("Please review the generated files, especially '%s', and then run the command again.", PROJECT_CONFIG_FILENAME)
    return 0


def main(argv: list[str] | None = None, base_dir: Path | None = None) -> int:
    """Parse arguments and run one synchronization pass.

    ``base_dir`` is primarily for tests; when omitted the current working
    directory is used for config lookup, scaffolding, and relative paths.
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    base = (base_dir or Path.cwd()).resolve()

    try:
        config = load_config(args.config, base_dir=base)
    except ConfigMissing:
        if args.config is not None:
            logger.error("Config file not found: %s", args.config)
            return 1
        return _run_first_time_setup(base)

    def resolve(path: Path | None) -> Path | None:
        return (base / path).resolve() if path is not None else None

    config = config.with_overrides(
        root=resolve(args.root),
        target_file=resolve(args.target),
        descriptions_file=resolve(args.descriptions),
        ignore_file=resolve(args.ignore),
    )

    try:
        if args.print_only:
            sys.stdout.write(render_preview(config) + "\n")
            return 0
        run_sync(config)
    except TreeDocError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("An unexpected error occurred: %s", exc, exc_info=args.verbose)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
