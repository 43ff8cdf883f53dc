"""Entry point module for the AI Image Detector."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from config import APP_DESCRIPTION, APP_NAME, APP_VERSION
from utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_arguments(argv: Optional[Iterable[str]] = None):
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        prog="aidetector",
        description=f"{APP_DESCRIPTION} v{APP_VERSION}",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    analyze = subparsers.add_parser(
        "analyze",
        help="Estimate how likely an image is AI-generated",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    analyze.add_argument("-i", "--input", required=True, help="Image to analyse")
    analyze.add_argument("-r", "--report", help="Write a plain-text report to this file or directory")
    jitter = analyze.add_mutually_exclusive_group()
    jitter.add_argument("--seed", type=int, help="Seed for the random jitter term")
    jitter.add_argument("--no-jitter", action="store_true", help="Disable the random jitter term")
    analyze.add_argument("--json", action="store_true", help="Print the result as JSON")
    analyze.add_argument("-v", "--verbose", action="store_true", help="Show feature values")

    return parser.parse_args(args=list(argv) if argv is not None else None)


def run_gui() -> None:
    """Launch the graphical user interface."""

    try:
        logger.info("Starting %s in GUI mode", APP_NAME)
        from aidetector.app import main as gui_main
    except ImportError as exc:
        logger.error("Failed to import GUI modules: %s", exc)
        print("Error: the GUI could not be loaded, install PyQt6")
        print("  pip install PyQt6")
        sys.exit(1)

    sys.exit(gui_main())


def run_cli(args) -> None:
    """Execute a CLI command."""

    from cli import DetectorCLI

    cli = DetectorCLI(args)
    success = cli.run()
    sys.exit(0 if success else 1)


def main(argv: Optional[Iterable[str]] = None) -> None:
    """Main entry point used by ``python -m`` and the console script."""

    args = parse_arguments(argv)
    if getattr(args, "command", None) is None:
        run_gui()
        return

    run_cli(args)


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
