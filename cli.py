"""Command line interface for the AI Image Detector.

The dispatcher is used by :mod:`main` and reuses the same detector and
report helpers as the GUI, so both front-ends produce identical scores.
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Iterable, Optional

from config import APP_NAME, APP_VERSION
from utils.logger import set_console_level, setup_logger
from utils.validators import DecodeError, InvalidInputError

logger = setup_logger(__name__)


class CLIError(RuntimeError):
    """Custom error raised for recoverable CLI failures."""


def _ensure_exists(path: Path, description: str) -> Path:
    if not path.exists():
        raise CLIError(f"{description} not found: {path}")
    return path


class DetectorCLI:
    """CLI dispatcher."""

    def __init__(self, args) -> None:
        self.args = args
        self.command = getattr(args, "command", None)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def run(self) -> bool:
        try:
            if self.command == "analyze":
                self._handle_analyze()
            else:
                raise CLIError("No command specified. Use --help for usage information.")
        except CLIError as exc:
            logger.error("CLI error: %s", exc)
            print(f"Error: {exc}")
            return False
        except KeyboardInterrupt:
            print("Operation cancelled by user.")
            return False

        return True

    # ------------------------------------------------------------------
    # Analyze command
    # ------------------------------------------------------------------
    def _random_source(self):
        from detection.scoring import FixedRandomSource

        if getattr(self.args, "no_jitter", False):
            return FixedRandomSource(0.5)
        seed = getattr(self.args, "seed", None)
        return random.Random(seed)

    def _handle_analyze(self) -> None:
        args = self.args
        if getattr(args, "json", False):
            # stdout carries only the JSON document
            set_console_level("WARNING")
        target = _ensure_exists(Path(args.input), "Input file")

        from detection.detector import AIImageDetector
        from detection.report import save_report, threshold_note

        detector = AIImageDetector()
        try:
            result = detector.analyze_file(target, rng=self._random_source())
        except DecodeError as exc:
            raise CLIError(str(exc)) from exc
        except InvalidInputError as exc:
            raise CLIError(f"Invalid image data: {exc}") from exc

        report_path = None
        if getattr(args, "report", None):
            try:
                report_path = save_report(result, args.report)
            except OSError as exc:
                raise CLIError(f"Cannot write report: {exc}") from exc

        if getattr(args, "json", False):
            payload = result.to_dict()
            if report_path:
                payload["report"] = str(report_path)
            print(json.dumps(payload, indent=2))
            return

        print(f"\n{APP_NAME} v{APP_VERSION} - Analyze")
        print(f"Target : {target}")
        print(f"Size   : {result.width}x{result.height}, {result.file_size} bytes")
        print(f"Score  : {result.score:.2f} / 100")
        print(f"Flag   : {result.verdict}")
        print(f"Note   : {threshold_note()}")

        if args.verbose:
            features = result.features
            normalized = result.normalized
            print("\nFeatures:")
            print(f"  - edge energy     : {features.edge_energy:.3f} -> {normalized.edge_energy:.3f}")
            print(f"  - channel std dev : {features.channel_std_dev:.3f} -> {normalized.channel_std_dev:.3f}")
            print(f"  - saturation      : {features.saturation:.4f} -> {normalized.saturation:.3f}")
            print(f"  - size proxy (KB) : {features.size_proxy_kb:.2f} -> {normalized.size_proxy:.3f}")
            print(f"  Raw score {result.raw_score:.2f}, jitter {result.jitter:+.2f}")

        if report_path:
            print(f"\nReport : {report_path}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point used by unit tests."""

    from main import parse_arguments  # Lazy import to avoid circular dependency.

    args = parse_arguments(list(argv) if argv is not None else None)
    cli = DetectorCLI(args)
    return 0 if cli.run() else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main(sys.argv[1:]))
