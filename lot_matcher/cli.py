"""Command-line entry point: verify vendor/inhouse label pairs.

Each pair is a vendor label and an inhouse label, given either as photos
(transcribed with the OpenAI vision adapter) or as OCR text dumps.

Usage:
    lot-matcher vendor.jpg inhouse.jpg
    lot-matcher v1.txt i1.txt v2.txt i2.txt --csv match_data.csv
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .config import Config
from .models.session import SessionSnapshot
from .pipeline.capture_pipeline import CapturePipeline, CaptureResult
from .report.match_log import format_match_list, write_match_csv
from .utils.io import is_image_path, load_image_robust, load_text_robust


def _capture(pipeline: CapturePipeline, path: str) -> Optional[CaptureResult]:
    if is_image_path(path):
        image, err = load_image_robust(path)
        if err:
            print(f"  {err}")
            return None
        pipeline.load()
        return pipeline.capture_image(image)

    text, err = load_text_robust(path)
    if err:
        print(f"  {err}")
        return None
    return pipeline.capture_text(text)


def _prompt_choice(candidates: Sequence[str]) -> Optional[str]:
    """Ask the operator to pick one code; None means 'none of these'."""
    print("  Several possible codes found:")
    for i, code in enumerate(candidates, start=1):
        print(f"    {i}. {code}")
    if not sys.stdin.isatty():
        return None
    try:
        answer = input("  Pick a number (Enter to retake the photo): ").strip()
    except EOFError:
        return None
    if answer.isdigit() and 1 <= int(answer) <= len(candidates):
        return candidates[int(answer) - 1]
    return None


def _run_phase(pipeline: CapturePipeline, label: str, path: str) -> Optional[SessionSnapshot]:
    print(f"{label}: {path}")
    result = _capture(pipeline, path)
    if result is None:
        return None
    if not result.ok:
        print(f"  {result.ocr_error}")
        return None

    snap = result.snapshot
    if snap.is_ambiguous:
        choice = _prompt_choice(snap.ambiguous_candidates)
        workflow = pipeline.workflow
        snap = workflow.resolve_ambiguous(choice) if choice else workflow.dismiss_ambiguous()

    if snap.try_again:
        print(f"  No {label.lower()} code accepted. Try again.")
        return None
    return snap


def verify_pair(pipeline: CapturePipeline, vendor_path: str, inhouse_path: str, accept: bool = True) -> bool:
    """
    Run one vendor/inhouse pair through the workflow.

    Returns:
        True if the pair was logged as a match (or, with accept=False,
        if both codes were captured)
    """
    workflow = pipeline.workflow
    workflow.reset_vendor_and_inhouse()

    if _run_phase(pipeline, "Vendor", vendor_path) is None:
        return False
    snap = _run_phase(pipeline, "Inhouse", inhouse_path)
    if snap is None:
        return False

    print(f"  Vendor:  {snap.vendor}")
    print(f"  Inhouse: {snap.inhouse}")
    print(f"  Match Percentage: {snap.match_percentage}% ({snap.verdict.value})")

    if not accept:
        return True

    before = snap.scanned_count
    snap = workflow.accept_match()
    logged = snap.scanned_count > before
    print("  Logged." if logged else "  Below threshold, discarded.")
    return logged


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lot Matcher - compare vendor and inhouse lot labels"
    )
    parser.add_argument(
        "paths", nargs="+",
        help="Vendor/inhouse pairs: photo (PNG/JPG) or OCR text file, in order",
    )
    parser.add_argument("--csv", help="Write accepted matches to this CSV file")
    parser.add_argument("--api-key", help="OpenAI API key (default: OPENAI_API_KEY)")
    parser.add_argument("--pattern", default="labeled", help="Code pattern variant")
    parser.add_argument("--min-length", type=int, help="Minimum code length (default: per pattern)")
    parser.add_argument("--lowercase", action="store_true", help="Lowercase lines before keyword scoring")
    parser.add_argument("--no-accept", action="store_true", help="Show the match percentage only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(args.paths) % 2:
        parser.error("paths must come in vendor/inhouse pairs")

    try:
        config = Config(
            pattern_variant=args.pattern,
            min_code_length=args.min_length,
            lowercase_lines=args.lowercase,
        )
        pipeline = CapturePipeline(api_key=args.api_key, config=config)
    except ValueError as e:
        parser.error(str(e))

    failures = 0
    for i in range(0, len(args.paths), 2):
        if not verify_pair(pipeline, args.paths[i], args.paths[i + 1], accept=not args.no_accept):
            failures += 1

    records = pipeline.workflow.match_data_list
    print()
    print(format_match_list(records))

    if args.csv:
        written = write_match_csv(records, args.csv, config=pipeline.workflow.config)
        if written:
            print(f"\nMatch data saved to: {written}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
