"""Export the session match log.

The CSV layout is fixed by the downstream spreadsheet import:

    Time,Vendor,Inhouse
    2024-05-02 09:14:03,XYZ987654321,XYZ987654322

Fields are joined with commas as-is (no quoting); codes never contain
commas because the extraction pattern does not allow them.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from ..config import Config, default_config
from ..models.session import MatchRecord

logger = logging.getLogger(__name__)


def render_match_csv(
    records: Iterable[MatchRecord],
    config: Optional[Config] = None,
) -> str:
    """Render records as CSV text, one row per record, newline-terminated."""
    cfg = config or default_config
    lines = [",".join(cfg.csv_header)]
    for rec in records:
        lines.append(f"{rec.time},{rec.vendor},{rec.inhouse}")
    return "\n".join(lines) + "\n"


def write_match_csv(
    records: Sequence[MatchRecord],
    path: Union[str, Path, None] = None,
    config: Optional[Config] = None,
) -> Optional[Path]:
    """
    Write the match log to a CSV file.

    Args:
        records: Match log (e.g. CaptureWorkflow.match_data_list)
        path: Target file or directory (default: ./<config.csv_filename>)
        config: Config override (uses default_config if None)

    Returns:
        Path written, or None when the log is empty (nothing to share)
    """
    if not records:
        logger.info("Match log is empty. Nothing to export.")
        return None

    cfg = config or default_config
    target = Path(path) if path is not None else Path(cfg.csv_filename)
    if target.is_dir():
        target = target / cfg.csv_filename
    target.parent.mkdir(parents=True, exist_ok=True)

    with open(target, "w", encoding="utf-8", newline="") as f:
        f.write(render_match_csv(records, cfg))
    logger.info("Wrote %d match records to %s", len(records), target)
    return target


def format_match_list(records: Sequence[MatchRecord]) -> str:
    """Human-readable listing of the match log."""
    if not records:
        return "MatchData list is empty."

    lines = ["Printing MatchData list:"]
    for i, rec in enumerate(records, start=1):
        lines.append(f"Item {i}: Time={rec.time}, Vendor={rec.vendor}, Inhouse={rec.inhouse}")
    return "\n".join(lines)
