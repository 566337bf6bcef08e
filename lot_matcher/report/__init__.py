"""Match log export."""

from .match_log import render_match_csv, write_match_csv, format_match_list

__all__ = ["render_match_csv", "write_match_csv", "format_match_list"]
