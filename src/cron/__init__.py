"""Cron expression scanning, parsing, matching and next-run search."""

from .scanner import Scanner, scan
from .parser import ALIASES, parse_expression, parse_tokens, resolve_alias
from .matcher import matches
from .search import HORIZON, find_next_run, iter_next_runs

__all__ = [
    "Scanner",
    "scan",
    "ALIASES",
    "parse_expression",
    "parse_tokens",
    "resolve_alias",
    "matches",
    "HORIZON",
    "find_next_run",
    "iter_next_runs"
]
