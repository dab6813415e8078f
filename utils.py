"""
Utility functions for Warikan
"""
from __future__ import annotations
import math
import os
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get the current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Format datetime as ISO-8601 UTC with milliseconds, e.g. 2024-05-01T09:30:00.000Z"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(s: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC"""
    s = s.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves towards positive infinity (like JS Math.round)"""
    whole = math.floor(x)
    return int(whole) + (1 if x - whole >= 0.5 else 0)


def format_yen(amount: float) -> str:
    """Format an amount as whole yen with thousands separators"""
    return f"¥{round_half_up(amount):,}"


def app_dir() -> str:
    """
    Get application data directory: $WARIKAN_HOME or ~/.warikan
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("WARIKAN_HOME") or os.path.expanduser("~/.warikan")
    os.makedirs(path, exist_ok=True)
    return path
