"""
Shareable text report of a settlement plan
"""
from __future__ import annotations
from typing import List

from computations import get_member_name
from models import Group, Settlement
from utils import format_yen


def generate_settlement_text(group: Group, settlements: List[Settlement]) -> str:
    """
    Plain-text summary suitable for pasting into a chat:
    title, number of transfers, one numbered line per transfer.
    Returns "" when nothing needs settling.
    """
    if not settlements:
        return ""

    lines = [f"{group.name} - Settlement", "", f"Settled in {len(settlements)} transfer(s)", ""]
    for n, s in enumerate(settlements, start=1):
        from_name = get_member_name(group.members, s.from_id)
        to_name = get_member_name(group.members, s.to_id)
        lines.append(f"{n}. {from_name} → {to_name}: {format_yen(s.amount)}")
    lines += ["", "Generated by Warikan"]
    return "\n".join(lines) + "\n"
