"""
Configuration and serialization for Warikan
"""
from __future__ import annotations
import os

from models import Expense, Group, Member
from utils import app_dir, parse_iso, to_iso

GROUPS_FILENAME = "groups.json"


def default_groups_path() -> str:
    """Path of the groups file inside the data directory ($WARIKAN_HOME or ~/.warikan)"""
    return os.path.join(app_dir(), GROUPS_FILENAME)


def _text(v) -> str:
    return "" if v is None else str(v)


def member_to_dict(m: Member) -> dict:
    return {"id": m.id, "name": m.name}


def expense_to_dict(e: Expense) -> dict:
    return {
        "id": e.id,
        "paidBy": e.paid_by,
        "amount": e.amount,
        "description": e.description,
        "splitBetween": list(e.split_between),
        "date": to_iso(e.date),
    }


def group_to_dict(group: Group) -> dict:
    """Convert Group object to dictionary for JSON serialization"""
    return {
        "id": group.id,
        "name": group.name,
        "members": [member_to_dict(m) for m in group.members],
        "expenses": [expense_to_dict(e) for e in group.expenses],
        "createdAt": to_iso(group.created_at),
    }


def _list(d: dict, key: str) -> list:
    v = d[key]
    if not isinstance(v, list):
        raise TypeError(f"{key} must be a list, got {type(v).__name__}")
    return v


def _amount(v) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise TypeError(f"amount must be an integer, got {v!r}")
    if v <= 0:
        raise ValueError(f"amount must be positive, got {v}")
    return v


def dict_to_expense(d: dict) -> Expense:
    split = _list(d, "splitBetween")
    if not split:
        raise ValueError(f"expense {d['id']!r} has no members to split between")
    return Expense(
        id=str(d["id"]),
        paid_by=str(d["paidBy"]),
        amount=_amount(d["amount"]),
        description=str(d.get("description", "")),
        split_between=[str(x) for x in split],
        date=parse_iso(d["date"]),
    )


def dict_to_group(d: dict) -> Group:
    """
    Convert dictionary from JSON to Group object.
    Raises KeyError/TypeError/ValueError on malformed records.
    """
    return Group(
        id=_text(d["id"]),
        name=_text(d["name"]),
        members=[Member(id=str(m["id"]), name=str(m["name"])) for m in _list(d, "members")],
        expenses=[dict_to_expense(e) for e in _list(d, "expenses")],
        created_at=parse_iso(d["createdAt"]),
    )
