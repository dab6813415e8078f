"""
Data models for Warikan
"""
from __future__ import annotations
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from exceptions import InvalidExpenseError, InvalidGroupError, InvalidMemberError
from utils import utc_now


@dataclass(frozen=True)
class Member:
    """Participant in a group"""
    id: str
    name: str


@dataclass(frozen=True)
class Expense:
    """Single payment by one member, split equally among split_between"""
    id: str
    paid_by: str  # member id
    amount: int  # yen
    description: str
    split_between: List[str]  # member ids
    date: datetime


@dataclass
class Group:
    """Named collection of members and expenses"""
    id: str
    name: str
    members: List[Member] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class Balance:
    """Net position of a member; positive -> is owed, negative -> owes"""
    member_id: str
    member_name: str
    balance: float


@dataclass(frozen=True)
class Settlement:
    """Single transfer from a debtor to a creditor"""
    from_id: str
    to_id: str
    amount: int


def _new_id() -> str:
    return str(uuid.uuid4())


def new_member(name: str) -> Member:
    name = (name or "").strip()
    if not name:
        raise InvalidMemberError("Member name is required.")
    return Member(id=_new_id(), name=name)


def new_group(name: str, members: List[Member]) -> Group:
    """Create a group, rejecting an empty name or member list"""
    name = (name or "").strip()
    if not name:
        raise InvalidGroupError("Group name is required.")
    if not members:
        raise InvalidGroupError("At least one member is required.")
    return Group(id=_new_id(), name=name, members=list(members), expenses=[], created_at=utc_now())


def new_expense(
    paid_by: Optional[str],
    amount: int,
    description: str,
    split_between: List[str],
    date: Optional[datetime] = None,
) -> Expense:
    """
    Create an expense the way the add-expense flow does:
    positive whole amount, non-empty description, a payer and at least one member to split with.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidExpenseError("Enter a valid amount.")
    description = (description or "").strip()
    if not description:
        raise InvalidExpenseError("Description is required.")
    if not paid_by:
        raise InvalidExpenseError("Select who paid.")
    if not split_between:
        raise InvalidExpenseError("Select at least one member to split with.")
    return Expense(
        id=_new_id(),
        paid_by=paid_by,
        amount=amount,
        description=description,
        split_between=list(split_between),
        date=date or utc_now(),
    )


def with_expense(group: Group, expense: Expense) -> Group:
    """Return a copy of group with expense appended"""
    return replace(group, expenses=[*group.expenses, expense])
