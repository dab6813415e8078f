"""
Balance aggregation and settlement planning for Warikan
"""
from __future__ import annotations
import logging
from typing import Dict, List

from exceptions import InvalidExpenseError
from models import Balance, Expense, Group, Member, Settlement
from utils import round_half_up

logger = logging.getLogger(__name__)

# balances at or below this magnitude (yen) count as settled
SETTLED_EPSILON = 0.01


def validate_expense(e: Expense) -> None:
    """Raise InvalidExpenseError if the expense cannot be split"""
    if not e.split_between:
        raise InvalidExpenseError(f"Expense {e.id!r} has no members to split between.")
    if not e.amount > 0:
        raise InvalidExpenseError(f"Expense {e.id!r} has non-positive amount {e.amount!r}.")


def calculate_balances(group: Group) -> List[Balance]:
    """
    Compute each member's net balance.
    Payer is credited the full amount; everyone in split_between is debited an equal
    (real-valued) share. Ids that are not members of the group are skipped.
    Returns one Balance per member, in member order.
    """
    net: Dict[str, float] = {m.id: 0.0 for m in group.members}

    for e in group.expenses:
        validate_expense(e)
        share = e.amount / len(e.split_between)
        if e.paid_by in net:
            net[e.paid_by] += e.amount
        else:
            logger.debug("Skipping unknown payer %s on expense %s", e.paid_by, e.id)
        for member_id in e.split_between:
            if member_id in net:
                net[member_id] -= share
            else:
                logger.debug("Skipping unknown member %s on expense %s", member_id, e.id)

    # `+ 0.0` turns a negative zero into zero
    return [Balance(m.id, m.name, net[m.id] + 0.0) for m in group.members]


def calculate_optimal_settlements(balances: List[Balance]) -> List[Settlement]:
    """
    Greedy settlement: the largest debtor pays the largest creditor until one pool is empty.
    Ties keep the order of the balances list. Each transfer is rounded half-up to whole yen.
    Returns settlements in generation order.
    """
    eps = SETTLED_EPSILON
    creditors = [[b.member_id, b.balance] for b in balances if b.balance > eps]
    debtors = [[b.member_id, -b.balance] for b in balances if b.balance < -eps]
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    settlements = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        x = min(debtor[1], creditor[1])
        amount = round_half_up(x)
        if amount > 0:
            settlements.append(Settlement(from_id=debtor[0], to_id=creditor[0], amount=amount))
        else:
            logger.debug("Dropping sub-yen transfer %s -> %s (%.4f)", debtor[0], creditor[0], x)
        debtor[1] -= x
        creditor[1] -= x
        if debtor[1] <= eps:
            i += 1
        if creditor[1] <= eps:
            j += 1

    return settlements


def get_total_spending(group: Group) -> int:
    """Total of all expense amounts in the group"""
    return sum(e.amount for e in group.expenses)


def get_member_name(members: List[Member], member_id: str) -> str:
    for m in members:
        if m.id == member_id:
            return m.name
    return "Unknown"
