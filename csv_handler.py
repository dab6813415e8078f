"""
CSV export and import functionality for Warikan
"""
from __future__ import annotations
import csv
from typing import List

from models import Expense
from utils import parse_iso, to_iso

CSV_COLUMNS = ['id', 'date', 'paidBy', 'amount', 'description', 'splitBetween']


def export_expenses_to_csv(expenses: List[Expense], filepath: str) -> None:
    """
    Export expenses list to CSV file
    CSV columns: id, date, paidBy, amount, description, splitBetween (member ids joined by ';')
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for e in expenses:
            writer.writerow([
                e.id,
                to_iso(e.date),
                e.paid_by,
                e.amount,
                e.description,
                ';'.join(e.split_between),
            ])


def import_expenses_from_csv(filepath: str) -> List[Expense]:
    """
    Import expenses list from CSV file
    Returns list of Expense objects; raises ValueError/KeyError on malformed rows
    """
    expenses = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for row in reader:
            split = [m.strip() for m in (row['splitBetween'] or '').split(';') if m.strip()]
            expenses.append(Expense(
                id=row['id'],
                date=parse_iso(row['date']),
                paid_by=row['paidBy'],
                amount=int(row['amount']),
                description=row.get('description') or '',
                split_between=split,
            ))

    return expenses
