"""
Excel export functionality for Warikan
"""
from __future__ import annotations
from typing import Dict, List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Group
from computations import (
    calculate_balances,
    calculate_optimal_settlements,
    get_member_name,
    get_total_spending,
)
from utils import to_iso

YEN_FORMAT = '"¥"#,##0'
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill("solid", fgColor="4F81BD")
_edge = Side(style="thin", color="A0A0A0")
HEADER_BORDER = Border(left=_edge, right=_edge, top=_edge, bottom=_edge)
DEBT_FONT = Font(color="C00000")


def _write_table(wb: Workbook, title: str, headers: Sequence[str], rows: List[list],
                 formats: Dict[int, str]):
    """
    Add a sheet holding a styled header row and the given rows.
    formats maps a 1-based column to its number format.
    """
    ws = wb.create_sheet(title)
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER
        cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.freeze_panes = "A2"

    for row in rows:
        ws.append(row)
    for col, fmt in formats.items():
        for r in range(2, ws.max_row + 1):
            ws.cell(r, col).number_format = fmt

    # column width follows the longest value, clamped to 10..45
    for idx, column in enumerate(ws.iter_cols(values_only=True), start=1):
        longest = max((len(str(v)) for v in column if v is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = min(45, max(10, longest + 2))
    return ws


def export_settlement_excel(group: Group, filepath: str) -> None:
    """
    Export a group to an Excel file with three sheets:
    - Expenses (one row per expense, with per-person share)
    - Balances (member order)
    - Settlements (generation order)
    """
    wb = Workbook()
    wb.remove(wb.active)
    members = group.members

    rows = [
        [
            to_iso(e.date),
            e.description,
            get_member_name(members, e.paid_by),
            e.amount,
            ", ".join(get_member_name(members, m) for m in e.split_between),
            e.amount / len(e.split_between) if e.split_between else 0,
        ]
        for e in group.expenses
    ]
    if rows:
        rows.append(["TOTAL", "", "", get_total_spending(group), "", ""])
    ws = _write_table(wb, "Expenses", ["Date", "Description", "Paid by", "Amount", "Split between", "Share"],
                      rows, {4: YEN_FORMAT, 6: "#,##0.00"})
    if rows:
        ws.cell(ws.max_row, 1).font = Font(bold=True)
        ws.cell(ws.max_row, 4).font = Font(bold=True)

    balances = calculate_balances(group)
    ws = _write_table(wb, "Balances", ["Member", "Balance"],
                      [[b.member_name, b.balance] for b in balances], {2: YEN_FORMAT})
    for r, b in enumerate(balances, start=2):
        if b.balance < 0:
            ws.cell(r, 2).font = DEBT_FONT

    settlements = calculate_optimal_settlements(balances)
    _write_table(
        wb, "Settlements", ["From (Debtor)", "To (Creditor)", "Amount"],
        [[get_member_name(members, s.from_id), get_member_name(members, s.to_id), s.amount] for s in settlements],
        {3: YEN_FORMAT},
    )

    wb.save(filepath)
