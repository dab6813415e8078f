"""
Warikan command line
- Keep groups of people and the expenses they share.
- Print balances and the transfers that settle them; share a group as a QR transport string.

Run:
  warikan --help

Dependencies:
  pip install openpyxl "qrcode[pil]"
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from computations import calculate_balances, calculate_optimal_settlements, get_total_spending
from csv_handler import export_expenses_to_csv, import_expenses_from_csv
from excel_export import export_settlement_excel
from exceptions import GroupNotFoundError, InvalidQRDataError, MemberNotFoundError, WarikanError
from models import Group, new_expense, new_group, new_member, with_expense
from qr_transport import (
    decode_group_from_qr,
    encode_group_to_qr,
    generate_qr_image,
    is_valid_group,
)
from report import generate_settlement_text
from storage import GroupRepository, merge_groups
from utils import format_yen


def find_group(repo: GroupRepository, key: str) -> Group:
    """Look a group up by id, then by name"""
    groups = repo.load_groups()
    for g in groups:
        if g.id == key:
            return g
    for g in groups:
        if g.name == key:
            return g
    raise GroupNotFoundError(f"No group named {key!r}.")


def resolve_member(group: Group, key: str) -> str:
    """Member id for a member id or display name"""
    for m in group.members:
        if m.id == key:
            return m.id
    for m in group.members:
        if m.name == key:
            return m.id
    raise MemberNotFoundError(f"{key!r} is not a member of {group.name}.")


def cmd_list(repo: GroupRepository, args) -> None:
    groups = repo.load_groups()
    if not groups:
        print("No groups yet.")
        return
    for g in groups:
        print(f"{g.name}  [{g.id}]  {len(g.members)} members, "
              f"{len(g.expenses)} expenses, total {format_yen(get_total_spending(g))}")


def cmd_create(repo: GroupRepository, args) -> None:
    group = new_group(args.name, [new_member(n) for n in args.members])
    repo.add_group(group)
    print(f"Created {group.name} [{group.id}]")
    print(encode_group_to_qr(group))


def cmd_add_expense(repo: GroupRepository, args) -> None:
    group = find_group(repo, args.group)
    payer = resolve_member(group, args.payer)
    split = [resolve_member(group, k) for k in args.split] if args.split else [m.id for m in group.members]
    expense = new_expense(payer, args.amount, args.description, split)
    repo.update_group(with_expense(group, expense))
    print(f"Added {expense.description}: {format_yen(expense.amount)}")


def cmd_settle(repo: GroupRepository, args) -> None:
    group = find_group(repo, args.group)
    balances = calculate_balances(group)
    for b in balances:
        print(f"{b.member_name:<20} {format_yen(b.balance):>12}")
    print()
    settlements = calculate_optimal_settlements(balances)
    if not settlements:
        print("Nothing to settle: all balances are even.")
        return
    print(generate_settlement_text(group, settlements), end="")


def cmd_share(repo: GroupRepository, args) -> None:
    data = encode_group_to_qr(find_group(repo, args.group))
    print(data)
    if args.image:
        generate_qr_image(data, args.image)
        print(f"QR code saved to {args.image}")


def cmd_join(repo: GroupRepository, args) -> None:
    group = decode_group_from_qr(args.data)
    if not is_valid_group(group):
        raise InvalidQRDataError("not a Warikan group")
    stored = repo.merge_group(group)
    print(f"Joined {stored.name} [{stored.id}]")


def cmd_export_xlsx(repo: GroupRepository, args) -> None:
    export_settlement_excel(find_group(repo, args.group), args.path)
    print(f"Exported: {args.path}")


def cmd_export_csv(repo: GroupRepository, args) -> None:
    group = find_group(repo, args.group)
    export_expenses_to_csv(group.expenses, args.path)
    print(f"Exported {len(group.expenses)} expenses to {args.path}")


def cmd_import_csv(repo: GroupRepository, args) -> None:
    group = find_group(repo, args.group)
    imported = import_expenses_from_csv(args.path)
    incoming = Group(id=group.id, name=group.name, members=[], expenses=imported,
                     created_at=group.created_at)
    merged = merge_groups(group, incoming)
    repo.update_group(merged)
    print(f"Imported {len(merged.expenses) - len(group.expenses)} new expenses.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="warikan", description="Split shared expenses and settle up.")
    parser.add_argument("--data-file", help="groups JSON file (default: $WARIKAN_HOME/groups.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="list groups")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("create", help="create a group")
    p.add_argument("name")
    p.add_argument("members", nargs="+")
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("add-expense", help="record a payment")
    p.add_argument("group")
    p.add_argument("payer")
    p.add_argument("amount", type=int)
    p.add_argument("description")
    p.add_argument("--split", nargs="+", help="members sharing the cost (default: everyone)")
    p.set_defaults(func=cmd_add_expense)

    p = sub.add_parser("settle", help="show balances and transfers")
    p.add_argument("group")
    p.set_defaults(func=cmd_settle)

    p = sub.add_parser("share", help="print the group's QR transport string")
    p.add_argument("group")
    p.add_argument("--image", help="also save a QR code PNG here")
    p.set_defaults(func=cmd_share)

    p = sub.add_parser("join", help="join or merge a shared group")
    p.add_argument("data")
    p.set_defaults(func=cmd_join)

    p = sub.add_parser("export-xlsx", help="write an Excel settlement report")
    p.add_argument("group")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_xlsx)

    p = sub.add_parser("export-csv", help="write expenses to CSV")
    p.add_argument("group")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_csv)

    p = sub.add_parser("import-csv", help="merge expenses from CSV")
    p.add_argument("group")
    p.add_argument("path")
    p.set_defaults(func=cmd_import_csv)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    repo = GroupRepository(args.data_file)
    try:
        args.func(repo, args)
    except InvalidQRDataError:
        print("invalid QR data", file=sys.stderr)
        return 1
    except WarikanError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    except (OSError, ValueError, KeyError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
