"""
JSON file repository for Warikan groups
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
from dataclasses import replace
from typing import List, Optional

from config import default_groups_path, dict_to_group, group_to_dict
from models import Group

logger = logging.getLogger(__name__)


def merge_groups(existing: Group, incoming: Group) -> Group:
    """
    Merge an incoming copy of a group into the existing one.
    Members and expenses are unioned by id, keeping the existing entry on conflict;
    merged expenses are sorted newest first.
    """
    members = list(existing.members)
    known_members = {m.id for m in members}
    for m in incoming.members:
        if m.id not in known_members:
            members.append(m)
            known_members.add(m.id)

    expenses = list(existing.expenses)
    known_expenses = {e.id for e in expenses}
    for e in incoming.expenses:
        if e.id not in known_expenses:
            expenses.append(e)
            known_expenses.add(e.id)
    expenses.sort(key=lambda e: e.date, reverse=True)

    return replace(existing, members=members, expenses=expenses)


class GroupRepository:
    """
    Stores the list of groups in a single JSON file.
    Reads degrade to an empty list; writes raise OSError to the caller.
    Callers must serialize access to one file.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or default_groups_path()

    def load_groups(self) -> List[Group]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [dict_to_group(d) for d in data]
        except FileNotFoundError:
            return []
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as ex:
            logger.warning("Could not read groups from %s: %s", self.path, ex)
            return []

    def save_groups(self, groups: List[Group]) -> None:
        """Write all groups, replacing the file atomically"""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".groups-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([group_to_dict(g) for g in groups], f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get_group(self, group_id: str) -> Optional[Group]:
        for g in self.load_groups():
            if g.id == group_id:
                return g
        return None

    def add_group(self, group: Group) -> None:
        groups = self.load_groups()
        groups.append(group)
        self.save_groups(groups)
        logger.info("Added group %s (%s)", group.name, group.id)

    def update_group(self, group: Group) -> None:
        """Replace the stored group with the same id; unknown ids are ignored"""
        groups = self.load_groups()
        for i, g in enumerate(groups):
            if g.id == group.id:
                groups[i] = group
                self.save_groups(groups)
                return
        logger.info("update_group: no group with id %s, nothing saved", group.id)

    def merge_group(self, incoming: Group) -> Group:
        """
        Merge incoming into the stored group with the same id, or insert it as-is.
        Returns the group as stored.
        """
        groups = self.load_groups()
        for i, g in enumerate(groups):
            if g.id == incoming.id:
                groups[i] = merge_groups(g, incoming)
                self.save_groups(groups)
                logger.info("Merged group %s: %d members, %d expenses",
                            g.id, len(groups[i].members), len(groups[i].expenses))
                return groups[i]
        groups.append(incoming)
        self.save_groups(groups)
        logger.info("Inserted group %s (%s)", incoming.name, incoming.id)
        return incoming
