import pytest
from datetime import datetime, timedelta, timezone

from models import Expense, Group, Member
from storage import GroupRepository


BASE_TIME = datetime(2024, 5, 1, 9, 30, 15, 123000, tzinfo=timezone.utc)


@pytest.fixture
def alice():
    return Member(id="a", name="Alice")


@pytest.fixture
def bob():
    return Member(id="b", name="Bob")


@pytest.fixture
def carol():
    return Member(id="c", name="Carol")


@pytest.fixture
def make_expense():
    """Return a factory building expenses with sequential ids and dates."""
    counter = {"n": 0}

    def _make(paid_by, amount, split_between, description="Dinner", date=None, id=None):
        counter["n"] += 1
        n = counter["n"]
        return Expense(
            id=id or f"e{n}",
            paid_by=paid_by,
            amount=amount,
            description=description,
            split_between=list(split_between),
            date=date or BASE_TIME + timedelta(hours=n),
        )

    return _make


@pytest.fixture
def make_group(alice, bob, carol):
    """Return a factory building a group of Alice, Bob and Carol by default."""

    def _make(expenses=(), members=None, id="g1", name="Trip"):
        return Group(
            id=id,
            name=name,
            members=list(members) if members is not None else [alice, bob, carol],
            expenses=list(expenses),
            created_at=BASE_TIME,
        )

    return _make


@pytest.fixture
def dinner_group(make_group, make_expense):
    """Alice pays 3000, split between all three."""
    return make_group([make_expense("a", 3000, ["a", "b", "c"])])


@pytest.fixture
def repo(tmp_path):
    return GroupRepository(str(tmp_path / "groups.json"))


@pytest.fixture
def base_time():
    return BASE_TIME
