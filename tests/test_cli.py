import base64
import json

import pytest

from config import group_to_dict
from qr_transport import encode_group_to_qr
from storage import GroupRepository
from warikan import main


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "groups.json")


@pytest.fixture
def run(data_file, capsys):
    """Run the CLI against a temporary data file; return (status, stdout, stderr)."""

    def _run(*argv):
        status = main(["--data-file", data_file, *argv])
        out, err = capsys.readouterr()
        return status, out, err

    return _run


class TestCommandLine:
    """End-to-end tests for the warikan command."""

    def test_list_empty(self, run):
        assert run("list") == (0, "No groups yet.\n", "")

    def test_create_add_and_settle(self, run):
        """A created group settles a shared dinner."""
        status, out, _ = run("create", "Trip", "Alice", "Bob", "Carol")
        assert status == 0
        assert out.startswith("Created Trip [")

        assert run("add-expense", "Trip", "Alice", "3000", "Dinner")[0] == 0

        status, out, _ = run("settle", "Trip")
        assert status == 0
        assert "1. Bob → Alice: ¥1,000" in out
        assert "2. Carol → Alice: ¥1,000" in out

    def test_add_expense_with_split(self, run, data_file):
        """--split limits who shares the cost."""
        run("create", "Trip", "Alice", "Bob", "Carol")

        run("add-expense", "Trip", "Bob", "1000", "Taxi", "--split", "Alice", "Bob")

        group = GroupRepository(data_file).load_groups()[0]
        names = {m.id: m.name for m in group.members}
        assert [names[m] for m in group.expenses[0].split_between] == ["Alice", "Bob"]

    def test_settle_balanced(self, run):
        run("create", "Trip", "Alice")

        status, out, _ = run("settle", "Trip")

        assert status == 0
        assert "Nothing to settle" in out

    def test_unknown_member(self, run):
        run("create", "Trip", "Alice")

        status, _, err = run("add-expense", "Trip", "Zed", "100", "Snacks")

        assert status == 1
        assert "Zed" in err

    def test_invalid_amount(self, run):
        run("create", "Trip", "Alice")

        status, _, err = run("add-expense", "Trip", "Alice", "0", "Snacks")

        assert status == 1
        assert err.startswith("error:")

    def test_unknown_group(self, run):
        status, _, err = run("settle", "Nowhere")

        assert status == 1
        assert "Nowhere" in err

    def test_join_merges_shared_group(self, run, data_file, dinner_group):
        """Joining twice stores one group."""
        data = encode_group_to_qr(dinner_group)

        assert run("join", data)[0] == 0
        assert run("join", data)[0] == 0

        assert GroupRepository(data_file).load_groups() == [dinner_group]

    def test_join_invalid_data(self, run):
        status, _, err = run("join", "this is not a group")

        assert status == 1
        assert err == "invalid QR data\n"

    def test_join_rejects_nameless_group(self, run, make_group):
        status, _, err = run("join", encode_group_to_qr(make_group(name="")))

        assert status == 1
        assert err == "invalid QR data\n"

    def test_join_rejects_text_amount(self, run, data_file, dinner_group):
        """A payload with a text amount is refused and nothing is stored."""
        record = group_to_dict(dinner_group)
        record["expenses"][0]["amount"] = "3000"
        data = base64.b64encode(json.dumps(record).encode("utf-8")).decode("ascii")

        status, _, err = run("join", data)

        assert status == 1
        assert err == "invalid QR data\n"
        assert GroupRepository(data_file).load_groups() == []

    def test_export_and_import_csv(self, run, data_file, tmp_path):
        """Expenses exported from one group can be imported into another."""
        run("create", "Trip", "Alice", "Bob")
        run("add-expense", "Trip", "Alice", "2000", "Hotel")
        path = str(tmp_path / "out.csv")
        assert run("export-csv", "Trip", path)[0] == 0

        status, out, _ = run("import-csv", "Trip", path)

        assert status == 0
        assert out == "Imported 0 new expenses.\n"

    def test_export_xlsx(self, run, tmp_path):
        run("create", "Trip", "Alice", "Bob")
        path = tmp_path / "trip.xlsx"

        assert run("export-xlsx", "Trip", str(path))[0] == 0
        assert path.exists()

    def test_share_prints_transport_string(self, run, data_file):
        run("create", "Trip", "Alice", "Bob")

        status, out, _ = run("share", "Trip")

        assert status == 0
        assert out.strip() == encode_group_to_qr(GroupRepository(data_file).load_groups()[0])
