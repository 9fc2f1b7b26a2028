"""Integration tests for end-to-end workflows."""

from datetime import date

from budgetbook.cli.main import cli
from budgetbook.domain.store import EntityStore


def _extract_id(output, marker):
    """Pull the ID out of lines like "Created category 'Rent' ... (ID: abc123)"."""
    for line in output.splitlines():
        if marker in line:
            return line.split(marker, 1)[1].strip().rstrip(")")
    return None


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: categories → transactions → recurring → summary → clear."""
    base = ["--db-path", temp_db.database_path]
    this_month = date.today().strftime("%Y-%m")

    # Step 1: Seed the suggested categories
    result = cli_runner.invoke(cli, base + ["init-categories"])
    assert result.exit_code == 0

    # Step 2: Give Groceries a budget
    result = cli_runner.invoke(cli, base + ["category", "update", "Groceries", "--budget", "800"])
    assert result.exit_code == 0

    # Step 3: Create a custom category
    result = cli_runner.invoke(cli, base + ["category", "create", "Pets", "--budget", "150"])
    assert result.exit_code == 0
    pets_id = _extract_id(result.output, "ID:")
    assert pets_id is not None

    # Step 4: Record spending and income
    for args in (
        ["--amount", "200", "--category", "Groceries", "--description", "Weekly shop"],
        ["--amount", "60", "--category", pets_id, "--description", "Dog food"],
        ["--amount", "3000", "--category", "Savings", "--description", "Salary", "--type", "income"],
    ):
        result = cli_runner.invoke(cli, base + ["add"] + args)
        assert result.exit_code == 0

    # Step 5: Schedule a recurring payment for another day
    other_day = date.today().day % 28 + 1
    result = cli_runner.invoke(
        cli,
        base
        + [
            "recurring",
            "add",
            "--amount",
            "15",
            "--category",
            "Entertainment",
            "--description",
            "Streaming",
            "--day",
            str(other_day),
        ],
    )
    assert result.exit_code == 0

    # Step 6: Review the month
    result = cli_runner.invoke(cli, base + ["summary", "--month", this_month])
    assert result.exit_code == 0
    assert "Groceries" in result.output
    assert "260.00" in result.output

    result = cli_runner.invoke(cli, base + ["dashboard"])
    assert result.exit_code == 0
    assert "Weekly shop" in result.output
    assert "Dog food" in result.output

    result = cli_runner.invoke(cli, base + ["transaction", "list", "--search", "dog"])
    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "Pets" in result.output

    result = cli_runner.invoke(cli, base + ["report"])
    assert result.exit_code == 0
    assert "Pets" in result.output

    store = EntityStore(temp_db)
    store.load()
    assert len(store.transactions) == 3
    assert len(store.recurring_payments) == 1

    # Step 7: Deleting a category keeps its transactions
    result = cli_runner.invoke(cli, base + ["category", "delete", "Pets", "--yes"])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, base + ["transaction", "list", "--search", "dog"])
    assert "Uncategorized" in result.output

    # Step 8: Clear everything
    result = cli_runner.invoke(cli, base + ["clear", "--yes"])
    assert result.exit_code == 0
    assert "All data cleared." in result.output

    store.load()
    assert store.is_empty()


def test_help_does_not_touch_database(cli_runner, tmp_path):
    """Test --help works without creating the database file."""
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "Budgetbook" in result.output
    assert not db_path.exists()


def test_db_path_from_environment(cli_runner, tmp_path, monkeypatch):
    """Test the database location can come from BUDGETBOOK_DB_PATH."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("BUDGETBOOK_DB_PATH", str(db_path))

    result = cli_runner.invoke(cli, ["category", "create", "Books", "--budget", "25"])

    assert result.exit_code == 0
    assert db_path.exists()


def test_verbose_logs_load(cli_runner, temp_db):
    """Test --verbose emits informational log lines."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--verbose", "category", "list"])

    assert result.exit_code == 0
    assert "Loaded 0 categories, 0 transactions, 0 recurring payments" in result.output
