"""
Integration tests for the shelfdb CLI.

Tests cover:
- tables: table listing as a table and as JSON
- show: row display for object and scalar tables
- clear: confirmation and rewrite of the store file
- Store resolution from --store and --config
"""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel
from typer.testing import CliRunner

from shelfdb import __version__
from shelfdb.cli import app
from shelfdb.store import ShelfDB

runner = CliRunner()


class Person(BaseModel):
    id: int
    name: str
    age: int


@pytest.fixture
def store_path(temp_dir: Path) -> Path:
    """Save a store with a model table, a scalar table and an empty table."""
    path = temp_dir / "store.json"
    db = ShelfDB()
    db.insert_many([
        Person(id=0, name="Mike", age=25),
        Person(id=1, name="Ricardo", age=35),
    ])
    db.insert_many([1, 2, 3], name="numbers")
    db.create_table("empty")
    assert db.save(path)
    return path


class TestVersion:
    """Tests for --version."""

    def test_version(self) -> None:
        """--version prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestTablesCommand:
    """Tests for `shelfdb tables`."""

    def test_lists_tables(self, store_path: Path) -> None:
        """Every table name is shown."""
        result = runner.invoke(app, ["tables", "--store", str(store_path)])
        assert result.exit_code == 0
        assert "Person" in result.stdout
        assert "numbers" in result.stdout
        assert "empty" in result.stdout

    def test_json_output(self, store_path: Path) -> None:
        """--json prints one object per table."""
        result = runner.invoke(app, ["tables", "--store", str(store_path), "--json"])
        assert result.exit_code == 0
        infos = {info["name"]: info for info in json.loads(result.stdout)}
        assert infos["Person"]["row_count"] == 2
        assert infos["Person"]["type_tag"] == "list[Person]"
        assert infos["numbers"]["row_count"] == 3
        assert infos["empty"]["row_count"] is None

    def test_missing_store(self, temp_dir: Path) -> None:
        """A missing store file exits with an error."""
        result = runner.invoke(app, ["tables", "--store", str(temp_dir / "missing.json")])
        assert result.exit_code == 1
        assert "No store found" in result.stdout

    def test_invalid_store(self, temp_dir: Path) -> None:
        """A file that isn't a store exits with an error."""
        path = temp_dir / "bad.json"
        path.write_text("[1, 2, 3]")
        result = runner.invoke(app, ["tables", "--store", str(path)])
        assert result.exit_code == 1
        assert "Not a valid store file" in result.stdout

    def test_store_from_config(self, store_path: Path, temp_dir: Path) -> None:
        """The store path can come from --config."""
        config_path = temp_dir / "shelfdb.yaml"
        config_path.write_text("path: store.json\n")
        result = runner.invoke(app, ["--config", str(config_path), "tables", "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 3

    def test_store_option_overrides_config(self, store_path: Path, temp_dir: Path) -> None:
        """-s takes precedence over the config path."""
        config_path = temp_dir / "shelfdb.yaml"
        config_path.write_text("path: elsewhere.json\n")
        result = runner.invoke(
            app, ["--config", str(config_path), "tables", "-s", str(store_path), "--json"]
        )
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 3

    def test_invalid_config(self, temp_dir: Path) -> None:
        """A bad config file exits with an error."""
        config_path = temp_dir / "shelfdb.yaml"
        config_path.write_text("strict: maybe\n")
        result = runner.invoke(app, ["--config", str(config_path), "tables"])
        assert result.exit_code == 1


class TestShowCommand:
    """Tests for `shelfdb show`."""

    def test_show_objects(self, store_path: Path) -> None:
        """Object rows are shown with their fields as columns."""
        result = runner.invoke(app, ["show", "Person", "--store", str(store_path)])
        assert result.exit_code == 0
        assert "name" in result.stdout
        assert "Ricardo" in result.stdout

    def test_show_json(self, store_path: Path) -> None:
        """--json prints the rows as plain JSON."""
        result = runner.invoke(app, ["show", "Person", "--store", str(store_path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"id": 0, "name": "Mike", "age": 25},
            {"id": 1, "name": "Ricardo", "age": 35},
        ]

    def test_show_scalars_with_limit(self, store_path: Path) -> None:
        """--limit caps the rows shown."""
        result = runner.invoke(
            app, ["show", "numbers", "--store", str(store_path), "--limit", "2", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [1, 2]

    def test_show_more_rows_note(self, store_path: Path) -> None:
        """Hidden rows are counted."""
        result = runner.invoke(app, ["show", "numbers", "--store", str(store_path), "-n", "1"])
        assert result.exit_code == 0
        assert "2 more rows" in result.stdout

    def test_show_empty_table(self, store_path: Path) -> None:
        """An empty table says so."""
        result = runner.invoke(app, ["show", "empty", "--store", str(store_path)])
        assert result.exit_code == 0
        assert "Table is empty" in result.stdout

    def test_show_missing_table(self, store_path: Path) -> None:
        """An unknown table exits with an error."""
        result = runner.invoke(app, ["show", "nope", "--store", str(store_path)])
        assert result.exit_code == 1
        assert "No table named" in result.stdout


class TestClearCommand:
    """Tests for `shelfdb clear`."""

    def test_clear_with_yes(self, store_path: Path) -> None:
        """--yes clears without asking."""
        result = runner.invoke(app, ["clear", "--store", str(store_path), "--yes"])
        assert result.exit_code == 0
        assert ShelfDB(path=store_path).tables == {}

    def test_clear_aborted(self, store_path: Path) -> None:
        """Answering no keeps the store."""
        result = runner.invoke(app, ["clear", "--store", str(store_path)], input="n\n")
        assert result.exit_code != 0
        assert len(ShelfDB(path=store_path).tables) == 3

    def test_clear_confirmed(self, store_path: Path) -> None:
        """Answering yes clears the store."""
        result = runner.invoke(app, ["clear", "--store", str(store_path)], input="y\n")
        assert result.exit_code == 0
        assert ShelfDB(path=store_path).tables == {}
