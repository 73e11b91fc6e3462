import sqlite3

from adapters.base import ConnectionOpenError, FileRemovalError, StatementError
from commands.operations import create_database, describe_table, drop_database, run_sql
from config.connection import ConnectionParameters


def _params(tmp_path, **updates):
    values = {"driver": "sqlite3", "dbpath": f"{tmp_path}/", "dbname": "inventory", "table": "items"}
    values.update(updates)
    return ConnectionParameters(**values)


def _reader(lines):
    feed = iter(lines)
    return lambda prompt: next(feed)


def test_sqlite_lifecycle(tmp_path):
    params = _params(tmp_path)
    db_file = tmp_path / "inventory.db"

    created = create_database(params)
    assert created.ok
    assert created.descriptor == str(db_file)
    assert created.statements == []
    assert db_file.exists()

    outcomes = []
    result = run_sql(
        params,
        _reader([
            "CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, price REAL)",
            "INSERT INTO items (name, price) VALUES ('bolt', 0.5)",
            "SELECT * FROM missing",
            "SELECT id, name FROM items",
            ".exit",
        ]),
        outcomes.append,
    )
    assert result.ok
    assert [outcome.error is None for outcome in outcomes] == [True, True, False, True]
    assert isinstance(outcomes[2].error, StatementError)
    assert outcomes[3].rows == [{"id": "1", "name": "bolt"}]

    conn = sqlite3.connect(str(db_file))
    try:
        assert conn.execute("SELECT count(*) FROM items").fetchone()[0] == 1
    finally:
        conn.close()

    described = describe_table(params)
    assert described.ok
    assert described.statements == ['PRAGMA table_info("items")']
    assert [row["name"] for row in described.rows] == ["id", "name", "price"]
    assert described.rows[0]["pk"] == "1"

    dropped = drop_database(params)
    assert dropped.ok
    assert not db_file.exists()


def test_sqlite_describe_missing_table_is_empty_result(tmp_path):
    params = _params(tmp_path)
    assert create_database(params).ok

    described = describe_table(params)
    assert described.ok
    assert described.rows == []


def test_sqlite_drop_missing_database_reports_file_removal_error(tmp_path):
    result = drop_database(_params(tmp_path, dbname="ghost"))
    assert isinstance(result.error, FileRemovalError)
    assert "ghost.db" in str(result.error)
    assert not (tmp_path / "ghost.db").exists()


def test_sqlite_create_in_missing_directory_fails(tmp_path):
    result = create_database(_params(tmp_path, dbpath=f"{tmp_path}/nested/absent/"))
    assert isinstance(result.error, ConnectionOpenError)
