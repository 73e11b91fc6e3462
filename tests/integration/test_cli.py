import pytest

from cli.main import APP_VERSION, main


def test_no_arguments_prints_banner_and_fails(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Database migration utility" in err
    assert "Available drivers: sqlite3, mysql, postgres" in err


def test_version_and_drivers_flags(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == APP_VERSION

    assert main(["--drivers"]) == 0
    assert capsys.readouterr().out.splitlines() == ["sqlite3", "mysql", "postgres"]


def test_bad_argument_exits_with_one(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["create", "--port", "not-a-port"])
    assert excinfo.value.code == 1


def test_unsupported_driver_is_reported_with_exit_zero(capsys):
    assert main(["create", "--driver", "oracle", "--dbname", "x"]) == 0
    err = capsys.readouterr().err
    assert "driver: oracle is not available" in err
    assert "Available drivers: sqlite3, mysql, postgres" in err


def test_missing_values_are_prompted(tmp_path, capsys):
    answers = iter(["sqlite3", "prompted"])
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        return next(answers)

    assert main(["create", "--dbpath", f"{tmp_path}/"], read_line=read_line) == 0
    assert prompts == ["Database driver: ", "Database name: "]
    assert (tmp_path / "prompted.db").exists()
    assert "DONE (" in capsys.readouterr().out


def test_empty_prompt_answer_is_an_argument_error(capsys):
    def read_line(prompt):
        raise EOFError

    with pytest.raises(SystemExit) as excinfo:
        main(["drop", "--driver", "sqlite3"], read_line=read_line)
    assert excinfo.value.code == 1
    assert "--dbname" in capsys.readouterr().err


def test_sqlite_describe_and_sql_output(tmp_path, capsys):
    common = ["--driver", "sqlite3", "--dbname", "shop", "--dbpath", f"{tmp_path}/"]
    assert main(["create", *common]) == 0

    lines = iter(["CREATE TABLE users (name TEXT, id INTEGER)", "INSERT INTO users VALUES ('ann', 7)", "SELECT * FROM users", "q"])
    assert main(["sql", *common], read_line=lambda prompt: next(lines)) == 0
    out = capsys.readouterr().out
    assert f"{tmp_path}/shop.db" in out
    assert "{ 1/1\n  id: 7\n  name: ann\n}" in out
    assert "Fetched 1 result(s)." in out

    assert main(["describe", *common, "--table", "users"]) == 0
    out = capsys.readouterr().out
    assert 'PRAGMA table_info("users");' in out
    assert "Result:" in out
    assert "{ 1/2" in out and "},\n{ 2/2" in out
    assert "Fetched 2 result(s)." in out


def test_password_is_masked_in_connection_output(monkeypatch, capsys):
    def refuse(self, descriptor, create=False):
        raise OSError("Can't connect to MySQL server on '127.0.0.1' (111)")

    monkeypatch.setattr("adapters.mysql.MySQLAdapter.connect", refuse)
    assert main(["drop", "--driver", "mysql", "--dbname", "x", "-u", "root", "-p", "secret", "--port", "1"]) == 0
    captured = capsys.readouterr()
    assert "root:***@tcp(127.0.0.1:1)/?charset=utf8" in captured.out
    assert "secret" not in captured.out
    assert "Can't connect to MySQL server" in captured.err


def test_subcommand_short_verbose_flag(tmp_path, capsys):
    args = ["create", "-v", "--driver", "sqlite3", "--dbname", "loud", "--dbpath", f"{tmp_path}/"]
    assert main(args) == 0
    assert (tmp_path / "loud.db").exists()
