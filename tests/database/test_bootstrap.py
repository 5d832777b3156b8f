from __future__ import annotations

from src.store_attendance.store_attendance.database.bootstrap import (
    SCHEMA_PATH,
    _strip_create_db_and_use,
    iter_sql_statements,
)


def test_statements_split_outside_quotes():
    sql = """
    -- comment line; ignored
    CREATE TABLE a (id INT);
    INSERT INTO a (note) VALUES ('x;y'), ("it\\'s; fine");
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a (note) VALUES ('x;y'), (\"it\\'s; fine\")",
        "SELECT 1",
    ]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE b (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE b (id INT)"]


def test_schema_declares_attendance_tables():
    sql = SCHEMA_PATH.read_text(encoding="utf-8")
    statements = list(iter_sql_statements(_strip_create_db_and_use(sql)))

    joined = "\n".join(statements)
    for table in ("users", "stores", "user_stores", "attendance"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in joined
    assert "early_arrival_minutes" in joined
