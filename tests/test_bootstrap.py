import pytest

from personnel_tracking.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_comments,
    _strip_create_db_and_use,
    ensure_super_admin,
)


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 'it\\'s;ok'"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 'it\\'s;ok'",
    ]


def test_schema_file_splits_into_create_statements():
    sql = _strip_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = list(_iter_sql_statements(sql))
    assert statements
    assert not any(s.upper().startswith(("USE ", "CREATE DATABASE")) for s in statements)

    text = " ".join(statements)
    for table in ("users", "sessions", "branches", "personnel", "shifts", "attendance", "leave_requests", "system_settings"):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in text


def test_seed_admin_needs_phone_and_password():
    with pytest.raises(ValueError):
        ensure_super_admin(None, phone="", password="x", name="Admin")
