from __future__ import annotations

import re
import uuid
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_script(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


DEMO_ACCOUNTS = (
    # email, password, profile table, profile key column, profile key
    ("admin@college.edu", "admin123", None, None, None),
    ("sarah.johnson@college.edu", "faculty123", "faculty", "email", "sarah.johnson@college.edu"),
    ("michael.chen@college.edu", "faculty123", "faculty", "email", "michael.chen@college.edu"),
    ("john.doe@college.edu", "student123", "students", "roll_number", "21CS001"),
    ("jane.smith@college.edu", "student123", "students", "roll_number", "21CS002"),
)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create demo sign-in accounts and link them to the seeded profiles."""
    target = DBConfig.from_dict(db_config)

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        for email, password, table, key_col, key in DEMO_ACCOUNTS:
            cur.execute("SELECT user_id FROM accounts WHERE email=%s", (email,))
            row = cur.fetchone()
            if row:
                user_id = row["user_id"]
                cur.execute(
                    "UPDATE accounts SET password_hash=%s WHERE user_id=%s",
                    (generate_password_hash(password), user_id),
                )
            else:
                user_id = str(uuid.uuid4())
                cur.execute(
                    "INSERT INTO accounts(user_id, email, password_hash) VALUES(%s,%s,%s)",
                    (user_id, email, generate_password_hash(password)),
                )

            if table:
                cur.execute(f"UPDATE {table} SET user_id=%s WHERE {key_col}=%s", (user_id, key))

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
