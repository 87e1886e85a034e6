from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "charset": target.charset,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes and -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if escape:
            buf.append(ch)
            escape = False
            prev = ch
            continue

        if ch == "\\" and (in_single or in_double):
            buf.append(ch)
            escape = True
            prev = ch
            continue

        if ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
            prev = ""
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
            prev = ch
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in iter_sql_statements(sql):
        cur.execute(stmt)


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


def apply_sql_file(db_config: dict, *, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)


def ensure_super_admin(db_config: dict, *, name: str, email: str, password: str) -> None:
    """Create or reset the bootstrap Super Admin account."""
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        password_hash = generate_password_hash(password)
        cur.execute("SELECT id FROM employees WHERE LOWER(email)=LOWER(%s)", (email,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                "UPDATE employees SET name=%s, password_hash=%s, role='Super Admin', is_active=1 WHERE id=%s",
                (name, password_hash, int(existing["id"])),
            )
        else:
            cur.execute(
                """
                INSERT INTO employees (name, email, password_hash, role, is_active)
                VALUES (%s, %s, %s, 'Super Admin', 1)
                """,
                (name, email, password_hash),
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
