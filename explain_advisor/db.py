import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pymysql

from explain_advisor.errors import DatabaseConnectionError, QueryError, RowScanError

log = logging.getLogger(__name__)

DEFAULT_PORT = 3306

# user:password@tcp(host:port)/database; user ends at the first ':',
# the password at the last '@tcp(' so either may contain '@'
_DSN = re.compile(
    r"^(?P<user>[^:]*):(?P<password>.*)@tcp\((?P<host>[^:()]*)(?::(?P<port>[^)]*))?\)/(?P<database>[^/]*)$"
)


def parse_dsn(dsn: str) -> dict[str, Any]:
    """Turn a ``user:password@tcp(host:port)/database`` DSN into pymysql kwargs."""
    match = _DSN.match(dsn)
    if not match:
        raise DatabaseConnectionError("Malformed DSN, expected user:password@tcp(host:port)/database")

    port_text = match.group("port") or ""
    if not port_text:
        port = DEFAULT_PORT
    elif port_text.isdigit():
        port = int(port_text)
    else:
        raise DatabaseConnectionError(f"Invalid port in DSN: {port_text!r}")

    return {
        "user": match.group("user"),
        "password": match.group("password"),
        "host": match.group("host") or "localhost",
        "port": port,
        "database": match.group("database") or None,
    }


@contextmanager
def connect(dsn: str, timeout_s: int = 10) -> Iterator[pymysql.connections.Connection]:
    """Open one MySQL connection for the duration of the block."""
    kwargs = parse_dsn(dsn)
    try:
        conn = pymysql.connect(charset="utf8mb4", connect_timeout=timeout_s, **kwargs)
    except pymysql.MySQLError as exc:
        raise DatabaseConnectionError(
            f"Cannot connect to {kwargs['host']}:{kwargs['port']}: {exc}"
        ) from exc

    log.info("Connected to %s:%d (database=%s)", kwargs["host"], kwargs["port"], kwargs["database"])
    try:
        yield conn
    finally:
        conn.close()
        log.info("Database connection closed")


def fetch_explain_json(conn: Any, statement: str) -> str:
    """Run ``EXPLAIN FORMAT=json`` for a statement and return the plan document."""
    sql = f"EXPLAIN FORMAT=json {statement}"
    with conn.cursor() as cur:
        try:
            cur.execute(sql)
        except pymysql.MySQLError as exc:
            raise QueryError(f"EXPLAIN failed for {statement!r}: {exc}") from exc

        try:
            row = cur.fetchone()
        except pymysql.MySQLError as exc:
            raise RowScanError(f"Cannot read EXPLAIN result for {statement!r}: {exc}") from exc

    if not row:
        raise RowScanError(f"EXPLAIN returned no rows for {statement!r}")

    value = row[0]
    if isinstance(value, (bytes, bytearray)):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RowScanError(f"EXPLAIN result is not UTF-8 text: {exc}") from exc
    if not isinstance(value, str):
        raise RowScanError(
            f"EXPLAIN result has unexpected type {type(value).__name__}, expected text"
        )
    return value
