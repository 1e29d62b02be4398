"""Database repository for account data."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from psycopg.errors import UniqueViolation
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from ..db import apply_schema
from ..errors import DuplicateAccount
from .domain.account import Account
from .domain.contracts import NewAccount

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS accounts (
        account_id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        password_hash TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS accounts_email_key ON accounts (email)",
)

_COLUMNS = "account_id, name, email, password_hash, created_at"


class AccountRepository:
    """Postgres-backed account persistence; the email index is the uniqueness authority."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def ensure_schema(self) -> None:
        apply_schema(self._pool, SCHEMA)

    def exists_by_email(self, email: str) -> bool:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute("SELECT 1 FROM accounts WHERE email = %s", (email,))
                return cur.fetchone() is not None

    def find_by_email(self, email: str) -> Account | None:
        """Fetch the account registered under ``email`` (exact match) or ``None``."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s", (email,))
                row = cur.fetchone()
        return self._map_record(row) if row else None

    def create_account(self, payload: NewAccount) -> Account:
        """Insert an account, raising ``DuplicateAccount`` when the email is taken."""
        account_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO accounts ({_COLUMNS})
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (account_id, payload.name, payload.email, payload.password_hash, now),
                    )
                    row = cur.fetchone()
                conn.commit()
        except UniqueViolation as exc:
            raise DuplicateAccount() from exc
        return self._map_record(row)

    def _map_record(self, row: tuple) -> Account:
        return Account(
            account_id=row[0],
            name=row[1],
            email=row[2],
            password_hash=row[3],
            created_at=row[4],
        )
