"""Database repository for enrollment records."""

from __future__ import annotations

import uuid

from psycopg.errors import UniqueViolation
from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from ..db import apply_schema
from ..errors import AlreadyEnrolled
from .domain.enrollment import Enrollment, EnrollmentStatus, NewEnrollment

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS enrollments (
        enrollment_id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        course_id TEXT NOT NULL,
        course_title TEXT NOT NULL,
        status TEXT NOT NULL,
        enrolled_at TIMESTAMPTZ NOT NULL
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS enrollments_user_course_key ON enrollments (user_id, course_id)",
)

_COLUMNS = "enrollment_id, user_id, course_id, course_title, status, enrolled_at"


class EnrollmentRepository:
    """Postgres-backed enrollment persistence; one row per (user, course)."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def ensure_schema(self) -> None:
        apply_schema(self._pool, SCHEMA)

    def exists(self, user_id: str, course_id: str) -> bool:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    "SELECT 1 FROM enrollments WHERE user_id = %s AND course_id = %s",
                    (user_id, course_id),
                )
                return cur.fetchone() is not None

    def create_enrollment(self, payload: NewEnrollment) -> Enrollment:
        """Insert an enrollment, raising ``AlreadyEnrolled`` on a duplicate pair."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=tuple_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO enrollments ({_COLUMNS})
                        VALUES (%s, %s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (
                            str(uuid.uuid4()),
                            payload.user_id,
                            payload.course_id,
                            payload.course_title,
                            payload.status.value,
                            payload.enrolled_at,
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except UniqueViolation as exc:
            raise AlreadyEnrolled() from exc
        return self._map_record(row)

    def list_for_user(self, user_id: str) -> list[Enrollment]:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM enrollments
                    WHERE user_id = %s
                    ORDER BY enrolled_at DESC, enrollment_id DESC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()
        return [self._map_record(row) for row in rows]

    def _map_record(self, row: tuple) -> Enrollment:
        return Enrollment(
            enrollment_id=row[0],
            user_id=row[1],
            course_id=row[2],
            course_title=row[3],
            status=EnrollmentStatus(row[4]),
            enrolled_at=row[5],
        )
