"""Database repository for the course catalog."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from psycopg.rows import tuple_row
from psycopg_pool import ConnectionPool

from ..db import apply_schema
from .domain.course import Course, CourseInput

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS courses (
        course_id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        instructor TEXT NOT NULL,
        duration INTEGER NOT NULL CHECK (duration > 0),
        price DOUBLE PRECISION NOT NULL CHECK (price > 0),
        created_at TIMESTAMPTZ NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL
    )
    """,
)

_COLUMNS = "course_id, title, description, instructor, duration, price, created_at, updated_at"


class CourseRepository:
    """Postgres-backed course persistence."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def ensure_schema(self) -> None:
        apply_schema(self._pool, SCHEMA)

    def count(self) -> int:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute("SELECT COUNT(*) FROM courses")
                return int(cur.fetchone()[0])

    def list_courses(self) -> list[Course]:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM courses ORDER BY created_at, course_id")
                rows = cur.fetchall()
        return [self._map_record(row) for row in rows]

    def get_course(self, course_id: str) -> Course | None:
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE course_id = %s", (course_id,))
                row = cur.fetchone()
        return self._map_record(row) if row else None

    def create_course(self, payload: CourseInput) -> Course:
        course_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO courses ({_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        course_id,
                        payload.title,
                        payload.description,
                        payload.instructor,
                        payload.duration,
                        payload.price,
                        now,
                        now,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        return self._map_record(row)

    def update_course(self, course_id: str, payload: CourseInput) -> Course | None:
        """Replace every editable field; ``None`` when the course does not exist."""
        with self._pool.connection() as conn:
            with conn.cursor(row_factory=tuple_row) as cur:
                cur.execute(
                    f"""
                    UPDATE courses
                    SET title = %s, description = %s, instructor = %s,
                        duration = %s, price = %s, updated_at = %s
                    WHERE course_id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (
                        payload.title,
                        payload.description,
                        payload.instructor,
                        payload.duration,
                        payload.price,
                        datetime.now(timezone.utc),
                        course_id,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        return self._map_record(row) if row else None

    def delete_course(self, course_id: str) -> bool:
        with self._pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM courses WHERE course_id = %s", (course_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def _map_record(self, row: tuple) -> Course:
        return Course(
            course_id=row[0],
            title=row[1],
            description=row[2],
            instructor=row[3],
            duration=row[4],
            price=row[5],
            created_at=row[6],
            updated_at=row[7],
        )
