"""
repositories/course_repo.py
---------------------------
Data access layer for catalog entries.
All SQL queries related to the `courses` table live here.
"""

import uuid

from db.transaction import ExecutionContext
from models.course import Course
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "course_id, name, url, text"


class CourseRepository(BaseRepository):
    """Repository for CRUD operations on the courses table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, ctx: ExecutionContext, course: Course) -> Course:
        """
        Insert a new course.

        Returns:
            The same Course, unchanged.

        Raises:
            AlreadyExistsError: The name or identifier is taken.
            UnknownError: Any other store failure.
        """
        sql = f"INSERT INTO courses ({_COLUMNS}) VALUES (%s, %s, %s, %s);"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (course.id, course.name, course.url, course.text))
        logger.info(f"Created course '{course.name}' ({course.id})")
        return course

    # ── READ ──────────────────────────────────────────────

    def get(self, ctx: ExecutionContext, course_id: uuid.UUID) -> Course:
        """
        Fetch one course by identifier.

        Raises:
            NotFoundError: No course has this identifier.
        """
        sql = f"SELECT {_COLUMNS} FROM courses WHERE course_id = %s;"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (course_id,))
            row = cur.fetchone()
            if row is None:
                raise self._not_found()
        return self._row_to_course(row)

    def list_all(self, ctx: ExecutionContext) -> list[Course]:
        """
        Fetch every course in store order.

        Returns:
            List of Course objects; empty when the table is empty.
        """
        sql = f"SELECT {_COLUMNS} FROM courses;"
        with self._cursor(ctx) as cur:
            cur.execute(sql)
            rows = cur.fetchall()
        return [self._row_to_course(r) for r in rows]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, ctx: ExecutionContext, course: Course) -> Course:
        """
        Replace name, url and text of the course with `course.id`.

        Raises:
            NotFoundError: No row matched the identifier.
            AlreadyExistsError: The new name belongs to another course.
        """
        sql = "UPDATE courses SET name = %s, url = %s, text = %s WHERE course_id = %s;"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (course.name, course.url, course.text, course.id))
            if cur.rowcount == 0:
                raise self._not_found()
        return course

    # ── DELETE ────────────────────────────────────────────

    def delete(self, ctx: ExecutionContext, course_id: uuid.UUID) -> Course:
        """
        Delete a course and return it as the store had it.

        Raises:
            NotFoundError: No row matched the identifier.
        """
        sql = f"DELETE FROM courses WHERE course_id = %s RETURNING {_COLUMNS};"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (course_id,))
            row = cur.fetchone()
            if row is None:
                raise self._not_found()
        logger.info(f"Deleted course {course_id}")
        return self._row_to_course(row)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_course(row: tuple) -> Course:
        """Convert a database row tuple to a Course domain object."""
        return Course(id=row[0], name=row[1], url=row[2], text=row[3])
