"""
services/course_service.py
--------------------------
Business logic for changing existing courses.
"""

import uuid
from dataclasses import replace
from typing import Optional

from db.transaction import ExecutionContext, TransactionManager
from models.course import Course
from repositories.course_repo import CourseRepository


class CourseService:
    """Course changes that need more than one repository call."""

    def __init__(self, repo: CourseRepository, tx_manager: TransactionManager):
        self.repo = repo
        self.tx_manager = tx_manager

    def change(
        self,
        ctx: ExecutionContext,
        course_id: uuid.UUID,
        name: Optional[str] = None,
        url: Optional[str] = None,
        text: Optional[str] = None,
    ) -> Course:
        """
        Overwrite only the supplied fields of a course, in one transaction.

        Raises:
            NotFoundError: No course has this identifier.
            AlreadyExistsError: The new name belongs to another course.
        """
        with self.tx_manager.transaction(ctx) as tx_ctx:
            current = self.repo.get(tx_ctx, course_id)
            changed = replace(
                current,
                name=current.name if name is None else name,
                url=current.url if url is None else url,
                text=current.text if text is None else text,
            )
            return self.repo.update(tx_ctx, changed)
