"""Enrollment workflows for authenticated callers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from ...errors import AlreadyEnrolled, ValidationFailure
from ...security.tokens import Identity
from .catalog import resolve_course_title
from .enrollment import Enrollment, EnrollmentStatus, NewEnrollment

logger = logging.getLogger(__name__)


class EnrollmentStore(Protocol):
    def exists(self, user_id: str, course_id: str) -> bool: ...

    def create_enrollment(self, payload: NewEnrollment) -> Enrollment: ...

    def list_for_user(self, user_id: str) -> list[Enrollment]: ...


class EnrollmentService:
    def __init__(self, repository: EnrollmentStore) -> None:
        self._repository = repository

    def enroll(self, identity: Identity, course_id: str) -> Enrollment:
        """Record an active enrollment of the caller in ``course_id``.

        The course is not looked up in the catalog; its title comes from the
        static table in :mod:`.catalog`.
        """
        course_id = course_id.strip()
        if not course_id:
            raise ValidationFailure("Course ID is required")
        if self._repository.exists(identity.user_id, course_id):
            raise AlreadyEnrolled()
        enrollment = self._repository.create_enrollment(
            NewEnrollment(
                user_id=identity.user_id,
                course_id=course_id,
                course_title=resolve_course_title(course_id),
                status=EnrollmentStatus.active,
                enrolled_at=datetime.now(timezone.utc),
            )
        )
        logger.info("enrollment stored user=%s course=%s", identity.user_id, course_id)
        return enrollment

    def list_for_user(self, identity: Identity) -> list[Enrollment]:
        return self._repository.list_for_user(identity.user_id)
