"""Course catalog workflows."""

from __future__ import annotations

import logging
from typing import Protocol

from ...errors import NotFound
from .course import DEMO_COURSES, Course, CourseInput

logger = logging.getLogger(__name__)

COURSE_NOT_FOUND = "Course not found"


class CourseStore(Protocol):
    def count(self) -> int: ...

    def list_courses(self) -> list[Course]: ...

    def get_course(self, course_id: str) -> Course | None: ...

    def create_course(self, payload: CourseInput) -> Course: ...

    def update_course(self, course_id: str, payload: CourseInput) -> Course | None: ...

    def delete_course(self, course_id: str) -> bool: ...


class CourseService:
    def __init__(self, repository: CourseStore) -> None:
        self._repository = repository

    def list_courses(self) -> list[Course]:
        return self._repository.list_courses()

    def get_course(self, course_id: str) -> Course:
        course = self._repository.get_course(course_id)
        if course is None:
            raise NotFound(COURSE_NOT_FOUND)
        return course

    def create_course(self, payload: CourseInput) -> Course:
        course = self._repository.create_course(payload)
        logger.info("course created id=%s", course.course_id)
        return course

    def update_course(self, course_id: str, payload: CourseInput) -> Course:
        course = self._repository.update_course(course_id, payload)
        if course is None:
            raise NotFound(COURSE_NOT_FOUND)
        logger.info("course updated id=%s", course_id)
        return course

    def delete_course(self, course_id: str) -> None:
        if not self._repository.delete_course(course_id):
            raise NotFound(COURSE_NOT_FOUND)
        logger.info("course deleted id=%s", course_id)

    def seed_demo_courses(self) -> int:
        """Insert the demo catalog when no course exists yet; return how many were added."""
        if self._repository.count() > 0:
            return 0
        for payload in DEMO_COURSES:
            self._repository.create_course(payload)
        logger.info("seeded %d demo courses", len(DEMO_COURSES))
        return len(DEMO_COURSES)
