from __future__ import annotations

import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from coursehub.auth_service.api import routes as auth_routes
from coursehub.auth_service.domain.account import Account
from coursehub.auth_service.domain.contracts import NewAccount
from coursehub.auth_service.domain.service import AccountService
from coursehub.config import Settings
from coursehub.course_service.api import routes as course_routes
from coursehub.course_service.domain.course import Course, CourseInput
from coursehub.course_service.domain.service import CourseService
from coursehub.enrollment_service.api import routes as enrollment_routes
from coursehub.enrollment_service.domain.enrollment import Enrollment, NewEnrollment
from coursehub.enrollment_service.domain.service import EnrollmentService
from coursehub.errors import AlreadyEnrolled, DuplicateAccount
from coursehub.security.passwords import PasswordHasher
from coursehub.security.rate_limiter import SlidingWindowRateLimiter
from coursehub.security.tokens import TokenCodec
from coursehub.web import create_service_app

TEST_SECRET = "test-secret-for-coursehub-0123456789abcdef"
TEST_ISSUER = "coursehub.test"


class FakeAccountRepository:
    """In-memory repository mimicking the unique email index."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.writes = 0

    def exists_by_email(self, email: str) -> bool:
        return email in self.accounts

    def find_by_email(self, email: str) -> Account | None:
        return self.accounts.get(email)

    def create_account(self, payload: NewAccount) -> Account:
        if payload.email in self.accounts:
            raise DuplicateAccount()
        account = Account(
            account_id=str(uuid.uuid4()),
            name=payload.name,
            email=payload.email,
            password_hash=payload.password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.accounts[payload.email] = account
        self.writes += 1
        return account


class FakeCourseRepository:
    def __init__(self) -> None:
        self.courses: dict[str, Course] = {}

    def count(self) -> int:
        return len(self.courses)

    def list_courses(self) -> list[Course]:
        return list(self.courses.values())

    def get_course(self, course_id: str) -> Course | None:
        return self.courses.get(course_id)

    def create_course(self, payload: CourseInput) -> Course:
        now = datetime.now(timezone.utc)
        course = Course(
            course_id=str(uuid.uuid4()),
            title=payload.title,
            description=payload.description,
            instructor=payload.instructor,
            duration=payload.duration,
            price=payload.price,
            created_at=now,
            updated_at=now,
        )
        self.courses[course.course_id] = course
        return course

    def update_course(self, course_id: str, payload: CourseInput) -> Course | None:
        existing = self.courses.get(course_id)
        if existing is None:
            return None
        updated = replace(
            existing,
            title=payload.title,
            description=payload.description,
            instructor=payload.instructor,
            duration=payload.duration,
            price=payload.price,
            updated_at=datetime.now(timezone.utc),
        )
        self.courses[course_id] = updated
        return updated

    def delete_course(self, course_id: str) -> bool:
        return self.courses.pop(course_id, None) is not None


class FakeEnrollmentRepository:
    """In-memory repository mimicking the (user_id, course_id) unique index."""

    def __init__(self) -> None:
        self.enrollments: list[Enrollment] = []

    def exists(self, user_id: str, course_id: str) -> bool:
        return any(e.user_id == user_id and e.course_id == course_id for e in self.enrollments)

    def create_enrollment(self, payload: NewEnrollment) -> Enrollment:
        if self.exists(payload.user_id, payload.course_id):
            raise AlreadyEnrolled()
        enrollment = Enrollment(
            enrollment_id=str(uuid.uuid4()),
            user_id=payload.user_id,
            course_id=payload.course_id,
            course_title=payload.course_title,
            status=payload.status,
            enrolled_at=payload.enrolled_at,
        )
        self.enrollments.append(enrollment)
        return enrollment

    def list_for_user(self, user_id: str) -> list[Enrollment]:
        owned = [e for e in self.enrollments if e.user_id == user_id]
        return sorted(owned, key=lambda e: e.enrolled_at, reverse=True)


def _build_app(router: APIRouter) -> FastAPI:
    return create_service_app(title="coursehub-test", settings=Settings(), router=router)


@pytest.fixture
def make_codec():
    """Build codecs sharing the test secret, optionally with a fixed clock."""

    def factory(*, ttl_seconds: int = 3600, clock=time.time) -> TokenCodec:
        return TokenCodec(TEST_SECRET, ttl_seconds=ttl_seconds, issuer=TEST_ISSUER, clock=clock)

    return factory


@pytest.fixture
def codec(make_codec) -> TokenCodec:
    return make_codec()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def account_repository() -> FakeAccountRepository:
    return FakeAccountRepository()


@pytest.fixture
def account_service(account_repository, hasher, codec) -> AccountService:
    return AccountService(account_repository, hasher, codec)


@pytest.fixture
def auth_client(account_service, codec):
    """Provide an auth service test client with isolated state."""
    app = _build_app(auth_routes.router)
    app.state.account_service = account_service
    app.state.token_codec = codec
    app.state.rate_limiter = SlidingWindowRateLimiter(max_requests=50, window_seconds=60)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def course_repository() -> FakeCourseRepository:
    return FakeCourseRepository()


@pytest.fixture
def course_client(course_repository):
    app = _build_app(course_routes.router)
    app.state.course_service = CourseService(course_repository)
    with TestClient(app) as client:
        yield client, course_repository


@pytest.fixture
def enrollment_repository() -> FakeEnrollmentRepository:
    return FakeEnrollmentRepository()


@pytest.fixture
def enrollment_client(enrollment_repository, codec):
    app = _build_app(enrollment_routes.router)
    app.state.enrollment_service = EnrollmentService(enrollment_repository)
    app.state.token_codec = codec
    with TestClient(app) as client:
        yield client, enrollment_repository