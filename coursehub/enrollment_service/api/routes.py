"""HTTP route definitions for the enrollment service."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import Field

from ...schemas import ApiResponse, CamelModel
from ...security.bearer import require_identity
from ...security.tokens import Identity
from ..domain.enrollment import Enrollment, EnrollmentStatus
from ..domain.service import EnrollmentService

router = APIRouter(prefix="/api/enroll", tags=["enrollments"])


class EnrollmentRequest(CamelModel):
    course_id: str = Field(..., min_length=1)


class EnrollmentResponse(CamelModel):
    """Serialised representation of an `Enrollment`."""

    id: str
    user_id: str
    course_id: str
    course_title: str
    status: EnrollmentStatus
    enrolled_at: datetime

    @classmethod
    def from_domain(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            id=enrollment.enrollment_id,
            user_id=enrollment.user_id,
            course_id=enrollment.course_id,
            course_title=enrollment.course_title,
            status=enrollment.status,
            enrolled_at=enrollment.enrolled_at,
        )


def get_service(request: Request) -> EnrollmentService:
    """Resolve the `EnrollmentService` stored on the FastAPI application state."""
    service: EnrollmentService = request.app.state.enrollment_service
    return service


@router.get("/", response_model=ApiResponse[list[EnrollmentResponse]])
def list_enrollments(
    identity: Identity = Depends(require_identity),
    service: EnrollmentService = Depends(get_service),
) -> ApiResponse[list[EnrollmentResponse]]:
    """Return the caller's enrollments, newest first."""
    return ApiResponse.ok([EnrollmentResponse.from_domain(e) for e in service.list_for_user(identity)])


@router.post("/", response_model=ApiResponse[EnrollmentResponse])
def enroll(
    payload: EnrollmentRequest,
    identity: Identity = Depends(require_identity),
    service: EnrollmentService = Depends(get_service),
) -> ApiResponse[EnrollmentResponse]:
    return ApiResponse.ok(EnrollmentResponse.from_domain(service.enroll(identity, payload.course_id)))


@router.get("/health", response_model=ApiResponse[str])
def health() -> ApiResponse[str]:
    return ApiResponse.ok("Enrollment service is healthy")
