"""HTTP route definitions for the course service."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import Field, field_validator

from ...schemas import ApiResponse, CamelModel
from ..domain.course import Course, CourseInput
from ..domain.service import CourseService

router = APIRouter(prefix="/api/courses", tags=["courses"])


class CourseRequest(CamelModel):
    """Payload accepted when creating or replacing a course."""

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    instructor: str = Field(..., min_length=2, max_length=50)
    duration: int = Field(..., gt=0)
    price: float = Field(..., gt=0)

    @field_validator("title", "description", "instructor")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_input(self) -> CourseInput:
        return CourseInput(
            title=self.title,
            description=self.description,
            instructor=self.instructor,
            duration=self.duration,
            price=self.price,
        )


class CourseResponse(CamelModel):
    """Serialised representation of a `Course`."""

    id: str
    title: str
    description: str
    instructor: str
    duration: int
    price: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, course: Course) -> "CourseResponse":
        return cls(
            id=course.course_id,
            title=course.title,
            description=course.description,
            instructor=course.instructor,
            duration=course.duration,
            price=course.price,
            created_at=course.created_at,
            updated_at=course.updated_at,
        )


def get_service(request: Request) -> CourseService:
    """Resolve the `CourseService` stored on the FastAPI application state."""
    service: CourseService = request.app.state.course_service
    return service


@router.get("/", response_model=ApiResponse[list[CourseResponse]])
def list_courses(service: CourseService = Depends(get_service)) -> ApiResponse[list[CourseResponse]]:
    return ApiResponse.ok([CourseResponse.from_domain(course) for course in service.list_courses()])


@router.get("/health", response_model=ApiResponse[str])
def health() -> ApiResponse[str]:
    return ApiResponse.ok("Course service is healthy")


@router.get("/{course_id}", response_model=ApiResponse[CourseResponse])
def get_course(course_id: str, service: CourseService = Depends(get_service)) -> ApiResponse[CourseResponse]:
    return ApiResponse.ok(CourseResponse.from_domain(service.get_course(course_id)))


@router.post("/", response_model=ApiResponse[CourseResponse])
def create_course(
    payload: CourseRequest,
    service: CourseService = Depends(get_service),
) -> ApiResponse[CourseResponse]:
    return ApiResponse.ok(CourseResponse.from_domain(service.create_course(payload.to_input())))


@router.put("/{course_id}", response_model=ApiResponse[CourseResponse])
def update_course(
    course_id: str,
    payload: CourseRequest,
    service: CourseService = Depends(get_service),
) -> ApiResponse[CourseResponse]:
    """Replace every field of an existing course."""
    return ApiResponse.ok(CourseResponse.from_domain(service.update_course(course_id, payload.to_input())))


@router.delete("/{course_id}", response_model=ApiResponse[str])
def delete_course(course_id: str, service: CourseService = Depends(get_service)) -> ApiResponse[str]:
    service.delete_course(course_id)
    return ApiResponse.ok("Course deleted successfully")
