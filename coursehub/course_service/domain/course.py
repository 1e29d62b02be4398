from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class CourseInput:
    """Validated course fields used for both creation and full replacement."""

    title: str
    description: str
    instructor: str
    duration: int
    price: float


@dataclass(slots=True)
class Course:
    course_id: str
    title: str
    description: str
    instructor: str
    duration: int
    price: float
    created_at: datetime
    updated_at: datetime


DEMO_COURSES: tuple[CourseInput, ...] = (
    CourseInput(
        title="AWS Fundamentals",
        description="Learn the basics of Amazon Web Services including EC2, S3, and RDS",
        instructor="John Smith",
        duration=40,
        price=299.99,
    ),
    CourseInput(
        title="Docker & Kubernetes",
        description="Master containerization with Docker and orchestration with Kubernetes",
        instructor="Sarah Johnson",
        duration=35,
        price=249.99,
    ),
    CourseInput(
        title="Cloud Security Best Practices",
        description="Comprehensive guide to securing cloud infrastructure and applications",
        instructor="Mike Chen",
        duration=25,
        price=199.99,
    ),
)
