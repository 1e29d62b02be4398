from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EnrollmentStatus(str, Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


@dataclass(slots=True)
class NewEnrollment:
    user_id: str
    course_id: str
    course_title: str
    status: EnrollmentStatus
    enrolled_at: datetime


@dataclass(slots=True)
class Enrollment:
    enrollment_id: str
    user_id: str
    course_id: str
    course_title: str
    status: EnrollmentStatus
    enrolled_at: datetime
