"""Static course title lookup.

Enrollment does not call the course service; titles are resolved from this
fixed table and anything else is recorded as ``UNKNOWN_COURSE_TITLE``.
"""

from __future__ import annotations

UNKNOWN_COURSE_TITLE = "Unknown Course"

COURSE_TITLES: dict[str, str] = {
    "1": "AWS Fundamentals",
    "2": "Docker & Kubernetes",
    "3": "Cloud Security Best Practices",
}


def resolve_course_title(course_id: str) -> str:
    return COURSE_TITLES.get(course_id, UNKNOWN_COURSE_TITLE)
