"""Enrollment ledger service: enroll the authenticated caller and list their enrollments."""
