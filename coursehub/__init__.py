"""Learning-platform services: accounts, course catalog and enrollments."""

__version__ = "0.1.0"
