class DomainError(Exception):
    """Base exception for attendance rule violations."""


class ValidationError(DomainError):
    """Raised when an argument is invalid (not for data-quality problems in records)."""


class CohortNotFoundError(DomainError):
    """Raised when the data source has no cohort with the requested id."""
