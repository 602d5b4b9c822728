"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConflictError(DomainError):
    """Raised when a state conflict occurs (e.g. duplicate driver ids)."""


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer."""


class InvalidCoordinate(ValidationError):
    """Latitude or longitude outside [-90, 90] / [-180, 180], or not finite."""


class InvalidPrecision(ValidationError):
    """Geohash precision is not a positive integer within the supported range."""


class InvalidHash(ValidationError):
    """Geohash is empty or contains characters outside the base-32 alphabet."""


class StaleHashPrecision(ValidationError):
    """An entity's cached geohash is shorter than the requested query precision."""

    def __init__(self, entity_id: object, cached_precision: int, query_precision: int) -> None:
        self.entity_id = entity_id
        self.cached_precision = cached_precision
        self.query_precision = query_precision
        super().__init__(
            f"entity {entity_id!r} has a precision-{cached_precision} geohash, "
            f"query needs precision {query_precision}"
        )
