"""Domain layer module.

Contains the catalog's domain exceptions.
"""

from storefront.domain.exceptions import (
    CategoryNotFoundError,
    ConstraintViolationError,
    DomainError,
    MediaNotFoundError,
    MediaTypeNotAllowedError,
    NotFoundError,
    ProductNotFoundError,
    ProductValidationError,
    SlugConflictError,
    SlugRequiredError,
    ValidationError,
)

__all__ = [
    "DomainError",
    # Validation
    "ValidationError",
    "SlugRequiredError",
    "ProductValidationError",
    "MediaNotFoundError",
    "MediaTypeNotAllowedError",
    # Not found
    "NotFoundError",
    "CategoryNotFoundError",
    "ProductNotFoundError",
    # Constraints
    "ConstraintViolationError",
    "SlugConflictError",
]
