"""Domain exceptions.

All domain-level errors raised by the catalog. Each error carries a
machine-readable ``error_code`` and the HTTP status the API layer maps it
to, so endpoints can build error responses without guessing.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    error_code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError):
    """Base class for user-correctable input errors."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class SlugRequiredError(ValidationError):
    """Raised when a slug lookup is attempted without a slug."""

    error_code = "SLUG_REQUIRED"

    def __init__(self) -> None:
        super().__init__("Slug is required")


class ProductValidationError(ValidationError):
    """Raised when a product draft fails validation before persistence."""

    status_code = 422

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        """Initialize product validation error.

        Args:
            errors: List of ``{"field": ..., "message": ...}`` entries.
        """
        super().__init__(
            "Product validation failed",
            details={"errors": errors},
        )
        self.errors = errors


class MediaNotFoundError(ProductValidationError):
    """Raised when a product references media that does not exist."""

    def __init__(self, field: str, media_id: str) -> None:
        super().__init__(
            [{"field": field, "message": f"Media not found: {media_id}"}],
        )
        self.media_id = media_id


class MediaTypeNotAllowedError(ValidationError):
    """Raised when media is registered with a MIME type the uploader rejects."""

    status_code = 422

    def __init__(self, mime_type: str, allowed: list[str]) -> None:
        super().__init__(
            f"MIME type not allowed: {mime_type}",
            details={"mime_type": mime_type, "allowed": allowed},
        )


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for missing resources."""

    error_code = "NOT_FOUND"
    status_code = 404


class CategoryNotFoundError(NotFoundError):
    """Raised when a product category is not in the whitelist."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, product_type: str | None) -> None:
        """Initialize category not found error.

        Args:
            product_type: The rejected category value.
        """
        super().__init__(
            f"Unknown product type: {product_type}",
            details={"type": product_type},
        )


class ProductNotFoundError(NotFoundError):
    """Raised when no visible product matches a lookup."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, key: str, value: str) -> None:
        """Initialize product not found error.

        Args:
            key: Lookup field (``slug`` or ``id``).
            value: Lookup value.
        """
        super().__init__(
            f"Product not found: {value}",
            details={key: value},
        )


# ============================================================================
# Constraint Violations
# ============================================================================


class ConstraintViolationError(DomainError):
    """Raised when a write breaks a storage-level constraint."""

    error_code = "CONSTRAINT_VIOLATION"
    status_code = 409


class SlugConflictError(ConstraintViolationError):
    """Raised when a product slug is already taken."""

    error_code = "SLUG_CONFLICT"

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"Slug already in use: {slug}",
            details={"slug": slug},
        )
        self.slug = slug
