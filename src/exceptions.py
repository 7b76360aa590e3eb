"""Domain exceptions raised by services and translated to HTTP responses in main."""

from typing import Any


class RecipeAppError(Exception):
    """Base class for recoverable errors surfaced to API clients.

    Attributes:
        message: human-readable message
        http_status: status code used by the API exception handler
    """

    http_status = 500

    def __init__(self, message: str = "Request failed"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message}

    def __str__(self) -> str:
        return self.message


class NotFoundError(RecipeAppError):
    """Referenced recipe, step or entry does not exist."""

    http_status = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class ForbiddenError(RecipeAppError):
    """Authenticated user does not own the referenced recipe."""

    http_status = 403

    def __init__(self, message: str = "You do not have access to this recipe"):
        super().__init__(message)


class InvalidArgumentError(RecipeAppError):
    """Malformed input, e.g. a non-positive step number."""

    http_status = 400

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class InvalidStateError(RecipeAppError):
    """Operation would break an invariant, e.g. deleting a recipe's last step."""

    http_status = 400

    def __init__(self, message: str = "Operation not allowed in the current state"):
        super().__init__(message)


class ConflictError(RecipeAppError):
    """Resource already exists."""

    http_status = 409

    def __init__(self, message: str = "Conflict"):
        super().__init__(message)


class ExternalServiceError(RecipeAppError):
    """Recipe search API failed or is not configured."""

    http_status = 502

    def __init__(self, message: str = "Recipe search service unavailable", http_status: int = 502):
        super().__init__(message)
        self.http_status = http_status
