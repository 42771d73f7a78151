"""API error classes.

Each error knows its HTTP status and the exact JSON body the submission
boundary promises to clients:

- 400: {"errors": {"<field.path>": ["message", ...]}}
- 409: {"message": "<conflict description>"}
- 500: {"message": "Internal server error"}

WHY CUSTOM ERROR CLASSES:
- Consistent error response format across all endpoints
- Easy to map to HTTP status codes in exception handlers
- Type-safe error handling in services and routers
"""

INTERNAL_ERROR_MESSAGE = "Internal server error"
"""Opaque message returned for every unexpected server-side failure."""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "CONFLICT").
        message: Human-readable error message.
        status_code: HTTP status code to return.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def content(self) -> dict:
        """Build the JSON response body for this error.

        Returns:
            Dict with a single "message" key.
        """
        return {"message": self.message}


class ValidationError(APIError):
    """Field validation failed (400).

    Carries the field-path → messages mapping produced by schema validation.
    """

    def __init__(
        self,
        field_errors: dict[str, list[str]],
        message: str = "Validation failed",
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
        )
        self.field_errors = field_errors

    def content(self) -> dict:
        """Build the JSON response body for this error.

        Returns:
            Dict with an "errors" key mapping field paths to messages.
        """
        return {"errors": self.field_errors}


class ConflictError(APIError):
    """Duplicate or conflicting resource (409).

    Accepts custom code for specific conflict types.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=409,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )
