"""Tests for API error classes and their response bodies."""

from profile_wizard.core.errors import (
    INTERNAL_ERROR_MESSAGE,
    APIError,
    ConflictError,
    InternalError,
    ValidationError,
)


class TestAPIError:
    """Tests for base APIError class."""

    def test_api_error_has_required_attributes(self) -> None:
        """APIError should have code, message and status_code."""
        error = APIError(code="TEST_ERROR", message="Test message", status_code=418)

        assert error.code == "TEST_ERROR"
        assert error.message == "Test message"
        assert error.status_code == 418

    def test_api_error_defaults_to_500(self) -> None:
        """APIError should default to 500 status code."""
        assert APIError(code="TEST", message="Test").status_code == 500

    def test_api_error_is_exception(self) -> None:
        """APIError should be an Exception subclass."""
        error = APIError(code="TEST", message="Test")

        assert isinstance(error, Exception)
        assert str(error) == "Test"

    def test_content_is_message_body(self) -> None:
        """Non-validation errors serialize as {"message": ...}."""
        assert APIError(code="X", message="Boom").content() == {"message": "Boom"}


class TestValidationError:
    """Tests for ValidationError (400)."""

    def test_validation_error_has_400_status(self) -> None:
        """ValidationError should have 400 status and VALIDATION_ERROR code."""
        error = ValidationError({"email": ["Invalid email address."]})

        assert error.status_code == 400
        assert error.code == "VALIDATION_ERROR"

    def test_content_is_errors_map(self) -> None:
        """The body carries the field errors unchanged."""
        field_errors = {"lastName": ["This field is required."]}

        assert ValidationError(field_errors).content() == {"errors": field_errors}


class TestConflictError:
    """Tests for ConflictError (409)."""

    def test_conflict_error_uses_given_code(self) -> None:
        """ConflictError keeps its specific code."""
        error = ConflictError(code="DUPLICATE_SUBMISSION", message="Taken")

        assert error.status_code == 409
        assert error.code == "DUPLICATE_SUBMISSION"
        assert error.content() == {"message": "Taken"}


class TestInternalError:
    """Tests for InternalError (500)."""

    def test_internal_error_defaults_to_opaque_message(self) -> None:
        """The default message reveals nothing."""
        error = InternalError()

        assert error.status_code == 500
        assert error.content() == {"message": INTERNAL_ERROR_MESSAGE}
