"""Error types raised by services and adapters."""


class CampRegistrationError(Exception):
    """Base class for expected, request-scoped failures."""

    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class Unauthenticated(CampRegistrationError):
    """No valid principal is attached to the request."""

    message = "Please sign in"


class ValidationError(CampRegistrationError):
    """One or more submitted fields are missing or malformed."""

    message = "Invalid submission"

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Invalid fields: {', '.join(fields)}")
        self.fields = fields


class AlreadyRegistered(CampRegistrationError):
    """The camper already holds a registration for the camp."""

    message = "Already registered for this camp"


class ProfileAlreadyExists(CampRegistrationError):
    """A profile exists for the principal and cannot be created again."""

    message = "Profile already exists"


class ProfileRequired(CampRegistrationError):
    """The principal must complete a profile before continuing."""

    message = "Profile setup required"


class RegistrationClosed(CampRegistrationError):
    """The camp is not accepting registrations."""

    message = "Registration is closed for this camp"


class RegistrationNotFound(CampRegistrationError):
    message = "Registration not found"


class CampNotFound(CampRegistrationError):
    message = "Camp not found"


class QuestionNotFound(CampRegistrationError):
    message = "Question not found"


class InquiryNotFound(CampRegistrationError):
    message = "Inquiry not found"


class StoreUnavailable(CampRegistrationError):
    """A storage backend call failed for infrastructure reasons; retryable."""

    message = "Storage is unavailable, please try again"
