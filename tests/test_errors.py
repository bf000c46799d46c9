"""Tests for error responses."""

from camp_registration.api.app import error_body, error_status
from camp_registration.errors import (
    AlreadyRegistered,
    CampRegistrationError,
    ProfileRequired,
    StoreUnavailable,
    ValidationError,
)


def test_error_status_maps_known_errors() -> None:
    assert error_status(AlreadyRegistered()) == 409
    assert error_status(StoreUnavailable()) == 503
    assert error_status(CampRegistrationError()) == 400


def test_error_body_includes_fields_and_redirects() -> None:
    assert error_body(ValidationError(["email"])) == {
        "error": "ValidationError",
        "detail": "Invalid submission",
        "fields": ["email"],
    }
    assert error_body(ProfileRequired())["redirect"] == "/setup-profile"


def test_error_message_can_be_overridden() -> None:
    error = AlreadyRegistered("Already registered for Spring Camp")

    assert error.message == "Already registered for Spring Camp"
    assert str(error) == "Already registered for Spring Camp"
