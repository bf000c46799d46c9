"""Tests for container wiring."""

from camp_registration.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.registration_service.audit_service is container.audit_service
    assert container.certificate_service.registration_service is (
        container.registration_service
    )
    assert container.profile_service.photo_bucket == "camper"
    assert container.certificate_service.bucket == "certificates"
