"""Tests for the profile setup gate."""

from uuid import uuid4

import pytest

from camp_registration.domain.profiles import ProfilePhoto, ProfileState
from camp_registration.errors import (
    ProfileAlreadyExists,
    ProfileRequired,
    Unauthenticated,
    ValidationError,
)
from camp_registration.services.profiles import ProfileService
from tests.conftest import (
    FakeObjectStore,
    InMemoryProfileRepository,
    make_profile_form,
)


def _service() -> tuple[ProfileService, InMemoryProfileRepository, FakeObjectStore]:
    repository = InMemoryProfileRepository()
    object_store = FakeObjectStore()
    return ProfileService(repository, object_store), repository, object_store


def test_ensure_profile_reports_missing_then_present() -> None:
    service, _, _ = _service()
    camper_id = uuid4()

    assert service.ensure_profile(camper_id) == ProfileState.MISSING
    service.create_profile(camper_id, make_profile_form())
    assert service.ensure_profile(camper_id) == ProfileState.PRESENT


def test_require_profile_raises_when_missing() -> None:
    service, _, _ = _service()

    with pytest.raises(ProfileRequired):
        service.require_profile(uuid4())


def test_create_profile_requires_principal() -> None:
    service, repository, _ = _service()

    with pytest.raises(Unauthenticated):
        service.create_profile(None, make_profile_form())

    assert repository.profiles == {}


def test_create_profile_twice_is_rejected() -> None:
    service, repository, object_store = _service()
    camper_id = uuid4()
    service.create_profile(camper_id, make_profile_form())

    with pytest.raises(ProfileAlreadyExists):
        service.create_profile(
            camper_id,
            make_profile_form(nickname="Countess"),
            ProfilePhoto(content=b"png", filename="me.png", content_type="image/png"),
        )

    assert repository.profiles[camper_id].nickname == "Ada"
    assert object_store.objects == {}


def test_create_profile_uploads_photo() -> None:
    service, _, object_store = _service()
    camper_id = uuid4()

    profile = service.create_profile(
        camper_id,
        make_profile_form(),
        ProfilePhoto(content=b"jpeg", filename="Me.JPG", content_type="image/jpeg"),
    )

    [(bucket, key)] = object_store.objects
    assert bucket == "camper"
    assert key.startswith(f"{camper_id}-")
    assert key.endswith(".jpg")
    assert profile.profile_url == f"https://cdn.example.test/camper/{key}"


def test_create_profile_without_photo_has_no_url() -> None:
    service, _, object_store = _service()

    profile = service.create_profile(uuid4(), make_profile_form())

    assert profile.profile_url is None
    assert object_store.objects == {}


def test_create_profile_validates_fields() -> None:
    service, repository, _ = _service()

    with pytest.raises(ValidationError) as excinfo:
        service.create_profile(
            uuid4(),
            make_profile_form(last_name=" ", gender="", email="nobody"),
            ProfilePhoto(content=b"%PDF", filename="cv.pdf", content_type="text/pdf"),
        )

    assert excinfo.value.fields == ["last_name", "gender", "email", "photo"]
    assert repository.profiles == {}
