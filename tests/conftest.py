"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from camp_registration.adapters.supabase_identity_provider import IdentityProvider
from camp_registration.adapters.supabase_object_store import ObjectStore
from camp_registration.config import Settings
from camp_registration.containers import AppContainer
from camp_registration.domain.audit import RegistrationEvent
from camp_registration.domain.camps import (
    Camp,
    CampInquiry,
    CampQuestion,
    CampStatus,
    QuestionKind,
)
from camp_registration.domain.models import Principal
from camp_registration.domain.profiles import (
    CamperProfile,
    Gender,
    ProfileForm,
)
from camp_registration.domain.registrations import (
    CampRegistration,
    RegistrationForm,
    RegistrationStatus,
)
from camp_registration.errors import AlreadyRegistered, ProfileAlreadyExists
from camp_registration.services.audit import AuditRepository, AuditService
from camp_registration.services.cache import InMemoryCache
from camp_registration.services.camps import CampRepository, CampService
from camp_registration.services.certificates import CertificateService
from camp_registration.services.profiles import ProfileRepository, ProfileService
from camp_registration.services.questions import QuestionRepository, QuestionService
from camp_registration.services.registrations import (
    RegistrationRepository,
    RegistrationService,
)

CAMPER_TOKEN = "camper-token"
ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


@dataclass
class InMemoryRegistrationRepository(RegistrationRepository):
    """In-memory registration repository enforcing one row per camper and camp."""

    registrations: dict[UUID, CampRegistration] = field(default_factory=dict)
    updates: list[tuple[UUID | None, dict[str, object]]] = field(default_factory=list)

    def create_registration(
        self,
        camper_id: UUID,
        camp_slug: str,
        form: RegistrationForm,
        created_at: datetime,
    ) -> CampRegistration:
        for existing in self.registrations.values():
            if existing.camper_id == camper_id and existing.camp_slug == camp_slug:
                raise AlreadyRegistered
        registration = CampRegistration(
            id=uuid4(),
            camper_id=camper_id,
            camp_slug=camp_slug,
            first_name=form.first_name,
            last_name=form.last_name,
            nickname=form.nickname,
            gender=form.gender,
            birth_date=date.fromisoformat(form.birth_date),
            email=form.email,
            answers=list(form.answers),
            status=RegistrationStatus.PENDING,
            comment=None,
            certificate=False,
            certificate_url=None,
            created_at=created_at,
            submitted_at=created_at,
        )
        self.registrations[registration.id] = registration
        return registration

    def get_registration(self, registration_id: UUID) -> CampRegistration | None:
        return self.registrations.get(registration_id)

    def get_latest_for_camper(self, camper_id: UUID) -> CampRegistration | None:
        owned = [
            registration
            for registration in self.registrations.values()
            if registration.camper_id == camper_id
        ]
        if not owned:
            return None
        return max(owned, key=lambda registration: registration.created_at)

    def get_for_camp(
        self, camper_id: UUID, camp_slug: str
    ) -> CampRegistration | None:
        for registration in self.registrations.values():
            if (
                registration.camper_id == camper_id
                and registration.camp_slug == camp_slug
            ):
                return registration
        return None

    def list_registrations(
        self, camp_slug: str | None, status: RegistrationStatus | None
    ) -> list[CampRegistration]:
        rows = [
            registration
            for registration in self.registrations.values()
            if (camp_slug is None or registration.camp_slug == camp_slug)
            and (status is None or registration.status == status)
        ]
        return sorted(
            rows,
            key=lambda registration: registration.submitted_at
            or registration.created_at,
            reverse=True,
        )

    def update_registration(
        self, registration_id: UUID, changes: dict[str, object]
    ) -> None:
        self.updates.append((registration_id, changes))
        current = self.registrations.get(registration_id)
        if current is not None:
            self.registrations[registration_id] = _apply(current, changes)

    def update_all_registrations(self, changes: dict[str, object]) -> int:
        self.updates.append((None, changes))
        for registration_id, current in list(self.registrations.items()):
            self.registrations[registration_id] = _apply(current, changes)
        return len(self.registrations)


def _apply(
    registration: CampRegistration, changes: dict[str, object]
) -> CampRegistration:
    values = dict(changes)
    if "status" in values:
        values["status"] = RegistrationStatus(str(values["status"]))
    if isinstance(values.get("submitted_at"), str):
        values["submitted_at"] = datetime.fromisoformat(str(values["submitted_at"]))
    return replace(registration, **values)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, CamperProfile] = field(default_factory=dict)

    def get_profile(self, camper_id: UUID) -> CamperProfile | None:
        return self.profiles.get(camper_id)

    def create_profile(
        self,
        camper_id: UUID,
        form: ProfileForm,
        profile_url: str | None,
        created_at: datetime,
    ) -> CamperProfile:
        if camper_id in self.profiles:
            raise ProfileAlreadyExists
        profile = CamperProfile(
            id=camper_id,
            first_name=form.first_name,
            last_name=form.last_name,
            nickname=form.nickname,
            birth_date=date.fromisoformat(form.birth_date),
            gender=Gender(form.gender),
            strengths=form.strengths,
            past_activities=form.past_activities,
            profile_url=profile_url,
            email=form.email,
            created_at=created_at,
        )
        self.profiles[camper_id] = profile
        return profile


@dataclass
class FakeObjectStore(ObjectStore):
    """Object store that keeps uploads in memory."""

    objects: dict[tuple[str, str], tuple[bytes, str | None]] = field(
        default_factory=dict
    )

    def upload(
        self, bucket: str, key: str, content: bytes, content_type: str | None
    ) -> None:
        self.objects[(bucket, key)] = (content, content_type)

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"https://cdn.example.test/{bucket}/{key}"


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider resolving a fixed token table."""

    principals: dict[str, Principal] = field(default_factory=dict)
    signed_out: list[str] = field(default_factory=list)

    def get_current_principal(self, access_token: str | None) -> Principal | None:
        if access_token is None:
            return None
        return self.principals.get(access_token)

    def sign_in_url(self, provider: str, redirect_to: str) -> str:
        return (
            "https://auth.example.test/authorize"
            f"?provider={provider}&redirect_to={redirect_to}"
        )

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


@dataclass
class InMemoryCampRepository(CampRepository):
    """In-memory camp repository that counts catalog reads."""

    camps: dict[str, Camp] = field(default_factory=dict)
    list_calls: int = 0

    def list_camps(self) -> list[Camp]:
        self.list_calls += 1
        return list(self.camps.values())

    def get_camp(self, slug: str) -> Camp | None:
        return self.camps.get(slug)


@dataclass
class InMemoryQuestionRepository(QuestionRepository):
    """In-memory question and inquiry repository for tests."""

    questions: dict[UUID, CampQuestion] = field(default_factory=dict)
    inquiries: dict[UUID, CampInquiry] = field(default_factory=dict)

    def list_questions(self, camp_slug: str) -> list[CampQuestion]:
        return sorted(
            (
                question
                for question in self.questions.values()
                if question.camp_slug == camp_slug
            ),
            key=lambda question: question.position,
        )

    def create_question(
        self, camp_slug: str, payload: dict[str, object]
    ) -> CampQuestion:
        question = CampQuestion(
            id=uuid4(),
            camp_slug=camp_slug,
            prompt=str(payload["prompt"]),
            kind=QuestionKind(str(payload["kind"])),
            required=bool(payload["required"]),
            choices=list(payload["choices"]),
            position=int(payload.get("position", 0)),
        )
        self.questions[question.id] = question
        return question

    def update_question(
        self, question_id: UUID, payload: dict[str, object]
    ) -> CampQuestion | None:
        current = self.questions.get(question_id)
        if current is None:
            return None
        updated = replace(
            current,
            prompt=str(payload["prompt"]),
            kind=QuestionKind(str(payload["kind"])),
            required=bool(payload["required"]),
            choices=list(payload["choices"]),
            position=int(payload.get("position", current.position)),
        )
        self.questions[question_id] = updated
        return updated

    def delete_question(self, question_id: UUID) -> bool:
        return self.questions.pop(question_id, None) is not None

    def list_inquiries(self, camp_slug: str) -> list[CampInquiry]:
        return [
            inquiry
            for inquiry in self.inquiries.values()
            if inquiry.camp_slug == camp_slug
        ]

    def get_inquiry(self, inquiry_id: UUID) -> CampInquiry | None:
        return self.inquiries.get(inquiry_id)

    def update_inquiry(self, inquiry_id: UUID, payload: dict[str, object]) -> None:
        self.inquiries[inquiry_id] = replace(self.inquiries[inquiry_id], **payload)


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[RegistrationEvent] = field(default_factory=list)
    error: Exception | None = None

    def create_event(
        self,
        registration_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        if self.error is not None:
            raise self.error
        self.events.append(
            RegistrationEvent(
                id=uuid4(),
                registration_id=registration_id,
                event_type=event_type,
                before=before,
                after=after,
                created_at=datetime.now(tz=UTC),
            )
        )

    def list_events(self, registration_id: UUID, limit: int) -> list[RegistrationEvent]:
        matching = [
            event for event in self.events if event.registration_id == registration_id
        ]
        return list(reversed(matching))[:limit]


def make_camp(
    slug: str = "spring-camp",
    *,
    title: str = "Spring Camp",
    status: CampStatus = CampStatus.ACTIVE,
    start_date: date = date(2030, 4, 1),
    closes_at: datetime | None = None,
    requires_email: bool = True,
) -> Camp:
    return Camp(
        id=uuid4(),
        slug=slug,
        title=title,
        description=f"{title} for young builders",
        cover_image_url=None,
        status=status,
        start_date=start_date,
        end_date=start_date + timedelta(days=3),
        registration_closes_at=closes_at,
        requires_email=requires_email,
    )


def make_registration_form(**overrides: object) -> RegistrationForm:
    values: dict[str, object] = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "nickname": "Ada",
        "gender": "female",
        "birth_date": "2008-12-10",
        "email": "ada@example.com",
        "answers": ["Because I like robots", "Python", "Yes"],
    }
    values.update(overrides)
    return RegistrationForm(**values)  # type: ignore[arg-type]


def make_profile_form(**overrides: object) -> ProfileForm:
    values: dict[str, object] = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "nickname": "Ada",
        "birth_date": "2008-12-10",
        "gender": "female",
        "email": "ada@example.com",
        "strengths": "math",
        "past_activities": "robotics club",
    }
    values.update(overrides)
    return ProfileForm(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture
def camper() -> Principal:
    return Principal(id=uuid4(), email="ada@example.com")


@pytest.fixture
def container(settings: Settings, camper: Principal) -> AppContainer:
    object_store = FakeObjectStore()
    audit_service = AuditService(InMemoryAuditRepository())
    registration_service = RegistrationService(
        repository=InMemoryRegistrationRepository(),
        audit_service=audit_service,
    )
    camp_repository = InMemoryCampRepository()
    camp_repository.camps["spring-camp"] = make_camp()
    camp_repository.camps["winter-camp"] = make_camp(
        "winter-camp",
        title="Winter Camp",
        status=CampStatus.UPCOMING,
        start_date=date(2030, 12, 1),
    )
    return AppContainer(
        settings=settings,
        identity_provider=FakeIdentityProvider(principals={CAMPER_TOKEN: camper}),
        profile_service=ProfileService(
            repository=InMemoryProfileRepository(),
            object_store=object_store,
        ),
        registration_service=registration_service,
        certificate_service=CertificateService(
            registration_service=registration_service,
            object_store=object_store,
        ),
        camp_service=CampService(
            repository=camp_repository,
            cache=InMemoryCache(),
        ),
        question_service=QuestionService(InMemoryQuestionRepository()),
        audit_service=audit_service,
    )
