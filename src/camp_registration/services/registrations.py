"""Registration lifecycle and review workflow."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from camp_registration.domain.profiles import Gender
from camp_registration.domain.registrations import (
    ApplicationFilter,
    ApplicationStats,
    CampRegistration,
    RegistrationForm,
    RegistrationStatus,
)
from camp_registration.errors import (
    AlreadyRegistered,
    RegistrationNotFound,
    Unauthenticated,
    ValidationError,
)
from camp_registration.services.audit import AuditService
from camp_registration.validation import blank_fields, is_valid_email, parse_iso_date

logger = logging.getLogger(__name__)


class RegistrationRepository(Protocol):
    """Persistence interface for camp registrations."""

    def create_registration(
        self,
        camper_id: UUID,
        camp_slug: str,
        form: RegistrationForm,
        created_at: datetime,
    ) -> CampRegistration:
        """Insert a registration; raise AlreadyRegistered on a camper/camp conflict."""

    def get_registration(self, registration_id: UUID) -> CampRegistration | None:
        """Return a registration by id, if present."""

    def get_latest_for_camper(self, camper_id: UUID) -> CampRegistration | None:
        """Return the most recently created registration for a camper."""

    def get_for_camp(
        self, camper_id: UUID, camp_slug: str
    ) -> CampRegistration | None:
        """Return the camper's registration for a camp, if present."""

    def list_registrations(
        self, camp_slug: str | None, status: RegistrationStatus | None
    ) -> list[CampRegistration]:
        """Return registrations ordered by submitted_at descending."""

    def update_registration(
        self, registration_id: UUID, changes: dict[str, object]
    ) -> None:
        """Apply column changes to one registration."""

    def update_all_registrations(self, changes: dict[str, object]) -> int:
        """Apply column changes to every registration and return the row count."""


@dataclass
class RegistrationService:
    """Application service for submitting and reviewing registrations."""

    repository: RegistrationRepository
    audit_service: AuditService | None = None

    def submit_registration(
        self,
        camper_id: UUID | None,
        camp_slug: str,
        form: RegistrationForm,
        *,
        email_required: bool = True,
    ) -> CampRegistration:
        """Validate and store a camper's registration for a camp."""
        if camper_id is None:
            raise Unauthenticated
        invalid = validate_registration_form(form, email_required=email_required)
        if not camp_slug or not camp_slug.strip():
            invalid.insert(0, "camp_slug")
        if invalid:
            raise ValidationError(invalid)
        if self.repository.get_for_camp(camper_id, camp_slug) is not None:
            raise AlreadyRegistered

        # The unique constraint still rejects a concurrent duplicate on insert.
        registration = self.repository.create_registration(
            camper_id=camper_id,
            camp_slug=camp_slug,
            form=form,
            created_at=datetime.now(tz=UTC),
        )
        logger.info(
            "Camper %s registered for %s as %s",
            camper_id,
            camp_slug,
            registration.id,
        )
        return registration

    def get_my_registration(self, camper_id: UUID) -> CampRegistration | None:
        """Return the camper's latest registration across all camps."""
        return self.repository.get_latest_for_camper(camper_id)

    def get_registration_for_camp(
        self, camper_id: UUID, camp_slug: str
    ) -> CampRegistration | None:
        """Return the camper's registration for one camp."""
        return self.repository.get_for_camp(camper_id, camp_slug)

    def get_registration(self, registration_id: UUID) -> CampRegistration:
        """Return a registration or raise RegistrationNotFound."""
        registration = self.repository.get_registration(registration_id)
        if registration is None:
            raise RegistrationNotFound
        return registration

    def list_applications(
        self, application_filter: ApplicationFilter | None = None
    ) -> list[CampRegistration]:
        """Return applications for the staff dashboard, newest submission first."""
        criteria = application_filter or ApplicationFilter()
        registrations = self.repository.list_registrations(
            camp_slug=criteria.camp_slug, status=criteria.status
        )
        if criteria.search and criteria.search.strip():
            needle = criteria.search.strip().lower()
            registrations = [
                registration
                for registration in registrations
                if _matches_search(registration, needle)
            ]
        return registrations

    def summarize_applications(
        self, application_filter: ApplicationFilter | None = None
    ) -> ApplicationStats:
        """Return derived counts for the dashboard header."""
        registrations = self.list_applications(application_filter)
        statuses = Counter(registration.status for registration in registrations)
        by_camp = Counter(registration.camp_slug for registration in registrations)
        return ApplicationStats(
            total=len(registrations),
            pending=statuses[RegistrationStatus.PENDING],
            approved=statuses[RegistrationStatus.APPROVE],
            declined=statuses[RegistrationStatus.DECLINE],
            certificates_enabled=sum(
                1 for registration in registrations if registration.certificate
            ),
            by_camp=dict(sorted(by_camp.items())),
        )

    def set_status(self, registration_id: UUID, status: RegistrationStatus) -> None:
        """Move a registration to any status, including back to pending."""
        current = self.get_registration(registration_id)
        new_status = RegistrationStatus(status)
        if current.status == new_status:
            return
        self._change(
            registration_id,
            "status_changed",
            "status",
            current.status.value,
            new_status.value,
        )
        logger.info(
            "Registration %s status %s -> %s",
            registration_id,
            current.status.value,
            new_status.value,
        )

    def set_comment(self, registration_id: UUID, text: str) -> None:
        """Overwrite the staff comment; an empty string clears it."""
        current = self.get_registration(registration_id)
        if current.comment == text:
            self.repository.update_registration(registration_id, {"comment": text})
            return
        self._change(registration_id, "comment_set", "comment", current.comment, text)

    def set_certificate_flag(self, registration_id: UUID, enabled: bool) -> None:  # noqa: FBT001
        """Toggle certificate eligibility independently of status."""
        current = self.get_registration(registration_id)
        if current.certificate == enabled:
            return
        self._change(
            registration_id,
            "certificate_flag_set",
            "certificate",
            current.certificate,
            enabled,
        )

    def set_certificate_url(self, registration_id: UUID, url: str | None) -> None:
        """Set a per-applicant certificate URL."""
        current = self.get_registration(registration_id)
        if current.certificate_url == url:
            self.repository.update_registration(
                registration_id, {"certificate_url": url}
            )
            return
        self._change(
            registration_id,
            "certificate_url_set",
            "certificate_url",
            current.certificate_url,
            url,
        )

    def broadcast_certificate_template_globally(self, template_url: str) -> int:
        """Write a template URL to every registration in every camp.

        Per-applicant URLs are overwritten and submitted_at is stamped with the
        current time on each row.
        """
        if not template_url or not template_url.strip():
            raise ValidationError(["template_url"])
        affected = self.repository.update_all_registrations(
            {
                "certificate_url": template_url,
                "submitted_at": datetime.now(tz=UTC).isoformat(),
            }
        )
        logger.info(
            "Broadcast certificate template to %d registrations across all camps",
            affected,
        )
        return affected

    def set_certificate_flag_globally(self, enabled: bool) -> int:  # noqa: FBT001
        """Set the certificate flag on every registration in every camp."""
        affected = self.repository.update_all_registrations(
            {
                "certificate": enabled,
                "submitted_at": datetime.now(tz=UTC).isoformat(),
            }
        )
        logger.info(
            "Set certificate flag to %s on %d registrations", enabled, affected
        )
        return affected

    def _change(
        self,
        registration_id: UUID,
        event_type: str,
        column: str,
        before: object,
        after: object,
    ) -> None:
        # Event first: if it fails the row is untouched and a retry still applies.
        self._record(registration_id, event_type, {column: before}, {column: after})
        self.repository.update_registration(registration_id, {column: after})

    def _record(
        self,
        registration_id: UUID,
        event_type: str,
        before: dict[str, object],
        after: dict[str, object],
    ) -> None:
        if self.audit_service is None:
            return
        self.audit_service.record_event(registration_id, event_type, before, after)


def validate_registration_form(
    form: RegistrationForm, *, email_required: bool
) -> list[str]:
    """Return the names of invalid fields in a registration form."""
    invalid = blank_fields(
        {
            "first_name": form.first_name,
            "last_name": form.last_name,
            "nickname": form.nickname,
            "gender": form.gender,
            "birth_date": form.birth_date,
        }
    )
    if "gender" not in invalid and form.gender not in set(Gender):
        invalid.append("gender")
    if "birth_date" not in invalid and parse_iso_date(form.birth_date) is None:
        invalid.append("birth_date")
    if (email_required or form.email) and not is_valid_email(form.email):
        invalid.append("email")
    if not form.answers:
        invalid.append("answers")
    invalid.extend(
        f"question{index}"
        for index, answer in enumerate(form.answers, start=1)
        if not answer or not answer.strip()
    )
    return invalid


def _matches_search(registration: CampRegistration, needle: str) -> bool:
    haystack = (
        registration.first_name,
        registration.last_name,
        registration.nickname,
        registration.email or "",
    )
    return any(needle in value.lower() for value in haystack)
