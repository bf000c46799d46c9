"""Certificate template uploads."""

from dataclasses import dataclass
from datetime import UTC, datetime

from camp_registration.adapters.supabase_object_store import ObjectStore
from camp_registration.errors import ValidationError
from camp_registration.services.registrations import RegistrationService
from camp_registration.validation import file_extension, is_image


@dataclass(frozen=True)
class TemplateUpload:
    """Result of publishing a certificate template."""

    url: str
    affected: int


@dataclass
class CertificateService:
    """Publishes certificate templates to registrations."""

    registration_service: RegistrationService
    object_store: ObjectStore
    bucket: str = "certificates"

    def upload_template(
        self, content: bytes, filename: str, content_type: str | None
    ) -> TemplateUpload:
        """Upload a template image and broadcast its URL to all registrations."""
        if not content or not is_image(content_type):
            raise ValidationError(["template"])
        stamp = int(datetime.now(tz=UTC).timestamp() * 1000)
        key = (
            f"templates/certificate-template-{stamp}."
            f"{file_extension(filename, 'png')}"
        )
        self.object_store.upload(self.bucket, key, content, content_type)
        url = self.object_store.get_public_url(self.bucket, key)
        affected = self.registration_service.broadcast_certificate_template_globally(
            url
        )
        return TemplateUpload(url=url, affected=affected)
