"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from camp_registration.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from camp_registration.adapters.supabase_camp_repository import SupabaseCampRepository
from camp_registration.adapters.supabase_identity_provider import (
    IdentityProvider,
    SupabaseIdentityProvider,
)
from camp_registration.adapters.supabase_object_store import SupabaseObjectStore
from camp_registration.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from camp_registration.adapters.supabase_question_repository import (
    SupabaseQuestionRepository,
)
from camp_registration.adapters.supabase_registration_repository import (
    SupabaseRegistrationRepository,
)
from camp_registration.config import Settings
from camp_registration.services.audit import AuditService
from camp_registration.services.cache import InMemoryCache
from camp_registration.services.camps import CampService
from camp_registration.services.certificates import CertificateService
from camp_registration.services.profiles import ProfileService
from camp_registration.services.questions import QuestionService
from camp_registration.services.registrations import RegistrationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_provider: IdentityProvider
    profile_service: ProfileService
    registration_service: RegistrationService
    certificate_service: CertificateService
    camp_service: CampService
    question_service: QuestionService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    object_store = SupabaseObjectStore(supabase_client)
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    registration_service = RegistrationService(
        repository=SupabaseRegistrationRepository(supabase_client),
        audit_service=audit_service,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        object_store=object_store,
        photo_bucket=resolved_settings.profile_photo_bucket,
    )
    certificate_service = CertificateService(
        registration_service=registration_service,
        object_store=object_store,
        bucket=resolved_settings.certificate_bucket,
    )
    camp_service = CampService(
        repository=SupabaseCampRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.camp_cache_ttl_seconds,
    )
    question_service = QuestionService(SupabaseQuestionRepository(supabase_client))

    return AppContainer(
        settings=resolved_settings,
        identity_provider=SupabaseIdentityProvider(supabase_client),
        profile_service=profile_service,
        registration_service=registration_service,
        certificate_service=certificate_service,
        camp_service=camp_service,
        question_service=question_service,
        audit_service=audit_service,
    )
