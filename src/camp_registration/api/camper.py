"""Camper-facing endpoints: catalog, profile setup and registration."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Header,
    Query,
    Request,
    UploadFile,
    status,
)

from camp_registration.api.models import RegistrationRequest
from camp_registration.api.serializers import (
    registration_prefill,
    serialize_camp,
    serialize_profile,
    serialize_question,
    serialize_registration,
)
from camp_registration.config import parse_bearer_token
from camp_registration.domain.models import Principal
from camp_registration.domain.profiles import ProfileForm, ProfilePhoto, ProfileState
from camp_registration.errors import CampNotFound, Unauthenticated

if TYPE_CHECKING:
    from camp_registration.containers import AppContainer

router = APIRouter(tags=["camper"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_principal(
    request: Request, authorization: str | None = Header(default=None)
) -> Principal:
    """Resolve the signed-in camper from the bearer token."""
    container = _container(request)
    principal = container.identity_provider.get_current_principal(
        parse_bearer_token(authorization)
    )
    if principal is None:
        raise Unauthenticated
    return principal


@router.get("/camps")
async def list_camps(
    request: Request,
    camp_status: str = Query(default="all", alias="status"),
    search: str = "",
    sort_by: str = "date",
) -> dict[str, object]:
    """Return the camp catalog."""
    container = _container(request)
    camps = container.camp_service.list_camps(
        status=camp_status, search=search, sort_by=sort_by
    )
    now = datetime.now(tz=UTC)
    return {"camps": [serialize_camp(camp, now) for camp in camps]}


@router.get("/camps/{slug}")
async def camp_detail(slug: str, request: Request) -> dict[str, object]:
    """Return one camp with its registration countdown."""
    container = _container(request)
    camp = container.camp_service.get_camp(slug)
    if camp is None:
        raise CampNotFound
    return {"camp": serialize_camp(camp, datetime.now(tz=UTC))}


@router.get("/camps/{slug}/questions")
async def camp_questions(slug: str, request: Request) -> dict[str, object]:
    """Return the questions on a camp's registration form."""
    container = _container(request)
    questions = container.question_service.list_questions(slug)
    return {"questions": [serialize_question(question) for question in questions]}


@router.get("/me/profile")
async def my_profile(
    request: Request, principal: Principal = Depends(current_principal)
) -> dict[str, object]:
    """Return the profile gate state and the profile, if any."""
    container = _container(request)
    state = container.profile_service.ensure_profile(principal.id)
    profile = (
        container.profile_service.get_profile(principal.id)
        if state == ProfileState.PRESENT
        else None
    )
    return {
        "state": state.value,
        "profile": serialize_profile(profile) if profile else None,
    }


@router.post("/me/profile", status_code=status.HTTP_201_CREATED)
async def create_profile(  # noqa: PLR0913
    request: Request,
    principal: Principal = Depends(current_principal),
    first_name: str = Form(default=""),
    last_name: str = Form(default=""),
    nickname: str = Form(default=""),
    birth_date: str = Form(default=""),
    gender: str = Form(default=""),
    email: str = Form(default=""),
    strengths: str = Form(default=""),
    past_activities: str = Form(default=""),
    photo: UploadFile | None = File(default=None),
) -> dict[str, object]:
    """Create the camper's profile from a multipart form."""
    container = _container(request)
    form = ProfileForm(
        first_name=first_name,
        last_name=last_name,
        nickname=nickname,
        birth_date=birth_date,
        gender=gender,
        email=email or principal.email or "",
        strengths=strengths,
        past_activities=past_activities,
    )
    profile_photo = None
    if photo is not None and photo.filename:
        profile_photo = ProfilePhoto(
            content=await photo.read(),
            filename=photo.filename,
            content_type=photo.content_type,
        )
    profile = container.profile_service.create_profile(
        principal.id, form, profile_photo
    )
    return {"profile": serialize_profile(profile)}


@router.get("/me/registration")
async def my_registration(
    request: Request, principal: Principal = Depends(current_principal)
) -> dict[str, object]:
    """Return the camper's latest registration, or null."""
    container = _container(request)
    registration = container.registration_service.get_my_registration(principal.id)
    return {
        "registration": serialize_registration(registration)
        if registration
        else None
    }


@router.get("/camps/{slug}/registration")
async def my_camp_registration(
    slug: str, request: Request, principal: Principal = Depends(current_principal)
) -> dict[str, object]:
    """Return the camper's registration for a camp and form defaults."""
    container = _container(request)
    profile = container.profile_service.require_profile(principal.id)
    registration = container.registration_service.get_registration_for_camp(
        principal.id, slug
    )
    return {
        "registration": serialize_registration(registration)
        if registration
        else None,
        "prefill": registration_prefill(profile),
    }


@router.post("/camps/{slug}/registrations", status_code=status.HTTP_201_CREATED)
async def submit_registration(
    slug: str,
    payload: RegistrationRequest,
    request: Request,
    principal: Principal = Depends(current_principal),
) -> dict[str, object]:
    """Submit the camper's registration for a camp."""
    container = _container(request)
    container.profile_service.require_profile(principal.id)
    camp = container.camp_service.require_open_camp(slug)
    registration = container.registration_service.submit_registration(
        principal.id,
        slug,
        payload.to_form(),
        email_required=camp.requires_email,
    )
    return {"registration": serialize_registration(registration)}
