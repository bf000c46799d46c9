"""JSON views of domain objects."""

from datetime import datetime

from camp_registration.domain.audit import RegistrationEvent
from camp_registration.domain.camps import Camp, CampInquiry, CampQuestion
from camp_registration.domain.profiles import CamperProfile
from camp_registration.domain.registrations import ApplicationStats, CampRegistration
from camp_registration.services.camps import is_open, time_remaining


def serialize_registration(registration: CampRegistration) -> dict[str, object]:
    return {
        "id": str(registration.id),
        "camper_id": str(registration.camper_id),
        "camp_slug": registration.camp_slug,
        "first_name": registration.first_name,
        "last_name": registration.last_name,
        "nickname": registration.nickname,
        "gender": registration.gender,
        "birth_date": registration.birth_date.isoformat(),
        "email": registration.email,
        "answers": registration.answers,
        "status": registration.status.value,
        "comment": registration.comment,
        "certificate": registration.certificate,
        "certificate_url": registration.certificate_url,
        "created_at": registration.created_at.isoformat(),
        "submitted_at": registration.submitted_at.isoformat()
        if registration.submitted_at
        else None,
    }


def serialize_profile(profile: CamperProfile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "nickname": profile.nickname,
        "birth_date": profile.birth_date.isoformat(),
        "gender": profile.gender.value,
        "strengths": profile.strengths,
        "past_activities": profile.past_activities,
        "profile_url": profile.profile_url,
        "email": profile.email,
        "created_at": profile.created_at.isoformat(),
    }


def registration_prefill(profile: CamperProfile) -> dict[str, object]:
    """Registration form defaults taken from the camper's profile."""
    return {
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "nickname": profile.nickname,
        "gender": profile.gender.value,
        "birth_date": profile.birth_date.isoformat(),
        "email": profile.email,
    }


def serialize_camp(camp: Camp, now: datetime) -> dict[str, object]:
    countdown = time_remaining(camp, now)
    return {
        "id": str(camp.id),
        "slug": camp.slug,
        "title": camp.title,
        "description": camp.description,
        "cover_image_url": camp.cover_image_url,
        "status": camp.status.value,
        "start_date": camp.start_date.isoformat() if camp.start_date else None,
        "end_date": camp.end_date.isoformat() if camp.end_date else None,
        "registration_closes_at": camp.registration_closes_at.isoformat()
        if camp.registration_closes_at
        else None,
        "requires_email": camp.requires_email,
        "is_open": is_open(camp, now),
        "countdown": {
            "days": countdown.days,
            "hours": countdown.hours,
            "minutes": countdown.minutes,
            "seconds": countdown.seconds,
        },
    }


def serialize_question(question: CampQuestion) -> dict[str, object]:
    return {
        "id": str(question.id),
        "camp_slug": question.camp_slug,
        "prompt": question.prompt,
        "kind": question.kind.value,
        "required": question.required,
        "choices": question.choices,
        "position": question.position,
    }


def serialize_inquiry(inquiry: CampInquiry) -> dict[str, object]:
    return {
        "id": str(inquiry.id),
        "camp_slug": inquiry.camp_slug,
        "title": inquiry.title,
        "description": inquiry.description,
        "is_liked": inquiry.is_liked,
        "is_approved": inquiry.is_approved,
        "created_at": inquiry.created_at.isoformat(),
    }


def serialize_stats(stats: ApplicationStats) -> dict[str, object]:
    return {
        "total": stats.total,
        "pending": stats.pending,
        "approved": stats.approved,
        "declined": stats.declined,
        "certificates_enabled": stats.certificates_enabled,
        "by_camp": stats.by_camp,
    }


def serialize_event(event: RegistrationEvent) -> dict[str, object]:
    return {
        "id": str(event.id),
        "registration_id": str(event.registration_id),
        "event_type": event.event_type,
        "before": event.before,
        "after": event.after,
        "created_at": event.created_at.isoformat(),
    }
