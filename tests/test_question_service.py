"""Tests for camp question management and inquiries."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from camp_registration.domain.camps import CampInquiry, QuestionDraft, QuestionKind
from camp_registration.errors import InquiryNotFound, QuestionNotFound, ValidationError
from camp_registration.services.questions import QuestionService
from tests.conftest import InMemoryQuestionRepository


def _inquiry(title: str, *, liked: bool = False, age_days: int = 0) -> CampInquiry:
    return CampInquiry(
        id=uuid4(),
        camp_slug="spring-camp",
        title=title,
        description=f"About {title}",
        is_liked=liked,
        is_approved=False,
        created_at=datetime(2030, 1, 10, tzinfo=UTC) - timedelta(days=age_days),
    )


def test_add_question_appends_at_end() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    first = service.add_question("spring-camp", QuestionDraft(prompt="Why join?"))
    second = service.add_question(
        "spring-camp",
        QuestionDraft(prompt="T-shirt size", kind="choice", choices=["S", " ", "M"]),
    )

    assert first.position == 0
    assert second.position == 1
    assert second.kind == QuestionKind.CHOICE
    assert second.choices == ["S", "M"]
    assert [q.id for q in service.list_questions("spring-camp")] == [
        first.id,
        second.id,
    ]


def test_add_question_validates_draft() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    with pytest.raises(ValidationError) as excinfo:
        service.add_question("spring-camp", QuestionDraft(prompt=" ", kind="choice"))

    assert excinfo.value.fields == ["prompt", "choices"]


def test_add_question_rejects_unknown_kind() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    with pytest.raises(ValidationError) as excinfo:
        service.add_question("spring-camp", QuestionDraft(prompt="Hi", kind="essay"))

    assert excinfo.value.fields == ["kind"]


def test_update_and_delete_question() -> None:
    service = QuestionService(InMemoryQuestionRepository())
    question = service.add_question("spring-camp", QuestionDraft(prompt="Why?"))

    updated = service.update_question(
        question.id, QuestionDraft(prompt="Why this camp?", required=False)
    )
    service.delete_question(question.id)

    assert updated.prompt == "Why this camp?"
    assert updated.required is False
    assert service.list_questions("spring-camp") == []


def test_missing_question_raises() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    with pytest.raises(QuestionNotFound):
        service.update_question(uuid4(), QuestionDraft(prompt="Why?"))
    with pytest.raises(QuestionNotFound):
        service.delete_question(uuid4())


def test_list_inquiries_filters_by_view_and_search() -> None:
    repository = InMemoryQuestionRepository()
    old = _inquiry("Transport", liked=True, age_days=3)
    new = _inquiry("Food", liked=True)
    other = _inquiry("Laptop")
    for inquiry in (old, new, other):
        repository.inquiries[inquiry.id] = inquiry
    service = QuestionService(repository)

    liked = service.list_inquiries("spring-camp", view="liked")
    unliked = service.list_inquiries("spring-camp", view="unliked")
    searched = service.list_inquiries("spring-camp", search="laptop")

    assert [inquiry.id for inquiry in liked] == [new.id, old.id]
    assert [inquiry.id for inquiry in unliked] == [other.id]
    assert [inquiry.id for inquiry in searched] == [other.id]


def test_list_inquiries_rejects_unknown_view() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    with pytest.raises(ValidationError):
        service.list_inquiries("spring-camp", view="starred")


def test_toggle_inquiry_flags() -> None:
    repository = InMemoryQuestionRepository()
    inquiry = _inquiry("Transport")
    repository.inquiries[inquiry.id] = inquiry
    service = QuestionService(repository)

    liked = service.toggle_inquiry_like(inquiry.id)
    approved = service.toggle_inquiry_approval(inquiry.id)
    unliked = service.toggle_inquiry_like(inquiry.id)

    assert liked.is_liked is True
    assert approved.is_approved is True
    assert unliked.is_liked is False
    assert unliked.is_approved is True


def test_toggle_missing_inquiry_raises() -> None:
    service = QuestionService(InMemoryQuestionRepository())

    with pytest.raises(InquiryNotFound):
        service.toggle_inquiry_like(uuid4())
