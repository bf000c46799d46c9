"""Pydantic models for request bodies."""

from pydantic import BaseModel, Field

from camp_registration.domain.camps import QuestionDraft, QuestionKind
from camp_registration.domain.registrations import RegistrationForm, RegistrationStatus


class RegistrationRequest(BaseModel):
    """Registration form payload."""

    first_name: str = ""
    last_name: str = ""
    nickname: str = ""
    gender: str = ""
    birth_date: str = ""
    email: str | None = None
    answers: list[str] = Field(default_factory=list)

    def to_form(self) -> RegistrationForm:
        return RegistrationForm(
            first_name=self.first_name,
            last_name=self.last_name,
            nickname=self.nickname,
            gender=self.gender,
            birth_date=self.birth_date,
            email=self.email,
            answers=list(self.answers),
        )


class StatusUpdate(BaseModel):
    status: RegistrationStatus


class CommentUpdate(BaseModel):
    comment: str = ""


class CertificateFlagUpdate(BaseModel):
    enabled: bool


class CertificateUrlUpdate(BaseModel):
    certificate_url: str | None = None


class TemplateBroadcastRequest(BaseModel):
    template_url: str


class QuestionRequest(BaseModel):
    """Camp question payload."""

    prompt: str = ""
    kind: str = QuestionKind.TEXT.value
    required: bool = True
    choices: list[str] = Field(default_factory=list)
    position: int | None = Field(default=None, ge=0)

    def to_draft(self) -> QuestionDraft:
        return QuestionDraft(
            prompt=self.prompt,
            kind=self.kind,
            required=self.required,
            choices=list(self.choices),
            position=self.position,
        )
