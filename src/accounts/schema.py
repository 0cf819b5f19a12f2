"""Schema for accounts module."""

import typing as t

from django.conf import settings
from ninja import ModelSchema, Schema
from pydantic import UUID4, EmailStr, Field, model_validator

from accounts.password_validation import validate_password
from common.schema import OneToOneFiftyString, StrippedString

from .models import FelicityUser, OrganizerProfile, ParticipantProfile


class FelicityUserSchema(ModelSchema):
    id: UUID4
    display_name: str

    class Meta:
        model = FelicityUser
        fields = ["email", "first_name", "last_name", "role"]


class ParticipantProfileSchema(ModelSchema):
    email: str

    class Meta:
        model = ParticipantProfile
        fields = ["first_name", "last_name", "participant_type", "college_or_org", "contact"]

    @staticmethod
    def resolve_email(obj: ParticipantProfile) -> str:
        return obj.user.email


class OrganizerProfileSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = OrganizerProfile
        fields = ["name", "category", "description", "contact_email"]


class PasswordMixin(Schema):
    password1: str = Field(..., description="Password", min_length=8, max_length=150)
    password2: str = Field(..., description="Password confirmation", min_length=8, max_length=150)

    @model_validator(mode="after")
    def password_match(self) -> t.Self:
        """Validate that the passwords match."""
        if self.password1 != self.password2:
            raise ValueError("Passwords do not match")
        return self


class ParticipantSignupSchema(PasswordMixin):
    email: EmailStr
    first_name: OneToOneFiftyString
    last_name: OneToOneFiftyString
    participant_type: ParticipantProfile.ParticipantType
    college_or_org: OneToOneFiftyString
    contact: t.Annotated[StrippedString, Field(min_length=5, max_length=20)]

    @model_validator(mode="after")
    def validate_iiit_domain(self) -> t.Self:
        """IIIT participants must sign up with an institute address."""
        from accounts.service.account import is_iiit_email

        if self.participant_type == ParticipantProfile.ParticipantType.IIIT and not is_iiit_email(self.email):
            raise ValueError(f"IIIT participants must use a valid @{settings.IIIT_EMAIL_DOMAIN} email address")
        return self

    @model_validator(mode="after")
    def validate_password(self) -> t.Self:
        """Validate the password."""
        tmp_user = FelicityUser(
            email=self.email, username=self.email, first_name=self.first_name, last_name=self.last_name
        )
        validate_password(self.password1, user=tmp_user)
        return self


class OrganizerCreateSchema(Schema):
    name: OneToOneFiftyString
    category: OneToOneFiftyString
    description: StrippedString = ""
    contact_email: EmailStr | None = None


class OrganizerAdminSchema(ModelSchema):
    id: UUID4
    email: str
    is_disabled: bool

    class Meta:
        model = OrganizerProfile
        fields = ["name", "category", "description", "contact_email"]

    @staticmethod
    def resolve_email(obj: OrganizerProfile) -> str:
        return obj.user.email

    @staticmethod
    def resolve_is_disabled(obj: OrganizerProfile) -> bool:
        return not obj.user.is_active


class OrganizerCreatedSchema(OrganizerAdminSchema):
    """Returned once on creation; the generated password is not stored in clear anywhere."""

    generated_password: str

    @staticmethod
    def resolve_generated_password(obj: OrganizerProfile) -> str:
        return getattr(obj, "generated_password", "")


class OrganizerDisableSchema(Schema):
    is_disabled: bool
