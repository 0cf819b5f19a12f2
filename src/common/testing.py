"""Helpers shared by the test suites of every app.

Only imported from tests; ``faker`` comes from the ``test`` extra.
"""

import secrets
import string
import typing as t

import faker
from django.test.client import Client
from ninja_jwt.tokens import RefreshToken

from accounts.models import FelicityUser, OrganizerProfile, ParticipantProfile


class FelicityUserFactory:
    """Factory for creating FelicityUser instances with their profiles."""

    fake = faker.Faker()

    def _email(self, domain: str) -> str:
        return "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)) + f"@{domain}"

    def create_user(self, **kwargs: t.Any) -> FelicityUser:
        email = kwargs.pop("email", self._email("example.com"))
        return FelicityUser.objects.create_user(
            username=kwargs.pop("username", email),
            email=email,
            password=kwargs.pop("password", "password"),
            first_name=kwargs.pop("first_name", self.fake.first_name()),
            last_name=kwargs.pop("last_name", self.fake.last_name()),
            **kwargs,
        )

    def participant(
        self, participant_type: str = ParticipantProfile.ParticipantType.NON_IIIT, **kwargs: t.Any
    ) -> FelicityUser:
        if "email" not in kwargs and participant_type == ParticipantProfile.ParticipantType.IIIT:
            kwargs["email"] = self._email("students.iiit.ac.in")
        user = self.create_user(role=FelicityUser.Role.PARTICIPANT, **kwargs)
        ParticipantProfile.objects.create(
            user=user,
            first_name=user.first_name,
            last_name=user.last_name,
            participant_type=participant_type,
            college_or_org=self.fake.company()[:255],
            contact="9876543210",
        )
        return user

    def organizer(self, **kwargs: t.Any) -> FelicityUser:
        user = self.create_user(role=FelicityUser.Role.ORGANIZER, **kwargs)
        OrganizerProfile.objects.create(
            user=user, name=self.fake.company()[:255], category="Cultural", contact_email=user.email
        )
        return user

    def __call__(self, **kwargs: t.Any) -> FelicityUser:
        return self.create_user(**kwargs)


def auth_client(user: FelicityUser) -> Client:
    """API client authenticated with a fresh access token for ``user``."""
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]
