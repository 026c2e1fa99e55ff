"""User directory: registration, lookup and search."""
from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable, Iterable, Literal

from email_validator import EmailNotValidError, validate_email

from ..errors import InvalidInputError, NotFoundError
from ..models import User
from .notifier import ChangeNotifier

logger = logging.getLogger(__name__)

SearchField = Literal["name", "id", "major", "email"]

SAMPLE_STUDENTS: tuple[tuple[str, str, str, str], ...] = (
    ("200578934", "John Smith", "smit2090@mylaurier.ca", "Computer Science"),
    ("200512345", "Emma Wilson", "wils1234@mylaurier.ca", "Business"),
    ("200598765", "Michael Brown", "brow5678@mylaurier.ca", "Psychology"),
)

_FIELD_GETTERS: dict[str, Callable[[User], str]] = {
    "name": lambda user: user.full_name,
    "id": lambda user: user.id,
    "major": lambda user: user.major,
    "email": lambda user: user.email,
}


def _clean(value: str | None) -> str:
    return (value or "").strip()


class UserDirectory:
    """Searchable collection of user records kept in registration order."""

    def __init__(self, *, email_suffix: str = "@mylaurier.ca", notifier: ChangeNotifier | None = None) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._email_suffix = email_suffix.lower()
        self._notifier = notifier

    def validate_email(self, email: str | None) -> str:
        candidate = _clean(email).lower()
        if not candidate:
            raise InvalidInputError("Please enter your email address")
        try:
            candidate = validate_email(candidate, check_deliverability=False).normalized.lower()
        except EmailNotValidError as exc:
            raise InvalidInputError(f"Invalid email address: {exc}") from exc
        if not candidate.endswith(self._email_suffix):
            raise InvalidInputError(f"Please use your {self._email_suffix} email address")
        return candidate

    def register(
        self,
        *,
        email: str,
        full_name: str,
        major: str,
        user_id: str | None = None,
    ) -> User:
        normalized_email = self.validate_email(email)
        name = _clean(full_name)
        major_value = _clean(major)
        if not name:
            raise InvalidInputError("Full name is required")
        if not major_value:
            raise InvalidInputError("Major is required")

        with self._lock:
            if self._find_by_email(normalized_email) is not None:
                raise InvalidInputError("An account with this email already exists")
            identifier = user_id or str(uuid.uuid4())
            if identifier in self._users:
                raise InvalidInputError("User id already registered")
            user = User(id=identifier, full_name=name, email=normalized_email, major=major_value)
            self._users[identifier] = user

        logger.info("Registered user %s", identifier)
        self._publish("user.registered", user_id=identifier)
        return user

    def seed(self, records: Iterable[tuple[str, str, str, str]] = SAMPLE_STUDENTS) -> list[User]:
        """Add sample records, skipping any whose id is already present."""
        added: list[User] = []
        for user_id, full_name, email, major in records:
            if self.contains(user_id):
                continue
            added.append(self.register(email=email, full_name=full_name, major=major, user_id=user_id))
        return added

    def contains(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._users

    def get(self, user_id: str) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._find_by_email(_clean(email).lower())

    def _find_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def all(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def search(self, query: str | None, field: SearchField = "name") -> list[User]:
        """Case-insensitive substring match over ``field`` in directory order."""
        getter = _FIELD_GETTERS.get(field)
        if getter is None:
            raise InvalidInputError(f"Unknown search field '{field}'")
        needle = _clean(query).lower()
        users = self.all()
        if not needle:
            return users
        return [user for user in users if needle in getter(user).lower()]

    def by_name(self, query: str | None) -> list[User]:
        return self.search(query, "name")

    def by_id(self, query: str | None) -> list[User]:
        return self.search(query, "id")

    def by_major(self, query: str | None) -> list[User]:
        return self.search(query, "major")

    def by_email(self, query: str | None) -> list[User]:
        return self.search(query, "email")

    def update_profile(self, user_id: str, *, full_name: str | None = None, major: str | None = None) -> User:
        with self._lock:
            user = self.get(user_id)
            if full_name is not None:
                name = _clean(full_name)
                if not name:
                    raise InvalidInputError("Full name is required")
                user.full_name = name
            if major is not None:
                major_value = _clean(major)
                if not major_value:
                    raise InvalidInputError("Major is required")
                user.major = major_value
        self._publish("user.updated", user_id=user_id)
        return user

    def update_avatar(self, user_id: str, avatar: bytes) -> User:
        if not avatar:
            raise InvalidInputError("Avatar image is empty")
        with self._lock:
            user = self.get(user_id)
            user.avatar = bytes(avatar)
        self._publish("user.avatar_updated", user_id=user_id)
        return user

    def _publish(self, type_: str, **payload: object) -> None:
        if self._notifier is not None:
            self._notifier.publish("directory", type_, **payload)


__all__ = ["SAMPLE_STUDENTS", "SearchField", "UserDirectory"]
