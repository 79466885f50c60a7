"""Profile domain entity."""

import re
import time
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

LANGUAGES: tuple[str, ...] = (
    "Arabic",
    "Chinese (Mandarin)",
    "Dutch",
    "English",
    "French",
    "German",
    "Italian",
    "Japanese",
    "Korean",
    "Polish",
    "Portuguese",
    "Romanian",
    "Russian",
    "Spanish",
    "Swedish",
    "Turkish",
)

LEVELS: tuple[str, ...] = ("A1", "A2", "B1", "B2", "C1", "C2")
DEFAULT_LEVEL = "B1"

NAME_MAX_LENGTH = 80
EMAIL_MAX_LENGTH = 120
AVAILABILITY_MAX_LENGTH = 120
BIO_MAX_LENGTH = 200
MAX_INTERESTS = 10

_RECORD_ID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def is_record_id(value: Any) -> bool:
    """Check whether a value names an existing backend record (canonical v4 UUID)."""
    if isinstance(value, UUID):
        value = str(value)
    return isinstance(value, str) and bool(_RECORD_ID_RE.match(value))


def parse_record_id(value: Any) -> UUID | None:
    """Decide once whether a profile is new (None) or an existing record."""
    if not is_record_id(value):
        return None
    return value if isinstance(value, UUID) else UUID(value)


@dataclass
class Profile:
    """Domain entity for a directory entry.

    ``id`` is None until the backend has assigned one.
    """

    name: str
    email: str
    native: str
    practice: str
    id: UUID | None = None
    level: str = DEFAULT_LEVEL
    availability: str = ""
    interests: list[str] = field(default_factory=list)
    bio: str = ""
    updated_at: int = field(default_factory=now_ms)

    @property
    def is_new(self) -> bool:
        return self.id is None

    def to_export(self) -> dict[str, Any]:
        """Full profile shape as written to an export file."""
        return {
            "id": str(self.id) if self.id else "",
            "name": self.name,
            "email": self.email,
            "native": self.native,
            "practice": self.practice,
            "level": self.level,
            "availability": self.availability,
            "interests": list(self.interests),
            "bio": self.bio,
            "updatedAt": self.updated_at,
        }


@dataclass
class ProfileForm:
    """Editable form contents; every field is raw text."""

    id: str = ""
    name: str = ""
    email: str = ""
    native: str = ""
    practice: str = ""
    level: str = DEFAULT_LEVEL
    availability: str = ""
    interests: str = ""
    bio: str = ""

    @classmethod
    def blank(cls) -> "ProfileForm":
        return cls()

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileForm":
        """Load a saved profile back into the form for editing."""
        return cls(
            id=str(profile.id) if profile.id else "",
            name=profile.name,
            email=profile.email,
            native=profile.native,
            practice=profile.practice,
            level=profile.level or DEFAULT_LEVEL,
            availability=profile.availability or "",
            interests=", ".join(profile.interests),
            bio=profile.bio or "",
        )

    def as_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "native": self.native,
            "practice": self.practice,
            "level": self.level,
            "availability": self.availability,
            "interests": self.interests,
            "bio": self.bio,
        }
