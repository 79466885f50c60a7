"""Hard requirements a profile must meet before it is saved."""

import re

from core.exceptions import ProfileValidationError
from domain.entities.profile import Profile

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def validate(profile: Profile) -> str | None:
    """Return the first failing rule's message, or None when the profile is valid."""
    if not profile.name.strip():
        return "Name is required"
    if not profile.email or not EMAIL_RE.fullmatch(profile.email):
        return "Valid email required"
    if not profile.native:
        return "Select native language"
    if not profile.practice:
        return "Select target language"
    return None


def ensure_valid(profile: Profile) -> None:
    """Raise ProfileValidationError if the profile breaks a rule."""
    reason = validate(profile)
    if reason:
        raise ProfileValidationError(reason)
