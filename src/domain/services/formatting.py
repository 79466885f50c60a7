"""Display helpers for directory entries."""

from urllib.parse import quote

from domain.entities.profile import now_ms

DEFAULT_CONTACT_SUBJECT = "SayHello · Language Exchange"

# unreserved marks browsers leave unescaped in URI components
_URI_SAFE = "!*'()"


def contact_link(email: str, subject: str = DEFAULT_CONTACT_SUBJECT) -> str:
    """Build the mailto: link used to contact a match."""
    return f"mailto:{quote(email, safe=_URI_SAFE)}?subject={quote(subject, safe=_URI_SAFE)}"


def time_ago(updated_at: int, now: int | None = None) -> str:
    """Render an epoch-ms timestamp as a short relative age, e.g. "5m ago"."""
    current = now_ms() if now is None else now
    seconds = (current - updated_at) // 1000
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
