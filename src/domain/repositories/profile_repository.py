"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_all(self) -> list[Profile]:
        """Get every profile in the directory."""
        ...

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile; the backend assigns its ID."""
        ...

    async def update(self, profile: Profile) -> Profile | None:
        """Update an existing profile by ID, or return None if it does not exist."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return whether a row was removed."""
        ...

    async def create_many(self, profiles: list[Profile]) -> list[Profile]:
        """Insert several new profiles."""
        ...

    async def upsert_many(self, profiles: list[Profile]) -> list[Profile]:
        """Insert or update several profiles keyed by their IDs."""
        ...
