"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import DEFAULT_LEVEL, LEVELS, Profile, now_ms
from domain.services.normalizer import split_interests
from infrastructure.database.models import ProfileModel, utcnow

INTERESTS_SEPARATOR = ", "


def interests_to_column(interests: list[str]) -> str:
    """Join interests into the single delimited string the table stores."""
    return INTERESTS_SEPARATOR.join(interests)


def interests_from_column(value: str | None) -> list[str]:
    """Split the stored interests string back into trimmed, non-empty pieces."""
    if not isinstance(value, str) or not value:
        return []
    return split_interests(value)


def timestamp_to_ms(value: datetime | None) -> int:
    """Convert a row's update time to epoch milliseconds (now if absent)."""
    if value is None:
        return now_ms()
    if value.tzinfo is None:
        # SQLite hands back naive datetimes; they are stored as UTC
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_all(self) -> list[Profile]:
        """Get every profile in the directory."""
        result = await self._session.execute(select(ProfileModel))
        return [self._to_entity(model) for model in result.scalars()]

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        model = await self._session.get(ProfileModel, id)
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile; any ID on the entity is ignored."""
        model = self._to_model(profile, with_id=False)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile | None:
        """Update an existing profile by ID."""
        if profile.id is None:
            return None
        model = await self._session.get(ProfileModel, profile.id)
        if not model:
            return None

        self._apply(model, profile)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        model = await self._session.get(ProfileModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def create_many(self, profiles: list[Profile]) -> list[Profile]:
        """Insert several new profiles."""
        models = [self._to_model(profile, with_id=False) for profile in profiles]
        self._session.add_all(models)
        await self._session.flush()
        for model in models:
            await self._session.refresh(model)
        return [self._to_entity(model) for model in models]

    async def upsert_many(self, profiles: list[Profile]) -> list[Profile]:
        """Insert or update several profiles keyed by their IDs."""
        models = []
        for profile in profiles:
            model = await self._session.get(ProfileModel, profile.id)
            if model:
                self._apply(model, profile)
            else:
                model = self._to_model(profile, with_id=True)
                self._session.add(model)
            models.append(model)

        await self._session.flush()
        for model in models:
            await self._session.refresh(model)
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _apply(model: ProfileModel, profile: Profile) -> None:
        model.name = profile.name
        model.email = profile.email
        model.native = profile.native
        model.practice = profile.practice
        model.level = profile.level if profile.level in LEVELS else DEFAULT_LEVEL
        model.availability = profile.availability
        model.interests = interests_to_column(profile.interests)
        model.bio = profile.bio
        model.updated_at = utcnow()

    def _to_model(self, profile: Profile, with_id: bool) -> ProfileModel:
        model = ProfileModel()
        if with_id and profile.id is not None:
            model.id = profile.id
        self._apply(model, profile)
        return model

    def _to_entity(self, model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            name=model.name,
            email=model.email,
            native=model.native,
            practice=model.practice,
            level=model.level,
            availability=model.availability or "",
            interests=interests_from_column(model.interests),
            bio=model.bio or "",
            updated_at=timestamp_to_ms(model.updated_at),
        )
