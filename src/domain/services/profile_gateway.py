"""Persistence gateway between in-memory profiles and the backend."""

from typing import Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileGateway:
    """Create, update, delete, list and bulk-save profiles.

    Every call runs in its own unit of work, so a failure leaves nothing
    half-written and surfaces to the caller before any local state changes.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list(self) -> List[Profile]:
        """Fetch every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()

    async def save(self, profile: Profile) -> Profile:
        """Update by id for existing records, insert otherwise."""
        async with self._uow_factory() as uow:
            if profile.id is not None:
                saved = await uow.profiles.update(profile)
                if saved is None:
                    raise ProfileNotFoundError(str(profile.id))
            else:
                saved = await uow.profiles.create(profile)
            await uow.commit()

        logger.info("profile_saved", profile_id=str(saved.id), created=profile.id is None)
        return saved

    async def remove(self, profile_id: UUID) -> None:
        """Delete one profile. A missing row is not an error."""
        async with self._uow_factory() as uow:
            deleted = await uow.profiles.delete(profile_id)
            await uow.commit()

        if deleted:
            logger.info("profile_deleted", profile_id=str(profile_id))
        else:
            logger.warning("profile_delete_no_match", profile_id=str(profile_id))

    async def remove_all(
        self,
        profile_ids: List[UUID],
        on_removed: Optional[Callable[[UUID], None]] = None,
    ) -> None:
        """Delete profiles one request at a time, stopping at the first failure.

        ``on_removed`` is called after each successful delete, so a caller
        can tell which rows are gone when a later one fails.
        """
        for profile_id in profile_ids:
            await self.remove(profile_id)
            if on_removed is not None:
                on_removed(profile_id)

    async def bulk_save(self, profiles: List[Profile]) -> List[Profile]:
        """Upsert profiles that carry an id and insert the rest, in one transaction."""
        if not profiles:
            return []

        existing = [p for p in profiles if p.id is not None]
        new = [p for p in profiles if p.id is None]

        results: List[Profile] = []
        async with self._uow_factory() as uow:
            if existing:
                results.extend(await uow.profiles.upsert_many(existing))
            if new:
                results.extend(await uow.profiles.create_many(new))
            await uow.commit()

        logger.info(
            "profiles_bulk_saved",
            upserted=len(existing),
            inserted=len(new),
        )
        return results
