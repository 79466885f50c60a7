"""Integration tests for the SQLAlchemy profile repository and gateway."""

from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import BackendError, ProfileNotFoundError
from domain.services.profile_gateway import ProfileGateway
from infrastructure.database.models import ProfileModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from tests.conftest import make_profile


class TestRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)
            created = await repo.create(make_profile(id=uuid4()))
            await session.commit()

        assert created.id is not None
        assert created.updated_at > 1_700_000_000_000
        assert created.interests == ["running", "cooking"]

    @pytest.mark.asyncio
    async def test_interests_stored_as_one_string(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)
            created = await repo.create(make_profile(interests=["cinema", "running"]))
            await session.commit()

            row = (
                await session.execute(select(ProfileModel).where(ProfileModel.id == created.id))
            ).scalar_one()

        assert row.interests == "cinema, running"

    @pytest.mark.asyncio
    async def test_get_by_id(self, session_factory: async_sessionmaker[AsyncSession]):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)
            created = await repo.create(make_profile())
            await session.commit()

            assert (await repo.get(created.id)).name == "Ann"
            assert await repo.get(uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)

            assert await repo.update(make_profile(id=uuid4())) is None
            assert await repo.update(make_profile()) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)

            assert await repo.delete(uuid4()) is False

    @pytest.mark.asyncio
    async def test_upsert_inserts_unknown_ids_and_updates_known(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)
            existing = await repo.create(make_profile(name="Before"))
            await session.commit()

        fresh_id = uuid4()
        async with session_factory() as session:
            repo = SQLAlchemyProfileRepository(session)
            result = await repo.upsert_many(
                [make_profile(id=existing.id, name="After"), make_profile(id=fresh_id, name="Fresh")]
            )
            await session.commit()

        assert [(p.id, p.name) for p in result] == [(existing.id, "After"), (fresh_id, "Fresh")]

        async with session_factory() as session:
            everyone = await SQLAlchemyProfileRepository(session).get_all()

        assert sorted(p.name for p in everyone) == ["After", "Fresh"]


class TestGateway:
    @pytest.mark.asyncio
    async def test_save_then_list(self, gateway: ProfileGateway):
        saved = await gateway.save(make_profile())

        listed = await gateway.list()

        assert [p.id for p in listed] == [saved.id]

    @pytest.mark.asyncio
    async def test_save_updates_existing(self, gateway: ProfileGateway):
        saved = await gateway.save(make_profile())
        saved.bio = "Updated bio"

        updated = await gateway.save(saved)

        assert updated.id == saved.id
        assert (await gateway.list())[0].bio == "Updated bio"

    @pytest.mark.asyncio
    async def test_save_unknown_id_is_not_found(self, gateway: ProfileGateway):
        with pytest.raises(ProfileNotFoundError):
            await gateway.save(make_profile(id=uuid4()))

        assert await gateway.list() == []

    @pytest.mark.asyncio
    async def test_remove_and_remove_all(self, gateway: ProfileGateway):
        first = await gateway.save(make_profile(name="A"))
        second = await gateway.save(make_profile(name="B"))
        third = await gateway.save(make_profile(name="C"))

        await gateway.remove(first.id)
        await gateway.remove(first.id)  # already gone
        await gateway.remove_all([second.id, third.id])

        assert await gateway.list() == []

    @pytest.mark.asyncio
    async def test_bulk_save_mixes_inserts_and_upserts(self, gateway: ProfileGateway):
        kept = await gateway.save(make_profile(name="Kept"))
        kept.name = "Kept v2"

        result = await gateway.bulk_save([make_profile(name="New"), kept])

        assert len(result) == 2
        assert all(p.id is not None for p in result)
        names = sorted(p.name for p in await gateway.list())
        assert names == ["Kept v2", "New"]

    @pytest.mark.asyncio
    async def test_constraint_violation_is_backend_error(self, gateway: ProfileGateway):
        with pytest.raises(BackendError):
            await gateway.bulk_save([make_profile(name=None)])

        assert await gateway.list() == []
