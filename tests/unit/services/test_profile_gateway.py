"""Unit tests for ProfileGateway."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import BackendError, ProfileNotFoundError
from domain.services.profile_gateway import ProfileGateway
from tests.conftest import make_profile
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def gateway(uow: FakeUnitOfWork) -> ProfileGateway:
    return ProfileGateway(lambda: uow)


# --- list ---


class TestList:
    @pytest.mark.asyncio
    async def test_returns_all_profiles(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        uow.profiles.get_all.return_value = [make_profile(id=uuid4())]

        result = await gateway.list()

        assert len(result) == 1
        assert uow.committed is False

    @pytest.mark.asyncio
    async def test_propagates_backend_error(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        uow.profiles.get_all.side_effect = BackendError("connection refused")

        with pytest.raises(BackendError):
            await gateway.list()


# --- save ---


class TestSave:
    @pytest.mark.asyncio
    async def test_inserts_new_profile(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        profile = make_profile()
        created = make_profile(id=uuid4())
        uow.profiles.create.return_value = created

        result = await gateway.save(profile)

        assert result is created
        uow.profiles.create.assert_called_once_with(profile)
        uow.profiles.update.assert_not_called()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_updates_existing_profile(
        self, gateway: ProfileGateway, uow: FakeUnitOfWork, profile_id: UUID
    ):
        profile = make_profile(id=profile_id, name="Ann B")
        uow.profiles.update.return_value = profile

        result = await gateway.save(profile)

        assert result.name == "Ann B"
        uow.profiles.update.assert_called_once_with(profile)
        uow.profiles.create.assert_not_called()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_row_raises_not_found(
        self, gateway: ProfileGateway, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.profiles.update.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await gateway.save(make_profile(id=profile_id))

        assert not uow.committed


# --- remove ---


class TestRemove:
    @pytest.mark.asyncio
    async def test_deletes_by_id(self, gateway: ProfileGateway, uow: FakeUnitOfWork, profile_id: UUID):
        uow.profiles.delete.return_value = True

        await gateway.remove(profile_id)

        uow.profiles.delete.assert_called_once_with(profile_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_missing_row_is_not_an_error(
        self, gateway: ProfileGateway, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.profiles.delete.return_value = False

        await gateway.remove(profile_id)

        assert uow.committed

    @pytest.mark.asyncio
    async def test_remove_all_is_sequential(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        ids = [uuid4(), uuid4(), uuid4()]
        uow.profiles.delete.return_value = True

        await gateway.remove_all(ids)

        assert [c.args[0] for c in uow.profiles.delete.call_args_list] == ids
        assert uow.entered == 3

    @pytest.mark.asyncio
    async def test_remove_all_stops_at_first_failure(
        self, gateway: ProfileGateway, uow: FakeUnitOfWork
    ):
        ids = [uuid4(), uuid4(), uuid4()]
        uow.profiles.delete.side_effect = [True, BackendError(), True]

        with pytest.raises(BackendError):
            await gateway.remove_all(ids)

        assert uow.profiles.delete.call_count == 2

    @pytest.mark.asyncio
    async def test_remove_all_reports_each_deleted_id(
        self, gateway: ProfileGateway, uow: FakeUnitOfWork
    ):
        ids = [uuid4(), uuid4(), uuid4()]
        uow.profiles.delete.side_effect = [True, BackendError(), True]
        removed: list[UUID] = []

        with pytest.raises(BackendError):
            await gateway.remove_all(ids, on_removed=removed.append)

        assert removed == ids[:1]


# --- bulk_save ---


class TestBulkSave:
    @pytest.mark.asyncio
    async def test_empty_input_skips_backend(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        result = await gateway.bulk_save([])

        assert result == []
        assert uow.entered == 0

    @pytest.mark.asyncio
    async def test_partitions_by_id(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        existing = make_profile(id=uuid4(), name="Old")
        new = make_profile(name="New")
        stored_new = make_profile(id=uuid4(), name="New")
        uow.profiles.upsert_many.return_value = [existing]
        uow.profiles.create_many.return_value = [stored_new]

        result = await gateway.bulk_save([new, existing])

        uow.profiles.upsert_many.assert_called_once_with([existing])
        uow.profiles.create_many.assert_called_once_with([new])
        assert [p.name for p in result] == ["Old", "New"]
        assert all(p.id is not None for p in result)
        assert uow.entered == 1
        assert uow.committed

    @pytest.mark.asyncio
    async def test_only_new_profiles(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        uow.profiles.create_many.return_value = [make_profile(id=uuid4())]

        await gateway.bulk_save([make_profile()])

        uow.profiles.upsert_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_does_not_commit(self, gateway: ProfileGateway, uow: FakeUnitOfWork):
        uow.profiles.create_many.side_effect = BackendError("duplicate key")

        with pytest.raises(BackendError):
            await gateway.bulk_save([make_profile()])

        assert not uow.committed
