"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.directory_controller import DirectoryController
from domain.services.profile_gateway import ProfileGateway
from infrastructure.database.session import get_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances.

    The session factory is resolved per call, so a missing backend
    configuration fails the request rather than application startup.
    """

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(get_session_factory())

    return factory


@lru_cache
def get_profile_gateway() -> ProfileGateway:
    """Get Profile gateway instance."""
    return ProfileGateway(get_uow_factory())


@lru_cache
def get_directory_controller() -> DirectoryController:
    """Get the process-wide directory controller."""
    return DirectoryController(
        get_profile_gateway(),
        page_size=settings.page_size,
        import_policy=settings.import_policy,
        contact_subject=settings.contact_subject,
    )
