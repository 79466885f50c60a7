"""Pydantic schemas for Profile API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import (
    AVAILABILITY_MAX_LENGTH,
    BIO_MAX_LENGTH,
    DEFAULT_LEVEL,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    Profile,
    ProfileForm,
)
from domain.services.formatting import time_ago
from domain.services.query import Page, SortKey


class ProfileFormBody(BaseModel):
    """Schema for submitting the profile form.

    Values are raw form text; normalization and validation happen
    server-side so the error messages match the directory's rules.
    """

    id: str = ""
    name: str = Field("", max_length=NAME_MAX_LENGTH)
    email: str = Field("", max_length=EMAIL_MAX_LENGTH)
    native: str = ""
    practice: str = ""
    level: str = DEFAULT_LEVEL
    availability: str = Field("", max_length=AVAILABILITY_MAX_LENGTH)
    interests: str = Field("", description="Comma-separated interests")
    bio: str = Field("", max_length=BIO_MAX_LENGTH)

    def to_form(self) -> ProfileForm:
        return ProfileForm(**self.model_dump())


class ProfileFormPatch(BaseModel):
    """Partial form update; only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    email: str | None = Field(None, max_length=EMAIL_MAX_LENGTH)
    native: str | None = None
    practice: str | None = None
    level: str | None = None
    availability: str | None = Field(None, max_length=AVAILABILITY_MAX_LENGTH)
    interests: str | None = None
    bio: str | None = Field(None, max_length=BIO_MAX_LENGTH)

    def changes(self) -> dict[str, str]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProfileFormResponse(BaseModel):
    """Current form contents."""

    data: ProfileFormBody


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-42d3-a456-426614174000",
                "name": "Ann",
                "email": "ann@example.com",
                "native": "English",
                "practice": "Spanish",
                "level": "B1",
                "availability": "Tue/Thu evenings",
                "interests": ["running", "cooking"],
                "bio": "Happy to help with English.",
                "updated_at": 1767225600000,
                "updated_ago": "2h ago",
                "contact_url": "mailto:ann%40example.com?subject=SayHello%20%C2%B7%20Language%20Exchange",
            }
        },
    )

    id: UUID | None
    name: str
    email: str
    native: str
    practice: str
    level: str
    availability: str
    interests: list[str]
    bio: str
    updated_at: int
    updated_ago: str
    contact_url: str

    @classmethod
    def from_entity(cls, profile: Profile, contact_url: str) -> "ProfileResponse":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            native=profile.native,
            practice=profile.practice,
            level=profile.level,
            availability=profile.availability,
            interests=list(profile.interests),
            bio=profile.bio,
            updated_at=profile.updated_at,
            updated_ago=time_ago(profile.updated_at),
            contact_url=contact_url,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfilePageResponse(BaseModel):
    """Schema for one page of the directory."""

    data: list[ProfileResponse]
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page, items: list[ProfileResponse]) -> "ProfilePageResponse":
        return cls(
            data=items,
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            total_pages=page.total_pages,
        )


class DirectoryOptionsResponse(BaseModel):
    """Choices offered by the form and the filter bar."""

    languages: list[str]
    levels: list[str]
    default_level: str
    sort_keys: list[SortKey]
