"""Directory state and the user actions that change it."""

import dataclasses
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

import orjson
import structlog

from core.config import ImportPolicy
from core.exceptions import (
    AppException,
    MalformedImportError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from domain.entities.profile import Profile, ProfileForm
from domain.services.formatting import DEFAULT_CONTACT_SUBJECT, contact_link
from domain.services.normalizer import ProfileSource, normalize
from domain.services.profile_gateway import ProfileGateway
from domain.services.query import DEFAULT_PAGE_SIZE, Page, ProfileQuery, query
from domain.services.validator import ensure_valid, validate

logger = structlog.get_logger()

FORM_FIELDS = frozenset(f.name for f in dataclasses.fields(ProfileForm))


class DirectoryController:
    """Owns the profile collection, the form and the current filters.

    The collection is only replaced after a gateway call has returned, so
    any failure leaves it exactly as it was before the action started.
    """

    def __init__(
        self,
        gateway: ProfileGateway,
        page_size: int = DEFAULT_PAGE_SIZE,
        import_policy: ImportPolicy = ImportPolicy.PERSIST,
        contact_subject: str = DEFAULT_CONTACT_SUBJECT,
    ) -> None:
        self._gateway = gateway
        self._import_policy = import_policy
        self._contact_subject = contact_subject
        self.profiles: List[Profile] = []
        self.form = ProfileForm.blank()
        self.filters = ProfileQuery(page_size=page_size)
        self.loading = False
        self.saving = False
        self.loaded = False
        self.error = ""

    # --- startup ---

    async def load(self) -> None:
        """Fetch the directory once; later calls do nothing."""
        if self.loaded or self.loading:
            return
        self.loading = True
        self.error = ""
        try:
            self.profiles = await self._gateway.list()
            logger.info("directory_loaded", count=len(self.profiles))
        except AppException as e:
            self.error = e.message or "Failed to load profiles"
            logger.warning("directory_load_failed", error=self.error)
        except Exception as e:
            # startup must survive misconfiguration the unit of work never sees
            self.error = str(e) or "Failed to load profiles"
            logger.error(
                "directory_load_failed",
                error=self.error,
                error_type=type(e).__name__,
                exc_info=True,
            )
        finally:
            self.loading = False
            self.loaded = True

    # --- form ---

    def set_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise ProfileValidationError(f"Unknown form field: {name}")
        setattr(self.form, name, value)

    def edit(self, profile_id: UUID) -> ProfileForm:
        """Load an existing profile into the form."""
        profile = self.find(profile_id)
        if profile is None:
            raise ProfileNotFoundError(str(profile_id))
        self.form = ProfileForm.from_profile(profile)
        return self.form

    def reset_form(self) -> None:
        self.form = ProfileForm.blank()

    async def submit(self, form: Optional[ProfileForm] = None) -> Profile:
        """Normalize, validate and save the form, then merge the result."""
        if form is not None:
            self.form = form
        profile = normalize(self.form.as_record(), ProfileSource.FORM)
        ensure_valid(profile)

        self.saving = True
        try:
            saved = await self._gateway.save(profile)
        finally:
            self.saving = False

        self._splice(saved)
        self.reset_form()
        return saved

    # --- deletion ---

    async def delete(self, profile_id: UUID, confirmed: bool = True) -> bool:
        """Delete one profile; returns False when the user did not confirm."""
        if not confirmed:
            return False
        await self._gateway.remove(profile_id)
        self.profiles = [p for p in self.profiles if p.id != profile_id]
        return True

    async def wipe_all(self, confirmed: bool = True) -> bool:
        """Delete every profile in the directory.

        On a failure partway through, rows already deleted in the backend
        are dropped locally and the rest are kept.
        """
        if not confirmed:
            return False
        ids = [p.id for p in self.profiles if p.id is not None]
        removed: Set[UUID] = set()
        try:
            await self._gateway.remove_all(ids, on_removed=removed.add)
        except Exception:
            self.profiles = [p for p in self.profiles if p.id not in removed]
            logger.warning(
                "directory_wipe_incomplete",
                removed=len(removed),
                remaining=len(self.profiles),
            )
            raise
        self.profiles = []
        self.reset_form()
        logger.info("directory_wiped", count=len(ids))
        return True

    # --- import / export ---

    async def import_file(self, data: bytes) -> List[Profile]:
        """Replace the directory with the profiles in a JSON export file."""
        try:
            records = orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise MalformedImportError(str(e)) from e
        if not isinstance(records, list):
            raise MalformedImportError()

        profiles = self._apply_import_policy(
            [normalize(record, ProfileSource.IMPORT) for record in records]
        )
        saved = await self._gateway.bulk_save(profiles)
        self.profiles = saved
        logger.info("profiles_imported", received=len(records), saved=len(saved))
        return saved

    def export_file(self) -> bytes:
        """Serialize the whole directory for download."""
        return orjson.dumps(
            [profile.to_export() for profile in self.profiles],
            option=orjson.OPT_INDENT_2,
        )

    # --- reads ---

    def find(self, profile_id: UUID) -> Optional[Profile]:
        return next((p for p in self.profiles if p.id == profile_id), None)

    def set_filters(self, **changes: Any) -> ProfileQuery:
        """Update filters; any change other than the page itself goes back to page 1."""
        if "page" not in changes:
            changes["page"] = 1
        self.filters = dataclasses.replace(self.filters, **changes)
        return self.filters

    def visible(self, criteria: Optional[ProfileQuery] = None) -> Page:
        """The slice of the directory the current filters select."""
        return query(self.profiles, criteria or self.filters)

    def contact_link(self, profile: Profile) -> str:
        return contact_link(profile.email, self._contact_subject)

    def state(self) -> Dict[str, Any]:
        return {
            "loading": self.loading,
            "saving": self.saving,
            "loaded": self.loaded,
            "error": self.error,
            "count": len(self.profiles),
        }

    # --- internals ---

    def _splice(self, saved: Profile) -> None:
        for index, existing in enumerate(self.profiles):
            if existing.id == saved.id:
                self.profiles[index] = saved
                return
        self.profiles.insert(0, saved)

    def _apply_import_policy(self, profiles: List[Profile]) -> List[Profile]:
        if self._import_policy is ImportPolicy.PERSIST:
            return profiles

        failures: Dict[int, str] = {}
        for index, profile in enumerate(profiles):
            reason = validate(profile)
            if reason:
                failures[index] = reason

        if not failures:
            return profiles
        if self._import_policy is ImportPolicy.REJECT:
            first = min(failures)
            raise ProfileValidationError(
                f"Import failed: record {first}: {failures[first]}",
                details={"invalid_records": failures},
            )

        logger.warning("import_records_skipped", count=len(failures))
        return [p for i, p in enumerate(profiles) if i not in failures]
