"""Draft session store: the booking-in-progress owned by one browser session."""

import logging
from dataclasses import fields, replace
from typing import Any

from carrental.application.interfaces.draft_storage import DraftStorage
from carrental.domain.entities.draft import (
    BookingDraft,
    DriveOption,
    RenterInfo,
    SearchCriteria,
    VehicleRef,
)

logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "bookingSession"


class DraftSessionStore:
    """
    Partial-merge accessor over a single draft.

    Every update writes through to storage immediately. Instances are created
    per session and injected where needed.
    """

    def __init__(self, storage: DraftStorage, session_key: str = DEFAULT_SESSION_KEY):
        self._storage = storage
        self._session_key = session_key

    @property
    def session_key(self) -> str:
        return self._session_key

    def init_session(self) -> BookingDraft:
        """Returns the stored draft, creating an empty one if none exists."""
        stored = self._storage.get(self._session_key)
        if stored is not None:
            return BookingDraft.from_dict(stored)
        draft = BookingDraft()
        self._save(draft)
        return draft

    def get_session(self) -> BookingDraft:
        return BookingDraft.from_dict(self._storage.get(self._session_key))

    def update_vehicle(self, vehicle: VehicleRef | None) -> BookingDraft:
        draft = replace(self.get_session(), vehicle=vehicle)
        return self._save(draft)

    def update_renter_info(self, **changes: Any) -> BookingDraft:
        draft = self.get_session()
        draft.renter = _merge(draft.renter, changes)
        return self._save(draft)

    def update_search_criteria(self, **changes: Any) -> BookingDraft:
        draft = self.get_session()
        draft.search = _merge(draft.search, changes)
        return self._save(draft)

    def update_drive_option(self, option: DriveOption | str) -> BookingDraft:
        draft = replace(self.get_session(), drive_option=DriveOption.parse(option))
        return self._save(draft)

    def agree_to_terms(self) -> bool:
        """
        Marks the terms as agreed.

        Only checks that the required fields are present. When any is empty,
        nothing is written and False is returned.
        """
        draft = self.get_session()
        missing = draft.missing_fields()
        if missing:
            logger.debug(
                "Terms not recorded, draft incomplete",
                extra={"session_key": self._session_key, "missing": missing},
            )
            return False
        draft.terms_agreed = True
        self._save(draft)
        return True

    def clear_session(self) -> None:
        self._storage.remove(self._session_key)

    def _save(self, draft: BookingDraft) -> BookingDraft:
        self._storage.set(self._session_key, draft.to_dict())
        return draft


def _merge(current: RenterInfo | SearchCriteria, changes: dict[str, Any]):
    known = {f.name for f in fields(current)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Unknown fields for {type(current).__name__}: {sorted(unknown)}")
    values = {name: "" if value is None else str(value) for name, value in changes.items()}
    return replace(current, **values)
