from decimal import Decimal

import pytest

from carrental.application.draft_session import DraftSessionStore
from carrental.domain.entities.draft import BookingDraft, DriveOption, VehicleRef
from carrental.infrastructure.in_memory.draft_storage import InMemoryDraftStorage
from carrental.infrastructure.storage.file_draft_storage import FileDraftStorage


@pytest.fixture
def storage() -> InMemoryDraftStorage:
    return InMemoryDraftStorage()


@pytest.fixture
def store(storage) -> DraftSessionStore:
    return DraftSessionStore(storage, session_key="session-1")


def fill_required(store: DraftSessionStore) -> None:
    store.update_vehicle(VehicleRef(id="V1", name="Toyota Vios", price_per_day=Decimal("4300")))
    store.update_renter_info(full_name="Maria Santos", email="a@b.com", phone_number="+639171234567")
    store.update_search_criteria(
        pickup_location="Cebu City", pickup_date="2026-02-10", return_date="2026-02-12"
    )
    store.update_drive_option("self-drive")


class TestDraftSessionStore:
    def test_init_session_creates_empty_draft(self, store, storage):
        draft = store.init_session()

        assert draft == BookingDraft()
        assert storage.get("session-1") is not None

    def test_init_session_keeps_existing_draft(self, store):
        store.update_renter_info(full_name="Maria")
        assert store.init_session().renter.full_name == "Maria"

    def test_updates_are_partial_merges(self, store):
        store.update_renter_info(full_name="Maria Santos")
        store.update_renter_info(email="a@b.com")

        renter = store.get_session().renter
        assert renter.full_name == "Maria Santos"
        assert renter.email == "a@b.com"

    def test_every_update_writes_through(self, storage):
        DraftSessionStore(storage, "session-1").update_search_criteria(pickup_location="Cebu City")

        reloaded = DraftSessionStore(storage, "session-1").get_session()
        assert reloaded.search.pickup_location == "Cebu City"

    def test_unknown_field_rejected(self, store):
        with pytest.raises(TypeError):
            store.update_renter_info(nickname="M")

    def test_drive_option_parsed(self, store):
        assert store.update_drive_option("with-driver").drive_option == DriveOption.WITH_DRIVER
        assert store.update_drive_option("bogus").drive_option == DriveOption.UNSET

    def test_dropoff_defaults_to_pickup(self, store):
        store.update_search_criteria(pickup_location="Cebu City")
        assert store.get_session().dropoff_location == "Cebu City"

    def test_agree_to_terms_is_noop_when_incomplete(self, store, storage):
        store.update_renter_info(full_name="Maria Santos")
        before = storage.get("session-1")

        assert store.agree_to_terms() is False
        assert storage.get("session-1") == before
        assert store.get_session().terms_agreed is False

    def test_agree_to_terms_only_checks_presence(self, store):
        fill_required(store)
        store.update_renter_info(email="not-an-email")

        assert store.agree_to_terms() is True
        assert store.get_session().terms_agreed is True

    def test_clear_session(self, store, storage):
        fill_required(store)
        store.clear_session()

        assert storage.get("session-1") is None
        assert store.get_session() == BookingDraft()

    def test_sessions_are_isolated(self, storage):
        first = DraftSessionStore(storage, "tab-a")
        second = DraftSessionStore(storage, "tab-b")
        first.update_renter_info(full_name="A")

        assert second.get_session().renter.full_name == ""


class TestFileDraftStorage:
    def test_draft_survives_new_store_instance(self, tmp_path):
        store = DraftSessionStore(FileDraftStorage(tmp_path), "session/1")
        fill_required(store)

        reloaded = DraftSessionStore(FileDraftStorage(tmp_path), "session/1").get_session()
        assert reloaded.vehicle.price_per_day == Decimal("4300")
        assert reloaded.drive_option == DriveOption.SELF_DRIVE
        assert reloaded.missing_fields() == []

    def test_corrupt_file_treated_as_missing(self, tmp_path):
        storage = FileDraftStorage(tmp_path)
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

        assert storage.get("broken") is None

    def test_remove_missing_key(self, tmp_path):
        FileDraftStorage(tmp_path).remove("nothing-here")
