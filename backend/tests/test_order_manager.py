import random

import pytest

from portfolio.application.sections import ReorderGate, SectionOrderManager, SectionStore
from portfolio.data import DataAccessClient
from portfolio.domain.exceptions import DataAccessError, RecordNotFound, ValidationError
from portfolio.domain.sections import ReorderState
from portfolio.extensions import db


class FailingUpdateClient(DataAccessClient):
    """Raises on the n-th update call."""

    def __init__(self, *args, fail_on_update, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_on_update = fail_on_update
        self.update_calls = 0

    def update(self, collection, record_id, changes):
        self.update_calls += 1
        if self.update_calls == self.fail_on_update:
            raise DataAccessError("simulated write failure")
        return super().update(collection, record_id, changes)


class OfflineClient(DataAccessClient):
    def select(self, collection, *args, **kwargs):
        raise DataAccessError("offline")


def stored_order(client):
    rows = client.select("sections", order_by="order_index")
    return {row["name"]: row["order_index"] for row in rows}


def manager_for(client, **kwargs):
    manager = SectionOrderManager(client, SectionStore(client), **kwargs)
    manager.list_sections()
    return manager


def test_list_sections_sorted_by_order_index(data_client):
    data_client.insert("sections", {"name": "Contact", "is_visible": True, "order_index": 2})
    data_client.insert("sections", {"name": "Hero", "is_visible": True, "order_index": 0})
    data_client.insert("sections", {"name": "About", "is_visible": False, "order_index": 1})

    manager = SectionOrderManager(data_client, SectionStore(data_client))
    sections = manager.list_sections()

    assert [s.name for s in sections] == ["Hero", "About", "Contact"]
    assert sections[1].is_visible is False


def test_list_sections_surfaces_failure(app, storage):
    client = OfflineClient(db.session, storage)
    manager = SectionOrderManager(client, SectionStore(client))

    with pytest.raises(DataAccessError):
        manager.list_sections()


def test_move_down_swaps_and_reconciles(data_client, make_sections):
    make_sections("Hero", "About", "Skills")
    seen = {}

    def capture(state):
        if state is ReorderState.PERSISTING_FIRST:
            seen["optimistic"] = [s.name for s in manager.store.sections]

    manager = manager_for(data_client, on_transition=capture)
    result = manager.move_section(1, "down")

    assert seen["optimistic"] == ["Hero", "Skills", "About"]
    assert result.status == "moved"
    assert [s.name for s in result.sections] == ["Hero", "Skills", "About"]
    assert stored_order(data_client) == {"Hero": 0, "Skills": 1, "About": 2}


def test_move_runs_through_every_state(data_client, make_sections):
    make_sections("Hero", "About", "Skills")
    manager = manager_for(data_client)

    manager.move_section(2, "up")

    assert manager.transitions == [
        ReorderState.SWAPPING,
        ReorderState.PERSISTING_FIRST,
        ReorderState.PERSISTING_SECOND,
        ReorderState.RECONCILING,
        ReorderState.IDLE,
    ]
    assert manager.state is ReorderState.IDLE
    assert not manager.gate.held


@pytest.mark.parametrize("index, direction", [(0, "up"), (2, "down")])
def test_move_at_boundary_is_a_no_op(data_client, make_sections, index, direction):
    make_sections("Hero", "About", "Skills")
    manager = manager_for(data_client)
    before = list(manager.store.sections)

    result = manager.move_section(index, direction)

    assert result.status == "boundary"
    assert result.sections == before
    assert manager.transitions == []
    assert stored_order(data_client) == {"Hero": 0, "About": 1, "Skills": 2}


def test_move_rejects_bad_input(data_client, make_sections):
    make_sections("Hero", "About")
    manager = manager_for(data_client)

    with pytest.raises(ValidationError):
        manager.move_section(5, "down")
    with pytest.raises(ValidationError):
        manager.move_section(0, "sideways")


def test_move_while_another_in_flight_is_rejected(data_client, make_sections):
    make_sections("Hero", "About", "Skills", "Blog")
    nested = []

    def interfere(state):
        if state is ReorderState.PERSISTING_FIRST and not nested:
            nested.append(manager.move_section(2, "down"))

    manager = manager_for(data_client, on_transition=interfere)
    result = manager.move_section(0, "down")

    assert nested[0].status == "rejected"
    assert not nested[0].accepted
    assert result.status == "moved"
    assert stored_order(data_client) == {"About": 0, "Hero": 1, "Skills": 2, "Blog": 3}


def test_gate_is_shared_between_managers(data_client, make_sections):
    make_sections("Hero", "About")
    gate = ReorderGate()
    assert gate.try_acquire()

    result = manager_for(data_client, gate=gate).move_section(0, "down")

    assert result.status == "rejected"
    assert stored_order(data_client) == {"Hero": 0, "About": 1}
    gate.release()


def test_failed_second_write_rolls_back_first(app, storage, make_sections):
    make_sections("Hero", "About", "Skills")
    client = FailingUpdateClient(db.session, storage, fail_on_update=2)
    manager = manager_for(client)

    result = manager.move_section(0, "down")

    assert result.status == "reverted"
    assert [s.name for s in result.sections] == ["Hero", "About", "Skills"]
    # Both writes share one transaction, so the first never lands on its own
    assert stored_order(client) == {"Hero": 0, "About": 1, "Skills": 2}
    assert manager.transitions == [
        ReorderState.SWAPPING,
        ReorderState.PERSISTING_FIRST,
        ReorderState.PERSISTING_SECOND,
        ReorderState.RECONCILING,
        ReorderState.IDLE,
    ]
    assert not manager.gate.held


def test_failed_first_write_skips_to_reconciling(app, storage, make_sections):
    make_sections("Hero", "About", "Skills")
    client = FailingUpdateClient(db.session, storage, fail_on_update=1)
    manager = manager_for(client)

    result = manager.move_section(1, "up")

    assert result.status == "reverted"
    assert manager.transitions == [
        ReorderState.SWAPPING,
        ReorderState.PERSISTING_FIRST,
        ReorderState.RECONCILING,
        ReorderState.IDLE,
    ]
    assert [s.name for s in manager.store.sections] == ["Hero", "About", "Skills"]


def test_random_moves_keep_order_index_a_permutation(data_client, make_sections):
    names = ["Hero", "About", "Skills", "Projects", "Blog", "Contact"]
    make_sections(*names)
    manager = manager_for(data_client)
    rng = random.Random(7)

    for _ in range(40):
        index = rng.randrange(len(names))
        manager.move_section(index, rng.choice(["up", "down"]))

        stored = stored_order(data_client)
        assert sorted(stored.values()) == list(range(len(names)))
        assert [s.name for s in manager.store.sections] == sorted(stored, key=stored.get)


def test_toggle_visibility_round_trip(data_client, make_sections):
    records = make_sections("Hero", "About")
    manager = manager_for(data_client)
    hero_id = records[0]["id"]

    first = manager.toggle_visibility(hero_id)
    assert first.is_visible is False
    assert data_client.get("sections", hero_id)["is_visible"] is False

    second = manager.toggle_visibility(hero_id)
    assert second.is_visible is True
    assert data_client.get("sections", hero_id)["is_visible"] is True
    assert stored_order(data_client) == {"Hero": 0, "About": 1}


def test_toggle_visibility_failure_returns_stored_state(app, storage, make_sections):
    records = make_sections("Hero")
    client = FailingUpdateClient(db.session, storage, fail_on_update=1)
    manager = manager_for(client)

    section = manager.toggle_visibility(records[0]["id"])

    assert section.is_visible is True
    assert client.get("sections", records[0]["id"])["is_visible"] is True


def test_toggle_unknown_section(data_client, make_sections):
    make_sections("Hero")
    manager = manager_for(data_client)

    with pytest.raises(RecordNotFound):
        manager.toggle_visibility("missing-id")


def test_duplicate_order_index_is_reported(data_client):
    data_client.insert("sections", {"name": "Hero", "is_visible": True, "order_index": 0})
    data_client.insert("sections", {"name": "About", "is_visible": True, "order_index": 1})
    data_client.insert("sections", {"name": "Blog", "is_visible": True, "order_index": 1})

    store = SectionStore(data_client)
    store.refresh()

    assert list(store.conflicts) == [1]
    assert sorted(store.conflicts[1]) == ["About", "Blog"]


def test_move_between_shared_indexes_writes_nothing(data_client):
    data_client.insert("sections", {"name": "Hero", "is_visible": True, "order_index": 0})
    data_client.insert("sections", {"name": "About", "is_visible": True, "order_index": 1})
    data_client.insert("sections", {"name": "Blog", "is_visible": True, "order_index": 1})
    client = FailingUpdateClient(data_client.session, data_client.storage, fail_on_update=0)
    manager = manager_for(client)

    result = manager.move_section(1, "down")

    assert result.status == "unchanged"
    assert not result.accepted
    assert client.update_calls == 0
    assert manager.transitions == []
    assert stored_order(client) == {"Hero": 0, "About": 1, "Blog": 1}
