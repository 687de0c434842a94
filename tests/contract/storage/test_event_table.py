"""Contract tests for the EventTable port."""

from __future__ import annotations

from datetime import timedelta

import pytest

from eventsite.domain.errors import EventAlreadyExistsError
from eventsite.domain.value_objects import EventState, UiState
from eventsite.interfaces.event_table import MUTABLE_FIELDS
from tests.fixtures.datagen import T0, complete_sub_event_details
from tests.helpers.time_asserts import assert_strict_utc


def test_add_assigns_id_and_keeps_fields(ports, make_new_event):
    new_event = make_new_event(title="Anna & Ben")

    event = ports.events.add(new_event)

    assert isinstance(event.id, int) and event.id >= 1
    assert event.user_id == "u-1"
    assert event.state is EventState.CREATED
    assert event.title == "Anna & Ben"
    assert event.sub_event_details == new_event.sub_event_details
    assert event.ui_state == UiState(show_setup_wizard=True)
    assert event.time_removed is None
    assert not event.subscription_active
    assert event.subscription_id is None


def test_add_gives_distinct_ids(ports, make_new_event):
    first = ports.events.add(make_new_event("u-1"))
    second = ports.events.add(make_new_event("u-2"))
    assert first.id != second.id


def test_one_event_per_user(ports, make_new_event):
    ports.events.add(make_new_event("u-1"))
    with pytest.raises(EventAlreadyExistsError) as exc_info:
        ports.events.add(make_new_event("u-1"))
    assert exc_info.value.user_id == "u-1"


def test_reads(ports, make_new_event):
    event = ports.events.add(make_new_event("u-1"))

    assert ports.events.get(event.id) == event
    assert ports.events.get_by_user("u-1") == event
    assert ports.events.get(event.id + 1000) is None
    assert ports.events.get_by_user("u-2") is None


def test_times_come_back_utc(ports, make_new_event):
    event = ports.events.add(make_new_event())
    stored = ports.events.get(event.id)
    assert_strict_utc(stored.time_created)
    assert_strict_utc(stored.time_last_updated)
    assert stored.time_created == T0


def test_apply_changes_round_trips_content(ports, make_new_event, make_picture_set):
    ports.events.add(make_new_event())
    now = T0 + timedelta(minutes=5)
    details = complete_sub_event_details()

    updated = ports.events.apply_changes(
        "u-1",
        {
            "title": "Anna & Ben",
            "picture_set": make_picture_set(3),
            "sub_event_details": details,
            "ui_state": UiState(show_setup_wizard=False),
            "current_active_subdomain": "anna-and-ben",
        },
        now,
    )

    assert updated is not None
    assert updated.title == "Anna & Ben"
    assert [p.position for p in updated.picture_set.pictures] == [0, 1, 2]
    assert updated.sub_event_details == details
    assert not updated.ui_state.show_setup_wizard
    assert updated.current_active_subdomain == "anna-and-ben"
    assert updated.time_last_updated == now
    assert updated.time_created == T0
    assert ports.events.get_by_user("u-1") == updated


def test_apply_changes_subscription_fields(ports, make_new_event):
    ports.events.add(make_new_event())
    updated = ports.events.apply_changes(
        "u-1",
        {
            "subscription_customer_id": "cus_1",
            "subscription_id": "sub_1",
            "subscription_active": True,
        },
        T0,
    )
    assert updated.subscription_active
    assert updated.subscription_customer_id == "cus_1"
    assert updated.subscription_id == "sub_1"


def test_apply_changes_without_event(ports):
    assert ports.events.apply_changes("nobody", {"title": "x"}, T0) is None


@pytest.mark.parametrize("field", ["id", "user_id", "state", "time_created"])
def test_apply_changes_refuses_protected_fields(ports, make_new_event, field):
    assert field not in MUTABLE_FIELDS
    ports.events.add(make_new_event())
    with pytest.raises(ValueError):
        ports.events.apply_changes("u-1", {field: "x"}, T0)


def test_apply_changes_writes_removed_events(ports, make_new_event):
    event = ports.events.add(make_new_event(state=EventState.REMOVED))
    updated = ports.events.apply_changes("u-1", {"title": "late"}, T0)
    assert updated.id == event.id
    assert updated.title == "late"
    assert updated.state is EventState.REMOVED


def test_set_state(ports, make_new_event):
    event = ports.events.add(make_new_event())
    later = T0 + timedelta(hours=1)

    active = ports.events.set_state(event.id, EventState.ACTIVE, later)

    assert active.state is EventState.ACTIVE
    assert active.time_last_updated == later
    assert ports.events.get(event.id).state is EventState.ACTIVE
