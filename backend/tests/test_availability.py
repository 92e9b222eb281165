"""Tests for AvailabilityService against the SQL store.

Run with: pytest backend/tests/test_availability.py -v
"""

from datetime import date, datetime

import pytest

from venuebook.domain import ActivityNotFoundError, FormatError, SlotReason
from venuebook.services.slots import AvailabilityService, BookingConfig

from booking_data import MONDAY, WEEKDAY_SCHEDULE


def slot_at(slots, start_time):
    return next(s for s in slots if s.start_time == start_time)


class TestDailyAvailability:
    """Slot grid and verdicts for one day."""

    def test_open_day_lists_full_grid(self, availability, activity_id):
        """Mon-Fri 09:00-17:00, 60-minute slots: 8 free slots on a Monday."""
        slots = availability.get_availability(activity_id, "2025-06-16")

        assert [s.start_time for s in slots] == [
            "09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00",
        ]
        assert slots[-1].end_time == "17:00"
        assert all(s.available for s in slots)
        assert all(s.remaining_capacity == 4 and s.capacity == 4 for s in slots)

    def test_full_slot_is_booked(self, availability, seed, activity_id):
        """A confirmed party of 4 fills the 10:00 slot only."""
        seed.reservation(activity_id, MONDAY, "10:00", 4)

        slots = availability.get_availability(activity_id, MONDAY)

        booked = slot_at(slots, "10:00")
        assert not booked.available
        assert booked.reason is SlotReason.BOOKED
        assert booked.remaining_capacity == 0
        assert all(s.available for s in slots if s.start_time != "10:00")

    def test_pending_reservations_hold_capacity(self, availability, seed, activity_id):
        """Unpaid pending reservations still count against capacity."""
        seed.reservation(activity_id, MONDAY, "10:00", 3, status="pending")

        slot = slot_at(availability.get_availability(activity_id, MONDAY), "10:00")
        assert slot.available
        assert slot.remaining_capacity == 1

    def test_cancelled_reservations_release_capacity(self, availability, seed, activity_id):
        """Cancelled reservations free their places."""
        seed.reservation(activity_id, MONDAY, "10:00", 4, status="cancelled")

        slot = slot_at(availability.get_availability(activity_id, MONDAY), "10:00")
        assert slot.available
        assert slot.remaining_capacity == 4

    def test_partial_block_excludes_overlapping_slots_only(self, availability, seed, activity_id):
        """A 12:00-13:00 block marks the 12:00 slot, neighbours stay free."""
        seed.block(activity_id, MONDAY, "12:00", "13:00", reason="Maintenance")

        slots = availability.get_availability(activity_id, MONDAY)

        assert slot_at(slots, "12:00").reason is SlotReason.BLOCKED
        assert slot_at(slots, "11:00").available
        assert slot_at(slots, "13:00").available

    def test_whole_day_block_marks_every_slot(self, availability, seed, activity_id):
        """A whole-day block reports each slot as blocked."""
        seed.block(activity_id, MONDAY, reason="Private event")

        slots = availability.get_availability(activity_id, MONDAY)

        assert len(slots) == 8
        assert all(s.reason is SlotReason.BLOCKED for s in slots)

    def test_closed_weekday_has_no_slots(self, availability, activity_id):
        """Saturday is not an operating day."""
        assert availability.get_availability(activity_id, "2025-06-21") == []

    def test_disabled_override_has_no_slots(self, availability, seed, org_id):
        """A disabled weekday override closes the day."""
        schedule = dict(WEEKDAY_SCHEDULE, overrides={"fri": {"enabled": False}})
        activity_id = seed.activity(org_id, schedule=schedule)

        assert availability.get_availability(activity_id, "2025-06-20") == []

    def test_custom_date_opens_weekend(self, availability, seed, org_id):
        """A custom date opens a Saturday with its own hours."""
        schedule = dict(
            WEEKDAY_SCHEDULE,
            custom_dates=[{"date": "2025-06-21", "open_time": "10:00", "close_time": "12:00"}],
        )
        activity_id = seed.activity(org_id, schedule=schedule)

        slots = availability.get_availability(activity_id, "2025-06-21")
        assert [s.start_time for s in slots] == ["10:00", "11:00"]

    def test_beyond_booking_horizon_has_no_slots(self, availability, seed, org_id):
        """Dates past advance_booking_days are closed."""
        schedule = dict(WEEKDAY_SCHEDULE, advance_booking_days=30)
        activity_id = seed.activity(org_id, schedule=schedule)

        assert availability.get_availability(activity_id, "2025-08-01") == []
        assert availability.get_availability(activity_id, "2025-07-01") != []

    def test_inactive_activity_reports_closed(self, availability, seed, org_id):
        """A deactivated activity keeps its grid but nothing is bookable."""
        activity_id = seed.activity(org_id, is_active=False)

        slots = availability.get_availability(activity_id, MONDAY)
        assert len(slots) == 8
        assert all(s.reason is SlotReason.CLOSED and not s.available for s in slots)

    def test_capacity_defaults_to_max_party_size(self, availability, seed, org_id):
        """Without an explicit capacity, max_party_size is the slot capacity."""
        activity_id = seed.activity(org_id, capacity=None, max_party_size=6)

        slots = availability.get_availability(activity_id, MONDAY)
        assert slots[0].capacity == 6

    def test_overlapping_grid_shares_capacity(self, availability, seed, org_id):
        """With a 30-minute interval, a 10:00 booking affects 09:30 and 10:30 too."""
        activity_id = seed.activity(org_id, schedule=dict(WEEKDAY_SCHEDULE, slot_interval=30))
        seed.reservation(activity_id, MONDAY, "10:00", 3)

        slots = availability.get_availability(activity_id, MONDAY)

        assert slot_at(slots, "09:30").remaining_capacity == 1
        assert slot_at(slots, "10:30").remaining_capacity == 1
        assert slot_at(slots, "09:00").remaining_capacity == 4
        assert slot_at(slots, "11:00").remaining_capacity == 4

    def test_repeated_queries_are_identical(self, availability, seed, activity_id):
        """Availability has no side effects."""
        seed.reservation(activity_id, MONDAY, "14:00", 2)

        first = availability.get_availability(activity_id, MONDAY)
        second = availability.get_availability(activity_id, MONDAY)
        assert first == second


class TestPastCutoff:
    """Slots before the current clock time are past."""

    def test_slots_before_now_are_past(self, store, config, activity_id):
        """At 12:30, slots up to 12:00 are past and 13:00 onwards are open."""
        service = AvailabilityService(store, config, lambda: datetime(2025, 6, 16, 12, 30))

        slots = service.get_availability(activity_id, MONDAY)

        assert all(s.reason is SlotReason.PAST for s in slots[:4])
        assert all(s.available for s in slots[4:])

    def test_slot_starting_now_is_open(self, store, config, activity_id):
        """A slot starting exactly at the current time is still bookable."""
        service = AvailabilityService(store, config, lambda: datetime(2025, 6, 16, 13, 0))

        assert slot_at(service.get_availability(activity_id, MONDAY), "13:00").available

    def test_lead_time(self, store, activity_id):
        """min_lead_minutes pushes the cutoff forward."""
        service = AvailabilityService(
            store,
            BookingConfig(min_lead_minutes=60),
            lambda: datetime(2025, 6, 16, 12, 30),
        )

        slots = service.get_availability(activity_id, MONDAY)

        assert slot_at(slots, "13:00").reason is SlotReason.PAST
        assert slot_at(slots, "14:00").available

    def test_yesterday_is_entirely_past(self, store, config, activity_id):
        """Every slot of an earlier day is past."""
        service = AvailabilityService(store, config, lambda: datetime(2025, 6, 17, 8, 0))

        slots = service.get_availability(activity_id, MONDAY)
        assert all(s.reason is SlotReason.PAST for s in slots)


class TestLookupErrors:
    """Error handling around activity lookup."""

    def test_unknown_activity(self, availability):
        """Unknown ids raise ActivityNotFoundError."""
        with pytest.raises(ActivityNotFoundError):
            availability.get_availability(9999, MONDAY)

    def test_cross_tenant_activity_is_not_found(self, availability, seed, activity_id):
        """Another organization cannot see the activity."""
        other_org = seed.organization("Uptown Bowling")

        with pytest.raises(ActivityNotFoundError):
            availability.get_availability(activity_id, MONDAY, organization_id=other_org)

    def test_malformed_date(self, availability, activity_id):
        """Malformed dates raise FormatError."""
        with pytest.raises(FormatError):
            availability.get_availability(activity_id, "16-06-2025")

    def test_malformed_schedule_is_closed(self, availability, seed, org_id):
        """A broken schedule never opens the activity."""
        activity_id = seed.activity(org_id, schedule={"operating_days": ["Moonday"]})

        assert availability.get_availability(activity_id, MONDAY) == []


class TestCalendar:
    """Month calendar through the service."""

    def test_month_view(self, availability, seed, activity_id):
        """Weekends closed, blocked day flagged, earlier days past."""
        seed.block(activity_id, date(2025, 6, 18))

        days = {d.date: d for d in availability.get_calendar(activity_id, 2025, 6)}

        assert len(days) == 30
        assert days[date(2025, 6, 16)].open
        assert days[date(2025, 6, 21)].reason == "closed"
        assert days[date(2025, 6, 18)].reason == "blocked"
        assert days[date(2025, 6, 13)].reason == "past"
