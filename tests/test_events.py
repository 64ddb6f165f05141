"""Unit tests for event filtering and classification."""
from datetime import UTC, datetime, timedelta

from gcal_now.events import Classification, Event, classify, filter_events


class TestFilterEvents:
    """Test cases for filter_events."""

    def test_zero_duration_event_excluded(self):
        """Events that start and end at the same instant are dropped."""
        instant = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
        event = Event(summary="Reminder", start=instant, end=instant)

        assert filter_events([event], instant - timedelta(hours=1)) == []

    def test_all_day_events_excluded(self, now):
        """Events missing either timestamp are dropped regardless of other fields."""
        events = [
            Event(summary="Holiday", link="https://meet.example/x"),
            Event(summary="No end", start=now + timedelta(hours=1)),
            Event(summary="No start", end=now + timedelta(hours=1)),
        ]

        assert filter_events(events, now) == []

    def test_finished_event_excluded(self, now, make_event):
        """An event is finished once now reaches its end."""
        ended_exactly = make_event("Done", start_in=-60, length=60)
        ended_earlier = make_event("Earlier", start_in=-180, length=30)

        assert filter_events([ended_exactly, ended_earlier], now) == []

    def test_span_longer_than_a_day_excluded(self, now, make_event):
        """A 25h block is dropped while exactly 24h is kept."""
        too_long = make_event("Offsite", start_in=30, length=25 * 60)
        full_day = make_event("On call", start_in=30, length=24 * 60)

        assert filter_events([too_long, full_day], now) == [full_day]

    def test_custom_max_span(self, now, make_event):
        """The span limit is a parameter."""
        event = make_event("Workshop", start_in=30, length=180)

        assert filter_events([event], now, max_span=timedelta(hours=2)) == []
        assert filter_events([event], now, max_span=timedelta(hours=3)) == [event]

    def test_preserves_input_order(self, now, make_event):
        """Survivors keep their relative order, even if unsorted."""
        late = make_event("Late", start_in=300)
        dropped = Event(summary="All day")
        early = make_event("Early", start_in=5)

        assert filter_events([late, dropped, early], now) == [late, early]

    def test_empty_input(self, now):
        """Empty input yields an empty result."""
        assert filter_events([], now) == []

    def test_does_not_mutate_events(self, now, make_event):
        """Filtering returns the same event objects untouched."""
        event = make_event("Standup", start_in=-5, length=15)

        result = filter_events([event], now)

        assert result[0] is event
        assert event.summary == "Standup"


class TestClassify:
    """Test cases for classify."""

    def test_start_instant_is_ongoing(self):
        """The start is inclusive."""
        start = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
        end = datetime(2024, 1, 1, 11, 0, tzinfo=UTC)

        assert classify(start, end, start) is Classification.ONGOING

    def test_end_instant_is_past(self):
        """The end is exclusive."""
        start = datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
        end = datetime(2024, 1, 1, 11, 0, tzinfo=UTC)

        assert classify(start, end, end) is Classification.PAST

    def test_mid_meeting_is_ongoing(self, now):
        start = now - timedelta(minutes=20)

        assert classify(start, now + timedelta(minutes=10), now) is Classification.ONGOING

    def test_imminence_boundary(self, now):
        """Just inside the 10 minute window is imminent, just outside is upcoming."""
        soon = now + timedelta(minutes=9, seconds=59)
        later = now + timedelta(minutes=10, seconds=1)

        assert classify(soon, soon + timedelta(hours=1), now) is Classification.IMMINENT_UPCOMING
        assert classify(later, later + timedelta(hours=1), now) is Classification.UPCOMING

    def test_exactly_window_is_upcoming(self, now):
        start = now + timedelta(minutes=10)

        assert classify(start, start + timedelta(hours=1), now) is Classification.UPCOMING

    def test_custom_imminence_window(self, now):
        start = now + timedelta(minutes=20)
        end = start + timedelta(hours=1)

        assert (
            classify(start, end, now, imminence_window=timedelta(minutes=30))
            is Classification.IMMINENT_UPCOMING
        )

    def test_idempotent_for_fixed_now(self, now):
        """Repeated calls with identical inputs agree."""
        start = now + timedelta(minutes=5)
        end = start + timedelta(minutes=30)

        assert classify(start, end, now) == classify(start, end, now)

    def test_result_depends_on_now(self, now):
        """The same event is re-evaluated against each supplied instant."""
        start = now + timedelta(minutes=30)
        end = start + timedelta(minutes=30)

        assert classify(start, end, now) is Classification.UPCOMING
        assert classify(start, end, now + timedelta(minutes=25)) is Classification.IMMINENT_UPCOMING
        assert classify(start, end, now + timedelta(minutes=45)) is Classification.ONGOING
