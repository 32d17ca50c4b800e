"""
Unit tests for live match and booking status.
"""
import pytest
import sys
import os
from datetime import date, datetime, timedelta, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import core.status as status
from core.models import InvalidArgument
from core.status import (
    compute_match_status,
    get_display_status,
    has_match_started,
    has_match_completed,
    compute_booking_status,
    has_booking_lapsed,
    is_booking_actionable,
)

MATCH_DATE = date(2026, 10, 19)
KICK_OFF = datetime(2026, 10, 19, 18, 0)
FULL_TIME = KICK_OFF + timedelta(minutes=90)


class TestMatchStatus:
    """Tests for computed match status (18:00 kick-off, 90 minutes)."""

    def test_upcoming_before_start(self):
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=KICK_OFF - timedelta(minutes=1)) == 'upcoming'
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=KICK_OFF - timedelta(microseconds=1)) == 'upcoming'

    def test_negative_duration(self):
        with pytest.raises(InvalidArgument):
            compute_match_status(MATCH_DATE, '18:00', -30, now=KICK_OFF)

    def test_in_progress_at_start(self):
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=KICK_OFF) == 'in_progress'

    def test_in_progress_during(self):
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=KICK_OFF + timedelta(minutes=45)) == 'in_progress'

    def test_in_progress_at_end(self):
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=FULL_TIME) == 'in_progress'

    def test_completed_after_end(self):
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=FULL_TIME + timedelta(microseconds=1)) == 'completed'
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=FULL_TIME + timedelta(days=1)) == 'completed'

    def test_stored_time_with_seconds(self):
        assert compute_match_status('2026-10-19', '18:00:00', 90, now=KICK_OFF) == 'in_progress'

    def test_match_running_past_midnight(self):
        now = datetime(2026, 10, 20, 0, 15)
        assert compute_match_status(MATCH_DATE, '23:30', 60, now=now) == 'in_progress'

    def test_aware_now(self):
        now = datetime(2026, 10, 19, 18, 30, tzinfo=timezone.utc)
        assert compute_match_status(MATCH_DATE, '18:00', 90, now=now) == 'in_progress'

    def test_defaults_to_wall_clock(self, monkeypatch):
        monkeypatch.setattr(status, 'current_time', lambda tz=None: KICK_OFF + timedelta(hours=3))
        assert compute_match_status(MATCH_DATE, '18:00', 90) == 'completed'

    def test_started_and_completed_helpers(self):
        before = KICK_OFF - timedelta(minutes=5)
        during = KICK_OFF + timedelta(minutes=5)
        after = FULL_TIME + timedelta(minutes=5)

        assert not has_match_started(MATCH_DATE, '18:00', 90, now=before)
        assert has_match_started(MATCH_DATE, '18:00', 90, now=during)
        assert has_match_started(MATCH_DATE, '18:00', 90, now=after)

        assert not has_match_completed(MATCH_DATE, '18:00', 90, now=during)
        assert has_match_completed(MATCH_DATE, '18:00', 90, now=after)


class TestDisplayStatus:
    """Tests for the listing label."""

    def test_upcoming_shows_open(self):
        assert get_display_status('upcoming') == 'open'

    def test_other_statuses_unchanged(self):
        assert get_display_status('in_progress') == 'in_progress'
        assert get_display_status('completed') == 'completed'


class TestBookingStatus:
    """Tests for computed booking status (18:00 slot)."""

    def test_pending_before_start(self):
        now = KICK_OFF - timedelta(minutes=1)
        assert compute_booking_status(MATCH_DATE, '18:00', 'pending_approval', now=now) == 'pending_approval'

    def test_pending_at_start(self):
        assert compute_booking_status(MATCH_DATE, '18:00', 'pending_approval', now=KICK_OFF) == 'pending_approval'

    def test_lapsed_after_start(self):
        now = KICK_OFF + timedelta(minutes=1)
        assert compute_booking_status(MATCH_DATE, '18:00', 'pending_approval', now=now) == 'lapsed'

    @pytest.mark.parametrize("stored", ['approved', 'rejected'])
    def test_host_decisions_are_final(self, stored):
        before = KICK_OFF - timedelta(days=1)
        after = KICK_OFF + timedelta(days=1)
        assert compute_booking_status(MATCH_DATE, '18:00', stored, now=before) == stored
        assert compute_booking_status(MATCH_DATE, '18:00', stored, now=after) == stored

    def test_unknown_status_passes_through(self):
        now = KICK_OFF + timedelta(days=1)
        assert compute_booking_status(MATCH_DATE, '18:00', 'cancelled', now=now) == 'cancelled'

    def test_lapsed_helper(self):
        assert has_booking_lapsed(MATCH_DATE, '18:00', 'pending_approval', now=KICK_OFF + timedelta(hours=1))
        assert not has_booking_lapsed(MATCH_DATE, '18:00', 'approved', now=KICK_OFF + timedelta(hours=1))

    def test_actionable_only_while_pending(self):
        before = KICK_OFF - timedelta(hours=1)
        after = KICK_OFF + timedelta(hours=1)
        assert is_booking_actionable(MATCH_DATE, '18:00', 'pending_approval', now=before)
        assert not is_booking_actionable(MATCH_DATE, '18:00', 'pending_approval', now=after)
        assert not is_booking_actionable(MATCH_DATE, '18:00', 'approved', now=before)
        assert not is_booking_actionable(MATCH_DATE, '18:00', 'rejected', now=before)

    def test_tz_is_passed_to_clock(self, monkeypatch):
        seen = {}

        def fake_clock(tz=None):
            seen['tz'] = tz
            return datetime(2026, 10, 19, 19, 0, tzinfo=tz)

        monkeypatch.setattr(status, 'current_time', fake_clock)
        ist = timezone(timedelta(hours=5, minutes=30))
        assert compute_booking_status(MATCH_DATE, '18:00', 'pending_approval', tz=ist) == 'lapsed'
        assert seen['tz'] is ist
