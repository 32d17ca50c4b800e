"""
Live match and booking status.

Status is computed from the scheduled time and the current time rather than
read from storage. Storage only keeps what a person decides (a host approving
or rejecting a booking); everything time-driven is derived here.

``now`` may be passed explicitly; otherwise the wall clock in ``tz`` is used.
Naive schedule times are taken to be in the same zone as ``now``.
"""
import datetime
from typing import Optional

from core.models import InvalidArgument
from core.timeutils import DateLike, combine, current_time

UPCOMING = 'upcoming'
IN_PROGRESS = 'in_progress'
COMPLETED = 'completed'

PENDING_APPROVAL = 'pending_approval'
LAPSED = 'lapsed'
APPROVED = 'approved'
REJECTED = 'rejected'

DISPLAY_STATUS = {
    UPCOMING: 'open',
    IN_PROGRESS: IN_PROGRESS,
    COMPLETED: COMPLETED,
}


def _resolve_now(now: Optional[datetime.datetime], tz: Optional[datetime.tzinfo]) -> datetime.datetime:
    return now if now is not None else current_time(tz)


def _scheduled_start(scheduled_date: DateLike, start_time, now: datetime.datetime) -> datetime.datetime:
    return combine(scheduled_date, start_time, tzinfo=now.tzinfo)


def compute_match_status(match_date: DateLike, match_time, duration_minutes: int,
                         now: Optional[datetime.datetime] = None,
                         tz: Optional[datetime.tzinfo] = None) -> str:
    """
    Returns 'upcoming' before kick-off, 'in_progress' from kick-off until the
    scheduled end (both instants inclusive) and 'completed' afterwards.
    """
    if duration_minutes < 0:
        raise InvalidArgument(f"Duration cannot be negative: {duration_minutes}")
    now = _resolve_now(now, tz)
    match_start = _scheduled_start(match_date, match_time, now)
    match_end = match_start + datetime.timedelta(minutes=duration_minutes)

    if now < match_start:
        return UPCOMING
    elif now <= match_end:
        return IN_PROGRESS
    else:
        return COMPLETED


def get_display_status(computed_status: str) -> str:
    """Map a computed match status to the label shown in listings."""
    return DISPLAY_STATUS.get(computed_status, computed_status)


def has_match_started(match_date: DateLike, match_time, duration_minutes: int,
                      now: Optional[datetime.datetime] = None,
                      tz: Optional[datetime.tzinfo] = None) -> bool:
    return compute_match_status(match_date, match_time, duration_minutes, now, tz) in (IN_PROGRESS, COMPLETED)


def has_match_completed(match_date: DateLike, match_time, duration_minutes: int,
                        now: Optional[datetime.datetime] = None,
                        tz: Optional[datetime.tzinfo] = None) -> bool:
    return compute_match_status(match_date, match_time, duration_minutes, now, tz) == COMPLETED


def compute_booking_status(booking_date: DateLike, start_time, stored_status: str,
                           now: Optional[datetime.datetime] = None,
                           tz: Optional[datetime.tzinfo] = None) -> str:
    """
    Effective status of a booking.

    Approved and rejected are host decisions and returned as stored. A
    pay-at-venue booking still pending approval once its slot has started
    is 'lapsed'. Any other stored value is passed through unchanged.
    """
    if stored_status in (APPROVED, REJECTED):
        return stored_status

    if stored_status == PENDING_APPROVAL:
        now = _resolve_now(now, tz)
        if now > _scheduled_start(booking_date, start_time, now):
            return LAPSED
        return PENDING_APPROVAL

    return stored_status


def has_booking_lapsed(booking_date: DateLike, start_time, stored_status: str,
                       now: Optional[datetime.datetime] = None,
                       tz: Optional[datetime.tzinfo] = None) -> bool:
    return compute_booking_status(booking_date, start_time, stored_status, now, tz) == LAPSED


def is_booking_actionable(booking_date: DateLike, start_time, stored_status: str,
                          now: Optional[datetime.datetime] = None,
                          tz: Optional[datetime.tzinfo] = None) -> bool:
    """A booking can still be approved or rejected only while it is pending."""
    return compute_booking_status(booking_date, start_time, stored_status, now, tz) == PENDING_APPROVAL
