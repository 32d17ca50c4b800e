"""
Turf booking price calculation against peak pricing rules.

Rules are consulted in list order and the first rule whose days and
[start_time, end_time) window contain the target minute wins. Rule order is
part of the rule schema: putting a narrow rule after a broad one that covers
the same window means the narrow rule never applies.
"""
import math
from typing import Dict, List, Optional

from core.models import InvalidArgument, PricingRule
from core.timeutils import DateLike, get_day_name, time_to_minutes

PRICING_CHUNK_MINUTES = 30


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (0.5 -> 1, 2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def normalize_rules(pricing_rules) -> List[PricingRule]:
    """
    Accept None, a list of rules/dicts, or the stored {"rules": [...]} mapping.
    """
    if not pricing_rules:
        return []
    if isinstance(pricing_rules, dict):
        pricing_rules = pricing_rules.get('rules') or []
    return [rule if isinstance(rule, PricingRule) else PricingRule.from_dict(rule)
            for rule in pricing_rules]


def _find_rate(base_price: float, rules: List[PricingRule], day_name: str, minute: int) -> float:
    for rule in rules:
        if day_name not in rule.days:
            continue
        if time_to_minutes(rule.start_time) <= minute < time_to_minutes(rule.end_time):
            return rule.price_per_hour
    return base_price


def get_effective_hourly_rate(base_price: float, pricing_rules, booking_date: DateLike, time) -> float:
    """Get the hourly rate in effect at a specific date and time."""
    rules = normalize_rules(pricing_rules)
    if not rules:
        return base_price
    return _find_rate(base_price, rules, get_day_name(booking_date), time_to_minutes(time))


def calculate_booking_price(base_price: float, pricing_rules, booking_date: DateLike,
                            start_time, duration_minutes: int) -> float:
    """
    Calculate the total price of a booking.

    The booking is walked in 30 minute chunks and each chunk is charged at the
    rate in effect at its first minute, so a booking that straddles a peak
    boundary is charged partly at each rate. Chunks are not split further:
    a rule boundary inside a chunk is only seen by the next chunk.

    Without rules the plain pro-rata price is returned unrounded; with rules
    the total is rounded to a whole currency unit.
    """
    if duration_minutes < 0:
        raise InvalidArgument(f"Duration must not be negative: {duration_minutes}")

    rules = normalize_rules(pricing_rules)
    if not rules:
        return base_price * duration_minutes / 60

    day_name = get_day_name(booking_date)
    current_minute = time_to_minutes(start_time)
    end_minute = current_minute + duration_minutes

    total_price = 0.0
    while current_minute < end_minute:
        chunk_end = min(current_minute + PRICING_CHUNK_MINUTES, end_minute)
        rate = _find_rate(base_price, rules, day_name, current_minute)
        total_price += rate * (chunk_end - current_minute) / 60
        current_minute = chunk_end

    return round_half_up(total_price)


def get_price_range_display(base_price: float, pricing_rules) -> Dict:
    """Returns dict with min, max and has_peak_pricing over base and rule prices."""
    rules = normalize_rules(pricing_rules)
    if not rules:
        return {'min': base_price, 'max': base_price, 'has_peak_pricing': False}

    all_prices = [base_price] + [rule.price_per_hour for rule in rules]
    low = min(all_prices)
    high = max(all_prices)
    return {'min': low, 'max': high, 'has_peak_pricing': high > low}


def calculate_advance_amount(entry_fee: float, advance_type: Optional[str], advance_value: Optional[float],
                             allow_part_payment: bool = True) -> float:
    """
    Amount due up front when part payment is offered.

    advance_type "percentage" takes that share of the fee; any other type
    treats advance_value as a fixed amount. Without part payment the full
    fee is due.
    """
    if not allow_part_payment or not advance_value:
        return entry_fee
    if advance_type == 'percentage':
        return round_half_up(entry_fee * advance_value / 100)
    return advance_value


def calculate_remaining_balance(total_fee: float, total_paid: float) -> float:
    return max(total_fee - total_paid, 0)


def to_minor_units(amount: float) -> int:
    """Convert a rupee amount to paise, as the gateway expects."""
    return round_half_up(amount * 100)
