#!/usr/bin/env python3
"""
Command line entry point for the booking and tournament rules.

Usage:
    python src/main.py schedule [--format knockout|group_knockout] [--teams N] [--no-shuffle] [--seed S]
    python src/main.py price --date 2026-10-19 --start 19:30 --duration 60
    python src/main.py status match --date 2026-10-19 --start 18:00 --duration 90
    python src/main.py status booking --date 2026-10-19 --start 18:00 --stored pending_approval
    python src/main.py verify-payment --order-id ORDER --payment-id PAY --signature HEX
    python src/main.py moderate "some text"

Config is read from BOOKING_DATA_DIR (venue.yaml, tournament.yaml,
moderation.yaml); the payment secret from PAYMENT_KEY_SECRET.

Exit codes:
    0: Success
    1: Invalid input, configuration error or failed payment verification
"""
import argparse
import logging
import random
import sys

import settings
from core.models import InvalidArgument, PaymentCallback
from core.moderation import filter_profanity
from core.payments import PaymentVerificationError, require_valid_signature
from core.pricing import calculate_booking_price, get_effective_hourly_rate, get_price_range_display
from core.schedule import assign_teams_to_slots, resolve_schedule_slots, schedule_for_format
from core.status import compute_booking_status, compute_match_status, get_display_status


def cmd_schedule(args):
    tournament = settings.load_tournament()
    tournament_format = args.format or tournament['format']
    teams = tournament['teams']
    num_teams = args.teams or tournament['num_teams'] or len(teams)
    shuffle = tournament['shuffle'] and not args.no_shuffle
    seed = args.seed if args.seed is not None else tournament['seed']

    schedule = schedule_for_format(tournament_format, num_teams)
    if teams:
        rng = random.Random(seed) if seed is not None else None
        assignments = assign_teams_to_slots(teams, num_teams, shuffle=shuffle, rng=rng)
        schedule = resolve_schedule_slots(schedule, assignments)

    current_round = None
    for entry in schedule:
        heading = entry.get('group_name') or entry['round']
        if heading != current_round:
            if current_round is not None:
                print()
            print(f"# {heading}")
            current_round = heading
        slot_a = entry.get('team_a') or entry['slot_a']
        slot_b = entry.get('team_b') or entry['slot_b']
        print(f"{entry['match_order']:>3}. {slot_a} vs {slot_b}")
    return 0


def cmd_price(args):
    venue = settings.load_venue()
    base_price = venue['base_price']
    rules = venue['pricing_rules']

    rate = get_effective_hourly_rate(base_price, rules, args.date, args.start)
    total = calculate_booking_price(base_price, rules, args.date, args.start, args.duration)
    price_range = get_price_range_display(base_price, rules)

    print(f"Venue: {venue['name']}")
    if price_range['has_peak_pricing']:
        print(f"Rates: {price_range['min']} - {price_range['max']} per hour")
    print(f"Rate at {args.start}: {rate} per hour")
    print(f"Total for {args.duration} minutes: {total}")
    return 0


def cmd_status(args):
    tz = settings.get_timezone()
    if args.kind == 'match':
        status = compute_match_status(args.date, args.start, args.duration, tz=tz)
        print(get_display_status(status) if args.display else status)
    else:
        print(compute_booking_status(args.date, args.start, args.stored, tz=tz))
    return 0


def cmd_verify_payment(args):
    callback = PaymentCallback(args.order_id, args.payment_id, args.signature)
    try:
        require_valid_signature(callback, settings.get_payment_secret())
    except PaymentVerificationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Payment {callback.payment_id} verified")
    return 0


def cmd_moderate(args):
    result = filter_profanity(args.text, settings.load_blocked_words())
    print("flagged" if result['flagged'] else "clean")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Tournament brackets, turf pricing, statuses and payment checks")
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    schedule = subparsers.add_parser('schedule', help='Generate a tournament schedule')
    schedule.add_argument('--format', choices=['knockout', 'group_knockout'], help='Tournament format')
    schedule.add_argument('--teams', type=int, help='Number of slots in the bracket')
    schedule.add_argument('--no-shuffle', action='store_true', help='Assign teams in registration order')
    schedule.add_argument('--seed', type=int, help='Seed for the team draw')
    schedule.set_defaults(func=cmd_schedule)

    price = subparsers.add_parser('price', help='Price a turf booking')
    price.add_argument('--date', required=True, help='Booking date (YYYY-MM-DD)')
    price.add_argument('--start', required=True, help='Start time (HH:MM)')
    price.add_argument('--duration', type=int, default=60, help='Duration in minutes')
    price.set_defaults(func=cmd_price)

    status = subparsers.add_parser('status', help='Resolve a match or booking status')
    status.add_argument('kind', choices=['match', 'booking'])
    status.add_argument('--date', required=True, help='Scheduled date (YYYY-MM-DD)')
    status.add_argument('--start', required=True, help='Start time (HH:MM)')
    status.add_argument('--duration', type=int, default=60, help='Match duration in minutes')
    status.add_argument('--stored', default='pending_approval', help='Stored booking status')
    status.add_argument('--display', action='store_true', help='Print the display label for a match')
    status.set_defaults(func=cmd_status)

    verify = subparsers.add_parser('verify-payment', help='Verify a payment callback signature')
    verify.add_argument('--order-id', required=True)
    verify.add_argument('--payment-id', required=True)
    verify.add_argument('--signature', required=True)
    verify.set_defaults(func=cmd_verify_payment)

    moderate = subparsers.add_parser('moderate', help='Check text against the blocklist')
    moderate.add_argument('text')
    moderate.set_defaults(func=cmd_moderate)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    try:
        return args.func(args)
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
