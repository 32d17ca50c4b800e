"""
Configuration loading for the booking rules CLI.

Config lives in YAML files under the data directory (BOOKING_DATA_DIR,
default <repo>/data). Secrets come from the environment only.
"""
import os
import logging
import yaml
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.models import InvalidArgument, Team
from core.pricing import normalize_rules

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def get_data_dir() -> str:
    return os.environ.get('BOOKING_DATA_DIR', os.path.join(BASE_DIR, 'data'))


def get_default_venue() -> dict:
    return {
        'name': 'Turf',
        'base_price': 0,
        'pricing_rules': [],
    }


def get_default_tournament() -> dict:
    return {
        'format': 'knockout',
        'num_teams': None,
        'shuffle': True,
        'seed': None,
        'teams': [],
    }


def _load_yaml(filename: str, data_dir: Optional[str] = None) -> dict:
    path = os.path.join(data_dir or get_data_dir(), filename)
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {path}: {e}')
        return {}


def _merge_defaults(data: dict, defaults: dict) -> dict:
    for key, value in defaults.items():
        if data.get(key) is None:
            data[key] = value
    return data


def load_venue(data_dir: Optional[str] = None) -> dict:
    """Load venue.yaml, merged with defaults; pricing_rules become PricingRule objects."""
    venue = _merge_defaults(_load_yaml('venue.yaml', data_dir), get_default_venue())
    venue['pricing_rules'] = normalize_rules(venue['pricing_rules'])
    return venue


def load_tournament(data_dir: Optional[str] = None) -> dict:
    """Load tournament.yaml, merged with defaults; teams become Team objects."""
    tournament = _merge_defaults(_load_yaml('tournament.yaml', data_dir), get_default_tournament())
    tournament['teams'] = [Team(t, t) if isinstance(t, str) else Team.from_dict(t) for t in tournament['teams']]
    return tournament


def load_blocked_words(data_dir: Optional[str] = None) -> List[str]:
    data = _load_yaml('moderation.yaml', data_dir)
    return [str(w) for w in data.get('blocked_words') or []]


def get_payment_secret() -> Optional[str]:
    return os.environ.get('PAYMENT_KEY_SECRET')


def get_timezone():
    """Time zone for status checks from BOOKING_TIMEZONE, or None for local time."""
    name = os.environ.get('BOOKING_TIMEZONE')
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidArgument(f"Unknown time zone: {name}") from e
