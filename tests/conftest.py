"""
Shared pytest fixtures for the booking rules tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the statistical shuffle checks
"""
import pytest
import sys
import os
import yaml
from datetime import date

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.models import PricingRule, Team

ALL_DAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


@pytest.fixture
def monday():
    """2026-10-19 is a Monday."""
    return date(2026, 10, 19)


@pytest.fixture
def saturday():
    return date(2026, 10, 24)


@pytest.fixture
def evening_peak_rule():
    """Rs 800/h every day from 18:00 to 20:00."""
    return PricingRule(days=ALL_DAYS, start_time='18:00', end_time='20:00', price_per_hour=800)


@pytest.fixture
def weekend_morning_rule():
    return PricingRule(days=['Saturday', 'Sunday'], start_time='06:00', end_time='12:00', price_per_hour=900)


@pytest.fixture
def sample_teams():
    return [
        Team('t1', 'Thunder FC'),
        Team('t2', 'Riverside United'),
        Team('t3', 'Golden Boots'),
        Team('t4', 'Night Owls'),
    ]


@pytest.fixture
def team_rows():
    """Teams as rows from the registrations table."""
    return [
        {'id': 't1', 'team_name': 'Thunder FC'},
        {'id': 't2', 'team_name': 'Riverside United'},
        {'id': 't3', 'team_name': 'Golden Boots'},
    ]


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Data directory with venue, tournament and moderation config."""
    (tmp_path / 'venue.yaml').write_text(yaml.dump({
        'name': 'Test Arena',
        'base_price': 500,
        'pricing_rules': [
            {'days': ALL_DAYS, 'startTime': '18:00', 'endTime': '20:00', 'pricePerHour': 800},
        ],
    }, default_flow_style=False))
    (tmp_path / 'tournament.yaml').write_text(yaml.dump({
        'format': 'knockout',
        'num_teams': 4,
        'shuffle': False,
        'teams': [
            {'id': 't1', 'team_name': 'Thunder FC'},
            {'id': 't2', 'team_name': 'Riverside United'},
            {'id': 't3', 'team_name': 'Golden Boots'},
        ],
    }, default_flow_style=False))
    (tmp_path / 'moderation.yaml').write_text(yaml.dump({
        'blocked_words': ['shit', 'bastard'],
    }, default_flow_style=False))

    monkeypatch.setenv('BOOKING_DATA_DIR', str(tmp_path))
    return tmp_path

