"""
Tournament bracket generation and slot assignment.

Schedules are built over abstract slots ("Team A", "Team B", ...) so they can
be generated and stored before registration closes. Each entry is a dict with:
- round: 'group', 'quarter-final', 'semi-final', 'third-place', 'final' or 'round-of-N'
- match_order: 1-based position in the schedule, the only sequencing stored
- slot_a / slot_b: a slot label or a reference such as 'Winner QF 1'
- group_name: only on group stage entries
"""
import logging
import random
from typing import Dict, List, Optional

from core.models import InvalidArgument, Team, get_slot_label

logger = logging.getLogger(__name__)

TEAMS_PER_GROUP = 4
GROUP_LETTERS = 'ABCDEFGHIJKLMNOP'

KNOCKOUT = 'knockout'
GROUP_KNOCKOUT = 'group_knockout'


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of teams."""
    if teams_in_round == 2:
        return "final"
    elif teams_in_round == 4:
        return "semi-final"
    elif teams_in_round == 8:
        return "quarter-final"
    elif teams_in_round == 16:
        return "round-of-16"
    elif teams_in_round == 32:
        return "round-of-32"
    elif teams_in_round == 64:
        return "round-of-64"
    else:
        return f"round-of-{teams_in_round}"


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _entry(round_name: str, match_order: int, slot_a: str, slot_b: str, group_name: Optional[str] = None) -> Dict:
    entry = {
        'round': round_name,
        'match_order': match_order,
        'slot_a': slot_a,
        'slot_b': slot_b,
    }
    if group_name is not None:
        entry['group_name'] = group_name
    return entry


def generate_knockout_schedule(num_teams: int) -> List[Dict]:
    """
    Generate a single elimination bracket for num_teams slots.

    The first round pairs consecutive slots (Team A v Team B, Team C v Team D,
    ...). Later rounds pair winners of the previous round in order, e.g.
    'Winner quarter-final M1' v 'Winner quarter-final M2'. With more than two
    teams a third place match between the semi-final losers is added last.

    num_teams must be a power of two; there is no bye policy.
    """
    if num_teams < 2 or not is_power_of_two(num_teams):
        raise InvalidArgument(f"Knockout schedule needs a power of two teams (>= 2), got {num_teams}")

    schedule = []
    match_order = 1

    first_round_name = get_round_name(num_teams)
    for i in range(num_teams // 2):
        schedule.append(_entry(first_round_name, match_order, get_slot_label(2 * i), get_slot_label(2 * i + 1)))
        match_order += 1

    teams_in_round = num_teams // 2
    while teams_in_round >= 2:
        round_name = get_round_name(teams_in_round)
        prev_round_name = get_round_name(teams_in_round * 2)
        for i in range(teams_in_round // 2):
            schedule.append(_entry(
                round_name,
                match_order,
                f"Winner {prev_round_name} M{i * 2 + 1}",
                f"Winner {prev_round_name} M{i * 2 + 2}",
            ))
            match_order += 1
        teams_in_round //= 2

    if num_teams > 2:
        schedule.append(_entry('third-place', match_order, 'Loser Semi 1', 'Loser Semi 2'))

    logger.debug(f'Generated knockout schedule for {num_teams} teams: {len(schedule)} matches')
    return schedule


def _quarter_final_slots(i: int):
    # Pairs groups A/B and C/D; assumes four groups.
    if i < 2:
        return f"1st Group {GROUP_LETTERS[i * 2]}", f"2nd Group {GROUP_LETTERS[i * 2 + 1]}"
    return f"2nd Group {GROUP_LETTERS[(i - 2) * 2 + 1]}", f"1st Group {GROUP_LETTERS[(i - 2) * 2 + 1]}"


def generate_group_knockout_schedule(num_teams: int) -> List[Dict]:
    """
    Generate a group stage followed by a knockout stage.

    Teams are split into groups of four in slot order (the last group may be
    smaller) and every group plays a full round robin. The top two of each
    group go through: quarter-finals are added when that is at least 8 teams,
    semi-finals when it is at least 4. A third place match and the final are
    always added last.
    """
    if num_teams < 2:
        raise InvalidArgument(f"Group schedule needs at least 2 teams, got {num_teams}")

    num_groups = -(-num_teams // TEAMS_PER_GROUP)
    if num_groups > len(GROUP_LETTERS):
        raise InvalidArgument(f"At most {len(GROUP_LETTERS)} groups are supported, {num_teams} teams need {num_groups}")

    schedule = []
    match_order = 1
    team_index = 0

    for g in range(num_groups):
        group_name = f"Group {GROUP_LETTERS[g]}"
        group_slots = []
        while len(group_slots) < TEAMS_PER_GROUP and team_index < num_teams:
            group_slots.append(get_slot_label(team_index))
            team_index += 1

        for i in range(len(group_slots)):
            for j in range(i + 1, len(group_slots)):
                schedule.append(_entry('group', match_order, group_slots[i], group_slots[j], group_name))
                match_order += 1

    knockout_teams = num_groups * 2

    if knockout_teams >= 8:
        for i in range(4):
            slot_a, slot_b = _quarter_final_slots(i)
            schedule.append(_entry('quarter-final', match_order, slot_a, slot_b))
            match_order += 1

    if knockout_teams >= 4:
        for i in range(2):
            schedule.append(_entry('semi-final', match_order, f"Winner QF {i * 2 + 1}", f"Winner QF {i * 2 + 2}"))
            match_order += 1

    schedule.append(_entry('third-place', match_order, 'Loser SF 1', 'Loser SF 2'))
    match_order += 1
    schedule.append(_entry('final', match_order, 'Winner SF 1', 'Winner SF 2'))

    logger.debug(f'Generated group schedule for {num_teams} teams in {num_groups} groups: {len(schedule)} matches')
    return schedule


def schedule_for_format(tournament_format: str, num_teams: int) -> List[Dict]:
    """Generate the schedule for a tournament's format ('knockout' or 'group_knockout')."""
    fmt = (tournament_format or '').replace('-', '_')
    if fmt == KNOCKOUT:
        return generate_knockout_schedule(num_teams)
    if fmt == GROUP_KNOCKOUT:
        return generate_group_knockout_schedule(num_teams)
    raise InvalidArgument(f"Unknown tournament format: {tournament_format}")


def shuffle_teams(teams: List, rng=None) -> List:
    """
    Return a shuffled copy of teams (Fisher-Yates).

    rng is anything with a random() method; pass a seeded random.Random
    for a reproducible draw.
    """
    rng = rng or random
    shuffled = list(teams)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _as_team(team) -> Team:
    return team if isinstance(team, Team) else Team.from_dict(team)


def assign_teams_to_slots(teams: List, num_slots: int, shuffle: bool = True, rng=None) -> Dict[str, Optional[Dict]]:
    """
    Map registered teams onto slot labels.

    Returns an ordered dict of slot label -> {'team_id', 'team_name'} for
    every slot from 'Team A' up to num_slots; slots with no team map to None.
    Teams beyond num_slots are left out.
    """
    if num_slots < 0:
        raise InvalidArgument(f"Number of slots must not be negative: {num_slots}")

    slot_map = {get_slot_label(i): None for i in range(num_slots)}

    ordered_teams = [_as_team(team) for team in teams]
    if shuffle:
        ordered_teams = shuffle_teams(ordered_teams, rng)

    for index, team in enumerate(ordered_teams[:num_slots]):
        slot_map[get_slot_label(index)] = {'team_id': team.team_id, 'team_name': team.name}

    if len(ordered_teams) > num_slots:
        dropped = [team.name for team in ordered_teams[num_slots:]]
        logger.warning(f'{len(dropped)} team(s) did not fit in {num_slots} slots: {dropped}')

    return slot_map


def resolve_schedule_slots(schedule: List[Dict], assignments: Dict[str, Optional[Dict]]) -> List[Dict]:
    """
    Attach assigned team names to schedule entries.

    Returns copies of the entries with team_a / team_b set to the team name
    when the slot is a label with a team assigned, None otherwise (forward
    references such as 'Winner QF 1' or unfilled slots).
    """
    resolved = []
    for entry in schedule:
        team_a = assignments.get(entry['slot_a'])
        team_b = assignments.get(entry['slot_b'])
        resolved.append({
            **entry,
            'team_a': team_a['team_name'] if team_a else None,
            'team_b': team_b['team_name'] if team_b else None,
        })
    return resolved
