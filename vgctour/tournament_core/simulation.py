"""
Random Swiss event generator.

Builds complete events with realistic player names for tests and demos:
score-group pairings that avoid rematches, random results, byes for odd
player counts and an optional single elimination top cut.
"""

import logging
import random
from typing import Dict, List, Optional, Set, Tuple

from faker import Faker

from vgctour.tournament_core.builder import TournamentBuilder
from vgctour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING
from vgctour.tournament_core.standings import rank
from vgctour.tournament_core.structure import Outcome, Tournament

logger = logging.getLogger(__name__)

# Relative weights of simulated match outcomes
OUTCOME_WEIGHTS = [
    (Outcome.PLAYER1_WIN, 45),
    (Outcome.PLAYER2_WIN, 45),
    (Outcome.TIE, 7),
    (Outcome.DOUBLE_LOSS, 3),
]


def simulate_outcome(rng: random.Random) -> Outcome:
    """Pick a random reported outcome."""
    outcomes, weights = zip(*OUTCOME_WEIGHTS)
    return rng.choices(outcomes, weights=weights)[0]


def swiss_make_pairs(
    players: List[str],
    points: Dict[str, int],
    prev_opponents: Dict[str, Set[str]],
    rng: random.Random,
) -> Tuple[List[Tuple[str, str]], Optional[str]]:
    """Pair players by score group, avoiding rematches where possible.

    Returns the pairs and the player receiving the bye (None for even counts).
    """
    ladder = players[:]
    rng.shuffle(ladder)
    ladder.sort(key=lambda p: points.get(p, 0), reverse=True)

    bye_player = None
    if len(ladder) % 2 == 1:
        # Lowest ranked player gets the bye
        bye_player = ladder.pop()

    pairs = []
    unpaired = ladder[:]
    while unpaired:
        a = unpaired.pop(0)
        pick = 0
        for i, b in enumerate(unpaired):
            if b not in prev_opponents.get(a, set()):
                pick = i
                break
        b = unpaired.pop(pick)
        pairs.append((a, b))
    return pairs, bye_player


def simulate_swiss_event(
    num_players: int = 16,
    num_rounds: int = 4,
    seed: Optional[int] = None,
    top_cut: int = 0,
    unreported: int = 0,
    scoring: ScoringSystem = STANDARD_SCORING,
    locale: str = "en_US",
) -> Tournament:
    """
    Simulate a Swiss event.

    Args:
        num_players: Number of players on the roster
        num_rounds: Number of Swiss rounds
        seed: Seed for reproducible events
        top_cut: Size of the single elimination top cut (0 for none, else a power of 2)
        unreported: Number of matches in the final Swiss round left unreported
        scoring: Scoring system for the tournament
        locale: Faker locale for player names

    Returns:
        The simulated Tournament
    """
    if top_cut and (top_cut < 2 or top_cut & (top_cut - 1)):
        raise ValueError(f"Top cut {top_cut} is not a power of 2")
    if top_cut > num_players:
        raise ValueError(f"Top cut {top_cut} is larger than the field of {num_players}")

    rng = random.Random(seed)
    fake = Faker(locale)
    if seed is not None:
        fake.seed_instance(seed)

    builder = TournamentBuilder(scoring)
    builder.event(f"{fake.city()} Regional Championship", time_elapsed=0)

    used_names = set()
    for i in range(num_players):
        name = f"{fake.first_name()} {fake.last_name()}"
        while name in used_names:
            name = f"{fake.first_name()} {fake.last_name()}"
        used_names.add(name)
        builder.player(name, player_id=str(1000 + i), birth_year=rng.randint(1975, 2016))

    player_ids = list(builder.players)
    points: Dict[str, int] = {pid: 0 for pid in player_ids}
    prev_opponents: Dict[str, Set[str]] = {pid: set() for pid in player_ids}

    for round_number in range(1, num_rounds + 1):
        builder.swiss_round(round_number)
        pairs, bye_player = swiss_make_pairs(player_ids, points, prev_opponents, rng)

        leave_open = unreported if round_number == num_rounds else 0
        for index, (a, b) in enumerate(pairs):
            if index >= len(pairs) - leave_open:
                outcome = Outcome.UNREPORTED
            else:
                outcome = simulate_outcome(rng)
            builder.add_match(a, b, outcome)

            prev_opponents[a].add(b)
            prev_opponents[b].add(a)
            if outcome == Outcome.PLAYER1_WIN:
                points[a] += scoring.match_win_points
            elif outcome == Outcome.PLAYER2_WIN:
                points[b] += scoring.match_win_points
            elif outcome == Outcome.TIE:
                points[a] += scoring.match_tie_points
                points[b] += scoring.match_tie_points

        if bye_player is not None:
            builder.add_bye(bye_player)
            points[bye_player] += scoring.bye_match_points

    if top_cut and not unreported:
        _simulate_top_cut(builder, num_rounds, top_cut, rng)

    tournament = builder.build()
    logger.debug(
        "Simulated %r: %d players, %d rounds", tournament.name, num_players, tournament.num_rounds
    )
    return tournament


def _simulate_top_cut(
    builder: TournamentBuilder, num_rounds: int, top_cut: int, rng: random.Random
) -> None:
    """Add single elimination rounds seeded from the Swiss standings."""
    standings = rank(builder.build(), num_rounds)
    seeds = [row.player_id for row in standings[:top_cut]]

    round_number = num_rounds
    while len(seeds) > 1:
        round_number += 1
        builder.top_cut_round(round_number)
        advancing = []
        half = len(seeds) // 2
        for i in range(half):
            a, b = seeds[i], seeds[len(seeds) - 1 - i]
            outcome = rng.choice([Outcome.PLAYER1_WIN, Outcome.PLAYER2_WIN])
            builder.add_match(a, b, outcome)
            advancing.append(a if outcome == Outcome.PLAYER1_WIN else b)
        seeds = advancing
