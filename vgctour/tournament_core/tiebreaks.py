"""
Win percentage and tiebreak calculation functions.

These functions calculate the values used to order players who are tied on
match points:

- WP: a player's match points over the points available in the Swiss rounds
  they played, floored
- OWP: the average WP of a player's distinct Swiss opponents
- OOWP: the average OWP of those same opponents

All three are floored at the scoring system's wp_floor. Results are memoized
in a TiebreakContext, which is bound to one tournament snapshot and one round
cutoff and is thrown away after the standings pass.
"""

import logging
from typing import Dict, List, Optional

from vgctour.tournament_core.opponents import OpponentGraph
from vgctour.tournament_core.records import PlayerRecord, record_as_of
from vgctour.tournament_core.structure import Tournament

logger = logging.getLogger(__name__)


class TiebreakContext:
    """Memoization arena for one standings pass."""

    def __init__(self, tournament: Tournament, round_cutoff: Optional[int] = None):
        if round_cutoff is None:
            final_round = tournament.final_swiss_round
            round_cutoff = final_round.number if final_round else 0
        self.tournament = tournament
        self.round_cutoff = round_cutoff
        self.scoring = tournament.scoring
        self.graph = OpponentGraph.from_tournament(tournament, round_cutoff)
        self._records: Dict[str, PlayerRecord] = {}
        self.win_percentages: Dict[str, float] = {}
        self.owps: Dict[str, float] = {}
        self.oowps: Dict[str, float] = {}

    def record(self, player_id: str) -> PlayerRecord:
        """The player's Swiss record up to and including the cutoff."""
        if player_id not in self._records:
            self._records[player_id] = record_as_of(
                self.tournament, player_id, self.round_cutoff, inclusive=True, swiss_only=True
            )
        return self._records[player_id]

    def opponents(self, player_id: str) -> List[str]:
        return self.graph.opponents(player_id)


def calculate_win_percentage(context: TiebreakContext, player_id: str) -> float:
    """
    Calculate a player's floored win percentage.

    WP = match points / (Swiss rounds participated * points per win). A
    player with no participated rounds gets the floor.

    Args:
        context: The standings pass context
        player_id: The player's ID

    Returns:
        WP in [wp_floor, 1.0]
    """
    cached = context.win_percentages.get(player_id)
    if cached is not None:
        return cached

    scoring = context.scoring
    record = context.record(player_id)
    possible_points = record.rounds_participated * scoring.max_points_per_round

    if possible_points <= 0:
        win_percentage = scoring.wp_floor
    else:
        win_percentage = scoring.clamp(record.match_points / possible_points)

    context.win_percentages[player_id] = win_percentage
    return win_percentage


def calculate_owp(context: TiebreakContext, player_id: str) -> float:
    """
    Calculate Opponents' Win Percentage.

    The average WP of the player's distinct Swiss opponents. A player with no
    opponents gets the floor.

    Args:
        context: The standings pass context
        player_id: The player's ID

    Returns:
        OWP in [wp_floor, 1.0]
    """
    cached = context.owps.get(player_id)
    if cached is not None:
        return cached

    opponents = context.opponents(player_id)
    if not opponents:
        owp = context.scoring.wp_floor
    else:
        total = sum(calculate_win_percentage(context, opp_id) for opp_id in opponents)
        owp = context.scoring.clamp(total / len(opponents))

    context.owps[player_id] = owp
    return owp


def calculate_oowp(context: TiebreakContext, player_id: str) -> float:
    """
    Calculate Opponents' Opponents' Win Percentage.

    The average, over the player's distinct opponents, of each opponent's
    OWP. Opponents' opponents are not deduplicated across opponents.

    Args:
        context: The standings pass context
        player_id: The player's ID

    Returns:
        OOWP in [wp_floor, 1.0]
    """
    cached = context.oowps.get(player_id)
    if cached is not None:
        return cached

    opponents = context.opponents(player_id)
    if not opponents:
        oowp = context.scoring.wp_floor
    else:
        total = sum(calculate_owp(context, opp_id) for opp_id in opponents)
        oowp = context.scoring.clamp(total / len(opponents))

    context.oowps[player_id] = oowp
    return oowp


def calculate_all_tiebreaks(
    context: TiebreakContext, player_ids: List[str]
) -> Dict[str, Dict[str, float]]:
    """
    Calculate WP, OWP and OOWP for a list of players.

    Args:
        context: The standings pass context
        player_ids: Players to calculate

    Returns:
        Dictionary mapping player IDs to {"wp", "owp", "oowp"} dictionaries
    """
    # Warm the caches level by level so each OWP reuses cached WPs
    for player_id in player_ids:
        calculate_win_percentage(context, player_id)
    for player_id in player_ids:
        calculate_owp(context, player_id)

    tiebreak_scores = {}
    for player_id in player_ids:
        tiebreak_scores[player_id] = {
            "wp": calculate_win_percentage(context, player_id),
            "owp": calculate_owp(context, player_id),
            "oowp": calculate_oowp(context, player_id),
        }

    logger.debug(
        "Calculated tiebreaks for %d players through round %d",
        len(player_ids),
        context.round_cutoff,
    )
    return tiebreak_scores


# Single-shot helpers; each builds its own context


def win_percentage(tournament: Tournament, player_id: str, round_cutoff: int) -> float:
    return calculate_win_percentage(TiebreakContext(tournament, round_cutoff), player_id)


def owp(tournament: Tournament, player_id: str, round_cutoff: int) -> float:
    return calculate_owp(TiebreakContext(tournament, round_cutoff), player_id)


def oowp(tournament: Tournament, player_id: str, round_cutoff: int) -> float:
    return calculate_oowp(TiebreakContext(tournament, round_cutoff), player_id)
