"""
Player record calculation.

A record is the tally of a player's results up to a round cutoff. Two modes
are supported: inclusive ("as of round N", used for final standings) and
exclusive ("entering round N", used by the pairings display).
"""

import logging
from typing import Optional, Tuple
from dataclasses import dataclass

from vgctour.tournament_core.structure import PlayerResult, Tournament

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerRecord:
    """A player's tallied results."""

    match_wins: int = 0  # Wins over an opponent, byes excluded
    losses: int = 0
    ties: int = 0
    byes: int = 0
    match_points: int = 0
    rounds_participated: int = 0
    highest_round_participated: int = 0

    @property
    def wins(self) -> int:
        """Wins including byes."""
        return self.match_wins + self.byes

    @property
    def record_string(self) -> str:
        """W-L, or W-L-T when the player has ties."""
        base = f"{self.wins}-{self.losses}"
        return f"{base}-{self.ties}" if self.ties > 0 else base


ZERO_RECORD = PlayerRecord()


def record_as_of(
    tournament: Tournament,
    player_id: Optional[str],
    round_cutoff: int,
    inclusive: bool = True,
    swiss_only: bool = True,
) -> PlayerRecord:
    """
    Calculate a player's record up to a round cutoff.

    Args:
        tournament: The tournament snapshot
        player_id: The player's ID; empty or None yields a zeroed record
        round_cutoff: Round number bounding the scan
        inclusive: Include the cutoff round itself (final standings) or stop
            strictly before it (record entering that round)
        swiss_only: Only scan Swiss rounds

    Returns:
        The player's PlayerRecord
    """
    if not player_id:
        logger.debug("Zeroed record for empty player id")
        return ZERO_RECORD

    scoring = tournament.scoring
    match_wins = losses = ties = byes = match_points = 0
    rounds_participated = 0
    highest_round = 0

    for round in tournament.rounds_through(round_cutoff, inclusive, swiss_only):
        match = round.match_for(player_id)
        if match is None:
            continue

        result = match.result_for(player_id)
        if result == PlayerResult.UNREPORTED:
            # Not played yet: neither a result nor a participated round
            continue

        if result == PlayerResult.BYE:
            byes += 1
            match_points += scoring.bye_match_points
        elif result == PlayerResult.WIN:
            match_wins += 1
            match_points += scoring.match_win_points
        elif result == PlayerResult.TIE:
            ties += 1
            match_points += scoring.match_tie_points
        else:  # LOSS, including double losses
            losses += 1
            match_points += scoring.match_loss_points

        rounds_participated += 1
        highest_round = round.number

    return PlayerRecord(
        match_wins=match_wins,
        losses=losses,
        ties=ties,
        byes=byes,
        match_points=match_points,
        rounds_participated=rounds_participated,
        highest_round_participated=highest_round,
    )


def score_before_round(
    tournament: Tournament, player_id: Optional[str], round_number: int
) -> Tuple[int, int]:
    """Return (wins, losses) entering a round, across Swiss and top cut rounds.

    Wins include byes. This is the score shown next to a player's name on the
    pairings for that round.
    """
    record = record_as_of(
        tournament, player_id, round_number, inclusive=False, swiss_only=False
    )
    return (record.wins, record.losses)
