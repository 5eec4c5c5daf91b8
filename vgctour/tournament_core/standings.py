"""
Standings ranking for Swiss events.

Rows are ordered by match points, then OWP, then OOWP, all descending. Full
ties fall back to the player ID in ascending order so the table is the same
on every computation.

Final standings are only published once the last Swiss round is fully
reported. Until then the report carries a PARTIAL_SWISS state and no rows.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum

from vgctour.tournament_core.records import PlayerRecord
from vgctour.tournament_core.structure import Player, Tournament
from vgctour.tournament_core.tiebreaks import TiebreakContext, calculate_all_tiebreaks

logger = logging.getLogger(__name__)

# Tiebreak values closer than this compare as equal
TIEBREAK_PRECISION = 9


class StandingsState(Enum):
    """Whether final standings can be shown."""

    NO_DATA = "no_data"
    PARTIAL_SWISS = "partial_swiss"
    SWISS_COMPLETE = "swiss_complete"


@dataclass(frozen=True)
class StandingsRow:
    """One player's line in the standings table."""

    rank: int
    player: Player
    record: PlayerRecord
    win_percentage: float
    owp: float
    oowp: float

    @property
    def player_id(self) -> str:
        return self.player.player_id

    @property
    def match_points(self) -> int:
        return self.record.match_points

    @property
    def wins(self) -> int:
        return self.record.wins

    @property
    def losses(self) -> int:
        return self.record.losses

    @property
    def ties(self) -> int:
        return self.record.ties

    @property
    def byes(self) -> int:
        return self.record.byes

    @property
    def record_string(self) -> str:
        return self.record.record_string


@dataclass(frozen=True)
class StandingsReport:
    """Final standings, or the reason they are not available yet."""

    state: StandingsState
    round_number: int = 0
    rows: List[StandingsRow] = field(default_factory=list)
    generation: Optional[int] = None

    @property
    def available(self) -> bool:
        return self.state == StandingsState.SWISS_COMPLETE


def _sort_key(player_id: str, match_points: int, owp: float, oowp: float):
    return (
        -match_points,
        -round(owp, TIEBREAK_PRECISION),
        -round(oowp, TIEBREAK_PRECISION),
        player_id,
    )


def format_percentage(value: float) -> str:
    """Render a win percentage the way the standings table shows it (62.50)."""
    return f"{value * 100:.2f}"


def standings_state(tournament: Tournament) -> StandingsState:
    """Evaluate the display gate from scratch for a snapshot.

    A final Swiss round without pairings yet is partial when any earlier
    Swiss round has matches.
    """
    if not any(round.matches for round in tournament.swiss_rounds):
        return StandingsState.NO_DATA
    final_round = tournament.final_swiss_round
    if final_round.matches and final_round.is_complete:
        return StandingsState.SWISS_COMPLETE
    return StandingsState.PARTIAL_SWISS


def ranked_player_ids(tournament: Tournament, round_cutoff: int) -> List[str]:
    """Players with a Swiss appearance up to the cutoff.

    Roster players come first in roster order, then IDs only known from
    matches in order of appearance.
    """
    appeared = []
    for round in tournament.rounds_through(round_cutoff, swiss_only=True):
        for match in round.matches:
            for pid in match.player_ids:
                if pid not in appeared:
                    appeared.append(pid)

    roster = [pid for pid in tournament.players if pid in appeared]
    dangling = [pid for pid in appeared if pid not in tournament.players]
    return roster + dangling


def rank(tournament: Tournament, round_cutoff: int) -> List[StandingsRow]:
    """
    Build the ranked standings table as of a round.

    Args:
        tournament: The tournament snapshot
        round_cutoff: Last round (inclusive) to take into account

    Returns:
        StandingsRow list, first place first
    """
    context = TiebreakContext(tournament, round_cutoff)
    player_ids = ranked_player_ids(tournament, round_cutoff)
    tiebreaks = calculate_all_tiebreaks(context, player_ids)

    ordered = sorted(
        player_ids,
        key=lambda pid: _sort_key(
            pid,
            context.record(pid).match_points,
            tiebreaks[pid]["owp"],
            tiebreaks[pid]["oowp"],
        ),
    )

    rows = []
    for position, player_id in enumerate(ordered, start=1):
        scores = tiebreaks[player_id]
        rows.append(
            StandingsRow(
                rank=position,
                player=tournament.player(player_id),
                record=context.record(player_id),
                win_percentage=scores["wp"],
                owp=scores["owp"],
                oowp=scores["oowp"],
            )
        )
    return rows


def final_standings(tournament: Tournament) -> StandingsReport:
    """Rank the event once the final Swiss round is fully reported."""
    state = standings_state(tournament)
    if state != StandingsState.SWISS_COMPLETE:
        final_round = tournament.final_swiss_round
        logger.info(
            "Standings unavailable (%s); final Swiss round %s not fully reported",
            state.value,
            final_round.number if final_round else None,
        )
        return StandingsReport(state=state)

    round_number = tournament.final_swiss_round.number
    logger.debug("Calculating final standings through round %d", round_number)
    return StandingsReport(
        state=state, round_number=round_number, rows=rank(tournament, round_number)
    )
