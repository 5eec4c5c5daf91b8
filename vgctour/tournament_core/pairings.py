"""
Read-only pairing projection for the round display.

Each row carries the table, both players with the score they brought into
the round, and which side won.
"""

import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from vgctour.tournament_core.knockout import top_cut_label_for_round
from vgctour.tournament_core.records import score_before_round
from vgctour.tournament_core.structure import Match, Tournament

logger = logging.getLogger(__name__)

BYE_LABEL = "BYE"
NO_TABLE_LABEL = "N/A"


@dataclass(frozen=True)
class PairingRow:
    """One table in a round's pairings."""

    table: int
    player1_id: Optional[str]
    player1_name: str
    player1_score: Optional[Tuple[int, int]]
    player2_id: Optional[str]
    player2_name: str
    player2_score: Optional[Tuple[int, int]]
    winner_id: Optional[str]
    is_bye: bool

    @property
    def table_label(self) -> str:
        return NO_TABLE_LABEL if self.table == 0 else str(self.table)

    @property
    def player1_label(self) -> str:
        return _label(self.player1_name, self.player1_score)

    @property
    def player2_label(self) -> str:
        if self.is_bye:
            return BYE_LABEL
        return _label(self.player2_name, self.player2_score)

    @property
    def player1_won(self) -> bool:
        return not self.is_bye and self.winner_id is not None and self.winner_id == self.player1_id

    @property
    def player2_won(self) -> bool:
        return not self.is_bye and self.winner_id is not None and self.winner_id == self.player2_id


def _label(name: str, score: Optional[Tuple[int, int]]) -> str:
    if score is None:
        return name
    return f"{name} ({score[0]}-{score[1]})"


def _pairing_row(tournament: Tournament, match: Match, round_number: int) -> PairingRow:
    p1_id = match.player1_id
    p1_name = tournament.player(p1_id).name if p1_id else ""
    p1_score = score_before_round(tournament, p1_id, round_number) if p1_id else None

    if match.is_bye:
        p2_id, p2_name, p2_score = None, BYE_LABEL, None
    else:
        p2_id = match.player2_id
        p2_name = tournament.player(p2_id).name if p2_id else ""
        p2_score = score_before_round(tournament, p2_id, round_number) if p2_id else None

    return PairingRow(
        table=match.table,
        player1_id=p1_id,
        player1_name=p1_name,
        player1_score=p1_score,
        player2_id=p2_id,
        player2_name=p2_name,
        player2_score=p2_score,
        winner_id=None if match.is_bye else match.winner_id(),
        is_bye=match.is_bye,
    )


def round_pairings(tournament: Tournament, round_number: int) -> List[PairingRow]:
    """Pairings of a round ordered by table, with pre-round scores."""
    round = tournament.round(round_number)
    if round is None:
        logger.warning("No round %s in tournament %r", round_number, tournament.name)
        return []
    return [_pairing_row(tournament, m, round_number) for m in round.sorted_matches]


def round_title(tournament: Tournament, round_number: int) -> str:
    """Heading for a round's pairings."""
    stage = top_cut_label_for_round(tournament, round_number)
    if stage:
        return f"{stage} - Round {round_number}"
    return f"Round {round_number} Pairings"
