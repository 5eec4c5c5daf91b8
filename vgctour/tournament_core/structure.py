"""
Tournament structures for representing a Swiss event snapshot.

This module provides a simple, clean way to represent a tournament with:
- Players, keyed by their opaque string ID
- Rounds, either Swiss or elimination (top cut)
- Matches between two players, or a bye for one player
- Outcome codes as they appear in the tournament data file
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from collections import defaultdict

from vgctour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    """A registered player."""

    player_id: str
    first_name: str = ""
    last_name: str = ""
    birth_year: Optional[int] = None

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_placeholder(self) -> bool:
        return False


@dataclass(frozen=True)
class UnknownPlayer(Player):
    """Stand-in for a player ID referenced by a match but missing from the roster."""

    @property
    def name(self) -> str:
        return f"Unknown ({self.player_id})"

    @property
    def is_placeholder(self) -> bool:
        return True


class Outcome(IntEnum):
    """Outcome code of a match."""

    UNREPORTED = 0
    PLAYER1_WIN = 1
    PLAYER2_WIN = 2
    TIE = 3
    DOUBLE_LOSS = 4
    BYE = 5


class PlayerResult(Enum):
    """A match outcome seen from one player's side."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"
    BYE = "bye"
    UNREPORTED = "unreported"


class RoundKind(Enum):
    """Kind of round. Only Swiss rounds count toward OWP/OOWP."""

    SWISS = "swiss"
    ELIMINATION = "elimination"


@dataclass(frozen=True)
class Match:
    """A match between two players, or a bye for player1.

    Table 0 means no table was assigned (usual for byes).
    """

    table: int
    player1_id: Optional[str]
    player2_id: Optional[str] = None
    outcome: Outcome = Outcome.UNREPORTED

    def __post_init__(self):
        if self.outcome == Outcome.BYE and self.player2_id is not None:
            raise ValueError(
                f"Bye at table {self.table} has two players "
                f"({self.player1_id}, {self.player2_id})"
            )

    @property
    def is_bye(self) -> bool:
        return self.outcome == Outcome.BYE

    @property
    def is_reported(self) -> bool:
        return self.outcome != Outcome.UNREPORTED

    @property
    def player_ids(self) -> Tuple[str, ...]:
        """IDs of the players seated at this match."""
        return tuple(pid for pid in (self.player1_id, self.player2_id) if pid)

    def involves(self, player_id: str) -> bool:
        return bool(player_id) and player_id in self.player_ids

    def opponent_of(self, player_id: str) -> Optional[str]:
        """Return the opponent's ID, or None for byes and absent opponents."""
        if self.is_bye:
            return None
        if player_id == self.player1_id:
            return self.player2_id or None
        if player_id == self.player2_id:
            return self.player1_id or None
        return None

    def result_for(self, player_id: str) -> Optional[PlayerResult]:
        """Return the result from one player's side, or None if not involved."""
        if not self.involves(player_id):
            return None
        if self.is_bye:
            return PlayerResult.BYE
        is_player1 = player_id == self.player1_id
        if self.outcome == Outcome.PLAYER1_WIN:
            return PlayerResult.WIN if is_player1 else PlayerResult.LOSS
        elif self.outcome == Outcome.PLAYER2_WIN:
            return PlayerResult.LOSS if is_player1 else PlayerResult.WIN
        elif self.outcome == Outcome.TIE:
            return PlayerResult.TIE
        elif self.outcome == Outcome.DOUBLE_LOSS:
            return PlayerResult.LOSS
        return PlayerResult.UNREPORTED

    def winner_id(self) -> Optional[str]:
        """Return the ID of the winner, or None if tied, double loss or unreported."""
        if self.is_bye:
            return self.player1_id
        if self.outcome == Outcome.PLAYER1_WIN:
            return self.player1_id
        elif self.outcome == Outcome.PLAYER2_WIN:
            return self.player2_id
        return None


@dataclass(frozen=True)
class Round:
    """A round in a tournament containing multiple matches."""

    number: int
    kind: RoundKind = RoundKind.SWISS
    matches: List[Match] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.number, int) or self.number < 1:
            raise ValueError(f"Round number must be a positive integer, got {self.number!r}")

    @property
    def is_swiss(self) -> bool:
        return self.kind == RoundKind.SWISS

    @property
    def sorted_matches(self) -> List[Match]:
        """Matches ordered by table number, for display."""
        return sorted(self.matches, key=lambda m: m.table)

    @property
    def is_complete(self) -> bool:
        """True when every non-bye match has a reported outcome."""
        return all(m.is_reported for m in self.matches if not m.is_bye)

    @property
    def non_bye_match_count(self) -> int:
        return sum(1 for m in self.matches if not m.is_bye)

    def match_for(self, player_id: str) -> Optional[Match]:
        """Return the player's match in this round (first one if listed twice)."""
        for match in self.matches:
            if match.involves(player_id):
                return match
        return None

    def add_match(self, match: Match) -> "Round":
        """Return a new Round with the match added (immutable pattern)."""
        return Round(self.number, self.kind, self.matches + [match])


@dataclass
class Tournament:
    """An immutable snapshot of an event: players and rounds in round order."""

    players: Dict[str, Player] = field(default_factory=dict)
    rounds: List[Round] = field(default_factory=list)
    scoring: ScoringSystem = field(default_factory=lambda: STANDARD_SCORING)
    name: str = ""
    time_elapsed: Optional[int] = None

    def __post_init__(self):
        seen = set()
        for round in self.rounds:
            if round.number in seen:
                raise ValueError(f"Duplicate round number {round.number}")
            seen.add(round.number)
        self.rounds = sorted(self.rounds, key=lambda r: r.number)

        # Reported once per snapshot; lookups fall back to placeholders
        for player_id in self.dangling_player_ids():
            logger.warning("Match references unknown player %s; scoring as placeholder", player_id)

    @property
    def matches(self) -> List[Match]:
        """Get all matches across all rounds."""
        all_matches = []
        for round in self.rounds:
            all_matches.extend(round.matches)
        return all_matches

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)

    @property
    def swiss_rounds(self) -> List[Round]:
        return [r for r in self.rounds if r.is_swiss]

    @property
    def elimination_rounds(self) -> List[Round]:
        return [r for r in self.rounds if not r.is_swiss]

    @property
    def final_swiss_round(self) -> Optional[Round]:
        """The highest-numbered Swiss round, or None without Swiss rounds."""
        swiss = self.swiss_rounds
        return swiss[-1] if swiss else None

    @property
    def is_empty(self) -> bool:
        return not self.players and not self.rounds

    def round(self, number: int) -> Optional[Round]:
        for round in self.rounds:
            if round.number == number:
                return round
        return None

    def rounds_through(
        self, round_cutoff: int, inclusive: bool = True, swiss_only: bool = False
    ) -> Iterator[Round]:
        """Iterate rounds up to a cutoff in round order."""
        for round in self.rounds:
            if swiss_only and not round.is_swiss:
                continue
            if round.number > round_cutoff or (not inclusive and round.number == round_cutoff):
                continue
            yield round

    def player(self, player_id: str) -> Player:
        """Return the player, or an UnknownPlayer placeholder for dangling IDs."""
        player = self.players.get(player_id)
        if player is None:
            return UnknownPlayer(player_id)
        return player

    def dangling_player_ids(self) -> List[str]:
        """IDs referenced by matches but missing from the roster, in order of appearance."""
        dangling = []
        for match in self.matches:
            for pid in match.player_ids:
                if pid not in self.players and pid not in dangling:
                    dangling.append(pid)
        return dangling


# Helper functions for building structures by hand
def create_match(
    table: int, player1_id: str, player2_id: str, outcome: Outcome = Outcome.UNREPORTED
) -> Match:
    """Create a two-player match."""
    return Match(table, player1_id, player2_id, Outcome(outcome))


def create_bye_match(player_id: str, table: int = 0) -> Match:
    """Create a bye match."""
    return Match(table, player_id, None, Outcome.BYE)


def create_tournament_from_matches(
    players: List[Player],
    matches_with_rounds: List[Tuple[int, Match]],
    scoring: ScoringSystem = STANDARD_SCORING,
    elimination_rounds: Tuple[int, ...] = (),
) -> Tournament:
    """Create a tournament from a list of (round_number, match) tuples.

    Rounds listed in elimination_rounds are marked as top cut rounds.
    """
    rounds_dict = defaultdict(list)
    for round_num, match in matches_with_rounds:
        rounds_dict[round_num].append(match)

    rounds = [
        Round(
            num,
            RoundKind.ELIMINATION if num in elimination_rounds else RoundKind.SWISS,
            matches,
        )
        for num, matches in sorted(rounds_dict.items())
    ]

    return Tournament({p.player_id: p for p in players}, rounds, scoring)
