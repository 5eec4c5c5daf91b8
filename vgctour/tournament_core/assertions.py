"""
Fluent assertion interface for testing Swiss standings.

    assert_standings(tournament).player("Alice Smith").assert_().wins(2).losses(1)\
        .match_points(6).owp(0.5).position(1)

Names resolve through the mapping the TournamentBuilder attaches to the
tournament; without one, player IDs double as names.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from vgctour.tournament_core.records import PlayerRecord
from vgctour.tournament_core.standings import StandingsRow, rank
from vgctour.tournament_core.structure import Tournament

# Tolerance for percentage comparisons
PERCENTAGE_TOLERANCE = 0.0005


# Use the built-in AssertionError for proper test framework integration


@dataclass
class StandingsAssertion:
    """Fluent interface for asserting tournament standings."""

    tournament: Tournament
    round_cutoff: Optional[int] = None
    player_name: Optional[str] = None
    player_id: Optional[str] = None
    _name_to_id: Optional[Dict[str, str]] = None
    _rows: Optional[List[StandingsRow]] = None

    def __post_init__(self):
        """Rank the tournament once on initialization."""
        if self.round_cutoff is None:
            final_round = self.tournament.final_swiss_round
            self.round_cutoff = final_round.number if final_round else 0
        if self._rows is None:
            self._rows = rank(self.tournament, self.round_cutoff)
        if self._name_to_id is None:
            mapping = getattr(self.tournament, "name_to_id", None)
            if mapping is None:
                mapping = {pid: pid for pid in self.tournament.players}
            self._name_to_id = mapping

    def _get_row(self) -> StandingsRow:
        if self.player_id is None:
            raise AssertionError("No player selected for assertion")
        for row in self._rows:
            if row.player_id == self.player_id:
                return row
        raise AssertionError(f"{self.player_name} has no row in the standings")

    def player(self, name: str) -> "PlayerAssertion":
        """Select a player by name for assertions."""
        if name not in self._name_to_id:
            raise AssertionError(f"Player '{name}' not found in tournament")
        return PlayerAssertion(
            tournament=self.tournament,
            round_cutoff=self.round_cutoff,
            player_name=name,
            player_id=self._name_to_id[name],
            _name_to_id=self._name_to_id,
            _rows=self._rows,
        )

    def order(self, *names: str) -> "StandingsAssertion":
        """Assert the first len(names) places, in order."""
        id_to_name = {v: k for k, v in self._name_to_id.items()}
        actual = [id_to_name.get(row.player_id, row.player_id) for row in self._rows]
        if actual[: len(names)] != list(names):
            raise AssertionError(f"Expected order {list(names)}, got {actual[: len(names)]}")
        return self


class PlayerAssertion(StandingsAssertion):
    """Assertions for a specific player."""

    def assert_(self) -> "PlayerResultAssertion":
        """Start a chain of assertions for this player."""
        return PlayerResultAssertion(
            tournament=self.tournament,
            round_cutoff=self.round_cutoff,
            player_name=self.player_name,
            player_id=self.player_id,
            _name_to_id=self._name_to_id,
            _rows=self._rows,
        )


class PlayerResultAssertion(StandingsAssertion):
    """Fluent interface for asserting a player's standings row."""

    def _record(self) -> PlayerRecord:
        return self._get_row().record

    def _check_count(self, label: str, expected: int, actual: int):
        if actual != expected:
            raise AssertionError(f"{self.player_name} expected {expected} {label}, got {actual}")
        return self

    def _check_percentage(self, label: str, expected: float, actual: float):
        if abs(actual - expected) > PERCENTAGE_TOLERANCE:
            raise AssertionError(
                f"{self.player_name} expected {label} {expected:.4f}, got {actual:.4f}"
            )
        return self

    def wins(self, expected: int) -> "PlayerResultAssertion":
        """Assert the number of wins, byes included."""
        return self._check_count("wins", expected, self._record().wins)

    def losses(self, expected: int) -> "PlayerResultAssertion":
        return self._check_count("losses", expected, self._record().losses)

    def ties(self, expected: int) -> "PlayerResultAssertion":
        return self._check_count("ties", expected, self._record().ties)

    def byes(self, expected: int) -> "PlayerResultAssertion":
        return self._check_count("byes", expected, self._record().byes)

    def match_points(self, expected: int) -> "PlayerResultAssertion":
        return self._check_count("match points", expected, self._record().match_points)

    def record(self, expected: str) -> "PlayerResultAssertion":
        """Assert the displayed record, e.g. '2-1' or '2-1-1'."""
        actual = self._record().record_string
        if actual != expected:
            raise AssertionError(f"{self.player_name} expected record {expected}, got {actual}")
        return self

    def win_percentage(self, expected: float) -> "PlayerResultAssertion":
        return self._check_percentage("WP", expected, self._get_row().win_percentage)

    def owp(self, expected: float) -> "PlayerResultAssertion":
        return self._check_percentage("OWP", expected, self._get_row().owp)

    def oowp(self, expected: float) -> "PlayerResultAssertion":
        return self._check_percentage("OOWP", expected, self._get_row().oowp)

    def position(self, expected: int) -> "PlayerResultAssertion":
        """Assert the place in the standings (1-based)."""
        return self._check_count("position", expected, self._get_row().rank)


def assert_standings(tournament: Tournament, round_cutoff: Optional[int] = None) -> StandingsAssertion:
    """Entry point for standings assertions."""
    return StandingsAssertion(tournament, round_cutoff)
