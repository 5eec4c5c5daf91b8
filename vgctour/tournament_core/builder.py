"""
Builder for creating tournament structures with a fluent API.

This module provides a builder class for creating tournament_core structures
with both a high-level API working with player names and a low-level API
working with player IDs.
"""

from typing import Dict, List, Optional, Union
from dataclasses import dataclass

from vgctour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING
from vgctour.tournament_core.structure import (
    Match,
    Outcome,
    Player,
    Round,
    RoundKind,
    Tournament,
    create_bye_match,
)

RESULT_MAP = {
    "1-0": Outcome.PLAYER1_WIN,
    "0-1": Outcome.PLAYER2_WIN,
    "1/2-1/2": Outcome.TIE,
    "0-0": Outcome.DOUBLE_LOSS,
    "*": Outcome.UNREPORTED,
}


@dataclass
class TournamentMetadata:
    """Metadata for the tournament (not part of the standings)."""

    name: str = ""
    time_elapsed: Optional[int] = None


class TournamentBuilder:
    """Builder for creating tournament structures easily."""

    def __init__(self, scoring: ScoringSystem = STANDARD_SCORING):
        self.scoring = scoring
        self.players: Dict[str, Player] = {}
        self.rounds: List[Round] = []
        self.current_round: Optional[Round] = None
        self.metadata = TournamentMetadata()
        self.name_to_id: Dict[str, str] = {}
        self._next_player_id = 1
        self._next_table = 1

    # High-level fluent API methods

    def event(self, name: str, time_elapsed: Optional[int] = None) -> "TournamentBuilder":
        """Define event metadata."""
        self.metadata.name = name
        self.metadata.time_elapsed = time_elapsed
        return self

    def player(
        self,
        name: str,
        player_id: Optional[str] = None,
        birth_year: Optional[int] = None,
    ) -> "TournamentBuilder":
        """Add a player by display name; the first word is the first name."""
        if player_id is None:
            player_id = str(self._next_player_id)
            self._next_player_id += 1

        first_name, _, last_name = name.partition(" ")
        self.players[player_id] = Player(player_id, first_name, last_name, birth_year)
        self.name_to_id[name] = player_id
        return self

    def swiss_round(self, number: int) -> "TournamentBuilder":
        """Start a Swiss round."""
        return self.add_round(number, RoundKind.SWISS)

    def top_cut_round(self, number: int) -> "TournamentBuilder":
        """Start a single elimination round."""
        return self.add_round(number, RoundKind.ELIMINATION)

    def match(self, player1: str, player2: str, result: str = "*") -> "TournamentBuilder":
        """Pair two named players.

        Results: '1-0' (player1 wins), '0-1' (player2 wins), '1/2-1/2' (tie),
        '0-0' (double loss) or '*' (not reported yet).
        """
        outcome = RESULT_MAP.get(result)
        if outcome is None:
            raise ValueError(f"Invalid result: {result}")
        return self.add_match(self._get_player_id(player1), self._get_player_id(player2), outcome)

    def bye(self, player: str) -> "TournamentBuilder":
        """Give a named player a bye in the current round."""
        return self.add_bye(self._get_player_id(player))

    # Low-level API methods

    def add_round(self, number: int, kind: RoundKind = RoundKind.SWISS) -> "TournamentBuilder":
        """Add a new round to the tournament."""
        self.current_round = Round(number=number, kind=kind)
        self.rounds.append(self.current_round)
        self._next_table = 1
        return self

    def add_match(
        self,
        player1_id: str,
        player2_id: Optional[str],
        outcome: Union[Outcome, int] = Outcome.UNREPORTED,
        table: Optional[int] = None,
    ) -> "TournamentBuilder":
        """Add a match by player IDs. IDs do not have to be on the roster."""
        if not self.current_round:
            raise ValueError("Must add a round before adding matches")

        if table is None:
            table = self._next_table
            self._next_table += 1
        self.current_round.matches.append(Match(table, player1_id, player2_id, Outcome(outcome)))
        return self

    def add_bye(self, player_id: str) -> "TournamentBuilder":
        """Add a bye for a player in the current round."""
        if not self.current_round:
            raise ValueError("Must add a round before adding byes")

        self.current_round.matches.append(create_bye_match(player_id))
        return self

    def auto_byes(self) -> "TournamentBuilder":
        """Give a bye to every roster player not yet seated in the current round."""
        if not self.current_round:
            raise ValueError("Must add a round before adding byes")

        seated = set()
        for match in self.current_round.matches:
            seated.update(match.player_ids)

        for player_id in self.players:
            if player_id not in seated:
                self.add_bye(player_id)
        return self

    def build(self) -> Tournament:
        """Return the built tournament."""
        tournament = Tournament(
            players=dict(self.players),
            rounds=list(self.rounds),
            scoring=self.scoring,
            name=self.metadata.name,
            time_elapsed=self.metadata.time_elapsed,
        )
        # Name mapping for assertion purposes
        tournament.name_to_id = self.name_to_id.copy()
        return tournament

    # Helper methods

    def _get_player_id(self, name: str) -> str:
        player_id = self.name_to_id.get(name)
        if player_id is None:
            raise ValueError(f"Player not found: {name}")
        return player_id
