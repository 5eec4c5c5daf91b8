"""
Opponent resolution over Swiss rounds.

Pairings are modelled as an explicit directed multigraph: every player maps
to the list of (round_number, opponent_id) edges they played. Top cut rounds
and byes never produce edges. Facing the same opponent twice yields two edges
but one distinct opponent.
"""

from typing import Dict, List, Tuple
from collections import defaultdict

from vgctour.tournament_core.structure import Tournament


class OpponentGraph:
    """Directed multigraph of Swiss pairings up to a round cutoff."""

    def __init__(self, edges: Dict[str, List[Tuple[int, str]]], round_cutoff: int):
        self._edges = edges
        self.round_cutoff = round_cutoff

    @classmethod
    def from_tournament(cls, tournament: Tournament, round_cutoff: int) -> "OpponentGraph":
        """Build the graph from every Swiss round numbered <= round_cutoff."""
        edges: Dict[str, List[Tuple[int, str]]] = defaultdict(list)
        for round in tournament.rounds_through(round_cutoff, swiss_only=True):
            for match in round.matches:
                if match.is_bye or not match.player1_id or not match.player2_id:
                    continue
                edges[match.player1_id].append((round.number, match.player2_id))
                edges[match.player2_id].append((round.number, match.player1_id))
        return cls(dict(edges), round_cutoff)

    @property
    def players(self) -> List[str]:
        """Players with at least one edge."""
        return list(self._edges)

    def edges(self, player_id: str) -> List[Tuple[int, str]]:
        """All (round_number, opponent_id) edges for a player, in round order."""
        return list(self._edges.get(player_id, []))

    def opponents(self, player_id: str) -> List[str]:
        """Distinct opponents in the order they were first faced."""
        seen = []
        for _, opponent_id in self._edges.get(player_id, []):
            if opponent_id not in seen:
                seen.append(opponent_id)
        return seen

    def grand_opponent_paths(self, player_id: str) -> List[Tuple[str, str]]:
        """Every (opponent, opponent's opponent) path from a player.

        A grand-opponent reachable through two different opponents appears
        once per path; this is the multiplicity OOWP averages over.
        """
        paths = []
        for opponent_id in self.opponents(player_id):
            for grand_opponent_id in self.opponents(opponent_id):
                paths.append((opponent_id, grand_opponent_id))
        return paths


def opponents_of(tournament: Tournament, player_id: str, round_cutoff: int) -> List[str]:
    """Return a player's distinct Swiss opponents up to and including round_cutoff."""
    if not player_id:
        return []
    return OpponentGraph.from_tournament(tournament, round_cutoff).opponents(player_id)
