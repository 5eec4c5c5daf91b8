"""
Age division classification.

Divisions depend only on a player's birth year relative to the season year.
This is a projection over players and plays no part in standings.
"""

from typing import Dict, List, Optional
from enum import Enum

from vgctour.tournament_core.structure import Player, Tournament

# Age a player reaches during the season year
JUNIOR_MAX_AGE = 12
SENIOR_MAX_AGE = 16


class Division(Enum):
    JUNIOR = "Junior"
    SENIOR = "Senior"
    MASTERS = "Masters"


def classify_division(player: Player, season_year: int) -> Optional[Division]:
    """Return the player's division, or None when the birth year is unknown."""
    if not player.birth_year:
        return None
    age = season_year - player.birth_year
    if age <= JUNIOR_MAX_AGE:
        return Division.JUNIOR
    elif age <= SENIOR_MAX_AGE:
        return Division.SENIOR
    return Division.MASTERS


def players_by_division(
    tournament: Tournament, season_year: int
) -> Dict[Optional[Division], List[Player]]:
    """Group roster players by division, keeping roster order."""
    groups: Dict[Optional[Division], List[Player]] = {}
    for player in tournament.players.values():
        groups.setdefault(classify_division(player, season_year), []).append(player)
    return groups
