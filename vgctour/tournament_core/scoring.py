"""
Configurable scoring systems for Swiss events.

This module defines how match outcomes are converted to match points, the
minimum floor applied to win percentages, and which round type marks a
Swiss round in the source data.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringSystem:
    """Defines how matches are scored in a tournament."""

    # Match scoring
    match_win_points: int = 3
    match_tie_points: int = 1
    match_loss_points: int = 0

    # Bye scoring (a bye is a win)
    bye_match_points: int = 3

    # Minimum win percentage credited to any player or opponent
    wp_floor: float = 0.25

    # Round type value identifying a Swiss round; anything else is top cut
    swiss_round_type: str = "3"

    @property
    def max_points_per_round(self) -> int:
        """Points available in a single round."""
        return self.match_win_points

    def clamp(self, value: float) -> float:
        """Clamp a win-percentage-like value to [wp_floor, 1.0]."""
        return min(max(value, self.wp_floor), 1.0)

    def is_swiss_type(self, round_type: str) -> bool:
        """Whether a raw round type value marks a Swiss round."""
        return str(round_type).strip() == self.swiss_round_type


# Pre-defined scoring systems
STANDARD_SCORING = ScoringSystem()

# Earlier versions of the pairings site floored at one third
LEGACY_FLOOR_SCORING = ScoringSystem(wp_floor=1 / 3)
