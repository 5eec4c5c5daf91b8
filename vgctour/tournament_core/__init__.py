"""
Pure Python core of the standings site: tournament snapshots, records,
WP/OWP/OOWP tiebreaks, standings, pairings and the data file parser.
"""

from .scoring import ScoringSystem, STANDARD_SCORING, LEGACY_FLOOR_SCORING
from .structure import Match, Outcome, Player, Round, RoundKind, Tournament
from .standings import StandingsReport, StandingsState, final_standings, rank
from .tdf import TDFError, load_tournament, parse_tdf
from .service import StandingsService

__all__ = [
    "ScoringSystem",
    "STANDARD_SCORING",
    "LEGACY_FLOOR_SCORING",
    "Match",
    "Outcome",
    "Player",
    "Round",
    "RoundKind",
    "Tournament",
    "StandingsReport",
    "StandingsState",
    "final_standings",
    "rank",
    "TDFError",
    "load_tournament",
    "parse_tdf",
    "StandingsService",
]
