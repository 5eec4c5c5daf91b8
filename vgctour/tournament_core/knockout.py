"""
Top cut utilities for stage labels and round grouping.

Top cut rounds are single elimination. Their stage is derived from how many
matches were played in the round and is used for display only; it never
affects scoring.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from vgctour.tournament_core.structure import Round, Tournament

SWISS_STAGE = "Swiss"
TOP_CUT_STAGE = "Top Cut"

# Display order of top cut stages after the Swiss rounds
STAGE_ORDER = ["Top 16", "Top 8", "Top 4", "Finals", TOP_CUT_STAGE]


def get_top_cut_stage_name(match_count: int) -> str:
    """Get the stage name for a top cut round based on its match count."""
    stage_names = {
        1: "Finals",
        2: "Top 4",
        4: "Top 8",
        8: "Top 16",
    }
    return stage_names.get(match_count, TOP_CUT_STAGE)


def stage_label(round: Round) -> str:
    """Stage label of a round: Swiss, or its top cut stage."""
    if round.is_swiss:
        return SWISS_STAGE
    return get_top_cut_stage_name(round.non_bye_match_count)


@dataclass(frozen=True)
class StageGroup:
    """A tab in the round navigation: one Swiss round, or a whole top cut stage."""

    label: str
    round_numbers: List[int] = field(default_factory=list)

    @property
    def first_round(self) -> int:
        return self.round_numbers[0]

    def contains(self, round_number: int) -> bool:
        return round_number in self.round_numbers


def group_rounds_by_stage(tournament: Tournament) -> List[StageGroup]:
    """Group rounds for navigation.

    Each Swiss round is its own group labelled "Round N". Top cut rounds are
    grouped by stage, in STAGE_ORDER.
    """
    groups = []
    stages: Dict[str, List[int]] = {}

    for round in tournament.rounds:
        label = stage_label(round)
        if label == SWISS_STAGE:
            groups.append(StageGroup(f"Round {round.number}", [round.number]))
        else:
            stages.setdefault(label, []).append(round.number)

    for label in STAGE_ORDER:
        if label in stages:
            groups.append(StageGroup(label, sorted(stages[label])))

    return groups


def top_cut_label_for_round(tournament: Tournament, round_number: int) -> Optional[str]:
    """Stage label of a top cut round, or None for Swiss or unknown rounds."""
    round = tournament.round(round_number)
    if round is None or round.is_swiss:
        return None
    return stage_label(round)
