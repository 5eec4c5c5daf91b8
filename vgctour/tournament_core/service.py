"""
Snapshot holder for periodically refreshed tournament data.

The caller re-fetches the tournament data file on its own schedule and hands
each parsed snapshot to the service. Every accepted snapshot bumps the
generation; standings computed against an older generation are discarded
when published.
"""

import logging
from typing import Optional
from dataclasses import replace

from vgctour.tournament_core.standings import StandingsReport, StandingsState, final_standings
from vgctour.tournament_core.structure import Tournament

logger = logging.getLogger(__name__)


class StandingsService:
    """Holds the latest snapshot and the last published standings."""

    def __init__(self):
        self.tournament: Optional[Tournament] = None
        self.generation = 0
        self.published: Optional[StandingsReport] = None

    def load(self, tournament: Tournament) -> bool:
        """Replace the snapshot wholesale.

        Returns False when the snapshot carries the same time_elapsed marker
        as the current one, meaning nothing changed.
        """
        if (
            self.tournament is not None
            and tournament.time_elapsed is not None
            and tournament.time_elapsed == self.tournament.time_elapsed
        ):
            logger.info("Snapshot unchanged (time elapsed %s)", tournament.time_elapsed)
            return False

        self.tournament = tournament
        self.generation += 1
        logger.info(
            "Loaded snapshot %d: %d players, %d rounds",
            self.generation,
            len(tournament.players),
            tournament.num_rounds,
        )
        return True

    def compute(self) -> StandingsReport:
        """Compute standings for the current snapshot, tagged with its generation."""
        if self.tournament is None:
            return StandingsReport(state=StandingsState.NO_DATA, generation=self.generation)
        report = final_standings(self.tournament)
        return replace(report, generation=self.generation)

    def publish(self, report: StandingsReport) -> bool:
        """Accept a report only if it was computed against the current snapshot."""
        if report.generation != self.generation:
            logger.info(
                "Discarding standings from snapshot %s; current snapshot is %d",
                report.generation,
                self.generation,
            )
            return False
        self.published = report
        return True

    def refresh(self, tournament: Tournament) -> Optional[StandingsReport]:
        """Load a snapshot and publish its standings; None when nothing changed."""
        if not self.load(tournament):
            return None
        report = self.compute()
        self.publish(report)
        return report
