"""
Tests for the snapshot service.
"""

import unittest

from vgctour.tournament_core.builder import TournamentBuilder
from vgctour.tournament_core.service import StandingsService
from vgctour.tournament_core.standings import StandingsState
from vgctour.tournament_core.structure import Tournament


def create_snapshot(time_elapsed, final_result="1-0"):
    builder = TournamentBuilder()
    builder.event("Snapshot Open", time_elapsed=time_elapsed)
    builder.player("Alice").player("Bob")
    builder.swiss_round(1).match("Alice", "Bob", "1-0")
    builder.swiss_round(2).match("Alice", "Bob", final_result)
    return builder.build()


class StandingsServiceTests(unittest.TestCase):
    def test_no_snapshot(self):
        service = StandingsService()
        report = service.compute()

        self.assertEqual(report.state, StandingsState.NO_DATA)
        self.assertEqual(report.generation, 0)

    def test_load_bumps_generation(self):
        service = StandingsService()
        self.assertTrue(service.load(create_snapshot(10)))
        self.assertTrue(service.load(create_snapshot(20)))
        self.assertEqual(service.generation, 2)

    def test_unchanged_snapshot_is_a_no_op(self):
        service = StandingsService()
        service.load(create_snapshot(10))
        with self.assertLogs("vgctour.tournament_core.service", level="INFO"):
            self.assertFalse(service.load(create_snapshot(10)))
        self.assertEqual(service.generation, 1)

    def test_snapshot_without_marker_always_loads(self):
        service = StandingsService()
        service.load(Tournament())
        self.assertTrue(service.load(Tournament()))

    def test_stale_report_is_discarded(self):
        service = StandingsService()
        service.load(create_snapshot(10))
        stale = service.compute()

        service.load(create_snapshot(20, final_result="0-1"))
        with self.assertLogs("vgctour.tournament_core.service", level="INFO"):
            self.assertFalse(service.publish(stale))
        self.assertIsNone(service.published)

        fresh = service.compute()
        self.assertTrue(service.publish(fresh))
        self.assertEqual(service.published.generation, 2)

    def test_refresh(self):
        service = StandingsService()
        report = service.refresh(create_snapshot(10, final_result="*"))
        self.assertEqual(report.state, StandingsState.PARTIAL_SWISS)

        report = service.refresh(create_snapshot(20))
        self.assertTrue(report.available)
        self.assertIs(service.published, report)
        self.assertEqual(report.rows[0].player.name, "Alice")

        self.assertIsNone(service.refresh(create_snapshot(20)))
        self.assertIs(service.published, report)


if __name__ == "__main__":
    unittest.main()
