"""
Property tests over simulated Swiss events.
"""

import random
import unittest

from vgctour.tournament_core.knockout import group_rounds_by_stage
from vgctour.tournament_core.simulation import simulate_swiss_event, swiss_make_pairs
from vgctour.tournament_core.standings import StandingsState, final_standings, rank
from vgctour.tournament_core.tiebreaks import TiebreakContext, calculate_all_tiebreaks


class SimulationTests(unittest.TestCase):
    def test_same_seed_same_event(self):
        first = simulate_swiss_event(12, 4, seed=7)
        second = simulate_swiss_event(12, 4, seed=7)

        self.assertEqual(first.name, second.name)
        self.assertEqual(first.players, second.players)
        self.assertEqual(first.rounds, second.rounds)

    def test_everyone_plays_once_per_round(self):
        tournament = simulate_swiss_event(11, 5, seed=3)

        self.assertEqual(len(tournament.players), 11)
        self.assertEqual(len(tournament.swiss_rounds), 5)
        for round in tournament.swiss_rounds:
            seated = [pid for m in round.matches for pid in m.player_ids]
            self.assertEqual(sorted(seated), sorted(tournament.players))
            self.assertEqual(sum(1 for m in round.matches if m.is_bye), 1)

    def test_unreported_matches_block_standings(self):
        tournament = simulate_swiss_event(8, 3, seed=1, unreported=1)
        self.assertFalse(tournament.final_swiss_round.is_complete)
        self.assertEqual(final_standings(tournament).state, StandingsState.PARTIAL_SWISS)

    def test_top_cut(self):
        tournament = simulate_swiss_event(16, 5, seed=11, top_cut=8)

        labels = [group.label for group in group_rounds_by_stage(tournament)]
        self.assertEqual(labels[-3:], ["Top 8", "Top 4", "Finals"])
        self.assertEqual(final_standings(tournament).round_number, 5)

    def test_invalid_top_cut(self):
        with self.assertRaises(ValueError):
            simulate_swiss_event(16, 5, top_cut=6)
        with self.assertRaises(ValueError):
            simulate_swiss_event(4, 2, top_cut=8)

    def test_pairing_avoids_rematches_when_possible(self):
        players = ["a", "b", "c", "d"]
        points = {"a": 3, "b": 3, "c": 0, "d": 0}
        prev = {"a": {"b"}, "b": {"a"}, "c": {"d"}, "d": {"c"}}
        pairs, bye = swiss_make_pairs(players, points, prev, random.Random(0))

        self.assertIsNone(bye)
        for a, b in pairs:
            self.assertNotIn(b, prev[a])


class StandingsPropertyTests(unittest.TestCase):
    """Properties that must hold for any complete event."""

    seeds = [1, 2, 3, 5, 8, 13]

    def test_values_within_bounds(self):
        for seed in self.seeds:
            tournament = simulate_swiss_event(15, 5, seed=seed)
            context = TiebreakContext(tournament)
            scores = calculate_all_tiebreaks(context, list(tournament.players))
            for values in scores.values():
                for value in values.values():
                    self.assertGreaterEqual(value, 0.25)
                    self.assertLessEqual(value, 1.0)

    def test_order_respects_dominance(self):
        for seed in self.seeds:
            rows = rank(simulate_swiss_event(14, 4, seed=seed), 4)
            for above, below in zip(rows, rows[1:]):
                key_above = (above.match_points, round(above.owp, 9), round(above.oowp, 9))
                key_below = (below.match_points, round(below.owp, 9), round(below.oowp, 9))
                self.assertGreaterEqual(key_above, key_below)
                if key_above == key_below:
                    self.assertLess(above.player_id, below.player_id)

    def test_idempotent(self):
        tournament = simulate_swiss_event(10, 4, seed=21)
        self.assertEqual(final_standings(tournament), final_standings(tournament))

    def test_byes_are_wins_without_opponents(self):
        tournament = simulate_swiss_event(9, 4, seed=4)
        context = TiebreakContext(tournament)
        for player_id in tournament.players:
            record = context.record(player_id)
            self.assertEqual(record.wins + record.losses + record.ties, 4)
            self.assertEqual(len(context.graph.edges(player_id)), 4 - record.byes)


if __name__ == "__main__":
    unittest.main()
