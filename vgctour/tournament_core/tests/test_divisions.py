"""
Tests for age division classification.
"""

import unittest

from vgctour.tournament_core.divisions import Division, classify_division, players_by_division
from vgctour.tournament_core.structure import Player, Tournament


class ClassifyDivisionTests(unittest.TestCase):
    def test_boundaries(self):
        season = 2024
        self.assertEqual(classify_division(Player("1", birth_year=2013), season), Division.JUNIOR)
        self.assertEqual(classify_division(Player("2", birth_year=2012), season), Division.JUNIOR)
        self.assertEqual(classify_division(Player("3", birth_year=2011), season), Division.SENIOR)
        self.assertEqual(classify_division(Player("4", birth_year=2008), season), Division.SENIOR)
        self.assertEqual(classify_division(Player("5", birth_year=2007), season), Division.MASTERS)

    def test_unknown_birth_year(self):
        self.assertIsNone(classify_division(Player("1"), 2024))


class PlayersByDivisionTests(unittest.TestCase):
    def test_grouping_keeps_roster_order(self):
        players = [
            Player("1", "Ash", birth_year=1990),
            Player("2", "Misty", birth_year=2014),
            Player("3", "Brock", birth_year=1985),
            Player("4", "Gary"),
        ]
        tournament = Tournament(players={p.player_id: p for p in players})
        groups = players_by_division(tournament, 2024)

        self.assertEqual([p.player_id for p in groups[Division.MASTERS]], ["1", "3"])
        self.assertEqual([p.player_id for p in groups[Division.JUNIOR]], ["2"])
        self.assertEqual([p.player_id for p in groups[None]], ["4"])
        self.assertNotIn(Division.SENIOR, groups)


if __name__ == "__main__":
    unittest.main()
