"""
Tests for the tournament snapshot structures.
"""

import unittest

from vgctour.tournament_core.structure import (
    Match,
    Outcome,
    Player,
    PlayerResult,
    Round,
    RoundKind,
    Tournament,
    create_bye_match,
    create_match,
    create_tournament_from_matches,
)


class MatchTests(unittest.TestCase):
    def test_results_from_each_side(self):
        match = create_match(1, "a", "b", Outcome.PLAYER1_WIN)
        self.assertEqual(match.result_for("a"), PlayerResult.WIN)
        self.assertEqual(match.result_for("b"), PlayerResult.LOSS)
        self.assertIsNone(match.result_for("c"))
        self.assertEqual(match.winner_id(), "a")

        match = create_match(1, "a", "b", Outcome.PLAYER2_WIN)
        self.assertEqual(match.result_for("a"), PlayerResult.LOSS)
        self.assertEqual(match.winner_id(), "b")

    def test_tie_and_double_loss(self):
        tie = create_match(1, "a", "b", Outcome.TIE)
        self.assertEqual(tie.result_for("a"), PlayerResult.TIE)
        self.assertEqual(tie.result_for("b"), PlayerResult.TIE)
        self.assertIsNone(tie.winner_id())

        double_loss = create_match(1, "a", "b", Outcome.DOUBLE_LOSS)
        self.assertEqual(double_loss.result_for("a"), PlayerResult.LOSS)
        self.assertEqual(double_loss.result_for("b"), PlayerResult.LOSS)
        self.assertIsNone(double_loss.winner_id())

    def test_unreported_match(self):
        match = create_match(3, "a", "b")
        self.assertFalse(match.is_reported)
        self.assertEqual(match.result_for("a"), PlayerResult.UNREPORTED)
        self.assertIsNone(match.winner_id())

    def test_bye(self):
        bye = create_bye_match("a")
        self.assertTrue(bye.is_bye)
        self.assertEqual(bye.table, 0)
        self.assertEqual(bye.result_for("a"), PlayerResult.BYE)
        self.assertIsNone(bye.opponent_of("a"))
        self.assertEqual(bye.player_ids, ("a",))

    def test_bye_with_two_players_rejected(self):
        with self.assertRaises(ValueError):
            Match(0, "a", "b", Outcome.BYE)

    def test_opponent_of(self):
        match = create_match(1, "a", "b", Outcome.TIE)
        self.assertEqual(match.opponent_of("a"), "b")
        self.assertEqual(match.opponent_of("b"), "a")
        self.assertIsNone(match.opponent_of("c"))

    def test_empty_id_is_never_involved(self):
        match = Match(1, "a", None, Outcome.UNREPORTED)
        self.assertFalse(match.involves(""))
        self.assertFalse(match.involves(None))


class RoundTests(unittest.TestCase):
    def test_round_number_must_be_positive(self):
        with self.assertRaises(ValueError):
            Round(0)
        with self.assertRaises(ValueError):
            Round(-2)

    def test_completeness_ignores_byes(self):
        round = Round(1, matches=[create_match(1, "a", "b", Outcome.TIE), create_bye_match("c")])
        self.assertTrue(round.is_complete)

        round = round.add_match(create_match(2, "d", "e"))
        self.assertFalse(round.is_complete)
        self.assertEqual(round.non_bye_match_count, 2)

    def test_sorted_matches(self):
        round = Round(
            1,
            matches=[
                create_match(3, "a", "b"),
                create_bye_match("e"),
                create_match(1, "c", "d"),
            ],
        )
        self.assertEqual([m.table for m in round.sorted_matches], [0, 1, 3])


class TournamentTests(unittest.TestCase):
    def test_duplicate_round_numbers_rejected(self):
        with self.assertRaises(ValueError):
            Tournament(rounds=[Round(1), Round(1)])

    def test_rounds_are_sorted(self):
        tournament = Tournament(rounds=[Round(3), Round(1), Round(2)])
        self.assertEqual([r.number for r in tournament.rounds], [1, 2, 3])

    def test_final_swiss_round_skips_top_cut(self):
        tournament = Tournament(
            rounds=[Round(1), Round(2), Round(3, RoundKind.ELIMINATION)]
        )
        self.assertEqual(tournament.final_swiss_round.number, 2)
        self.assertEqual(len(tournament.elimination_rounds), 1)

    def test_no_swiss_rounds(self):
        self.assertIsNone(Tournament().final_swiss_round)
        self.assertTrue(Tournament().is_empty)

    def test_rounds_through(self):
        tournament = Tournament(
            rounds=[Round(1), Round(2), Round(3, RoundKind.ELIMINATION)]
        )
        self.assertEqual([r.number for r in tournament.rounds_through(2)], [1, 2])
        self.assertEqual(
            [r.number for r in tournament.rounds_through(2, inclusive=False)], [1]
        )
        self.assertEqual(
            [r.number for r in tournament.rounds_through(3, swiss_only=True)], [1, 2]
        )

    def test_unknown_player_placeholder(self):
        tournament = create_tournament_from_matches(
            [Player("1", "Ash", "Ketchum")],
            [(1, create_match(1, "1", "99", Outcome.PLAYER1_WIN))],
        )
        self.assertEqual(tournament.player("1").name, "Ash Ketchum")
        placeholder = tournament.player("99")
        self.assertTrue(placeholder.is_placeholder)
        self.assertEqual(placeholder.name, "Unknown (99)")
        self.assertEqual(tournament.dangling_player_ids(), ["99"])

    def test_create_tournament_with_elimination_rounds(self):
        tournament = create_tournament_from_matches(
            [Player("1"), Player("2")],
            [
                (1, create_match(1, "1", "2", Outcome.PLAYER1_WIN)),
                (2, create_match(1, "1", "2", Outcome.PLAYER2_WIN)),
            ],
            elimination_rounds=(2,),
        )
        self.assertTrue(tournament.round(1).is_swiss)
        self.assertFalse(tournament.round(2).is_swiss)


if __name__ == "__main__":
    unittest.main()
