import unittest

from cricket_api.models import EXTRAS_TYPES
from cricket_api.scoring import (
    ball_display_text,
    calculate_ball_runs,
    is_legal_ball,
    should_end_innings,
    should_rotate_strike,
)


class TestLegality(unittest.TestCase):
    def test_fair_deliveries_are_legal(self):
        for extras in ("None", "Bye", "LegBye"):
            self.assertTrue(is_legal_ball(extras), extras)

    def test_wide_and_no_ball_are_not_legal(self):
        for extras in ("Wide", "NoBall"):
            self.assertFalse(is_legal_ball(extras), extras)

    def test_total_over_all_extras_types(self):
        legal = [e for e in EXTRAS_TYPES if is_legal_ball(e)]
        self.assertEqual(sorted(legal), ["Bye", "LegBye", "None"])


class TestBallRuns(unittest.TestCase):
    def test_sum(self):
        self.assertEqual(calculate_ball_runs(0, 0), 0)
        self.assertEqual(calculate_ball_runs(4, 0), 4)
        self.assertEqual(calculate_ball_runs(0, 1), 1)
        self.assertEqual(calculate_ball_runs(4, 1), 5)

    def test_sum_matches_addition(self):
        for r in range(7):
            for e in range(6):
                self.assertEqual(calculate_ball_runs(r, e), r + e)


class TestStrikeRotation(unittest.TestCase):
    def test_runs_off_bat(self):
        self.assertTrue(should_rotate_strike(1, "None", 0))
        self.assertTrue(should_rotate_strike(3, "None", 0))
        self.assertFalse(should_rotate_strike(0, "None", 0))
        self.assertFalse(should_rotate_strike(2, "None", 0))
        self.assertFalse(should_rotate_strike(4, "None", 0))
        self.assertFalse(should_rotate_strike(6, "None", 0))

    def test_byes_use_extras_runs(self):
        self.assertTrue(should_rotate_strike(0, "Bye", 1))
        self.assertFalse(should_rotate_strike(0, "Bye", 2))
        self.assertTrue(should_rotate_strike(0, "LegBye", 3))
        self.assertFalse(should_rotate_strike(0, "LegBye", 4))

    def test_wide_never_rotates(self):
        self.assertFalse(should_rotate_strike(0, "Wide", 1))
        self.assertFalse(should_rotate_strike(0, "Wide", 2))
        self.assertFalse(should_rotate_strike(0, "Wide", 5))

    def test_no_ball_ignores_penalty_run(self):
        self.assertFalse(should_rotate_strike(0, "NoBall", 1))
        self.assertTrue(should_rotate_strike(1, "NoBall", 1))
        self.assertFalse(should_rotate_strike(4, "NoBall", 1))


class TestEndInnings(unittest.TestCase):
    def test_over_quota(self):
        self.assertTrue(should_end_innings(120, 3, 20))
        self.assertFalse(should_end_innings(119, 3, 20))

    def test_all_out(self):
        self.assertTrue(should_end_innings(50, 10, 20))
        self.assertFalse(should_end_innings(50, 9, 20))

    def test_custom_limits(self):
        self.assertTrue(should_end_innings(3, 2, 1, max_wickets=2))
        self.assertTrue(should_end_innings(8, 0, 1, balls_per_over=8))
        self.assertFalse(should_end_innings(7, 0, 1, balls_per_over=8))

    def test_boundary_in_simulated_sequence(self):
        # 20 overs of dot balls: flips exactly at the 120th legal ball
        results = [should_end_innings(b, 0, 20) for b in range(0, 121)]
        self.assertEqual(results.index(True), 120)

        # wickets every ball: flips at the 10th wicket, well inside the quota
        results = [should_end_innings(w, w, 20) for w in range(0, 11)]
        self.assertEqual(results.index(True), 10)


class TestDisplayText(unittest.TestCase):
    def test_runs_and_dot(self):
        self.assertEqual(ball_display_text(0, "None", 0, "None"), "•")
        self.assertEqual(ball_display_text(4, "None", 0, "None"), "4")
        self.assertEqual(ball_display_text(6, "None", 0, "None"), "6")

    def test_wicket(self):
        self.assertEqual(ball_display_text(0, "None", 0, "Bowled"), "W")
        self.assertEqual(ball_display_text(1, "None", 0, "RunOut"), "1W")

    def test_wide(self):
        self.assertEqual(ball_display_text(0, "Wide", 1, "None"), "Wd")
        self.assertEqual(ball_display_text(0, "Wide", 3, "None"), "Wd+2")

    def test_no_ball(self):
        self.assertEqual(ball_display_text(0, "NoBall", 1, "None"), "Nb")
        self.assertEqual(ball_display_text(4, "NoBall", 1, "None"), "Nb+4")

    def test_byes(self):
        self.assertEqual(ball_display_text(0, "Bye", 1, "None"), "1b")
        self.assertEqual(ball_display_text(0, "LegBye", 2, "None"), "2lb")


class TestPurity(unittest.TestCase):
    def test_repeated_calls_agree(self):
        for _ in range(3):
            self.assertEqual(is_legal_ball("Wide"), False)
            self.assertEqual(calculate_ball_runs(3, 2), 5)
            self.assertEqual(should_rotate_strike(0, "Bye", 1), True)
            self.assertEqual(should_end_innings(120, 3, 20), True)
            self.assertEqual(ball_display_text(0, "LegBye", 2, "None"), "2lb")


if __name__ == "__main__":
    unittest.main()
