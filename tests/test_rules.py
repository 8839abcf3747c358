import unittest

from cricket_api.models import Delivery
from cricket_api.rules import MATCH_FORMATS, ScoringRules, UnknownFormatError, rules_for


class TestRulesFor(unittest.TestCase):
    def test_default_is_t20(self):
        rules = rules_for()
        self.assertEqual(rules.name, "T20")
        self.assertEqual(rules.max_legal_balls, 120)

    def test_named_formats(self):
        self.assertEqual(rules_for("odi").overs_per_innings, 50)
        self.assertEqual(rules_for("T10").max_legal_balls, 60)

    def test_overs_override_keeps_format_limits(self):
        rules = rules_for("T20", 8)
        self.assertEqual(rules.overs_per_innings, 8)
        self.assertEqual(rules.max_wickets, 10)
        self.assertEqual(rules.name, "T20")

    def test_unknown_format(self):
        with self.assertRaises(UnknownFormatError):
            rules_for("HUNDRED")

    def test_non_positive_overs(self):
        with self.assertRaises(UnknownFormatError):
            rules_for("T20", 0)

    def test_unknown_format_is_value_error(self):
        self.assertTrue(issubclass(UnknownFormatError, ValueError))


class TestSuperOver(unittest.TestCase):
    def test_two_wickets_end_it(self):
        rules = MATCH_FORMATS["SUPER_OVER"]
        self.assertFalse(rules.should_end_innings(3, 1))
        self.assertTrue(rules.should_end_innings(3, 2))
        self.assertTrue(rules.should_end_innings(6, 0))


class TestScoringRulesSeam(unittest.TestCase):
    def setUp(self):
        self.rules = ScoringRules(overs_per_innings=5)

    def test_delegates(self):
        self.assertFalse(self.rules.is_legal_ball("NoBall"))
        self.assertEqual(self.rules.ball_runs(2, 1), 3)
        self.assertTrue(self.rules.should_rotate_strike(0, "LegBye", 1))
        self.assertTrue(self.rules.should_end_innings(30, 0))
        self.assertFalse(self.rules.should_end_innings(29, 9))

    def test_display_text(self):
        self.assertEqual(self.rules.display_text(Delivery(runs_off_bat=3)), "3")
        self.assertEqual(self.rules.display_text(Delivery(extras_type="Wide", extras_runs=1)), "Wd")

    def test_to_dict(self):
        d = self.rules.to_dict()
        self.assertEqual(d["overs_per_innings"], 5)
        self.assertEqual(d["max_legal_balls"], 30)


if __name__ == "__main__":
    unittest.main()
