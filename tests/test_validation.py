import unittest

from cricket_api.models import Delivery
from cricket_api.validation import DeliveryValidationError, validate_delivery


class TestValidateDelivery(unittest.TestCase):
    def test_valid_deliveries(self):
        validate_delivery(Delivery(runs_off_bat=4))
        validate_delivery(Delivery(extras_type="Wide", extras_runs=1))
        validate_delivery(Delivery(extras_type="NoBall", extras_runs=1, runs_off_bat=6))
        validate_delivery(Delivery(wicket_type="Bowled", dismissed_player_id="p1"))
        validate_delivery(Delivery(runs_off_bat=1, wicket_type="RunOut", dismissed_player_id="p2"))

    def test_runs_off_bat_range(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(runs_off_bat=11))
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(runs_off_bat=-1))

    def test_extras_runs_range(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(extras_type="Bye", extras_runs=11))

    def test_extras_runs_without_extras(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(extras_runs=1))

    def test_no_bat_runs_on_wide(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(extras_type="Wide", extras_runs=1, runs_off_bat=2))

    def test_wicket_needs_dismissed_player(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(wicket_type="Caught"))
        validate_delivery(Delivery(wicket_type="Caught"), require_dismissed_player=False)

    def test_unknown_enumerations(self):
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(extras_type="Overthrow"))
        with self.assertRaises(DeliveryValidationError):
            validate_delivery(Delivery(wicket_type="Retired"))

    def test_is_value_error(self):
        self.assertTrue(issubclass(DeliveryValidationError, ValueError))


if __name__ == "__main__":
    unittest.main()
