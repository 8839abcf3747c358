import unittest

from cricket_api import config


class TestConfig(unittest.TestCase):
    def test_defaults_are_valid(self):
        config.validate_config()

    def test_unknown_default_format_rejected(self):
        original = config.DEFAULT_MATCH_FORMAT
        config.DEFAULT_MATCH_FORMAT = "HUNDRED"
        try:
            with self.assertRaises(RuntimeError):
                config.validate_config()
        finally:
            config.DEFAULT_MATCH_FORMAT = original


if __name__ == "__main__":
    unittest.main()
