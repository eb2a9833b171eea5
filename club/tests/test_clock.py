import unittest

from club.clock import ClockValue, billed_hours


class ClockValueTest(unittest.TestCase):
    """Parsing, ordering and clamped arithmetic of HH:MM values."""

    def test_parse_and_render_are_zero_padded(self) -> None:
        value = ClockValue.parse("09:05")
        self.assertEqual(value, ClockValue(9, 5))
        self.assertEqual(str(value), "09:05")
        self.assertEqual(str(ClockValue(0, 0)), "00:00")

    def test_parse_rejects_malformed_tokens(self) -> None:
        for text in ["9:05", "09-05", "24:00", "12:60", "ab:cd", "09:055", ""]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    ClockValue.parse(text)

    def test_ordering_follows_hours_then_minutes(self) -> None:
        self.assertLess(ClockValue(9, 59), ClockValue(10, 0))
        self.assertLess(ClockValue(10, 1), ClockValue(10, 2))
        self.assertGreaterEqual(ClockValue(19, 0), ClockValue(19, 0))
        self.assertEqual(sorted([ClockValue(12, 0), ClockValue(8, 30)]), [ClockValue(8, 30), ClockValue(12, 0)])

    def test_subtraction_normalizes_and_clamps_at_zero(self) -> None:
        self.assertEqual(ClockValue(12, 33) - ClockValue(9, 54), ClockValue(2, 39))
        self.assertEqual(ClockValue(9, 0) - ClockValue(10, 0), ClockValue(0, 0))

    def test_addition_carries_minutes_into_hours(self) -> None:
        self.assertEqual(ClockValue(2, 39) + ClockValue(3, 19), ClockValue(5, 58))
        self.assertEqual(ClockValue(20, 30) + ClockValue(5, 45), ClockValue(26, 15))


class BilledHoursTest(unittest.TestCase):
    def test_partial_hours_round_up(self) -> None:
        self.assertEqual(billed_hours(ClockValue(0, 1)), 1)
        self.assertEqual(billed_hours(ClockValue(0, 59)), 1)
        self.assertEqual(billed_hours(ClockValue(1, 0)), 1)
        self.assertEqual(billed_hours(ClockValue(1, 1)), 2)

    def test_zero_minutes_still_bills_one_hour(self) -> None:
        self.assertEqual(billed_hours(ClockValue(0, 0)), 1)


if __name__ == "__main__":
    unittest.main()
