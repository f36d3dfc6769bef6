from datetime import date, datetime

from django.test import SimpleTestCase

from apps.subscriptions.delays import compute_delay, parse_delay


class DelayTests(SimpleTestCase):
    def test_compute_delay(self):
        origin = date(2024, 1, 31)
        cases = {
            '1 year': date(2025, 1, 31),
            '1 year, 1 day ago': date(2025, 1, 30),
            '1 month': date(2024, 2, 29),
            '2 weeks': date(2024, 2, 14),
            '3 days ago': date(2024, 1, 28),
            '6 months, eom': date(2024, 7, 31),
            'bom': date(2024, 1, 1),
            'eoy': date(2024, 12, 31),
            '1 year, boy': date(2025, 1, 1),
            ' 2  Years ': date(2026, 1, 31),
        }
        for expression, expected in cases.items():
            with self.subTest(expression=expression):
                self.assertEqual(compute_delay(expression, origin), expected)

    def test_compute_delay_on_datetime(self):
        self.assertEqual(
            compute_delay('2 hours, 30 minutes ago', datetime(2024, 5, 1, 12, 0)),
            datetime(2024, 5, 1, 13, 30),
        )

    def test_invalid_expressions(self):
        for expression in (None, '', '  ', 'one year', '1 fortnight', '1 year,', '-1 day'):
            with self.subTest(expression=expression):
                with self.assertRaises(ValueError):
                    parse_delay(expression)
