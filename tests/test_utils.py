from datetime import datetime
import unittest

from school_console import exceptions
from school_console.utils import (check_school_id, parse_bool,
                                  parse_console_datetime)

BAD_SCHOOL_IDS = ['123', '12345', 'abcd', '12a4', '', ' 1234', '1234\n',
                  None, 123, 12345, 1234.5, True]


class TestSchoolId(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(check_school_id('1234'), '1234')
        self.assertEqual(check_school_id(5678), '5678')
        self.assertEqual(check_school_id('0042'), '0042')

    def test_invalid(self):
        for school_id in BAD_SCHOOL_IDS:
            with self.subTest(school_id=school_id):
                with self.assertRaises(exceptions.InvalidSchoolError):
                    check_school_id(school_id)

    def test_message_names_id(self):
        e = exceptions.InvalidSchoolError('12a4')
        self.assertIn('12a4', str(e))


class TestConsoleDatetime(unittest.TestCase):

    def test_whole_seconds(self):
        self.assertEqual(parse_console_datetime('2023-05-01T10:00:00'),
                         datetime(2023, 5, 1, 10, 0, 0))

    def test_fraction_discarded(self):
        self.assertEqual(parse_console_datetime('2023-05-01T10:00:00.123'),
                         datetime(2023, 5, 1, 10, 0, 0))
        self.assertEqual(parse_console_datetime('2023-05-01T10:00:00.1234567'),
                         datetime(2023, 5, 1, 10, 0, 0))

    def test_unparseable(self):
        for value in ('not-a-date', '', '2023-13-01T10:00:00', '2023-05-01'):
            with self.subTest(value=value):
                self.assertIsNone(parse_console_datetime(value))

    def test_not_a_string(self):
        for value in (None, 20230501, 1.5, ['2023-05-01T10:00:00'],
                      datetime(2023, 5, 1)):
            with self.subTest(value=value):
                self.assertIsNone(parse_console_datetime(value))


class TestParseBool(unittest.TestCase):

    def test_strings(self):
        self.assertTrue(parse_bool('true'))
        self.assertTrue(parse_bool('True'))
        self.assertFalse(parse_bool('false'))
        self.assertFalse(parse_bool(''))

    def test_native(self):
        self.assertTrue(parse_bool(True))
        self.assertFalse(parse_bool(None))


if __name__ == '__main__':
    unittest.main()
