import unittest

import requests
import responses

from school_console import cdm, exceptions
from school_console.console_data_models.school import SCHOOLS_PATH
from ..utils import ConsoleTestCase


class TestSchools(ConsoleTestCase):

    def test_get_schools(self):
        self.add_json(responses.GET, SCHOOLS_PATH, 'schools.json')
        schools = cdm.get_schools(self.session)
        self.assertEqual(schools, [cdm.School(1234, 'North High'),
                                   cdm.School(5678, 'South Middle')])
        self.assertEqual(str(schools[0]), '1234 North High')

    def test_code_keeps_leading_zeros(self):
        school = cdm.School.from_wire({'_id': '0042', '_name': 'East'})
        self.assertEqual(school.school_id, 42)
        self.assertEqual(school.code, '0042')

    def test_kept_for_session(self):
        self.add_json(responses.GET, SCHOOLS_PATH, 'schools.json')
        cdm.get_schools(self.session)
        cdm.get_schools(self.session)
        self.assertEqual(len(self.calls), 1)

        cdm.get_schools(self.session, refresh=True)
        self.assertEqual(len(self.calls), 2)

    def test_logout_forgets_schools(self):
        self.add_json(responses.GET, SCHOOLS_PATH, 'schools.json')
        cdm.get_schools(self.session)
        self.session.logout()
        with self.assertRaises(exceptions.NotConnectedError):
            cdm.get_schools(self.session)

    def test_not_connected(self):
        with self.assertRaises(exceptions.NotConnectedError):
            cdm.get_schools(None)
        self.assertEqual(len(self.calls), 0)

    def test_error_propagates(self):
        self.responses.add(responses.GET, self.url(SCHOOLS_PATH), status=502)
        with self.assertRaises(requests.exceptions.HTTPError):
            cdm.get_schools(self.session)
        self.assertIsNone(self.session.schools)


if __name__ == '__main__':
    unittest.main()
