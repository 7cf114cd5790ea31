import json
import unittest

import responses

from school_console import cdm, exceptions
from school_console.console_data_models.cloud_service import CLOUD_SERVICE_PATH
from school_console.console_data_models.confirmations import (
    FAILED_TO_UPDATE, SUCCESS
)
from ..utils import ConsoleTestCase

GOOGLE_STUDENTS = CLOUD_SERVICE_PATH.format(account_type='student',
                                            service='google')


class TestCloudService(ConsoleTestCase):

    def test_one_record_per_identity(self):
        self.add_json(responses.PUT, GOOGLE_STUDENTS)
        results = cdm.set_cloud_service(
            self.session, ['jdoe', 'bsmith'], cdm.AccountType.Student,
            cdm.CloudService.Google, cdm.ServiceStatus.Enabled
        )
        self.assertEqual([r.identity for r in results], ['jdoe', 'bsmith'])
        for result in results:
            self.assertEqual(result.service, 'google')
            self.assertEqual(result.status, 'Enabled')
            self.assertEqual(result.outcome, SUCCESS)
        self.assertEqual(json.loads(self.calls[1].request.body),
                         {'userName': 'bsmith', 'status': 'Enabled'})

    def test_accepts_strings(self):
        self.add_json(responses.PUT, CLOUD_SERVICE_PATH.format(
            account_type='serviceaccount', service='zoom'))
        results = cdm.set_cloud_service(self.session, 'svc-print',
                                        'ServiceAccount', 'zoom', 'disabled')
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].status, 'Disabled')
        self.assertEqual(results[0].account_type, 'serviceaccount')

    def test_failure_collapses(self):
        self.add_json(responses.PUT, GOOGLE_STUDENTS)
        self.add_json(responses.PUT, GOOGLE_STUDENTS, status=500)
        results = cdm.set_cloud_service(self.session,
                                        ['jdoe', 'bsmith', 'cjones'],
                                        'student', 'google', 'Enabled')
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].outcome, FAILED_TO_UPDATE)
        self.assertEqual(results[0].subject, 'jdoe, bsmith, cjones')
        # the batch stops at the first failure
        self.assertEqual(len(self.calls), 2)

    def test_unreachable(self):
        results = cdm.set_cloud_service(self.session, ['jdoe'], 'student',
                                        'google', 'Enabled')
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].outcome, FAILED_TO_UPDATE)

    def test_unknown_service(self):
        with self.assertRaises(ValueError):
            cdm.set_cloud_service(self.session, ['jdoe'], 'student',
                                  'myspace', 'Enabled')
        self.assertEqual(len(self.calls), 0)

    def test_six_services(self):
        self.assertEqual(len(cdm.CloudService), 6)

    def test_not_connected(self):
        with self.assertRaises(exceptions.NotConnectedError):
            cdm.set_cloud_service(None, ['jdoe'], 'student', 'google',
                                  'Enabled')


if __name__ == '__main__':
    unittest.main()
