import os
import unittest
from unittest import mock

import requests
import responses

from school_console import ConsoleSession, Credentials, connect, exceptions
from school_console.console_session import (CURRENT_USER_PATH, LOGIN_PATH,
                                            check_session)
from .utils import ConsoleTestCase

KEEP_ALIVE = {'Connection': 'keep-alive'}


class TestLogin(ConsoleTestCase):

    def setUp(self):
        super().setUp()
        self.session = ConsoleSession(base_url=self.base_url)
        self.credentials = Credentials('admin', 'secret')

    def add_login(self, status=200, headers=None):
        self.responses.add(responses.POST, self.url(LOGIN_PATH),
                           status=status,
                           headers=KEEP_ALIVE if headers is None else headers)

    def test_login(self):
        self.add_login()
        self.add_json(responses.GET, CURRENT_USER_PATH, 'current_user.json')
        identity = self.session.login(self.credentials)

        self.assertTrue(self.session.connected)
        self.assertEqual(identity.display_name, 'Test Admin')
        self.assertEqual(identity.username, 'admin')
        self.assertEqual(identity.school_count, 2)
        self.assertEqual(identity.raw['_email'], 'admin@school.test')
        self.assertIn('username=admin', self.calls[0].request.body)

    def test_login_without_keep_alive(self):
        self.add_login(headers={'Connection': 'close'})
        with self.assertRaises(exceptions.AuthenticationError):
            self.session.login(self.credentials)
        self.assertFalse(self.session.connected)
        # the identity endpoint is never asked
        self.assertEqual(len(self.calls), 1)

    def test_login_rejected(self):
        self.add_login(status=401)
        with self.assertRaises(exceptions.AuthenticationError):
            self.session.login(self.credentials)
        self.assertFalse(self.session.connected)

    def test_relogin_replaces_state(self):
        self.add_login()
        self.add_json(responses.GET, CURRENT_USER_PATH, 'current_user.json')
        self.session.login(self.credentials)
        self.session.schools = ['stale']

        self.add_login(status=403)
        with self.assertRaises(exceptions.AuthenticationError):
            self.session.login(Credentials('someone', 'else'))
        self.assertIsNone(self.session.identity)
        self.assertIsNone(self.session.schools)

    def test_logout(self):
        self.add_login()
        self.add_json(responses.GET, CURRENT_USER_PATH, 'current_user.json')
        self.session.login(self.credentials)
        self.session.logout()
        self.assertFalse(self.session.connected)
        with self.assertRaises(exceptions.NotConnectedError):
            check_session(self.session)

    def test_connect(self):
        self.add_login()
        self.add_json(responses.GET, CURRENT_USER_PATH, 'current_user.json')
        session = connect(self.credentials, base_url=self.base_url)
        self.assertIsInstance(session, ConsoleSession)
        self.assertTrue(session.connected)

    def test_network_error_propagates(self):
        self.responses.add(responses.POST, self.url(LOGIN_PATH),
                           body=requests.exceptions.ConnectTimeout())
        with self.assertRaises(requests.exceptions.ConnectTimeout):
            self.session.login(self.credentials)


class TestCheckSession(unittest.TestCase):

    def test_missing(self):
        with self.assertRaises(exceptions.NotConnectedError) as cm:
            check_session(None)
        self.assertIn('must open a session', str(cm.exception))

    def test_logged_out(self):
        with self.assertRaises(exceptions.NotConnectedError):
            check_session(ConsoleSession())

    def test_mock_session(self):
        session = mock.Mock(connected=True)
        self.assertIs(check_session(session), session)


class TestCredentials(unittest.TestCase):

    @mock.patch.dict(os.environ, {'CONSOLE_USERNAME': 'admin',
                                  'CONSOLE_PASSWORD': 'secret'})
    def test_from_environment(self):
        self.assertEqual(Credentials.from_environment(),
                         Credentials('admin', 'secret'))

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_missing_environment(self):
        with self.assertRaises(EnvironmentError):
            Credentials.from_environment()

    def test_repr_hides_password(self):
        self.assertNotIn('secret', repr(Credentials('admin', 'secret')))


if __name__ == '__main__':
    unittest.main()
