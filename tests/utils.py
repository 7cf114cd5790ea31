from urllib.parse import urljoin
import json
import unittest

import responses

from school_console.console_session import ConsoleSession, Identity
from .constants import BASE_URL, DATA_DIR


def load_fixture(name: str):
    """Parsed JSON for `.json` fixtures, raw bytes for anything else."""
    path = DATA_DIR/name
    if path.suffix == '.json':
        with open(path, 'r') as f:
            return json.load(f)
    return path.read_bytes()


class ConsoleTestCase(unittest.TestCase):

    """
    Opens a logged in session against a mocked console. Nothing is
    sent over the network; any request without a registered response
    fails with a `ConnectionError`.
    """

    base_url = BASE_URL

    def setUp(self):
        self.session = ConsoleSession(base_url=self.base_url)
        self.session.identity = Identity(display_name='Test Admin',
                                         username='admin', school_count=2)
        self.responses = responses.RequestsMock(
            assert_all_requests_are_fired=False
        )
        self.responses.start()

        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)

    def url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def add_json(self, method, path: str, fixture=None, status=200, **kwargs):
        body = fixture if fixture is None or isinstance(fixture, (dict, list)) \
            else load_fixture(fixture)
        self.responses.add(method, self.url(path), json=body, status=status,
                           **kwargs)

    @property
    def calls(self):
        return self.responses.calls
