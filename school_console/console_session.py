from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urljoin
import logging
import os

import requests

from . import exceptions
from .utils import BASE_URL, DEFAULT_TIMEOUT, get_header, strip_prefix

LOGIN_PATH = 'api/authentication/login'
CURRENT_USER_PATH = 'api/users/current'


class Credentials(namedtuple('Credentials', 'username password')):

    __slots__ = ()

    @classmethod
    def from_environment(cls) -> 'Credentials':
        """
        Reads credentials from the `CONSOLE_USERNAME` and
        `CONSOLE_PASSWORD` environment variables.
        """
        try:
            return cls(os.environ['CONSOLE_USERNAME'],
                       os.environ['CONSOLE_PASSWORD'])
        except KeyError:
            raise EnvironmentError('Console username or password are not in '
                                   'the environment.')

    def __repr__(self):
        return f'Credentials(username={self.username!r}, password=***)'


@dataclass
class Identity(object):

    """Who the session is logged in as."""

    display_name: str
    username: str
    school_count: int
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_wire(cls, obj: dict) -> 'Identity':
        stripped = {strip_prefix(k): v for k, v in obj.items()}
        schools = stripped.get('schools') or []
        return cls(display_name=stripped.get('displayName'),
                   username=stripped.get('userName'),
                   school_count=len(schools),
                   raw=dict(obj))


class ConsoleSession(requests.Session):

    """
    Extends the regular :class:`requests.Session` class with the
    console's login handshake. The console authenticates with a cookie
    that is set by the login call and sent along with every subsequent
    request, so the session's own cookie jar is the authentication
    handle.

    A session is created logged out. Call :meth:`login` (or use
    :func:`connect`) before handing it to any other function in this
    package.

    :ivar logging.Logger logger: module-wide logger, accessed by
        __name__
    :ivar Identity identity: the logged in user, None when logged out
    """

    def __init__(self, base_url: str = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url if base_url is not None else BASE_URL
        self.identity: Optional[Identity] = None
        self.schools: Optional[List] = None
        """School list, fetched once per login."""
        self.logger.debug('Session opened.')

    @property
    def connected(self) -> bool:
        return self.identity is not None

    def url(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def login(self, credentials: Credentials,
              timeout: float = DEFAULT_TIMEOUT) -> Identity:
        """
        Submits `credentials` to the console and, once authenticated,
        fetches the identity of the current user. Any previous login
        held by this session is discarded first.

        :param credentials: username and password
        :param timeout: seconds to wait for each request
        :raises AuthenticationError: if the console does not answer
            with an authenticated keep-alive connection
        :return: the identity of the logged in user
        """
        self.logout()
        self.logger.info(f'Logging in as {credentials.username}.')
        data = {'username': credentials.username,
                'password': credentials.password}
        r = self.post(self.url(LOGIN_PATH), data=data,
                      headers=get_header(), timeout=timeout)
        connection = r.headers.get('Connection', '')
        if not r.ok or connection.lower() != 'keep-alive':
            self.cookies.clear()
            self.logger.info(f'Login rejected with status {r.status_code}.')
            raise exceptions.AuthenticationError()

        r = self.get(self.url(CURRENT_USER_PATH), headers=get_header(),
                     timeout=timeout)
        r.raise_for_status()
        self.identity = Identity.from_wire(r.json())
        self.logger.info(f'Logged in as {self.identity.display_name} with '
                         f'access to {self.identity.school_count} school(s).')
        return self.identity

    def logout(self):
        """Forgets the authentication cookie and everything derived from it."""
        if self.connected:
            self.logger.debug(f'Dropping login for {self.identity.username}.')
        self.cookies.clear()
        self.identity = None
        self.schools = None


def connect(credentials: Credentials = None, base_url: str = None,
            timeout: float = DEFAULT_TIMEOUT) -> ConsoleSession:
    """
    Opens a new :class:`ConsoleSession` and logs in. Credentials are
    read from the environment when none are given.
    """
    if credentials is None:
        credentials = Credentials.from_environment()
    session = ConsoleSession(base_url=base_url)
    session.login(credentials, timeout=timeout)
    return session


def check_session(session: Optional[ConsoleSession]) -> ConsoleSession:
    """Throws an error if `session` is missing or logged out."""
    if session is None or not getattr(session, 'connected', False):
        raise exceptions.NotConnectedError()
    return session
