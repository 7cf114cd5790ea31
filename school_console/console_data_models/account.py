from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from .console_record import ConsoleRecord, fetch
from .wire_format import build_field_map, parse_xml_array
from ..console_session import ConsoleSession
from ..utils import (DEFAULT_TIMEOUT, check_school_id, parse_bool,
                     parse_console_datetime)

SERVICE_ACCOUNTS_PATH = 'api/schools/{school_id}/serviceaccounts'


def _as_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    return parse_console_datetime(value)


@dataclass
class Account(ConsoleRecord):

    """
    A student or service account in the console's directory. Apart
    from the password and cloud-service state, accounts are read-only
    from this package's point of view.

    :param str distinguished_name: the directory DN of the account
    :param str username: the login name
    :param bool disabled: whether the account is disabled
    :param datetime created: None if the console didn't report a
        readable date
    """

    distinguished_name: str = None
    username: str = None
    first_name: str = None
    last_name: str = None
    disabled: bool = False
    email: str = None
    created: Optional[datetime] = None
    last_logon: Optional[datetime] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    # JSON endpoints use camelCase, the roster XML uses PascalCase
    field_map = build_field_map({
        'distinguishedName': 'distinguished_name',
        'DistinguishedName': 'distinguished_name',
        'login': 'username',
        'Login': 'username',
        'userName': 'username',
        'UserName': 'username',
        'firstName': 'first_name',
        'FirstName': 'first_name',
        'lastName': 'last_name',
        'LastName': 'last_name',
        'disabled': 'disabled',
        'Disabled': 'disabled',
        'email': 'email',
        'Email': 'email',
        'created': 'created',
        'Created': 'created',
        'lastLogon': 'last_logon',
        'LastLogon': 'last_logon',
    })
    converters = {
        'disabled': parse_bool,
        'created': _as_datetime,
        'last_logon': _as_datetime,
    }
    xml_tag = 'Student'

    @property
    def display_name(self) -> str:
        return ' '.join(n for n in (self.first_name, self.last_name) if n)

    def matches(self, identity: str) -> bool:
        """Exact, case-sensitive comparison against the login name."""
        return self.username == identity

    def __str__(self):
        return f'{self.display_name} ({self.username})'


@dataclass
class ServiceAccount(Account):

    xml_tag = 'ServiceAccount'


def parse_roster(document: Union[bytes, str]) -> List[Account]:
    """Reads a full roster document (``ArrayOfStudent``) into accounts."""
    return [Account.from_wire(obj)
            for obj in parse_xml_array(document, Account.xml_tag)]


def get_service_accounts(session: ConsoleSession, school_id: Union[int, str],
                         timeout: float = DEFAULT_TIMEOUT) \
        -> List[ServiceAccount]:
    school_id = check_school_id(school_id)
    r = fetch(session, SERVICE_ACCOUNTS_PATH.format(school_id=school_id),
              timeout=timeout)
    return ServiceAccount.from_response(r)
