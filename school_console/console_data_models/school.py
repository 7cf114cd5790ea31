from dataclasses import dataclass, field
from typing import List

from .console_record import ConsoleRecord, fetch
from .wire_format import build_field_map
from ..console_session import ConsoleSession, check_session
from ..utils import DEFAULT_TIMEOUT

SCHOOLS_PATH = 'api/schools'


@dataclass(frozen=True)
class School(ConsoleRecord):

    """A school the logged in user administers."""

    school_id: int
    name: str
    raw: dict = field(default_factory=dict, repr=False, compare=False,
                      hash=False)

    field_map = build_field_map({
        'id': 'school_id',
        'schoolId': 'school_id',
        'name': 'name',
    })
    converters = {'school_id': int}

    @property
    def code(self) -> str:
        """The four digit id used in URLs, with its leading zeros."""
        return f'{self.school_id:04d}'

    def __str__(self):
        return f'{self.school_id} {self.name}'


def get_schools(session: ConsoleSession, refresh: bool = False,
                timeout: float = DEFAULT_TIMEOUT) -> List[School]:
    """
    Lists the schools available to the logged in user. The list is
    kept on the session until the next login.

    :param refresh: fetch the list again even if the session holds one
    """
    check_session(session)
    if session.schools is not None and not refresh:
        return list(session.schools)
    r = fetch(session, SCHOOLS_PATH, timeout=timeout)
    session.schools = School.from_response(r)
    return list(session.schools)
