from dataclasses import dataclass
from typing import List, Union
from urllib.parse import quote

from .account import Account
from .confirmations import (NO_SELECTION, SUCCESS, DistributionListChange,
                            DistributionListMemberChange, NoSelection)
from .console_record import fetch, submit
from .group import Group, GroupMember
from ..console_session import ConsoleSession
from ..utils import DEFAULT_TIMEOUT, check_school_id

LISTS_PATH = 'api/schools/{school_id}/distributionlists'
LIST_PATH = LISTS_PATH + '/{list_name}'
MEMBERS_PATH = 'api/distributionlists/{list_name}/members'
MEMBER_PATH = MEMBERS_PATH + '/{username}'


@dataclass
class DistributionList(Group):

    """A mailing list scoped to one school, named ``{school}-dl-{name}``."""

    @staticmethod
    def full_name(school_id: Union[int, str], name: str) -> str:
        """
        Builds the name the console knows a list by. Names that already
        carry the school's prefix are returned unchanged.
        """
        school_id = check_school_id(school_id)
        prefix = f'{school_id}-dl-'
        if name.startswith(prefix):
            return name
        return prefix + name


def get_distribution_lists(session: ConsoleSession,
                           school_id: Union[int, str],
                           timeout: float = DEFAULT_TIMEOUT) \
        -> List[DistributionList]:
    school_id = check_school_id(school_id)
    r = fetch(session, LISTS_PATH.format(school_id=school_id),
              timeout=timeout)
    return DistributionList.from_response(r)


def get_distribution_list_members(session: ConsoleSession,
                                  school_id: Union[int, str], name: str,
                                  timeout: float = DEFAULT_TIMEOUT) \
        -> List[GroupMember]:
    list_name = DistributionList.full_name(school_id, name)
    r = fetch(session, MEMBERS_PATH.format(list_name=quote(list_name)),
              timeout=timeout)
    return GroupMember.from_response(r)


def create_distribution_list(session: ConsoleSession,
                             school_id: Union[int, str], name: str,
                             timeout: float = DEFAULT_TIMEOUT) \
        -> DistributionListChange:
    """
    Creates the list ``{school_id}-dl-{name}``.

    :raises InvalidSchoolError: if `school_id` is malformed
    :raises OperationError: if the console rejects the request
    """
    school_id = check_school_id(school_id)
    list_name = DistributionList.full_name(school_id, name)
    submit(session, 'POST', LISTS_PATH.format(school_id=school_id),
           operation=f'create distribution list {list_name}',
           payload={'name': list_name}, timeout=timeout)
    return DistributionListChange(subject=list_name, action='Created',
                                  outcome=SUCCESS, list_name=list_name)


def remove_distribution_list(session: ConsoleSession,
                             school_id: Union[int, str], name: str,
                             timeout: float = DEFAULT_TIMEOUT) \
        -> DistributionListChange:
    school_id = check_school_id(school_id)
    list_name = DistributionList.full_name(school_id, name)
    path = LIST_PATH.format(school_id=school_id, list_name=quote(list_name))
    submit(session, 'DELETE', path,
           operation=f'remove distribution list {list_name}', timeout=timeout)
    return DistributionListChange(subject=list_name, action='Removed',
                                  outcome=SUCCESS, list_name=list_name)


def add_distribution_list_member(session: ConsoleSession,
                                 school_id: Union[int, str], name: str,
                                 account: Account = None,
                                 timeout: float = DEFAULT_TIMEOUT) \
        -> Union[DistributionListMemberChange, NoSelection]:
    """
    Adds an account to a distribution list.

    :param account: the account to add; when None nothing is sent and
        a :class:`NoSelection` is returned
    :raises OperationError: if the console rejects the request
    """
    list_name = DistributionList.full_name(school_id, name)
    if account is None:
        return NO_SELECTION
    submit(session, 'POST', MEMBERS_PATH.format(list_name=quote(list_name)),
           operation=f'add {account.username} to {list_name}',
           payload={'userName': account.username}, timeout=timeout)
    return DistributionListMemberChange(
        subject=account.username, action='Added', outcome=SUCCESS,
        name=account.display_name, username=account.username,
        list_name=list_name
    )


def remove_distribution_list_member(session: ConsoleSession,
                                    school_id: Union[int, str], name: str,
                                    account: Account = None,
                                    timeout: float = DEFAULT_TIMEOUT) \
        -> Union[DistributionListMemberChange, NoSelection]:
    list_name = DistributionList.full_name(school_id, name)
    if account is None:
        return NO_SELECTION
    path = MEMBER_PATH.format(list_name=quote(list_name),
                              username=quote(account.username))
    submit(session, 'DELETE', path,
           operation=f'remove {account.username} from {list_name}',
           timeout=timeout)
    return DistributionListMemberChange(
        subject=account.username, action='Removed', outcome=SUCCESS,
        name=account.display_name, username=account.username,
        list_name=list_name
    )
