from dataclasses import dataclass, field
from typing import List, Optional, Union
import logging

from .console_record import ConsoleRecord, fetch
from .wire_format import (GROUP_COLLECTIONS, build_field_map,
                          combine_collections, json_array)
from .. import exceptions
from ..console_session import ConsoleSession
from ..utils import DEFAULT_TIMEOUT, check_school_id, parse_bool

GROUPS_PATH = 'api/schools/{school_id}/groups'
GROUP_MEMBERS_PATH = 'api/groups/members'


@dataclass
class Group(ConsoleRecord):

    """
    A group of accounts within a school. The console keeps "central"
    groups, managed by the school board, apart from "local" ones that
    the school manages itself; `scope` records which one a group came
    from.
    """

    group_name: str = None
    distinguished_name: str = None
    scope: str = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    field_map = build_field_map({
        'groupName': 'group_name',
        'name': 'group_name',
        'distinguishedName': 'distinguished_name',
        'scope': 'scope',
    })

    def __str__(self):
        return self.group_name


@dataclass
class GroupMember(ConsoleRecord):

    username: str = None
    display_name: str = None
    can_delete: bool = False
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    field_map = build_field_map({
        'userName': 'username',
        'login': 'username',
        'displayName': 'display_name',
        'canDelete': 'can_delete',
    })
    converters = {'can_delete': parse_bool}


def get_groups(session: ConsoleSession, school_id: Union[int, str],
               name: str = None, timeout: float = DEFAULT_TIMEOUT) \
        -> List[Group]:
    """
    Lists the central and local groups of a school as one sequence,
    central groups first.

    :param school_id: the four digit school ID
    :param name: only return the group with exactly this name
    :raises InvalidSchoolError: if `school_id` is malformed
    """
    school_id = check_school_id(school_id)
    r = fetch(session, GROUPS_PATH.format(school_id=school_id),
              timeout=timeout)
    groups = [Group.from_wire(obj, scope=scope)
              for scope, obj in combine_collections(r.json(),
                                                    GROUP_COLLECTIONS)]
    if name is not None:
        groups = [g for g in groups if g.group_name == name][:1]
    return groups


def get_group(session: ConsoleSession, school_id: Union[int, str], name: str,
              timeout: float = DEFAULT_TIMEOUT) -> Optional[Group]:
    groups = get_groups(session, school_id, name=name, timeout=timeout)
    return groups[0] if groups else None


def get_group_members(session: ConsoleSession, school_id: Union[int, str],
                      group_name: str, timeout: float = DEFAULT_TIMEOUT) \
        -> List[GroupMember]:
    """
    Lists the members of a group, identified by its exact name.

    :raises GroupNotFoundError: if the school has no group by that name
        or the group has no distinguished name
    :return: the members, an empty list if the group has none
    """
    logger = logging.getLogger(__name__)
    group = get_group(session, school_id, group_name, timeout=timeout)
    if group is None or not group.distinguished_name:
        raise exceptions.GroupNotFoundError(group_name, school_id)

    logger.debug(f'Fetching members of {group.distinguished_name}.')
    r = fetch(session, GROUP_MEMBERS_PATH,
              params={'dn': group.distinguished_name}, timeout=timeout)
    if not r.content.strip():
        return []
    payload = r.json()
    if payload is None:
        return []
    return [GroupMember.from_wire(obj) for obj in json_array(payload)]
