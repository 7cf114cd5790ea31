"""
The :mod:`console_data_models` package defines the records read from
the school console and the functions that call its endpoints. Every
function takes the :class:`ConsoleSession` it should use as its first
argument and refuses to run without a logged in one.

The base :class:`ConsoleRecord` class turns vendor objects into
dataclasses through an explicit field map per record type; the
:mod:`wire_format` module holds the helpers that cope with the
different shapes the console answers in. The records are:

    - :class:`School`
    - :class:`Account` and :class:`ServiceAccount`
    - :class:`Group`, :class:`GroupMember` and :class:`DistributionList`

Operations that change data return the confirmation records found in
:mod:`confirmations`.
"""

from .account import Account, ServiceAccount, get_service_accounts, parse_roster
from .cloud_service import (AccountType, CloudService, ServiceStatus,
                            set_cloud_service)
from .confirmations import (ActionConfirmation, CloudServiceUpdate,
                            DistributionListChange,
                            DistributionListMemberChange, NO_SELECTION,
                            NoSelection, PasswordReset)
from .console_record import ConsoleRecord
from .distribution_list import (DistributionList, add_distribution_list_member,
                                create_distribution_list,
                                get_distribution_list_members,
                                get_distribution_lists,
                                remove_distribution_list,
                                remove_distribution_list_member)
from .group import Group, GroupMember, get_group, get_group_members, get_groups
from .password import generate_password, get_random_word, reset_password
from .school import School, get_schools
