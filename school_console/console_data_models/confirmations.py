"""
Records returned by the operations that change data on the console.
Each one names the subject of the change, the action taken and its
outcome. :class:`NoSelection` is returned instead when an operation had
nothing to act on, for example because no account matched; it is falsy
so callers can test for it directly.
"""

from dataclasses import dataclass

SUCCESS = 'Success'
FAILED_TO_UPDATE = 'Failed to update'


@dataclass
class ActionConfirmation(object):

    subject: str
    action: str
    outcome: str


@dataclass
class PasswordReset(ActionConfirmation):

    name: str
    username: str
    new_password: str


@dataclass
class CloudServiceUpdate(ActionConfirmation):

    identity: str
    account_type: str
    service: str
    status: str


@dataclass
class DistributionListChange(ActionConfirmation):

    list_name: str


@dataclass
class DistributionListMemberChange(ActionConfirmation):

    name: str
    username: str
    list_name: str


@dataclass(frozen=True)
class NoSelection(object):

    reason: str = 'Nothing was selected.'

    def __bool__(self):
        return False

    def __str__(self):
        return self.reason


NO_SELECTION = NoSelection()
