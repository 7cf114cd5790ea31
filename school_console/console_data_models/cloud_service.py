from enum import Enum
from typing import Iterable, List, Union
import logging

import requests

from .confirmations import FAILED_TO_UPDATE, SUCCESS, CloudServiceUpdate
from .console_record import submit
from .. import exceptions
from ..console_session import ConsoleSession, check_session
from ..utils import DEFAULT_TIMEOUT

CLOUD_SERVICE_PATH = 'api/cloudservices/{account_type}/{service}'


class AccountType(Enum):
    Staff = 'staff'
    Student = 'student'
    ServiceAccount = 'serviceaccount'


class CloudService(Enum):
    Google = 'google'
    Microsoft = 'microsoft'
    Apple = 'apple'
    Adobe = 'adobe'
    Zoom = 'zoom'
    Dropbox = 'dropbox'


class ServiceStatus(Enum):
    Enabled = 'Enabled'
    Disabled = 'Disabled'


def _coerce(enum_cls, value):
    """Accepts enum members, their values or their names."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).lower()
    for member in enum_cls:
        if text in (member.value.lower(), member.name.lower()):
            return member
    raise ValueError(f'"{value}" is not a valid {enum_cls.__name__}.')


def set_cloud_service(session: ConsoleSession,
                      identities: Union[str, Iterable[str]],
                      account_type: Union[AccountType, str],
                      service: Union[CloudService, str],
                      status: Union[ServiceStatus, str],
                      timeout: float = DEFAULT_TIMEOUT) \
        -> List[CloudServiceUpdate]:
    """
    Enables or disables a cloud service for one or more accounts.

    Failures are not reported per account. If any request fails, the
    whole batch is reported as a single record whose outcome is
    "Failed to update", even if some accounts were updated before the
    failure.

    :param identities: one login name or several
    :return: one confirmation per identity, or a single failure record
    """
    logger = logging.getLogger(__name__)
    check_session(session)
    if isinstance(identities, str):
        identities = [identities]
    identities = list(identities)
    account_type = _coerce(AccountType, account_type)
    service = _coerce(CloudService, service)
    status = _coerce(ServiceStatus, status)
    action = f'{service.name} {status.value}'
    path = CLOUD_SERVICE_PATH.format(account_type=account_type.value,
                                     service=service.value)

    confirmations = []
    try:
        for identity in identities:
            submit(session, 'PUT', path,
                   operation=f'set {service.name} to {status.value} '
                             f'for {identity}',
                   payload={'userName': identity, 'status': status.value},
                   timeout=timeout)
            confirmations.append(CloudServiceUpdate(
                subject=identity, action=action, outcome=SUCCESS,
                identity=identity, account_type=account_type.value,
                service=service.value, status=status.value
            ))
    except (exceptions.ConsoleError, requests.exceptions.RequestException):
        logger.exception(f'Cloud service update failed for {identities}.')
        subject = ', '.join(identities)
        return [CloudServiceUpdate(
            subject=subject, action=action, outcome=FAILED_TO_UPDATE,
            identity=subject, account_type=account_type.value,
            service=service.value, status=status.value
        )]

    return confirmations
