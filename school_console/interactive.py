"""
Prompts for the pieces of information the core functions need when
the caller doesn't have them at hand. Nothing in the rest of the
package imports this module; it only builds on :class:`ConsoleClient`.

Every prompt can be replaced by passing a callable, which is how the
tests drive this module.
"""

from getpass import getpass
from typing import Callable, Sequence, TypeVar, Union
import logging

from . import console_data_models as cdm
from .console_client import ConsoleClient
from .console_session import Credentials
from .exceptions import EmptySelectionError

T = TypeVar('T')
Chooser = Callable[[Sequence[T], str], T]


def prompt_credentials(ask: Callable[[str], str] = input,
                       ask_secret: Callable[[str], str] = getpass) \
        -> Credentials:
    username = ask('Username: ').strip()
    password = ask_secret('Password: ')
    return Credentials(username, password)


def console_chooser(items: Sequence[T], label: str) -> T:
    """Prints a numbered list and reads the user's pick from stdin."""
    for i, item in enumerate(items, start=1):
        print(f'{i:>4}. {item}')
    answer = input(f'Select a {label} [1-{len(items)}]: ').strip()
    try:
        index = int(answer) - 1
    except ValueError:
        raise EmptySelectionError(label)
    if not 0 <= index < len(items):
        raise EmptySelectionError(label)
    return items[index]


def choose(items: Sequence[T], label: str, chooser: Chooser = None) -> T:
    """
    Returns the only item of `items` without asking, otherwise lets
    `chooser` pick one.

    :raises EmptySelectionError: if there is nothing to choose from or
        nothing was chosen
    """
    items = list(items)
    if not items:
        raise EmptySelectionError(label)
    if len(items) == 1:
        return items[0]
    if chooser is None:
        chooser = console_chooser
    selected = chooser(items, label)
    if selected is None:
        raise EmptySelectionError(label)
    return selected


def select_school(client: ConsoleClient, chooser: Chooser = None) -> cdm.School:
    return choose(client.schools(), 'school', chooser=chooser)


def select_account(client: ConsoleClient, school_id: Union[int, str],
                   chooser: Chooser = None,
                   force_refresh: bool = False) -> cdm.Account:
    return choose(client.roster(school_id, force_refresh=force_refresh),
                  'account', chooser=chooser)


def interactive_reset_password(client: ConsoleClient,
                               school_id: Union[int, str] = None,
                               identity: str = None, password: str = None,
                               chooser: Chooser = None) \
        -> Union[cdm.PasswordReset, cdm.NoSelection]:
    """
    Resets a password, asking for the school and the account when they
    aren't given. Backing out of either prompt returns a
    :class:`NoSelection` instead of raising.
    """
    logger = logging.getLogger(__name__)
    try:
        if school_id is None:
            school_id = select_school(client, chooser=chooser).code
        if identity is None:
            account = select_account(client, school_id, chooser=chooser)
        else:
            account = client.find_account(school_id, identity)
    except EmptySelectionError as e:
        logger.info(str(e))
        return cdm.NoSelection(str(e))
    return cdm.reset_password(client.session, account, password=password,
                              timeout=client.timeout)


def interactive_add_distribution_list_member(
        client: ConsoleClient, name: str,
        school_id: Union[int, str] = None, identity: str = None,
        chooser: Chooser = None) \
        -> Union[cdm.DistributionListMemberChange, cdm.NoSelection]:
    logger = logging.getLogger(__name__)
    try:
        if school_id is None:
            school_id = select_school(client, chooser=chooser).code
        if identity is None:
            account = select_account(client, school_id, chooser=chooser)
        else:
            account = client.find_account(school_id, identity)
    except EmptySelectionError as e:
        logger.info(str(e))
        return cdm.NoSelection(str(e))
    return cdm.add_distribution_list_member(client.session, school_id, name,
                                            account=account,
                                            timeout=client.timeout)
