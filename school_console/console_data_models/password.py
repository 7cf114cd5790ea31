from typing import Union
import json
import logging
import os

import requests

from .account import Account
from .. import exceptions
from .confirmations import NO_SELECTION, SUCCESS, NoSelection, PasswordReset
from .console_record import submit
from ..console_session import ConsoleSession, check_session
from ..utils import DEFAULT_TIMEOUT

PASSWORD_PATH = 'api/accounts/password'
RANDOM_WORD_URL = os.environ.get(
    'CONSOLE_WORD_URL', 'https://random-word-api.vercel.app/api?words=1'
)
# Appended to generated words so they pass the console's complexity rules
PASSWORD_SUFFIX = '!2Ab'


def get_random_word(url: str = None, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Fetches a single word from the random-word generator. The generator
    answers with plain text; a JSON list holding one word is accepted
    too.
    """
    r = requests.get(url if url is not None else RANDOM_WORD_URL,
                     timeout=timeout)
    r.raise_for_status()
    word = r.text.strip()
    if word.startswith('['):
        try:
            words = json.loads(word)
        except ValueError as ve:
            raise exceptions.ConsoleMalformedResponseException(r.text) from ve
        if not words or not isinstance(words[0], str):
            raise exceptions.ConsoleMalformedResponseException(r.text)
        word = words[0]
    word = word.strip()
    if not word:
        raise exceptions.ConsoleMalformedResponseException(r.text)
    return word


def generate_password(url: str = None,
                      timeout: float = DEFAULT_TIMEOUT) -> str:
    return get_random_word(url, timeout=timeout).capitalize() + PASSWORD_SUFFIX


def reset_password(session: ConsoleSession, account: Account = None,
                   password: str = None, timeout: float = DEFAULT_TIMEOUT) \
        -> Union[PasswordReset, NoSelection]:
    """
    Sets a new password for `account`.

    :param account: the account whose password should change. When
        None, nothing happens and a :class:`NoSelection` is returned.
    :param password: the new password, generated from a random word
        when omitted
    :raises OperationError: if the console rejects the new password or
        no password could be generated
    :return: a confirmation holding the new password
    """
    logger = logging.getLogger(__name__)
    check_session(session)
    if account is None:
        logger.info('No account selected. Password left unchanged.')
        return NO_SELECTION
    if not password:
        try:
            password = generate_password(timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise exceptions.OperationError(
                f'generate a password for {account.username}', e
            ) from e

    payload = {'distinguishedName': account.distinguished_name,
               'password': password}
    submit(session, 'POST', PASSWORD_PATH,
           operation=f'reset the password of {account.username}',
           payload=payload, timeout=timeout)
    return PasswordReset(subject=account.username, action='Password reset',
                         outcome=SUCCESS, name=account.display_name,
                         username=account.username, new_password=password)
