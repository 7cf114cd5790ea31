from datetime import datetime
from typing import Optional, Union
import os
import re

from .exceptions import InvalidSchoolError


BASE_URL = os.environ.get('CONSOLE_URL', 'https://console.schooladmin.net/')
DEFAULT_TIMEOUT = float(os.environ.get('CONSOLE_TIMEOUT', 60))
SCHOOL_ID_REG = re.compile(r'[0-9]{4}')
# Vendor timestamps never carry a timezone
CONSOLE_DATETIME_FORMAT = '%Y-%m-%dT%H:%M:%S'

JSON = 'application/json'
XML = 'application/xml'


def get_header(content_type: str = JSON, custom_args: dict = None) -> dict:
    header = {
        'Accept': content_type,
    }

    if custom_args is not None:
        header.update(custom_args)
    return header


def check_school_id(school_id: Union[int, str]) -> str:
    """
    Raises an :class:`InvalidSchoolError` if `school_id` is not exactly
    four digits, otherwise returns it as a string ready for use in URLs
    and file names.
    """
    if (isinstance(school_id, bool)
            or not SCHOOL_ID_REG.fullmatch(str(school_id))):
        raise InvalidSchoolError(school_id)
    return str(school_id)


def parse_console_datetime(value) -> Optional[datetime]:
    """
    Parses a timestamp in the console's `yyyy-MM-ddTHH:mm:ss` format.
    Any fractional seconds are dropped. Returns None for anything that
    can't be parsed, including values that aren't strings.
    """
    if not isinstance(value, str):
        return None
    value = value.strip().split('.', 1)[0]
    try:
        return datetime.strptime(value, CONSOLE_DATETIME_FORMAT)
    except ValueError:
        return None


def parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)


def strip_prefix(key: str) -> str:
    """Removes the vendor's leading underscores from a field name."""
    return key.lstrip('_')

