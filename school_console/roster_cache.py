"""
Keeps a copy of each school's full student roster on disk.

Downloading a roster is by far the slowest call the console offers, so
the raw XML document is written to ``{cache_dir}/{school_id}-Students.xml``
exactly as received and read back on later calls. There is no expiry:
a cached roster is used until the caller asks for a refresh. A cache
file that can't be read or parsed is treated as a miss and replaced by
a fresh download; it never stops the caller from getting data.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union
import logging
import os

from . import console_data_models as cdm
from . import exceptions
from .console_data_models.console_record import fetch
from .console_session import ConsoleSession, check_session
from .constants import CACHE_DIR, ROSTER_EXTENSION, ROSTER_SUFFIX
from .utils import DEFAULT_TIMEOUT, XML, check_school_id

ROSTER_PATH = 'api/schools/{school_id}/students'

ProgressSink = Callable[[str, int], None]


def log_progress(label: str, percent_complete: int):
    logging.getLogger(__name__).info(f'{label}: {percent_complete}%')


@dataclass
class CacheResult(object):

    """
    The outcome of reading a cache file: either a hit holding the
    accounts or a miss holding the reason.
    """

    hit: bool
    accounts: List[cdm.Account] = field(default_factory=list)
    reason: str = None

    def __bool__(self):
        return self.hit


class RosterCache(object):

    """
    One cache file per school, named by school ID.

    :param cache_dir: where to keep the files, defaults to the
        `CONSOLE_CACHE_DIR` environment variable
    :param progress: called with a label and a percentage when a
        download starts and finishes
    """

    def __init__(self, cache_dir: Union[str, Path] = None,
                 progress: ProgressSink = None):
        self.logger = logging.getLogger(__name__)
        self.cache_dir = Path(cache_dir) if cache_dir is not None \
            else CACHE_DIR
        self.progress = progress if progress is not None else log_progress

    def path_for(self, school_id: Union[int, str]) -> Path:
        school_id = check_school_id(school_id)
        return self.cache_dir/f'{school_id}{ROSTER_SUFFIX}{ROSTER_EXTENSION}'

    def read(self, school_id: Union[int, str]) -> CacheResult:
        """Reads the cached roster for a school without touching the network."""
        path = self.path_for(school_id)
        if not path.exists():
            return CacheResult(hit=False, reason=f'{path} does not exist')
        try:
            accounts = cdm.parse_roster(path.read_bytes())
        except (OSError, exceptions.ConsoleMalformedResponseException) as e:
            self.logger.warning(f'Ignoring unreadable roster cache {path}: {e}')
            return CacheResult(hit=False, reason=str(e))
        self.logger.debug(f'Read {len(accounts)} accounts from {path}.')
        return CacheResult(hit=True, accounts=accounts)

    def write(self, school_id: Union[int, str], document: bytes) -> Path:
        """Replaces the cache file for a school with `document`."""
        path = self.path_for(school_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(document)
        self.logger.info(f'Cached roster for school {school_id} at {path}.')
        return path

    def invalidate(self, school_id: Union[int, str]) -> bool:
        """Deletes the cache file for a school. Returns whether one existed."""
        path = self.path_for(school_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        self.logger.info(f'Removed roster cache {path}.')
        return True

    def cached_at(self, school_id: Union[int, str]) -> Optional[datetime]:
        """When the cache file was written, None if there isn't one."""
        path = self.path_for(school_id)
        try:
            return datetime.fromtimestamp(os.path.getmtime(path))
        except OSError:
            return None

    def download(self, session: ConsoleSession, school_id: Union[int, str],
                 timeout: float = DEFAULT_TIMEOUT) -> List[cdm.Account]:
        """
        Downloads the full roster of a school, stores the document
        verbatim and returns the parsed accounts. Errors propagate.
        """
        school_id = check_school_id(school_id)
        label = f'Downloading roster for school {school_id}'
        self.progress(label, 0)
        r = fetch(
            session, ROSTER_PATH.format(school_id=school_id),
            content_type=XML, timeout=timeout
        )
        accounts = cdm.parse_roster(r.content)
        self.write(school_id, r.content)
        self.progress(label, 100)
        return accounts

    def get_roster(self, session: ConsoleSession, school_id: Union[int, str],
                   force_refresh: bool = False,
                   timeout: float = DEFAULT_TIMEOUT) -> List[cdm.Account]:
        """
        Returns every account of a school, from the cache when possible.

        :param session: a logged in session, used on a cache miss
        :param school_id: the four digit school ID
        :param force_refresh: skip the cache and download the roster
        :raises InvalidSchoolError: if `school_id` is malformed
        """
        check_session(session)
        school_id = check_school_id(school_id)
        if not force_refresh:
            cached = self.read(school_id)
            if cached.hit:
                self.logger.info(f'Using cached roster for school {school_id}.')
                return cached.accounts
            self.logger.info(f'Roster cache miss for school {school_id}: '
                             f'{cached.reason}')
        return self.download(session, school_id, timeout=timeout)

    def lookup_account(self, session: ConsoleSession,
                       school_id: Union[int, str], identity: str,
                       force_refresh: bool = False,
                       timeout: float = DEFAULT_TIMEOUT) \
            -> Optional[cdm.Account]:
        """
        Finds the account whose login name is exactly `identity`.
        Matching is case-sensitive.
        """
        for account in self.get_roster(session, school_id,
                                       force_refresh=force_refresh,
                                       timeout=timeout):
            if account.matches(identity):
                return account
        return None
