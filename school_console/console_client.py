from typing import Iterable, List, Optional, Union
import logging

from . import console_data_models as cdm
from .console_session import ConsoleSession, Credentials, connect
from .roster_cache import RosterCache
from .utils import DEFAULT_TIMEOUT

SchoolId = Union[int, str]


class ConsoleClient(object):

    """
    Bundles a :class:`ConsoleSession` and a :class:`RosterCache` so
    that callers can work with login names instead of resolved
    :class:`Account` objects. Every method is a thin wrapper around
    the functions in :mod:`console_data_models`; the session is held
    by reference and never copied.

    :param session: a logged in session
    :param cache: the roster cache used to resolve login names
    :param timeout: default timeout in seconds for every call
    """

    def __init__(self, session: ConsoleSession, cache: RosterCache = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.logger = logging.getLogger(__name__)
        self.session = session
        self.cache = cache if cache is not None else RosterCache()
        self.timeout = timeout

    @classmethod
    def connect(cls, credentials: Credentials = None, base_url: str = None,
                cache: RosterCache = None,
                timeout: float = DEFAULT_TIMEOUT) -> 'ConsoleClient':
        """Logs in and returns a client for the new session."""
        session = connect(credentials, base_url=base_url, timeout=timeout)
        return cls(session, cache=cache, timeout=timeout)

    def _timeout(self, timeout: Optional[float]) -> float:
        return self.timeout if timeout is None else timeout

    def schools(self, refresh: bool = False,
                timeout: float = None) -> List[cdm.School]:
        return cdm.get_schools(self.session, refresh=refresh,
                               timeout=self._timeout(timeout))

    def groups(self, school_id: SchoolId, name: str = None,
               timeout: float = None) -> List[cdm.Group]:
        return cdm.get_groups(self.session, school_id, name=name,
                              timeout=self._timeout(timeout))

    def group_members(self, school_id: SchoolId, group_name: str,
                      timeout: float = None) -> List[cdm.GroupMember]:
        return cdm.get_group_members(self.session, school_id, group_name,
                                     timeout=self._timeout(timeout))

    def service_accounts(self, school_id: SchoolId,
                         timeout: float = None) -> List[cdm.ServiceAccount]:
        return cdm.get_service_accounts(self.session, school_id,
                                        timeout=self._timeout(timeout))

    def roster(self, school_id: SchoolId, force_refresh: bool = False,
               timeout: float = None) -> List[cdm.Account]:
        return self.cache.get_roster(self.session, school_id,
                                     force_refresh=force_refresh,
                                     timeout=self._timeout(timeout))

    def find_account(self, school_id: SchoolId, identity: str,
                     force_refresh: bool = False,
                     timeout: float = None) -> Optional[cdm.Account]:
        """
        Resolves a login name to an account, looking at the school's
        student roster first and its service accounts second. Returns
        None when neither has an exact match.
        """
        timeout = self._timeout(timeout)
        account = self.cache.lookup_account(self.session, school_id, identity,
                                            force_refresh=force_refresh,
                                            timeout=timeout)
        if account is not None:
            return account
        for service_account in self.service_accounts(school_id,
                                                     timeout=timeout):
            if service_account.matches(identity):
                return service_account
        self.logger.info(f'No account "{identity}" in school {school_id}.')
        return None

    def reset_password(self, school_id: SchoolId, identity: str,
                       password: str = None, force_refresh: bool = False,
                       timeout: float = None) \
            -> Union[cdm.PasswordReset, cdm.NoSelection]:
        timeout = self._timeout(timeout)
        account = self.find_account(school_id, identity,
                                    force_refresh=force_refresh,
                                    timeout=timeout)
        return cdm.reset_password(self.session, account, password=password,
                                  timeout=timeout)

    def set_cloud_service(self, identities: Union[str, Iterable[str]],
                          account_type: Union[cdm.AccountType, str],
                          service: Union[cdm.CloudService, str],
                          status: Union[cdm.ServiceStatus, str],
                          timeout: float = None) \
            -> List[cdm.CloudServiceUpdate]:
        return cdm.set_cloud_service(self.session, identities, account_type,
                                     service, status,
                                     timeout=self._timeout(timeout))

    def distribution_lists(self, school_id: SchoolId,
                           timeout: float = None) \
            -> List[cdm.DistributionList]:
        return cdm.get_distribution_lists(self.session, school_id,
                                          timeout=self._timeout(timeout))

    def distribution_list_members(self, school_id: SchoolId, name: str,
                                  timeout: float = None) \
            -> List[cdm.GroupMember]:
        return cdm.get_distribution_list_members(
            self.session, school_id, name, timeout=self._timeout(timeout)
        )

    def create_distribution_list(self, school_id: SchoolId, name: str,
                                 timeout: float = None) \
            -> cdm.DistributionListChange:
        return cdm.create_distribution_list(self.session, school_id, name,
                                            timeout=self._timeout(timeout))

    def remove_distribution_list(self, school_id: SchoolId, name: str,
                                 timeout: float = None) \
            -> cdm.DistributionListChange:
        return cdm.remove_distribution_list(self.session, school_id, name,
                                            timeout=self._timeout(timeout))

    def add_distribution_list_member(self, school_id: SchoolId, name: str,
                                     identity: str,
                                     force_refresh: bool = False,
                                     timeout: float = None) \
            -> Union[cdm.DistributionListMemberChange, cdm.NoSelection]:
        timeout = self._timeout(timeout)
        account = self.find_account(school_id, identity,
                                    force_refresh=force_refresh,
                                    timeout=timeout)
        return cdm.add_distribution_list_member(self.session, school_id, name,
                                                account=account,
                                                timeout=timeout)

    def remove_distribution_list_member(self, school_id: SchoolId, name: str,
                                        identity: str,
                                        force_refresh: bool = False,
                                        timeout: float = None) \
            -> Union[cdm.DistributionListMemberChange, cdm.NoSelection]:
        timeout = self._timeout(timeout)
        account = self.find_account(school_id, identity,
                                    force_refresh=force_refresh,
                                    timeout=timeout)
        return cdm.remove_distribution_list_member(
            self.session, school_id, name, account=account, timeout=timeout
        )
