"""
A client for the school-administration console. It logs in with a
cookie session, reads the directory (schools, groups, accounts and
distribution lists) and makes the few changes the console allows:
password resets, cloud-service entitlements and distribution lists.

The pieces, from the bottom up:

    - `console_data_models` holds the record types, the wire-format
      helpers and one function per console endpoint.
    - `roster_cache` keeps each school's full student roster on disk.
    - `console_session` performs the login and holds the session every
      other call requires.
    - `console_client` bundles a session and a cache behind methods
      that accept login names.
    - `interactive` adds prompts on top of the client.
"""

from . import console_data_models as cdm
from . import exceptions
from .console_client import ConsoleClient
from .console_session import ConsoleSession, Credentials, connect
from .roster_cache import RosterCache
