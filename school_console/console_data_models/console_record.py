from abc import ABC
from typing import Callable, ClassVar, Dict, List, Mapping
import dataclasses
import logging

from requests import Response
import requests

from . import wire_format
from .. import exceptions
from ..console_session import ConsoleSession, check_session
from ..utils import DEFAULT_TIMEOUT, JSON, get_header


class ConsoleRecord(ABC):

    """
    The base class for every record read from the console. Subclasses
    are dataclasses that declare:

        - `field_map`: vendor field names (without the leading
          underscore) to dataclass field names, completed with
          :func:`wire_format.build_field_map`
        - `converters`: optional callables applied to individual
          normalized values
        - `xml_tag`: the element name used when the endpoint answers
          in XML

    The untouched vendor object is kept in the `raw` attribute for
    callers who need attributes that aren't modelled here.
    """

    field_map: ClassVar[Dict[str, str]] = {}
    converters: ClassVar[Dict[str, Callable]] = {}
    xml_tag: ClassVar[str] = None

    @classmethod
    def normalize(cls, obj: Mapping) -> dict:
        kwargs = wire_format.normalize_fields(obj, cls.field_map)
        for key, convert in cls.converters.items():
            if key in kwargs:
                kwargs[key] = convert(kwargs[key])
        return kwargs

    @classmethod
    def from_wire(cls, obj: Mapping, **extra) -> 'ConsoleRecord':
        """
        Creates a record from a single vendor object.

        :param obj: a JSON object or a dictionary built from an XML
            element
        :param extra: values for fields that the payload doesn't carry
        """
        kwargs = cls.normalize(obj)
        kwargs.update(extra)
        return cls(raw=dict(obj), **kwargs)

    @classmethod
    def from_response(cls, r: Response) -> List['ConsoleRecord']:
        return [cls.from_wire(obj)
                for obj in wire_format.response_objects(r, cls.xml_tag)]

    def to_dict(self) -> dict:
        """The canonical fields of the record, without `raw`."""
        return {f.name: getattr(self, f.name)
                for f in dataclasses.fields(self) if f.name != 'raw'}


def fetch(session: ConsoleSession, path: str, content_type: str = JSON,
          params: dict = None, timeout: float = DEFAULT_TIMEOUT) -> Response:
    """
    Issues a GET against one of the console's read endpoints. HTTP and
    connection errors are passed on to the caller untouched.
    """
    check_session(session)
    r = session.get(session.url(path), headers=get_header(content_type),
                    params=params, timeout=timeout)
    r.raise_for_status()
    return r


def submit(session: ConsoleSession, method: str, path: str, operation: str,
           payload: dict = None, timeout: float = DEFAULT_TIMEOUT) -> Response:
    """
    Sends a request that changes data on the console.

    :param method: the HTTP verb
    :param path: endpoint path relative to the session's base URL
    :param operation: a short description used in error messages and
        the log, e.g. "remove distribution list 1234-dl-staff"
    :param payload: JSON body, if any
    :raises OperationError: if the request fails for any reason
    """
    check_session(session)
    logger = logging.getLogger(__name__)
    logger.info(f'Attempting to {operation}.')
    try:
        r = session.request(method, session.url(path), json=payload,
                            headers=get_header(), timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.info(f'Could not {operation}: {e}')
        raise exceptions.OperationError(operation, e) from e
    return r
