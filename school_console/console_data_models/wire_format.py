"""
Turns the payloads returned by the console into plain dictionaries
with predictable keys.

The console is not consistent about how it shapes its responses. Most
endpoints answer with JSON whose keys carry a leading underscore
(``_userName``), some wrap several collections in one object
(``centralGroups`` and ``localGroups``) and the full roster is only
offered as XML in the ``ArrayOf<Type>`` style. Every record type
declares an explicit field map from the vendor's names (minus the
underscore) to its own attribute names; :func:`normalize_fields`
applies that map and nothing else, so the map doubles as the
documentation of the wire contract.
"""

from typing import Dict, List, Mapping, Sequence, Tuple
import logging
import xml.etree.ElementTree as ET

from requests import Response

from .. import exceptions
from ..utils import strip_prefix

GROUP_COLLECTIONS = (('central', 'centralGroups'), ('local', 'localGroups'))
_NIL_ATTR = '{http://www.w3.org/2001/XMLSchema-instance}nil'


def build_field_map(wire_names: Mapping[str, str]) -> Dict[str, str]:
    """
    Completes a field map so that every canonical name also maps to
    itself. Running :func:`normalize_fields` over an already normalized
    record therefore leaves it unchanged.
    """
    field_map = dict(wire_names)
    for canonical in wire_names.values():
        field_map.setdefault(canonical, canonical)
    return field_map


def normalize_fields(obj: Mapping, field_map: Mapping[str, str]) -> dict:
    """
    Renames the keys of a single vendor object according to
    `field_map`. Leading underscores are stripped before the lookup and
    keys that are not in the map are dropped.

    :param obj: a vendor JSON object or a dictionary built from an XML
        element
    :param field_map: vendor field names to canonical names
    :return: a dictionary keyed by canonical names
    """
    normalized = {}
    for key, value in obj.items():
        canonical = field_map.get(strip_prefix(key))
        if canonical is not None:
            normalized[canonical] = value
    return normalized


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def element_to_dict(element: ET.Element) -> dict:
    ret_val = {}
    for child in element:
        if child.get(_NIL_ATTR) == 'true':
            value = None
        else:
            value = (child.text or '').strip()
        ret_val[_local_name(child.tag)] = value
    return ret_val


def parse_xml_array(document, item_tag: str) -> List[dict]:
    """
    Reads an ``ArrayOf<item_tag>`` document and returns one dictionary
    per ``<item_tag>`` element. XML namespaces are ignored.

    :param document: the raw document as `bytes` or `str`
    :param item_tag: the name of the repeated element, e.g. "Student"
    :raises ConsoleMalformedResponseException: if the document cannot
        be parsed or its root is not ``ArrayOf<item_tag>``
    """
    try:
        root = ET.fromstring(document)
    except (ET.ParseError, LookupError, ValueError) as pe:
        # LookupError: the declaration names an unknown encoding
        raise exceptions.ConsoleMalformedResponseException(document) from pe

    if _local_name(root.tag) != 'ArrayOf' + item_tag:
        raise exceptions.ConsoleMalformedResponseException(document)

    return [element_to_dict(child) for child in root
            if _local_name(child.tag) == item_tag]


def json_array(payload) -> List[dict]:
    """
    Returns `payload` if it is a list of objects. The console sometimes
    wraps a lone collection in an object with a single key, which is
    unwrapped as well.
    """
    if isinstance(payload, dict) and len(payload) == 1:
        payload = next(iter(payload.values()))
    if not isinstance(payload, list):
        raise exceptions.ConsoleMalformedResponseException(payload)
    return payload


def combine_collections(payload: Mapping,
                        collections: Sequence[Tuple[str, str]] = GROUP_COLLECTIONS) \
        -> List[Tuple[str, dict]]:
    """
    Concatenates several named collections of one payload into a single
    sequence of ``(scope, object)`` pairs, in the order given by
    `collections`. A missing or null collection counts as empty.
    """
    if not isinstance(payload, Mapping):
        raise exceptions.ConsoleMalformedResponseException(payload)
    combined = []
    for scope, key in collections:
        items = payload.get(key) or payload.get('_' + key) or []
        combined.extend((scope, item) for item in items)
    return combined


def is_xml(r: Response) -> bool:
    content_type = r.headers.get('Content-Type', '')
    if 'xml' in content_type:
        return True
    return r.content.lstrip().startswith(b'<')


def response_objects(r: Response, item_tag: str = None) -> List[dict]:
    """
    Extracts the list of vendor objects from a response, whichever
    format the endpoint answered in.
    """
    logger = logging.getLogger(__name__)
    if item_tag is not None and is_xml(r):
        logger.debug(f'Reading XML array of "{item_tag}" elements.')
        return parse_xml_array(r.content, item_tag)
    try:
        payload = r.json()
    except ValueError as ve:
        raise exceptions.ConsoleMalformedResponseException(r.text) from ve
    return json_array(payload)

