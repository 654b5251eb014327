"""
nistbeacon.wire.decode
======================

Wire record decoder: response body (XML) → :class:`RawRecord`.

The beacon answers every record lookup with a document of the shape::

    <record xmlns="http://beacon.nist.gov/record/0.1/">
      <version>Version 1.0</version>
      <frequency>60</frequency>
      <timeStamp>1447873020</timeStamp>
      <seedValue>…128 hex…</seedValue>
      <previousOutputValue>…128 hex…</previousOutputValue>
      <signatureValue>…512 hex…</signatureValue>
      <outputValue>…128 hex…</outputValue>
      <statusCode>0</statusCode>
    </record>

Elements are matched by local name so the default namespace (or its absence)
does not matter. Missing elements decode to the empty string; nothing here
interprets values.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, Union

from ..constants import XML_FIELDS, XML_ROOT
from ..errors import DecodeError
from ..types.core import RawRecord

__all__ = ["decode_record"]


def _local(tag: str) -> str:
    # "{namespace}name" -> "name"
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def decode_record(body: Union[bytes, str]) -> RawRecord:
    """
    Parse a beacon record document.

    Raises:
        DecodeError: the body is not well-formed XML or its root is not <record>.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodeError(f"malformed document: {e}") from e

    if _local(root.tag) != XML_ROOT:
        raise DecodeError(f"unexpected-root: {_local(root.tag)!r}")

    wanted = dict(XML_FIELDS)
    values: Dict[str, str] = {}
    for child in root:
        attr = wanted.get(_local(child.tag))
        # a repeated element overrides the earlier one
        if attr is None:
            continue
        values[attr] = (child.text or "").strip()

    return RawRecord(**values)
