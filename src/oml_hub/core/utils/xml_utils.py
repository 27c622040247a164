# SPDX-License-Identifier: Apache-2.0
"""Cardinality-checked value extraction from OpenML XML documents.

All paths are ElementTree paths evaluated relative to the given node and may
use the ``oml:`` prefix, which is bound to the OpenML schema namespace.
"""

# Standard
from typing import Optional, Sequence, Union
import xml.etree.ElementTree as ET

# Local
from .error_handling import MalformedDocumentError

OML_NAMESPACE = "http://openml.org/openml"
NAMESPACES = {"oml": OML_NAMESPACE}


def oml_tag(name: str) -> str:
    """Return the fully qualified tag for an element in the OpenML namespace."""
    return f"{{{OML_NAMESPACE}}}{name}"


def parse_xml(content: Union[str, bytes]) -> ET.Element:
    """Parse an XML payload and return its root element.

    Raises
    ------
    MalformedDocumentError
        If the payload is not well-formed XML.
    """
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        raise MalformedDocumentError("Document is not well-formed XML", str(e)) from e


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def _describe(node: ET.Element, path: str) -> str:
    return f"'{path}' under <{node.tag}>"


def find_elements(node: ET.Element, path: str) -> list[ET.Element]:
    """Return every element matching ``path`` in document order."""
    return node.findall(path, NAMESPACES)


def required_element(node: ET.Element, path: str) -> ET.Element:
    """Return the single element matching ``path``."""
    found = find_elements(node, path)
    if len(found) != 1:
        raise MalformedDocumentError(
            f"Expected exactly one node for {_describe(node, path)}, found {len(found)}"
        )
    return found[0]


def required_value(node: ET.Element, path: str) -> str:
    """Return the text of the single element matching ``path``.

    Raises
    ------
    MalformedDocumentError
        If zero or several elements match.
    """
    return _text(required_element(node, path))


def optional_value(node: ET.Element, path: str) -> Optional[str]:
    """Return the text of the element matching ``path``, or None if absent.

    Raises
    ------
    MalformedDocumentError
        If more than one element matches.
    """
    found = find_elements(node, path)
    if len(found) > 1:
        raise MalformedDocumentError(
            f"Expected at most one node for {_describe(node, path)}, found {len(found)}"
        )
    if not found:
        return None
    return _text(found[0])


def multi_values(node: ET.Element, path: str) -> list[str]:
    """Return the texts of all elements matching ``path`` in document order."""
    return [_text(element) for element in find_elements(node, path)]


def optional_values_aligned(
    nodes: Sequence[ET.Element], path: str
) -> list[Optional[str]]:
    """Read an optional field from each node, keeping positions aligned.

    The result always has ``len(nodes)`` entries. A node that does not have
    exactly one match for ``path`` contributes None at its index.
    """
    values: list[Optional[str]] = []
    for node in nodes:
        found = find_elements(node, path)
        values.append(_text(found[0]) if len(found) == 1 else None)
    return values


def _to_int(value: str, node: ET.Element, path: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise MalformedDocumentError(
            f"Expected an integer for {_describe(node, path)}, got {value!r}"
        ) from e


def required_int(node: ET.Element, path: str) -> int:
    """Integer variant of :func:`required_value`."""
    return _to_int(required_value(node, path), node, path)


def optional_int(node: ET.Element, path: str) -> Optional[int]:
    """Integer variant of :func:`optional_value`."""
    value = optional_value(node, path)
    if value is None:
        return None
    return _to_int(value, node, path)
