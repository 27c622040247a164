# SPDX-License-Identifier: Apache-2.0
"""Parse OpenML flow documents into :class:`Flow` trees."""

# Standard
from typing import Optional, Union
import xml.etree.ElementTree as ET

# Third Party
from pydantic import ValidationError

# Local
from ..utils.error_handling import MalformedDocumentError
from ..utils.logger_config import setup_logger
from ..utils.xml_utils import (
    find_elements,
    multi_values,
    oml_tag,
    optional_int,
    optional_value,
    optional_values_aligned,
    parse_xml,
    required_element,
    required_int,
    required_value,
)
from .metadata import BibliographicReference, Flow, FlowParameter, FlowQuality

logger = setup_logger(__name__)

# Optional scalar fields that map one-to-one onto Flow attributes
OPTIONAL_FIELDS = {
    "external_version": "oml:external_version",
    "licence": "oml:licence",
    "language": "oml:language",
    "full_description": "oml:full_description",
    "installation_notes": "oml:installation_notes",
    "dependencies": "oml:dependencies",
    "implements": "oml:implements",
    "source_url": "oml:source_url",
    "binary_url": "oml:binary_url",
    "source_format": "oml:source_format",
    "binary_format": "oml:binary_format",
    "source_md5": "oml:source_md5",
    "binary_md5": "oml:binary_md5",
}


def parse_parameters(root: ET.Element) -> list[FlowParameter]:
    """Build one :class:`FlowParameter` per ``oml:parameter`` node.

    ``name`` is required on every node. The optional fields are read per
    node, so a parameter lacking e.g. ``default_value`` gets None at its own
    position instead of shifting later values.
    """
    nodes = find_elements(root, "oml:parameter")
    if not nodes:
        return []

    names = [required_value(node, "oml:name") for node in nodes]
    data_types = optional_values_aligned(nodes, "oml:data_type")
    defaults = optional_values_aligned(nodes, "oml:default_value")
    descriptions = optional_values_aligned(nodes, "oml:description")
    ranges = optional_values_aligned(nodes, "oml:recommendedRange")

    return [
        FlowParameter(
            name=name,
            data_type=data_type,
            default_value=default,
            description=description,
            recommended_range=recommended_range,
        )
        for name, data_type, default, description, recommended_range in zip(
            names, data_types, defaults, descriptions, ranges
        )
    ]


def parse_bibliographical_references(
    root: ET.Element,
) -> Optional[list[BibliographicReference]]:
    """Return the cited references, or None when there are none."""
    references = [
        BibliographicReference(
            citation=required_value(node, "oml:citation"),
            url=required_value(node, "oml:url"),
        )
        for node in find_elements(root, "oml:bibliographical_reference")
    ]
    return references or None


def parse_qualities(root: ET.Element) -> Optional[list[FlowQuality]]:
    """Return the flow qualities, or None when there are none."""
    qualities = [
        FlowQuality(
            name=required_value(node, "oml:name"),
            value=required_value(node, "oml:value"),
        )
        for node in find_elements(root, "oml:quality")
    ]
    return qualities or None


def parse_components(root: ET.Element) -> dict[str, Flow]:
    """Parse every embedded component flow, keyed by its identifier."""
    components: dict[str, Flow] = {}
    for node in find_elements(root, "oml:component"):
        identifier = required_value(node, "oml:identifier")
        if identifier in components:
            raise MalformedDocumentError(
                f"Duplicate component identifier '{identifier}'"
            )
        components[identifier] = parse_flow(required_element(node, "oml:flow"))
    return components


def parse_flow(root: ET.Element) -> Flow:
    """Turn an ``oml:flow`` element into a :class:`Flow`.

    Components are parsed recursively from their nested ``oml:flow``
    elements, so all paths resolve relative to the component itself.

    Parameters
    ----------
    root : ET.Element
        Element whose tag is ``oml:flow``.

    Returns
    -------
    Flow
        The parsed flow with its full component tree.

    Raises
    ------
    MalformedDocumentError
        If the element is not a flow or a required field is missing or
        repeated, anywhere in the tree.
    """
    if root.tag != oml_tag("flow"):
        raise MalformedDocumentError(
            f"Expected an <oml:flow> element, got <{root.tag}>"
        )

    args = {
        "flow_id": required_int(root, "oml:id"),
        "uploader": optional_int(root, "oml:uploader"),
        "name": required_value(root, "oml:name"),
        "version": required_value(root, "oml:version"),
        "description": required_value(root, "oml:description"),
        "upload_date": required_value(root, "oml:upload_date"),
        "creator": multi_values(root, "oml:creator"),
        "contributor": multi_values(root, "oml:contributor"),
        "tags": multi_values(root, "oml:tag"),
        "parameters": parse_parameters(root),
        "bibliographical_reference": parse_bibliographical_references(root),
        "qualities": parse_qualities(root),
    }
    for field_name, path in OPTIONAL_FIELDS.items():
        args[field_name] = optional_value(root, path)

    args["components"] = parse_components(root)

    try:
        flow = Flow(**args)
    except ValidationError as e:
        raise MalformedDocumentError(
            f"Flow document {args['flow_id']} has invalid field values", str(e)
        ) from e
    logger.debug(
        f"Parsed flow {flow.flow_id} ({flow.name}) with "
        f"{len(flow.parameters)} parameters and {len(flow.components)} components"
    )
    return flow


def parse_flow_xml(content: Union[str, bytes]) -> Flow:
    """Parse a serialized flow document."""
    return parse_flow(parse_xml(content))
