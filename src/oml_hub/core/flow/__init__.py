# SPDX-License-Identifier: Apache-2.0
"""Flow records, parsing and retrieval."""

# Local
from .display import display_flow
from .metadata import BibliographicReference, Flow, FlowParameter, FlowQuality
from .parser import parse_flow, parse_flow_xml
from .retrieval import get_flow, get_flow_external_version

__all__ = [
    "Flow",
    "FlowParameter",
    "FlowQuality",
    "BibliographicReference",
    "parse_flow",
    "parse_flow_xml",
    "get_flow",
    "get_flow_external_version",
    "display_flow",
]
