# SPDX-License-Identifier: Apache-2.0
"""Core oml_hub components."""

# Local
from .config import OMLConfig, load_config, save_config
from .flow import (
    BibliographicReference,
    Flow,
    FlowParameter,
    FlowQuality,
    display_flow,
    get_flow,
    get_flow_external_version,
    parse_flow,
    parse_flow_xml,
)
from .store import CachedFile, DownloadResult, ObjectStore
from .utils import (
    InvalidArgumentError,
    MalformedDocumentError,
    NotCachedError,
    OMLHubError,
    ServerError,
    TypeMismatchError,
)

__all__ = [
    # Flow components
    "Flow",
    "FlowParameter",
    "FlowQuality",
    "BibliographicReference",
    "get_flow",
    "get_flow_external_version",
    "parse_flow",
    "parse_flow_xml",
    "display_flow",
    # Store and config
    "ObjectStore",
    "CachedFile",
    "DownloadResult",
    "OMLConfig",
    "load_config",
    "save_config",
    # Errors
    "OMLHubError",
    "InvalidArgumentError",
    "NotCachedError",
    "MalformedDocumentError",
    "TypeMismatchError",
    "ServerError",
]
