# SPDX-License-Identifier: Apache-2.0
"""oml_hub - cached retrieval of OpenML flows."""

# Local
from .core import (
    Flow,
    FlowParameter,
    InvalidArgumentError,
    MalformedDocumentError,
    NotCachedError,
    ObjectStore,
    OMLConfig,
    OMLHubError,
    TypeMismatchError,
    get_flow,
    get_flow_external_version,
    load_config,
)

__all__ = [
    "Flow",
    "FlowParameter",
    "ObjectStore",
    "OMLConfig",
    "get_flow",
    "get_flow_external_version",
    "load_config",
    "OMLHubError",
    "InvalidArgumentError",
    "NotCachedError",
    "MalformedDocumentError",
    "TypeMismatchError",
]
