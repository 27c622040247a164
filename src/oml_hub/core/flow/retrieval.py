# SPDX-License-Identifier: Apache-2.0
"""Top-level flow retrieval."""

# Standard
from typing import Mapping, Optional
import re

# Local
from ..store.object_store import CachedFile, ObjectStore
from ..utils.error_handling import InvalidArgumentError, TypeMismatchError
from ..utils.logger_config import setup_logger
from .metadata import Flow
from .parser import parse_flow

logger = setup_logger(__name__)

FLOW_METADATA_FILENAME = "flow.xml"

_EXTERNAL_VERSION_PATTERN = re.compile(r"-v(\d*)\.")


def _as_count(value: object, argument: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(argument, value, "a non-negative integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(argument, value, "a non-negative integer")
    return value


def attach_artifact(flow: Flow, files: Mapping[str, CachedFile]) -> Flow:
    """Attach the first non-metadata file as the flow's source or binary.

    Parameters
    ----------
    flow : Flow
        Parsed flow.
    files : Mapping[str, CachedFile]
        Files that accompanied the flow document, keyed by filename.

    Returns
    -------
    Flow
        ``flow`` itself when there is no artifact, otherwise a copy with
        ``binary_path`` or ``source_path`` set.
    """
    for filename, cached in files.items():
        if filename == FLOW_METADATA_FILENAME:
            continue
        if cached.binary:
            return flow.model_copy(update={"binary_path": cached.path})
        return flow.model_copy(update={"source_path": cached.path})
    return flow


def get_flow(
    flow_id: int,
    cache_only: bool = False,
    verbosity: Optional[int] = None,
    store: Optional[ObjectStore] = None,
) -> Flow:
    """Download a flow, or read it from the cache if already available.

    Parameters
    ----------
    flow_id : int
        Id of the flow.
    cache_only : bool, optional
        Fail instead of contacting the server when the flow is not cached,
        by default False.
    verbosity : Optional[int], optional
        0 = silent, 1 = normal, 2 = debug. Defaults to the configured level.
    store : Optional[ObjectStore], optional
        Store to fetch from. A store built from the default configuration is
        used (and closed) when None.

    Returns
    -------
    Flow
        The flow with its complete component tree.

    Raises
    ------
    InvalidArgumentError
        If ``flow_id`` is not a non-negative integer or ``cache_only`` is not
        a bool.
    NotCachedError
        If ``cache_only`` is set and the flow is not cached.
    MalformedDocumentError
        If the flow document, or any component in it, is malformed.
    """
    flow_id = _as_count(flow_id, "flow_id")
    if not isinstance(cache_only, bool):
        raise InvalidArgumentError("cache_only", cache_only, "a bool")

    if store is None:
        with ObjectStore() as default_store:
            download = default_store.fetch("flow", flow_id, cache_only, verbosity)
    else:
        download = store.fetch("flow", flow_id, cache_only, verbosity)

    flow = parse_flow(download.doc)
    return attach_artifact(flow, download.files)


def get_flow_external_version(flow: Flow) -> int:
    """Return the revision encoded in a flow's external version.

    For ``R_3.2.4-v2.b4a3f309`` this is 2: the digits between ``-v`` and the
    following ``.``. When several packages carry a marker the last one
    counts. Flows without such a marker yield 0.

    Raises
    ------
    TypeMismatchError
        If ``flow`` is not a :class:`Flow`.
    """
    if not isinstance(flow, Flow):
        raise TypeMismatchError("Flow", flow)

    matches = _EXTERNAL_VERSION_PATTERN.findall(flow.external_version or "")
    if not matches or not matches[-1]:
        return 0
    return int(matches[-1])
