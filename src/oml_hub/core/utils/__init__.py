# SPDX-License-Identifier: Apache-2.0

# Local
from .error_handling import (
    InvalidArgumentError,
    MalformedDocumentError,
    NotCachedError,
    OMLHubError,
    ServerError,
    TypeMismatchError,
)
from .logger_config import setup_logger as setup_logger

__all__ = [
    "OMLHubError",
    "InvalidArgumentError",
    "NotCachedError",
    "MalformedDocumentError",
    "TypeMismatchError",
    "ServerError",
    "setup_logger",
]
