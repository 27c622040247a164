# SPDX-License-Identifier: Apache-2.0
"""Cache gateway for OpenML objects."""

# Local
from .object_store import CachedFile, DownloadResult, ObjectStore

__all__ = ["CachedFile", "DownloadResult", "ObjectStore"]
