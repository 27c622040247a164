# SPDX-License-Identifier: Apache-2.0
"""Read-through on-disk cache for OpenML objects."""

# Standard
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
import shutil
import xml.etree.ElementTree as ET

# Third Party
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
import httpx

# Local
from ..config import OMLConfig, load_config
from ..utils.error_handling import NotCachedError, ServerError
from ..utils.logger_config import (
    VERBOSITY_DEBUG,
    VERBOSITY_NORMAL,
    log_at_verbosity,
    resolve_verbosity,
    setup_logger,
)
from ..utils.xml_utils import oml_tag, optional_value, parse_xml

logger = setup_logger(__name__)

# Artifact URL fields in order of preference
ARTIFACT_FIELDS = ("binary", "source")


@dataclass
class CachedFile:
    """A file stored in the cache next to an object's metadata document.

    Parameters
    ----------
    path : str
        Local filesystem path.
    binary : bool
        Whether the file is a binary artifact.
    """

    path: str
    binary: bool = False


@dataclass
class DownloadResult:
    """Parsed metadata document plus the cached files of one object."""

    doc: ET.Element
    files: dict[str, CachedFile] = field(default_factory=dict)


class ObjectStore:
    """Fetch OpenML objects, serving them from the local cache when possible.

    Objects are cached under ``<cachedir>/<kind>s/<id>/`` as ``<kind>.xml``
    plus at most one artifact named ``binary<ext>`` or ``source<ext>``.

    Parameters
    ----------
    config : Optional[OMLConfig]
        Server and cache settings. Loaded with :func:`load_config` when None.
    client : Optional[httpx.Client]
        HTTP client to use. A client owned by the store is created when None.
    """

    def __init__(
        self,
        config: Optional[OMLConfig] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.config = config or load_config()
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=self.config.timeout, follow_redirects=True
        )

    def __enter__(self) -> "ObjectStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this store created it."""
        if self._owns_client:
            self.client.close()

    def object_dir(self, kind: str, object_id: int) -> Path:
        """Cache directory of one object."""
        return self.config.cache_path / f"{kind}s" / str(object_id)

    def is_cached(self, kind: str, object_id: int) -> bool:
        """Whether the metadata document of an object is in the cache."""
        return (self.object_dir(kind, object_id) / f"{kind}.xml").is_file()

    def fetch(
        self,
        kind: str,
        object_id: int,
        cache_only: bool = False,
        verbosity: Optional[int] = None,
    ) -> DownloadResult:
        """Return the parsed document and cached files of an object.

        Parameters
        ----------
        kind : str
            Object kind, e.g. ``"flow"``.
        object_id : int
            Object id.
        cache_only : bool, optional
            Never contact the server, by default False.
        verbosity : Optional[int], optional
            Overrides the configured verbosity for this call.

        Returns
        -------
        DownloadResult
            The metadata document and the object's files, metadata first.

        Raises
        ------
        NotCachedError
            If ``cache_only`` is set and the object is not cached.
        ServerError
            If the server rejects the request or cannot be reached.
        """
        verbosity = resolve_verbosity(verbosity, self.config.verbosity)
        obj_dir = self.object_dir(kind, object_id)

        if self.is_cached(kind, object_id):
            message = f"{kind.capitalize()} {object_id} found in cache"
            log_at_verbosity(logger, verbosity, VERBOSITY_NORMAL, message)
        elif cache_only:
            raise NotCachedError(kind, object_id, str(obj_dir))
        else:
            message = f"Downloading {kind} {object_id} from {self.config.server}"
            log_at_verbosity(logger, verbosity, VERBOSITY_NORMAL, message)
            self._download(kind, object_id, obj_dir, verbosity)

        return self._load(kind, obj_dir)

    def clear_cache(
        self, kind: Optional[str] = None, object_id: Optional[int] = None
    ) -> None:
        """Remove cached objects.

        With no arguments the whole cache is removed; with ``kind`` only that
        kind; with ``kind`` and ``object_id`` a single object.
        """
        if object_id is not None and kind is None:
            raise ValueError("kind is required when object_id is given")

        if kind is None:
            target = self.config.cache_path
        elif object_id is None:
            target = self.config.cache_path / f"{kind}s"
        else:
            target = self.object_dir(kind, object_id)

        if target.exists():
            shutil.rmtree(target)
            logger.info(f"Removed cache directory {target}")

    def _load(self, kind: str, obj_dir: Path) -> DownloadResult:
        meta_name = f"{kind}.xml"
        doc = parse_xml((obj_dir / meta_name).read_bytes())

        files = {meta_name: CachedFile(path=str(obj_dir / meta_name), binary=False)}
        for path in sorted(obj_dir.iterdir()):
            if path.name == meta_name or path.name.endswith(".part"):
                continue
            files[path.name] = CachedFile(
                path=str(path), binary=path.name.startswith("binary")
            )
        return DownloadResult(doc=doc, files=files)

    def _download(
        self, kind: str, object_id: int, obj_dir: Path, verbosity: int
    ) -> None:
        url = f"{self.config.server}/{kind}/{object_id}"
        response = self._get(url, params=self._auth_params())
        content = response.content
        root = parse_xml(content)
        if root.tag == oml_tag("error"):
            raise self._server_error(root, url)

        obj_dir.mkdir(parents=True, exist_ok=True)

        # Artifact first so a half-finished download never looks cached
        for artifact in ARTIFACT_FIELDS:
            artifact_url = optional_value(root, f"oml:{artifact}_url")
            if artifact_url:
                self._download_artifact(artifact, artifact_url, obj_dir, verbosity)
                break

        self._write(obj_dir / f"{kind}.xml", content)
        log_at_verbosity(
            logger, verbosity, VERBOSITY_DEBUG, f"Cached {kind} {object_id} in {obj_dir}"
        )

    def _download_artifact(
        self, artifact: str, url: str, obj_dir: Path, verbosity: int
    ) -> None:
        suffix = Path(urlparse(url).path).suffix
        target = obj_dir / f"{artifact}{suffix}"
        log_at_verbosity(
            logger, verbosity, VERBOSITY_NORMAL, f"Downloading {artifact} from {url}"
        )
        response = self._get(url)
        self._write(target, response.content)

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        partial = target.with_name(target.name + ".part")
        partial.write_bytes(content)
        partial.replace(target)

    def _auth_params(self) -> dict[str, str]:
        if self.config.api_key:
            return {"api_key": self.config.api_key}
        return {}

    def _get(self, url: str, params: Optional[dict[str, str]] = None) -> httpx.Response:
        """GET ``url``, retrying transport failures with exponential backoff."""
        retrying_get = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            stop=stop_after_attempt(self.config.max_retries),
            reraise=True,
        )(self.client.get)

        try:
            response = retrying_get(url, params=params)
        except httpx.TransportError as e:
            raise ServerError(f"Could not reach {url}", details=str(e)) from e

        if response.is_error:
            raise self._http_error(response, url)
        return response

    def _http_error(self, response: httpx.Response, url: str) -> ServerError:
        # The API reports failures as <oml:error> documents when it can
        try:
            root = ET.fromstring(response.content)
        except ET.ParseError:
            root = None
        if root is not None and root.tag == oml_tag("error"):
            return self._server_error(root, url)
        return ServerError(
            f"Request to {url} failed", code=response.status_code, details=response.text
        )

    @staticmethod
    def _server_error(root: ET.Element, url: str) -> ServerError:
        code = optional_value(root, "oml:code")
        message = optional_value(root, "oml:message") or f"Request to {url} failed"
        return ServerError(
            message,
            code=int(code) if code and code.isdigit() else None,
            details=optional_value(root, "oml:additional_information"),
        )
