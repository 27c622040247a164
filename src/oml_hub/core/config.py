# SPDX-License-Identifier: Apache-2.0
"""Configuration for talking to an OpenML server and caching its objects."""

# Standard
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional
import os

# Local
from .utils.logger_config import setup_logger
from .utils.yaml_utils import load_yaml, save_yaml

logger = setup_logger(__name__)

DEFAULT_SERVER = "https://www.openml.org/api/v1/xml"
DEFAULT_CONFIG_PATH = "~/.openml/config.yaml"
DEFAULT_CACHE_DIR = "~/.openml/cache"

# Environment variables that override values read from the config file
ENV_OVERRIDES = {
    "OPENML_SERVER": "server",
    "OPENML_API_KEY": "api_key",
    "OPENML_CACHEDIR": "cachedir",
}


@dataclass
class OMLConfig:
    """Connection and cache settings.

    Parameters
    ----------
    server : str, optional
        Base URL of the XML API, by default the public OpenML server.
    api_key : Optional[str], optional
        API key appended to requests. Reading public flows works without one.
    cachedir : str, optional
        Root directory of the on-disk object cache, by default ``~/.openml/cache``.
    verbosity : int, optional
        0 = silent, 1 = normal, 2 = debug, by default 1.
    timeout : float, optional
        Request timeout in seconds, by default 60.0.
    max_retries : int, optional
        Maximum number of attempts for a request that fails at the transport
        level, by default 3.
    """

    server: str = DEFAULT_SERVER
    api_key: Optional[str] = None
    cachedir: str = DEFAULT_CACHE_DIR
    verbosity: int = 1
    timeout: float = 60.0
    max_retries: int = 3

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_server()
        self._validate_parameters()

    def _validate_server(self) -> None:
        if not self.server.startswith(("http://", "https://")):
            raise ValueError(
                f"server must be an http(s) URL, got '{self.server}'"
            )
        self.server = self.server.rstrip("/")

    def _validate_parameters(self) -> None:
        if self.verbosity not in (0, 1, 2):
            raise ValueError(f"verbosity must be 0, 1 or 2, got {self.verbosity}")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")

    @property
    def cache_path(self) -> Path:
        """Cache directory with ``~`` expanded."""
        return Path(self.cachedir).expanduser()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[str] = None) -> OMLConfig:
    """Build an :class:`OMLConfig` from a YAML file and the environment.

    The file is taken from ``path``, else ``$OPENML_CONFIG``, else
    ``~/.openml/config.yaml`` when it exists. Environment variables listed in
    ``ENV_OVERRIDES`` take precedence over the file.

    Raises
    ------
    FileNotFoundError
        If an explicitly requested config file does not exist.
    """
    explicit = path or os.getenv("OPENML_CONFIG")
    config_path = Path(explicit or DEFAULT_CONFIG_PATH).expanduser()

    values: dict[str, Any] = {}
    if config_path.is_file():
        values = load_yaml(str(config_path))
        logger.debug(f"Loaded configuration from {config_path}")
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    known = {f.name for f in fields(OMLConfig)}
    unknown = set(values) - known
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
    values = {k: v for k, v in values.items() if k in known}

    for env_var, key in ENV_OVERRIDES.items():
        env_value = os.getenv(env_var)
        if env_value:
            values[key] = env_value

    return OMLConfig(**values)


def save_config(config: OMLConfig, path: Optional[str] = None) -> None:
    """Persist ``config`` to ``path`` (default ``~/.openml/config.yaml``)."""
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    save_yaml(str(config_path), config.to_dict(), reason="configuration saved")
