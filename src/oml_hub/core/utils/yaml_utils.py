# SPDX-License-Identifier: Apache-2.0
"""YAML utilities for configuration files."""

# Standard
from pathlib import Path
from typing import Any, Dict

# Third Party
import yaml

# Local
from .logger_config import setup_logger

logger = setup_logger(__name__)


def load_yaml(yaml_path: str) -> Dict[str, Any]:
    """Load a YAML mapping from disk.

    An empty file yields an empty dict.

    Raises
    ------
    ValueError
        If the file does not contain a mapping at the top level.
    """
    with open(yaml_path, encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(
            f"Expected a mapping in {yaml_path}, got {type(content).__name__}"
        )
    return content


def save_yaml(
    yaml_path: str,
    content: Dict[str, Any],
    reason: str = "",
    sort_keys: bool = False,
    width: int = 240,
    indent: int = 2,
) -> None:
    """
    Save a mapping to a YAML file.

    Parameters
    ----------
    yaml_path : str
        Path to the YAML file to write.
    content : Dict[str, Any]
        Mapping to save.
    reason : str, optional
        Reason for saving, used in log message.
    width : int, optional
        Maximum line width for YAML output.
    indent : int, optional
        Indentation level for YAML output.
    """
    path = Path(yaml_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            content,
            f,
            default_flow_style=False,
            sort_keys=sort_keys,
            width=width,
            indent=indent,
        )

    log_msg = f"Saved YAML file: {path}"
    if reason:
        log_msg = f"{log_msg} ({reason})"
    logger.debug(log_msg)
