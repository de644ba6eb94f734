"""Run settings assembled from CLI flags, environment and config file.

Precedence, highest first: CLI flags, environment (``GITHUB_TOKEN``),
config file (``--config`` or a default location), built-in defaults.
Config problems are logged and never break the CLI.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class RunSettings:  # pylint: disable=too-many-instance-attributes
    """Everything the run needs besides the Terraform directory."""
    github_token: Optional[str] = None
    show_all: bool = False
    caps_style: bool = False
    max_workers: int = Constants.MAX_WORKERS
    request_timeout: int = Constants.REQUEST_TIMEOUT
    registry_url: str = Constants.REGISTRY_URL_TERRAFORM
    github_api_base: str = Constants.GITHUB_API_BASE
    output: Optional[str] = None


def _default_config_paths(directory: str):
    for name in Constants.CONFIG_FILE_NAMES:
        yield os.path.join(directory, name)
    yield os.path.expanduser(Constants.USER_CONFIG_FILE)


def load_config_file(path: Optional[str], directory: str = ".") -> Dict[str, Any]:
    """Load a YAML or JSON config file.

    Args:
        path: Explicit config path; when None the default locations are tried.
        directory: Terraform directory searched for ``.tfwhatsup.yml``.

    Returns:
        The parsed mapping, or {} when nothing usable was found.
    """
    candidates = [path] if path else [p for p in _default_config_paths(directory) if os.path.isfile(p)]
    for candidate in candidates:
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                if candidate.lower().endswith(".json"):
                    cfg = json.load(fh)
                else:
                    cfg = yaml.safe_load(fh)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning("Ignoring config file %s: %s", candidate, e)
            continue
        if cfg is None:
            return {}
        if not isinstance(cfg, dict):
            logger.warning("Ignoring config file %s: expected a mapping", candidate)
            continue
        logger.debug("Loaded config file %s", candidate)
        return cfg
    return {}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_int(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer setting value %r", value)
        return default
    return parsed if parsed > 0 else default


def build_settings(args, cfg: Optional[Dict[str, Any]] = None) -> RunSettings:
    """Merge parsed CLI args over environment and config values."""
    cfg = cfg or {}
    settings = RunSettings()

    settings.github_token = (
        getattr(args, "GITHUB_TOKEN", None)
        or os.environ.get(Constants.ENV_GITHUB_TOKEN)
        or cfg.get("github_token")
        or None
    )
    settings.show_all = bool(getattr(args, "NO_PAUSE", False)) or _as_bool(cfg.get("show_all", False))
    settings.caps_style = bool(getattr(args, "CAPS", False)) or _as_bool(cfg.get("caps_style", False))

    workers = getattr(args, "MAX_WORKERS", None)
    settings.max_workers = _as_int(workers if workers is not None else cfg.get("max_workers", settings.max_workers),
                                   Constants.MAX_WORKERS)
    settings.request_timeout = _as_int(cfg.get("request_timeout", settings.request_timeout),
                                       Constants.REQUEST_TIMEOUT)
    settings.registry_url = str(cfg.get("registry_url") or settings.registry_url)
    settings.github_api_base = str(cfg.get("github_api_base") or settings.github_api_base)
    settings.output = getattr(args, "OUTPUT", None)
    return settings


def apply_runtime_overrides(settings: RunSettings) -> None:
    """Push tunables that live on Constants (HTTP timeout)."""
    Constants.REQUEST_TIMEOUT = settings.request_timeout
