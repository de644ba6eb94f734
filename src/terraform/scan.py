"""Locate the lock file and Terraform configuration files on disk."""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Tuple

from constants import Constants
from .extract import FileParseError

logger = logging.getLogger(__name__)


def find_lockfile(directory: str) -> Optional[str]:
    """Return the lock file path inside ``directory`` if it exists."""
    path = os.path.join(directory, Constants.LOCKFILE_NAME)
    if os.path.isfile(path):
        return path
    return None


def find_terraform_files(directory: str) -> List[str]:
    """Return every ``*.tf`` file under ``directory``, recursively, sorted."""
    found = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in files:
            if name.endswith(Constants.TERRAFORM_FILE_SUFFIX):
                found.append(os.path.join(root, name))
    return sorted(found)


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def read_sources(paths: List[str]) -> Tuple[Dict[str, str], List[FileParseError]]:
    """Read each file; unreadable files are reported rather than raised."""
    sources: Dict[str, str] = {}
    errors: List[FileParseError] = []
    for path in paths:
        try:
            sources[path] = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Could not read %s: %s", path, e)
            errors.append(FileParseError(path=path, message=str(e)))
    return sources, errors
