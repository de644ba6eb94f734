"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    UNKNOWN_ERROR = 1
    LOCKFILE_NOT_FOUND = 2
    TERRAFORM_FILES_NOT_FOUND = 3
    LOCKFILE_PARSE_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOCKFILE_NAME = ".terraform.lock.hcl"
    TERRAFORM_FILE_SUFFIX = ".tf"
    CONFIG_FILE_NAMES = [".tfwhatsup.yml", ".tfwhatsup.yaml"]
    USER_CONFIG_FILE = "~/.config/tfwhatsup/config.yml"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "TFWHATSUP_LOG_LEVEL"
    USER_AGENT = "tfwhatsup"

    # Registry constants
    REGISTRY_URL_TERRAFORM = "https://registry.terraform.io/v1/providers"
    REGISTRY_PROVIDER_PAGE = "https://registry.terraform.io/providers/{vendor}/{name}/latest"

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_WEB_BASE = "https://github.com"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    REPO_API_PER_PAGE = 100

    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    MAX_WORKERS = 4

    CAPS_MARKER = ">> "
