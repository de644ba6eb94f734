"""TFWhatsUp - what changed in the Terraform providers you pin?

Reads ``.terraform.lock.hcl`` and every ``*.tf`` file under a directory,
finds each provider's upstream repository, and shows the release notes of
every newer release with the lines that mention your resource/data types
highlighted. Exit codes are listed in ``constants.ExitCodes``.
"""
import logging
import os
import sys
from typing import Callable, List, Optional

from rich.console import Console

from args import parse_args
from config import apply_runtime_overrides, build_settings, load_config_file
from constants import Constants, ExitCodes
from common.errors import LockfileParseError
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled, redact
from output.console import ConsoleRenderer
from output.export import build_document, export_json
from output.highlight import StyleMode
from pipeline import report_all, resolve_all
from registry.terraform import TerraformRegistryClient
from repository.github import GitHubClient
from terraform.extract import extract_providers, extract_type_identifiers
from terraform.scan import find_lockfile, find_terraform_files, read_sources, read_text
from versioning.models import ProviderReport

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def run(args, console: Optional[Console] = None,
        pause: Optional[Callable[[Console], None]] = None) -> int:
    """Execute one scan and return the exit code."""
    # pylint: disable=too-many-locals
    directory = os.path.abspath(args.tf_files_path or os.getcwd())
    settings = build_settings(args, load_config_file(getattr(args, "CONFIG", None), directory))
    apply_runtime_overrides(settings)
    console = console or Console()

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="run", target=directory,
                                token=redact(settings.github_token) or None,
                                max_workers=settings.max_workers)
        )

    lockfile = find_lockfile(directory)
    if lockfile is None:
        logger.error("Lock file not found at %s", os.path.join(directory, Constants.LOCKFILE_NAME))
        return ExitCodes.LOCKFILE_NOT_FOUND.value

    tf_files = find_terraform_files(directory)
    if not tf_files:
        logger.error("Exiting: No Terraform files found in '%s'", directory)
        return ExitCodes.TERRAFORM_FILES_NOT_FOUND.value

    renderer = ConsoleRenderer(
        console,
        style_mode=StyleMode.from_flag(settings.caps_style),
        show_all=settings.show_all,
        pause=pause,
    )
    renderer.terraform_files(tf_files)

    try:
        extraction = extract_providers(read_text(lockfile), source=lockfile)
    except LockfileParseError as e:
        logger.error("Could not parse lock file: %s", e)
        return ExitCodes.LOCKFILE_PARSE_ERROR.value
    for err in extraction.errors:
        logger.warning("%s: %s. Skipping it.", err.path, err.message)
    renderer.providers(extraction.providers)

    sources, read_errors = read_sources(tf_files)
    scan = extract_type_identifiers(sources)
    for err in read_errors + scan.errors:
        logger.warning("Could not parse '%s', skipping it: %s", err.path, err.message)
    identifiers = scan.sorted_identifiers()
    renderer.resource_types(identifiers)

    if settings.github_token:
        logger.info("Using provided GitHub client token.")

    registry = TerraformRegistryClient(settings.registry_url)
    with console.status("Determining GitHub URLs..."):
        resolutions = resolve_all(extraction.providers, registry, settings.max_workers)
    for res in resolutions:
        if not res.ok:
            logger.warning("%s. Skipping it.", res.detail)
    resolved = [res.resolved for res in resolutions if res.ok]
    renderer.repositories(resolved)

    github = GitHubClient(settings.github_api_base, settings.github_token)
    reports: List[ProviderReport] = []
    for report in report_all(resolved, github, identifiers, settings.max_workers):
        if report.skipped:
            logger.warning("%s. Skipping it.", report.detail)
        renderer.report(report)
        reports.append(report)
    renderer.summary(reports)

    if settings.output:
        export_json(build_document(resolutions, reports, identifiers), settings.output)

    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    try:
        code = run(args)
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        code = ExitCodes.UNKNOWN_ERROR.value
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Unexpected error: %s", e)
        logger.debug("Traceback", exc_info=True)
        code = ExitCodes.UNKNOWN_ERROR.value
    sys.exit(code)


if __name__ == "__main__":
    main()
