"""Argument parsing functionality for TFWhatsUp."""

import argparse


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tfwhatsup",
        description=(
            "TFWhatsUp - show the release notes of newer Terraform provider "
            "versions that touch the resources you use"
        ),
        add_help=True,
    )

    parser.add_argument("tf_files_path",
                        metavar="tfFilesPath",
                        help="Path where your Terraform is located. Defaults to current directory.",
                        nargs="?",
                        default=None)
    parser.add_argument("-t", "--github-api-token",
                        dest="GITHUB_TOKEN",
                        help="GitHub API token; raises the API rate limit (or set GITHUB_TOKEN)",
                        action="store",
                        type=str)
    parser.add_argument("--no-pause",
                        dest="NO_PAUSE",
                        help="Show all providers without pausing between them.",
                        action="store_true")
    parser.add_argument("--caps",
                        dest="CAPS",
                        help="Mark relevant release-note lines with a prefix and upper case instead of color.",
                        action="store_true")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to a JSON report file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-w", "--max-workers",
                        dest="MAX_WORKERS",
                        help="Number of providers processed concurrently",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
