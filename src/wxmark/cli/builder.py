#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser and exit codes for the wxmark CLI."""

from __future__ import annotations

import argparse

from wxmark import __version__
from wxmark.exceptions import DependencyError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    # ConfigurationError and TemplateNotFoundError are ValidationErrors
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def _logging_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names (implies DEBUG)",
    )
    return parent


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the render, templates and themes commands."""
    common = _logging_parent()

    parser = argparse.ArgumentParser(
        prog="wxmark",
        description="Render markdown to inline-styled HTML for article publishing.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    render = subparsers.add_parser(
        "render",
        parents=[common],
        help="Render a markdown file to styled HTML",
        description="Render a markdown file to an HTML fragment that uses only inline styles.",
    )
    render.add_argument("input", metavar="INPUT", help="Markdown file to render, or '-' to read stdin")
    render.add_argument("-o", "--out", metavar="PATH", help="Write HTML to PATH instead of stdout")
    render.add_argument("-t", "--template", metavar="ID", help="Template to render with (see 'wxmark templates')")
    render.add_argument("--code-theme", metavar="NAME", help="Pygments theme for code blocks (see 'wxmark themes')")

    config_group = render.add_mutually_exclusive_group()
    config_group.add_argument(
        "--config",
        metavar="PATH",
        help="Configuration file (.json, .toml, .yaml or pyproject.toml). "
        "Defaults to $WXMARK_CONFIG, then a discovered .wxmark.* file",
    )
    config_group.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore $WXMARK_CONFIG and do not search for configuration files",
    )

    render.add_argument(
        "--no-hard-wrap",
        dest="hard_wrap",
        action="store_false",
        default=None,
        help="Treat single newlines inside paragraphs as spaces instead of line breaks",
    )
    render.add_argument(
        "--render-diagrams",
        action="store_true",
        help="Replace diagram placeholders with SVG using the mermaid CLI",
    )
    render.add_argument("--mmdc", metavar="PATH", default="mmdc", help="Mermaid CLI executable (default: mmdc)")

    subparsers.add_parser("templates", parents=[common], help="List the built-in templates")
    subparsers.add_parser("themes", parents=[common], help="List the available code highlighting themes")

    return parser


__all__ = [
    "EXIT_DEPENDENCY_ERROR",
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
]
