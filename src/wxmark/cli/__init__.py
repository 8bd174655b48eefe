#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for wxmark.

Examples
--------
Render a file to stdout::

    $ wxmark render article.md

Render with a template and a code theme into a file::

    $ wxmark render article.md --template smartisan --code-theme monokai -o article.html

Render diagrams to SVG with the mermaid CLI::

    $ wxmark render article.md --render-diagrams --mmdc ./node_modules/.bin/mmdc

List templates and code themes::

    $ wxmark templates
    $ wxmark themes

"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wxmark.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    create_parser,
    get_exit_code_for_exception,
)
from wxmark.exceptions import WxMarkError
from wxmark.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Configure logging from --log-level, --log-file and --trace."""
    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_output(html: str, out: str | None) -> None:
    if out:
        Path(out).write_text(html, encoding="utf-8")
        logger.info("Wrote %s", out)
    else:
        sys.stdout.write(html)
        if not html.endswith("\n"):
            sys.stdout.write("\n")


def run_render(parsed_args: argparse.Namespace) -> int:
    """Execute the render command.

    Options are layered lowest to highest: template, configuration file,
    command-line flags.
    """
    from wxmark.config import load_config_with_priority, options_from_config
    from wxmark.pipeline import MarkdownPipeline
    from wxmark.templates import get_template

    try:
        markdown = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    config = {} if parsed_args.no_config else load_config_with_priority(parsed_args.config)
    options, config_template = options_from_config(config)

    overrides = {}
    if parsed_args.code_theme:
        overrides["code_theme"] = parsed_args.code_theme
    if parsed_args.hard_wrap is not None:
        overrides["hard_wrap"] = parsed_args.hard_wrap
    if overrides:
        options = options.create_updated(**overrides)

    template_id = parsed_args.template or config_template
    template = get_template(template_id) if template_id else None
    if template is not None:
        options = template.resolve_options(options)
        logger.debug("Rendering with template %r", template.id)

    html = MarkdownPipeline(options).render(markdown)

    if parsed_args.render_diagrams:
        html = asyncio.run(_render_diagrams(html, parsed_args.mmdc))

    if template is not None:
        html = template.apply(html)

    _write_output(html, parsed_args.out)
    return EXIT_SUCCESS


async def _render_diagrams(html: str, executable: str) -> str:
    from wxmark.diagrams import DiagramSession, MermaidCliEngine, render_diagrams_in_html

    session = DiagramSession(MermaidCliEngine(executable=executable))
    return await render_diagrams_in_html(html, session)


def run_templates() -> int:
    from wxmark.templates import list_templates

    for template_id, description in list_templates():
        print(f"{template_id:<16}{description}")
    return EXIT_SUCCESS


def run_themes() -> int:
    from wxmark.utils.highlight import list_themes

    for name in list_themes():
        print(name)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the wxmark command-line interface."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        if parsed_args.command == "render":
            return run_render(parsed_args)
        if parsed_args.command == "templates":
            return run_templates()
        return run_themes()
    except (WxMarkError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


__all__ = ["main", "create_parser"]


if __name__ == "__main__":
    sys.exit(main())
