#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/diagrams.py
"""Diagram post-processing for rendered HTML.

The renderer emits each diagram as a ``<div class="mermaid">`` placeholder
holding the normalized diagram source. This module replaces placeholder
content with SVG produced by a diagram engine, after the HTML has been
committed to a document.

Processing is idempotent. Placeholders that already contain an ``<svg>``
are skipped, so re-running the pass (or running two passes over the same
document) only renders what is still pending. Each placeholder is rendered
independently: a failure shows an error marker in that placeholder and the
pass continues with the next one.

Engine setup happens once per :class:`DiagramSession`; the session carries
the ``initialized`` flag instead of module state.

"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from wxmark.constants import (
    DEFAULT_MERMAID_EXECUTABLE,
    DEFAULT_MERMAID_TIMEOUT_SECONDS,
    DEPS_DIAGRAMS,
    DIAGRAM_CSS_CLASS,
    DIAGRAM_ERROR_CSS_CLASS,
    DIAGRAM_FAILED_MESSAGE,
    DIAGRAM_SOURCE_ATTRIBUTE,
    MERMAID_CONFIG,
)
from wxmark.exceptions import DependencyError, DiagramRenderError, WxMarkError
from wxmark.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MERMAID_CLI_INSTALL_COMMAND = "npm install -g @mermaid-js/mermaid-cli"


class DiagramEngine(Protocol):
    """Renders diagram source text to SVG markup."""

    async def initialize(self) -> None:
        """Prepare the engine. Called at most once per session."""

    async def render(self, source: str) -> str:
        """Return SVG markup for *source*, or raise DiagramRenderError."""


@dataclass
class DiagramSession:
    """Caller-owned diagram engine state.

    Parameters
    ----------
    engine : DiagramEngine
        Engine used to render diagrams
    initialized : bool, default False
        Whether ``engine.initialize()`` has completed

    """

    engine: DiagramEngine
    initialized: bool = False
    _init_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False, compare=False)

    async def ensure_initialized(self) -> bool:
        """Initialize the engine on first use.

        Returns
        -------
        bool
            True if the engine is ready. Initialization failures are logged
            and reported as False; a later call retries.

        """
        if self.initialized:
            return True
        async with self._init_lock:
            if self.initialized:
                return True
            try:
                await self.engine.initialize()
            except (WxMarkError, OSError) as e:
                logger.error("Failed to initialize diagram engine: %s", e)
                return False
            self.initialized = True
            logger.debug("Diagram engine initialized")
            return True


async def process_diagrams(document: BeautifulSoup, session: DiagramSession) -> int:
    """Render every pending diagram placeholder in *document* in place.

    Parameters
    ----------
    document : BeautifulSoup
        Parsed document containing ``.mermaid`` placeholders
    session : DiagramSession
        Engine and initialization state

    Returns
    -------
    int
        Number of diagrams rendered successfully in this pass

    """
    if not await session.ensure_initialized():
        return 0

    rendered = 0
    for element in document.select(f".{DIAGRAM_CSS_CLASS}"):
        if element.find("svg") is not None:
            continue

        source = element.get(DIAGRAM_SOURCE_ATTRIBUTE) or element.get_text()
        if not source.strip():
            continue
        element[DIAGRAM_SOURCE_ATTRIBUTE] = source

        try:
            svg = await session.engine.render(source)
            fragment = _parse_fragment(svg)
        except Exception as e:
            logger.error("Failed to render diagram: %s", e)
            element.clear()
            marker = document.new_tag("div", attrs={"class": DIAGRAM_ERROR_CSS_CLASS})
            marker.string = DIAGRAM_FAILED_MESSAGE
            element.append(marker)
            continue

        element.clear()
        for node in list(fragment.contents):
            element.append(node.extract())
        rendered += 1

    return rendered


@requires_dependencies("diagrams", DEPS_DIAGRAMS)
def parse_html(html: str) -> BeautifulSoup:
    from bs4 import BeautifulSoup

    return BeautifulSoup(html, "html.parser")


def _parse_fragment(markup: str) -> BeautifulSoup:
    fragment = parse_html(markup)
    if fragment.find("svg") is None:
        raise DiagramRenderError("Diagram engine returned no SVG element")
    return fragment


async def render_diagrams_in_html(html: str, session: DiagramSession) -> str:
    """Render the diagram placeholders of an HTML string.

    Parameters
    ----------
    html : str
        HTML produced by the pipeline
    session : DiagramSession
        Engine and initialization state

    Returns
    -------
    str
        The HTML with pending diagrams replaced by SVG or error markers

    """
    document = parse_html(html)
    count = await process_diagrams(document, session)
    logger.info("Rendered %d diagram(s)", count)
    return str(document)


class MermaidCliEngine:
    """Diagram engine backed by the mermaid CLI (``mmdc``).

    Parameters
    ----------
    executable : str, default "mmdc"
        Name or path of the mermaid CLI
    config : mapping, default MERMAID_CONFIG
        Mermaid configuration written to a ``config.json`` for each render
    timeout : float, default 30.0
        Seconds allowed per diagram

    """

    def __init__(
        self,
        executable: str = DEFAULT_MERMAID_EXECUTABLE,
        config: Mapping[str, Any] = MERMAID_CONFIG,
        timeout: float = DEFAULT_MERMAID_TIMEOUT_SECONDS,
    ):
        """Initialize the engine settings."""
        self.executable = executable
        self.config = dict(config)
        self.timeout = timeout
        self._resolved: str | None = None

    async def initialize(self) -> None:
        """Locate the mermaid CLI.

        Raises
        ------
        DependencyError
            If the executable cannot be found

        """
        resolved = shutil.which(self.executable)
        if resolved is None:
            raise DependencyError(
                component_name="diagrams",
                missing_packages=[],
                message=(
                    f"Diagram rendering requires the mermaid CLI '{self.executable}' on PATH\n"
                    f"Install with: {MERMAID_CLI_INSTALL_COMMAND}"
                ),
                install_command=MERMAID_CLI_INSTALL_COMMAND,
            )
        self._resolved = resolved

    async def render(self, source: str) -> str:
        """Render *source* to SVG with ``mmdc``.

        Raises
        ------
        DiagramRenderError
            If the CLI fails, times out or produces no output

        """
        executable = self._resolved or self.executable
        temp_dir = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix="wxmark-mermaid-"))
        try:
            input_path, output_path, config_path = await asyncio.to_thread(self._write_inputs, temp_dir, source)
            cmd = [
                executable,
                "-i",
                str(input_path),
                "-o",
                str(output_path),
                "-c",
                str(config_path),
                "-b",
                "transparent",
            ]
            logger.debug("Running %s", " ".join(cmd))
            try:
                process = await asyncio.create_subprocess_exec(
                    *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
                )
            except OSError as e:
                raise DiagramRenderError(f"Could not start {executable}: {e}", source=source, original_error=e) from e

            try:
                _stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                process.kill()
                await process.wait()
                raise DiagramRenderError(
                    f"Diagram rendering timed out after {self.timeout}s", source=source, original_error=e
                ) from e

            if process.returncode != 0:
                message = stderr.decode("utf-8", errors="replace").strip()
                raise DiagramRenderError(f"mmdc exited with status {process.returncode}: {message}", source=source)
            svg = await asyncio.to_thread(self._read_output, output_path)
            if svg is None:
                raise DiagramRenderError("mmdc produced no output", source=source)
            return svg
        finally:
            await asyncio.to_thread(shutil.rmtree, temp_dir, ignore_errors=True)

    def _write_inputs(self, temp_dir: Path, source: str) -> tuple[Path, Path, Path]:
        input_path = temp_dir / "diagram.mmd"
        config_path = temp_dir / "config.json"
        input_path.write_text(source, encoding="utf-8")
        config_path.write_text(json.dumps(self.config), encoding="utf-8")
        return input_path, temp_dir / "diagram.svg", config_path

    @staticmethod
    def _read_output(output_path: Path) -> str | None:
        if not output_path.exists():
            return None
        return output_path.read_text(encoding="utf-8")


__all__ = [
    "DiagramEngine",
    "DiagramSession",
    "MermaidCliEngine",
    "parse_html",
    "process_diagrams",
    "render_diagrams_in_html",
]
