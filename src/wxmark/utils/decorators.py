#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/utils/decorators.py
"""Dependency checks for the optional parts of the pipeline.

The tokenizer and the diagram post-processor import their third-party
libraries lazily. :func:`requires_dependencies` guards those entry points so
that a missing or outdated library surfaces as a :class:`DependencyError`
naming the package to install, rather than as a bare ImportError from deep
inside a render.

"""

from __future__ import annotations

import importlib
from functools import wraps
from importlib import metadata
from typing import Any, Callable, List, Optional, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from wxmark.exceptions import DependencyError

PackageSpec = Tuple[str, str, str]


def installed_version(install_name: str) -> Optional[str]:
    """Return the installed version of a distribution, or None if it is not installed."""
    try:
        return metadata.version(install_name)
    except metadata.PackageNotFoundError:
        return None


def check_dependencies(
    packages: List[PackageSpec],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    """Check that each package imports and satisfies its version constraint.

    Parameters
    ----------
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples

    Returns
    -------
    tuple
        ``(missing, version_mismatches, first_import_error)``. A package
        whose version cannot be determined is reported as a mismatch with
        installed version ``"unknown"``.

    """
    missing: List[Tuple[str, str]] = []
    mismatches: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue

        if not version_spec:
            continue
        found = installed_version(install_name)
        try:
            satisfied = found is not None and Version(found) in SpecifierSet(version_spec)
        except InvalidVersion:
            satisfied = False
        if not satisfied:
            mismatches.append((install_name, version_spec, found or "unknown"))

    return missing, mismatches, first_error


def requires_dependencies(component_name: str, packages: List[PackageSpec]) -> Callable:
    """Check required dependencies and versions before each call.

    Parameters
    ----------
    component_name : str
        Name of the component (e.g. ``"markdown"``, ``"diagrams"``), used in
        the error message
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples, where
        ``version_spec`` may be empty to accept any version

    Returns
    -------
    Callable
        Decorator

    Raises
    ------
    DependencyError
        From the decorated callable, if a package is missing or too old

    Examples
    --------
        >>> @requires_dependencies("diagrams", [("beautifulsoup4", "bs4", "")])
        ... def parse(html):
        ...     from bs4 import BeautifulSoup
        ...     return BeautifulSoup(html, "html.parser")

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatches, import_error = check_dependencies(packages)
            if missing or mismatches:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    version_mismatches=mismatches,
                    original_import_error=import_error,
                ) from import_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["check_dependencies", "installed_version", "requires_dependencies"]
