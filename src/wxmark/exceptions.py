#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the wxmark library.

This module defines specialized exception classes for the error conditions
that can occur while configuring and running the markdown rendering
pipeline.

Exception Hierarchy
-------------------
- WxMarkError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for renderer/pipeline)
    - TemplateNotFoundError (unknown template identifier)
    - ConfigurationError (unreadable or malformed configuration file)

  - RenderingError (per-element output generation failures)
    - MathRenderError (formula could not be typeset)
    - DiagramRenderError (diagram engine failure)
    - HighlightError (syntax highlighter failure)

  - DependencyError (missing/incompatible packages or executables)

Rendering errors are contained at the element boundary by the renderer and
never abort a whole document render; they surface only from the
collaborator functions that raise them.

"""

from typing import Any


class WxMarkError(Exception):
    """Base exception class for all wxmark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(WxMarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is provided.

    Parameters
    ----------
    component_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class TemplateNotFoundError(ValidationError):
    """Exception raised when a template identifier is not in the catalogue.

    Parameters
    ----------
    template_id : str
        The identifier that could not be resolved
    available : sequence of str, optional
        Identifiers that are available

    """

    def __init__(self, template_id: str, available: tuple[str, ...] = ()):
        """Initialize the error with the missing identifier."""
        message = f"Unknown template: '{template_id}'"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message, parameter_name="template", parameter_value=template_id)
        self.template_id = template_id
        self.available = available


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be loaded."""

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class RenderingError(WxMarkError):
    """Exception raised when rendering a single element fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    element_kind : str, optional
        The kind of element being rendered (e.g. ``"latex"``)
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, element_kind: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.element_kind = element_kind


class MathRenderError(RenderingError):
    """Exception raised by the math engine for formulas it cannot typeset."""

    def __init__(self, formula: str, original_error: Exception | None = None):
        """Initialize the error with the offending formula."""
        super().__init__(f"Could not typeset formula: {formula!r}", element_kind="latex", original_error=original_error)
        self.formula = formula


class DiagramRenderError(RenderingError):
    """Exception raised by a diagram engine for a diagram it cannot render."""

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the diagram source."""
        super().__init__(message, element_kind="mermaid", original_error=original_error)
        self.source = source


class HighlightError(RenderingError):
    """Exception raised when syntax highlighting cannot be applied."""

    def __init__(self, message: str, language: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the requested language."""
        super().__init__(message, element_kind="code_pre", original_error=original_error)
        self.language = language


class DependencyError(WxMarkError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    component_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{component_name} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{component_name} has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
