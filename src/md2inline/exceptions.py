#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2inline library.

This module defines specialized exception classes for the error conditions
that can occur while configuring, parsing, rendering, and gathering link
preview data. Malformed Markdown is never one of them: the parser and the
renderer resolve every input to a complete tree.

Exception Hierarchy
-------------------
- Md2InlineError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a component)

  - ParsingError (internal parser failures)

  - RenderingError (styled output generation failures)

  - SecurityError (security violations)
    - NetworkSecurityError (SSRF, blocked hosts, disallowed schemes)

  - PreviewFetchError (link preview network failures)

"""

from typing import Any


class Md2InlineError(Exception):
    """Base exception class for all md2inline-specific errors.

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


class ValidationError(Md2InlineError):
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
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    component_name : str
        Name of the parser, renderer or fetcher that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

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


class ParsingError(Md2InlineError):
    """Exception raised when the parser fails internally.

    Markdown input itself never triggers this error; it signals a defect or
    an unexpected input type (for example, bytes that cannot be decoded).

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Md2InlineError):
    """Exception raised when styled output generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class SecurityError(Md2InlineError):
    """Base exception for security violations."""


class NetworkSecurityError(SecurityError):
    """Exception raised when a network security violation is detected.

    This includes SSRF attempts, blocked hosts, disallowed schemes and
    oversized responses.

    """


class PreviewFetchError(Md2InlineError):
    """Exception raised when link preview metadata cannot be fetched.

    Parameters
    ----------
    message : str
        Description of the failure
    url : str, optional
        The URL being fetched
    original_error : Exception, optional
        The underlying network exception

    """

    def __init__(self, message: str, url: str | None = None, original_error: Exception | None = None):
        """Initialize the preview fetch error."""
        super().__init__(message, original_error)
        self.url = url


__all__ = [
    "Md2InlineError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "RenderingError",
    "SecurityError",
    "NetworkSecurityError",
    "PreviewFetchError",
]
