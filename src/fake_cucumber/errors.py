"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report step definition registration issues and failures raised by
the execution core itself.

Errors raised by user-supplied step actions are never wrapped into these
types: they are captured as failed outcomes by the executor.
"""

from os import linesep
from typing import Any, TypedDict

from yaml import dump

FORMAT_REPLACER = '<runtime object>'
FORMAT_URI = '<unknown>'
FORMAT_INDENT = 4

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

SCALARS = (str, bytes, int, float, bool)
MAPPINGS = (dict,)
SEQUENCES = (list, tuple, set)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Source file where the step definition was declared.
    uri: str | None
    #: Line number in the source file (1-based).
    line: int | None

    #: Step text being matched or executed.
    text: str | None

    #: Element associated with the error, rendered as a YAML snippet.
    element: Any


class ErrorFormatter:
    """Utility class for formatting core errors.

    Produces human-readable messages with an optional location line
    and a YAML snippet of the failing element.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message.rstrip()

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and step location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including uri, line and
            step text when available.
        """
        indent = cls._ensure_indent(indent)

        message = ''
        if (uri := context.get('uri')) or context.get('line') is not None:
            message += f'{indent}in "{uri or FORMAT_URI}"'
            if (line := context.get('line')) is not None:
                message += f', line {line}'
            message += linesep

        if (text := context.get('text')) is not None:
            message += f'{indent}on step: {text}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a YAML snippet illustrating the failing element.

        Args:
            context: Error context containing element data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no element is available.
        """
        indent = cls._ensure_indent(indent)

        if (element := context.get('element')) is None:
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects are replaced with
        a placeholder to prevent leaking executable or opaque data.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                key: cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return linesep.join(
            f'{indent}{line}'
            for line in data.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input.

        Args:
            indent: Indentation as string or number of spaces.

        Returns:
            A string consisting of spaces or the provided string.
        """
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class RegistryWarning(UserWarning):
    """Warning emitted for non-fatal step definition registration issues.

    Used when a registration problem (for example a duplicated step
    definition id) does not prevent execution in non-strict mode.
    """


class FakeCucumberError(Exception, ErrorFormatter):
    """Base exception for all fake-cucumber errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Optional error context with location and data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class StepDefinitionError(FakeCucumberError):
    """Error raised when a step definition can not be registered.

    Raised at construction time for malformed patterns, and for
    duplicated step definition ids in strict mode. Registration errors
    halt setup entirely.
    """


class StepRuntimeError(FakeCucumberError):
    """Error raised by the execution core while running a step.

    Always captured as a failed outcome; never escapes test step
    execution.
    """
