"""Step text matchers.

A matcher decides whether a step definition applies to a piece of step
text and which arguments are captured from it. The execution core only
depends on the `Matcher` abstraction; `RegularExpression` is the
implementation shipped with the library.
"""

from abc import ABC, abstractmethod
from re import Pattern, error
from re import compile as regexp
from typing import Any

from fake_cucumber.errors import ErrorContext, StepDefinitionError
from fake_cucumber.messages import StepDefinitionPatternType

#: Values captured from step text, in capture order.
#: Their types are up to the matcher: `RegularExpression` produces
#: strings, and `None` for optional groups that did not participate.
type Arguments = tuple[Any, ...]


class Matcher(ABC):
    """Abstract step text matcher.

    Matchers must be pure: matching the same text always yields an
    equivalent result and never has side effects.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Pattern text as declared."""

    @property
    @abstractmethod
    def type(self) -> StepDefinitionPatternType:
        """Syntax of the declared pattern."""

    @abstractmethod
    def match(self, text: str) -> Arguments | None:
        """Match step text.

        Args:
            text: Step text to match.

        Returns:
            Captured arguments (possibly empty) on match,
            `None` if the pattern does not apply.
        """


class RegularExpression(Matcher):
    """Matcher backed by a Python regular expression.

    The whole step text must match the expression. Each capturing
    group becomes one argument.
    """

    def __init__(self, pattern: str | Pattern[str]) -> None:
        """Compile the pattern.

        Args:
            pattern: Regular expression source or a compiled pattern.

        Raises:
            StepDefinitionError: If the pattern is malformed.
        """
        try:
            compiled = pattern if isinstance(pattern, Pattern) else regexp(pattern)

        except (error, TypeError) as base:
            raise StepDefinitionError(
                f'Malformed regular expression: {base}',
                context=ErrorContext(element={'pattern': pattern}),
            ) from base

        if not isinstance(compiled.pattern, str):
            raise StepDefinitionError(
                'Malformed regular expression: step text can only be matched by a string pattern',
                context=ErrorContext(element={'pattern': compiled.pattern}),
            )

        self.regexp: Pattern[str] = compiled

    @property
    def source(self) -> str:
        return self.regexp.pattern

    @property
    def type(self) -> StepDefinitionPatternType:
        return StepDefinitionPatternType.REGULAR_EXPRESSION

    def match(self, text: str) -> Arguments | None:
        if (found := self.regexp.fullmatch(text)) is None:
            return None

        return found.groups()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegularExpression):
            return NotImplemented
        return self.regexp == other.regexp

    def __hash__(self) -> int:
        return hash(self.regexp)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.source!r})'
