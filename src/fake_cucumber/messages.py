"""Protocol message models.

Immutable models mirroring the cucumber-messages structures produced by
the execution core: step definition configuration snapshots, test step
results, and the envelope wrapping them.

Python code uses snake_case field names. Dumping with `by_alias=True`
produces the camelCase protocol representation. Encoding and transport
of the dumped data belong to the caller.
"""

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import Field, model_validator

from fake_cucumber.models import MessageModel

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Self


class Status(StrEnum):
    """Test step result status."""

    UNKNOWN = 'UNKNOWN'
    PASSED = 'PASSED'
    SKIPPED = 'SKIPPED'
    PENDING = 'PENDING'
    UNDEFINED = 'UNDEFINED'
    AMBIGUOUS = 'AMBIGUOUS'
    FAILED = 'FAILED'


class StepDefinitionPatternType(StrEnum):
    """Syntax of a step definition pattern."""

    CUCUMBER_EXPRESSION = 'CUCUMBER_EXPRESSION'
    REGULAR_EXPRESSION = 'REGULAR_EXPRESSION'


class TestResult(MessageModel):
    """Outcome of a single test step execution.

    A message is attached if and only if the step has failed.
    """

    __test__ = False

    status: Status = Field(
        title='Result status',
        description='Terminal status of the executed test step.',
    )

    message: str | None = Field(
        default=None,
        title='Failure message',
        description=(
            'Message of the error raised by the step action.\n'
            'Present only for `FAILED` results.'
        ),
    )

    @model_validator(mode='after')
    def check_message(self) -> 'Self':
        """Ensure a message is present only for failed results.

        Returns:
            The validated result.

        Raises:
            ValueError: If the message presence does not match the status.
        """
        if self.status is Status.FAILED and self.message is None:
            raise ValueError('Failed result requires a message')

        if self.status is not Status.FAILED and self.message is not None:
            raise ValueError(f'{self.status} result can not carry a message')

        return self


class TestStepFinished(MessageModel):
    """Report of a finished test step."""

    __test__ = False

    test_step_id: str = Field(
        title='Test step id',
        description='Identifier of the test step this record reports on.',
    )

    test_result: TestResult = Field(
        title='Test result',
    )


class StepDefinitionPattern(MessageModel):
    """Declared pattern of a step definition."""

    source: str = Field(
        title='Pattern source',
        description='Pattern text as declared by the step definition.',
    )

    type: StepDefinitionPatternType = Field(
        title='Pattern type',
    )


class SourceReference(MessageModel):
    """Location of a step definition in source code."""

    uri: str = Field(
        title='Source file',
    )

    line: int | None = Field(
        default=None,
        ge=1,
        title='Line number',
        description='1-based line number of the declaration.',
    )

    @classmethod
    def from_callable(cls, func: 'Callable[..., Any]') -> 'Self | None':
        """Derive a source reference from a Python function.

        Args:
            func: Step action.

        Returns:
            Reference to the first line of the function, or `None` if
            the callable carries no code object (builtins, partials,
            callable instances).
        """
        code = getattr(func, '__code__', None)
        if code is None:
            return None

        return cls(uri=code.co_filename, line=code.co_firstlineno)


class StepDefinitionConfig(MessageModel):
    """Configuration snapshot of a registered step definition."""

    id: str = Field(
        title='Step definition id',
    )

    pattern: StepDefinitionPattern = Field(
        title='Step definition pattern',
    )

    location: SourceReference | None = Field(
        default=None,
        title='Step definition location',
    )


class Envelope(MessageModel):
    """Wrapper carrying exactly one protocol message payload."""

    step_definition_config: StepDefinitionConfig | None = Field(
        default=None,
        title='Step definition configuration',
    )

    test_step_finished: TestStepFinished | None = Field(
        default=None,
        title='Finished test step',
    )

    @model_validator(mode='after')
    def check_payload(self) -> 'Self':
        """Ensure exactly one payload is populated.

        Returns:
            The validated envelope.

        Raises:
            ValueError: If no payload or more than one payload is set.
        """
        populated = [
            name
            for name in type(self).model_fields
            if getattr(self, name) is not None
        ]

        if len(populated) != 1:
            raise ValueError(
                f'Envelope must carry exactly one payload, got {len(populated)}',
            )

        return self

    @property
    def payload(self) -> StepDefinitionConfig | TestStepFinished:
        """Return the populated payload."""
        return next(
            getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        )
