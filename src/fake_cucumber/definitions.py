"""Step definitions.

A step definition pairs a matcher with an executable action. Matching
step text against a definition never runs the action: it only produces
a `SupportCodeExecutor` bound to the captured arguments.
"""

from re import Pattern
from typing import TYPE_CHECKING
from uuid import uuid4

from pydantic import Field

from fake_cucumber.executor import StepAction, SupportCodeExecutor
from fake_cucumber.matchers import Matcher, RegularExpression
from fake_cucumber.messages import SourceReference, StepDefinitionConfig, StepDefinitionPattern
from fake_cucumber.models import SchemaModel

if TYPE_CHECKING:
    from typing import Self


class StepDefinition(SchemaModel):
    """Registered pattern and action pair.

    Step definitions are immutable: the matcher, the action and the
    identity are fixed at construction. A malformed pattern fails when
    the matcher is built, before the definition can be registered.
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        title='Step definition id',
        description='Opaque identifier reported in configuration messages.',
    )

    matcher: Matcher = Field(
        title='Step text matcher',
    )

    action: StepAction = Field(
        title='Step action',
        description=(
            'Callable implementing the step.\n'
            'Receives captured arguments positionally and may be '
            'synchronous or asynchronous.'
        ),
    )

    location: SourceReference | None = Field(
        default=None,
        title='Declaration location',
        description=(
            'Where the step definition was declared.\n'
            'Derived from the action code object when not provided.'
        ),
    )

    @classmethod
    def from_pattern(cls, pattern: str | Pattern[str], action: StepAction, *,
                     id: str | None = None,  # noqa: A002
                     location: SourceReference | None = None) -> 'Self':
        """Build a step definition matched by a regular expression.

        Args:
            pattern: Regular expression source or compiled pattern.
            action: Step action.
            id: Optional step definition id. A UUID is generated if omitted.
            location: Optional declaration location.

        Returns:
            A new step definition.

        Raises:
            StepDefinitionError: If the pattern is malformed.
        """
        fields = {
            'matcher': RegularExpression(pattern),
            'action': action,
            'location': location,
        }
        if id is not None:
            fields['id'] = id

        return cls(**fields)

    def match(self, text: str) -> SupportCodeExecutor | None:
        """Match step text against this definition.

        Args:
            text: Step text.

        Returns:
            A new executor bound to the action and captured arguments,
            or `None` if the pattern does not apply.
        """
        arguments = self.matcher.match(text)
        if arguments is None:
            return None

        return SupportCodeExecutor(
            step_definition_id=self.id,
            action=self.action,
            arguments=tuple(arguments),
            text=text,
        )

    def to_configuration_message(self) -> StepDefinitionConfig:
        """Build the configuration snapshot used for reporting.

        Returns:
            Id, declared pattern and location of this definition.
        """
        return StepDefinitionConfig(
            id=self.id,
            pattern=StepDefinitionPattern(
                source=self.matcher.source,
                type=self.matcher.type,
            ),
            location=self.location or SourceReference.from_callable(self.action),
        )
