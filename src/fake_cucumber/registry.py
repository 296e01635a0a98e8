"""Step definition registry.

The registry is the top-level coordinator of the execution core. It holds
the registered step definitions, builds test steps, and resolves each
step to exactly one of the terminal statuses:

- no matching definition: `UNDEFINED`, nothing is executed;
- several matching definitions: `AMBIGUOUS`, nothing is executed;
- a single matching definition: its action runs once and the step
  is `PASSED` or `FAILED`.

No priority or ordering rules are applied between matching definitions.
"""

from logging import getLogger
from typing import TYPE_CHECKING
from warnings import warn

from fake_cucumber.errors import ErrorContext, RegistryWarning, StepDefinitionError
from fake_cucumber.executor import Failure
from fake_cucumber.messages import Envelope, Status, TestResult
from fake_cucumber.settings import RegistrySettings
from fake_cucumber.steps import TestStep

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from fake_cucumber.definitions import StepDefinition
    from fake_cucumber.executor import Outcome, SupportCodeExecutor

logger = getLogger(__name__)


class StepDefinitionRegistry:
    """Immutable collection of step definitions and the matching algorithm.

    Definitions are kept in registration order. The registry has no
    mutable state after construction, so matching, execution and message
    export may be called concurrently.
    """

    def __init__(self, step_definitions: 'Iterable[StepDefinition]', *,
                 strict: bool | None = None) -> None:
        """Register step definitions.

        Args:
            step_definitions: Step definitions in registration order.
            strict: Whether duplicated step definition ids raise instead
                of emitting a warning. Taken from `RegistrySettings`
                when omitted.

        Raises:
            StepDefinitionError: If ids are duplicated on strict mode.
        """
        if strict is None:
            strict = RegistrySettings().strict

        self.strict_mode = strict
        self.step_definitions: 'tuple[StepDefinition, ...]' = tuple(step_definitions)

        self._check_ids()

    def _check_ids(self) -> None:
        """Detect duplicated step definition ids.

        Raises:
            StepDefinitionError: If ids are duplicated on strict mode.
        """
        seen: set[str] = set()

        for step_definition in self.step_definitions:
            if step_definition.id not in seen:
                seen.add(step_definition.id)
                continue

            config = step_definition.to_configuration_message()
            context = ErrorContext(element={
                'id': config.id,
                'pattern': config.pattern.source,
            })
            if config.location is not None:
                context.update(uri=config.location.uri, line=config.location.line)

            error = StepDefinitionError(
                f'Step definition id {step_definition.id!r} is already registered',
                context=context,
            )
            if self.strict_mode:
                raise error

            warn(str(error), category=RegistryWarning, stacklevel=3)

    def create_test_step(self, text: str, id: str) -> TestStep:  # noqa: A002
        """Build a test step bound to this registry.

        No matching happens until the step is executed.

        Args:
            text: Step text to match.
            id: Test step identifier.

        Returns:
            A new test step.
        """
        return TestStep(id, text, self)

    def match(self, text: str) -> list['SupportCodeExecutor']:
        """Match step text against every registered definition.

        Args:
            text: Step text.

        Returns:
            Executors of all matching definitions, in registration order.
        """
        return [
            executor
            for step_definition in self.step_definitions
            if (executor := step_definition.match(text)) is not None
        ]

    def _resolve(self, text: str) -> 'SupportCodeExecutor | TestResult':
        """Resolve step text to a single executor or a terminal result.

        Args:
            text: Step text.

        Returns:
            The only matching executor, or an `UNDEFINED` or `AMBIGUOUS`
            result when zero or several definitions match.
        """
        executors = self.match(text)
        logger.debug('Step %r matched %d definition(s)', text, len(executors))

        if not executors:
            return TestResult(status=Status.UNDEFINED)

        if len(executors) > 1:
            return TestResult(status=Status.AMBIGUOUS)

        return executors[0]

    def execute(self, text: str) -> TestResult:
        """Resolve and execute step text.

        Args:
            text: Step text.

        Returns:
            Terminal test result of the step.
        """
        resolved = self._resolve(text)
        if isinstance(resolved, TestResult):
            return resolved

        return self._report(text, resolved.execute())

    async def execute_async(self, text: str) -> TestResult:
        """Resolve and execute step text, awaiting asynchronous actions.

        Args:
            text: Step text.

        Returns:
            Terminal test result of the step.
        """
        resolved = self._resolve(text)
        if isinstance(resolved, TestResult):
            return resolved

        outcome = await resolved.execute_async()

        return self._report(text, outcome)

    @staticmethod
    def _report(text: str, outcome: 'Outcome') -> TestResult:
        if isinstance(outcome, Failure):
            logger.debug('Step %r failed: %s', text, outcome.message, exc_info=outcome.error)
        return outcome.to_test_result()

    def to_messages(self) -> list[Envelope]:
        """Wrap each step definition configuration in an envelope.

        Returns:
            One envelope per definition, in registration order.
        """
        return [
            Envelope(step_definition_config=step_definition.to_configuration_message())
            for step_definition in self.step_definitions
        ]
