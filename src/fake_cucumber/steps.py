"""Test steps.

A test step is one occurrence of step text in a scenario. Executing it
always produces a `TestStepFinished` record carrying the step id; problems
raised while resolving or running the step are reported as `FAILED`
results and never escape.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from fake_cucumber.executor import Failure
from fake_cucumber.messages import TestStepFinished

if TYPE_CHECKING:
    from fake_cucumber.messages import TestResult
    from fake_cucumber.registry import StepDefinitionRegistry

logger = getLogger(__name__)


class TestStep:
    """Executable step occurrence bound to a registry.

    Holds no state beyond its identity, text and registry; each
    execution is independent.
    """

    __test__ = False

    def __init__(self, id: str, text: str,  # noqa: A002
                 registry: 'StepDefinitionRegistry') -> None:
        """Initialize a test step.

        Args:
            id: Externally supplied test step identifier.
            text: Step text to match.
            registry: Registry resolving the step text.
        """
        self.id = id
        self.text = text
        self.registry = registry

    def execute(self) -> TestStepFinished:
        """Execute the step.

        Returns:
            Finished record with this step id and the test result.
        """
        try:
            result = self.registry.execute(self.text)

        except Exception as error:  # noqa: BLE001
            logger.debug('Step %r could not be executed: %s', self.text, error, exc_info=error)
            result = Failure.from_exception(error).to_test_result()

        return self.finish(result)

    async def execute_async(self) -> TestStepFinished:
        """Execute the step, awaiting asynchronous actions.

        Returns:
            Finished record with this step id and the test result.
        """
        try:
            result = await self.registry.execute_async(self.text)

        except Exception as error:  # noqa: BLE001
            logger.debug('Step %r could not be executed: %s', self.text, error, exc_info=error)
            result = Failure.from_exception(error).to_test_result()

        return self.finish(result)

    def finish(self, result: 'TestResult') -> TestStepFinished:
        """Wrap a test result into a finished record."""
        return TestStepFinished(test_step_id=self.id, test_result=result)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(id={self.id!r}, text={self.text!r})'
