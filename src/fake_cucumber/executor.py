"""Support code execution.

A `SupportCodeExecutor` binds one step definition action to the arguments
captured while matching a step. Running it produces an explicit `Outcome`
instead of propagating the action's exceptions, so the registry can turn
any action behavior into a deterministic test result.
"""

from asyncio import CancelledError, get_running_loop, run
from collections.abc import Callable
from inspect import isawaitable, iscoroutine
from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field

from fake_cucumber.errors import ErrorContext, StepRuntimeError
from fake_cucumber.matchers import Arguments  # noqa: TC001
from fake_cucumber.messages import Status, TestResult
from fake_cucumber.models import SchemaModel

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from typing import Self

#: Step action. Receives captured arguments positionally and may return
#: a value or an awaitable. Raising (or rejecting) marks the step failed.
type StepAction = Callable[..., Any]


class Success(SchemaModel):
    """Normal completion of a step action."""

    status: Literal['ok'] = 'ok'

    value: Any = Field(
        default=None,
        title='Returned value',
        description='Value returned by the action. Ignored by reporting.',
    )

    def to_test_result(self) -> TestResult:
        """Convert to a `PASSED` test result."""
        return TestResult(status=Status.PASSED)


class Failure(SchemaModel):
    """Abnormal termination of a step action."""

    status: Literal['failed'] = 'failed'

    message: str = Field(
        title='Failure message',
    )

    error: BaseException | None = Field(
        default=None,
        title='Underlying exception',
    )

    @classmethod
    def from_exception(cls, error: BaseException) -> 'Self':
        """Capture an exception raised by a step action.

        Args:
            error: Exception raised by the action.

        Returns:
            Failure carrying the error message and the error itself.
            Errors with an empty message are reported by class name.
        """
        return cls(message=str(error) or type(error).__name__, error=error)

    def to_test_result(self) -> TestResult:
        """Convert to a `FAILED` test result carrying the message."""
        return TestResult(status=Status.FAILED, message=self.message)


type Outcome = Success | Failure


async def _resolve(awaitable: 'Awaitable[Any]') -> Any:  # noqa: ANN401
    return await awaitable


def _run_awaitable(awaitable: 'Awaitable[Any]', context: ErrorContext) -> Any:  # noqa: ANN401
    """Drive an awaitable to completion from synchronous code.

    Args:
        awaitable: Result of an asynchronous action.
        context: Step context reported if the awaitable can not be driven.

    Returns:
        The awaited value.

    Raises:
        StepRuntimeError: If an event loop is already running in this thread.
    """
    try:
        get_running_loop()

    except RuntimeError:
        return run(_resolve(awaitable))

    if iscoroutine(awaitable):
        awaitable.close()

    raise StepRuntimeError(
        'Asynchronous step action can not be executed synchronously '
        'inside a running event loop, use `execute_async`',
        context=context,
    )


class SupportCodeExecutor(SchemaModel):
    """Execution handle for one matched step definition.

    Created fresh for each successful match and executed once.
    Executing the same handle twice is not guarded against.
    """

    step_definition_id: str = Field(
        title='Step definition id',
        description='Identifier of the step definition this handle originates from.',
    )

    action: StepAction = Field(
        title='Step action',
    )

    arguments: Arguments = Field(
        default=(),
        title='Captured arguments',
    )

    text: str | None = Field(
        default=None,
        title='Matched step text',
    )

    def execute(self) -> Outcome:
        """Invoke the action with the captured arguments.

        Asynchronous actions are awaited on a fresh event loop.

        Returns:
            `Success` on normal completion, otherwise `Failure`.
        """
        try:
            value = self.action(*self.arguments)
            if isawaitable(value):
                value = _run_awaitable(value, ErrorContext(
                    text=self.text,
                    element={'step_definition_id': self.step_definition_id},
                ))

        except (Exception, CancelledError) as error:
            return Failure.from_exception(error)

        return Success(value=value)

    async def execute_async(self) -> Outcome:
        """Invoke the action, awaiting it on the running event loop.

        Cancellation of the awaited action is reported as `Failure`.

        Returns:
            `Success` on normal completion, otherwise `Failure`.
        """
        try:
            value = self.action(*self.arguments)
            if isawaitable(value):
                value = await value

        except (Exception, CancelledError) as error:
            return Failure.from_exception(error)

        return Success(value=value)
