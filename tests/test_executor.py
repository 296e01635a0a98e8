"""Tests for support code execution outcomes."""

from asyncio import run
from typing import TYPE_CHECKING

import pytest

from fake_cucumber.executor import Failure, Success, SupportCodeExecutor
from fake_cucumber.messages import Status, TestResult
from tests.examples.actions import (
    async_cancelled_action,
    async_failing_action,
    async_passing_action,
    failing_action,
    passing_action,
)

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def make_executor(action: 'Callable[..., object]', *arguments: str | None) -> SupportCodeExecutor:
    return SupportCodeExecutor(
        step_definition_id='step-definition-id',
        action=action,
        arguments=arguments,
    )


def test_success_keeps_value() -> None:
    """Return the action value on normal completion."""
    outcome = make_executor(passing_action, '1', None).execute()

    assert outcome == Success(value=('1', None))
    assert outcome.status == 'ok'
    assert outcome.to_test_result() == TestResult(status=Status.PASSED)


def test_failure_keeps_error() -> None:
    """Capture the raised error and its message."""
    outcome = make_executor(failing_action).execute()

    assert isinstance(outcome, Failure)
    assert outcome.message == 'This step has failed'
    assert isinstance(outcome.error, RuntimeError)
    assert outcome.to_test_result() == TestResult(
        status=Status.FAILED,
        message='This step has failed',
    )


def test_action_runs_once(mocker: 'MockerFixture') -> None:
    """Invoke the action exactly once with captured arguments."""
    action = mocker.Mock(return_value=42)

    outcome = make_executor(action, 'a', 'b').execute()

    assert outcome == Success(value=42)
    action.assert_called_once_with('a', 'b')


@pytest.mark.parametrize('error, except_message', (
    pytest.param(AssertionError('expected 1, got 2'), 'expected 1, got 2', id='assertion'),
    pytest.param(AssertionError(), 'AssertionError', id='empty assertion'),
    pytest.param(KeyError('missing'), "'missing'", id='key error'),
    pytest.param(NotImplementedError(), 'NotImplementedError', id='pending'),
))
def test_failure_messages(mocker: 'MockerFixture', error: Exception, except_message: str) -> None:
    """Report the error message, or the error class name when it is empty."""
    outcome = make_executor(mocker.Mock(side_effect=error)).execute()

    assert isinstance(outcome, Failure)
    assert outcome.message == except_message
    assert outcome.error is error


def test_base_exceptions_propagate(mocker: 'MockerFixture') -> None:
    """Let interpreter-level interruptions escape."""
    executor = make_executor(mocker.Mock(side_effect=KeyboardInterrupt))

    with pytest.raises(KeyboardInterrupt):
        executor.execute()


@pytest.mark.parametrize('action, except_outcome', (
    pytest.param(async_passing_action, Success(value=('x',)), id='passed'),
    pytest.param(
        async_failing_action,
        Failure(message='This async step has failed'),
        id='failed',
    ),
))
def test_async_outcomes(action: 'Callable[..., object]', except_outcome: Success | Failure) -> None:
    """Await asynchronous actions with and without a running loop."""
    executor = make_executor(action, 'x')

    for outcome in (executor.execute(), run(executor.execute_async())):
        assert type(outcome) is type(except_outcome)
        assert outcome.status == except_outcome.status
        if isinstance(outcome, Success):
            assert outcome.value == except_outcome.value
        else:
            assert outcome.message == except_outcome.message


def test_sync_cancellation() -> None:
    """Report cancellation of a synchronously driven action as failure."""
    outcome = make_executor(async_cancelled_action).execute()

    assert isinstance(outcome, Failure)
    assert outcome.to_test_result().status is Status.FAILED


def test_sync_execution_inside_event_loop() -> None:
    """Refuse to drive an async action synchronously inside a running loop."""
    executor = make_executor(async_passing_action)

    async def execute() -> Success | Failure:
        return executor.execute()

    outcome = run(execute())

    assert isinstance(outcome, Failure)
    assert 'execute_async' in outcome.message


def test_sync_action_in_async_mode(mocker: 'MockerFixture') -> None:
    """Run plain callables from the asynchronous entry point."""
    action = mocker.Mock(return_value='done')

    outcome = run(make_executor(action, 'a').execute_async())

    assert outcome == Success(value='done')
    action.assert_called_once_with('a')
