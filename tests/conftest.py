"""Tests configurations and fixtures."""

from itertools import count
from typing import TYPE_CHECKING

import pytest

from fake_cucumber.definitions import StepDefinition
from tests.examples.matchers import FixedMatcher

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType

    from fake_cucumber.matchers import Arguments


@pytest.fixture(autouse=True)
def clear_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from registry settings set in the environment."""
    monkeypatch.delenv('FAKE_CUCUMBER_STRICT', raising=False)


@pytest.fixture
def action(mocker: 'MockerFixture') -> 'MockType':
    """Provide a step action spy returning `None`."""
    return mocker.Mock(return_value=None)


@pytest.fixture
def make_step_definition(mocker: 'MockerFixture') -> 'Callable[..., StepDefinition]':
    """Provide a factory for step definitions with fixed matching.

    Each produced definition gets a unique id and, unless an action is
    given, its own action spy, so call counts can be observed per
    definition.
    """
    ids = count(1)

    def make(action: 'Callable[..., object] | None' = None, *,
             arguments: 'Arguments | None' = (),
             source: str = '^.*$') -> StepDefinition:
        """Build a step definition.

        Args:
            action: Step action. A `Mock` spy is used if omitted.
            arguments: Arguments captured on match, `None` for no match.
            source: Declared pattern source.

        Returns:
            A step definition backed by a `FixedMatcher`.
        """
        return StepDefinition(
            id=f'step-definition-{next(ids)}',
            matcher=FixedMatcher(arguments, source),
            action=action if action is not None else mocker.Mock(return_value=None),
        )

    return make
