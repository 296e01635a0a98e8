"""Step matching and execution core for behavior-driven test runners.

The `fake_cucumber` package matches human-readable step text against
registered step definitions, resolves the match outcome, runs the single
matched action, and reports the result as cucumber-messages compatible
records.

Key features:
- pluggable matchers with a regular expression implementation;
- explicit `UNDEFINED`, `AMBIGUOUS`, `PASSED` and `FAILED` outcomes;
- isolation of user-supplied actions, including asynchronous ones;
- immutable, camelCase-aliased Pydantic message models.
"""

from .definitions import StepDefinition
from .executor import Failure, Outcome, Success, SupportCodeExecutor
from .matchers import Arguments, Matcher, RegularExpression
from .messages import (
    Envelope,
    SourceReference,
    Status,
    StepDefinitionConfig,
    StepDefinitionPattern,
    StepDefinitionPatternType,
    TestResult,
    TestStepFinished,
)
from .registry import StepDefinitionRegistry
from .steps import TestStep

__all__ = (
    'Arguments',
    'Envelope',
    'Failure',
    'Matcher',
    'Outcome',
    'RegularExpression',
    'SourceReference',
    'Status',
    'StepDefinition',
    'StepDefinitionConfig',
    'StepDefinitionPattern',
    'StepDefinitionPatternType',
    'StepDefinitionRegistry',
    'Success',
    'SupportCodeExecutor',
    'TestResult',
    'TestStep',
    'TestStepFinished',
)
