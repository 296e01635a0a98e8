"""Tests for command-line utilities."""

from json import loads

from click.testing import CliRunner

from fake_cucumber.__main__ import cli, make_schema


def test_schema_command() -> None:
    """Print the envelope JSON Schema with protocol names."""
    result = CliRunner().invoke(cli, ['schema'])

    assert result.exit_code == 0

    schema = loads(result.output)

    assert schema['title'] == 'Envelope'
    assert set(schema['properties']) == {'stepDefinitionConfig', 'testStepFinished'}
    assert {'TestResult', 'Status', 'StepDefinitionConfig'} <= set(schema['$defs'])


def test_schema_indent() -> None:
    """Honor the requested indentation."""
    result = CliRunner().invoke(cli, ['schema', '--indent', '2'])

    assert result.exit_code == 0
    assert result.output == make_schema(2) + '\n'
