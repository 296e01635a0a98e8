"""CLI utilities for fake-cucumber message schemas.

The schema describes the protocol messages emitted by the execution core
using their camelCase wire names.
"""

from json import dumps

from click import echo, group, option

from fake_cucumber.messages import Envelope


def make_schema(indent: int | None = 4) -> str:
    """Generate the JSON Schema of the envelope message.

    Args:
        indent: Indentation level used for JSON formatting.

    Returns:
        Serialized JSON Schema string.
    """
    schema = Envelope.model_json_schema(by_alias=True)

    return dumps(schema, ensure_ascii=False, indent=indent)


@group(help='Command-line utilities for fake-cucumber.')
def cli() -> None:
    """Root CLI group for fake-cucumber tools."""
    return None


@cli.command(
    name='schema',
    help='Print the JSON Schema of emitted envelopes to standard output.',
)
@option(
    '-i', '--indent',
    type=int,
    default=4,
    show_default=True,
    help='Indentation of the generated JSON.',
)
def print_schema(indent: int) -> None:
    """Generate and print the JSON Schema."""
    echo(make_schema(indent))


if __name__ == '__main__':
    cli()
