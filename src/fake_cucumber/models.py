"""Base Pydantic models.

This module defines the foundational model classes used by step
definitions, execution outcomes, protocol messages, and runtime settings.
Models are immutable and strictly validated so that registered
definitions and emitted messages are deterministic.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all runtime elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          Step definitions stay fixed once registered and outcomes
          can not be rewritten by the reporting layer.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.

    Arbitrary types are allowed, so models may carry callables,
    matchers, and exceptions.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class MessageModel(SchemaModel):
    """Base immutable model for protocol messages.

    Field names are snake_case in Python and camelCase on the wire.
    Both names are accepted on validation; dumping with `by_alias=True`
    produces the protocol representation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Settings are resolved from the environment. Unknown variables are
    ignored so that unrelated environment content never breaks
    configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
