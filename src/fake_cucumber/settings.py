"""Runtime settings resolved from the environment."""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from fake_cucumber.models import SettingsModel


class RegistrySettings(SettingsModel):
    """Step definition registry settings.

    Values are read from `FAKE_CUCUMBER_*` environment variables.
    Explicit registry constructor arguments take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix='FAKE_CUCUMBER_',
    )

    strict: bool = Field(
        default=False,
        title='Strict registration',
        description=(
            'Treat duplicated step definition ids as a fatal '
            'registration error instead of a warning.'
        ),
    )
