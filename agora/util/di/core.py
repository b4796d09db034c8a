"""Core DI providers (non-mockable)."""

from dishka import Scope, provide
from pydantic import ValidationError

from agora.config import Settings
from agora.util.di.base import ProviderBase
from agora.util.error import ConfigurationError


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment.

        Raises:
            ConfigurationError: If the environment holds invalid settings
        """
        return load_settings()


def load_settings() -> Settings:
    """Load settings, reporting validation failures as ConfigurationError."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
