"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from agora.config import Settings
from agora.util.di import PROVIDERS, get_provider
from agora.util.di.core import load_settings
from agora.util.logging import setup_logging
from agora.util.observability import configure_logfire


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers
    """
    # Get provider instances - all are instantiated without arguments
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)


def bootstrap() -> tuple[Settings, AsyncContainer]:
    """Configure logging and observability, then build the container.

    Entry point for a host process embedding the core.

    Returns:
        Loaded settings and the production container

    Raises:
        ConfigurationError: If the environment holds invalid settings
    """
    settings = load_settings()
    setup_logging(settings)
    configure_logfire(settings)
    return settings, create_container()
