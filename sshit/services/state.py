"""Process-wide settings access for sshit."""

from sshit.config import Settings

# Loaded from the environment on first access
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or load settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the settings instance.

    Allows tests to inject custom settings without touching the environment.

    Args:
        settings: Settings instance to use.
    """
    global _settings
    _settings = settings


def reset_state() -> None:
    """Drop loaded settings so the next access re-reads the environment.

    Should only be used in test fixtures.
    """
    global _settings
    _settings = None
