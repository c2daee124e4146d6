"""
Application settings loaded from environment variables.

**Conceptual**: This module declares the application's configuration as one
frozen class. Every variable the application reads is listed here, with its
type and whether it is required. Nothing else in the codebase calls
os.getenv; it receives an AppConfig instead.

**Why centralized config?**
  - Single source of truth for all settings.
  - Easy to test (pass an override mapping instead of touching os.environ).
  - Fail-fast validation (missing COUNT gives a clear error at startup, not mid-run).
  - Typed values: DESTROY_DATABASE is a real bool, COUNT a real int.

**Environment variables**:
  - HOME (required): Home directory, passed through as a string.
  - DESTROY_DATABASE (required): "true"/"false" (or "1"/"0"). Anything else,
    including "yes", is rejected.
  - COUNT (required): Positive base-10 integer ("0", "-1", "abc" are rejected).
"""

from typing import Optional

from src.config.coercion import as_bool, as_positive_int, as_string
from src.config.environment import EnvConfig, env_config
from src.config.fields import env_field


@env_config
class AppConfig(EnvConfig):
    """
    Immutable application configuration.

    **Usage pattern**:
      ```python
      from src.config.settings import AppConfig

      # Production: read the real process environment
      config = AppConfig.from_env()

      # Tests: supply exactly the variables you want
      config = AppConfig.from_env({"HOME": "/", "DESTROY_DATABASE": "true", "COUNT": "1"})
      ```

    Attributes:
        HOME: Home directory of the process owner.
        DESTROY_DATABASE: Whether the database may be dropped on startup.
        COUNT: How many items to process (strictly positive).
    """
    HOME: str = env_field("HOME", as_string, description="Home directory of the process owner")
    DESTROY_DATABASE: bool = env_field(
        "DESTROY_DATABASE", as_bool, description="Drop the database on startup"
    )
    COUNT: int = env_field("COUNT", as_positive_int, description="Number of items to process")


# Convenience singleton for code paths that cannot receive the config explicitly.
# Tests should build AppConfig.from_env(mapping) instead of using this.
_default_settings: Optional[AppConfig] = None


def get_settings() -> AppConfig:
    """
    Get the process-wide AppConfig, loading it on first call.

    **Conceptual**: The environment is read once, on first use, then the same
    immutable object is returned for the life of the process.

    **Teaching note**: Singleton config is convenient but hides dependencies
    (a function uses config without declaring it). Prefer loading once in
    main() and passing the object down. This accessor exists for the places
    where that is impractical.

    Returns:
        The cached AppConfig.

    Raises:
        MissingRequiredFieldError: On first call, if a required variable is missing.
        InvalidFieldValueError: On first call, if a variable has the wrong shape.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = AppConfig.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the process-wide AppConfig (for testing).

    The next get_settings() call reloads from the environment.
    """
    global _default_settings
    _default_settings = None
