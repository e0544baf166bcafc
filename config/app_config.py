"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - EarthEngineConfig (OAuth2 + Earth Engine REST endpoints)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.earth_engine_config: EarthEngineConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
from pydantic import BaseModel, Field

from .earth_engine_config import EarthEngineConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.

    Usage:
        from config import get_config
        config = get_config()
        url = config.earth_engine.token_url
    """

    app_name: str = Field(
        default=AppDefaults.APP_NAME,
        description="Function App name, reported in debug output"
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Deployment environment (dev, test, prod)"
    )

    debug_mode: bool = Field(
        default=False,
        description="Include exception type in 500 debug blocks"
    )

    earth_engine: EarthEngineConfig = Field(
        default_factory=EarthEngineConfig,
        description="OAuth2 and Earth Engine REST settings"
    )

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            app_name=os.environ.get("APP_NAME", AppDefaults.APP_NAME),
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            debug_mode=os.environ.get("DEBUG_MODE", "false").lower() == "true",
            earth_engine=EarthEngineConfig.from_environment(),
        )
