# ============================================================================
# CLAUDE CONTEXT - CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: Singleton access to application configuration
# EXPORTS: AppConfig, EarthEngineConfig, get_config, reset_config, debug_config
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: AppConfig, EarthEngineConfig
# DEPENDENCIES: domain config modules
# PATTERNS: Singleton, composition, facade
# ENTRY_POINTS: from config import get_config
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── earth_engine_config.py   # OAuth2 + Earth Engine REST endpoints
    └── defaults.py              # Default values and env var names

Usage:
    from config import get_config
    config = get_config()
    url = config.earth_engine.project_url("my-project", "value:compute")

    # Debug output
    from config import debug_config
    info = debug_config()

The service-account secret is deliberately not cached here; see
infrastructure.auth.credentials.
"""

import os
from typing import Optional

from .defaults import EarthEngineDefaults, ImageDefaults, SecretEnvVars, AppDefaults
from .earth_engine_config import EarthEngineConfig
from .app_config import AppConfig

__version__ = "1.0.0"


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (secrets masked).

    Returns:
        Dictionary with configuration values and secret presence flags
    """
    config = get_config()
    return {
        'app_name': config.app_name,
        'environment': config.environment,
        'debug_mode': config.debug_mode,
        'version': __version__,
        'earth_engine': {
            'token_url': config.earth_engine.token_url,
            'api_base_url': config.earth_engine.api_base_url,
            'api_version': config.earth_engine.api_version,
            'oauth_scope': config.earth_engine.oauth_scope,
            'http_timeout_seconds': config.earth_engine.http_timeout_seconds,
        },
        'secrets': {
            SecretEnvVars.PRIVATE_KEY: '***MASKED***' if os.environ.get(SecretEnvVars.PRIVATE_KEY) else None,
            SecretEnvVars.CLIENT_EMAIL: os.environ.get(SecretEnvVars.CLIENT_EMAIL),
            SecretEnvVars.PROJECT: os.environ.get(SecretEnvVars.PROJECT),
        },
    }


__all__ = [
    'AppConfig',
    'EarthEngineConfig',
    'EarthEngineDefaults',
    'ImageDefaults',
    'SecretEnvVars',
    'AppDefaults',
    'get_config',
    'reset_config',
    'debug_config',
    '__version__',
]
