"""
Infrastructure Package - Lazy Loading Implementation.

Integrations with Google: service-account credentials, the OAuth2 token
exchange and the Earth Engine REST API.

All imports are deferred until actually needed. Azure Functions imports
function_app.py on every cold start, before the host guarantees that app
settings are present in the environment; nothing here may read
SA_PRIVATE_KEY or build HTTP clients at import time.

Exports (lazy):
    ServiceAccountCredentials, extract_credentials, load_credentials
    TokenProvider
    EarthEngineClient
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .auth.credentials import ServiceAccountCredentials as _ServiceAccountCredentials
    from .auth.token_provider import TokenProvider as _TokenProvider
    from .earth_engine import EarthEngineClient as _EarthEngineClient


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name == "ServiceAccountCredentials":
        from .auth.credentials import ServiceAccountCredentials
        return ServiceAccountCredentials
    elif name == "extract_credentials":
        from .auth.credentials import extract_credentials
        return extract_credentials
    elif name == "load_credentials":
        from .auth.credentials import load_credentials
        return load_credentials
    elif name == "TokenProvider":
        from .auth.token_provider import TokenProvider
        return TokenProvider
    elif name == "EarthEngineClient":
        from .earth_engine import EarthEngineClient
        return EarthEngineClient

    raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = [
    "ServiceAccountCredentials",
    "extract_credentials",
    "load_credentials",
    "TokenProvider",
    "EarthEngineClient",
]
