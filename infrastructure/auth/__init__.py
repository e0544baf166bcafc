# ============================================================================
# GOOGLE SERVICE-ACCOUNT AUTHENTICATION MODULE
# ============================================================================
# STATUS: Infrastructure - service-account credentials + OAuth2 JWT-bearer grant
# PURPOSE: Turn the SA_PRIVATE_KEY secret into a bearer token for Earth Engine
# ============================================================================
"""
Google Service-Account Authentication Module.

Components:
-----------
- credentials: Parse SA_PRIVATE_KEY (service-account JSON or raw PEM key)
- token_provider: Sign an RS256 JWT assertion and exchange it for an access token

Token Lifecycle:
---------------
Every request re-derives credentials and re-authenticates. Tokens are valid
for one hour but are used for a single request and never cached.

Usage:
------
```python
from infrastructure.auth import load_credentials, TokenProvider

credentials = load_credentials()
token = TokenProvider(http_client).get_access_token(credentials)
```
"""

from .credentials import ServiceAccountCredentials, extract_credentials, load_credentials
from .token_provider import TokenProvider

__all__ = [
    "ServiceAccountCredentials",
    "extract_credentials",
    "load_credentials",
    "TokenProvider",
]
