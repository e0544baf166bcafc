# ============================================================================
# OAUTH2 JWT-BEARER TOKEN PROVIDER
# ============================================================================
# STATUS: Infrastructure - Google OAuth2 token exchange
# PURPOSE: Sign an RS256 assertion for the service account and trade it for
#          a bearer access token
# DEPENDENCIES: google-auth (crypt, jwt), httpx
# ============================================================================
"""
OAuth2 JWT-bearer token provider.

Implements the two-legged service-account flow (RFC 7523) against
https://oauth2.googleapis.com/token:

    1. Build claims {iss, sub, aud, iat, exp, scope}
    2. Sign with RS256 using the service-account private key
    3. POST grant_type=urn:ietf:params:oauth:grant-type:jwt-bearer&assertion=<jwt>
    4. Return access_token

No retry and no caching: every request authenticates from scratch.
"""

import time
from typing import Any, Callable, Dict, Optional

import httpx
from google.auth import crypt
from google.auth import jwt as google_jwt

from config import get_config
from config.defaults import EarthEngineDefaults
from config.earth_engine_config import EarthEngineConfig
from exceptions import AuthenticationError, ConfigurationError
from util_logger import LoggerFactory, ComponentType, log_exceptions
from .credentials import ServiceAccountCredentials


class TokenProvider:
    """
    Exchanges service-account credentials for an Earth Engine access token.

    The HTTP client is owned by the caller (one client per request).
    """

    def __init__(
        self,
        http_client: httpx.Client,
        config: Optional[EarthEngineConfig] = None,
        clock: Callable[[], float] = time.time
    ):
        self._http = http_client
        self._config = config or get_config().earth_engine
        self._clock = clock
        self.logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "TokenProvider")

    def build_claims(self, credentials: ServiceAccountCredentials) -> Dict[str, Any]:
        """JWT claim set for the assertion."""
        iat = int(self._clock())
        return {
            "iss": credentials.client_email,
            "sub": credentials.client_email,
            "aud": self._config.token_url,
            "iat": iat,
            "exp": iat + self._config.token_lifetime_seconds,
            "scope": self._config.oauth_scope,
        }

    def sign_assertion(self, credentials: ServiceAccountCredentials) -> str:
        """
        Sign the claim set with RS256.

        Raises:
            ConfigurationError: Private key cannot be parsed as PEM (PKCS#1 or PKCS#8)
        """
        try:
            signer = crypt.RSASigner.from_string(credentials.private_key)
        except (ValueError, TypeError, IndexError) as e:
            raise ConfigurationError(f"Unable to parse service account private key: {type(e).__name__}") from e

        token = google_jwt.encode(signer, self.build_claims(credentials))
        return token.decode("utf-8") if isinstance(token, bytes) else token

    @log_exceptions(ComponentType.ADAPTER, "TokenProvider")
    def get_access_token(self, credentials: ServiceAccountCredentials) -> str:
        """
        Obtain a bearer token for the service account.

        Returns:
            access_token string

        Raises:
            ConfigurationError: Private key unusable
            AuthenticationError: Token endpoint unreachable, answered non-2xx,
                or answered without access_token
        """
        assertion = self.sign_assertion(credentials)

        self.logger.debug(f"Requesting access token for {credentials.client_email}")
        try:
            response = self._http.post(
                self._config.token_url,
                data={
                    "grant_type": EarthEngineDefaults.GRANT_TYPE,
                    "assertion": assertion,
                },
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(
                f"Token endpoint unreachable: {type(e).__name__}: {e}",
                details=str(e),
            ) from e

        if not response.is_success:
            raise AuthenticationError(
                f"Failed to obtain access token (HTTP {response.status_code}): {response.text}",
                status_code=response.status_code,
                details=response.text,
            )

        try:
            token = response.json().get("access_token")
        except (ValueError, AttributeError):
            token = None

        if not token:
            raise AuthenticationError(
                "Token endpoint response did not include an access_token",
                status_code=response.status_code,
                details=response.text,
            )

        self.logger.info(f"Access token obtained for {credentials.client_email}")
        return token
