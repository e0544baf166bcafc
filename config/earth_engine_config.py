"""
Earth Engine Configuration.

Provides configuration for:
    - OAuth2 token endpoint and scope
    - Earth Engine REST API base URL and version
    - Outbound HTTP timeout (disabled by default)

The service-account secret itself is NOT part of this model: it is read
from the environment on every request by infrastructure.auth.credentials.

Exports:
    EarthEngineConfig: Pydantic Earth Engine configuration model
"""

import os
from typing import Optional
from pydantic import BaseModel, Field

from .defaults import EarthEngineDefaults


class EarthEngineConfig(BaseModel):
    """
    Google OAuth2 and Earth Engine REST settings.

    Endpoint overrides exist for pointing the relay at a local test double;
    production deployments leave them unset.
    """

    token_url: str = Field(
        default=EarthEngineDefaults.TOKEN_URL,
        description="OAuth2 token endpoint used for the JWT-bearer grant"
    )

    api_base_url: str = Field(
        default=EarthEngineDefaults.API_BASE_URL,
        description="Earth Engine REST API base URL (no trailing slash)"
    )

    api_version: str = Field(
        default=EarthEngineDefaults.API_VERSION,
        description="Earth Engine REST API version path segment"
    )

    oauth_scope: str = Field(
        default=EarthEngineDefaults.OAUTH_SCOPE,
        description="OAuth2 scope requested in the JWT assertion"
    )

    token_lifetime_seconds: int = Field(
        default=EarthEngineDefaults.TOKEN_LIFETIME_SECONDS,
        ge=60,
        le=3600,
        description="Lifetime of the signed JWT assertion (exp - iat)"
    )

    http_timeout_seconds: Optional[float] = Field(
        default=EarthEngineDefaults.HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="Outbound HTTP timeout; None leaves it to the Functions host"
    )

    def project_url(self, project_id: str, method: str) -> str:
        """
        Build a project-scoped REST URL.

        Args:
            project_id: Google Cloud project ID
            method: Trailing path, e.g. "value:compute" or "thumbnails"

        Returns:
            https://earthengine.googleapis.com/v1/projects/{project_id}/{method}
        """
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}/projects/{project_id}/{method}"

    def pixels_url(self, thumbnail_name: str) -> str:
        """Build the getPixels URL for a thumbnail resource name."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}/{thumbnail_name}:getPixels"

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        timeout = os.environ.get("EE_HTTP_TIMEOUT_SECONDS")
        return cls(
            token_url=os.environ.get("EE_TOKEN_URL", EarthEngineDefaults.TOKEN_URL),
            api_base_url=os.environ.get("EE_API_BASE_URL", EarthEngineDefaults.API_BASE_URL),
            oauth_scope=os.environ.get("EE_OAUTH_SCOPE", EarthEngineDefaults.OAUTH_SCOPE),
            http_timeout_seconds=float(timeout) if timeout else EarthEngineDefaults.HTTP_TIMEOUT_SECONDS,
        )
