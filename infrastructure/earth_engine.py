# ============================================================================
# CLAUDE CONTEXT - EARTH ENGINE REST CLIENT
# ============================================================================
# STATUS: Infrastructure - HTTP client for the Earth Engine v1 REST API
# PURPOSE: Authenticated POSTs to value:compute and thumbnails
# EXPORTS: EarthEngineClient
# DEPENDENCIES: httpx, config, exceptions
# ============================================================================
"""
Earth Engine REST Client.

Thin wrapper over the two project-scoped endpoints the relay uses:

    POST /v1/projects/{project}/value:compute  - evaluate an expression
    POST /v1/projects/{project}/thumbnails     - create a thumbnail, returns its name

Authentication is a bearer token obtained by TokenProvider for the same
request; the client never refreshes or caches it. Non-2xx answers raise
UpstreamError carrying the status code and response text. Transport errors
(httpx.HTTPError) propagate unchanged.

Usage:
    client = EarthEngineClient(http, project_id="my-project", access_token=token)
    payload = client.compute({"expression": {...}})
"""

from typing import Any, Dict, Optional

import httpx

from config import get_config
from config.earth_engine_config import EarthEngineConfig
from exceptions import UpstreamError
from util_logger import LoggerFactory, ComponentType


class EarthEngineClient:
    """
    Client for Earth Engine REST calls made on behalf of one request.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        project_id: str,
        access_token: str,
        config: Optional[EarthEngineConfig] = None
    ):
        self._http = http_client
        self.project_id = project_id
        self._access_token = access_token
        self._config = config or get_config().earth_engine
        self.logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "EarthEngineClient")

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._access_token}",
        }

    def _post(self, method: str, body: Dict[str, Any]) -> Any:
        url = self._config.project_url(self.project_id, method)
        self.logger.debug(f"POST {url}")

        response = self._http.post(url, json=body, headers=self._headers())

        if not response.is_success:
            self.logger.warning(f"Earth Engine {method} returned HTTP {response.status_code}")
            raise UpstreamError(
                f"Earth Engine {method} failed (HTTP {response.status_code}): {response.text}",
                status_code=response.status_code,
                details=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Earth Engine {method} returned a non-JSON response",
                status_code=response.status_code,
                details=response.text,
            ) from e

    def compute(self, body: Dict[str, Any]) -> Any:
        """
        POST a request body to value:compute.

        Args:
            body: Complete request body, e.g. {"expression": {...}}

        Returns:
            Decoded JSON response

        Raises:
            UpstreamError: Non-2xx response
        """
        return self._post("value:compute", body)

    def create_thumbnail(self, body: Dict[str, Any]) -> str:
        """
        Create a thumbnail and return its pixel URL.

        Args:
            body: Thumbnail request {expression, fileFormat, bandIds, visualizationOptions}

        Returns:
            https://earthengine.googleapis.com/v1/{name}:getPixels

        Raises:
            UpstreamError: Non-2xx response, or a response without a name
        """
        result = self._post("thumbnails", body)
        name = result.get("name") if isinstance(result, dict) else None
        if not name:
            raise UpstreamError(
                "Earth Engine thumbnails response did not include a name",
                details=str(result),
            )
        return self._config.pixels_url(name)
