"""
HTTP Trigger Base Class.

Abstract base class for the relay's Azure Functions HTTP triggers providing
consistent request/response handling.

Specialized Trigger Types:
    BaseHttpTrigger: Generic HTTP endpoint
    EarthEngineTrigger: Endpoints that call Earth Engine on behalf of the request

Status mapping (handle_request):
    ValueError (incl. ValidationError)  -> 400
    UpstreamError                       -> 502 (upstream text in "details")
    anything else                       -> 500 (ConfigurationError, AuthenticationError, ...)

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    EarthEngineTrigger: Base class for Earth Engine backed triggers
    create_error_response: Error envelope shared with the router
    generate_request_id: Short request id for tracing
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Any, Iterator, Optional
import sys
import uuid
import json
import traceback
from datetime import datetime, timezone

import azure.functions as func
import httpx

from config import get_config
from exceptions import UpstreamError, ValidationError
from infrastructure.auth.credentials import load_credentials
from infrastructure.auth.token_provider import TokenProvider
from infrastructure.earth_engine import EarthEngineClient
from util_logger import LoggerFactory
from util_logger import ComponentType

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


# ============================================================================
# RESPONSE FACTORIES
# ============================================================================

def generate_request_id() -> str:
    """Generate unique request ID for tracing."""
    return str(uuid.uuid4())[:8]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_error_response(
    error: str,
    message: str,
    status_code: int,
    request_id: str,
    details: Optional[Any] = None,
    debug: Optional[Dict[str, Any]] = None
) -> func.HttpResponse:
    """Create standardized error response."""
    response_data = {
        "error": error,
        "message": message,
        "request_id": request_id,
        "timestamp": _timestamp()
    }
    if details is not None:
        response_data["details"] = details
    if debug is not None:
        response_data["debug"] = debug

    return func.HttpResponse(
        json.dumps(response_data, default=str),
        status_code=status_code,
        mimetype="application/json",
        headers={"X-Request-ID": request_id}
    )


def create_success_response(data: Dict[str, Any], request_id: str) -> func.HttpResponse:
    """
    Create standardized success response.

    The payload keeps its own timestamp if it has one (the /sensor envelope does).
    """
    response_data = {"timestamp": _timestamp(), **data, "request_id": request_id}

    return func.HttpResponse(
        json.dumps(response_data, default=str),
        status_code=200,
        mimetype="application/json",
        headers={"X-Request-ID": request_id}
    )


# ============================================================================
# BASE TRIGGER
# ============================================================================

class BaseHttpTrigger(ABC):
    """
    Abstract base class for Azure Functions HTTP triggers.

    Provides consistent infrastructure for HTTP request/response handling,
    body parsing, error handling, and logging patterns.
    """

    # "error" field of 502 responses
    upstream_error_label = "Upstream request failed"

    def __init__(self, trigger_name: str):
        """
        Initialize HTTP trigger with name for logging context.

        Args:
            trigger_name: Name of the trigger for logging (e.g., "sensor", "image")
        """
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    # ========================================================================
    # ABSTRACT METHODS - Must be implemented by concrete triggers
    # ========================================================================

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> Any:
        """
        Process the HTTP request and return response data.

        This is where business logic goes. Should raise appropriate exceptions
        for error conditions that will be handled by the base class.

        Args:
            req: Azure Functions HTTP request object

        Returns:
            JSON-serializable data handed to build_response

        Raises:
            ValueError: For client errors (400)
            UpstreamError: For Earth Engine failures (502)
            Exception: For internal server errors (500)
        """
        pass

    def build_response(self, data: Any, request_id: str) -> func.HttpResponse:
        """
        Wrap process_request output in the success envelope.

        Override to send the payload some other way (the compute proxy
        returns upstream JSON untouched).
        """
        return create_success_response(data, request_id)

    # ========================================================================
    # CONCRETE INFRASTRUCTURE METHODS
    # ========================================================================

    def handle_request(self, req: func.HttpRequest, request_id: Optional[str] = None) -> func.HttpResponse:
        """
        Main entry point for HTTP request handling.

        Args:
            req: Azure Functions HTTP request object
            request_id: Id assigned by the router, generated if absent

        Returns:
            Azure Functions HTTP response with JSON content
        """
        request_id = request_id or generate_request_id()
        log = LoggerFactory.create_with_context(
            ComponentType.TRIGGER,
            f"HttpTrigger.{self.trigger_name}",
            request_id=request_id,
            endpoint=self.trigger_name
        )

        log.info(
            f"🌐 [{self.trigger_name}] Request {request_id} started: "
            f"{req.method} {req.url}"
        )

        try:
            response_data = self.process_request(req)
            response = self.build_response(response_data, request_id)

            log.info(
                f"✅ [{self.trigger_name}] Request {request_id} completed successfully"
            )
            return response

        except ValueError as e:
            log.warning(f"❌ [{self.trigger_name}] Client error: {e}")
            return create_error_response(
                error="Bad request",
                message=str(e) or "Invalid request",
                status_code=400,
                request_id=request_id
            )

        except UpstreamError as e:
            log.warning(f"🛰️ [{self.trigger_name}] Upstream failure: {e}")
            return create_error_response(
                error=self.upstream_error_label,
                message=str(e) or UNKNOWN_ERROR_MESSAGE,
                status_code=502,
                request_id=request_id,
                details=e.details
            )

        except Exception as e:
            # ConfigurationError, AuthenticationError and anything unexpected
            log.error(f"💥 [{self.trigger_name}] Internal error: {type(e).__name__}: {e}")
            log.debug(f"📍 Full traceback: {traceback.format_exc()}")

            return create_error_response(
                error="Internal server error",
                message=str(e) or UNKNOWN_ERROR_MESSAGE,
                status_code=500,
                request_id=request_id,
                debug=self._debug_info(e)
            )

    # ========================================================================
    # UTILITY METHODS FOR SUBCLASSES
    # ========================================================================

    def extract_json_body(self, req: func.HttpRequest) -> Any:
        """
        Parse the JSON request body.

        Returns:
            Decoded JSON (shape is checked by the request models)

        Raises:
            ValidationError: Body missing or not valid JSON
        """
        try:
            return req.get_json()
        except ValueError as e:
            raise ValidationError(f"Invalid JSON in request body: {e}") from e

    # ========================================================================
    # PRIVATE INFRASTRUCTURE METHODS
    # ========================================================================

    def _debug_info(self, error: Exception) -> Dict[str, Any]:
        """Debug block for 500 responses."""
        debug = {
            "trigger_name": self.trigger_name,
            "python_version": sys.version.split()[0]
        }
        if get_config().debug_mode:
            debug["error_type"] = type(error).__name__
        return debug


# ============================================================================
# SPECIALIZED BASE CLASSES FOR COMMON PATTERNS
# ============================================================================

class EarthEngineTrigger(BaseHttpTrigger):
    """
    Base class for triggers that call Earth Engine.

    Each request gets its own httpx.Client, credentials and access token;
    nothing is shared between requests.
    """

    def __init__(self, trigger_name: str, http_transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            trigger_name: Name of the trigger for logging
            http_transport: Transport for the outbound client (tests pass httpx.MockTransport)
        """
        super().__init__(trigger_name)
        self.http_transport = http_transport

    def create_http_client(self) -> httpx.Client:
        timeout = get_config().earth_engine.http_timeout_seconds
        return httpx.Client(transport=self.http_transport, timeout=timeout)

    @contextmanager
    def earth_engine_session(self) -> Iterator[EarthEngineClient]:
        """
        Authenticate and yield an Earth Engine client for this request.

        Raises:
            ConfigurationError: Service-account secret missing or malformed
            AuthenticationError: Token exchange rejected
        """
        config = get_config().earth_engine
        with self.create_http_client() as http_client:
            credentials = load_credentials()
            self.logger.debug(f"Authenticating {credentials.client_email} for project {credentials.project_id}")
            token = TokenProvider(http_client, config=config).get_access_token(credentials)
            yield EarthEngineClient(
                http_client,
                project_id=credentials.project_id,
                access_token=token,
                config=config,
            )
