"""
Azure Functions entry point for the Earth Engine sensor relay.

Accepts a point (lat/lon) and relays data-retrieval requests to the Google
Earth Engine REST API on behalf of a service account.

Architecture:
    HTTP POST -> RelayRouter -> Trigger (validate body)
                                   |
                     credentials -> OAuth2 token -> EarthEngineClient
                                   |
                     Service (sensor query | thumbnail | compute proxy)
                                   |
                              JSON response

Every request re-reads credentials, re-authenticates and re-queries. No
cache, no retry, no shared mutable state.

Exports:
    app: Azure Function App instance

Dependencies:
    azure.functions: Azure Functions SDK
    triggers/*: HTTP trigger implementations

Endpoints (host.json sets routePrefix to ""):
    POST /             - Multi-dataset sensor query (alias of /sensor)
    POST /sensor       - Multi-dataset sensor query
    POST /image        - Dataset thumbnail URL
    POST /sensor-data  - ANALYZE_SENSOR_DATA compute proxy

    Any other method: 405. Any other path: 404.

Environment Variables:
    SA_PRIVATE_KEY: Service-account JSON, or the raw PEM private key
    SA_CLIENT_EMAIL: Service-account email (raw PEM only)
    EE_PROJECT: Earth Engine project id (raw PEM only)
    EE_HTTP_TIMEOUT_SECONDS: Optional outbound timeout (default: none)
    DEBUG_LOGGING: Verbose logging (optional)
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress HTTP client logging (request lines would include bearer-token calls)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)

# Application modules (our code) - Config, logging and HTTP router
from config import debug_config
from util_logger import LoggerFactory, ComponentType
from triggers.router import relay_router

LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app").debug(f"Startup config: {debug_config()}")


# ========================================================================
# FUNCTION APP
# ========================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


@app.route(
    route="{*route}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
)
def relay(req: func.HttpRequest) -> func.HttpResponse:
    """Catch-all: method and path checks happen in the router."""
    return relay_router.dispatch(req)
