"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - EarthEngineDefaults: Google OAuth2 and Earth Engine REST endpoints
    - ImageDefaults: Thumbnail size and year bounds for /image
    - AppDefaults: Application identity

Usage:
    from config.defaults import EarthEngineDefaults

    # In Pydantic Field definitions:
    token_url: str = Field(default=EarthEngineDefaults.TOKEN_URL, ...)
"""


# =============================================================================
# EARTH ENGINE DEFAULTS
# =============================================================================

class EarthEngineDefaults:
    """
    Google endpoints and OAuth2 constants.

    These must match what Google expects byte-for-byte, override only
    to point at a test double.
    """

    TOKEN_URL = "https://oauth2.googleapis.com/token"
    API_BASE_URL = "https://earthengine.googleapis.com"
    API_VERSION = "v1"
    OAUTH_SCOPE = "https://www.googleapis.com/auth/earthengine.readonly"
    GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"

    # JWT assertion lifetime, Google caps this at one hour
    TOKEN_LIFETIME_SECONDS = 3600

    # None = no client-side timeout, the Functions host timeout applies
    HTTP_TIMEOUT_SECONDS = None


# =============================================================================
# SECRET ENVIRONMENT VARIABLE NAMES
# =============================================================================

class SecretEnvVars:
    """Environment variables carrying the service-account secret."""

    PRIVATE_KEY = "SA_PRIVATE_KEY"     # Full service-account JSON or a raw PEM key
    CLIENT_EMAIL = "SA_CLIENT_EMAIL"   # Required when PRIVATE_KEY is a raw key
    PROJECT = "EE_PROJECT"             # Required when PRIVATE_KEY is a raw key


# =============================================================================
# IMAGE (THUMBNAIL) DEFAULTS
# =============================================================================

class ImageDefaults:
    """Bounds for the /image endpoint."""

    DEFAULT_WIDTH = 512
    DEFAULT_HEIGHT = 512
    MAX_DIMENSION = 2048
    MIN_YEAR = 1970
    MAX_YEAR = 2100
    FILE_FORMAT = "PNG"

    # Metres per degree of latitude, used to size the thumbnail region
    METERS_PER_DEGREE = 111320.0


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application identity."""

    APP_NAME = "ee-sensor-relay"
    ENVIRONMENT = "dev"
