# ============================================================================
# CLAUDE CONTEXT - EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by triggers, services and infrastructure
# PURPOSE: Exception hierarchy separating client errors, misconfiguration,
#          authentication failures and upstream Earth Engine failures
# EXPORTS: BusinessLogicError, ValidationError, AuthenticationError,
#          UpstreamError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Client errors (bad request body, unknown dataset) - HTTP 400
2. Misconfiguration (missing or malformed service-account secret) - HTTP 500
3. Authentication failures (token exchange rejected) - HTTP 500
4. Upstream failures (Earth Engine rejected a call) - recorded per dataset,
   or HTTP 502 for single-call endpoints

"""

from typing import Optional


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    These are normal failures that occur during request handling
    and should be mapped to a response rather than crash the worker.
    """
    pass


class ValidationError(BusinessLogicError, ValueError):
    """
    Request validation failed.

    Subclasses ValueError so the HTTP base class maps it to 400
    alongside any plain ValueError raised by request parsing.

    Examples:
        - Latitude outside [-90, 90]
        - Scale not a positive number
        - Unknown dataset name
    """
    pass


class AuthenticationError(BusinessLogicError):
    """
    OAuth2 token exchange was rejected.

    Carries the token endpoint's status code and response text
    for diagnostics.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class UpstreamError(BusinessLogicError):
    """
    Earth Engine returned a non-2xx response.

    Examples:
        - Asset not found or not readable by the service account
        - Expression evaluation failed
        - Quota exceeded
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ConfigurationError(Exception):
    """
    System configuration error.

    Fatal for the current request; indicates misconfiguration
    rather than bad input.

    Examples:
        - SA_PRIVATE_KEY not set
        - SA_PRIVATE_KEY is a raw key but SA_CLIENT_EMAIL/EE_PROJECT missing
        - Private key cannot be parsed
    """
    pass
