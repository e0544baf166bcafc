# ============================================================================
# SERVICE-ACCOUNT CREDENTIAL EXTRACTION
# ============================================================================
# STATUS: Infrastructure - credential parsing, no network access
# PURPOSE: Derive {client_email, private_key, project_id} from the secret
# ============================================================================
"""
Service-account credential extraction.

SA_PRIVATE_KEY may hold either the full service-account JSON downloaded from
Google Cloud, or just the PEM private key. In the second case SA_CLIENT_EMAIL
and EE_PROJECT must supply the remaining fields.
"""

import json
import os
from dataclasses import dataclass
from typing import Optional

from config.defaults import SecretEnvVars
from exceptions import ConfigurationError


@dataclass(frozen=True)
class ServiceAccountCredentials:
    """Credentials for one request. Never cached across invocations."""
    client_email: str
    private_key: str
    project_id: str

    def __repr__(self) -> str:
        return (
            f"ServiceAccountCredentials(client_email={self.client_email!r}, "
            f"project_id={self.project_id!r}, private_key=***MASKED***)"
        )


def extract_credentials(
    secret: Optional[str],
    client_email: Optional[str] = None,
    project_id: Optional[str] = None
) -> ServiceAccountCredentials:
    """
    Parse the service-account secret.

    Args:
        secret: SA_PRIVATE_KEY value, JSON document or raw PEM key
        client_email: SA_CLIENT_EMAIL, used only when secret is not JSON
        project_id: EE_PROJECT, used only when secret is not JSON

    Returns:
        ServiceAccountCredentials with all three fields populated

    Raises:
        ConfigurationError: Secret missing, JSON missing a field, or raw key
            without both supplementary fields
    """
    if not secret or not secret.strip():
        raise ConfigurationError(f"{SecretEnvVars.PRIVATE_KEY} is not configured")

    try:
        service_account = json.loads(secret)
    except ValueError:
        service_account = None

    if isinstance(service_account, dict):
        missing = [
            key for key in ("client_email", "private_key", "project_id")
            if not isinstance(service_account.get(key), str) or not service_account.get(key)
        ]
        if missing:
            raise ConfigurationError(
                f"Service account JSON is missing required fields: {', '.join(missing)}"
            )
        return ServiceAccountCredentials(
            client_email=service_account["client_email"],
            private_key=service_account["private_key"],
            project_id=service_account["project_id"],
        )

    if not client_email or not project_id:
        raise ConfigurationError(
            f"{SecretEnvVars.CLIENT_EMAIL} and {SecretEnvVars.PROJECT} are required "
            f"when {SecretEnvVars.PRIVATE_KEY} is not a JSON"
        )

    # Secrets pasted through portals often carry literal "\n" sequences
    private_key = secret.strip().replace("\\n", "\n")
    return ServiceAccountCredentials(
        client_email=client_email,
        private_key=private_key,
        project_id=project_id,
    )


def load_credentials() -> ServiceAccountCredentials:
    """Read the secret from the environment and parse it. Called once per request."""
    return extract_credentials(
        os.environ.get(SecretEnvVars.PRIVATE_KEY),
        client_email=os.environ.get(SecretEnvVars.CLIENT_EMAIL),
        project_id=os.environ.get(SecretEnvVars.PROJECT),
    )
