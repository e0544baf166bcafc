"""
Root conftest.py: sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Google credentials or network access. Google's token endpoint and
the Earth Engine REST API are replaced by FakeGoogleApis, served through
httpx.MockTransport.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cryptography.hazmat.primitives import serialization  # noqa: E402
from cryptography.hazmat.primitives.asymmetric import rsa  # noqa: E402

TEST_PROJECT = "test-project"
TEST_CLIENT_EMAIL = "relay@test-project.iam.gserviceaccount.com"
TEST_ACCESS_TOKEN = "ya29.test-access-token"
TOKEN_URL = "https://oauth2.googleapis.com/token"
EE_BASE = f"https://earthengine.googleapis.com/v1/projects/{TEST_PROJECT}"

S2_SCENE_ID = "20230715T140051_20230715T140051_T20MQS"
S1_SCENE_ID = "S1A_IW_GRDH_1SDV_20230710T093012_20230710T093037_049347_05EF2B_5C1A"

ENV_VARS = [
    "SA_PRIVATE_KEY", "SA_CLIENT_EMAIL", "EE_PROJECT",
    "EE_TOKEN_URL", "EE_API_BASE_URL", "EE_OAUTH_SCOPE", "EE_HTTP_TIMEOUT_SECONDS",
    "APP_NAME", "ENVIRONMENT", "DEBUG_MODE",
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear relay env vars and the config singleton around every test."""
    from config import reset_config

    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()


# ============================================================================
# SERVICE ACCOUNT
# ============================================================================

@pytest.fixture(scope="session")
def rsa_keys() -> Tuple[str, str]:
    """(private PKCS#8 PEM, public PKCS#1 PEM) generated once per session."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.PKCS1,
    ).decode("utf-8")
    return private_pem, public_pem


@pytest.fixture
def private_key_pem(rsa_keys) -> str:
    return rsa_keys[0]


@pytest.fixture
def public_key_pem(rsa_keys) -> str:
    return rsa_keys[1]


@pytest.fixture
def service_account_info(private_key_pem) -> Dict[str, str]:
    """Shape of a service-account key file downloaded from Google Cloud."""
    return {
        "type": "service_account",
        "project_id": TEST_PROJECT,
        "private_key_id": "0123456789abcdef",
        "private_key": private_key_pem,
        "client_email": TEST_CLIENT_EMAIL,
        "client_id": "100000000000000000000",
        "token_uri": TOKEN_URL,
    }


@pytest.fixture
def sa_env(isolated_config, service_account_info):
    """SA_PRIVATE_KEY set to the full service-account JSON."""
    isolated_config.setenv("SA_PRIVATE_KEY", json.dumps(service_account_info))
    return isolated_config


# ============================================================================
# FAKE GOOGLE APIS
# ============================================================================

def find_asset_id(node: Any) -> Optional[str]:
    """First asset id loaded anywhere in an expression tree."""
    if isinstance(node, dict):
        invocation = node.get("functionInvocationValue")
        if isinstance(invocation, dict):
            if invocation.get("functionName") in ("Image.load", "ImageCollection.load"):
                return invocation["arguments"]["id"]["constantValue"]
        for value in node.values():
            found = find_asset_id(value)
            if found:
                return found
    elif isinstance(node, list):
        for value in node:
            found = find_asset_id(value)
            if found:
                return found
    return None


def default_image_payload(asset_id: str) -> Dict[str, Any]:
    """value:compute answer resembling Image metadata for the asset."""
    if asset_id == "COPERNICUS/S2_SR":
        return {"result": {
            "type": "Image",
            "id": f"COPERNICUS/S2_SR/{S2_SCENE_ID}",
            "bands": [{"id": "B4"}, {"id": "B8"}],
            "properties": {"system:index": S2_SCENE_ID, "CLOUDY_PIXEL_PERCENTAGE": 3.2},
        }}
    if asset_id == "COPERNICUS/S1_GRD":
        return {"result": {
            "type": "Image",
            "bands": [{"id": "HH"}, {"id": "HV"}],
            "properties": {"system:index": S1_SCENE_ID},
        }}
    return {"result": {"type": "Image", "id": asset_id, "bands": [], "properties": {}}}


class FakeGoogleApis:
    """
    httpx handler standing in for oauth2.googleapis.com and earthengine.googleapis.com.

    Attributes to tweak per test:
        token_response: (status, body) for the token endpoint
        token_transport_error: token endpoint raises httpx.ConnectError
        failing_assets: asset id -> (status, text) for value:compute
        transport_errors: asset ids whose compute call raises httpx.ConnectError
        compute_response: (status, body) overriding every value:compute answer
        thumbnail_response: (status, body) for thumbnails
    """

    token_url = TOKEN_URL
    ee_base = EE_BASE
    project = TEST_PROJECT
    client_email = TEST_CLIENT_EMAIL
    access_token = TEST_ACCESS_TOKEN
    s2_scene_id = S2_SCENE_ID
    s1_scene_id = S1_SCENE_ID

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.token_response: Tuple[int, Any] = (
            200, {"access_token": TEST_ACCESS_TOKEN, "expires_in": 3599, "token_type": "Bearer"}
        )
        self.token_transport_error = False
        self.failing_assets: Dict[str, Tuple[int, str]] = {}
        self.transport_errors: List[str] = []
        self.compute_response: Optional[Tuple[int, Any]] = None
        self.thumbnail_response: Tuple[int, Any] = (
            200, {"name": f"projects/{TEST_PROJECT}/thumbnails/abc123"}
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=str(body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == TOKEN_URL:
            if self.token_transport_error:
                raise httpx.ConnectError("connection refused", request=request)
            return self._respond(*self.token_response)

        if url == f"{EE_BASE}/value:compute":
            if self.compute_response is not None:
                return self._respond(*self.compute_response)
            body = json.loads(request.content)
            asset_id = find_asset_id(body)
            if asset_id in self.transport_errors:
                raise httpx.ConnectError("connection refused", request=request)
            if asset_id in self.failing_assets:
                return self._respond(*self.failing_assets[asset_id])
            return self._respond(200, default_image_payload(asset_id))

        if url == f"{EE_BASE}/thumbnails":
            return self._respond(*self.thumbnail_response)

        return httpx.Response(404, text=f"unexpected URL {url}")

    # Inspection helpers

    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url) == TOKEN_URL]

    def ee_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if urlparse(str(r.url)).netloc == "earthengine.googleapis.com"]

    @staticmethod
    def form(request: httpx.Request) -> Dict[str, str]:
        return {k: v[0] for k, v in parse_qs(request.content.decode("utf-8")).items()}


@pytest.fixture
def google() -> FakeGoogleApis:
    return FakeGoogleApis()


@pytest.fixture
def http_client(google):
    with httpx.Client(transport=google.transport) as client:
        yield client


# ============================================================================
# AZURE FUNCTIONS REQUESTS
# ============================================================================

@pytest.fixture
def make_request():
    """Factory fixture: build an azure.functions.HttpRequest."""
    import azure.functions as func

    def _make(method: str = "POST", path: str = "/sensor", body: Any = None, raw: Optional[bytes] = None):
        if raw is None:
            raw = json.dumps(body).encode("utf-8") if body is not None else b""
        return func.HttpRequest(
            method=method,
            url=f"http://localhost:7071{path}",
            headers={"Content-Type": "application/json"},
            params={},
            route_params={},
            body=raw,
        )
    return _make


def response_json(response) -> Any:
    return json.loads(response.get_body().decode("utf-8"))


@pytest.fixture
def read_json():
    return response_json
