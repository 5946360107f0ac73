# core/api.py
# -------------------------------------------------------------------
# REST client for the school-management backend.
# One client per user segment; the segment decides which bearer token
# is sent and which session keys are cleared on a 401.
# -------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from core.settings import ApiEnvironment, Settings, get_settings
from core.session_store import (
    API_ENVIRONMENT_KEY,
    AUTH_REDIRECT_KEY,
    Segment,
    Store,
    clear,
    get_segment,
    get_token,
    _resolve,
)

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout"
NETWORK_MESSAGE = "Network error. Please try again."
AUTH_FAILED_MESSAGE = "Authentication failed. Please login again."


class ApiError(Exception):
    """A failed backend call, carrying whatever the server said about it."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[Dict[str, Any]] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        self.payload = payload

    def field_messages(self) -> Dict[str, str]:
        """Flatten DRF-style `{field: [msg, ...]}` errors into `{field: "msg; msg"}`."""
        out: Dict[str, str] = {}
        for field, value in self.errors.items():
            if isinstance(value, (list, tuple)):
                out[field] = "; ".join(str(v) for v in value)
            else:
                out[field] = str(value)
        return out


class AuthExpired(ApiError):
    """401 from the backend. The segment's session keys are already cleared."""


def error_message(payload: Any, status_code: int) -> str:
    if isinstance(payload, dict):
        non_field = payload.get("non_field_errors")
        if isinstance(non_field, list) and non_field:
            return str(non_field[0])
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if value:
                return str(value)
        # DRF field errors: surface the first one
        for field, value in payload.items():
            if isinstance(value, list) and value:
                return f"{field}: {value[0]}"
    return f"HTTP {status_code}"


def success_message(payload: Any, default: str) -> str:
    """The server's `message` from a JSON reply, else `default` (empty or plain-text bodies)."""
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return default


def field_errors(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    nested = payload.get("errors")
    if isinstance(nested, dict):
        return nested
    return {k: v for k, v in payload.items() if isinstance(v, list)}


def active_environment(
    settings: Optional[Settings] = None, store: Optional[Store] = None
) -> ApiEnvironment:
    """Environment picked in the session (environment switcher), else the configured one."""
    settings = settings or get_settings()
    chosen = None
    try:
        chosen = _resolve(store).get(API_ENVIRONMENT_KEY)
    except Exception:
        # Outside a Streamlit run there is no session to read from.
        chosen = None
    return settings.api_environment(chosen)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None and v != ""}


class ApiClient:
    def __init__(
        self,
        segment: str | Segment,
        store: Optional[Store] = None,
        settings: Optional[Settings] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.segment = get_segment(segment)
        self._store = store
        if base_url is None or timeout is None:
            env = active_environment(settings, store)
            base_url = env.base_url if base_url is None else base_url
            timeout = env.timeout_seconds if timeout is None else timeout
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def store(self) -> Store:
        return _resolve(self._store)

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def headers(self, authenticated: bool = True) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated:
            token = get_token(self.segment, self.store)
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _on_unauthorized(self) -> None:
        clear(self.segment, self.store)
        self.store[AUTH_REDIRECT_KEY] = self.segment.name
        logger.warning("%s session rejected by backend (401); redirecting to login", self.segment.name)

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """Send one request and return the decoded body. Raises ApiError on failure."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(
                    method,
                    self.url(endpoint),
                    params=_clean_params(params),
                    json=json,
                    files=files,
                    headers=self.headers(authenticated),
                )
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out: %s", method, endpoint, e)
            raise ApiError(TIMEOUT_MESSAGE) from e
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, endpoint, e)
            raise ApiError(NETWORK_MESSAGE) from e

        payload = _decode(response)
        if response.is_success:
            return payload

        status = response.status_code
        logger.info("%s %s -> %s", method, endpoint, status)
        if status == 401 and authenticated:
            self._on_unauthorized()
            raise AuthExpired(AUTH_FAILED_MESSAGE, status, field_errors(payload), payload)
        raise ApiError(error_message(payload, status), status, field_errors(payload), payload)

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> Any:
        return self.request("GET", endpoint, params=params, **kwargs)

    def post(self, endpoint: str, data: Any = None, **kwargs) -> Any:
        return self.request("POST", endpoint, json=data, **kwargs)

    def put(self, endpoint: str, data: Any = None, **kwargs) -> Any:
        return self.request("PUT", endpoint, json=data, **kwargs)

    def patch(self, endpoint: str, data: Any = None, **kwargs) -> Any:
        return self.request("PATCH", endpoint, json=data, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.request("DELETE", endpoint, **kwargs)

    def upload(self, endpoint: str, field: str, filename: str, content: bytes,
               content_type: str = "text/csv") -> Any:
        return self.request("POST", endpoint, files={field: (filename, content, content_type)})


def client_for(segment: str | Segment, store: Optional[Store] = None) -> ApiClient:
    return ApiClient(segment, store=store)


def check_health(
    base_url: str,
    timeout: float = 5.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> Dict[str, Any]:
    """HEAD the API root. Any HTTP answer counts as reachable."""
    url = base_url.rstrip("/") + "/"
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.head(url)
    except httpx.HTTPError as e:
        logger.warning("Health check for %s failed: %s", url, e)
        return {"reachable": False, "status_code": None, "latency_ms": None, "error": str(e) or type(e).__name__}
    latency_ms = round(response.elapsed.total_seconds() * 1000, 1)
    return {"reachable": True, "status_code": response.status_code, "latency_ms": latency_ms, "error": None}
