"""
Project: Digital Menu marketplace

Description:
Request layer: JSON over requests with the stored bearer token. Connection
failures and gateway errors raise ApiUnavailable so callers can fall back
to local storage; any other non-2xx response raises ApiError.
"""

import logging

import requests

from client.storage import TOKEN

logger = logging.getLogger(__name__)

UNAVAILABLE_STATUSES = (502, 503, 504)


class ServiceError(Exception):
    pass


class ApiError(ServiceError):
    def __init__(self, message, status_code=None, errors=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}


class ApiUnavailable(ServiceError):
    pass


class ApiClient:
    def __init__(self, base_url, storage, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self):
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self.storage.get_item(TOKEN)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method, path, json=None):
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, json=json, headers=self._headers(), timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("API unreachable for %s %s: %s", method, path, exc)
            raise ApiUnavailable(str(exc)) from exc

        if resp.status_code in UNAVAILABLE_STATUSES:
            logger.warning("API unavailable for %s %s: HTTP %s", method, path, resp.status_code)
            raise ApiUnavailable(f"HTTP {resp.status_code}")
        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ApiError(message or "API request failed", resp.status_code, errors)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def get(self, path):
        return self.request("GET", path)

    def post(self, path, json=None):
        return self.request("POST", path, json=json)

    def put(self, path, json=None):
        return self.request("PUT", path, json=json)

    def delete(self, path):
        return self.request("DELETE", path)
