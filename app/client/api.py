"""
client/api.py

Typed client for the LABTIM HTTP API.

Every call returns an ApiResponse instead of raising on HTTP errors, so
callers (dashboard scripts, the test-suite, other services) handle
success and failure the same way:

    res = client.publications.list(year=2023, search_term="imaging")
    if res.success:
        for pub in res.data: ...
    else:
        print(res.message)

Rules:
- the bearer token is sent only when one is given (per call or default)
- query parameters whose value is None are dropped
- 204 / empty body -> success with data=None
- non-JSON error body -> message is the HTTP reason phrase
- transport failures (httpx.TransportError) are not caught

Works with any httpx.Client, including fastapi.testclient.TestClient.

"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

_PARAM_NAMES = {
    "creator_id": "creatorId",
    "search_term": "searchTerm",
    "include_archived": "includeArchived",
}


@dataclass
class ApiResponse:
    success: bool
    data: Any = None
    message: str | None = None
    count: int | None = None
    status_code: int = 0
    token: str | None = None


def parse_response(resp: httpx.Response) -> ApiResponse:
    ok = resp.is_success
    if resp.status_code == 204 or not resp.content:
        return ApiResponse(success=ok, status_code=resp.status_code,
                           message=None if ok else resp.reason_phrase)

    try:
        body = resp.json()
    except ValueError:
        logger.debug("Non-JSON body from %s %s", resp.request.method, resp.request.url)
        return ApiResponse(
            success=ok,
            data=resp.text if ok else None,
            message=resp.reason_phrase,
            status_code=resp.status_code,
        )

    if not isinstance(body, dict):
        return ApiResponse(success=ok, data=body, status_code=resp.status_code)

    data = body.get("data")
    if data is None and "user" in body:
        data = body["user"]
    return ApiResponse(
        success=bool(body.get("success", ok)) and ok,
        data=data,
        message=body.get("message") or (None if ok else resp.reason_phrase),
        count=body.get("count"),
        status_code=resp.status_code,
        token=body.get("token"),
    )


def query_params(filters: dict) -> dict:
    params = {}
    for key, value in filters.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[_PARAM_NAMES.get(key, key)] = value
    return params


class LabApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        token: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=self.base_url, timeout=timeout)

        self.publications = ResourceClient(self, "/api/publications")
        self.theses = ResourceClient(self, "/api/theses")
        self.mastersis = ResourceClient(self, "/api/mastersis")
        self.actus = ResourceClient(self, "/api/actus", multipart=True)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "LabApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _headers(self, token: str | None) -> dict:
        token = token or self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict | None = None,
        json: Any = None,
        data: dict | None = None,
        files: dict | None = None,
    ) -> ApiResponse:
        resp = self.http.request(
            method,
            path,
            headers=self._headers(token),
            params=query_params(params or {}),
            json=json,
            data=data,
            files=files,
        )
        return parse_response(resp)

    # auth

    def login(self, email: str, password: str) -> ApiResponse:
        res = self.request("POST", "/api/auth/login", json={"email": email, "password": password})
        if res.success and res.token:
            self.token = res.token
        return res

    def me(self, token: str | None = None) -> ApiResponse:
        return self.request("GET", "/api/auth/me", token=token)

    # members

    def list_members(self, *, include_archived: bool | None = None, token: str | None = None) -> ApiResponse:
        return self.request("GET", "/api/users", token=token, params={"include_archived": include_archived})

    def get_member(self, user_id: str, token: str | None = None) -> ApiResponse:
        return self.request("GET", f"/api/users/{user_id}", token=token)

    # homepage

    def get_hero(self) -> ApiResponse:
        return self.request("GET", "/api/hero")

    def list_carousel(self) -> ApiResponse:
        return self.request("GET", "/api/carousel")

    def get_presentation(self) -> ApiResponse:
        return self.request("GET", "/api/presentation/main")

    def image_url(self, stored: str | None) -> str | None:
        """Absolute URL for a stored "/uploads/..." path."""
        if not stored or stored.startswith(("http://", "https://")):
            return stored
        return f"{self.base_url}/{stored.lstrip('/')}"


class ResourceClient:
    """CRUD helpers for one owned content resource."""

    def __init__(self, client: LabApiClient, path: str, *, multipart: bool = False):
        self.client = client
        self.path = path
        self.multipart = multipart

    def list(self, *, token: str | None = None, **filters) -> ApiResponse:
        return self.client.request("GET", self.path, token=token, params=filters)

    def get(self, item_id: str, token: str | None = None) -> ApiResponse:
        return self.client.request("GET", f"{self.path}/{item_id}", token=token)

    def _body(self, payload: dict, files: dict | None) -> dict:
        if self.multipart:
            fields = {k: v for k, v in payload.items() if v is not None}
            return {"data": fields, "files": files}
        return {"json": payload}

    def create(self, payload: dict, *, token: str | None = None, files: dict | None = None) -> ApiResponse:
        return self.client.request("POST", self.path, token=token, **self._body(payload, files))

    def update(
        self, item_id: str, payload: dict, *, token: str | None = None, files: dict | None = None
    ) -> ApiResponse:
        return self.client.request("PUT", f"{self.path}/{item_id}", token=token, **self._body(payload, files))

    def delete(self, item_id: str, token: str | None = None) -> ApiResponse:
        return self.client.request("DELETE", f"{self.path}/{item_id}", token=token)
