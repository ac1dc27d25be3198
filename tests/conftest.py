"""Pytest fixtures for citadel-crm tests."""

from typing import Any, Callable

import httpx
import pytest

from citadel_crm.client import ApiClient, Session
from citadel_crm.config import ClientSettings

BASE_URL = "https://crm.test/internal/v2/"
BASE_PATH = "/internal/v2/"


class Router:
    """
    Mock transport routes keyed by (METHOD, path relative to the API root).
    A route value is (status, json_body) or a callable(request) -> httpx.Response.
    Every request seen is kept in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method.upper(), path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and self.path_of(r) == path]

    @staticmethod
    def path_of(request: httpx.Request) -> str:
        return request.url.path.removeprefix(BASE_PATH)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, self.path_of(request)))
        if route is None:
            return httpx.Response(404, json={"detail": "Not found."})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(base_url=BASE_URL, lock="lock-token", key="deploy-key")


@pytest.fixture
def session() -> Session:
    """Active session for a signed-in user."""
    return Session.for_user("user_123", "kari@example.no")


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def client(settings: ClientSettings, router: Router) -> ApiClient:
    """ApiClient whose HTTP traffic goes to ``router``."""
    api = ApiClient(settings, client=httpx.Client(transport=httpx.MockTransport(router)))
    yield api
    api.close()


@pytest.fixture
def user_payload() -> dict:
    return {
        "id": 7,
        "uuid": "u-7",
        "clerk_id": "user_123",
        "first_name": "Kari",
        "last_name": "Nordmann",
        "email": "kari@example.no",
        "company_details": {"uuid": "ws-1", "name": "Vegard Enterprises"},
    }


@pytest.fixture
def signed_in(router: Router, user_payload: dict) -> Router:
    """Router that knows the session's user and their workspace ``ws-1``."""
    router.add("GET", "users/user_123", body=user_payload)
    return router


@pytest.fixture
def company_payload() -> dict:
    """Company details as returned by /companies/{uuid}/details."""
    return {
        "id": 42,
        "uuid": "c-42",
        "name": "Fjordkraft AS",
        "orgnr": "976944801",
        "address_street": "Folke Bernadottes vei 38",
        "address_zip": "5147",
        "address_city": "Bergen",
        "arr": 1500000.0,
        "num_employees": 120,
        "url": "https://www.fjordkraft.no",
        "some_linked": "https://www.linkedin.com/company/fjordkraft",
        "some_twitter": "",
        "date_created": "2024-03-05T10:00:00Z",
        "last_contacted": "2024-06-01T08:30:00Z",
        "account_owners": [
            {"id": 1, "first_name": "Ola", "last_name": "Hansen", "email": "ola@example.no"},
        ],
        "opportunities": [
            {"id": 10, "uuid": "o-10", "name": "Strømavtale 2025", "companies": [42, 43], "stage": "lead"},
            {"id": 11, "uuid": "o-11", "name": "Solcellepilot", "companies": [42], "stage": "won"},
        ],
        "people": [
            {"id": 100, "uuid": "p-100", "name": "Per Olsen", "companies": [42]},
        ],
    }
