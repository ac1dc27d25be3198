"""HTTP client for the Citadel CRM internal API.

Every call goes through ``ApiClient.request``, which:
1. Refuses to send anything for an inactive session (UNAUTHORIZED)
2. Attaches the deployment headers plus the caller's identity header
3. Normalizes success and failure alike into an ``Envelope``; no exception
   raised by the transport or the remote reaches the caller
"""

import logging
from typing import Any, Optional

import httpx

from citadel_crm.config import ClientSettings
from citadel_crm.models.envelope import Envelope, ErrorKind

from .normalize import NO_BODY, failure, normalize_payload, parse_body, preview_body
from .resources import (
    CompanyResource,
    DealResource,
    KanbanResource,
    OpportunityResource,
    PeopleResource,
    SidebarViewResource,
    TaskResource,
    UserResource,
    WorkspaceResource,
)
from .session import Session

logger = logging.getLogger(__name__)

METHODS = ("get", "post", "patch", "delete")


class ApiClient:
    """
    Resource-keyed client for one remote base URL.
    Resource groups (``companies``, ``people``, ...) build paths and delegate
    to ``request``; the session is passed explicitly on every call.
    """

    DEFAULT_HEADERS = {
        "Content-Type": "application/json",
        "Cache-Control": "no-cache",
    }

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            settings: Base URL and deployment credentials (default: from env)
            client: Optional httpx client (tests inject one with a mock transport)
        """
        self.settings = settings or ClientSettings.from_env()
        self._client = client or httpx.Client(timeout=self.settings.timeout)

        self.users = UserResource(self)
        self.workspaces = WorkspaceResource(self)
        self.deals = DealResource(self)
        self.companies = CompanyResource(self)
        self.opportunities = OpportunityResource(self)
        self.kanban = KanbanResource(self)
        self.people = PeopleResource(self)
        self.sidebar_views = SidebarViewResource(self)
        self.tasks = TaskResource(self)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def url_for(self, path: str) -> str:
        """Absolute URL for a path relative to the API root."""
        return self.settings.base_url.rstrip("/") + "/" + path.lstrip("/")

    def _headers(self, session: Session) -> dict[str, str]:
        return {
            **self.DEFAULT_HEADERS,
            "X-CITADEL-LOCK": self.settings.lock,
            "X-CITADEL-KEY": self.settings.key,
            "X-CITADEL-ID": session.user.id if session.user else "",
        }

    def request(
        self,
        session: Session,
        method: str,
        path: str,
        data: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Envelope:
        """
        Send one request and return its normalized envelope.
        Raises ValueError only for an unsupported method (a programming error).
        """
        method = method.lower()
        if method not in METHODS:
            raise ValueError(f"Unsupported method: {method}. Expected one of {list(METHODS)}")

        url = self.url_for(path)
        if not session.is_active:
            logger.warning("Unauthorized: no active session for %s %s", method.upper(), url)
            return failure(None, ErrorKind.UNAUTHORIZED)

        try:
            resp = self._client.request(
                method,
                url,
                json=data,
                params=params or None,
                headers=self._headers(session),
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "API client error for %s %s: status=%s body=%s",
                method.upper(),
                url,
                e.response.status_code,
                preview_body(parse_body(e.response.content)),
            )
            return failure(e.response.status_code, ErrorKind.REMOTE)
        except httpx.RequestError as e:
            logger.warning("API client error for %s %s: %s", method.upper(), url, e)
            return failure(None, ErrorKind.TRANSPORT)
        except Exception:
            logger.exception("Unexpected error for %s %s", method.upper(), url)
            return failure(None, ErrorKind.TRANSPORT)

        body = parse_body(resp.content)
        if body is NO_BODY:
            logger.debug("%s %s returned %s with no body", method.upper(), url, resp.status_code)
        return normalize_payload(resp.status_code, body)
