"""HTTP client for the remote CRM service."""

from citadel_crm.client.api_client import ApiClient
from citadel_crm.client.normalize import failure, normalize_payload
from citadel_crm.client.session import Identity, Session

__all__ = ["ApiClient", "Identity", "Session", "failure", "normalize_payload"]
