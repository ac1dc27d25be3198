"""Company actions: listing, details, updates and account owners."""

import logging

from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import Company

from .results import ActionResult, PageResult, unwrap_done, unwrap_many, unwrap_one, unwrap_page
from .users import resolve_workspace_id

logger = logging.getLogger(__name__)


def get_companies(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Company]:
    """One page of the current workspace's companies."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return PageResult.fail(workspace.error, workspace.status, page=page, page_size=page_size)
    envelope = client.companies.get_all(session, workspace.value, page_size, page)
    return unwrap_page(envelope, Company, page=page, page_size=page_size, what="get_companies")


def get_all_companies(client: ApiClient, session: Session) -> ActionResult[list[Company]]:
    """Every company of the current workspace, unpaginated."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return ActionResult.fail(workspace.error, workspace.status)
    envelope = client.companies.get_all(session, workspace.value)
    return unwrap_many(envelope, Company, "get_all_companies")


def search_companies(
    client: ApiClient,
    session: Session,
    query: str,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Company]:
    """Companies whose name matches ``query``, paginated."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return PageResult.fail(workspace.error, workspace.status, page=page, page_size=page_size)
    envelope = client.companies.search(session, workspace.value, query, page_size, page)
    return unwrap_page(envelope, Company, page=page, page_size=page_size, what="search_companies")


def get_company_details(client: ApiClient, session: Session, company_uuid: str) -> ActionResult[Company]:
    """Company with owners, opportunities and people expanded."""
    envelope = client.companies.get_details(session, company_uuid)
    return unwrap_one(envelope, Company, "get_company_details")


def create_company(client: ApiClient, session: Session, company_data: dict) -> ActionResult[Company]:
    return unwrap_one(client.companies.create(session, company_data), Company, "create_company")


def update_company(
    client: ApiClient,
    session: Session,
    company_uuid: str,
    changes: dict,
) -> ActionResult[Company]:
    """Patch a company; the value is the record as echoed back by the server."""
    envelope = client.companies.update(session, company_uuid, changes)
    return unwrap_one(envelope, Company, "update_company")


def delete_company(client: ApiClient, session: Session, company_uuid: str) -> ActionResult[bool]:
    return unwrap_done(client.companies.delete(session, company_uuid), "delete_company")


def _owner_ids(company: Company) -> list[int]:
    return [o.id for o in company.account_owners if o.id is not None]


def add_account_owner(
    client: ApiClient,
    session: Session,
    company_uuid: str,
    owner_id: int,
) -> ActionResult[Company]:
    """Assign an owner to a company; no write when the owner is already assigned."""
    current = unwrap_one(client.companies.get(session, company_uuid), Company, "add_account_owner")
    if not current.ok:
        return current
    owner_ids = _owner_ids(current.value)
    if owner_id in owner_ids:
        logger.debug("Owner %s already assigned to %s", owner_id, company_uuid)
        return current
    return update_company(client, session, company_uuid, {"account_owners": owner_ids + [owner_id]})


def remove_account_owner(
    client: ApiClient,
    session: Session,
    company_uuid: str,
    owner_id: int,
) -> ActionResult[Company]:
    """Unassign an owner; the value is the updated company."""
    current = unwrap_one(client.companies.get(session, company_uuid), Company, "remove_account_owner")
    if not current.ok:
        return current
    remaining = [i for i in _owner_ids(current.value) if i != owner_id]
    return update_company(client, session, company_uuid, {"account_owners": remaining})
