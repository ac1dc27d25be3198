"""Opportunity actions, including the pipeline (kanban) stage move."""

import logging

from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import Opportunity
from citadel_crm.models.envelope import ErrorKind

from .results import ActionResult, PageResult, unwrap_done, unwrap_one, unwrap_page
from .users import resolve_workspace_id

logger = logging.getLogger(__name__)


def get_all_opportunities(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Opportunity]:
    """One page of the current workspace's opportunities."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return PageResult.fail(workspace.error, workspace.status, page=page, page_size=page_size)
    envelope = client.opportunities.get_all(session, workspace.value, page_size, page)
    return unwrap_page(envelope, Opportunity, page=page, page_size=page_size, what="get_all_opportunities")


def get_user_opportunities(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Opportunity]:
    """Opportunities assigned to the session's user."""
    if not session.is_active:
        logger.error("No authenticated user found")
        return PageResult.fail(ErrorKind.UNAUTHORIZED, page=page, page_size=page_size)
    envelope = client.opportunities.get_user_opportunities(session, session.user_id, page_size, page)
    return unwrap_page(envelope, Opportunity, page=page, page_size=page_size, what="get_user_opportunities")


def get_opportunity_details(
    client: ApiClient,
    session: Session,
    opportunity_uuid: str,
) -> ActionResult[Opportunity]:
    envelope = client.opportunities.get_details(session, opportunity_uuid)
    return unwrap_one(envelope, Opportunity, "get_opportunity_details")


def create_opportunity(client: ApiClient, session: Session, opportunity_data: dict) -> ActionResult[Opportunity]:
    envelope = client.opportunities.create(session, opportunity_data)
    return unwrap_one(envelope, Opportunity, "create_opportunity")


def update_opportunity(
    client: ApiClient,
    session: Session,
    opportunity_uuid: str,
    changes: dict,
) -> ActionResult[Opportunity]:
    """Patch an opportunity; the value is the record as echoed back by the server."""
    envelope = client.opportunities.update(session, opportunity_uuid, changes)
    return unwrap_one(envelope, Opportunity, "update_opportunity")


def move_opportunity_stage(
    client: ApiClient,
    session: Session,
    opportunity_uuid: str,
    stage: str,
) -> ActionResult[Opportunity]:
    """Move a card to another pipeline column."""
    envelope = client.kanban.update_card_position(session, opportunity_uuid, stage)
    return unwrap_one(envelope, Opportunity, "move_opportunity_stage")


def delete_opportunity(client: ApiClient, session: Session, opportunity_uuid: str) -> ActionResult[bool]:
    return unwrap_done(client.opportunities.delete(session, opportunity_uuid), "delete_opportunity")
