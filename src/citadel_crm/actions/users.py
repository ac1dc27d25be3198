"""Current-user lookup and workspace resolution."""

import logging

from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import SidebarView, User
from citadel_crm.models.envelope import ErrorKind

from .results import ActionResult, unwrap_many, unwrap_one

logger = logging.getLogger(__name__)


def get_current_user(client: ApiClient, session: Session) -> ActionResult[User]:
    """CRM user record for the session's identity; None when unauthenticated or unknown."""
    if not session.is_active:
        logger.error("No authenticated user found")
        return ActionResult.fail(ErrorKind.UNAUTHORIZED)
    return unwrap_one(client.users.get(session, session.user_id), User, "get_current_user")


def resolve_workspace_id(client: ApiClient, session: Session) -> ActionResult[str]:
    """
    Workspace uuid the current user belongs to.
    A user without a workspace is a PRECONDITION failure; lookup failures keep their kind.
    """
    user = get_current_user(client, session)
    if not user.ok:
        return ActionResult.fail(user.error or ErrorKind.PRECONDITION, user.status)
    workspace_id = user.value.workspace_id
    if not workspace_id:
        logger.error("No authenticated user found or user has no associated company")
        return ActionResult.fail(ErrorKind.PRECONDITION)
    return ActionResult(value=workspace_id)


def update_current_user(client: ApiClient, session: Session, changes: dict) -> ActionResult[User]:
    if not session.is_active:
        logger.error("No authenticated user found")
        return ActionResult.fail(ErrorKind.UNAUTHORIZED)
    envelope = client.users.update(session, session.user_id, changes)
    return unwrap_one(envelope, User, "update_current_user")


def get_sidebar_views(client: ApiClient, session: Session) -> ActionResult[list[SidebarView]]:
    """Saved sidebar views (favorites) of the current user."""
    if not session.is_active:
        logger.error("No authenticated user found")
        return ActionResult.fail(ErrorKind.UNAUTHORIZED)
    envelope = client.sidebar_views.get_all(session, session.user_id)
    return unwrap_many(envelope, SidebarView, "get_sidebar_views")
