"""Task actions."""

import logging

from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import Task, TaskDetails
from citadel_crm.models.envelope import ErrorKind

from .results import ActionResult, PageResult, unwrap_done, unwrap_one, unwrap_page
from .users import resolve_workspace_id

logger = logging.getLogger(__name__)


def get_all_tasks(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Task]:
    """One page of the current workspace's tasks."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return PageResult.fail(workspace.error, workspace.status, page=page, page_size=page_size)
    envelope = client.tasks.get_all(session, workspace.value, page_size, page)
    return unwrap_page(envelope, Task, page=page, page_size=page_size, what="get_all_tasks")


def get_user_tasks(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Task]:
    """Tasks assigned to the session's user."""
    if not session.is_active:
        logger.error("No authenticated user found")
        return PageResult.fail(ErrorKind.UNAUTHORIZED, page=page, page_size=page_size)
    envelope = client.tasks.get_user_tasks(session, session.user_id, page_size, page)
    return unwrap_page(envelope, Task, page=page, page_size=page_size, what="get_user_tasks")


def get_task_details(client: ApiClient, session: Session, task_uuid: str) -> ActionResult[TaskDetails]:
    return unwrap_one(client.tasks.get_details(session, task_uuid), TaskDetails, "get_task_details")


def create_task(client: ApiClient, session: Session, task_data: dict) -> ActionResult[Task]:
    return unwrap_one(client.tasks.create(session, task_data), Task, "create_task")


def update_task(client: ApiClient, session: Session, task_uuid: str, changes: dict) -> ActionResult[Task]:
    return unwrap_one(client.tasks.update(session, task_uuid, changes), Task, "update_task")


def delete_task(client: ApiClient, session: Session, task_uuid: str) -> ActionResult[bool]:
    return unwrap_done(client.tasks.delete(session, task_uuid), "delete_task")
