"""People actions."""

from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import Person

from .results import ActionResult, PageResult, unwrap_done, unwrap_one, unwrap_page
from .users import resolve_workspace_id


def get_all_people(
    client: ApiClient,
    session: Session,
    page_size: int = 10,
    page: int = 1,
) -> PageResult[Person]:
    """One page of the current workspace's people."""
    workspace = resolve_workspace_id(client, session)
    if not workspace.ok:
        return PageResult.fail(workspace.error, workspace.status, page=page, page_size=page_size)
    envelope = client.people.get_all(session, workspace.value, page_size, page)
    return unwrap_page(envelope, Person, page=page, page_size=page_size, what="get_all_people")


def get_person_details(client: ApiClient, session: Session, person_uuid: str) -> ActionResult[Person]:
    return unwrap_one(client.people.get_details(session, person_uuid), Person, "get_person_details")


def create_person(client: ApiClient, session: Session, person_data: dict) -> ActionResult[Person]:
    return unwrap_one(client.people.create(session, person_data), Person, "create_person")


def update_person(
    client: ApiClient,
    session: Session,
    person_uuid: str,
    changes: dict,
) -> ActionResult[Person]:
    """Patch a person; the value is the record as echoed back by the server."""
    return unwrap_one(client.people.update(session, person_uuid, changes), Person, "update_person")


def delete_person(client: ApiClient, session: Session, person_uuid: str) -> ActionResult[bool]:
    return unwrap_done(client.people.delete(session, person_uuid), "delete_person")
