"""Resource groups: path builders for each remote collection."""

from typing import TYPE_CHECKING, Any, Optional

from citadel_crm.models.envelope import Envelope

from .session import Session

if TYPE_CHECKING:
    from .api_client import ApiClient


def page_params(page_size: Optional[int] = None, page: Optional[int] = None) -> dict[str, int]:
    """Paging query params; sent only when both size and page are given."""
    if page_size is None or page is None:
        return {}
    return {"page_size": page_size, "page": page}


class Resource:
    """Base for a group of endpoints sharing one ApiClient."""

    def __init__(self, api: "ApiClient"):
        self._api = api

    def _get(self, session: Session, path: str, params: Optional[dict] = None) -> Envelope:
        return self._api.request(session, "get", path, params=params)

    def _post(self, session: Session, path: str, data: Any) -> Envelope:
        return self._api.request(session, "post", path, data=data)

    def _patch(self, session: Session, path: str, data: Any) -> Envelope:
        return self._api.request(session, "patch", path, data=data)

    def _delete(self, session: Session, path: str) -> Envelope:
        return self._api.request(session, "delete", path)


class UserResource(Resource):
    def get(self, session: Session, user_id: str) -> Envelope:
        return self._get(session, f"users/{user_id}")

    def create(self, session: Session, user_data: dict) -> Envelope:
        return self._post(session, "users/", user_data)

    def update(self, session: Session, user_id: str, user_data: dict) -> Envelope:
        return self._patch(session, f"users/{user_id}/", user_data)

    def delete(self, session: Session, user_id: str) -> Envelope:
        return self._delete(session, f"users/{user_id}")


class WorkspaceResource(Resource):
    def get(self, session: Session, workspace_id: str) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/")

    def get_users(self, session: Session, workspace_id: str, limit: Optional[int] = None) -> Envelope:
        params = {"page_size": limit} if limit else None
        return self._get(session, f"workspaces/{workspace_id}/users/", params)

    def create(self, session: Session, workspace_data: dict) -> Envelope:
        return self._post(session, "workspaces/", workspace_data)

    def update(self, session: Session, workspace_id: str, workspace_data: dict) -> Envelope:
        return self._patch(session, f"workspaces/{workspace_id}/", workspace_data)

    def delete(self, session: Session, workspace_id: str) -> Envelope:
        return self._delete(session, f"workspaces/{workspace_id}/")


class DealResource(Resource):
    def get(self, session: Session, deal_id: str) -> Envelope:
        return self._get(session, f"deals/{deal_id}")

    def create(self, session: Session, deal_data: dict) -> Envelope:
        return self._post(session, "deals/", deal_data)

    def update(self, session: Session, deal_id: str, deal_data: dict) -> Envelope:
        return self._patch(session, f"deals/{deal_id}", deal_data)

    def delete(self, session: Session, deal_id: str) -> Envelope:
        return self._delete(session, f"deals/{deal_id}")


class NotesResource(Resource):
    """
    Notes nested under a parent collection (``people/{id}/notes/``).
    With no parent prefix, notes live at the API root (company notes).
    """

    def __init__(self, api: "ApiClient", parent: Optional[str] = None):
        super().__init__(api)
        self._parent = parent

    def _base(self, parent_id: Optional[str]) -> str:
        if self._parent is None:
            return "notes"
        return f"{self._parent}/{parent_id}/notes"

    def get_all(
        self,
        session: Session,
        parent_id: Optional[str] = None,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, self._base(parent_id), page_params(page_size, page))

    def get(self, session: Session, note_id: str, parent_id: Optional[str] = None) -> Envelope:
        return self._get(session, f"{self._base(parent_id)}/{note_id}/")

    def create(self, session: Session, note_data: dict, parent_id: Optional[str] = None) -> Envelope:
        return self._post(session, f"{self._base(parent_id)}/", note_data)

    def update(
        self,
        session: Session,
        note_id: str,
        note_data: dict,
        parent_id: Optional[str] = None,
    ) -> Envelope:
        return self._patch(session, f"{self._base(parent_id)}/{note_id}/", note_data)

    def delete(self, session: Session, note_id: str, parent_id: Optional[str] = None) -> Envelope:
        return self._delete(session, f"{self._base(parent_id)}/{note_id}/")


class CompanyResource(Resource):
    def __init__(self, api: "ApiClient"):
        super().__init__(api)
        self.notes = NotesResource(api)

    def get_all(
        self,
        session: Session,
        workspace_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/companies", page_params(page_size, page))

    def get(self, session: Session, company_id: str) -> Envelope:
        return self._get(session, f"companies/{company_id}")

    def create(self, session: Session, company_data: dict) -> Envelope:
        return self._post(session, "companies/", company_data)

    def update(self, session: Session, company_id: str, company_data: dict) -> Envelope:
        return self._patch(session, f"companies/{company_id}/", company_data)

    def delete(self, session: Session, company_id: str) -> Envelope:
        return self._delete(session, f"companies/{company_id}")

    def get_details(self, session: Session, company_id: str) -> Envelope:
        return self._get(session, f"companies/{company_id}/details")

    def search(
        self,
        session: Session,
        workspace_id: str,
        query: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        params = {"name": query, **page_params(page_size, page)}
        return self._get(session, f"workspaces/{workspace_id}/companies/", params)


class OpportunityResource(Resource):
    def __init__(self, api: "ApiClient"):
        super().__init__(api)
        self.notes = NotesResource(api, parent="opportunities")

    def get_all(
        self,
        session: Session,
        workspace_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/opportunities", page_params(page_size, page))

    def get(self, session: Session, opportunity_id: str) -> Envelope:
        return self._get(session, f"opportunities/{opportunity_id}")

    def create(self, session: Session, opportunity_data: dict) -> Envelope:
        return self._post(session, "opportunities/", opportunity_data)

    def update(self, session: Session, opportunity_id: str, opportunity_data: dict) -> Envelope:
        return self._patch(session, f"opportunities/{opportunity_id}/", opportunity_data)

    def delete(self, session: Session, opportunity_id: str) -> Envelope:
        return self._delete(session, f"opportunities/{opportunity_id}")

    def get_details(self, session: Session, opportunity_id: str) -> Envelope:
        return self._get(session, f"opportunities/{opportunity_id}/details")

    def get_user_opportunities(
        self,
        session: Session,
        user_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"users/{user_id}/opportunities", page_params(page_size, page))


class KanbanResource(Resource):
    """Pipeline board: opportunity cards grouped into stage columns."""

    def get_board(self, session: Session, workspace_id: str) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/kanban/")

    def update_card_position(self, session: Session, opportunity_id: str, stage: str) -> Envelope:
        return self._patch(session, f"opportunities/{opportunity_id}/", {"stage": stage})

    def get_board_columns(self, session: Session, workspace_id: str) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/kanban/columns/")

    def create(self, session: Session, workspace_id: str, card_data: dict) -> Envelope:
        return self._post(session, f"workspaces/{workspace_id}/kanban/cards/", card_data)

    def update(self, session: Session, card_id: str, card_data: dict) -> Envelope:
        return self._patch(session, f"kanban/cards/{card_id}/", card_data)

    def delete(self, session: Session, card_id: str) -> Envelope:
        return self._delete(session, f"kanban/cards/{card_id}/")

    def get_card(self, session: Session, card_id: str) -> Envelope:
        return self._get(session, f"kanban/cards/{card_id}/")

    def bulk_update(self, session: Session, updates: list[dict]) -> Envelope:
        """updates: [{"id": ..., "stage": ...}, ...]"""
        return self._patch(session, "kanban/cards/bulk/", {"updates": updates})

    def reorder_column(self, session: Session, column_id: str, card_ids: list[str]) -> Envelope:
        return self._patch(session, f"kanban/columns/{column_id}/reorder/", {"cardIds": card_ids})


class PeopleResource(Resource):
    def __init__(self, api: "ApiClient"):
        super().__init__(api)
        self.notes = NotesResource(api, parent="people")

    def get_all(
        self,
        session: Session,
        workspace_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/people", page_params(page_size, page))

    def get(self, session: Session, person_id: str) -> Envelope:
        return self._get(session, f"people/{person_id}")

    def create(self, session: Session, person_data: dict) -> Envelope:
        return self._post(session, "people/", person_data)

    def update(self, session: Session, person_id: str, person_data: dict) -> Envelope:
        return self._patch(session, f"people/{person_id}/", person_data)

    def delete(self, session: Session, person_id: str) -> Envelope:
        return self._delete(session, f"people/{person_id}")

    def get_details(self, session: Session, person_id: str) -> Envelope:
        return self._get(session, f"people/{person_id}/details")


class SidebarViewResource(Resource):
    def get_all(self, session: Session, user_id: str) -> Envelope:
        return self._get(session, f"users/{user_id}/views/")

    def create(self, session: Session, view_data: dict) -> Envelope:
        return self._post(session, "views/", view_data)

    def update(self, session: Session, view_id: str, view_data: dict) -> Envelope:
        return self._patch(session, f"views/{view_id}/", view_data)

    def delete(self, session: Session, view_id: str) -> Envelope:
        return self._delete(session, f"views/{view_id}/")


class TaskResource(Resource):
    def get_all(
        self,
        session: Session,
        workspace_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"workspaces/{workspace_id}/tasks", page_params(page_size, page))

    def get(self, session: Session, task_id: str) -> Envelope:
        return self._get(session, f"tasks/{task_id}")

    def create(self, session: Session, task_data: dict) -> Envelope:
        return self._post(session, "tasks/", task_data)

    def update(self, session: Session, task_id: str, task_data: dict) -> Envelope:
        return self._patch(session, f"tasks/{task_id}/", task_data)

    def delete(self, session: Session, task_id: str) -> Envelope:
        return self._delete(session, f"tasks/{task_id}")

    def get_details(self, session: Session, task_id: str) -> Envelope:
        return self._get(session, f"tasks/{task_id}/details")

    def get_user_tasks(
        self,
        session: Session,
        user_id: str,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
    ) -> Envelope:
        return self._get(session, f"users/{user_id}/tasks", page_params(page_size, page))
