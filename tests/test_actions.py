"""Tests for user, people, opportunity and task actions."""

import json

from citadel_crm.actions.opportunities import (
    get_all_opportunities,
    get_user_opportunities,
    move_opportunity_stage,
    update_opportunity,
)
from citadel_crm.actions.people import create_person, delete_person, get_all_people, get_person_details
from citadel_crm.actions.tasks import get_all_tasks, get_task_details, get_user_tasks
from citadel_crm.actions.users import (
    get_current_user,
    get_sidebar_views,
    resolve_workspace_id,
    update_current_user,
)
from citadel_crm.client import ApiClient, Session
from citadel_crm.models.envelope import ErrorKind


class TestUsers:
    def test_current_user(self, client: ApiClient, signed_in, session: Session) -> None:
        result = get_current_user(client, session)
        assert result.value.email == "kari@example.no"
        assert result.value.workspace_id == "ws-1"

    def test_current_user_unauthenticated(self, client: ApiClient, router) -> None:
        result = get_current_user(client, Session.anonymous())
        assert result.error is ErrorKind.UNAUTHORIZED
        assert router.requests == []

    def test_unknown_user(self, client: ApiClient, session: Session) -> None:
        result = get_current_user(client, session)
        assert result.ok is False
        assert result.status == 404

    def test_resolve_workspace(self, client: ApiClient, signed_in, session: Session) -> None:
        assert resolve_workspace_id(client, session).value == "ws-1"

    def test_update_current_user(self, client: ApiClient, router, session: Session, user_payload: dict) -> None:
        router.add("PATCH", "users/user_123/", body={**user_payload, "first_name": "Karianne"})
        result = update_current_user(client, session, {"first_name": "Karianne"})
        assert result.value.first_name == "Karianne"

    def test_sidebar_views(self, client: ApiClient, router, session: Session) -> None:
        router.add("GET", "users/user_123/views/", body=[{"id": 1, "name": "Mine firma", "url": "/companies"}])
        result = get_sidebar_views(client, session)
        assert result.value[0].name == "Mine firma"


class TestPeople:
    def test_page(self, client: ApiClient, signed_in, session: Session) -> None:
        signed_in.add(
            "GET",
            "workspaces/ws-1/people",
            body={"count": 11, "next": "x", "previous": None, "results": [{"id": 1, "name": "Per"}]},
        )
        result = get_all_people(client, session, page_size=5, page=1)
        assert result.total_pages == 3
        assert result.data[0].name == "Per"

    def test_details(self, client: ApiClient, router, session: Session) -> None:
        router.add("GET", "people/p-1/details", body={"id": 1, "uuid": "p-1", "name": "Per", "companies": [42]})
        assert get_person_details(client, session, "p-1").value.companies == [42]

    def test_create_and_delete(self, client: ApiClient, router, session: Session) -> None:
        router.add("POST", "people/", status=201, body={"id": 2, "uuid": "p-2", "name": "Liv"})
        router.add("DELETE", "people/p-2", status=204)
        assert create_person(client, session, {"name": "Liv"}).value.uuid == "p-2"
        assert delete_person(client, session, "p-2").ok is True


class TestOpportunities:
    def test_page(self, client: ApiClient, signed_in, session: Session) -> None:
        signed_in.add("GET", "workspaces/ws-1/opportunities", body={"count": 0, "results": []})
        result = get_all_opportunities(client, session)
        assert result.ok is True
        assert result.data == []

    def test_mine_uses_session_user(self, client: ApiClient, router, session: Session) -> None:
        router.add("GET", "users/user_123/opportunities", body={"count": 1, "results": [{"id": 10, "name": "X"}]})
        result = get_user_opportunities(client, session, 10, 1)
        assert result.data[0].id == 10

    def test_mine_unauthenticated(self, client: ApiClient, router) -> None:
        result = get_user_opportunities(client, Session.anonymous())
        assert result.error is ErrorKind.UNAUTHORIZED
        assert router.requests == []

    def test_move_stage(self, client: ApiClient, router, session: Session) -> None:
        router.add("PATCH", "opportunities/o-10/", body={"id": 10, "uuid": "o-10", "stage": "won"})
        result = move_opportunity_stage(client, session, "o-10", "won")
        assert result.value.stage == "won"
        assert json.loads(router.requests[0].content) == {"stage": "won"}

    def test_update_failure(self, client: ApiClient, router, session: Session) -> None:
        router.add("PATCH", "opportunities/o-10/", status=400, body={"companies": ["Invalid pk"]})
        result = update_opportunity(client, session, "o-10", {"companies": [99]})
        assert result.ok is False
        assert result.status == 400


class TestTasks:
    def test_page(self, client: ApiClient, signed_in, session: Session) -> None:
        signed_in.add("GET", "workspaces/ws-1/tasks", body={"count": 3, "results": [{"id": 1, "title": "Ring"}]})
        result = get_all_tasks(client, session, page_size=2, page=1)
        assert result.total_pages == 2

    def test_mine(self, client: ApiClient, router, session: Session) -> None:
        router.add("GET", "users/user_123/tasks", body={"count": 0, "results": []})
        assert get_user_tasks(client, session).ok is True

    def test_details_expands_relations(self, client: ApiClient, router, session: Session) -> None:
        router.add(
            "GET",
            "tasks/t-1/details",
            body={"id": 1, "title": "Ring", "companies": [{"id": 42, "name": "Fjordkraft AS"}], "people": []},
        )
        result = get_task_details(client, session, "t-1")
        assert result.value.companies[0].name == "Fjordkraft AS"
