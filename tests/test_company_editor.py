"""Tests for the company detail card state."""

import json

import httpx
import pytest

from citadel_crm.client import ApiClient, Session
from citadel_crm.editing import CompanyDetailsEditor, FieldState, RecordingNotifier
from citadel_crm.models import AccountOwner, Company, Opportunity, Person, SidebarView


def _address(street: str = "Storgata 1", postcode: str = "5003", city: str = "Bergen") -> dict:
    return {"address1": street, "address2": "", "postcode": postcode, "city": city}


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def editor(
    client: ApiClient,
    session: Session,
    company_payload: dict,
    notifier: RecordingNotifier,
) -> CompanyDetailsEditor:
    return CompanyDetailsEditor(client, session, Company.model_validate(company_payload), notifier)


class TestFieldEdits:
    def test_arr_round_trip(self, editor: CompanyDetailsEditor, router, company_payload: dict, notifier) -> None:
        router.add("PATCH", "companies/c-42/", body={**company_payload, "arr": 2000000.0})
        editor.begin_edit("arr")
        editor.set_draft("arr", "2 000 000")
        assert editor.submit("arr") is True
        assert json.loads(router.requests[0].content) == {"arr": 2000000.0}
        assert editor.field("arr").value == 2000000.0
        assert editor.company.arr == 2000000.0
        assert notifier.last == ("success", "ARR oppdatert")

    def test_cancel_sends_nothing(self, editor: CompanyDetailsEditor, router) -> None:
        editor.begin_edit("orgnr")
        editor.set_draft("orgnr", "000")
        editor.cancel("orgnr")
        assert editor.field("orgnr").draft == "976944801"
        assert router.requests == []

    def test_failed_update_reports_field(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        router.add("PATCH", "companies/c-42/", status=400, body={"num_employees": ["invalid"]})
        editor.begin_edit("num_employees")
        editor.set_draft("num_employees", "130")
        assert editor.submit("num_employees") is False
        assert editor.company.num_employees == 120
        assert notifier.last == ("error", "Kunne ikke oppdatere antall ansatte")

    def test_unknown_field(self, editor: CompanyDetailsEditor) -> None:
        with pytest.raises(ValueError, match="Unknown field"):
            editor.field("revenue")

    def test_info_items_follow_company(self, editor: CompanyDetailsEditor, router, company_payload: dict) -> None:
        router.add("PATCH", "companies/c-42/", body={**company_payload, "orgnr": "123456789"})
        editor.begin_edit("orgnr")
        editor.set_draft("orgnr", "123456789")
        editor.submit("orgnr")
        rows = {item.label: item for item in editor.info_items()}
        assert rows["Org.nr"].value == "123456789"


class TestAddressEdit:
    def test_invalid_postcode_not_sent(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        editor.begin_edit("address")
        editor.set_draft("address", _address(postcode="50"))
        assert editor.submit("address") is False
        assert router.requests == []
        assert editor.field("address").state is FieldState.EDITING
        assert notifier.last == ("error", "Postnummer må være minst 4 siffer")

    def test_missing_street_and_city(self, editor: CompanyDetailsEditor, notifier) -> None:
        editor.begin_edit("address")
        editor.set_draft("address", _address(street=" ", city=""))
        editor.submit("address")
        level, message = notifier.last
        assert level == "error"
        assert "Adresse 1 er påkrevd" in message
        assert "By er påkrevd" in message

    def test_valid_address_sent_as_company_fields(
        self, editor: CompanyDetailsEditor, router, company_payload: dict
    ) -> None:
        echo = {**company_payload, "address_street": "Storgata 1", "address_zip": "5003", "address_city": "Bergen"}
        router.add("PATCH", "companies/c-42/", body=echo)
        editor.begin_edit("address")
        assert editor.field("address").draft["postcode"] == "5147"
        editor.set_draft("address", _address())
        assert editor.submit("address") is True
        assert json.loads(router.requests[0].content) == {
            "address_street": "Storgata 1",
            "address_zip": "5003",
            "address_city": "Bergen",
        }
        assert editor.company.address_zip == "5003"


class TestAccountOwners:
    def test_add_owner(self, editor: CompanyDetailsEditor, router, company_payload: dict, notifier) -> None:
        router.add("GET", "companies/c-42", body=company_payload)
        router.add("PATCH", "companies/c-42/", body={**company_payload, "account_owners": [1, 2]})
        assert editor.add_owner(AccountOwner(id=2, first_name="Liv")) is True
        assert editor.account_owners.ids() == [1, 2]
        assert notifier.last == ("success", "Kontoansvarlig lagt til")

    def test_add_present_owner_is_noop(self, editor: CompanyDetailsEditor, router) -> None:
        assert editor.add_owner(AccountOwner(id=1)) is False
        assert router.requests == []

    def test_remove_owner(self, editor: CompanyDetailsEditor, router, company_payload: dict, notifier) -> None:
        router.add("GET", "companies/c-42", body=company_payload)
        router.add("PATCH", "companies/c-42/", body={**company_payload, "account_owners": []})
        assert editor.remove_owner(1) is True
        assert len(editor.account_owners) == 0
        assert notifier.last == ("success", "Kontoansvarlig fjernet")

    def test_remove_owner_failure(self, editor: CompanyDetailsEditor, notifier) -> None:
        assert editor.remove_owner(1) is False
        assert editor.account_owners.ids() == [1]
        assert notifier.last == ("error", "Kunne ikke fjerne kontoansvarlig")


class TestOpportunities:
    def test_remove_detaches_company(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        """The opportunity keeps its other companies and disappears only after the PATCH."""
        in_flight = []

        def patch(request: httpx.Request) -> httpx.Response:
            in_flight.append((editor.opportunities.removing_id, editor.opportunities.ids()))
            return httpx.Response(200, json={"id": 10, "uuid": "o-10", "name": "Strømavtale 2025", "companies": [43]})

        router.add_handler("PATCH", "opportunities/o-10/", patch)
        assert editor.remove_opportunity(10) is True
        assert json.loads(router.requests[0].content) == {"companies": [43]}
        assert in_flight == [(10, [10, 11])]
        assert editor.opportunities.ids() == [11]
        assert editor.opportunities.removing_id is None
        assert notifier.last == ("success", "Strømavtale 2025 fjernet fra muligheter")

    def test_remove_failure_keeps_item(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        router.add("PATCH", "opportunities/o-10/", status=500, body={"detail": "boom"})
        assert editor.remove_opportunity(10) is False
        assert editor.opportunities.ids() == [10, 11]
        assert editor.opportunities.removing_id is None
        assert notifier.last == ("error", "En feil oppstod under fjerning av mulighet")

    def test_add_opportunity(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        router.add("PATCH", "opportunities/o-12/", body={"id": 12, "uuid": "o-12", "name": "Ny", "companies": [7, 42]})
        assert editor.add_opportunity(Opportunity(id=12, uuid="o-12", name="Ny", companies=[7])) is True
        assert json.loads(router.requests[0].content) == {"companies": [7, 42]}
        assert editor.opportunities.ids() == [10, 11, 12]
        assert notifier.last == ("success", "Ny lagt til i muligheter")

    def test_add_listed_opportunity_is_noop(self, editor: CompanyDetailsEditor, router) -> None:
        assert editor.add_opportunity(Opportunity(id=11, uuid="o-11", name="Solcellepilot")) is False
        assert router.requests == []


class TestPeople:
    def test_add_person(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        router.add("PATCH", "people/p-101/", body={"id": 101, "uuid": "p-101", "name": "Liv", "companies": [42]})
        assert editor.add_person(Person(id=101, uuid="p-101", name="Liv")) is True
        assert json.loads(router.requests[0].content) == {"companies": [42]}
        assert notifier.last == ("success", "Liv lagt til i personer")

    def test_remove_person(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        router.add("PATCH", "people/p-100/", body={"id": 100, "uuid": "p-100", "name": "Per Olsen", "companies": []})
        assert editor.remove_person(100) is True
        assert json.loads(router.requests[0].content) == {"companies": []}
        assert len(editor.people) == 0
        assert notifier.last == ("success", "Per Olsen fjernet fra personer")

    def test_add_person_failure(self, editor: CompanyDetailsEditor, router, notifier) -> None:
        assert editor.add_person(Person(id=101, uuid="p-101", name="Liv")) is False
        assert editor.people.ids() == [100]
        assert notifier.last == ("error", "En feil oppstod under tilknytning av person")


class TestFavorite:
    """Favorite status comes from a sidebar view linking to the company page."""

    def test_seeded_views(self, client: ApiClient, session: Session, company_payload: dict) -> None:
        views = [
            SidebarView(uuid="v-1", name="Mine firma", url="/companies"),
            SidebarView(uuid="v-2", name="Fjordkraft AS", url="/company/c-42"),
        ]
        editor = CompanyDetailsEditor(client, session, Company.model_validate(company_payload), sidebar_views=views)
        assert editor.is_favorite is True
        assert editor.favorite_id == "v-2"

    def test_not_favorite_by_default(self, editor: CompanyDetailsEditor, router) -> None:
        assert editor.is_favorite is False
        assert editor.favorite_id is None
        assert router.requests == []

    def test_refresh_from_server(self, editor: CompanyDetailsEditor, router) -> None:
        router.add(
            "GET",
            "users/user_123/views/",
            body=[{"id": 3, "uuid": "v-3", "name": "Fjordkraft AS", "url": "/company/c-42"}],
        )
        assert editor.refresh_favorite() is True
        assert editor.favorite_id == "v-3"

    def test_refresh_without_views(self, editor: CompanyDetailsEditor, router) -> None:
        router.add("GET", "users/user_123/views/", body=[])
        assert editor.refresh_favorite() is True
        assert editor.is_favorite is False

    def test_refresh_failure_keeps_status(
        self, client: ApiClient, session: Session, company_payload: dict, router
    ) -> None:
        views = [SidebarView(uuid="v-2", url="/company/c-42")]
        editor = CompanyDetailsEditor(client, session, Company.model_validate(company_payload), sidebar_views=views)
        router.add("GET", "users/user_123/views/", status=500, body={"detail": "boom"})
        assert editor.refresh_favorite() is False
        assert editor.favorite_id == "v-2"
