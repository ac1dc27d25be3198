"""State behind the company detail card: inline field edits and relation lists."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError, field_validator

from citadel_crm.actions.companies import add_account_owner, remove_account_owner, update_company
from citadel_crm.actions.opportunities import update_opportunity
from citadel_crm.actions.people import update_person
from citadel_crm.actions.results import ActionResult
from citadel_crm.actions.users import get_sidebar_views
from citadel_crm.client import ApiClient, Session
from citadel_crm.models.entities import AccountOwner, Company, Opportunity, Person, SidebarView
from citadel_crm.models.envelope import ErrorKind

from .display import InfoItem, company_info_items
from .field import EditableField, parse_float, parse_int, parse_required_text, parse_text
from .notifications import LoggingNotifier, Notifier
from .relations import RelationList

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    noun: str
    parse: Callable[[Any], Any] = parse_text


COMPANY_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("name", "Firmanavn", "firmanavn", parse_required_text),
    FieldSpec("orgnr", "Organisasjonsnummer", "organisasjonsnummer"),
    FieldSpec("arr", "ARR", "ARR", parse_float),
    FieldSpec("num_employees", "Antall ansatte", "antall ansatte", parse_int),
    FieldSpec("url", "Nettadresse", "nettadresse"),
    FieldSpec("some_linked", "LinkedIn-adresse", "LinkedIn-adresse"),
    FieldSpec("some_twitter", "Twitter-adresse", "Twitter-adresse"),
)


class AddressForm(BaseModel):
    """Address popover input, validated before anything is sent."""

    address1: str
    address2: Optional[str] = ""
    postcode: str
    city: str

    @field_validator("address1")
    @classmethod
    def _address1_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Adresse 1 er påkrevd")
        return v

    @field_validator("postcode")
    @classmethod
    def _postcode_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 4:
            raise ValueError("Postnummer må være minst 4 siffer")
        return v

    @field_validator("city")
    @classmethod
    def _city_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("By er påkrevd")
        return v


class AddressField(EditableField[dict]):
    """Street, zip and city edited together through one form."""

    _ATTRS = ("address_street", "address_zip", "address_city")

    def __init__(self, company: Company, notifier: Optional[Notifier] = None):
        super().__init__(
            "address",
            self.from_entity(company),
            label="Adresse",
            noun="adresse",
            parse=AddressForm.model_validate,
            notifier=notifier,
        )

    def _draft_for(self, value: Optional[dict]) -> dict:
        value = value or {}
        return {
            "address1": value.get("address_street") or "",
            "address2": "",
            "postcode": value.get("address_zip") or "",
            "city": value.get("address_city") or "",
        }

    def to_changes(self, parsed: AddressForm) -> dict:
        return {
            "address_street": parsed.address1,
            "address_zip": parsed.postcode,
            "address_city": parsed.city,
        }

    def from_entity(self, entity: Any) -> dict:
        return {attr: getattr(entity, attr, None) for attr in self._ATTRS}

    def validation_message(self, error: ValueError) -> str:
        if isinstance(error, ValidationError):
            return "; ".join(e["msg"].removeprefix("Value error, ") for e in error.errors())
        return super().validation_message(error)


class CompanyDetailsEditor:
    """
    Local, possibly stale copy of one company for a single page view.
    ``company`` is overwritten with the server's echo after every confirmed
    mutation; concurrent edits from other sessions are never reconciled.
    """

    def __init__(
        self,
        client: ApiClient,
        session: Session,
        company: Company,
        notifier: Optional[Notifier] = None,
        sidebar_views: Optional[list[SidebarView]] = None,
    ):
        self._client = client
        self._session = session
        self._notifier = notifier or LoggingNotifier()
        self.company = company

        self.fields: dict[str, EditableField] = {
            spec.name: EditableField(
                spec.name,
                getattr(company, spec.name),
                label=spec.label,
                noun=spec.noun,
                parse=spec.parse,
                notifier=self._notifier,
            )
            for spec in COMPANY_FIELDS
        }
        self.fields["address"] = AddressField(company, self._notifier)

        self.account_owners: RelationList[AccountOwner] = RelationList(company.account_owners)
        self.opportunities: RelationList[Opportunity] = RelationList(company.opportunities)
        self.people: RelationList[Person] = RelationList(company.people)
        self.favorite: Optional[SidebarView] = self.find_favorite(sidebar_views or [])

    def field(self, name: str) -> EditableField:
        try:
            return self.fields[name]
        except KeyError:
            raise ValueError(f"Unknown field: {name}. Available: {list(self.fields)}") from None

    def info_items(self) -> list[InfoItem]:
        return company_info_items(self.company)

    # Favorite: a saved sidebar view pointing at this company's page

    @property
    def page_url(self) -> str:
        return f"/company/{self.company.uuid}"

    def find_favorite(self, views: list[SidebarView]) -> Optional[SidebarView]:
        return next((v for v in views if v.url == self.page_url), None)

    @property
    def is_favorite(self) -> bool:
        return self.favorite is not None

    @property
    def favorite_id(self) -> Optional[str]:
        """uuid of the sidebar view, used to unfavorite."""
        return self.favorite.uuid if self.favorite else None

    def refresh_favorite(self) -> bool:
        """
        Look up favorite status from the user's sidebar views.
        Returns False when the views could not be loaded; the previous status is kept.
        """
        views = get_sidebar_views(self._client, self._session)
        if views.ok:
            self.favorite = self.find_favorite(views.value)
            return True
        if views.error is ErrorKind.NOT_FOUND:
            self.favorite = None
            return True
        logger.error("Error loading sidebar views: %s", views.error)
        return False

    def _update_company(self, changes: dict) -> ActionResult[Company]:
        result = update_company(self._client, self._session, self.company.uuid, changes)
        if result.ok:
            echoed = {k: getattr(result.value, k, None) for k in changes}
            self.company = self.company.model_copy(update=echoed)
        return result

    # Field edits

    def begin_edit(self, name: str) -> None:
        self.field(name).begin_edit()

    def set_draft(self, name: str, draft: Any) -> None:
        self.field(name).set_draft(draft)

    def cancel(self, name: str) -> None:
        self.field(name).cancel()

    def submit(self, name: str) -> bool:
        return self.field(name).submit(self._update_company)

    # Account owners

    def add_owner(self, owner: AccountOwner) -> bool:
        """Assign an owner; a no-op when one with the same id is already listed."""
        if owner.id in self.account_owners:
            return False
        result = add_account_owner(self._client, self._session, self.company.uuid, owner.id)
        if not result.ok:
            self._notifier.error("Kunne ikke legge til kontoansvarlig")
            return False
        self.account_owners.add(owner)
        self._notifier.success("Kontoansvarlig lagt til")
        return True

    def remove_owner(self, owner_id: int) -> bool:
        removed = self.account_owners.remove(
            owner_id,
            lambda owner: remove_account_owner(self._client, self._session, self.company.uuid, owner.id),
        )
        if removed:
            self._notifier.success("Kontoansvarlig fjernet")
        else:
            self._notifier.error("Kunne ikke fjerne kontoansvarlig")
        return removed

    # Opportunities and people: membership lives on the related record's ``companies``

    def _with_company(self, company_ids: list[int]) -> list[int]:
        if self.company.id is None or self.company.id in company_ids:
            return list(company_ids)
        return [*company_ids, self.company.id]

    def _without_company(self, company_ids: list[int]) -> list[int]:
        return [i for i in company_ids if i != self.company.id]

    def add_opportunity(self, opportunity: Opportunity) -> bool:
        if opportunity.id in self.opportunities:
            return False
        result = update_opportunity(
            self._client,
            self._session,
            opportunity.uuid,
            {"companies": self._with_company(opportunity.companies)},
        )
        if not result.ok:
            self._notifier.error("En feil oppstod under tilknytning av mulighet")
            return False
        self.opportunities.add(result.value)
        self._notifier.success(f"{opportunity.name} lagt til i muligheter")
        return True

    def remove_opportunity(self, opportunity_id: int) -> bool:
        """Detach an opportunity from this company, then hide it."""
        opportunity = self.opportunities.find(opportunity_id)
        removed = opportunity is not None and self.opportunities.remove(
            opportunity_id,
            lambda opp: update_opportunity(
                self._client,
                self._session,
                opp.uuid,
                {"companies": self._without_company(opp.companies)},
            ),
        )
        if removed:
            self._notifier.success(f"{opportunity.name} fjernet fra muligheter")
        else:
            logger.error("Error removing opportunity %s", opportunity_id)
            self._notifier.error("En feil oppstod under fjerning av mulighet")
        return removed

    def add_person(self, person: Person) -> bool:
        if person.id in self.people:
            return False
        result = update_person(
            self._client,
            self._session,
            person.uuid,
            {"companies": self._with_company(person.companies)},
        )
        if not result.ok:
            self._notifier.error("En feil oppstod under tilknytning av person")
            return False
        self.people.add(result.value)
        self._notifier.success(f"{person.name} lagt til i personer")
        return True

    def remove_person(self, person_id: int) -> bool:
        """Detach a person from this company, then hide them."""
        person = self.people.find(person_id)
        removed = person is not None and self.people.remove(
            person_id,
            lambda p: update_person(
                self._client,
                self._session,
                p.uuid,
                {"companies": self._without_company(p.companies)},
            ),
        )
        if removed:
            self._notifier.success(f"{person.name} fjernet fra personer")
        else:
            logger.error("Error removing person %s", person_id)
            self._notifier.error("En feil oppstod under fjerning av person")
        return removed
