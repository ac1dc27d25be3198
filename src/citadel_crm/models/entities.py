"""CRM entity models as returned by the Citadel internal API.

Every entity carries two identifiers:
- ``uuid``: string key used in URL paths (``/companies/{uuid}/``)
- ``id``: integer surrogate key used inside relation lists (``companies``,
  ``account_owners``) and as the key of list items in the UI state objects

Models allow extra fields so unknown remote attributes survive a round trip.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


class CrmEntity(BaseModel):
    """Common base: both identifiers, unknown fields kept."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    uuid: Optional[str] = None


def _empty_text(value: Any) -> Any:
    return "" if value is None else value


def _empty_list(value: Any) -> Any:
    return [] if value is None else value


# Remote nulls read as empty
Text = Annotated[str, BeforeValidator(_empty_text)]
IdList = Annotated[list[int], BeforeValidator(_empty_list)]


class WorkspaceRef(BaseModel):
    """Workspace summary embedded in a user record (``company_details``)."""

    model_config = ConfigDict(extra="allow")

    uuid: Optional[str] = None
    name: Optional[str] = None


class User(CrmEntity):
    """CRM user record, looked up by the identity provider's user id."""

    clerk_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    company_details: Optional[WorkspaceRef] = None

    @property
    def workspace_id(self) -> Optional[str]:
        if self.company_details is None:
            return None
        return self.company_details.uuid or None


class AccountOwner(CrmEntity):
    """A user assigned responsibility for a company."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or (self.email or "")


class Person(CrmEntity):
    name: Text = ""
    email: Optional[str] = None
    companies: IdList = Field(default_factory=list)

class Opportunity(CrmEntity):
    name: Text = ""
    stage: Optional[str] = None
    companies: IdList = Field(default_factory=list)

class Company(CrmEntity):
    """Company record with its associated owners, opportunities and people."""

    name: Text = ""
    orgnr: Optional[str] = Field(default=None, description="Organization (tax) number")
    address_street: Optional[str] = None
    address_zip: Optional[str] = None
    address_city: Optional[str] = None
    arr: Optional[float] = Field(default=None, description="Annual recurring revenue")
    num_employees: Optional[int] = None
    url: Optional[str] = None
    some_linked: Optional[str] = None
    some_twitter: Optional[str] = None
    date_created: Optional[datetime] = None
    last_contacted: Optional[datetime] = None

    account_owners: list[AccountOwner] = Field(default_factory=list)
    opportunities: list[Opportunity] = Field(default_factory=list)
    people: list[Person] = Field(default_factory=list)

    @field_validator("account_owners", "opportunities", "people", mode="before")
    @classmethod
    def _expand_bare_ids(cls, value: Any) -> Any:
        """Write endpoints echo relations as bare ids; lift them to objects."""
        if value is None:
            return []
        if isinstance(value, list):
            return [{"id": v} if isinstance(v, int) else v for v in value]
        return value


class Task(CrmEntity):
    title: Text = ""
    description: Optional[str] = None
    status: Optional[str] = None
    due_date: Optional[datetime] = None


class TaskDetails(Task):
    """Task with its related records expanded."""

    companies: list[Company] = Field(default_factory=list)
    people: list[Person] = Field(default_factory=list)
    opportunities: list[Opportunity] = Field(default_factory=list)

    @field_validator("companies", "people", "opportunities", mode="before")
    @classmethod
    def _null_relations(cls, value: Any) -> Any:
        return _empty_list(value)


class SidebarView(CrmEntity):
    name: Text = ""
    url: Optional[str] = None
    icon: Optional[str] = None
