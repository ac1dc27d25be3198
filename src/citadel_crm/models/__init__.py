"""Data models for CRM entities and normalized API responses."""

from citadel_crm.models.entities import (
    AccountOwner,
    Company,
    Opportunity,
    Person,
    SidebarView,
    Task,
    TaskDetails,
    User,
    WorkspaceRef,
)
from citadel_crm.models.envelope import Envelope, ErrorKind, Pagination

__all__ = [
    "AccountOwner",
    "Company",
    "Envelope",
    "ErrorKind",
    "Opportunity",
    "Pagination",
    "Person",
    "SidebarView",
    "Task",
    "TaskDetails",
    "User",
    "WorkspaceRef",
]
