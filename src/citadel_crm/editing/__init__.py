"""UI state: inline field edits, relation lists, paged tables and card rows."""

from citadel_crm.editing.company_editor import AddressForm, CompanyDetailsEditor
from citadel_crm.editing.display import InfoItem, company_info_items
from citadel_crm.editing.field import EditableField, FieldState, InvalidTransition
from citadel_crm.editing.notifications import LoggingNotifier, Notifier, RecordingNotifier
from citadel_crm.editing.relations import RelationList
from citadel_crm.editing.table import PagedTable

__all__ = [
    "AddressForm",
    "CompanyDetailsEditor",
    "EditableField",
    "FieldState",
    "InfoItem",
    "InvalidTransition",
    "LoggingNotifier",
    "Notifier",
    "PagedTable",
    "RecordingNotifier",
    "RelationList",
    "company_info_items",
]
