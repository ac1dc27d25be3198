"""Domain actions: one client call shaped for one UI need. Actions never raise."""

from citadel_crm.actions.results import ActionResult, PageResult, total_pages

__all__ = ["ActionResult", "PageResult", "total_pages"]
