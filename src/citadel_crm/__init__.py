"""Client and UI state layer for the Citadel CRM internal API."""

__version__ = "0.1.0"
