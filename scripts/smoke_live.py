#!/usr/bin/env python3
"""Quick live check of the client against the configured CRM API.

Run:
  CITADEL_USER_ID=user_123 poetry run python scripts/smoke_live.py            # first page of companies
  CITADEL_USER_ID=user_123 poetry run python scripts/smoke_live.py people     # first page of people
"""

import sys

from citadel_crm.actions.companies import get_companies
from citadel_crm.actions.people import get_all_people
from citadel_crm.actions.users import get_current_user
from citadel_crm.client import ApiClient, Session


def main() -> None:
    resource = sys.argv[1] if len(sys.argv) > 1 else "companies"
    session = Session.from_env()
    if not session.is_active:
        raise SystemExit("Set CITADEL_USER_ID first.")

    with ApiClient() as client:
        user = get_current_user(client, session)
        if not user.ok:
            raise SystemExit(f"User lookup failed: {user.error} (status={user.status})")
        print(f"Signed in as {user.value.email} (workspace {user.value.workspace_id})")

        fetch = get_all_people if resource == "people" else get_companies
        page = fetch(client, session, page_size=5, page=1)
        if not page.ok:
            raise SystemExit(f"Fetch failed: {page.error} (status={page.status})")
        print(f"Got {len(page.data)} of {page.total_count} {resource} ({page.total_pages} pages)")
        for i, item in enumerate(page.data, 1):
            print(f"  {i}. {item.name} [{item.uuid}]")


if __name__ == "__main__":
    main()
