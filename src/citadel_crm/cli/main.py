"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page-size", type=int, default=10, help="Rows per page (default: 10)")
    parser.add_argument("--page", type=int, default=1, help="1-based page number (default: 1)")


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="citadel-crm", description="Citadel CRM command line client")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (base_url, lock, key, timeout); default: environment",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # companies
    companies_parser = subparsers.add_parser("companies", help="Companies of your workspace")
    companies_sub = companies_parser.add_subparsers(dest="action", required=True)
    _add_paging(companies_sub.add_parser("list", help="List companies"))
    search_parser = companies_sub.add_parser("search", help="Search companies by name")
    search_parser.add_argument("query", help="Name to search for")
    _add_paging(search_parser)
    show_parser = companies_sub.add_parser("show", help="Show one company with details")
    show_parser.add_argument("uuid", help="Company uuid")
    show_parser.add_argument(
        "--card",
        action="store_true",
        help="Print the detail card rows instead of raw JSON",
    )

    # people
    people_parser = subparsers.add_parser("people", help="People of your workspace")
    people_sub = people_parser.add_subparsers(dest="action", required=True)
    _add_paging(people_sub.add_parser("list", help="List people"))

    # opportunities
    opp_parser = subparsers.add_parser("opportunities", help="Opportunities")
    opp_sub = opp_parser.add_subparsers(dest="action", required=True)
    opp_list = opp_sub.add_parser("list", help="List opportunities")
    opp_list.add_argument("--mine", action="store_true", help="Only those assigned to you")
    _add_paging(opp_list)

    # tasks
    tasks_parser = subparsers.add_parser("tasks", help="Tasks")
    tasks_sub = tasks_parser.add_subparsers(dest="action", required=True)
    tasks_list = tasks_sub.add_parser("list", help="List tasks")
    tasks_list.add_argument("--mine", action="store_true", help="Only those assigned to you")
    _add_paging(tasks_list)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "companies":
        _run_companies(args)
    elif args.command == "people":
        _run_people(args)
    elif args.command == "opportunities":
        _run_opportunities(args)
    elif args.command == "tasks":
        _run_tasks(args)
    else:
        parser.print_help()


def _client_and_session(args: argparse.Namespace):
    """Client from --config or the environment; session from CITADEL_USER_ID."""
    from citadel_crm.client import ApiClient, Session
    from citadel_crm.config import ClientSettings

    settings = ClientSettings.from_yaml(args.config) if args.config else ClientSettings.from_env()
    session = Session.from_env()
    if not session.is_active:
        raise SystemExit("No active session. Set CITADEL_USER_ID.")
    return ApiClient(settings), session


def _fail(what: str, result) -> None:
    error = result.error.value if result.error else "unknown"
    print(f"{what} failed: {error} (status={result.status})", file=sys.stderr)
    raise SystemExit(1)


def _print_page(result, what: str) -> None:
    if not result.ok:
        _fail(what, result)
    output = {
        "page": result.page,
        "page_size": result.page_size,
        "total_count": result.total_count,
        "total_pages": result.total_pages,
        "results": [item.model_dump(mode="json") for item in result.data],
    }
    print(json.dumps(output, indent=2, default=str))


def _run_companies(args: argparse.Namespace) -> None:
    """Run companies command."""
    from citadel_crm.actions.companies import get_companies, get_company_details, search_companies
    from citadel_crm.editing import company_info_items

    client, session = _client_and_session(args)
    with client:
        if args.action == "list":
            _print_page(get_companies(client, session, args.page_size, args.page), "companies list")
        elif args.action == "search":
            result = search_companies(client, session, args.query, args.page_size, args.page)
            _print_page(result, "companies search")
        elif args.action == "show":
            result = get_company_details(client, session, args.uuid)
            if not result.ok:
                _fail("companies show", result)
            if args.card:
                for item in company_info_items(result.value):
                    print(f"{item.label + ':':<16}{item.text}")
            else:
                print(json.dumps(result.value.model_dump(mode="json"), indent=2, default=str))


def _run_people(args: argparse.Namespace) -> None:
    """Run people command."""
    from citadel_crm.actions.people import get_all_people

    client, session = _client_and_session(args)
    with client:
        _print_page(get_all_people(client, session, args.page_size, args.page), "people list")


def _run_opportunities(args: argparse.Namespace) -> None:
    """Run opportunities command."""
    from citadel_crm.actions.opportunities import get_all_opportunities, get_user_opportunities

    client, session = _client_and_session(args)
    fetch = get_user_opportunities if args.mine else get_all_opportunities
    with client:
        _print_page(fetch(client, session, args.page_size, args.page), "opportunities list")


def _run_tasks(args: argparse.Namespace) -> None:
    """Run tasks command."""
    from citadel_crm.actions.tasks import get_all_tasks, get_user_tasks

    client, session = _client_and_session(args)
    fetch = get_user_tasks if args.mine else get_all_tasks
    with client:
        _print_page(fetch(client, session, args.page_size, args.page), "tasks list")


if __name__ == "__main__":
    main()
