"""Detail card rows for a company, with Norwegian date and link formatting."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

from citadel_crm.models.entities import Company

EMPTY = "Tom"

_MONTHS_NB = (
    "januar",
    "februar",
    "mars",
    "april",
    "mai",
    "juni",
    "juli",
    "august",
    "september",
    "oktober",
    "november",
    "desember",
)


@dataclass(frozen=True)
class InfoItem:
    """One labelled row on the detail card."""

    label: str
    value: str
    display_value: Optional[str] = None
    is_link: bool = False
    editable: bool = False
    field: Optional[str] = None  # editor field name behind the row

    @property
    def text(self) -> str:
        return self.display_value if self.display_value is not None else self.value


def extract_domain(url: Optional[str]) -> str:
    """Host part of a URL without ``www.``; tolerates a missing scheme."""
    if not url:
        return ""
    parsed = urlparse(url if "//" in url else f"//{url}")
    host = parsed.netloc or parsed.path.split("/")[0]
    return host.removeprefix("www.")


def format_date(value: Optional[datetime]) -> str:
    """``5. mars 2024``"""
    if value is None:
        return ""
    return f"{value.day}. {_MONTHS_NB[value.month - 1]} {value.year}"


def _plural(n: int, one: str, many: str) -> str:
    return f"{n} {one if n == 1 else many}"


def time_ago(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Relative time with suffix, e.g. ``for 3 dager siden`` / ``om 2 timer``."""
    if value is None:
        return ""
    now = now or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - value).total_seconds()
    future = seconds < 0
    seconds = abs(seconds)
    minutes = round(seconds / 60)
    hours = round(seconds / 3600)
    days = round(seconds / 86400)

    if seconds < 30:
        distance = "mindre enn ett minutt"
    elif minutes < 45:
        distance = "ett minutt" if minutes <= 1 else f"{minutes} minutter"
    elif hours < 24:
        distance = "omtrent " + ("én time" if hours <= 1 else f"{hours} timer")
    elif days < 30:
        distance = "én dag" if days <= 1 else f"{days} dager"
    elif days < 365:
        months = round(days / 30)
        distance = "én måned" if months <= 1 else _plural(months, "måned", "måneder")
    else:
        years = days // 365
        distance = "omtrent " + ("ett år" if years <= 1 else f"{years} år")

    return f"om {distance}" if future else f"for {distance} siden"


def _link_item(label: str, url: Optional[str], field: str) -> InfoItem:
    return InfoItem(
        label=label,
        value=url or "",
        display_value=extract_domain(url) if url else EMPTY,
        is_link=True,
        editable=True,
        field=field,
    )


def _number(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def company_info_items(company: Company, now: Optional[datetime] = None) -> list[InfoItem]:
    """Rows shown on the company card, in display order."""
    address = f"{company.address_street or ''}, {company.address_zip or ''} {company.address_city or ''}"
    return [
        InfoItem("Org.nr", company.orgnr or "", editable=True, field="orgnr"),
        InfoItem("Adresse", address.strip(), editable=True, field="address"),
        InfoItem("ARR", f"{_number(company.arr)} NOK", editable=True, field="arr"),
        InfoItem(
            "Opprettet",
            format_date(company.date_created),
            display_value=time_ago(company.date_created, now),
        ),
        _link_item("Nettside", company.url, "url"),
        InfoItem("Ansatte", _number(company.num_employees), editable=True, field="num_employees"),
        _link_item("LinkedIn", company.some_linked, "some_linked"),
        InfoItem(
            "Sist kontaktet",
            format_date(company.last_contacted),
            display_value=time_ago(company.last_contacted, now),
        ),
        _link_item("Twitter", company.some_twitter, "some_twitter"),
    ]
