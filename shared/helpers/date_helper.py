import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Optional
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse

from shared.core.config import settings

logger = logging.getLogger(__name__)

MONTHS_PTBR = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]

WEEKDAYS_PTBR = [
    "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
    "sexta-feira", "sábado", "domingo",
]


def civil_timezone() -> ZoneInfo:
    return ZoneInfo(settings.CIVIL_TIMEZONE)


def parse_stored_date(value: Any) -> Optional[date]:
    """Stored contract/payment dates come as date, datetime or ISO text."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return isoparse(str(value)).date()
    except ValueError:
        logger.warning("Could not parse stored date %r", value)
        return None


def civil_date_of(value: Any) -> Optional[datetime]:
    """
    Display instant for a stored date.

    Workaround for the storage/timezone defect: stored dates are shifted
    back DATE_COMPENSATION_DAYS and pinned to civil noon. Every screen and
    document showing a stored date must go through this function.
    """
    stored = parse_stored_date(value)
    if stored is None:
        return None
    shifted = stored - timedelta(days=settings.DATE_COMPENSATION_DAYS)
    return datetime.combine(shifted, time(12, 0), tzinfo=civil_timezone())


def format_date_short(value: Any) -> str:
    civil = civil_date_of(value)
    return civil.strftime("%d/%m/%Y") if civil else ""


def month_name(value: Any) -> str:
    civil = civil_date_of(value)
    return MONTHS_PTBR[civil.month - 1].capitalize() if civil else ""


def year_of(value: Any) -> Optional[int]:
    civil = civil_date_of(value)
    return civil.year if civil else None


def day_of(value: Any) -> Optional[int]:
    civil = civil_date_of(value)
    return civil.day if civil else None


# ---- wall clock (macros) ----

def now_civil() -> datetime:
    return datetime.now(civil_timezone())


def format_long_date(moment: datetime) -> str:
    # "sábado, 17 de outubro de 2026"
    return (
        f"{WEEKDAYS_PTBR[moment.weekday()]}, {moment.day} de "
        f"{MONTHS_PTBR[moment.month - 1]} de {moment.year}"
    )


def format_today_short(moment: datetime) -> str:
    return moment.strftime("%d/%m/%Y")


def format_time(moment: datetime) -> str:
    return moment.strftime("%H:%M")
