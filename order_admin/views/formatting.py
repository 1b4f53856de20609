from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from order_admin.core.config import settings
from order_admin.models.order_models import as_number

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
INVALID_DATE = "Invalid Date"


class FormatError(ValueError):
    """Valeur de date illisible."""
    pass


def format_amount(value: Any) -> str:
    """Montant à deux décimales, "0.00" si ce n'est pas un nombre."""
    number = as_number(value)
    return f"{number:.2f}" if number is not None else "0.00"


def format_money(value: Any) -> str:
    return f"${format_amount(value)}"


def parse_date(value: Any) -> datetime:
    """
    Accepte un datetime, un timestamp en millisecondes ou une chaîne ISO-8601
    (suffixe "Z" compris). Les dates naïves sont considérées en UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif as_number(value) is not None:
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise FormatError(f"timestamp hors limites: {value!r}") from e
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise FormatError(f"date illisible: {value!r}") from e
    else:
        raise FormatError(f"type de date non supporté: {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date(value: Any, tz: Optional[tzinfo] = None) -> str:
    """Date longue ("October 19, 2026"), "N/A" si absente, "Invalid Date" si illisible."""
    if value is None or value == "" or as_number(value) == 0:
        return NOT_AVAILABLE

    try:
        parsed = parse_date(value)
    except FormatError as e:
        logger.warning("date formatting error: %s", e)
        return INVALID_DATE

    local = parsed.astimezone(tz or ZoneInfo(settings.DISPLAY_TIMEZONE))
    return f"{local.strftime('%B')} {local.day}, {local.year}"
