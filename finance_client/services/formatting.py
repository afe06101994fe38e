"""Display formatting for money and percentages."""

import math
from decimal import Decimal

import structlog
from babel import default_locale
from babel.core import UnknownLocaleError
from babel.numbers import format_currency as babel_format_currency

logger = structlog.get_logger()

CURRENCY = "USD"
PLACEHOLDER = "—"
FALLBACK_LOCALE = "en_US"


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def format_currency(value, currency: str = CURRENCY, locale: str | None = None) -> str:
    """Format ``value`` as money in the host locale.

    Falls back to ``$1234.50`` when the locale cannot format the currency.
    """
    if not _is_number(value):
        return PLACEHOLDER
    try:
        return babel_format_currency(
            value,
            currency,
            locale=locale or default_locale("LC_MONETARY") or FALLBACK_LOCALE,
        )
    except (ValueError, TypeError, UnknownLocaleError) as e:
        logger.debug("currency_format_failed", currency=currency, locale=locale, error=str(e))
        return f"${float(value):.2f}"


def format_percent(value) -> str:
    """One-decimal number; the caller appends the unit."""
    if not _is_number(value):
        return PLACEHOLDER
    return f"{float(value):.1f}"
