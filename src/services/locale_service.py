"""Locale-aware formatting of money and dates for reports and the roster.

Single source of truth for currency and number formatting. Uses babel; the
locale comes from settings (LOCALE env var, default en_KE, Kenyan shilling).

Example:
    >>> format_amount(Decimal("15000"), include_symbol=False)
    '15,000'
"""

import logging
from datetime import date, datetime
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import (
    format_currency as babel_format_currency,
)
from babel.numbers import (
    format_decimal as babel_format_decimal,
)
from babel.numbers import (
    get_currency_symbol as babel_get_currency_symbol,
)
from babel.numbers import (
    get_territory_currencies,
)

from src.services.config import get_settings

logger = logging.getLogger(__name__)

# Fallbacks if LOCALE is invalid or has no territory currency
DEFAULT_LOCALE = "en_KE"
DEFAULT_CURRENCY = "KES"


def get_locale() -> str:
    """Configured locale, validated against babel, with fallback.

    Returns:
        Valid locale string (e.g., 'en_KE')
    """
    locale_str = get_settings().locale
    try:
        Locale.parse(locale_str)
        return locale_str
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Invalid LOCALE '%s': %s. Falling back to '%s'", locale_str, e, DEFAULT_LOCALE)
        return DEFAULT_LOCALE


def get_currency_code() -> str:
    """ISO 4217 currency code derived from the locale territory (e.g., 'KES')."""
    locale_str = get_locale()
    try:
        territory = Locale.parse(locale_str).territory
        if territory:
            currencies = get_territory_currencies(territory)
            if currencies:
                return currencies[0]
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Could not derive currency from locale '%s': %s", locale_str, e)
    return DEFAULT_CURRENCY


def get_currency_symbol() -> str:
    return babel_get_currency_symbol(get_currency_code(), locale=get_locale())


def format_amount(amount: Decimal | int | float, include_symbol: bool = True) -> str:
    """Format a monetary amount according to the locale.

    Args:
        amount: Amount to format
        include_symbol: Whether to include the currency symbol (default True)

    Returns:
        Formatted string (e.g., 'Ksh 15,000.00', or '15,000' without symbol)
    """
    value = Decimal(str(amount))
    if include_symbol:
        return babel_format_currency(value, get_currency_code(), locale=get_locale())
    return babel_format_decimal(value, locale=get_locale())


def format_paid_date(value: datetime | date | None, format: str = "medium") -> str:
    """Format a receipt paid date for display; 'N/A' when unknown."""
    if value is None:
        return "N/A"
    if isinstance(value, datetime):
        value = value.date()
    return babel_format_date(value, format=format, locale=get_locale())


def get_locale_info() -> dict:
    """Current locale configuration for debugging/display."""
    return {
        "locale": get_locale(),
        "currency_code": get_currency_code(),
        "currency_symbol": get_currency_symbol(),
    }


__all__ = [
    "DEFAULT_LOCALE",
    "get_locale",
    "get_currency_code",
    "get_currency_symbol",
    "format_amount",
    "format_paid_date",
    "get_locale_info",
]
