from babel.numbers import format_decimal

DEFAULT_LOCALE = 'en_US'


def format_count(count, locale=DEFAULT_LOCALE):
    """Thousands-grouped count for display, e.g. 4821 -> '4,821' in en_US"""
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"count must be an int, got {type(count).__name__}")
    return format_decimal(count, locale=locale)
