"""
Price coercion and dedupe-key helpers for aggregated listings.
"""
import math
import re
from typing import Optional, Union

_NON_PRICE_CHARS = re.compile(r"[^\d.]")


def coerce_price(price) -> Optional[Union[int, float]]:
    """
    Turn a provider price into a number.

    Args:
        price: Number, price string or None

    Returns:
        The number, or None if no number can be read from it

    Examples:
        >>> coerce_price("₹1,299.00")
        1299.0
        >>> coerce_price(499)
        499
        >>> coerce_price("Price on request") is None
        True
    """
    if isinstance(price, bool):
        return None
    if isinstance(price, (int, float)):
        return None if isinstance(price, float) and math.isnan(price) else price
    if not isinstance(price, str):
        return None

    digits = _NON_PRICE_CHARS.sub("", price)
    if not digits:
        return None

    try:
        value = float(digits)
    except ValueError:
        # e.g. "1.299.00" or a lone "."
        return None

    return None if math.isnan(value) else value


def strip_query_string(url: Optional[str]) -> str:
    """
    Drop everything from the first "?" on.

    Examples:
        >>> strip_query_string("https://shop.example/p/1?ref=abc")
        'https://shop.example/p/1'
    """
    if not url or not isinstance(url, str):
        return ""
    return url.split("?", 1)[0].strip()


def dedupe_key(link: Optional[str], title: Optional[str]) -> str:
    """
    Key used to collapse duplicate listings: the link without its query
    string, or the title when there is no usable link.
    """
    key = strip_query_string(link)
    if key:
        return key
    if isinstance(title, str):
        return title.strip()
    return ""
