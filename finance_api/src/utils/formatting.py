"""
Formatting and general-purpose helpers.

Currency and date output follows US English conventions
("$1,234.56", "Jan 5, 2024").
"""

import copy
import functools
import threading
import uuid
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

DateLike = Union[date, datetime, str]

# code -> (symbol, fraction digits)
CURRENCY_FORMATS: Dict[str, Tuple[str, int]] = {
    "USD": ("$", 2),
    "EUR": ("€", 2),
    "GBP": ("£", 2),
    "INR": ("₹", 2),
    "JPY": ("¥", 0),
    "CAD": ("CA$", 2),
    "AUD": ("A$", 2),
}


def format_currency(amount: float, currency: str = "USD") -> str:
    """
    Format an amount as currency.

    Args:
        amount: Amount to format
        currency: ISO 4217 currency code

    Returns:
        Formatted string, e.g. "$1,234.56" or "-$5.00"
    """
    code = currency.upper()
    symbol, digits = CURRENCY_FORMATS.get(code, (f"{code} ", 2))
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{digits}f}"


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, str):
        # fromisoformat only accepts a "Z" suffix from 3.11 on
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def format_date(value: DateLike) -> str:
    """Format as "Jan 5, 2024". Strings must be ISO 8601."""
    moment = _to_datetime(value)
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_datetime(value: DateLike) -> str:
    """Format as "Jan 5, 2024, 03:04 PM". Strings must be ISO 8601."""
    moment = _to_datetime(value)
    return f"{format_date(moment)}, {moment:%I:%M %p}"


def debounce(func: Callable[..., Any], wait: float) -> Callable[..., None]:
    """
    Delay calls to `func` until `wait` seconds pass without another call.

    Only the last call in a burst runs, with that call's arguments. The
    returned wrapper exposes cancel() to drop a pending call.
    """
    lock = threading.Lock()
    pending: Optional[threading.Timer] = None

    def cancel() -> None:
        nonlocal pending
        with lock:
            if pending is not None:
                pending.cancel()
                pending = None

    @functools.wraps(func)
    def debounced(*args: Any, **kwargs: Any) -> None:
        nonlocal pending
        with lock:
            if pending is not None:
                pending.cancel()
            pending = threading.Timer(wait, func, args=args, kwargs=kwargs)
            pending.daemon = True
            pending.start()

    debounced.cancel = cancel
    return debounced


def generate_id() -> str:
    """Generate a random identifier."""
    return uuid.uuid4().hex


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def deep_clone(obj: T) -> T:
    """Return a deep copy of `obj`; nested containers are not shared."""
    return copy.deepcopy(obj)
