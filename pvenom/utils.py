# utils.py

"""Utility functions for pvenom."""

import logging
from typing import Optional

import requests
import urllib3

from .config import (
    BYTES_PER_GIB, SECONDS_PER_DAY, SECONDS_PER_HOUR, NOT_AVAILABLE,
    LOG_FORMAT, LOG_DATE_FORMAT
)

def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging on stderr.

    pvenom stays quiet unless something fails; --verbose shows every request.
    """
    log_level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )
    # urllib3 is chatty at DEBUG and duplicates our own request logging
    logging.getLogger("urllib3").setLevel(logging.WARNING)

def get_http_session(secure: bool = True) -> requests.Session:
    """
    Build the HTTP session shared by every request of one invocation.

    Args:
        secure: verify TLS certificates when True

    Returns:
        A requests.Session with certificate verification configured
    """
    session = requests.Session()
    session.verify = secure
    if not secure:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    return session

def is_loopback(address: str) -> bool:
    return address.startswith("127.") or address.startswith("::1")

def bytes_to_gib(value: Optional[int], decimals: int) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value / BYTES_PER_GIB:.{decimals}f}"

def ceil_gib(value: Optional[int]) -> str:
    """Round a byte count up to whole GiB so usage is never understated."""
    if value is None:
        return NOT_AVAILABLE
    return str(-(-value // BYTES_PER_GIB))

def used_total_gib(used: Optional[int], total: Optional[int]) -> str:
    """Condensed "used/total" cell, both sides rounded up independently."""
    if used is None and total is None:
        return NOT_AVAILABLE
    return f"{ceil_gib(used)}/{ceil_gib(total)}"

def fraction_to_percent(value: Optional[float], decimals: int) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value * 100:.{decimals}f}"

def uptime_days(seconds: Optional[int]) -> str:
    if seconds is None:
        return NOT_AVAILABLE
    return f"{seconds / SECONDS_PER_DAY:.1f}"

def uptime_days_hours(seconds: Optional[int]) -> str:
    """Format uptime as "<days>d <hours>h"."""
    if seconds is None:
        return NOT_AVAILABLE
    days = seconds // SECONDS_PER_DAY
    hours = (seconds % SECONDS_PER_DAY) // SECONDS_PER_HOUR
    return f"{days}d {hours}h"

def or_na(value) -> str:
    return NOT_AVAILABLE if value is None else str(value)
