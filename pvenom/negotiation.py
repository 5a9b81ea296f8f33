# negotiation.py

"""Pick HTTPS or HTTP for a controller given without a scheme."""

import logging

import requests

from .auth import authenticate
from .config import PROBE_TIMEOUT
from .exceptions import ConnectivityError, PveNomError

logger = logging.getLogger(__name__)

SCHEMES = ("https", "http")

def probe(http: requests.Session, base_url: str, username: str, password: str) -> bool:
    """Try a short-timeout login against base_url; the ticket is thrown away."""
    logger.debug(f"Testing connection to {base_url}")
    try:
        authenticate(http, base_url, username, password, timeout=PROBE_TIMEOUT)
    except PveNomError as e:
        logger.debug(f"Connection test failed: {e}")
        return False
    logger.debug("Connection test successful")
    return True

def resolve_base_url(http: requests.Session, controller: str, username: str,
                     password: str) -> str:
    """
    Return the base URL to talk to the controller with.

    An address that already names a scheme is used as-is. Otherwise HTTPS is
    tried first and HTTP only if HTTPS fails, one probe at a time.

    Raises:
        ConnectivityError: neither scheme worked
    """
    if controller.lower().startswith(("http://", "https://")):
        logger.debug(f"Protocol already specified in controller address: {controller}")
        return controller

    for scheme in SCHEMES:
        base_url = f"{scheme}://{controller}"
        logger.info(f"Attempting {scheme.upper()} connection to {controller}...")
        if probe(http, base_url, username, password):
            if scheme == "http":
                logger.warning("HTTP connection successful - consider using HTTPS in production!")
            return base_url
        logger.info(f"{scheme.upper()} connection to {controller} failed")

    raise ConnectivityError(f"Could not connect to {controller} via HTTPS or HTTP")
