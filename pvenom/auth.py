# auth.py

"""Ticket based authentication against the Proxmox API."""

import logging

import requests

from .config import TICKET_PATH, REQUEST_TIMEOUT
from .exceptions import AuthenticationError, DecodeError, TransportError
from .models import Session

logger = logging.getLogger(__name__)

def authenticate(http: requests.Session, base_url: str, username: str,
                 password: str, timeout: float = REQUEST_TIMEOUT) -> Session:
    """
    Exchange credentials for a session ticket and CSRF token.

    Args:
        http: HTTP session used for the request
        base_url: scheme and host of the cluster controller
        username: Proxmox user, e.g. root@pam
        password: the user's password
        timeout: seconds to wait for the controller

    Returns:
        The authenticated Session

    Raises:
        TransportError: the controller could not be reached
        AuthenticationError: the credentials were rejected
        DecodeError: the response carried no ticket or token
    """
    url = f"{base_url}{TICKET_PATH}"
    logger.debug(f"Requesting authentication ticket for user: {username}")

    try:
        response = http.post(
            url,
            data={"username": username, "password": password},
            timeout=timeout
        )
    except requests.RequestException as e:
        raise TransportError(f"Failed to reach {url}: {e}") from e

    if not response.ok:
        logger.debug(f"Authentication failed with status: {response.status_code}")
        raise AuthenticationError(response.status_code)

    try:
        data = response.json()["data"]
        ticket = data["ticket"]
        csrf_token = data["CSRFPreventionToken"]
    except (ValueError, KeyError, TypeError) as e:
        raise DecodeError(f"Failed to parse authentication response: {e}") from e

    if not isinstance(ticket, str) or not isinstance(csrf_token, str):
        raise DecodeError("Authentication response has no usable ticket")

    session_user = data.get("username", username)
    logger.debug(f"Received authentication ticket for user: {session_user}")
    return Session(
        base_url=base_url,
        ticket=ticket,
        csrf_token=csrf_token,
        username=session_user
    )
