"""Shared fixtures for pvenom tests."""

from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests

from pvenom.models import ClusterNode, Container, Session, VirtualMachine

GIB = 1024 ** 3


def make_response(status: int = 200, payload: Any = None,
                  invalid_json: bool = False) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


def route(responses: Dict[str, Any]):
    """side_effect for http.get that answers by URL path suffix.

    A value may be a response or an exception to raise. Unknown paths get a 500.
    """
    def _get(url: str, **kwargs):
        for suffix, outcome in responses.items():
            if url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return make_response(500)
    return _get


@pytest.fixture
def http() -> MagicMock:
    """A mocked requests.Session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def session() -> Session:
    return Session(
        base_url="https://10.0.0.5:8006",
        ticket="PVE:root@pam:TICKET",
        csrf_token="CSRF:TOKEN",
        username="root@pam",
    )


@pytest.fixture
def full_node() -> ClusterNode:
    """A node with every optional field populated."""
    return ClusterNode(
        name="tatooine",
        status="online",
        address="10.0.0.11",
        cpu=0.153,
        cores=8,
        memory_used=int(12.45 * GIB),
        memory_total=32 * GIB,
        disk_used=int(45.23 * GIB),
        disk_total=500 * GIB,
        uptime=15 * 86400 + 5 * 3600 + 42,
    )


@pytest.fixture
def bare_node() -> ClusterNode:
    """A node with no optional fields at all."""
    return ClusterNode(name="hoth", status="offline")


@pytest.fixture
def guests():
    return [
        VirtualMachine(vmid=100, name="database-prod", status="running",
                       address="192.168.1.20", cpus=4, max_memory=8 * GIB,
                       max_disk=64 * GIB, uptime=2 * 86400),
        Container(vmid=101, name="web-frontend", status="running", cpus=2,
                  max_memory=2 * GIB, max_disk=8 * GIB, uptime=86400),
        VirtualMachine(vmid=102, name="backup-server", status="stopped"),
    ]


def node_payload(name: str, **fields) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"node": name, "status": "online"}
    entry.update(fields)
    return entry


def ticket_payload(ticket: Optional[str] = "PVE:root@pam:TICKET",
                   token: Optional[str] = "CSRF:TOKEN") -> Dict[str, Any]:
    data: Dict[str, Any] = {"username": "root@pam"}
    if ticket is not None:
        data["ticket"] = ticket
    if token is not None:
        data["CSRFPreventionToken"] = token
    return {"data": data}
