# client.py

"""Read-only client for the Proxmox cluster API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import AUTH_COOKIE_NAME, NODES_PATH, REQUEST_TIMEOUT
from .exceptions import DecodeError, PveNomError, RequestError, TransportError
from .models import ClusterNode, Guest, GuestKind, Session, GUEST_CLASSES
from .utils import is_loopback

logger = logging.getLogger(__name__)


def _optional_int(entry: Dict[str, Any], key: str) -> Optional[int]:
    value = entry.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Field '{key}' is not an integer: {value!r}") from e


def _optional_float(entry: Dict[str, Any], key: str) -> Optional[float]:
    value = entry.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Field '{key}' is not a number: {value!r}") from e


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


class ProxmoxClient:
    """
    Fetches nodes and guests using an authenticated session.

    Required lookups raise on failure. Address lookups are best-effort and
    return None instead of raising.
    """

    def __init__(self, http: requests.Session, session: Session,
                 timeout: float = REQUEST_TIMEOUT):
        self.http = http
        self.session = session
        self.timeout = timeout

    def _get(self, path: str) -> Any:
        """GET path and return the 'data' member of the JSON body."""
        url = f"{self.session.base_url}{path}"
        logger.debug(f"GET {url}")

        try:
            response = self.http.get(
                url,
                headers={"Cookie": f"{AUTH_COOKIE_NAME}={self.session.ticket}"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Failed to send GET request to {path}: {e}") from e

        if not response.ok:
            logger.debug(f"GET {path} returned {response.status_code}")
            raise RequestError(response.status_code, path)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Failed to parse response from {path}: {e}") from e
        if not isinstance(body, dict) or "data" not in body:
            raise DecodeError(f"Response from {path} has no 'data' member")
        return body["data"]

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        data = self._get(path)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise DecodeError(f"Expected a list of objects from {path}")
        return data

    def list_nodes(self) -> List[ClusterNode]:
        logger.info("Fetching cluster nodes...")
        nodes = []
        for entry in self._get_list(NODES_PATH):
            if "node" not in entry:
                raise DecodeError("Node entry without a 'node' name")
            nodes.append(ClusterNode(
                name=str(entry["node"]),
                status=str(entry.get("status", "unknown")),
                address=entry.get("ip") or None,
                cpu=_optional_float(entry, "cpu"),
                cores=_optional_int(entry, "maxcpu"),
                memory_used=_optional_int(entry, "mem"),
                memory_total=_optional_int(entry, "maxmem"),
                disk_used=_optional_int(entry, "disk"),
                disk_total=_optional_int(entry, "maxdisk"),
                uptime=_optional_int(entry, "uptime"),
            ))
        logger.debug(f"Found {len(nodes)} node(s)")
        return nodes

    def node_detail(self, node: str) -> ClusterNode:
        """
        Fetch the extended status of one node.

        The status endpoint nests its figures, so they are flattened here.
        It only answers for online nodes, hence the fixed status.
        """
        logger.info(f"Fetching status for node '{node}'...")
        data = self._get(f"{NODES_PATH}/{node}/status")
        if not isinstance(data, dict):
            raise DecodeError(f"Expected an object from the status of node '{node}'")

        memory = _section(data, "memory")
        rootfs = _section(data, "rootfs")
        return ClusterNode(
            name=node,
            status="online",
            cpu=_optional_float(data, "cpu"),
            cores=_optional_int(_section(data, "cpuinfo"), "cpus"),
            memory_used=_optional_int(memory, "used"),
            memory_total=_optional_int(memory, "total"),
            disk_used=_optional_int(rootfs, "used"),
            disk_total=_optional_int(rootfs, "total"),
            uptime=_optional_int(data, "uptime"),
        )

    def node_address(self, node: str) -> Optional[str]:
        """First non-loopback interface address of a node, or None."""
        logger.debug(f"Fetching IP for node '{node}'...")
        try:
            interfaces = self._get_list(f"{NODES_PATH}/{node}/network")
        except PveNomError as e:
            logger.debug(f"Network lookup for node '{node}' failed: {e}")
            return None

        for interface in interfaces:
            address = interface.get("address")
            if isinstance(address, str) and address and not is_loopback(address):
                logger.debug(f"Found IP {address} for node '{node}'")
                return address

        logger.debug(f"No IP found for node '{node}'")
        return None

    def list_guests(self, node: str, kind: GuestKind) -> List[Guest]:
        logger.debug(f"Fetching {kind.label} guests for node '{node}'...")
        guest_class = GUEST_CLASSES[kind]
        guests = []
        for entry in self._get_list(f"{NODES_PATH}/{node}/{kind.value}"):
            vmid = _optional_int(entry, "vmid")
            if vmid is None or "name" not in entry:
                raise DecodeError(f"{kind.label} entry on node '{node}' lacks vmid or name")
            guests.append(guest_class(
                vmid=vmid,
                name=str(entry["name"]),
                status=str(entry.get("status", "")),
                address=entry.get("ip") or None,
                cpus=_optional_int(entry, "cpus"),
                max_memory=_optional_int(entry, "maxmem"),
                max_disk=_optional_int(entry, "maxdisk"),
                uptime=_optional_int(entry, "uptime"),
            ))
        logger.debug(f"Found {len(guests)} {kind.label} guest(s) on node '{node}'")
        return guests

    def guest_address(self, node: str, vmid: int, kind: GuestKind) -> Optional[str]:
        """
        Ask the in-guest agent for the guest's first non-loopback address.

        Guests without a running agent are common, so any failure just
        means no address.
        """
        logger.debug(f"Fetching IP for {kind.label} {vmid} on node '{node}'...")
        path = f"{NODES_PATH}/{node}/{kind.value}/{vmid}/agent/network-get-interfaces"
        try:
            data = self._get(path)
        except PveNomError as e:
            logger.debug(f"Agent not available for {kind.label} {vmid}: {e}")
            return None

        result = data.get("result") if isinstance(data, dict) else None
        for interface in result if isinstance(result, list) else []:
            if not isinstance(interface, dict):
                continue
            addresses = interface.get("ip-addresses")
            if not isinstance(addresses, list):
                continue
            for ip_address in addresses:
                ip = ip_address.get("ip-address") if isinstance(ip_address, dict) else None
                if isinstance(ip, str) and ip and not is_loopback(ip):
                    logger.debug(f"Found IP {ip} for {kind.label} {vmid}")
                    return ip

        logger.debug(f"No IP found in agent response for {kind.label} {vmid}")
        return None
