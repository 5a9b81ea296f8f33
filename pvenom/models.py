# models.py

"""Data models for pvenom."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, NamedTuple, Optional


class OutputFormat(Enum):
    TABLE = "table"
    CSV = "csv"
    JSON = "json"


class GuestKind(Enum):
    """Guest variants, valued by the API collection that lists them."""
    VM = "qemu"
    LXC = "lxc"

    @property
    def label(self) -> str:
        return self.name


class Settings(NamedTuple):
    """Options for a single invocation."""
    controller: str
    username: str
    password: str
    secure: bool = True
    node: Optional[str] = None
    list_guests: bool = False
    output_format: OutputFormat = OutputFormat.TABLE
    verbose: bool = False


@dataclass(frozen=True)
class Session:
    """An authenticated Proxmox API session.

    The ticket goes out as a cookie on every request. The CSRF token is
    only required by state-changing verbs, which pvenom never issues.
    """
    base_url: str
    ticket: str
    csrf_token: str
    username: str = ""

    def __repr__(self) -> str:
        return f"Session(base_url={self.base_url!r}, username={self.username!r})"


@dataclass(frozen=True)
class ClusterNode:
    """A cluster member. Every metric is optional."""
    name: str
    status: str
    address: Optional[str] = None
    cpu: Optional[float] = None  # fraction, 0.0 - 1.0
    cores: Optional[int] = None
    memory_used: Optional[int] = None
    memory_total: Optional[int] = None
    disk_used: Optional[int] = None
    disk_total: Optional[int] = None
    uptime: Optional[int] = None


@dataclass(frozen=True)
class Guest:
    """Fields shared by virtual machines and containers."""
    kind: ClassVar[GuestKind]

    vmid: int
    name: str
    status: str
    address: Optional[str] = None
    cpus: Optional[int] = None
    max_memory: Optional[int] = None
    max_disk: Optional[int] = None
    uptime: Optional[int] = None


@dataclass(frozen=True)
class VirtualMachine(Guest):
    kind: ClassVar[GuestKind] = GuestKind.VM


@dataclass(frozen=True)
class Container(Guest):
    kind: ClassVar[GuestKind] = GuestKind.LXC


GUEST_CLASSES = {
    GuestKind.VM: VirtualMachine,
    GuestKind.LXC: Container,
}
