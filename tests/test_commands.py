"""Tests for the Commands views."""

import json
from unittest.mock import MagicMock

import pytest

from pvenom.client import ProxmoxClient
from pvenom.commands import Commands
from pvenom.exceptions import RequestError
from pvenom.formatters import CsvRenderer, JsonRenderer
from pvenom.models import ClusterNode, Container, GuestKind, VirtualMachine


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=ProxmoxClient)


class TestListNodes:
    """Test the node list view."""

    def test_enriches_each_node(self, client: MagicMock) -> None:
        """Test every node is looked up for an address, in order."""
        client.list_nodes.return_value = [
            ClusterNode(name="tatooine", status="online"),
            ClusterNode(name="hoth", status="offline"),
        ]
        client.node_address.side_effect = ["10.0.0.11", None]

        output = Commands(client, CsvRenderer()).list_nodes("10.0.0.5")

        assert [c.args[0] for c in client.node_address.call_args_list] == ["tatooine", "hoth"]
        lines = output.splitlines()
        assert lines[1].startswith("tatooine,online,10.0.0.11,")
        assert lines[2].startswith("hoth,offline,N/A,")

    def test_required_failure_renders_nothing(self, client: MagicMock) -> None:
        """Test a failing node list propagates without output."""
        renderer = MagicMock()
        client.list_nodes.side_effect = RequestError(500, "/api2/json/nodes")

        with pytest.raises(RequestError):
            Commands(client, renderer).list_nodes("pve")

        renderer.render_nodes.assert_not_called()


class TestShowNode:
    """Test the node detail view."""

    def test_detail_with_address(self, client: MagicMock) -> None:
        client.node_detail.return_value = ClusterNode(name="tatooine", status="online", cpu=0.5)
        client.node_address.return_value = "10.0.0.11"

        document = json.loads(Commands(client, JsonRenderer()).show_node("tatooine"))

        client.node_detail.assert_called_once_with("tatooine")
        assert document["ipv4"] == "10.0.0.11"
        assert document["cpu_percent"] == "50.00"


class TestListNodeGuests:
    """Test the guest list view."""

    def test_merges_sorts_and_enriches(self, client: MagicMock) -> None:
        """Test guests are merged, sorted and looked up in sorted order."""
        client.list_guests.side_effect = lambda node, kind: {
            GuestKind.VM: [VirtualMachine(vmid=100, name="zeta", status="running")],
            GuestKind.LXC: [Container(vmid=101, name="alpha", status="running", cpus=2)],
        }[kind]
        client.guest_address.side_effect = [None, "192.168.1.20"]

        document = json.loads(Commands(client, JsonRenderer()).list_node_guests("tatooine"))

        assert [c.args for c in client.list_guests.call_args_list] == [
            ("tatooine", GuestKind.VM),
            ("tatooine", GuestKind.LXC),
        ]
        assert [c.args for c in client.guest_address.call_args_list] == [
            ("tatooine", 101, GuestKind.LXC),
            ("tatooine", 100, GuestKind.VM),
        ]
        assert [g["name"] for g in document] == ["alpha", "zeta"]
        assert [g["type"] for g in document] == ["LXC", "VM"]
        assert document[0]["ipv4"] == "N/A"
        assert document[0]["cpus"] == "2"
        assert document[1]["ipv4"] == "192.168.1.20"

    def test_container_without_agent(self, client: MagicMock) -> None:
        """Test a container without agent still lists with its other fields."""
        client.list_guests.side_effect = lambda node, kind: {
            GuestKind.VM: [],
            GuestKind.LXC: [Container(vmid=101, name="web", status="running", cpus=2,
                                      max_memory=2 * 1024 ** 3, max_disk=8 * 1024 ** 3,
                                      uptime=86400)],
        }[kind]
        client.guest_address.return_value = None

        lines = Commands(client, CsvRenderer()).list_node_guests("tatooine").splitlines()

        assert lines[1] == "101,web,running,N/A,2,2.0,8.0,1.0"

    def test_empty_node(self, client: MagicMock) -> None:
        client.list_guests.return_value = []

        assert Commands(client, JsonRenderer()).list_node_guests("tatooine") == "[]"
        client.guest_address.assert_not_called()
