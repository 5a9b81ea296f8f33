# commands.py

"""
The three views pvenom offers.

Each command finishes every required API call before rendering, so a
failure part-way through produces no output at all.
"""

import dataclasses
import logging

from .client import ProxmoxClient
from .formatters import Renderer
from .guests import normalize_guests
from .models import GuestKind

logger = logging.getLogger(__name__)

class Commands:
    def __init__(self, client: ProxmoxClient, renderer: Renderer):
        self.client = client
        self.renderer = renderer

    def list_nodes(self, controller: str) -> str:
        """Every cluster node, each with its address when one resolves."""
        nodes = self.client.list_nodes()
        nodes = [
            dataclasses.replace(node, address=node.address or self.client.node_address(node.name))
            for node in nodes
        ]
        logger.info(f"Listed {len(nodes)} node(s)")
        return self.renderer.render_nodes(nodes, controller)

    def show_node(self, node: str) -> str:
        detail = self.client.node_detail(node)
        detail = dataclasses.replace(detail, address=self.client.node_address(node))
        logger.info(f"Fetched details for node '{node}'")
        return self.renderer.render_node_detail(detail)

    def list_node_guests(self, node: str) -> str:
        """VMs and containers of one node, sorted by name."""
        vms = self.client.list_guests(node, GuestKind.VM)
        containers = self.client.list_guests(node, GuestKind.LXC)

        guests = [
            dataclasses.replace(
                guest,
                address=guest.address or self.client.guest_address(node, guest.vmid, guest.kind)
            )
            for guest in normalize_guests(vms, containers)
        ]
        logger.info(f"Listed {len(guests)} guest(s) on node '{node}'")
        return self.renderer.render_guests(node, guests)
