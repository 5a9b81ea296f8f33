# formatters.py

"""Render nodes and guests as a table, CSV or JSON."""

import io
import json
from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import NOT_AVAILABLE, TABLE_WIDTH
from .models import ClusterNode, Guest, OutputFormat
from .utils import (
    bytes_to_gib, fraction_to_percent, or_na, uptime_days, uptime_days_hours,
    used_total_gib
)

AFFIRMATIVE_STATES = {"running", "online"}
NEGATIVE_STATES = {"stopped", "offline"}

# Column name -> field key, shared between the CSV and JSON encodings
NODE_LIST_CSV = [
    ("NODE", "name"),
    ("STATUS", "status"),
    ("IP", "ipv4"),
    ("CPU_PERCENT", "cpu_percent"),
    ("CPU_CORES", "cpu_cores"),
    ("MEM_GB", "memory_used_gb"),
    ("MEM_MAX_GB", "memory_total_gb"),
    ("DISK_GB", "storage_used_gb"),
    ("DISK_MAX_GB", "storage_total_gb"),
    ("UPTIME_DAYS", "uptime_days"),
]
NODE_DETAIL_CSV = NODE_LIST_CSV[:-1] + [("UPTIME", "uptime")]
GUEST_LIST_CSV = [
    ("VMID", "vmid"),
    ("NAME", "name"),
    ("STATUS", "status"),
    ("IP", "ipv4"),
    ("CPUS", "cpus"),
    ("MEM_GB", "memory_gb"),
    ("DISK_GB", "storage_gb"),
    ("UPTIME_DAYS", "uptime_days"),
]


def node_summary(node: ClusterNode) -> Dict[str, str]:
    """Fields of a node as shown in the node list."""
    return {
        "name": node.name,
        "status": node.status,
        "ipv4": or_na(node.address),
        "cpu_percent": fraction_to_percent(node.cpu, 1),
        "cpu_cores": or_na(node.cores),
        "memory_used_gb": bytes_to_gib(node.memory_used, 2),
        "memory_total_gb": bytes_to_gib(node.memory_total, 2),
        "storage_used_gb": bytes_to_gib(node.disk_used, 2),
        "storage_total_gb": bytes_to_gib(node.disk_total, 2),
        "uptime_days": uptime_days(node.uptime),
    }


def node_details(node: ClusterNode) -> Dict[str, str]:
    """Fields of a node as shown when inspecting it."""
    fields = node_summary(node)
    fields["cpu_percent"] = fraction_to_percent(node.cpu, 2)
    del fields["uptime_days"]
    fields["uptime"] = uptime_days_hours(node.uptime)
    return fields


def guest_summary(guest: Guest) -> Dict[str, str]:
    return {
        "vmid": str(guest.vmid),
        "name": guest.name,
        "status": guest.status,
        "ipv4": or_na(guest.address),
        "cpus": or_na(guest.cpus),
        "memory_gb": bytes_to_gib(guest.max_memory, 1),
        "storage_gb": bytes_to_gib(guest.max_disk, 1),
        "uptime_days": uptime_days(guest.uptime),
    }


def _with_unit(value: str, unit: str) -> str:
    return value if value == NOT_AVAILABLE else f"{value}{unit}"


class Renderer:
    """Base class for the three output encodings."""

    def render_nodes(self, nodes: Sequence[ClusterNode], controller: str) -> str:
        raise NotImplementedError

    def render_node_detail(self, node: ClusterNode) -> str:
        raise NotImplementedError

    def render_guests(self, node: str, guests: Sequence[Guest]) -> str:
        raise NotImplementedError


class CsvRenderer(Renderer):
    """
    Plain comma separated output.

    Values are joined as-is with no quoting, so a value holding a comma
    shifts the rest of its row.
    """

    @staticmethod
    def _lines(columns: List[Tuple[str, str]], rows: List[Dict[str, str]]) -> str:
        lines = [",".join(header for header, _ in columns)]
        for row in rows:
            lines.append(",".join(row[key] for _, key in columns))
        return "\n".join(lines)

    def render_nodes(self, nodes, controller):
        return self._lines(NODE_LIST_CSV, [node_summary(n) for n in nodes])

    def render_node_detail(self, node):
        return self._lines(NODE_DETAIL_CSV, [node_details(node)])

    def render_guests(self, node, guests):
        return self._lines(GUEST_LIST_CSV, [guest_summary(g) for g in guests])


class JsonRenderer(Renderer):
    """Pretty-printed JSON. Missing values are "N/A", never null."""

    # Not obtainable from the endpoints pvenom reads
    UNKNOWN = NOT_AVAILABLE

    @staticmethod
    def _dump(document) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False)

    def render_nodes(self, nodes, controller):
        entries = []
        for node in nodes:
            fields = node_summary(node)
            entries.append({
                "name": fields["name"],
                "status": fields["status"],
                "ipv4": fields["ipv4"],
                "cpu_percent": fields["cpu_percent"],
                "cpu_cores": fields["cpu_cores"],
                "memory_gb": used_total_gib(node.memory_used, node.memory_total),
                "storage_gb": used_total_gib(node.disk_used, node.disk_total),
                "uptime_days": fields["uptime_days"],
            })
        return self._dump({
            "root_controller": controller,
            "proxmox_version": self.UNKNOWN,
            "nodes": entries,
        })

    def render_node_detail(self, node):
        fields = node_details(node)
        fields["is_root_controller"] = self.UNKNOWN
        return self._dump(fields)

    def render_guests(self, node, guests):
        entries = []
        for guest in guests:
            fields = guest_summary(guest)
            entries.append({
                "vmid": guest.vmid,
                "name": fields["name"],
                "type": guest.kind.label,
                "node": node,
                "status": fields["status"],
                "ipv4": fields["ipv4"],
                "cpus": fields["cpus"],
                "memory_gb": fields["memory_gb"],
                "storage_gb": fields["storage_gb"],
                "uptime_days": fields["uptime_days"],
            })
        return self._dump(entries)


class TableRenderer(Renderer):
    """Bordered grid drawn with rich, status cells colored when color is on."""

    def __init__(self, color: bool = False):
        self.color = color

    @staticmethod
    def status_style(status: str) -> str:
        if status in AFFIRMATIVE_STATES:
            return "green"
        if status in NEGATIVE_STATES:
            return "red"
        return "yellow"

    def _status(self, status: str) -> Text:
        return Text(status, style=self.status_style(status))

    @staticmethod
    def _identity(name: str, address: Optional[str]) -> Text:
        cell = Text(name)
        cell.append("\n")
        cell.append(address or NOT_AVAILABLE, style="dim")
        return cell

    @staticmethod
    def _new_table(*columns: str, **kwargs) -> Table:
        table = Table(box=box.SQUARE, header_style="bold", show_lines=True, **kwargs)
        for column in columns:
            table.add_column(column)
        return table

    def _print(self, table: Table) -> str:
        console = Console(
            file=io.StringIO(),
            width=TABLE_WIDTH,
            force_terminal=self.color,
            color_system="standard" if self.color else None,
            highlight=False,
            legacy_windows=False,
        )
        console.print(table)
        return console.file.getvalue().rstrip("\n")

    def render_nodes(self, nodes, controller):
        table = self._new_table(
            "NODE", "STATUS", "CPU %", "CORES", "MEMORY GB", "STORAGE GB", "UPTIME DAYS"
        )
        for node in nodes:
            fields = node_summary(node)
            table.add_row(
                self._identity(node.name, node.address),
                self._status(node.status),
                fields["cpu_percent"],
                fields["cpu_cores"],
                used_total_gib(node.memory_used, node.memory_total),
                used_total_gib(node.disk_used, node.disk_total),
                fields["uptime_days"],
            )
        return self._print(table)

    def render_node_detail(self, node):
        fields = node_details(node)
        table = self._new_table("FIELD", "VALUE")
        table.add_row("Node", self._identity(node.name, node.address))
        table.add_row("Status", self._status(node.status))
        table.add_row("CPU usage", _with_unit(fields["cpu_percent"], "%"))
        table.add_row("CPU cores", fields["cpu_cores"])
        table.add_row("Memory", _with_unit(fields["memory_used_gb"], " GB"))
        table.add_row("Memory max", _with_unit(fields["memory_total_gb"], " GB"))
        table.add_row("Disk", _with_unit(fields["storage_used_gb"], " GB"))
        table.add_row("Disk max", _with_unit(fields["storage_total_gb"], " GB"))
        table.add_row("Uptime", fields["uptime"])
        return self._print(table)

    def render_guests(self, node, guests):
        table = self._new_table(
            "VMID", "NAME", "STATUS", "IP", "CPUS", "MEMORY GB", "STORAGE GB", "UPTIME DAYS",
            title=node,
            caption=None if guests else "no guests",
        )
        for guest in guests:
            fields = guest_summary(guest)
            table.add_row(
                fields["vmid"],
                Text(guest.name),
                self._status(guest.status),
                fields["ipv4"],
                fields["cpus"],
                fields["memory_gb"],
                fields["storage_gb"],
                fields["uptime_days"],
            )
        return self._print(table)


def get_renderer(output_format: OutputFormat, color: bool = False) -> Renderer:
    if output_format is OutputFormat.CSV:
        return CsvRenderer()
    if output_format is OutputFormat.JSON:
        return JsonRenderer()
    return TableRenderer(color=color)
