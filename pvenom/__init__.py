"""pvenom: inspect Proxmox VE clusters from the command line."""

__version__ = "0.1.0"
