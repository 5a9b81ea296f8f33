# cli.py

"""Command-line interface for pvenom."""

import argparse
import logging
import os
import sys

from . import __version__
from .auth import authenticate
from .client import ProxmoxClient
from .commands import Commands
from .config import DEFAULT_USERNAME, PASSWORD_ENV_VAR
from .exceptions import ConfigurationError, PveNomError
from .formatters import get_renderer
from .models import OutputFormat, Settings
from .negotiation import resolve_base_url
from .utils import get_http_session, setup_logging

logger = logging.getLogger(__name__)

class ArgumentParser(argparse.ArgumentParser):
    """Exits with status 1 on bad arguments, like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")

def parse_yes_no(value: str) -> bool:
    """Parse yes/no values for --secure."""
    lowered = value.lower()
    if lowered in ("yes", "y"):
        return True
    if lowered in ("no", "n"):
        return False
    raise argparse.ArgumentTypeError(f"Invalid value '{value}'. Expected 'yes' or 'no'")

def parse_format(value: str) -> OutputFormat:
    try:
        return OutputFormat(value.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid format '{value}'. Expected 'json', 'csv', or 'table'"
        )

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = ArgumentParser(
        prog="pvenom",
        description="Monitor and observe Proxmox VE cluster nodes, VMs and LXC containers"
    )
    parser.add_argument(
        "--controller", "-c",
        required=True,
        help="Proxmox cluster controller IP, hostname or URL"
    )
    parser.add_argument(
        "--username", "-u",
        default=DEFAULT_USERNAME,
        help=f"Username for authentication (default: {DEFAULT_USERNAME})"
    )
    parser.add_argument(
        "--password", "-p",
        default=os.environ.get(PASSWORD_ENV_VAR),
        help=f"Password for authentication (default: ${PASSWORD_ENV_VAR})"
    )
    parser.add_argument(
        "--secure", "-s",
        type=parse_yes_no,
        default=True,
        metavar="yes|no",
        help="Verify SSL certificates (default: yes)"
    )
    parser.add_argument(
        "--node", "-n",
        help="Inspect a single node instead of listing all of them"
    )
    parser.add_argument(
        "--list", "-l",
        dest="list_guests",
        action="store_true",
        help="List the VMs and containers of --node"
    )
    parser.add_argument(
        "--format", "-f",
        dest="output_format",
        type=parse_format,
        default=OutputFormat.TABLE,
        metavar="table|csv|json",
        help="Output format (default: table)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)

def build_settings(args) -> Settings:
    """Validate parsed arguments and turn them into Settings."""
    if not args.password:
        raise ConfigurationError(
            f"A password is required: pass --password or set {PASSWORD_ENV_VAR}"
        )
    if args.list_guests and not args.node:
        raise ConfigurationError("--list can only be used together with --node")

    return Settings(
        controller=args.controller,
        username=args.username,
        password=args.password,
        secure=args.secure,
        node=args.node,
        list_guests=args.list_guests,
        output_format=args.output_format,
        verbose=args.verbose,
    )

def run(settings: Settings, color: bool = False) -> str:
    """Connect, authenticate and produce the requested view."""
    with get_http_session(settings.secure) as http:
        logger.info(f"Connecting to Proxmox cluster at {settings.controller}...")
        base_url = resolve_base_url(
            http, settings.controller, settings.username, settings.password
        )

        logger.info("Authenticating to Proxmox API...")
        session = authenticate(http, base_url, settings.username, settings.password)
        logger.info("Authentication successful!")

        commands = Commands(
            ProxmoxClient(http, session),
            get_renderer(settings.output_format, color=color)
        )
        if settings.node and settings.list_guests:
            logger.info(f"Executing: list guests of node '{settings.node}'")
            return commands.list_node_guests(settings.node)
        if settings.node:
            logger.info(f"Executing: show info for node '{settings.node}'")
            return commands.show_node(settings.node)
        logger.debug("Executing: list all nodes")
        return commands.list_nodes(settings.controller)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    logger.info(f"Proxmox VE Node Observability Monitor v{__version__}")

    try:
        settings = build_settings(args)
        output = run(settings, color=sys.stdout.isatty())
    except PveNomError as e:
        logger.error(f"Command failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    print(output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
