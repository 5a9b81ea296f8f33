# config.py

"""Configuration settings for pvenom."""

# Proxmox API endpoints
API_PREFIX = "/api2/json"
TICKET_PATH = f"{API_PREFIX}/access/ticket"
NODES_PATH = f"{API_PREFIX}/nodes"

# Credentials
AUTH_COOKIE_NAME = "PVEAuthCookie"
CSRF_HEADER_NAME = "CSRFPreventionToken"  # only needed for POST/PUT/DELETE
DEFAULT_USERNAME = "root@pam"
PASSWORD_ENV_VAR = "PVENOM_PASSWORD"

# Timeouts in seconds
PROBE_TIMEOUT = 5
REQUEST_TIMEOUT = 30

# Rendering
NOT_AVAILABLE = "N/A"
BYTES_PER_GIB = 1024 ** 3
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
TABLE_WIDTH = 240  # wide enough that rich never wraps a cell

# Logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
