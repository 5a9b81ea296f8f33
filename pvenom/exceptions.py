# exceptions.py

"""Custom exceptions for pvenom."""

class PveNomError(Exception):
    """Base exception for errors talking to a Proxmox cluster."""
    pass

class ConfigurationError(PveNomError):
    """Exception for invalid command-line or environment configuration."""
    pass

class ConnectivityError(PveNomError):
    """Neither HTTPS nor HTTP reached the cluster controller."""
    pass

class TransportError(PveNomError):
    """Exception for timeouts, refused connections and TLS failures."""
    pass

class AuthenticationError(PveNomError):
    """The ticket endpoint rejected the credentials."""

    def __init__(self, status: int):
        super().__init__(f"Authentication failed: HTTP {status}")
        self.status = status

class RequestError(PveNomError):
    """A required API call answered with a non-success status."""

    def __init__(self, status: int, path: str):
        super().__init__(f"Request to {path} failed: HTTP {status}")
        self.status = status
        self.path = path

class DecodeError(PveNomError):
    """Exception for response bodies that do not have the expected shape."""
    pass
