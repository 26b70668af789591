from enum import Enum


class ErrorKind(str, Enum):
    INVALID_PORT = "invalid_port"
    INVALID_ADDRESS = "invalid_address"
    NO_HOST_ADDRESS = "no_host_address"
    INTERFACE_NOT_FOUND = "interface_not_found"
    SEND_FAILURE = "send_failure"


class BroadcastError(Exception):
    """Base class for every recoverable lanBroadcast error."""

    kind: ErrorKind
    message = "lanBroadcast: error"

    def __init__(self, detail: str = ""):
        self.detail = detail
        text = f"{self.message}: {detail}" if detail else self.message
        super().__init__(text)


class InvalidPortError(BroadcastError):
    kind = ErrorKind.INVALID_PORT
    message = "lanBroadcast: Invalid port provided"


class InvalidAddressError(BroadcastError):
    kind = ErrorKind.INVALID_ADDRESS
    message = "lanBroadcast: Invalid IPv4 address provided"


class NoHostAddressError(BroadcastError):
    kind = ErrorKind.NO_HOST_ADDRESS
    message = "lanBroadcast: unable to get the host address or interface"


class InterfaceNotFoundError(BroadcastError):
    kind = ErrorKind.INTERFACE_NOT_FOUND
    message = "lanBroadcast: no such network interface"


class SendFailure(BroadcastError):
    kind = ErrorKind.SEND_FAILURE
    message = "lanBroadcast: failed to send announcement"


class BroadcastStateError(RuntimeError):
    """Raised when a broadcaster is started twice or after it was closed."""
