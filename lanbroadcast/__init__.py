"""Announce a service on the LAN the way a Minecraft server does."""

from lanbroadcast.core.errors import (
    BroadcastError,
    BroadcastStateError,
    ErrorKind,
    InterfaceNotFoundError,
    InvalidAddressError,
    InvalidPortError,
    NoHostAddressError,
    SendFailure,
)
from lanbroadcast.core.state import BroadcastStatus
from lanbroadcast.netcore.broadcaster import LANBroadcast
from lanbroadcast.netcore.netutils import MCAST_GRP, MCAST_PORT, get_host_addr

__all__ = [
    "BroadcastError",
    "BroadcastStateError",
    "BroadcastStatus",
    "ErrorKind",
    "InterfaceNotFoundError",
    "InvalidAddressError",
    "InvalidPortError",
    "LANBroadcast",
    "MCAST_GRP",
    "MCAST_PORT",
    "NoHostAddressError",
    "SendFailure",
    "get_host_addr",
]
