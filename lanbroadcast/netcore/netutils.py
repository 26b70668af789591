import ipaddress
import logging
import socket
import struct
from typing import List, Optional

import psutil

from lanbroadcast.core.errors import InterfaceNotFoundError, NoHostAddressError

LOG = logging.getLogger(__name__)

# Group and port vanilla Minecraft clients listen on for LAN games
MCAST_GRP = "224.0.2.60"
MCAST_PORT = 4445
MCAST_TTL = 1


def make_multicast_sender(bind_ip: str) -> socket.socket:
    """Multicast send socket (IPv4) bound to bind_ip on an ephemeral port."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    try:
        s.bind((bind_ip, 0))
        ttl = struct.pack("b", MCAST_TTL)
        s.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, ttl)
        s.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_IF, socket.inet_aton(bind_ip))
    except OSError:
        s.close()
        raise
    return s


def _interface_names(iface: Optional[str], addrs: dict, stats: dict) -> List[str]:
    if iface:
        # an interface without addresses only shows up in the stats table
        if iface not in addrs and iface not in stats:
            raise InterfaceNotFoundError(iface)
        return [iface]
    return list(addrs)


def _is_loopback(stats, if_addrs) -> bool:
    flags = getattr(stats, "flags", "") or ""
    if "loopback" in flags.split(","):
        return True
    # psutil only reports flags on some platforms
    v4 = [_parse_ipv4(a.address) for a in if_addrs if a.family == socket.AF_INET]
    v4 = [ip for ip in v4 if ip is not None]
    return bool(v4) and all(ip.is_loopback for ip in v4)


def _parse_ipv4(address: str) -> Optional[ipaddress.IPv4Address]:
    try:
        ip = ipaddress.ip_address(address.split("/", 1)[0])
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address):
        return ip.ipv4_mapped
    return ip


def get_host_addr(iface: Optional[str] = None) -> str:
    """Guess the IPv4 address of this host.

    Walks the interfaces reported by the OS (or only ``iface`` when given),
    skipping loopback and down interfaces, and returns the first address that
    parses as IPv4. The result depends on the OS enumeration order.
    """
    addrs = psutil.net_if_addrs()
    stats = psutil.net_if_stats()

    for name in _interface_names(iface, addrs, stats):
        st = stats.get(name)
        if st is None or not st.isup:
            LOG.debug(f"Skipping interface {name}: down")
            continue
        if_addrs = addrs.get(name, [])
        if _is_loopback(st, if_addrs):
            LOG.debug(f"Skipping interface {name}: loopback")
            continue

        for addr in if_addrs:
            if addr.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            ip = _parse_ipv4(addr.address)
            if ip is not None:
                LOG.debug(f"Using {ip} from interface {name}")
                return str(ip)

    raise NoHostAddressError(iface or "")
