"""
Host network queries: own MAC address and the IP other devices can reach us on.
"""

import socket

import psutil

NO_MAC_ADDRESS = "No valid MAC address found"
NULL_MAC = "00:00:00:00:00:00"


def _normalize_mac(address: str) -> str:
    # Windows reporta "AA-BB-CC-DD-EE-FF".
    return address.replace("-", ":").lower()


def get_host_mac_address() -> str:
    """
    First non-null link-layer address in the order the OS enumerates interfaces.
    Returns NO_MAC_ADDRESS if there is none.
    """
    for _interface, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != psutil.AF_LINK or not addr.address:
                continue
            mac = _normalize_mac(addr.address)
            if mac != NULL_MAC:
                return mac
    return NO_MAC_ADDRESS


def get_local_ip() -> str:
    """Get the local IP address of this machine"""
    try:
        # No se envía nada: connect() sobre UDP solo elige la interfaz de salida.
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "localhost"
