"""
IP address classifier
"""

import ipaddress
from enum import Enum


class IPType(Enum):
    """IP address classification types"""
    ZERO = "zero"
    PRIVATE = "private"
    CGNAT = "cgnat"
    LOOPBACK = "loopback"
    LINKLOCAL = "linklocal"
    MULTICAST = "multicast"
    RESERVED = "reserved"
    PUBLIC = "public"


def _ip(a: int, b: int = 0, c: int = 0, d: int = 0) -> int:
    return (a << 24) | (b << 16) | (c << 8) | d


# Inclusive numeric bounds, checked in order
RANGES = (
    (_ip(0), _ip(0, 255, 255, 255), IPType.ZERO),
    (_ip(10), _ip(10, 255, 255, 255), IPType.PRIVATE),
    (_ip(100, 64), _ip(100, 127, 255, 255), IPType.CGNAT),
    (_ip(127), _ip(127, 255, 255, 255), IPType.LOOPBACK),
    (_ip(169, 254), _ip(169, 254, 255, 255), IPType.LINKLOCAL),
    (_ip(172, 16), _ip(172, 31, 255, 255), IPType.PRIVATE),
    (_ip(192, 168), _ip(192, 168, 255, 255), IPType.PRIVATE),
    (_ip(224), _ip(239, 255, 255, 255), IPType.MULTICAST),
    (_ip(240), _ip(255, 255, 255, 255), IPType.RESERVED),
)


class IPClassifier:
    """
    Classify IPv4 addresses into categories.

    Categories:
    - zero: 0.0.0.0/8, also used for anything that does not parse
    - private: RFC1918 (10/8, 172.16/12, 192.168/16)
    - cgnat: Carrier-grade NAT (100.64/10)
    - loopback: Localhost (127/8)
    - linklocal: Link-local (169.254/16)
    - multicast: Multicast (224/4)
    - reserved: 240/4 and the broadcast address
    - public: everything else
    """

    @staticmethod
    def to_int(ip: str) -> int:
        """Dotted quad to integer; unparsable input maps to 0.0.0.0"""
        try:
            return int(ipaddress.IPv4Address(ip.strip()))
        except (ipaddress.AddressValueError, ValueError, AttributeError):
            return 0

    @classmethod
    def classify(cls, ip: str) -> IPType:
        """
        Classify an IP address.

        Args:
            ip: IPv4 address string

        Returns:
            IPType enum value
        """
        value = cls.to_int(ip)
        for low, high, ip_type in RANGES:
            if low <= value <= high:
                return ip_type
        return IPType.PUBLIC

    @classmethod
    def is_local(cls, ip: str) -> bool:
        """Check if IP is non-routable and not worth looking up"""
        return cls.classify(ip) != IPType.PUBLIC


def is_local(address: str) -> bool:
    """Module-level shortcut for IPClassifier.is_local"""
    return IPClassifier.is_local(address)
