"""
Data models for TraceVis
"""

from dataclasses import dataclass
from typing import Any, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected string, got {type(value).__name__}")
    return value


def _coordinate(data: dict, key: str, limit: float) -> float:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    value = float(value)
    if not -limit <= value <= limit:
        raise ValueError(f"'{key}' out of range: {value}")
    return value


@dataclass(frozen=True)
class LocationRecord:
    """Resolved location of a single hop"""
    address: str
    latitude: float
    longitude: float
    organization: Optional[str] = None
    region: Optional[str] = None
    subregion: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> 'LocationRecord':
        """
        Build a record from a lookup provider's JSON body.

        Args:
            data: Decoded JSON object

        Returns:
            LocationRecord

        Raises:
            ValueError: If the body does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError("lookup response is not a JSON object")

        address = data.get('ip')
        if not isinstance(address, str) or not address:
            raise ValueError("lookup response has no 'ip'")

        return cls(
            address=address,
            latitude=_coordinate(data, 'latitude', 90.0),
            longitude=_coordinate(data, 'longitude', 180.0),
            organization=_optional_str(data.get('org')),
            region=_optional_str(data.get('subdivision')),
            subregion=_optional_str(data.get('subdivision2')),
            city=_optional_str(data.get('city')),
            country=_optional_str(data.get('country')),
        )

    @property
    def label(self) -> str:
        """Short human-readable place name"""
        parts = [p for p in (self.city, self.country) if p]
        return ", ".join(parts) if parts else self.address


class GeoLookupError(Exception):
    """A hop's address could not be resolved to a location"""

    def __init__(self, address: str, reason: str):
        super().__init__(f"{address}: {reason}")
        self.address = address
        self.reason = reason
