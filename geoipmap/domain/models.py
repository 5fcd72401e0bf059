"""Domain models for geoipmap.

Coordinates are immutable value objects. GeoLocations are created by a
geo-locator and treated as read-only once handed out; the caching layer
hands out shallow copies so callers cannot corrupt cached state.

Parameter values attached to a GeoLocation are restricted to a small set
of types (64/32 bit integers and floats, strings) so that they serialize
deterministically. 32 bit variants are represented by ``numpy.int32`` and
``numpy.float32``.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, Mapping, Protocol, TypeVar, Union

import numpy as np

ParameterValue = Union[int, np.int64, np.int32, str, float, np.float32]

TYPE_INT64 = "l"
TYPE_INT32 = "i"
TYPE_STRING = "s"
TYPE_FLOAT64 = "d"
TYPE_FLOAT32 = "f"

PARAMETER_TYPE_TAGS = (TYPE_INT64, TYPE_INT32, TYPE_STRING, TYPE_FLOAT64, TYPE_FLOAT32)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _double_bits(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", value))[0]


@dataclass(frozen=True, slots=True, eq=False)
class Coordinate:
    """A geographic point in degrees.

    Equality and hashing compare the exact bit patterns of both fields,
    there is no epsilon. Two coordinates that differ by a single ULP are
    different points; ``0.0`` and ``-0.0`` are different points.
    """

    latitude_in_deg: float
    longitude_in_deg: float

    ZERO: ClassVar["Coordinate"]

    def latitude_in_rad(self) -> float:
        return math.radians(self.latitude_in_deg)

    def longitude_in_rad(self) -> float:
        return math.radians(self.longitude_in_deg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return _double_bits(self.latitude_in_deg) == _double_bits(
            other.latitude_in_deg
        ) and _double_bits(self.longitude_in_deg) == _double_bits(
            other.longitude_in_deg
        )

    def __hash__(self) -> int:
        return hash(
            (_double_bits(self.latitude_in_deg), _double_bits(self.longitude_in_deg))
        )

    def __str__(self) -> str:
        return f"lat={self.latitude_in_deg} , long={self.longitude_in_deg}"


Coordinate.ZERO = Coordinate(0.0, 0.0)


class Subject(Protocol):
    """Identity being geo-located (IP address, hostname, ...).

    Implementations need stable equality and hashing and must serialize
    themselves to JSON. Deserialization is done by an explicit decoder
    callable handed to the cache, see ``StringSubject.from_json``.
    """

    def value(self) -> Any: ...

    def to_json(self) -> Dict[str, Any]: ...

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...


@dataclass(frozen=True, slots=True)
class StringSubject:
    """A subject identified by a plain string (IP address or hostname)."""

    text: str

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("subject cannot be None")

    def value(self) -> str:
        return self.text

    def to_json(self) -> Dict[str, Any]:
        return {"value": self.text}

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "StringSubject":
        return cls(str(data["value"]))

    def __str__(self) -> str:
        return self.text


def parameter_type_tag(value: Any) -> str:
    """Return the serialization tag for a parameter value.

    Raises:
        TypeError: If the value is not one of the supported types.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Unsupported parameter type: {type(value).__name__}")
    if isinstance(value, np.int32):
        return TYPE_INT32
    if isinstance(value, (int, np.int64)):
        if not _INT64_MIN <= int(value) <= _INT64_MAX:
            raise TypeError(f"Integer parameter out of 64 bit range: {value}")
        return TYPE_INT64
    if isinstance(value, str):
        return TYPE_STRING
    if isinstance(value, np.float32):
        return TYPE_FLOAT32
    if isinstance(value, float):
        return TYPE_FLOAT64
    raise TypeError(f"Unsupported parameter type: {type(value).__name__}")


S = TypeVar("S", bound=Subject)


@dataclass(eq=False)
class GeoLocation(Generic[S]):
    """The location of a subject as reported by a geo-locator.

    Equality and hashing use the subject only. This is what makes a
    GeoLocation usable as the value side of the subject-keyed cache: a
    shallow copy compares equal to the original.

    Always check ``is_valid`` before trusting ``coordinate``; unlocatable
    subjects carry ``Coordinate.ZERO``.

    Attributes:
        subject: What was located, never None
        coordinate: Location in degrees
        is_valid: Whether the coordinate is meaningful
        parameters: Extra metadata (city, country, ...)
    """

    KEY_COUNTRY: ClassVar[str] = "country"
    KEY_CITY: ClassVar[str] = "city"

    subject: S
    coordinate: Coordinate = Coordinate.ZERO
    is_valid: bool = False
    parameters: Dict[str, ParameterValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.subject is None:
            raise ValueError("subject must not be None")
        for value in self.parameters.values():
            parameter_type_tag(value)

    @classmethod
    def of(
        cls, subject: S, latitude: float, longitude: float, is_valid: bool = True
    ) -> "GeoLocation[S]":
        """Create a location without metadata (valid unless told otherwise)."""
        return cls(subject, Coordinate(latitude, longitude), is_valid)

    @classmethod
    def invalid(cls, subject: S) -> "GeoLocation[S]":
        """Create a location marked as unlocatable."""
        return cls(subject, Coordinate.ZERO, False)

    def shallow_copy(self) -> "GeoLocation[S]":
        """Copy with a fresh parameters dict; subject and coordinate are shared."""
        return GeoLocation(
            self.subject, self.coordinate, self.is_valid, dict(self.parameters)
        )

    def set_parameter(self, key: str, value: ParameterValue) -> "GeoLocation[S]":
        parameter_type_tag(value)
        self.parameters[key] = value
        return self

    def has_parameter(self, key: str) -> bool:
        return self.parameters.get(key) is not None

    def parameter(self, key: str, default: Any = None) -> Any:
        value = self.parameters.get(key)
        return value if value is not None else default

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude_in_deg

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude_in_deg

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoLocation):
            return NotImplemented
        return self.subject == other.subject

    def __hash__(self) -> int:
        return hash(self.subject)

    def __str__(self) -> str:
        return f"{self.subject} [ valid={self.is_valid} , {self.coordinate} , {self.parameters} ]"
