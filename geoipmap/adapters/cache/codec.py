"""JSON codec for the persisted geo-location cache.

The cache file is a JSON array with one object per entry:

    {
      "subject": <subject JSON>,
      "coords": {"lat": <float>, "long": <float>},
      "valid": <bool>,
      "parameters": {"<key>": {"t": "l"|"i"|"s"|"d"|"f", "v": <value>}}
    }

Subjects serialize themselves via ``to_json()``; decoding goes through an
explicit decoder callable such as ``StringSubject.from_json``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Mapping

import numpy as np

from ...domain.errors import CacheFormatError
from ...domain.models import (
    TYPE_FLOAT32,
    TYPE_FLOAT64,
    TYPE_INT32,
    TYPE_INT64,
    TYPE_STRING,
    Coordinate,
    GeoLocation,
    ParameterValue,
    parameter_type_tag,
)

SubjectDecoder = Callable[[Mapping[str, Any]], Any]

_DECODERS: Dict[str, Callable[[Any], ParameterValue]] = {
    TYPE_INT64: int,
    TYPE_INT32: np.int32,
    TYPE_STRING: str,
    TYPE_FLOAT64: float,
    TYPE_FLOAT32: np.float32,
}


def encode_parameter(value: ParameterValue) -> Dict[str, Any]:
    """Encode one parameter value as ``{"t": tag, "v": value}``."""
    tag = parameter_type_tag(value)
    if tag in (TYPE_INT64, TYPE_INT32):
        return {"t": tag, "v": int(value)}
    if tag in (TYPE_FLOAT64, TYPE_FLOAT32):
        return {"t": tag, "v": float(value)}
    return {"t": tag, "v": value}


def decode_parameter(data: Mapping[str, Any]) -> ParameterValue:
    """Decode one ``{"t": tag, "v": value}`` object.

    Raises:
        CacheFormatError: If the tag is unknown or the value does not fit it.
    """
    tag = data["t"]
    decoder = _DECODERS.get(tag)
    if decoder is None:
        raise CacheFormatError(f"Unknown parameter type tag: {tag!r}", type_tag=str(tag))
    return decoder(data["v"])


def encode_location(location: GeoLocation) -> Dict[str, Any]:
    return {
        "subject": location.subject.to_json(),
        "coords": {
            "lat": location.coordinate.latitude_in_deg,
            "long": location.coordinate.longitude_in_deg,
        },
        "valid": location.is_valid,
        "parameters": {
            key: encode_parameter(value) for key, value in location.parameters.items()
        },
    }


def decode_location(data: Mapping[str, Any], subject_decoder: SubjectDecoder) -> GeoLocation:
    coords = data["coords"]
    parameters = {
        key: decode_parameter(value) for key, value in data.get("parameters", {}).items()
    }
    return GeoLocation(
        subject_decoder(data["subject"]),
        Coordinate(float(coords["lat"]), float(coords["long"])),
        bool(data["valid"]),
        parameters,
    )


def encode_cache(locations: Iterable[GeoLocation]) -> str:
    """Serialize cache entries to the JSON array text."""
    return json.dumps([encode_location(location) for location in locations], indent=2)


def decode_cache(text: str, subject_decoder: SubjectDecoder) -> List[GeoLocation]:
    """Parse the JSON array text back into locations.

    Any problem fails the whole load; there is no partial recovery.

    Raises:
        CacheFormatError: On invalid JSON, missing fields or unknown type tags.
    """
    try:
        entries = json.loads(text)
    except ValueError as e:
        raise CacheFormatError("Cache file is not valid JSON", cause=e)

    if not isinstance(entries, list):
        raise CacheFormatError("Cache file must contain a JSON array")

    try:
        return [decode_location(entry, subject_decoder) for entry in entries]
    except CacheFormatError:
        raise
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise CacheFormatError(f"Malformed cache entry: {e}", cause=e)
