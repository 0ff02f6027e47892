"""Conversion between map coordinates and SFAF antenna coordinates (Fields 303/403)."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from sfafkit.exceptions import CoordinateError
from sfafkit.typing.enums import Hemisphere
from sfafkit.typing.models import Record

EXPECTED_FORMAT = "DDMM[SS[.s]]H DDDMM[SS[.s]]H (e.g. 302400N0864300W) or DD.DDDDDH DDD.DDDDDH"
TRANSMITTER_COORDINATES_FIELD = "303"
RECEIVER_COORDINATES_FIELD = "403"

_WHITESPACE_RE = re.compile(r"\s+")
_DMS_RE = re.compile(r"^(\d{4,}(?:\.\d+)?)([NSEW])(\d{4,}(?:\.\d+)?)([NSEW])$")
_DECIMAL_RE = re.compile(r"^(\d{1,3}\.\d{5,})([NSEW])(\d{1,3}\.\d{5,})([NSEW])$")


class Coordinate(BaseModel):
    """Signed decimal-degree position."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_compact_dms(self) -> str:
        """Return the position in compact SFAF form."""
        return to_compact_dms(self.lat, self.lng)


def _dms_half(digits: str, hemisphere: Hemisphere) -> float:
    """Convert one `DDMM[SS[.s]]` half into unsigned decimal degrees.

    Args:
        digits (str): Numeric part of the half.
        hemisphere (Hemisphere): Hemisphere letter of the half.

    Raises:
        CoordinateError: If the digit layout or a component is out of range.

    Returns:
        float: Unsigned decimal degrees.
    """
    whole, _, fraction = digits.partition(".")
    degree_width = 2 if hemisphere.is_latitude else 3
    degrees_text, rest = whole[:degree_width], whole[degree_width:]
    if len(rest) == 2 and not fraction:
        minutes_text, seconds = rest, 0.0
    elif len(rest) == 4:  # noqa: PLR2004
        minutes_text, seconds = rest[:2], float(f"{rest[2:]}.{fraction or 0}")
    else:
        raise CoordinateError(
            message=f"Cannot split '{digits}{hemisphere}' into degrees, minutes and seconds",
            expected_format=EXPECTED_FORMAT,
        )

    degrees, minutes = int(degrees_text), int(minutes_text)
    if minutes >= 60 or seconds >= 60:  # noqa: PLR2004
        raise CoordinateError(
            message=f"Minutes and seconds must be below 60 in '{digits}{hemisphere}'",
            expected_format=EXPECTED_FORMAT,
        )
    value = degrees + minutes / 60 + seconds / 3600
    if value > hemisphere.max_degrees:
        raise CoordinateError(
            message=f"'{digits}{hemisphere}' exceeds {hemisphere.max_degrees} degrees",
            expected_format=EXPECTED_FORMAT,
        )
    return value


def _decimal_half(digits: str, hemisphere: Hemisphere) -> float:
    value = float(digits)
    if value > hemisphere.max_degrees:
        raise CoordinateError(
            message=f"'{digits}{hemisphere}' exceeds {hemisphere.max_degrees} degrees",
            expected_format=EXPECTED_FORMAT,
        )
    return value


def parse_antenna_coordinates(value: str) -> Coordinate:
    """Parse an SFAF antenna coordinate string.

    Whitespace is ignored, so `302400N 0864300W` and `302400N0864300W` are equivalent.

    Args:
        value (str): Raw Field 303/403 value.

    Raises:
        CoordinateError: If the value is not a valid DMS or decimal coordinate pair.

    Returns:
        Coordinate: Signed decimal position.
    """
    compact = _WHITESPACE_RE.sub("", value).upper()
    decimal_match = _DECIMAL_RE.fullmatch(compact)
    match = decimal_match or _DMS_RE.fullmatch(compact)
    if match is None:
        raise CoordinateError(message=f"Unrecognized coordinate '{value}'", expected_format=EXPECTED_FORMAT)

    first, second = Hemisphere(match.group(2)), Hemisphere(match.group(4))
    if first.is_latitude == second.is_latitude:
        raise CoordinateError(
            message=f"Coordinate '{value}' needs one N/S latitude and one E/W longitude",
            expected_format=EXPECTED_FORMAT,
        )

    convert = _decimal_half if decimal_match else _dms_half
    halves = {
        first: convert(match.group(1), first),
        second: convert(match.group(3), second),
    }
    lat = lng = 0.0
    for hemisphere, magnitude in halves.items():
        signed = -magnitude if hemisphere in (Hemisphere.SOUTH, Hemisphere.WEST) else magnitude
        if hemisphere.is_latitude:
            lat = signed
        else:
            lng = signed
    return Coordinate(lat=lat, lng=lng)


def decimal_to_compact_dms(decimal: float, *, is_longitude: bool) -> str:
    """Convert signed decimal degrees into one compact `DDMMSSH` half.

    Args:
        decimal (float): Signed decimal degrees.
        is_longitude (bool): Whether the value is a longitude.

    Raises:
        CoordinateError: If the value is outside the latitude or longitude range.

    Returns:
        str: `DDMMSSH` for latitudes, `DDDMMSSH` for longitudes.
    """
    limit = 180 if is_longitude else 90
    if abs(decimal) > limit:
        raise CoordinateError(
            message=f"{decimal} is outside [-{limit}, {limit}]",
            expected_format="signed decimal degrees",
        )

    if is_longitude:
        hemisphere = Hemisphere.WEST if decimal < 0 else Hemisphere.EAST
    else:
        hemisphere = Hemisphere.SOUTH if decimal < 0 else Hemisphere.NORTH

    total_seconds = round(abs(decimal) * 3600)
    degrees, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    width = 3 if is_longitude else 2
    return f"{degrees:0{width}d}{minutes:02d}{seconds:02d}{hemisphere}"


def to_compact_dms(lat: float, lng: float) -> str:
    """Return `DDMMSSHDDDMMSSH` for a marker position."""
    return decimal_to_compact_dms(lat, is_longitude=False) + decimal_to_compact_dms(lng, is_longitude=True)


def populate_marker_coordinates(record: Record, lat: float, lng: float) -> Record:
    """Fill transmitter and receiver antenna coordinates from a marker position.

    Args:
        record (Record): Record attached to the marker; left untouched.
        lat (float): Marker latitude.
        lng (float): Marker longitude.

    Returns:
        Record: Copy with Fields 303 and 403 set.
    """
    compact = to_compact_dms(lat, lng)
    return record.with_values(TRANSMITTER_COORDINATES_FIELD, [compact]).with_values(
        RECEIVER_COORDINATES_FIELD,
        [compact],
    )
