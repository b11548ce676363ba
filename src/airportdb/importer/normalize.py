"""Coercion of raw source strings into the store's vocabulary."""

import math

from airportdb.store.models import FrequencySlot, SurfaceType

_TRUE_STRINGS = frozenset({"1", "true", "yes"})

# Checked in order; the first rule with a token contained in the value wins
_SURFACE_RULES: tuple[tuple[tuple[str, ...], SurfaceType], ...] = (
    (("ASPH",), SurfaceType.ASPHALT),
    (("CONC",), SurfaceType.CONCRETE),
    (("DIRT",), SurfaceType.DIRT),
    (("GRVL", "GVL"), SurfaceType.GRAVEL),
    (("GRASS", "TURF"), SurfaceType.GRASS),
    (("METAL",), SurfaceType.METAL),
    (("WATER",), SurfaceType.WATER),
)

_FREQUENCY_TYPES: dict[str, FrequencySlot] = {
    "atis": FrequencySlot.ATIS,
    "tower": FrequencySlot.TOWER,
    "ground": FrequencySlot.GROUND,
    "clearance": FrequencySlot.CLEARANCE,
    "unicom": FrequencySlot.UNICOM,
    "ctaf": FrequencySlot.UNICOM,
    "approach": FrequencySlot.APPROACH,
    "departure": FrequencySlot.DEPARTURE,
    # Abbreviations used by the OurAirports extract
    "twr": FrequencySlot.TOWER,
    "gnd": FrequencySlot.GROUND,
    "cld": FrequencySlot.CLEARANCE,
    "clnc": FrequencySlot.CLEARANCE,
    "unic": FrequencySlot.UNICOM,
    "app": FrequencySlot.APPROACH,
    "dep": FrequencySlot.DEPARTURE,
}


def to_number(value: str | None) -> float | None:
    """Parse a finite real number.

    Returns:
        The number, or None when the value is absent, non-numeric, NaN, or
        infinite. Zero is a valid number.
    """
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_int(value: str | None) -> int | None:
    """Parse a number and round it to the nearest integer, halves away from zero."""
    number = to_number(value)
    if number is None:
        return None
    return int(math.copysign(math.floor(abs(number) + 0.5), number))


def to_identifier(value: str | None) -> int | None:
    """Parse an integral source id such as "269408"; "12.5" is rejected.

    Plain integer text is parsed exactly, so ids beyond float precision
    keep every digit.
    """
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        pass
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def to_boolean(value: str | None) -> bool | None:
    """Interpret a boolean-ish source flag.

    Examples:
        >>> to_boolean("1"), to_boolean("Yes"), to_boolean("0"), to_boolean("")
        (True, True, False, None)
    """
    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUE_STRINGS


def normalize_surface(value: str | None) -> SurfaceType:
    """Map a free-text surface description onto SurfaceType.

    Matching is case-insensitive and by substring, so compound values such
    as "ASPH-GRVL" resolve to the first matching rule.

    Examples:
        >>> normalize_surface("ASPH-G")
        <SurfaceType.ASPHALT: 'asphalt'>
        >>> normalize_surface("XYZ")
        <SurfaceType.UNKNOWN: 'unknown'>
    """
    if not value:
        return SurfaceType.UNKNOWN

    upper = value.upper()
    for tokens, surface in _SURFACE_RULES:
        if any(token in upper for token in tokens):
            return surface
    return SurfaceType.UNKNOWN


def frequency_slot(service_type: str | None) -> FrequencySlot | None:
    """Slot for a source frequency type, or None if the type is not stored."""
    if not service_type:
        return None
    return _FREQUENCY_TYPES.get(service_type.strip().lower())
