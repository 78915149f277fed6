"""Height and weight input helpers.

Converts what people type into sign-up forms (feet and inches,
centimeters, kilograms) into the inches and pounds the composer expects.
"""

import re
from numbers import Real

from lookz.shared.constants import UNITS
from lookz.shared.exceptions import InvalidInputError

_NUMBER = r"(\d+(?:\.\d+)?)"

_FEET_INCHES = re.compile(
    rf"^{_NUMBER}\s*(?:'|ft|feet|foot)\s*(?:{_NUMBER}\s*(?:\"|''|in|inch|inches)?)?$"
)
_CENTIMETERS = re.compile(rf"^{_NUMBER}\s*(?:cm|centimeters?)$")
_INCHES = re.compile(rf"^{_NUMBER}\s*(?:\"|in|inch|inches)?$")

_KILOGRAMS = re.compile(rf"^{_NUMBER}\s*(?:kg|kgs|kilograms?)$")
_POUNDS = re.compile(rf"^{_NUMBER}\s*(?:lb|lbs|pounds?)?$")


def height_from_feet_inches(feet: float, inches: float = 0.0) -> float:
    """5 ft 10 in -> 70.0"""
    return feet * UNITS.INCHES_PER_FOOT + inches


def height_from_cm(cm: float) -> float:
    return cm / UNITS.CM_PER_INCH


def weight_from_kg(kg: float) -> float:
    return kg * UNITS.LB_PER_KG


def parse_height(value) -> float:
    """
    Parse a height into inches.

    Accepts 5'10", 5' 10, 5ft 10in, 70in, 70", 178cm or a bare number
    of inches.

    Raises:
        InvalidInputError: If the value cannot be parsed
    """
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        raise InvalidInputError("height", f"cannot parse {value!r}")

    text = value.strip().lower()

    match = _FEET_INCHES.match(text)
    if match:
        feet = float(match.group(1))
        inches = float(match.group(2)) if match.group(2) else 0.0
        if inches >= UNITS.INCHES_PER_FOOT:
            raise InvalidInputError("height", f"inches part must be below 12 in {value!r}")
        return height_from_feet_inches(feet, inches)

    match = _CENTIMETERS.match(text)
    if match:
        return height_from_cm(float(match.group(1)))

    match = _INCHES.match(text)
    if match:
        return float(match.group(1))

    raise InvalidInputError("height", f"cannot parse {value!r}")


def parse_weight(value) -> float:
    """
    Parse a weight into pounds.

    Accepts 160lb, 160 lbs, 72kg or a bare number of pounds.

    Raises:
        InvalidInputError: If the value cannot be parsed
    """
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        raise InvalidInputError("weight", f"cannot parse {value!r}")

    text = value.strip().lower()

    match = _KILOGRAMS.match(text)
    if match:
        return weight_from_kg(float(match.group(1)))

    match = _POUNDS.match(text)
    if match:
        return float(match.group(1))

    raise InvalidInputError("weight", f"cannot parse {value!r}")
