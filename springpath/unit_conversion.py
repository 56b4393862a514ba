"""
Module containing functions for physical length unit conversion.
"""

from .config import CANONICAL_LENGTH_UNIT

# Scaling factors with respect to millimeters
unit_conversion_factors: dict[str, float] = {
    "mm": 1.0,
    "cm": 10.0,
    "in": 25.4,
    "pt": 25.4 / 72.27,
    "bigpts": 25.4 / 72
}

def get_valid_units() -> str:
    """
    Returns string containing recognized units.
    """
    return ', '.join(unit_conversion_factors.keys())

def is_valid_unit(unit: str) -> bool:
    """
    Returns True if input is a recognized unit.
    """
    return unit in unit_conversion_factors

def validate_unit(unit: str) -> None:
    """
    Raises ValueError if unit is unrecognized.
    """
    if not is_valid_unit(unit):
        error_lines = [
            f"Unit '{unit}' is unrecognized",
            f"Use the following units instead: {get_valid_units()}"
        ]
        raise ValueError("\n".join(error_lines))

def convert_units(value: float, from_unit: str, to_unit: str) -> float:
    """
    Converts a value from one unit to another.
    Raises ValueError if units are unrecognized.
    """
    validate_unit(from_unit)
    validate_unit(to_unit)
    return (value * unit_conversion_factors[from_unit]) / unit_conversion_factors[to_unit]

def to_canonical(value: float, from_unit: str) -> float:
    """
    Converts a value to the canonical length unit (millimeters).
    """
    return convert_units(value, from_unit, CANONICAL_LENGTH_UNIT)
