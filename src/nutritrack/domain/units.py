"""Unit conversions between the profile's imperial units and metric formulas."""

KG_PER_LB = 0.453592
CM_PER_IN = 2.54


def lb_to_kg(pounds: float) -> float:
    """Convert pounds to kilograms."""
    return pounds * KG_PER_LB


def in_to_cm(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches * CM_PER_IN
