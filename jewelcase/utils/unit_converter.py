from decimal import Decimal, ROUND_HALF_UP

from jewelcase.config import DISPLAY_DPI, MM_PER_INCH, POINTS_PER_INCH, VALID_UNITS

INCHES_TO_UNITS = {
    "in": 1.0,
    "mm": MM_PER_INCH,
    "pt": POINTS_PER_INCH,
}


def _round_half_up(value, places: int = 0) -> Decimal:
    # Decimal(str(...)) so 4.75 * 25.4 lands on 120.65 rather than 120.6499...
    exp = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP)


def to_pixels(inches: float, dpi: int = DISPLAY_DPI) -> int:
    """
    Converts a measurement in inches to whole pixels.
    Args:
        inches (float): The measurement in inches.
        dpi (int): Dots Per Inch.
    Returns:
        int: Pixels, rounded half up.
    """
    return int(_round_half_up(Decimal(str(inches)) * Decimal(str(dpi))))


def to_millimeters(inches: float) -> float:
    """Inches to millimeters, rounded half up to one decimal place."""
    return float(_round_half_up(Decimal(str(inches)) * Decimal(str(MM_PER_INCH)), 1))


def inches_to_points(inches: float) -> float:
    return inches * POINTS_PER_INCH


def points_to_inches(points: float) -> float:
    return points / POINTS_PER_INCH


def format_dimension(inches: float, unit: str = "in") -> str:
    if unit not in VALID_UNITS:
        raise ValueError(f"Unsupported unit: {unit}")
    if unit == "mm":
        return f"{to_millimeters(inches):.1f} mm"
    return f"{inches:g} in"
