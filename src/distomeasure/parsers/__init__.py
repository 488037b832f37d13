"""Parser primitives for measurement tokens typed into form fields."""

from .measurement import MeasurementForm, ParsedMeasurement, classify_measurement, parse_measurement
from .numbers import normalize_decimal_commas, parse_decimal_prefix, parse_fraction, parse_mixed_number
from .units import MM_PER_INCH, Unit, convert_inches, convert_millimeters, normalize_unit

__all__ = [
    "MM_PER_INCH",
    "MeasurementForm",
    "ParsedMeasurement",
    "Unit",
    "classify_measurement",
    "convert_inches",
    "convert_millimeters",
    "normalize_decimal_commas",
    "normalize_unit",
    "parse_decimal_prefix",
    "parse_fraction",
    "parse_measurement",
    "parse_mixed_number",
]
