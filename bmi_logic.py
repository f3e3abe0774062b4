"""
BMI calculation and classification.

BMI = weight_kg / (height_m)²

Inputs arrive as the raw strings typed into the form. They are coerced to
numbers the way a browser coerces a form value, so malformed text and a zero
height flow through as NaN / Infinity instead of raising.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional

import numpy as np

INVALID_INPUT_MESSAGE = "Please enter valid height and weight"

# Upper bound (exclusive) of each band, checked in order. 24.9 / 29.9 are kept
# as-is rather than the conventional 25 / 30.
BMI_BANDS = [
    (18.5, "Underweight"),
    (24.9, "Normal weight"),
    (29.9, "Overweight"),
]
TOP_BAND = "Obese"
CATEGORIES = [label for _, label in BMI_BANDS] + [TOP_BAND]

RESULT_DECIMALS = 2

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY_LITERAL = re.compile(r"[+-]?Infinity")
_RADIX_DIGITS = {
    "0x": (16, re.compile(r"[0-9a-fA-F]+")),
    "0o": (8, re.compile(r"[0-7]+")),
    "0b": (2, re.compile(r"[01]+")),
}

# whitespace and line terminators a browser trims before converting a string
JS_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class BmiReading(NamedTuple):
    bmi: str
    category: str


def coerce_number(text: str) -> np.float64:
    """
    Convert a form string to a float64 using browser number coercion.

    Examples:
      "1.75"  -> 1.75
      " 70 "  -> 70.0
      "1."    -> 1.0
      ""      -> 0.0
      "abc"   -> nan
    """
    text = text.strip(JS_WHITESPACE)
    if not text:
        return np.float64(0.0)

    if _DECIMAL_LITERAL.fullmatch(text):
        return np.float64(float(text))

    if _INFINITY_LITERAL.fullmatch(text):
        return np.float64(-np.inf) if text.startswith("-") else np.float64(np.inf)

    prefix = _RADIX_DIGITS.get(text[:2].lower())
    if prefix is not None:
        radix, digits = prefix
        if digits.fullmatch(text[2:]):
            try:
                return np.float64(float(int(text[2:], radix)))
            except OverflowError:
                return np.float64(np.inf)

    return np.float64(np.nan)


def compute_bmi(height: str, weight: str) -> np.float64:
    h = coerce_number(height)
    w = coerce_number(weight)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return w / (h * h)


def to_fixed(value, digits: int = RESULT_DECIMALS) -> str:
    """
    Format a number with exactly `digits` decimals.

    Rounds half away from zero on the exact binary value, so 1.005 (stored as
    1.00499...) becomes "1.00" while 0.125 becomes "0.13". Non-finite values
    render as "NaN", "Infinity" and "-Infinity".
    """
    value = float(value)
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    if abs(value) >= 1e21:
        return repr(value)

    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def classify_bmi(bmi_text: str) -> str:
    """Map a formatted BMI to its band. NaN fails every comparison and lands in the top band."""
    value = coerce_number(bmi_text)
    return next((label for upper, label in BMI_BANDS if value < upper), TOP_BAND)


def has_required_inputs(height: Optional[str], weight: Optional[str]) -> bool:
    return bool(height) and bool(weight)


def evaluate(height: Optional[str], weight: Optional[str]) -> Optional[BmiReading]:
    """
    Run the calculator on the raw field values.

    Returns None when either field is empty; the caller decides how to surface
    INVALID_INPUT_MESSAGE.
    """
    if not has_required_inputs(height, weight):
        return None

    bmi_text = to_fixed(compute_bmi(height, weight))
    return BmiReading(bmi=bmi_text, category=classify_bmi(bmi_text))


def band_bounds():
    """Yield (label, lower, upper) for every band; open ends are -inf / inf."""
    lower = -np.inf
    for upper, label in BMI_BANDS:
        yield label, lower, upper
        lower = upper
    yield TOP_BAND, lower, np.inf
