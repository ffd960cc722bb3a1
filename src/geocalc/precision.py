"""
Fixed-precision decimal rendering of calculation results.

Results leave the calculators as decimal strings rather than floats. A
float is first rendered with 15 significant digits, parsed as a Decimal
and rounded half-to-even to the requested number of places. Precision is
a signed integer: -6 keeps six digits after the decimal point, 0 rounds
to an integer and positive values round to tens, hundreds, and so on.

Bearings get an extra normalization step: only the integer part is
wrapped into [0, 360) and the fractional digits of the raw bearing are
reattached unchanged. For a negative raw bearing such as -45.25 this
yields 314.25, not 314.75.
"""

from decimal import Context, Decimal, ROUND_HALF_EVEN
import logging
import math

from .config import DEFAULT_PRECISION

logger = logging.getLogger(__name__)


def _check_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(
            f"precision must be an integer, got {type(precision).__name__}"
        )


def _render(value: float) -> str:
    """Render a float with 15 significant digits."""
    return "%.15g" % value


def _format_decimal(number: Decimal, precision: int) -> str:
    if number.is_nan():
        return "NaN"
    if number.is_infinite():
        return "-inf" if number.is_signed() else "inf"

    # room for every kept digit plus a carry, however deep the precision
    context = Context(
        prec=max(1, number.adjusted() - precision + 2), rounding=ROUND_HALF_EVEN
    )
    rounded = number.quantize(Decimal(1).scaleb(precision, context), context=context)
    if rounded.is_zero():
        return "0"
    return format(rounded.normalize(context), "f")


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Round a number to the given precision and render it as a decimal string.

    Args:
        value: Number to format
        precision: Negative count of digits to keep after the decimal point

    Returns:
        Plain decimal string without exponent or trailing zeros

    Raises:
        TypeError: If precision is not an integer
    """
    _check_precision(precision)
    return _format_decimal(Decimal(_render(float(value))), precision)


def _format_bearing(bearing: float, offset: int, precision: int) -> str:
    _check_precision(precision)
    bearing = float(bearing)
    if not math.isfinite(bearing):
        return _format_decimal(Decimal(_render(bearing)), precision)

    whole = int(bearing + offset) % 360
    text = _render(bearing)
    if "." in text:
        normalized = f"{whole}.{text.split('.')[1]}"
    else:
        normalized = str(whole)
    logger.debug(f"Bearing {text} normalized to {normalized}")

    return _format_decimal(Decimal(normalized), precision)


def format_initial_bearing(bearing: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Normalize an initial bearing into [0, 360) and format it.

    Args:
        bearing: Raw bearing in degrees, as returned by atan2
        precision: Negative count of digits to keep after the decimal point

    Returns:
        Bearing as a decimal string
    """
    return _format_bearing(bearing, 360, precision)


def format_final_bearing(bearing: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Reverse a bearing by 180 degrees, normalize it into [0, 360) and format it.

    Args:
        bearing: Raw bearing in degrees, as returned by atan2
        precision: Negative count of digits to keep after the decimal point

    Returns:
        Bearing as a decimal string
    """
    return _format_bearing(bearing, 180, precision)


class PrecisionFormatter:
    """Namespace for the decimal formatting used by GeoCalc."""

    format = staticmethod(format_number)
    format_initial_bearing = staticmethod(format_initial_bearing)
    format_final_bearing = staticmethod(format_final_bearing)
