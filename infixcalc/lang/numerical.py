"""Rendering of evaluation results. Results are printed the way a C++ ostream prints a double by default: at most
`precision` significant digits, trailing zeros dropped, switching to exponent notation for very large or very small
magnitudes (14.0 -> '14', 0.1 + 0.2 -> '0.3', 1e20 -> '1e+20').
"""

DEFAULT_PRECISION = 6


def format_number(num, precision=DEFAULT_PRECISION):
    """Returns str of float num with precision significant digits."""
    return format(num, f".{precision}g")


def check_precision(precision):
    """Returns precision as an int. Raises ValueError if it isn't a positive integer."""
    precision = int(precision)
    if precision < 1:
        raise ValueError(f"precision must be at least 1, got {precision}")
    return precision
