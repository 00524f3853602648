"""Formatting of real values together with their uncertainty."""

from __future__ import annotations

import math

_DIGITS = "\u2070\u00b9\u00b2\u00b3\u2074\u2075\u2076\u2077\u2078\u2079"
_SUPER_MINUS = "\u207b"
_VALID_FORMATS = ("f", "F", "e", "E", "g", "G")


def _round_half_away(x: float) -> float:
    """Round to the nearest integer, halfway cases away from zero."""
    a = abs(x)
    r = math.floor(a)
    if a - r >= 0.5:
        r += 1
    return math.copysign(float(r), x)


def frexp10(num: float) -> tuple[float, int]:
    """Split num into (x, exp) with num == x * 10**exp and 0.1 <= |x| < 1."""
    if num == 0:
        return 0.0, 0
    exp = math.floor(math.log10(abs(num))) + 1
    return num * 10.0 ** (-exp), exp


def round_with_err(f: float, df: float, d: int = 2) -> float:
    """Round f to the order of its error df, taken to d significant digits."""
    if df <= 0:
        return f
    _, n = frexp10(f)
    _, dn = frexp10(df)
    precision = max(n - dn + d, 1)
    sc = 10.0 ** (precision - n)
    return _round_half_away(f * sc) / sc


def superscript(i: int) -> str:
    """Return the integer i written with Unicode superscript characters."""
    digits = "".join(_DIGITS[int(c)] for c in str(abs(i)))
    return _SUPER_MINUS + digits if i < 0 else digits


def print_with_err(
    f: float, df: float, fmt: str = "g", d: int = 2, parenthesis: bool = True
) -> str:
    """Format value f with error df.

    fmt selects fixed ('f'), scientific ('e') or general ('g') notation;
    any other character is treated as 'g'. d is the number of significant
    digits kept in the error. With parenthesis the error is written as
    "1.50(25)", otherwise as "1.50±0.25".
    """
    if df <= 0:
        raise ValueError("the error df must be positive")
    if d <= 0:
        raise ValueError("the number of error digits d must be positive")
    fmt = fmt.lower() if fmt in _VALID_FORMATS else "g"

    x, n = frexp10(f)
    dx, dn = frexp10(df)

    sc = 10.0**d
    dx = _round_half_away(dx * sc) / sc

    precision = max(n - dn + d, 1)
    sc = 10.0**precision
    x = _round_half_away(x * sc) / sc

    if fmt == "g":
        fmt = "f" if (precision > n - 1) and (n >= -3) else "e"

    if fmt == "f":
        x *= 10.0**n
        dx *= 10.0**dn
        decimals = max(precision - n, 0)
        if not parenthesis:
            return f"{x:.{decimals}f}\u00b1{dx:.{decimals}f}"
        if not decimals:
            return f"{x:.0f}({dx:.0f})"
        if d <= decimals:
            dx *= 10.0**decimals
            return f"{x:.{decimals}f}({dx:.0f})"
        return f"{x:.{decimals}f}({dx:.{decimals}f})"

    x *= 10.0
    decimals = max(precision - 1, 0)
    if parenthesis:
        if decimals:
            if d <= decimals:
                dx *= 10.0**d
                body = f"{x:.{decimals}f}({dx:.0f})"
            else:
                dx *= 10.0 ** (d - decimals)
                body = f"{x:.{decimals}f}({dx:.{decimals}f})"
        else:
            dx *= 10.0 ** (dn + 1 - n)
            body = f"{x:.0f}({dx:.0f})"
    else:
        dx *= 10.0 ** (dn + 1 - n)
        body = f"({x:.{decimals}f}\u00b1{dx:.{decimals}f})"
    return body + "\u00d710" + superscript(n - 1)