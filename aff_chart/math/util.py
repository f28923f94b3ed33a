from __future__ import annotations

import math


def clamp(x, a, b):
    return a if x < a else b if x > b else x

def num_to_2f(num: float) -> str:
    # at least two significant digits past the magnitude, positional notation only
    a = abs(float(num))
    if a == 0.0 or a == 1.0:
        d = 1
    else:
        d = math.ceil(math.log10(a) + 0.00001)
    precision = max(1, 2 + d)
    if a == 0.0:
        return f"{0.0:.{precision - 1}f}"
    exp10 = math.floor(math.log10(a))
    decimals = max(0, precision - 1 - exp10)
    return f"{float(num):.{decimals}f}"

def num_to_plain(num: float) -> str:
    # 1.0 -> "1", 1.5 -> "1.5"
    v = float(num)
    if v.is_integer():
        return str(int(v))
    return repr(v)
