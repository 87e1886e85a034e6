from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round to cents, halves away from zero.

    Goes through ``repr`` so 2.675 rounds to 2.68 like it reads, not 2.67.
    Non-finite values are returned unchanged.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        # Enough digits for the largest float plus two decimals.
        ctx.prec = 400
        return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))
