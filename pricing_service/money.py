import logging
import math

logger = logging.getLogger(__name__)


def rint(x: float) -> int:
    """
    Rounds a monetary amount to whole minor units using round-half-to-even.

    Ties go to the nearest even integer for both signs, so 2.5 -> 2,
    3.5 -> 4 and -2.5 -> -2.
    """
    whole = math.trunc(x)
    frac = x - whole
    if x > 0:
        if frac > 0.5 or (frac == 0.5 and whole % 2 != 0):
            whole += 1
    elif frac < -0.5 or (frac == -0.5 and whole % 2 != 0):
        whole -= 1
    return int(whole)


def parse_fixed_amount(amount: str | None) -> int:
    """
    Parses a decimal amount string such as "4.99" into minor units.

    Unparseable input yields 0 instead of an error; the occurrence is logged
    so misconfigured discounts can be spotted.
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        logger.warning(f"Could not parse fixed amount {amount!r}, treating it as 0")
        return 0
    if not math.isfinite(value):
        logger.warning(f"Fixed amount {amount!r} is not a finite number, treating it as 0")
        return 0
    return max(rint(value * 100), 0)
