"""Classification of monthly spending against a budget limit."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from components.core.config import get_settings
from components.dashboard.schemas import BudgetEvaluation

logger = logging.getLogger(__name__)
settings = get_settings()

Number = Union[Decimal, float, int]


def month_start(day: date) -> date:
    """First calendar day of the month containing ``day``."""
    return date(day.year, day.month, 1)


def evaluate_budget(
    spend: Number,
    limit: Optional[Number],
    near_limit_percent: Optional[float] = None,
) -> BudgetEvaluation:
    """
    Compare the month's spending with its budget.

    Returns state ``unset`` when there is no budget or its limit is not
    positive. Otherwise the percentage used is ``spend / limit * 100``:
    - above 100 the budget is ``over`` and the overage is reported
    - above the near-limit threshold (80 by default) it is ``near``
    - anything else is ``normal``

    ``progress`` is the percentage clamped to [0, 100] for progress bars;
    ``percentage`` itself is not clamped.
    """
    threshold = Decimal(str(settings.NEAR_LIMIT_PERCENT if near_limit_percent is None else near_limit_percent))
    spent = Decimal(str(spend))

    limit_amount = Decimal(str(limit)) if limit is not None else None
    if limit_amount is not None and limit_amount <= 0:
        # Stored limits are validated positive; treat anything else as no budget
        logger.warning("Ignoring non-positive budget limit %s", limit_amount)
        limit_amount = None

    if limit_amount is None:
        return BudgetEvaluation(state="unset", spent=float(spent), percentage=0.0, progress=0.0)

    percentage = spent / limit_amount * 100
    progress = min(max(percentage, Decimal("0")), Decimal("100"))

    remaining = None
    overage = None
    message = None
    if percentage > 100:
        state = "over"
        overage = spent - limit_amount
        message = f"You've exceeded your budget by ${overage:.2f}"
    elif percentage > threshold:
        state = "near"
        remaining = limit_amount - spent
        message = f"You're approaching your budget limit. ${remaining:.2f} remaining."
    else:
        state = "normal"
        remaining = limit_amount - spent

    return BudgetEvaluation(
        state=state,
        spent=float(spent),
        limit_amount=float(limit_amount),
        percentage=float(percentage),
        progress=float(progress),
        remaining=float(remaining) if remaining is not None else None,
        overage=float(overage) if overage is not None else None,
        message=message,
    )
