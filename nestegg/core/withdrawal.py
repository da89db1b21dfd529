"""Retirement withdrawal sizing."""

from __future__ import annotations

import logging
from enum import Enum

from nestegg.core.errors import check_finite

logger = logging.getLogger(__name__)

CONSERVATIVE_WITHDRAWAL_PCT = 4.0
MODERATE_WITHDRAWAL_PCT = 5.0


class WithdrawalRating(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate_risk"
    HIGH = "high_risk"


def annual_withdrawal(projected_total_at_horizon: float, withdrawal_rate_percent: float) -> float:
    """
    Yearly payout sized once from the balance projected at the horizon.

    The amount stays fixed for every year after the horizon; it is not a
    percentage of the shrinking balance.
    """
    check_finite(
        projected_total_at_horizon=projected_total_at_horizon,
        withdrawal_rate_percent=withdrawal_rate_percent,
    )
    amount = projected_total_at_horizon * withdrawal_rate_percent / 100
    logger.debug(
        "withdrawal %.2f from %.2f at %.2f%%",
        amount,
        projected_total_at_horizon,
        withdrawal_rate_percent,
    )
    return amount


def monthly_income(annual_amount: float) -> float:
    return annual_amount / 12


def withdrawal_rating(withdrawal_rate_percent: float) -> WithdrawalRating:
    """Rough sustainability label; 4% is the classic safe-withdrawal rule."""
    if withdrawal_rate_percent <= CONSERVATIVE_WITHDRAWAL_PCT:
        return WithdrawalRating.CONSERVATIVE
    if withdrawal_rate_percent <= MODERATE_WITHDRAWAL_PCT:
        return WithdrawalRating.MODERATE
    return WithdrawalRating.HIGH
