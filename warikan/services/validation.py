from __future__ import annotations

from collections.abc import Collection
from typing import Optional

from warikan.config import settings
from warikan.models import Payment


class PaymentValidationError(ValueError):
    def __init__(
        self,
        message: str,
        *,
        amount: Optional[int] = None,
        total_shares: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.amount = amount
        self.total_shares = total_shares
        self.difference = abs(total_shares - amount) if amount is not None and total_shares is not None else None


def validate_payment(
    payment: Payment,
    *,
    member_ids: Optional[Collection[str]] = None,
    tolerance: Optional[int] = None,
) -> None:
    """
    Optional pre-check for a payment before it is stored or settled.

    `settle` and `settle_total_pool` never call this: they accept any payment
    and leave mismatched shares on the payer's balance.
    """
    if tolerance is None:
        tolerance = settings.share_sum_tolerance

    if payment.amount <= 0:
        raise PaymentValidationError("Payment amount must be a positive integer.")
    if not payment.payer_id:
        raise PaymentValidationError("Payment must have a payer.")
    if not payment.participants:
        raise PaymentValidationError("Payment must have at least one participant.")
    if any(p.share < 0 for p in payment.participants):
        raise PaymentValidationError("Participant shares must not be negative.")

    if member_ids is not None:
        involved = {payment.payer_id} | {p.member_id for p in payment.participants}
        unknown = sorted(involved - set(member_ids))
        if unknown:
            raise PaymentValidationError(f"Unknown members: {', '.join(unknown)}")

    total_shares = sum(p.share for p in payment.participants)
    if abs(total_shares - payment.amount) > tolerance:
        raise PaymentValidationError(
            f"Participant shares ({total_shares}) do not match the payment amount ({payment.amount}).",
            amount=payment.amount,
            total_shares=total_shares,
        )
