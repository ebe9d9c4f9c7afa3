from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from warikan.models import Participant


class InvalidInputError(ValueError):
    pass


@dataclass(frozen=True)
class EqualSplit:
    shares: list[int]
    base_amount: int
    remainder: int
    has_remainder: bool


def allocate_equal(member_ids: Sequence[str], total_amount: int) -> EqualSplit:
    """
    Integer split:
      base_amount = total_amount // n
      remainder = total_amount % n
      +1 goes to the first `remainder` members, in the given order.
    """
    n = len(member_ids)
    if n == 0:
        raise InvalidInputError("Cannot split an amount between zero members.")
    if total_amount < 0:
        raise InvalidInputError("Total amount must be a non-negative integer.")

    base = total_amount // n
    rem = total_amount % n
    shares = [base + (1 if i < rem else 0) for i in range(n)]
    return EqualSplit(shares=shares, base_amount=base, remainder=rem, has_remainder=rem > 0)


def equal_participants(member_ids: Sequence[str], total_amount: int) -> list[Participant]:
    split = allocate_equal(member_ids, total_amount)
    return [Participant(member_id=mid, share=share) for mid, share in zip(member_ids, split.shares)]
