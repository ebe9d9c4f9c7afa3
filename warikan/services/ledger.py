from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from warikan.models import Member, Payment, Transfer
from warikan.services.allocation import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
    balances: dict[str, int]  # positive is owed, negative owes
    transactions: list[Transfer]


@dataclass(frozen=True)
class TotalPoolResult:
    total_amount: int
    per_person_share: int
    remainder: int
    balances: dict[str, int]
    transactions: list[Transfer]


def compute_settlement(balances: Mapping[str, int]) -> list[Transfer]:
    """
    Largest creditor is matched with the largest debtor until either side runs out.

    Ties keep the iteration order of `balances` (sorts are stable), so callers
    must pass a mapping built in member order for reproducible output.
    """
    creditors: list[list] = []  # [member_id, to_receive]
    debtors: list[list] = []  # [member_id, to_pay]

    for mid, bal in balances.items():
        if bal > 0:
            creditors.append([mid, bal])
        elif bal < 0:
            debtors.append([mid, -bal])

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    out: list[Transfer] = []
    i = 0
    j = 0
    while i < len(debtors) and j < len(creditors):
        d_id, owe = debtors[i]
        c_id, recv = creditors[j]
        amt = owe if owe < recv else recv
        out.append(Transfer(from_member_id=d_id, to_member_id=c_id, amount=amt))
        owe -= amt
        recv -= amt
        debtors[i][1] = owe
        creditors[j][1] = recv
        if owe == 0:
            i += 1
        if recv == 0:
            j += 1

    residual = sum(balances.values())
    if residual != 0:
        logger.warning("Balances do not sum to zero (residual=%s); leaving it unsettled", residual)
    return out


def settle(members: Sequence[Member], payments: Sequence[Payment]) -> SettlementResult:
    balances: dict[str, int] = {m.id: 0 for m in members}

    for p in payments:
        # Neither payer nor participants are checked against `members`;
        # shares that do not add up to the amount stay on the payer's balance.
        balances[p.payer_id] = balances.get(p.payer_id, 0) + p.amount
        for part in p.participants:
            balances[part.member_id] = balances.get(part.member_id, 0) - part.share

    transactions = compute_settlement(balances)
    logger.debug(
        "Settled %d payments across %d members into %d transfers",
        len(payments),
        len(members),
        len(transactions),
    )
    return SettlementResult(balances=balances, transactions=transactions)


def settle_total_pool(members: Sequence[Member], payments: Sequence[Payment]) -> TotalPoolResult:
    n = len(members)
    if n == 0:
        raise InvalidInputError("Cannot split the total pool between zero members.")

    total = sum(p.amount for p in payments)
    share = total // n
    rem = total % n

    paid: dict[str, int] = {m.id: 0 for m in members}
    for p in payments:
        paid[p.payer_id] = paid.get(p.payer_id, 0) + p.amount

    balances: dict[str, int] = {}
    for i, m in enumerate(members):
        should_pay = share + (1 if i < rem else 0)
        balances[m.id] = paid[m.id] - should_pay

    transactions = compute_settlement(balances)
    logger.debug(
        "Total pool %d split across %d members (share=%d, remainder=%d) into %d transfers",
        total,
        n,
        share,
        rem,
        len(transactions),
    )
    return TotalPoolResult(
        total_amount=total,
        per_person_share=share,
        remainder=rem,
        balances=balances,
        transactions=transactions,
    )
