from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from warikan.config import settings
from warikan.models import Member, Payment, SettlementRecord, Transfer
from warikan.services.ledger import settle


@dataclass(frozen=True)
class TrackedTransfer:
    transfer: Transfer
    is_completed: bool = False
    settlement_id: Optional[str] = None


@dataclass(frozen=True)
class HistorySummary:
    balances: dict[str, int]
    transactions: list[TrackedTransfer]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _find_record(
    records: Sequence[SettlementRecord], transfer: Transfer, tolerance: int
) -> Optional[SettlementRecord]:
    for r in records:
        if (
            r.from_member_id == transfer.from_member_id
            and r.to_member_id == transfer.to_member_id
            and abs(r.amount - transfer.amount) < tolerance
        ):
            return r
    return None


def settle_with_history(
    members: Sequence[Member],
    payments: Sequence[Payment],
    records: Sequence[SettlementRecord],
    *,
    tolerance: Optional[int] = None,
) -> HistorySummary:
    # Records only annotate transfers; balances are not reduced by completed ones.
    if tolerance is None:
        tolerance = settings.settlement_match_tolerance

    base = settle(members, payments)
    tracked: list[TrackedTransfer] = []
    for t in base.transactions:
        r = _find_record(records, t, tolerance)
        if r is None:
            tracked.append(TrackedTransfer(transfer=t))
        else:
            tracked.append(TrackedTransfer(transfer=t, is_completed=r.is_completed, settlement_id=r.id))
    return HistorySummary(balances=base.balances, transactions=tracked)


def record_for_transfer(
    transfer: Transfer,
    *,
    record_id: str,
    group_id: str,
    now: Optional[datetime] = None,
) -> SettlementRecord:
    now = now or _utcnow()
    return SettlementRecord(
        id=record_id,
        group_id=group_id,
        from_member_id=transfer.from_member_id,
        to_member_id=transfer.to_member_id,
        amount=transfer.amount,
        created_at=now,
        updated_at=now,
    )


def mark_completed(record: SettlementRecord, *, now: Optional[datetime] = None) -> SettlementRecord:
    now = now or _utcnow()
    return replace(record, is_completed=True, completed_at=now, updated_at=now)


def mark_incomplete(record: SettlementRecord, *, now: Optional[datetime] = None) -> SettlementRecord:
    return replace(record, is_completed=False, completed_at=None, updated_at=now or _utcnow())
