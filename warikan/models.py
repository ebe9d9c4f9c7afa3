from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Member:
    id: str
    name: str


@dataclass(frozen=True)
class Participant:
    member_id: str
    share: int


@dataclass(frozen=True)
class Payment:
    payer_id: str
    # Smallest currency unit (e.g. 1 -> 1 yen), no fractional subunits.
    amount: int
    participants: tuple[Participant, ...] = field(default_factory=tuple)
    id: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Transfer:
    from_member_id: str  # debtor
    to_member_id: str  # creditor
    amount: int


@dataclass(frozen=True)
class SettlementRecord:
    id: str
    group_id: str
    from_member_id: str
    to_member_id: str
    amount: int
    created_at: datetime
    updated_at: datetime
    is_completed: bool = False
    completed_at: Optional[datetime] = None
