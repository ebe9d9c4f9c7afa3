from datetime import datetime, timezone

from warikan.models import Participant, Payment, SettlementRecord, Transfer
from warikan.services.history import (
    mark_completed,
    mark_incomplete,
    record_for_transfer,
    settle_with_history,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2024, 1, 2, tzinfo=timezone.utc)


def _payments() -> list[Payment]:
    return [
        Payment(
            payer_id="alice",
            amount=3000,
            participants=tuple(Participant(member_id=m, share=1000) for m in ("alice", "bob", "charlie")),
        )
    ]


def _record(id: str, frm: str, to: str, amount: int, *, completed: bool = False) -> SettlementRecord:
    return SettlementRecord(
        id=id,
        group_id="g1",
        from_member_id=frm,
        to_member_id=to,
        amount=amount,
        created_at=T0,
        updated_at=T0,
        is_completed=completed,
        completed_at=T0 if completed else None,
    )


def test_without_records_nothing_is_completed(members):
    summary = settle_with_history(members, _payments(), [])

    assert summary.balances == {"alice": 2000, "bob": -1000, "charlie": -1000}
    assert [t.is_completed for t in summary.transactions] == [False, False]
    assert [t.settlement_id for t in summary.transactions] == [None, None]


def test_matching_record_marks_transfer(members):
    records = [_record("s1", "bob", "alice", 1000, completed=True), _record("s2", "charlie", "alice", 1000)]

    summary = settle_with_history(members, _payments(), records)

    bob, charlie = summary.transactions
    assert bob.transfer == Transfer(from_member_id="bob", to_member_id="alice", amount=1000)
    assert bob.is_completed is True
    assert bob.settlement_id == "s1"
    assert charlie.is_completed is False
    assert charlie.settlement_id == "s2"


def test_record_must_match_direction_and_amount(members):
    records = [
        _record("s1", "alice", "bob", 1000, completed=True),
        _record("s2", "charlie", "alice", 999, completed=True),
    ]

    summary = settle_with_history(members, _payments(), records)

    assert all(not t.is_completed and t.settlement_id is None for t in summary.transactions)


def test_tolerance_widens_match(members):
    records = [_record("s2", "charlie", "alice", 999, completed=True)]

    summary = settle_with_history(members, _payments(), records, tolerance=2)

    assert summary.transactions[1].is_completed is True
    assert summary.transactions[1].settlement_id == "s2"


def test_completed_records_do_not_change_balances(members):
    records = [_record("s1", "bob", "alice", 1000, completed=True)]

    summary = settle_with_history(members, _payments(), records)

    assert summary.balances["bob"] == -1000


def test_record_lifecycle():
    transfer = Transfer(from_member_id="bob", to_member_id="alice", amount=1000)

    record = record_for_transfer(transfer, record_id="s1", group_id="g1", now=T0)
    assert record.amount == 1000
    assert record.is_completed is False
    assert record.created_at == record.updated_at == T0

    done = mark_completed(record, now=T1)
    assert done.is_completed is True
    assert done.completed_at == T1
    assert done.updated_at == T1
    assert done.created_at == T0
    assert record.is_completed is False

    undone = mark_incomplete(done, now=T1)
    assert undone.is_completed is False
    assert undone.completed_at is None


def test_mark_completed_defaults_to_utc_now():
    record = _record("s1", "bob", "alice", 1000)

    done = mark_completed(record)

    assert done.completed_at is not None
    assert done.completed_at.tzinfo is not None
    assert done.completed_at >= T0
