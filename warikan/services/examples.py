from __future__ import annotations

from warikan.models import Member, Participant, Payment, Transfer
from warikan.services.allocation import allocate_equal
from warikan.services.ledger import compute_settlement, settle, settle_total_pool

MEMBERS = [
    Member(id="alice", name="Alice"),
    Member(id="bob", name="Bob"),
    Member(id="charlie", name="Charlie"),
]


def example_integer_split_remainder() -> None:
    """
    Integer split:
      base_amount = total // n
      remainder = total % n
      +1 distributed to the first `remainder` members in the given order.
    """

    split = allocate_equal(["alice", "bob", "charlie", "dave"], 403)
    # base 100, remainder 3
    assert split.shares == [101, 101, 101, 100]
    assert split.base_amount == 100
    assert split.remainder == 3


def example_settlement() -> None:
    """
    Balance sign:
      positive -> is owed
      negative -> owes
    """

    transfers = compute_settlement({"alice": -70, "bob": -30, "charlie": 100})
    assert transfers == [
        Transfer(from_member_id="alice", to_member_id="charlie", amount=70),
        Transfer(from_member_id="bob", to_member_id="charlie", amount=30),
    ]


def example_per_payment() -> None:
    lunch = Payment(
        payer_id="alice",
        amount=3000,
        participants=(
            Participant(member_id="alice", share=1500),
            Participant(member_id="bob", share=1500),
        ),
    )
    dinner = Payment(
        payer_id="bob",
        amount=6000,
        participants=tuple(Participant(member_id=m.id, share=2000) for m in MEMBERS),
    )
    result = settle(MEMBERS, [lunch, dinner])
    assert result.balances == {"alice": -500, "bob": 2500, "charlie": -2000}
    assert result.transactions == [
        Transfer(from_member_id="charlie", to_member_id="bob", amount=2000),
        Transfer(from_member_id="alice", to_member_id="bob", amount=500),
    ]


def example_total_pool() -> None:
    # Participants are ignored: 1000 is split 334/333/333 over all members.
    result = settle_total_pool(MEMBERS, [Payment(payer_id="alice", amount=1000)])
    assert result.per_person_share == 333
    assert result.remainder == 1
    assert result.balances == {"alice": 666, "bob": -333, "charlie": -333}
