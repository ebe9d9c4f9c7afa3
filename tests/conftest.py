from __future__ import annotations

import pytest

from warikan.models import Member


@pytest.fixture
def members() -> list[Member]:
    return [
        Member(id="alice", name="Alice"),
        Member(id="bob", name="Bob"),
        Member(id="charlie", name="Charlie"),
    ]
